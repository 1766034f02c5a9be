from rich.console import Console, RenderableType
from rich.panel import Panel

from agent_sync.models import DeployResult, DestinationReport
from agent_sync.providers import provider_label
from agent_sync.tui.enums import UIStyle
from agent_sync.tui.tables import DeployTable
from agent_sync.utils import compact_home_paths_in_text


def _panel(title: str, body: RenderableType, style: str) -> Panel:
    return Panel(body, title=title, border_style=style, padding=(0, 1))


class SyncConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_report(self, report: DestinationReport) -> None:
        title = f"{provider_label(report.provider)} agents"
        if report.dry_run:
            title = f"{title} (dry-run)"
        self.console.print(
            _panel(
                title, DeployTable.summary_block(report), style=UIStyle.BLUE.value
            )
        )

        if report.cleaned:
            self.console.print(
                _panel(
                    "clean",
                    DeployTable.removed_text(
                        report.cleaned, report.provider, report.dry_run
                    ),
                    style=UIStyle.MAGENTA.value,
                )
            )

        if report.results:
            self.console.print(
                _panel(
                    "deploy",
                    DeployTable.results_table(report),
                    style=UIStyle.CYAN.value,
                )
            )

        user_owned = [
            filename
            for filename, result in report.results
            if result == DeployResult.SKIPPED_USER_OWNED
        ]
        if user_owned:
            self.console.print(
                _panel(
                    "skipped",
                    "\n".join(
                        f"- {filename}: user-owned artifact (no matching source)"
                        for filename in user_owned
                    ),
                    style=UIStyle.YELLOW.value,
                )
            )

        if report.orphans:
            self.console.print(
                _panel(
                    "orphans",
                    DeployTable.removed_text(
                        report.orphans, report.provider, report.dry_run
                    ),
                    style=UIStyle.MAGENTA.value,
                )
            )

        if report.codex_entries is not None:
            verb = "Would write" if report.dry_run else "Updated"
            self.console.print(
                _panel(
                    "config.toml",
                    f"{verb} managed block with {report.codex_entries} agent entries",
                    style=UIStyle.DIM.value,
                )
            )
        if report.codex_block_cleaned:
            verb = "Would clean" if report.dry_run else "Cleaned"
            self.console.print(
                _panel(
                    "config.toml",
                    f"{verb} managed block",
                    style=UIStyle.DIM.value,
                )
            )

        if report.errors:
            errors_text = "\n".join(
                f"- {compact_home_paths_in_text(str(item))}" for item in report.errors
            )
            self.console.print(
                _panel("errors", errors_text, style=UIStyle.RED.value)
            )

    def render_no_targets(self) -> None:
        self.console.print(
            _panel(
                "targets", "No destination directories.", style=UIStyle.YELLOW.value
            )
        )
