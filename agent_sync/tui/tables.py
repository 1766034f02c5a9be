from rich.table import Column, Table

from agent_sync.models import DeployResult, DestinationReport
from agent_sync.providers import Provider
from agent_sync.tui.enums import DEPLOY_RESULT_LABEL, DEPLOY_RESULT_STYLE, UIStyle
from agent_sync.utils import compact_home_path


class DeployTable:
    @staticmethod
    def summary_block(report: DestinationReport) -> Table:
        counts = report.summary()
        chips = [f"{key}={value}" for key, value in counts.items() if value > 0]
        if not chips:
            chips = ["none"]

        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Provider", report.provider)
        table.add_row("Target", compact_home_path(report.path))
        table.add_row("Mode", "dry-run" if report.dry_run else "apply")
        table.add_row("Results", "  ".join(chips))
        return table

    @staticmethod
    def results_table(report: DestinationReport) -> Table:
        table = Table(
            Column(header="Source", overflow="ellipsis", max_width=42),
            Column(header="Status", width=12),
            Column(header="Artifact", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        provider = Provider(report.provider)
        installed = iter(report.installed)
        for filename, result in report.results:
            style = DEPLOY_RESULT_STYLE.get(result, UIStyle.WHITE.value)
            label = DEPLOY_RESULT_LABEL.get(result, result.value)
            artifact = ""
            if result == DeployResult.DEPLOYED:
                artifact = provider.artifact_filename(next(installed, filename))
            table.add_row(filename, f"[{style}]{label}[/{style}]", artifact)
        return table

    @staticmethod
    def removed_text(names: list[str], provider: str, dry_run: bool) -> str:
        verb = "Would remove" if dry_run else "Removed"
        profile = Provider(provider)
        return "\n".join(
            f"- {verb}: {profile.artifact_filename(name)}" for name in names
        )
