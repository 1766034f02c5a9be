import logging
from pathlib import Path
from typing import Callable, Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from agent_sync.errors import SyncAppError
from agent_sync.install_service import InstallService
from agent_sync.models import DestinationReport, Scope
from agent_sync.scopes import scope_dirs
from agent_sync.tui import SyncConsoleUI


SCOPE_VALUES = [scope.value for scope in Scope]


def _src_argument() -> Callable:
    return click.argument(
        "src",
        type=click.Path(path_type=Path, file_okay=False, dir_okay=True),
    )


def _scope_option() -> Callable:
    return click.option(
        "--scope",
        type=click.Choice(SCOPE_VALUES, case_sensitive=False),
        default=Scope.ALL.value,
        show_default=True,
        help="Which provider directories to target.",
    )


def _dst_option() -> Callable:
    return click.option(
        "--dst",
        "dst",
        multiple=True,
        type=click.Path(path_type=Path),
        help="Explicit destination directory (repeatable); overrides --scope.",
    )


def _dry_run_option() -> Callable:
    return click.option(
        "--dry-run", is_flag=True, help="Report what would change without writing."
    )


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _service(src: Path) -> InstallService:
    if not src.is_dir():
        raise click.ClickException(f"Not a directory: {src}")
    return InstallService(src)


def _destinations(
    service: InstallService, scope: str, dst: tuple[Path, ...]
) -> list[Path]:
    if dst:
        return list(dst)
    try:
        return scope_dirs(
            scope, Path.home(), service.config.providers(), Path.cwd()
        )
    except SyncAppError as exc:
        raise click.ClickException(str(exc))


def _finish(ui: SyncConsoleUI, reports: list[DestinationReport]) -> None:
    if not reports:
        ui.render_no_targets()
    for report in reports:
        ui.render_report(report)
    if any(not report.is_valid() for report in reports):
        raise click.exceptions.Exit(1)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="agent-sync")
def cli() -> None:
    """Deploy agent definitions into provider directories."""


@cli.command(help="Deploy agents from SRC into every target directory.")
@_src_argument()
@_scope_option()
@_dst_option()
@_dry_run_option()
@click.option("--clean", is_flag=True, help="Remove managed artifacts before deploying.")
@click.option("-v", "--verbose", is_flag=True, help="Log engine decisions.")
def install(
    src: Path,
    scope: str,
    dst: tuple[Path, ...],
    dry_run: bool,
    clean: bool,
    verbose: bool,
) -> None:
    _configure_logging(verbose)
    ui = SyncConsoleUI(Console())
    service = _service(src)
    reports = [
        service.install(path, dry_run=dry_run, clean=clean)
        for path in _destinations(service, scope, dst)
    ]
    _finish(ui, reports)


@cli.command(help="Remove managed artifacts produced from SRC.")
@_src_argument()
@_scope_option()
@_dst_option()
@_dry_run_option()
def clean(
    src: Path,
    scope: str,
    dst: tuple[Path, ...],
    dry_run: bool,
) -> None:
    ui = SyncConsoleUI(Console())
    service = _service(src)
    reports = [
        service.clean(path, dry_run=dry_run)
        for path in _destinations(service, scope, dst)
    ]
    _finish(ui, reports)


def main(argv: Optional[list[str]] = None) -> int:
    try:
        code = cli(args=argv, standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return 2
    except click.exceptions.Abort:
        return 1
    return code if isinstance(code, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
