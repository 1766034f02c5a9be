"""Deploy agent definitions into provider directories without clobbering user files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from agent_sync.agents.compilers import format_agent_output
from agent_sync.agents.extract import (
    extract_agent_meta,
    extract_agent_name,
    is_template,
)
from agent_sync.agents.models import CodexConfigEntry
from agent_sync.config import SidecarConfig
from agent_sync.constants import SOURCE_EXTENSION
from agent_sync.errors import DeployError, SymlinkDestinationError
from agent_sync.frontmatter import (
    frontmatter_body,
    is_synced_from,
    is_valid_agent_name,
    validate_agent_name,
)
from agent_sync.models import DeployResult
from agent_sync.providers import Provider

logger = logging.getLogger(__name__)


def read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DeployError(path, "read", str(exc)) from exc


def write_text(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise DeployError(path, "write", str(exc)) from exc


def remove_file(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        return
    except OSError as exc:
        raise DeployError(path, "remove", str(exc)) from exc


def remove_artifact(dst_dir: Path, name: str, provider: Provider) -> None:
    """Remove an artifact and, for providers that have one, its companion."""
    remove_file(dst_dir / provider.artifact_filename(name))
    companion = provider.companion_filename(name)
    if companion is not None:
        remove_file(dst_dir / companion)


def source_files(src_dir: Path) -> list[Path]:
    if not src_dir.is_dir():
        return []
    try:
        children = list(src_dir.iterdir())
    except OSError as exc:
        raise DeployError(src_dir, "read", str(exc)) from exc
    return sorted(
        (
            path
            for path in children
            if path.suffix == SOURCE_EXTENSION and path.is_file()
        ),
        key=lambda path: path.name,
    )


def deploy_agent(
    text: str,
    filename: str,
    dst_dir: Path,
    provider: Provider,
    config: SidecarConfig,
    dry_run: bool = False,
    source_prefix: str = "",
) -> DeployResult:
    if is_template(filename):
        return DeployResult.SKIPPED_TEMPLATE

    agent = extract_agent_meta(text, filename, provider, config, source_prefix)
    if agent is None:
        logger.debug("No agent name in %s", filename)
        return DeployResult.SKIPPED_NO_NAME

    validate_agent_name(agent.name)

    out_path = dst_dir / provider.artifact_filename(agent.name)
    if out_path.is_symlink():
        raise SymlinkDestinationError(out_path)

    if out_path.exists():
        existing = read_text(out_path)
        if not is_synced_from(existing, filename):
            logger.debug("Leaving user-owned %s untouched", out_path)
            return DeployResult.SKIPPED_USER_OWNED

    model_allowed = config.is_model_whitelisted(provider, agent.model)
    output = format_agent_output(
        agent, frontmatter_body(text), provider, model_allowed
    )

    if output.prompt_file is not None:
        prompt_path = dst_dir / output.prompt_file[0]
        if prompt_path.is_symlink():
            raise SymlinkDestinationError(prompt_path)

    if not dry_run:
        write_text(out_path, output.primary)
        if output.prompt_file is not None:
            prompt_filename, prompt_text = output.prompt_file
            write_text(dst_dir / prompt_filename, prompt_text)

    return DeployResult.DEPLOYED


def deploy_agents_from_dir(
    src_dir: Path,
    dst_dir: Path,
    provider: Provider,
    config: SidecarConfig,
    dry_run: bool = False,
    source_prefix: str = "",
) -> list[tuple[str, DeployResult]]:
    results: list[tuple[str, DeployResult]] = []
    for path in source_files(src_dir):
        result = deploy_agent(
            read_text(path),
            path.name,
            dst_dir,
            provider,
            config,
            dry_run=dry_run,
            source_prefix=source_prefix,
        )
        results.append((path.name, result))
    return results


def deployed_names(
    src_dir: Path,
    results: list[tuple[str, DeployResult]],
    provider: Provider,
    config: SidecarConfig,
    source_prefix: str = "",
) -> list[str]:
    """Resolved agent names for every ``DEPLOYED`` result."""
    names: list[str] = []
    for filename, result in results:
        if result != DeployResult.DEPLOYED:
            continue
        agent = extract_agent_meta(
            read_text(src_dir / filename), filename, provider, config, source_prefix
        )
        names.append(agent.name if agent is not None else Path(filename).stem)
    return names


def clean_agents(
    src_dir: Path, dst_dir: Path, provider: Provider, dry_run: bool = False
) -> list[str]:
    """Remove artifacts that still carry provenance for a current source file."""
    if not src_dir.is_dir() or not dst_dir.is_dir():
        return []

    removed: list[str] = []
    for path in source_files(src_dir):
        name = extract_agent_name(read_text(path))
        if name is None or not is_valid_agent_name(name):
            continue
        dst_path = dst_dir / provider.artifact_filename(name)
        if dst_path.is_symlink() or not dst_path.is_file():
            continue
        if not is_synced_from(read_text(dst_path), path.name):
            continue
        if not dry_run:
            remove_artifact(dst_dir, name, provider)
        removed.append(name)
    return removed


def collect_codex_entries(
    src_dir: Path, config: SidecarConfig, source_prefix: str = ""
) -> list[CodexConfigEntry]:
    entries: list[CodexConfigEntry] = []
    for path in source_files(src_dir):
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            continue
        agent = extract_agent_meta(
            text, path.name, Provider.CODEX, config, source_prefix
        )
        if agent is not None and is_valid_agent_name(agent.name):
            entries.append(
                CodexConfigEntry(name=agent.name, description=agent.description)
            )
    return entries


def existing_artifact(dst_dir: Path, name: str, provider: Provider) -> Optional[Path]:
    path = dst_dir / provider.artifact_filename(name)
    if path.is_symlink() or not path.is_file():
        return None
    return path
