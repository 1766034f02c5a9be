"""Retract artifacts a module no longer produces."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from agent_sync.agents.deploy import existing_artifact, read_text, remove_artifact
from agent_sync.constants import SOURCE_EXTENSION
from agent_sync.frontmatter import is_synced_from, is_valid_agent_name
from agent_sync.manifest import ManifestStore
from agent_sync.providers import Provider

logger = logging.getLogger(__name__)


def clean_orphaned_agents(
    dst_dir: Path,
    module_name: str,
    current_agents: Sequence[str],
    provider: Provider,
    dry_run: bool = False,
) -> list[str]:
    """Remove artifacts recorded for ``module_name`` but absent from this run.

    An artifact is only removed while it still carries provenance for
    ``<name>.md``; anything a human has re-owned stays.
    """
    if not module_name:
        return []

    current = set(current_agents)
    removed: list[str] = []
    for name in ManifestStore(dst_dir).read(module_name):
        if name in current:
            continue
        if not is_valid_agent_name(name):
            logger.debug("Ignoring invalid manifest entry %r", name)
            continue
        path = existing_artifact(dst_dir, name, provider)
        if path is None:
            continue
        if not is_synced_from(read_text(path), f"{name}{SOURCE_EXTENSION}"):
            logger.debug("Keeping re-owned orphan %s", path)
            continue
        if not dry_run:
            remove_artifact(dst_dir, name, provider)
        removed.append(name)
    return removed


def sync_manifest(
    dst_dir: Path,
    module_name: str,
    installed: Sequence[str],
    provider: Provider,
    dry_run: bool = False,
) -> list[str]:
    """Reconcile orphans, then record ``installed`` as the module's entry."""
    if not module_name:
        return []
    orphans = clean_orphaned_agents(
        dst_dir, module_name, installed, provider, dry_run=dry_run
    )
    if not dry_run:
        ManifestStore(dst_dir).update(module_name, installed)
    return orphans
