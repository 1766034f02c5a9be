"""Run the deploy, orphan and Codex config steps for each destination."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from agent_sync.agents.deploy import (
    clean_agents,
    collect_codex_entries,
    deploy_agents_from_dir,
    deployed_names,
)
from agent_sync.agents.orphans import sync_manifest
from agent_sync.codex.config_repository import CodexConfigRepository
from agent_sync.config import SidecarConfig, read_module_name
from agent_sync.errors import SyncAppError
from agent_sync.models import DestinationReport
from agent_sync.providers import Provider

logger = logging.getLogger(__name__)


class InstallService:
    def __init__(
        self,
        src_dir: Path,
        config: Optional[SidecarConfig] = None,
        module_name: Optional[str] = None,
    ) -> None:
        self.src_dir = src_dir
        self.config = config or SidecarConfig.load(src_dir.parent)
        self.module_name = (
            module_name if module_name is not None else read_module_name(src_dir)
        ) or ""

    @property
    def source_prefix(self) -> str:
        if not self.module_name:
            return ""
        return f"{self.module_name}/{self.src_dir.name}"

    def install(
        self, dst_dir: Path, dry_run: bool = False, clean: bool = False
    ) -> DestinationReport:
        provider = Provider.from_path(dst_dir)
        report = DestinationReport(
            path=dst_dir, provider=provider.value, dry_run=dry_run
        )
        logger.debug("Targeting %s directory %s", provider.value, dst_dir)
        try:
            if clean:
                self._clean(dst_dir, provider, report)

            report.results = deploy_agents_from_dir(
                self.src_dir,
                dst_dir,
                provider,
                self.config,
                dry_run=dry_run,
                source_prefix=self.source_prefix,
            )
            report.installed = deployed_names(
                self.src_dir,
                report.results,
                provider,
                self.config,
                source_prefix=self.source_prefix,
            )
            report.orphans = sync_manifest(
                dst_dir, self.module_name, report.installed, provider, dry_run=dry_run
            )

            if provider == Provider.CODEX:
                entries = collect_codex_entries(
                    self.src_dir, self.config, self.source_prefix
                )
                CodexConfigRepository.for_agents_dir(dst_dir).write_block(
                    entries, self.source_prefix, dry_run=dry_run
                )
                report.codex_entries = len(entries)
        except SyncAppError as exc:
            report.errors.append(exc)
        return report

    def clean(self, dst_dir: Path, dry_run: bool = False) -> DestinationReport:
        provider = Provider.from_path(dst_dir)
        report = DestinationReport(
            path=dst_dir, provider=provider.value, dry_run=dry_run
        )
        try:
            self._clean(dst_dir, provider, report)
        except SyncAppError as exc:
            report.errors.append(exc)
        return report

    def _clean(
        self, dst_dir: Path, provider: Provider, report: DestinationReport
    ) -> None:
        report.cleaned = clean_agents(
            self.src_dir, dst_dir, provider, dry_run=report.dry_run
        )
        if provider == Provider.CODEX:
            report.codex_block_cleaned = CodexConfigRepository.for_agents_dir(
                dst_dir
            ).clean_block(dry_run=report.dry_run)
