"""Per-destination ledger of the artifacts each module last deployed."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import yaml

from agent_sync.constants import MANIFEST_FILENAME
from agent_sync.errors import ManifestError

logger = logging.getLogger(__name__)


class ManifestStore:
    def __init__(self, dst_dir: Path) -> None:
        self._dst_dir = dst_dir

    @property
    def path(self) -> Path:
        return self._dst_dir / MANIFEST_FILENAME

    def load(self) -> dict[str, list[str]]:
        if not self.path.is_file():
            return {}
        try:
            payload = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError, yaml.YAMLError) as exc:
            logger.debug("Ignoring unreadable manifest %s: %s", self.path, exc)
            return {}
        if not isinstance(payload, dict):
            return {}
        manifest: dict[str, list[str]] = {}
        for module, names in payload.items():
            if isinstance(names, list):
                manifest[str(module)] = [str(name) for name in names]
        return manifest

    def read(self, module_name: str) -> list[str]:
        return self.load().get(module_name, [])

    def update(self, module_name: str, names: Sequence[str]) -> None:
        manifest = self.load()
        if names:
            manifest[module_name] = list(names)
        else:
            manifest.pop(module_name, None)

        try:
            if not manifest:
                self.path.unlink(missing_ok=True)
                return
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                yaml.safe_dump(
                    {key: manifest[key] for key in sorted(manifest)},
                    default_flow_style=False,
                    sort_keys=False,
                ),
                encoding="utf-8",
            )
        except OSError as exc:
            raise ManifestError(self.path, str(exc)) from exc
