"""Codex ``config.toml`` agent registration inside a managed block."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Sequence

from agent_sync.agents.models import CodexConfigEntry
from agent_sync.constants import (
    AGENTS_DIRNAME,
    CODEX_BLOCK_BEGIN,
    CODEX_BLOCK_END,
    CODEX_CONFIG_FILENAME,
)
from agent_sync.errors import DeployError

logger = logging.getLogger(__name__)


def toml_escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def dump_toml_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, list):
        return "[" + ", ".join(dump_toml_value(item) for item in value) + "]"
    return f'"{toml_escape(str(value))}"'


def _split_lines(content: str) -> list[str]:
    """Split on LF only; other line separators are user content."""
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _is_marker(line: str, marker: str) -> bool:
    return line.rstrip("\r") == marker


def strip_managed_block(content: str, begin: str, end: str) -> str:
    """Drop every line from ``begin`` through ``end`` and trailing blank lines."""
    lines: list[str] = []
    skip = False
    for line in _split_lines(content):
        if _is_marker(line, begin):
            skip = True
            continue
        if _is_marker(line, end):
            skip = False
            continue
        if not skip:
            lines.append(line)
    output = "".join(f"{line}\n" for line in lines)
    while output.endswith("\n\n"):
        output = output[:-1]
    return output


def format_codex_config_block(
    entries: Sequence[CodexConfigEntry], source_prefix: str
) -> str:
    lines = [CODEX_BLOCK_BEGIN, f"# Generated by agent-sync ({source_prefix})"]
    for entry in entries:
        lines.append("")
        lines.append(f"[agents.{entry.name}]")
        lines.append(f"description = {dump_toml_value(entry.description)}")
        lines.append(
            f"config_file = {dump_toml_value(f'{AGENTS_DIRNAME}/{entry.name}.toml')}"
        )
    lines.append(CODEX_BLOCK_END)
    return "\n".join(lines) + "\n"


class CodexConfigRepository:
    """Owns only the region between the managed-block sentinels."""

    def __init__(self, root: Path | None = None) -> None:
        self._root = root or (Path.home() / ".codex")

    @classmethod
    def for_agents_dir(cls, agents_dir: Path) -> "CodexConfigRepository":
        return cls(root=agents_dir.parent)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def config_path(self) -> Path:
        return self.root / CODEX_CONFIG_FILENAME

    def load_text(self) -> str:
        if not self.config_path.is_file():
            return ""
        try:
            with self.config_path.open(encoding="utf-8", newline="") as handle:
                return handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise DeployError(self.config_path, "read", str(exc)) from exc

    def render(self, entries: Sequence[CodexConfigEntry], source_prefix: str) -> str:
        stripped = strip_managed_block(
            self.load_text(), CODEX_BLOCK_BEGIN, CODEX_BLOCK_END
        )
        block = format_codex_config_block(entries, source_prefix)
        if not stripped:
            return block
        return f"{stripped}\n{block}"

    def write_block(
        self,
        entries: Sequence[CodexConfigEntry],
        source_prefix: str,
        dry_run: bool = False,
    ) -> str:
        rendered = self.render(entries, source_prefix)
        if not dry_run:
            self._write(rendered)
        logger.debug(
            "Rendered %d agent entries into %s", len(entries), self.config_path
        )
        return rendered

    def clean_block(self, dry_run: bool = False) -> bool:
        existing = self.load_text()
        lines = _split_lines(existing)
        if not any(_is_marker(line, CODEX_BLOCK_BEGIN) for line in lines):
            return False
        if not dry_run:
            self._write(strip_managed_block(existing, CODEX_BLOCK_BEGIN, CODEX_BLOCK_END))
        return True

    def _write(self, text: str) -> None:
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with self.config_path.open("w", encoding="utf-8", newline="") as handle:
                handle.write(text)
        except OSError as exc:
            raise DeployError(self.config_path, "write", str(exc)) from exc
