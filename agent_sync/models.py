from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from agent_sync.constants import DEFAULT_FAST_MODEL, DEFAULT_STRONG_MODEL


class DeployResult(str, Enum):
    DEPLOYED = "deployed"
    SKIPPED_TEMPLATE = "skipped_template"
    SKIPPED_USER_OWNED = "skipped_user_owned"
    SKIPPED_NO_NAME = "skipped_no_name"


class Scope(str, Enum):
    USER = "user"
    WORKSPACE = "workspace"
    PROJECT = "project"
    ALL = "all"


@dataclass(frozen=True)
class ModelTiers:
    fast: str = DEFAULT_FAST_MODEL
    strong: str = DEFAULT_STRONG_MODEL


@dataclass
class DestinationReport:
    """Everything that happened to one destination directory in a run."""

    path: Path
    provider: str
    dry_run: bool = False
    results: list[tuple[str, DeployResult]] = field(default_factory=list)
    installed: list[str] = field(default_factory=list)
    orphans: list[str] = field(default_factory=list)
    cleaned: list[str] = field(default_factory=list)
    codex_entries: Optional[int] = None
    codex_block_cleaned: bool = False
    errors: list[Exception] = field(default_factory=list)

    def is_valid(self) -> bool:
        return not self.errors

    def summary(self) -> dict[str, int]:
        counts = {result.value: 0 for result in DeployResult}
        for _, result in self.results:
            counts[result.value] += 1
        counts["orphans"] = len(self.orphans)
        counts["cleaned"] = len(self.cleaned)
        counts["errors"] = len(self.errors)
        return counts
