"""Agent data models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AgentRecord:
    name: str
    display_name: str
    model: str
    description: str
    source: str
    tools: Optional[str] = None
    reasoning_effort: Optional[str] = None


@dataclass(frozen=True)
class AgentOutput:
    primary: str
    prompt_file: Optional[tuple[str, str]] = None


@dataclass(frozen=True)
class CodexConfigEntry:
    name: str
    description: str
