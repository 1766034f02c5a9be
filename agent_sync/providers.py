from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from agent_sync.constants import PROMPT_SUFFIX


class Provider(str, Enum):
    CLAUDE = "claude"
    GEMINI = "gemini"
    CODEX = "codex"
    OPENCODE = "opencode"

    @classmethod
    def parse(cls, value: str) -> Optional["Provider"]:
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None

    @classmethod
    def from_path(cls, path: Path | str) -> "Provider":
        text = str(path)
        for provider in (cls.GEMINI, cls.CODEX, cls.OPENCODE):
            if provider_profile(provider).dir_marker in text:
                return provider
        return cls.CLAUDE

    @property
    def profile(self) -> "ProviderProfile":
        return provider_profile(self)

    @property
    def extension(self) -> str:
        return self.profile.extension

    def artifact_filename(self, name: str) -> str:
        return f"{name}.{self.extension}"

    def companion_filename(self, name: str) -> Optional[str]:
        if not self.profile.has_companion:
            return None
        return f"{name}{PROMPT_SUFFIX}"

    def format_name(self, name: str) -> str:
        if self.profile.kebab_names:
            return to_kebab_case(name)
        return name

    def map_tool(self, tool: str) -> str:
        table = self.profile.tool_map
        if table is None:
            return tool
        lowered = tool.lower()
        return table.get(lowered, lowered)

    def map_tools(self, tools: str) -> list[str]:
        return [
            self.map_tool(item)
            for item in (part.strip() for part in tools.split(","))
            if item
        ]


@dataclass(frozen=True)
class ProviderProfile:
    provider: Provider
    label: str
    extension: str
    dir_marker: str
    has_companion: bool = False
    kebab_names: bool = False
    tool_map: Optional[dict[str, str]] = None


GEMINI_TOOL_MAP: dict[str, str] = {
    "read": "read_file",
    "write": "write_file",
    "edit": "replace",
    "replace": "replace",
    "grep": "grep_search",
    "glob": "glob",
    "bash": "run_shell_command",
    "shell": "run_shell_command",
    "run": "run_shell_command",
    "websearch": "google_web_search",
    "webfetch": "web_fetch",
}


PROVIDER_CATALOG: dict[Provider, ProviderProfile] = {
    Provider.CLAUDE: ProviderProfile(
        provider=Provider.CLAUDE,
        label="Claude",
        extension="md",
        dir_marker=".claude",
    ),
    Provider.GEMINI: ProviderProfile(
        provider=Provider.GEMINI,
        label="Gemini",
        extension="md",
        dir_marker=".gemini",
        kebab_names=True,
        tool_map=GEMINI_TOOL_MAP,
    ),
    Provider.CODEX: ProviderProfile(
        provider=Provider.CODEX,
        label="Codex",
        extension="toml",
        dir_marker=".codex",
        has_companion=True,
    ),
    Provider.OPENCODE: ProviderProfile(
        provider=Provider.OPENCODE,
        label="OpenCode",
        extension="md",
        dir_marker=".opencode",
        kebab_names=True,
    ),
}


def provider_profile(provider: Provider | str) -> ProviderProfile:
    provider_id = provider if isinstance(provider, Provider) else Provider(provider)
    return PROVIDER_CATALOG[provider_id]


def provider_label(provider: Provider | str) -> str:
    return provider_profile(provider).label


def to_kebab_case(name: str) -> str:
    """PascalCase to kebab-case; upper-case runs collapse without hyphens."""
    chars: list[str] = []
    prev_lower_or_digit = False
    for ch in name:
        if ch.isascii() and ch.isupper():
            if prev_lower_or_digit:
                chars.append("-")
            chars.append(ch.lower())
            prev_lower_or_digit = False
        elif ch in (" ", "_"):
            chars.append("-")
            prev_lower_or_digit = False
        else:
            chars.append(ch)
            prev_lower_or_digit = ch.isascii() and (ch.islower() or ch.isdigit())

    collapsed: list[str] = []
    for ch in chars:
        if ch == "-" and collapsed and collapsed[-1] == "-":
            continue
        collapsed.append(ch)
    return "".join(collapsed)
