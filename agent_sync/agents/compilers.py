"""Per-provider agent compilers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import yaml

from agent_sync.agents.models import AgentOutput, AgentRecord
from agent_sync.codex.config_repository import dump_toml_value
from agent_sync.constants import AGENTS_DIRNAME, SOURCE_COMMENT_PREFIX, SOURCE_FIELD
from agent_sync.providers import Provider


def _with_newline(text: str) -> str:
    return text if text.endswith("\n") else f"{text}\n"


def render_frontmatter(fm: dict[str, Any], body: str) -> str:
    parts: list[str] = []
    parts.append("---")
    parts.append(
        yaml.safe_dump(
            fm,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
            width=4096,
        ).rstrip()
    )
    parts.append("---")
    parts.append(body)
    return _with_newline("\n".join(parts))


class IAgentCompiler(ABC):
    provider: Provider

    @abstractmethod
    def compile(
        self, agent: AgentRecord, body: str, model_allowed: bool = True
    ) -> AgentOutput:
        """Return compiled artifact content for the target provider."""


class ClaudeAgentCompiler(IAgentCompiler):
    """Canonical format: tools stay a comma-separated string."""

    provider = Provider.CLAUDE

    def compile(
        self, agent: AgentRecord, body: str, model_allowed: bool = True
    ) -> AgentOutput:
        fm: dict[str, Any] = {
            "name": agent.display_name,
            "description": agent.description,
        }
        if model_allowed:
            fm["model"] = agent.model
        if agent.tools:
            fm["tools"] = agent.tools
        fm[SOURCE_FIELD] = agent.source
        return AgentOutput(primary=render_frontmatter(fm, body))


class GeminiAgentCompiler(IAgentCompiler):
    """Kebab-case names, local kind and Gemini tool vocabulary."""

    provider = Provider.GEMINI

    def compile(
        self, agent: AgentRecord, body: str, model_allowed: bool = True
    ) -> AgentOutput:
        fm: dict[str, Any] = {
            "name": agent.display_name,
            "description": agent.description,
            "kind": "local",
        }
        if model_allowed:
            fm["model"] = agent.model
        if agent.tools:
            fm["tools"] = self.provider.map_tools(agent.tools)
        fm[SOURCE_FIELD] = agent.source
        return AgentOutput(primary=render_frontmatter(fm, body))


class OpenCodeAgentCompiler(IAgentCompiler):
    provider = Provider.OPENCODE

    def compile(
        self, agent: AgentRecord, body: str, model_allowed: bool = True
    ) -> AgentOutput:
        fm: dict[str, Any] = {
            "name": agent.display_name,
            "description": agent.description,
        }
        if model_allowed:
            fm["model"] = agent.model
        if agent.tools:
            fm["tools"] = self.provider.map_tools(agent.tools)
        fm[SOURCE_FIELD] = agent.source
        return AgentOutput(primary=render_frontmatter(fm, body))


class CodexAgentCompiler(IAgentCompiler):
    """Flat TOML settings plus a companion prompt file for the body."""

    provider = Provider.CODEX

    def compile(
        self, agent: AgentRecord, body: str, model_allowed: bool = True
    ) -> AgentOutput:
        prompt_filename = self.provider.companion_filename(agent.name)
        lines = [
            f"{SOURCE_COMMENT_PREFIX}{agent.source}",
            f"description = {dump_toml_value(agent.description)}",
        ]
        if model_allowed:
            lines.append(f"model = {dump_toml_value(agent.model)}")
        if agent.reasoning_effort:
            lines.append(
                f"model_reasoning_effort = {dump_toml_value(agent.reasoning_effort)}"
            )
        lines.append(
            "model_instructions_file = "
            f"{dump_toml_value(f'{AGENTS_DIRNAME}/{prompt_filename}')}"
        )
        return AgentOutput(
            primary="\n".join(lines) + "\n",
            prompt_file=(prompt_filename, _with_newline(body)),
        )


AGENT_COMPILERS: dict[Provider, IAgentCompiler] = {
    Provider.CLAUDE: ClaudeAgentCompiler(),
    Provider.GEMINI: GeminiAgentCompiler(),
    Provider.CODEX: CodexAgentCompiler(),
    Provider.OPENCODE: OpenCodeAgentCompiler(),
}


def format_agent_output(
    agent: AgentRecord, body: str, provider: Provider, model_allowed: bool = True
) -> AgentOutput:
    return AGENT_COMPILERS[provider].compile(agent, body, model_allowed)
