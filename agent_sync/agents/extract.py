"""Resolve an agent definition into a provider-specific record."""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from agent_sync.agents.models import AgentRecord
from agent_sync.config import SidecarConfig, canonical_tier, resolve_model
from agent_sync.constants import (
    DEFAULT_DESCRIPTION,
    DEFAULT_MODEL_TIER,
    TEMPLATE_PREFIXES,
)
from agent_sync.frontmatter import fm_list, fm_value
from agent_sync.providers import Provider

# Each strategy receives (document text, agent name, config).
Strategy = Callable[[str, str, SidecarConfig], Optional[str]]


def _fm(key: str) -> Strategy:
    return lambda text, _name, _config: fm_value(text, key)


def _fm_list(key: str) -> Strategy:
    return lambda text, _name, _config: fm_list(text, key)


def _agent_value(key: str) -> Strategy:
    return lambda _text, name, config: config.agent_value(name, key)


def _agent_list(key: str) -> Strategy:
    return lambda _text, name, config: config.agent_list(name, key)


NAME_STRATEGIES: tuple[Callable[[str], Optional[str]], ...] = (
    lambda text: fm_value(text, "name"),
    lambda text: fm_value(text, "claude.name"),
)

MODEL_STRATEGIES: tuple[Strategy, ...] = (
    _agent_value("model"),
    _fm("claude.model"),
)

DESCRIPTION_STRATEGIES: tuple[Strategy, ...] = (
    _fm("description"),
    _fm("claude.description"),
    _agent_value("description"),
)

TOOLS_STRATEGIES: tuple[Strategy, ...] = (
    _agent_list("tools"),
    _fm_list("claude.tools"),
    _fm("claude.tools"),
)


def _first(
    strategies: Sequence[Strategy], text: str, name: str, config: SidecarConfig
) -> Optional[str]:
    for strategy in strategies:
        value = strategy(text, name, config)
        if value:
            return value
    return None


def is_template(filename: str) -> bool:
    return filename.startswith(TEMPLATE_PREFIXES)


def extract_agent_name(text: str) -> Optional[str]:
    for strategy in NAME_STRATEGIES:
        name = strategy(text)
        if name:
            return name
    return None


def source_for(filename: str, source_prefix: str = "") -> str:
    if not source_prefix:
        return filename
    return f"{source_prefix}/{filename}"


def extract_agent_meta(
    text: str,
    filename: str,
    provider: Provider,
    config: SidecarConfig,
    source_prefix: str = "",
) -> Optional[AgentRecord]:
    if is_template(filename):
        return None

    name = extract_agent_name(text)
    if name is None:
        return None

    tier = _first(MODEL_STRATEGIES, text, name, config) or DEFAULT_MODEL_TIER
    global_tiers = config.global_tiers()
    model = resolve_model(tier, global_tiers, config.provider_tiers(provider))

    description = (
        _first(DESCRIPTION_STRATEGIES, text, name, config) or DEFAULT_DESCRIPTION
    )
    tools = _first(TOOLS_STRATEGIES, text, name, config)

    reasoning_effort = config.agent_value(name, "reasoning_effort")
    if reasoning_effort is None:
        reasoning_effort = config.provider_reasoning_effort(provider, tier)
    if reasoning_effort is None:
        tier_name = canonical_tier(tier, global_tiers)
        if tier_name is not None and tier_name != tier:
            reasoning_effort = config.provider_reasoning_effort(provider, tier_name)

    return AgentRecord(
        name=name,
        display_name=provider.format_name(name),
        model=model,
        description=description,
        source=source_for(filename, source_prefix),
        tools=tools,
        reasoning_effort=reasoning_effort,
    )
