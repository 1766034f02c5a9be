"""Layered sidecar configuration: ``defaults.yaml`` under ``config.yaml``."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence

import yaml

from agent_sync.constants import (
    CONFIG_BASENAMES,
    DEFAULT_FAST_MODEL,
    DEFAULT_STRONG_MODEL,
    DEFAULTS_BASENAMES,
    MODULE_FILENAME,
)
from agent_sync.frontmatter import join_list, scalar_to_str
from agent_sync.models import ModelTiers
from agent_sync.providers import Provider

logger = logging.getLogger(__name__)

_MISSING = object()

KeyPath = Sequence[str]


def load_yaml_file(path: Path) -> Any:
    """Load a YAML file, or None when it is missing or unparsable."""
    if not path.is_file():
        return None
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logger.debug("Ignoring unreadable config %s: %s", path, exc)
        return None


def _first_existing(root: Path, basenames: Iterable[str]) -> Optional[Path]:
    for basename in basenames:
        candidate = root / basename
        if candidate.is_file():
            return candidate
    return None


def merge_values(base: Any, overlay: Any) -> Any:
    """Deep-merge ``overlay`` onto ``base``; a null overlay keeps the base."""
    if isinstance(base, dict) and isinstance(overlay, dict):
        result = dict(base)
        for key, value in overlay.items():
            if key in result:
                result[key] = merge_values(result[key], value)
            else:
                result[key] = value
        return result
    if overlay is None:
        return base
    return overlay


def navigate(tree: Any, keys: KeyPath) -> Any:
    current = tree
    for key in keys:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def resolve_model(requested: str, global_tiers: ModelTiers, tiers: ModelTiers) -> str:
    """Translate a tier name or a global tier alias into the provider's model."""
    if requested in ("fast", global_tiers.fast):
        return tiers.fast
    if requested in ("strong", global_tiers.strong):
        return tiers.strong
    return requested


def canonical_tier(requested: str, global_tiers: ModelTiers) -> Optional[str]:
    if requested in ("fast", global_tiers.fast):
        return "fast"
    if requested in ("strong", global_tiers.strong):
        return "strong"
    return None


class SidecarConfig:
    """Read-only view over the merged configuration tree.

    Every query walks an ordered list of candidate key paths, nested shape
    first and flat shape second, and never raises.
    """

    def __init__(self, raw: Any = None) -> None:
        self._raw = raw if isinstance(raw, dict) else {}

    @classmethod
    def load(cls, root: Path) -> "SidecarConfig":
        defaults_path = _first_existing(root, DEFAULTS_BASENAMES)
        config_path = _first_existing(root, CONFIG_BASENAMES)
        defaults = load_yaml_file(defaults_path) if defaults_path else None
        overrides = load_yaml_file(config_path) if config_path else None
        merged = merge_values(defaults, overrides)
        if merged is not None and not isinstance(merged, dict):
            logger.debug("Ignoring non-mapping config under %s", root)
            merged = None
        return cls(merged)

    @property
    def raw(self) -> dict[str, Any]:
        return self._raw

    def lookup(self, *candidates: KeyPath) -> Any:
        """Return the first value present among ``candidates``, else None."""
        for keys in candidates:
            value = navigate(self._raw, keys)
            if value is not _MISSING and value is not None:
                return value
        return None

    def lookup_str(self, *candidates: KeyPath) -> Optional[str]:
        for keys in candidates:
            value = navigate(self._raw, keys)
            if value is _MISSING:
                continue
            normalized = scalar_to_str(value)
            if normalized is not None:
                return normalized
        return None

    def global_tiers(self) -> ModelTiers:
        return ModelTiers(
            fast=self._tier(("shared", "models", "fast"), ("models", "fast"))
            or DEFAULT_FAST_MODEL,
            strong=self._tier(("shared", "models", "strong"), ("models", "strong"))
            or DEFAULT_STRONG_MODEL,
        )

    def provider_tiers(self, provider: Provider | str) -> ModelTiers:
        name = _provider_key(provider)
        global_tiers = self.global_tiers()
        return ModelTiers(
            fast=self._provider_tier(name, "fast") or global_tiers.fast,
            strong=self._provider_tier(name, "strong") or global_tiers.strong,
        )

    def _provider_tier(self, name: str, tier: str) -> Optional[str]:
        return self._tier(
            ("providers", name, "models", tier),
            ("providers", name, tier),
            (name, tier),
        )

    def _tier(self, *candidates: KeyPath) -> Optional[str]:
        for keys in candidates:
            value = navigate(self._raw, keys)
            if isinstance(value, str) and value:
                return value
        return None

    def is_model_whitelisted(self, provider: Provider | str, model: str) -> bool:
        name = _provider_key(provider)
        for keys in (
            ("providers", name, "whitelist"),
            ("providers", name, "models"),
            (name, "whitelist"),
            (name, "models"),
        ):
            value = navigate(self._raw, keys)
            if isinstance(value, list):
                return model in [scalar_to_str(item) for item in value]
        return True

    def agent_value(self, agent: str, key: str) -> Optional[str]:
        return self.lookup_str(("agents", agent, key), (agent, key))

    def agent_list(self, agent: str, key: str) -> Optional[str]:
        for keys in (("agents", agent, key), (agent, key)):
            value = navigate(self._raw, keys)
            if value is _MISSING:
                continue
            joined = join_list(value)
            if joined:
                return joined
        return None

    def provider_reasoning_effort(
        self, provider: Provider | str, tier: str
    ) -> Optional[str]:
        name = _provider_key(provider)
        return self.lookup_str(
            ("providers", name, "reasoning_effort", tier),
            (name, "reasoning_effort", tier),
        )

    def skill_value(self, skill: str, key: str) -> Optional[str]:
        return self.lookup_str(("skills", skill, key), (skill, key))

    def provider_skills(self, provider: Provider | str) -> Optional[list[str]]:
        name = _provider_key(provider)
        value = self.lookup(("providers", name, "skills"), (name, "skills"))
        if isinstance(value, dict):
            return [str(key) for key in value]
        if isinstance(value, list):
            items = [scalar_to_str(item) for item in value]
            return [item for item in items if item is not None]
        return None

    def provider_skill_value(
        self, provider: Provider | str, skill: str, key: str
    ) -> Optional[str]:
        name = _provider_key(provider)
        return self.lookup_str(
            ("providers", name, "skills", skill, key),
            (name, "skills", skill, key),
        )

    def providers(self) -> list[Provider]:
        section = self._raw.get("providers")
        if not isinstance(section, dict):
            return list(Provider)
        configured: list[Provider] = []
        for key in section:
            provider = Provider.parse(str(key))
            if provider is not None and provider not in configured:
                configured.append(provider)
        return configured or list(Provider)


def _provider_key(provider: Provider | str) -> str:
    return provider.value if isinstance(provider, Provider) else str(provider)


def read_module_name(agents_dir: Path) -> Optional[str]:
    payload = load_yaml_file(agents_dir.parent / MODULE_FILENAME)
    if not isinstance(payload, dict):
        return None
    name = scalar_to_str(payload.get("name"))
    return name or None
