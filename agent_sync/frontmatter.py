"""Split documents with YAML frontmatter and query their metadata."""

from __future__ import annotations

import re
from typing import Any, Callable, Optional

import yaml

from agent_sync.constants import (
    AGENT_NAME_PATTERN,
    LEGACY_SOURCE_PREFIX,
    MAX_DOCUMENT_BYTES,
    SOURCE_COMMENT_PREFIX,
    SOURCE_FIELD,
)
from agent_sync.errors import InvalidAgentNameError

_FRONTMATTER_RE = re.compile(r"\A---\n?(?:---|(.*?)\n---)\n?", re.DOTALL)
_AGENT_NAME_RE = re.compile(AGENT_NAME_PATTERN)


def split_frontmatter(text: str) -> Optional[tuple[str, str]]:
    """Return ``(metadata_text, body)`` or None when there is no block.

    Oversized documents are treated as having no metadata.
    """
    if len(text.encode("utf-8")) > MAX_DOCUMENT_BYTES:
        return None
    match = _FRONTMATTER_RE.match(text)
    if match is None:
        return None
    return match.group(1) or "", text[match.end() :]


def frontmatter_body(text: str) -> str:
    parts = split_frontmatter(text)
    if parts is None:
        return text
    return parts[1]


def _load_mapping(text: str) -> Optional[dict[Any, Any]]:
    parts = split_frontmatter(text)
    if parts is None:
        return None
    try:
        raw = yaml.safe_load(parts[0])
    except (ValueError, yaml.YAMLError):
        return None
    return raw if isinstance(raw, dict) else None


def scalar_to_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return None
    return str(value)


def fm_value(text: str, key: str) -> Optional[str]:
    mapping = _load_mapping(text)
    if mapping is None or key not in mapping:
        return None
    value = mapping[key]
    if isinstance(value, (dict, list)):
        return yaml.safe_dump(value, default_flow_style=False, sort_keys=False).strip()
    return scalar_to_str(value)


def join_list(value: Any) -> Optional[str]:
    """Join a sequence of scalars with ``", "``; strings pass through."""
    if isinstance(value, str):
        return value
    if not isinstance(value, list):
        return None
    items = [scalar_to_str(item) for item in value]
    joined = [item for item in items if item is not None]
    if not joined:
        return None
    return ", ".join(joined)


def fm_list(text: str, key: str) -> Optional[str]:
    mapping = _load_mapping(text)
    if mapping is None:
        return None
    return join_list(mapping.get(key))


def is_valid_agent_name(name: str) -> bool:
    return bool(name) and _AGENT_NAME_RE.fullmatch(name) is not None


def validate_agent_name(name: str) -> None:
    if not is_valid_agent_name(name):
        raise InvalidAgentNameError(name)


def _matches_source(value: str, expected_source: str) -> bool:
    return value == expected_source or value.endswith(f"/{expected_source}")


def _first_body_line(text: str) -> str:
    lines = frontmatter_body(text).splitlines()
    return lines[0] if lines else ""


def _source_field(text: str, expected_source: str) -> bool:
    source = fm_value(text, SOURCE_FIELD)
    return source is not None and _matches_source(source, expected_source)


def _source_comment(text: str, expected_source: str) -> bool:
    first_line = _first_body_line(text)
    if not first_line.startswith(SOURCE_COMMENT_PREFIX):
        return False
    return _matches_source(first_line[len(SOURCE_COMMENT_PREFIX) :], expected_source)


def _legacy_synced_from(text: str, expected_source: str) -> bool:
    return _first_body_line(text) == f"{LEGACY_SOURCE_PREFIX}{expected_source}"


PROVENANCE_STRATEGIES: tuple[Callable[[str, str], bool], ...] = (
    _source_field,
    _source_comment,
    _legacy_synced_from,
)


def is_synced_from(text: str, expected_source: str) -> bool:
    """True when ``text`` carries this tool's provenance for ``expected_source``.

    Only the ``source`` metadata field or the first body line count; the
    marker appearing further down in the body is user content.
    """
    return any(strategy(text, expected_source) for strategy in PROVENANCE_STRATEGIES)
