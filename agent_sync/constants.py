from typing import Final


MAX_DOCUMENT_BYTES: Final[int] = 256 * 1024

AGENT_NAME_PATTERN: Final[str] = r"^[A-Z][a-zA-Z0-9]{2,50}$"
TEMPLATE_PREFIXES: Final[tuple[str, ...]] = ("_Template", "Template")
SOURCE_EXTENSION: Final[str] = ".md"

DEFAULT_FAST_MODEL: Final[str] = "sonnet"
DEFAULT_STRONG_MODEL: Final[str] = "opus"
DEFAULT_MODEL_TIER: Final[str] = "sonnet"
DEFAULT_DESCRIPTION: Final[str] = "Specialist agent"

SOURCE_FIELD: Final[str] = "source"
SOURCE_COMMENT_PREFIX: Final[str] = "# source: "
LEGACY_SOURCE_PREFIX: Final[str] = "# synced-from: "

CONFIG_BASENAMES: Final[tuple[str, ...]] = ("config.yaml", "config.yml")
DEFAULTS_BASENAMES: Final[tuple[str, ...]] = ("defaults.yaml", "defaults.yml")
MODULE_FILENAME: Final[str] = "module.yaml"

MANIFEST_FILENAME: Final[str] = ".manifest"

AGENTS_DIRNAME: Final[str] = "agents"
PROMPT_SUFFIX: Final[str] = ".prompt.md"
CODEX_CONFIG_FILENAME: Final[str] = "config.toml"
CODEX_BLOCK_BEGIN: Final[str] = "# BEGIN agent-sync agents"
CODEX_BLOCK_END: Final[str] = "# END agent-sync agents"
