from pathlib import Path

import pytest

from agent_sync.providers import Provider, provider_label, to_kebab_case


@pytest.mark.parametrize(
    "path,expected",
    [
        ("/home/u/.claude/agents", Provider.CLAUDE),
        ("/home/u/.gemini/agents", Provider.GEMINI),
        ("/home/u/.codex/projects/-x/agents", Provider.CODEX),
        (".opencode/agents", Provider.OPENCODE),
        ("/tmp/elsewhere", Provider.CLAUDE),
    ],
)
def test_from_path(path: str, expected: Provider) -> None:
    assert Provider.from_path(Path(path)) == expected


def test_parse() -> None:
    assert Provider.parse("Gemini") == Provider.GEMINI
    assert Provider.parse(" codex ") == Provider.CODEX
    assert Provider.parse("cursor") is None


@pytest.mark.parametrize(
    "name,expected",
    [
        ("SecurityArchitect", "security-architect"),
        ("DevOps", "dev-ops"),
        ("Developer", "developer"),
        ("APIGateway", "apigateway"),
        ("Model3Config", "model3-config"),
        ("Two_Words Here", "two-words-here"),
    ],
)
def test_kebab_case(name: str, expected: str) -> None:
    assert to_kebab_case(name) == expected


def test_format_name_per_provider() -> None:
    assert Provider.CLAUDE.format_name("SecurityArchitect") == "SecurityArchitect"
    assert Provider.CODEX.format_name("SecurityArchitect") == "SecurityArchitect"
    assert Provider.GEMINI.format_name("SecurityArchitect") == "security-architect"
    assert Provider.OPENCODE.format_name("SecurityArchitect") == "security-architect"


def test_gemini_tool_vocabulary() -> None:
    assert Provider.GEMINI.map_tools("Read, Write, Edit, Bash, WebSearch, Custom") == [
        "read_file",
        "write_file",
        "replace",
        "run_shell_command",
        "google_web_search",
        "custom",
    ]


def test_identity_tool_vocabulary() -> None:
    assert Provider.CLAUDE.map_tool("Read") == "Read"
    assert Provider.OPENCODE.map_tools("Read, ,Grep") == ["Read", "Grep"]


def test_artifact_names() -> None:
    assert Provider.CLAUDE.artifact_filename("Dev") == "Dev.md"
    assert Provider.CODEX.artifact_filename("Dev") == "Dev.toml"
    assert Provider.CODEX.companion_filename("Dev") == "Dev.prompt.md"
    assert Provider.GEMINI.companion_filename("Dev") is None
    assert provider_label(Provider.OPENCODE) == "OpenCode"
