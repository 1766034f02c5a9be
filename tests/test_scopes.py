from pathlib import Path

import pytest

from agent_sync.errors import ScopeError
from agent_sync.providers import Provider
from agent_sync.scopes import project_key, scope_dirs

HOME = Path("/home/dev")
CWD = Path("/work/repo")
PROVIDERS = [Provider.CLAUDE, Provider.CODEX]


def test_user_scope() -> None:
    assert scope_dirs("user", HOME, PROVIDERS, CWD) == [
        HOME / ".claude" / "agents",
        HOME / ".codex" / "agents",
    ]


def test_workspace_scope() -> None:
    assert scope_dirs("workspace", HOME, PROVIDERS, CWD) == [
        CWD / ".claude" / "agents",
        CWD / ".codex" / "agents",
    ]


def test_project_scope() -> None:
    assert project_key(CWD) == "-work-repo"
    assert scope_dirs("project", HOME, [Provider.GEMINI], CWD) == [
        HOME / ".gemini" / "projects" / "-work-repo" / "agents"
    ]


def test_all_scope_is_user_then_workspace() -> None:
    dirs = scope_dirs("all", HOME, PROVIDERS, CWD)
    assert dirs == scope_dirs("user", HOME, PROVIDERS, CWD) + scope_dirs(
        "workspace", HOME, PROVIDERS, CWD
    )


def test_destinations_detect_their_provider() -> None:
    dirs = scope_dirs("user", HOME, list(Provider), CWD)
    assert [Provider.from_path(path) for path in dirs] == list(Provider)


def test_invalid_scope() -> None:
    with pytest.raises(ScopeError):
        scope_dirs("galaxy", HOME, PROVIDERS, CWD)
