from pathlib import Path
from typing import Sequence

from agent_sync.constants import AGENTS_DIRNAME
from agent_sync.errors import ScopeError
from agent_sync.models import Scope
from agent_sync.providers import Provider


def project_key(cwd: Path) -> str:
    return str(cwd).replace("/", "-")


def _provider_dir(base: Path, provider: Provider) -> Path:
    return base / f".{provider.value}"


def scope_dirs(
    scope: Scope | str,
    home: Path,
    providers: Sequence[Provider],
    cwd: Path,
) -> list[Path]:
    try:
        resolved = scope if isinstance(scope, Scope) else Scope(scope.lower())
    except ValueError:
        raise ScopeError(str(scope)) from None

    user_dirs = [_provider_dir(home, p) / AGENTS_DIRNAME for p in providers]
    workspace_dirs = [_provider_dir(cwd, p) / AGENTS_DIRNAME for p in providers]

    if resolved == Scope.USER:
        return user_dirs
    if resolved == Scope.WORKSPACE:
        return workspace_dirs
    if resolved == Scope.PROJECT:
        key = project_key(cwd)
        return [
            _provider_dir(home, p) / "projects" / key / AGENTS_DIRNAME
            for p in providers
        ]
    return user_dirs + workspace_dirs
