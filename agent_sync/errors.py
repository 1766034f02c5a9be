from pathlib import Path


class SyncAppError(Exception):
    """Base user-facing application error."""


class SyncFileError(SyncAppError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class DeployError(SyncFileError):
    def __init__(self, path: Path, action: str, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Failed to {action} ({detail})")


class SymlinkDestinationError(SyncFileError):
    def __init__(self, path: Path) -> None:
        super().__init__(path=path, message="Destination is a symlink")


class ManifestError(SyncFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Failed to write manifest ({detail})")


class InvalidAgentNameError(SyncAppError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Agent name {name!r} does not match ^[A-Z][a-zA-Z0-9]{{2,50}}$"
        )


class ScopeError(SyncAppError):
    def __init__(self, scope: str) -> None:
        self.scope = scope
        super().__init__(
            f"Invalid scope {scope!r}: use user, workspace, project, or all"
        )
