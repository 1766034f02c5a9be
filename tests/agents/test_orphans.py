"""Tests for manifest-driven orphan retraction."""

from pathlib import Path

import pytest

from agent_sync.agents.deploy import deploy_agents_from_dir
from agent_sync.agents.orphans import clean_orphaned_agents, sync_manifest
from agent_sync.config import SidecarConfig
from agent_sync.manifest import ManifestStore
from agent_sync.providers import Provider


@pytest.fixture
def deployed(write_agent, agents_dir: Path, tmp_path: Path):
    def _deploy(provider: Provider) -> Path:
        write_agent("Alpha.md", "---\nname: Alpha\n---\nA\n")
        write_agent("Beta.md", "---\nname: Beta\n---\nB\n")
        dst = tmp_path / f".{provider.value}" / "agents"
        deploy_agents_from_dir(
            agents_dir, dst, provider, SidecarConfig(), source_prefix="council/agents"
        )
        ManifestStore(dst).update("council", ["Alpha", "Beta"])
        return dst

    return _deploy


def test_orphan_with_provenance_is_removed(deployed) -> None:
    dst = deployed(Provider.CODEX)
    removed = clean_orphaned_agents(dst, "council", ["Beta"], Provider.CODEX)
    assert removed == ["Alpha"]
    assert not (dst / "Alpha.toml").exists()
    assert not (dst / "Alpha.prompt.md").exists()
    assert (dst / "Beta.toml").exists()


def test_reowned_orphan_is_kept(deployed) -> None:
    dst = deployed(Provider.CLAUDE)
    edited = "---\nname: Alpha\n---\nNow mine\n"
    (dst / "Alpha.md").write_text(edited, encoding="utf-8")
    assert clean_orphaned_agents(dst, "council", ["Beta"], Provider.CLAUDE) == []
    assert (dst / "Alpha.md").read_text(encoding="utf-8") == edited


def test_dry_run_reports_without_removing(deployed) -> None:
    dst = deployed(Provider.GEMINI)
    assert clean_orphaned_agents(dst, "council", [], Provider.GEMINI, dry_run=True) == [
        "Alpha",
        "Beta",
    ]
    assert (dst / "Alpha.md").exists()


def test_missing_artifact_and_empty_module(deployed) -> None:
    dst = deployed(Provider.CLAUDE)
    (dst / "Alpha.md").unlink()
    assert clean_orphaned_agents(dst, "council", ["Beta"], Provider.CLAUDE) == []
    assert clean_orphaned_agents(dst, "", [], Provider.CLAUDE) == []


def test_invalid_manifest_names_are_ignored(tmp_path: Path) -> None:
    dst = tmp_path / ".claude" / "agents"
    dst.mkdir(parents=True)
    victim = tmp_path / ".claude" / "Victim.md"
    victim.write_text("---\nsource: ../Victim.md\n---\n", encoding="utf-8")
    ManifestStore(dst).update("council", ["../Victim"])
    assert clean_orphaned_agents(dst, "council", [], Provider.CLAUDE) == []
    assert victim.exists()


def test_sync_manifest_records_current_set(deployed) -> None:
    dst = deployed(Provider.CLAUDE)
    assert sync_manifest(dst, "council", ["Beta"], Provider.CLAUDE) == ["Alpha"]
    assert ManifestStore(dst).read("council") == ["Beta"]


def test_sync_manifest_dry_run_leaves_manifest(deployed) -> None:
    dst = deployed(Provider.CLAUDE)
    sync_manifest(dst, "council", ["Beta"], Provider.CLAUDE, dry_run=True)
    assert ManifestStore(dst).read("council") == ["Alpha", "Beta"]
