from pathlib import Path

import pytest

from agent_sync.__main__ import cli, main


@pytest.fixture
def council(module_root: Path, write_agent, write_yaml, developer_md: str) -> Path:
    write_yaml(module_root / "module.yaml", "name: council\n")
    write_agent("Developer.md", developer_md)
    return module_root / "agents"


def test_install_to_explicit_destination(cli_runner, council: Path, tmp_path: Path) -> None:
    dst = tmp_path / "out" / ".claude" / "agents"
    result = cli_runner.invoke(cli, ["install", str(council), "--dst", str(dst)])
    assert result.exit_code == 0, result.output
    assert (dst / "Developer.md").exists()
    assert "Claude agents" in result.output


def test_install_dry_run(cli_runner, council: Path, tmp_path: Path) -> None:
    dst = tmp_path / "out" / ".codex" / "agents"
    result = cli_runner.invoke(
        cli, ["install", str(council), "--dst", str(dst), "--dry-run"]
    )
    assert result.exit_code == 0, result.output
    assert "dry-run" in result.output
    assert "Would write managed block" in result.output
    assert not dst.exists()


def test_install_user_scope_uses_configured_providers(
    cli_runner, council: Path, module_root: Path, write_yaml, tmp_path: Path
) -> None:
    write_yaml(module_root / "config.yaml", "providers:\n  gemini: {}\n")
    result = cli_runner.invoke(cli, ["install", str(council), "--scope", "user"])
    assert result.exit_code == 0, result.output
    assert (tmp_path / ".gemini" / "agents" / "Developer.md").exists()
    assert not (tmp_path / ".claude" / "agents").exists()


def test_user_owned_artifact_is_reported(cli_runner, council: Path, tmp_path: Path) -> None:
    dst = tmp_path / ".claude" / "agents"
    dst.mkdir(parents=True)
    (dst / "Developer.md").write_text("mine\n", encoding="utf-8")
    result = cli_runner.invoke(cli, ["install", str(council), "--dst", str(dst)])
    assert result.exit_code == 0, result.output
    assert "user-owned artifact" in result.output
    assert (dst / "Developer.md").read_text(encoding="utf-8") == "mine\n"


def test_install_errors_exit_nonzero(cli_runner, council: Path, write_agent, tmp_path: Path) -> None:
    write_agent("Bad.md", "---\nname: ../Bad\n---\n")
    dst = tmp_path / ".claude" / "agents"
    result = cli_runner.invoke(cli, ["install", str(council), "--dst", str(dst)])
    assert result.exit_code == 1


def test_clean_command(cli_runner, council: Path, tmp_path: Path) -> None:
    dst = tmp_path / ".claude" / "agents"
    cli_runner.invoke(cli, ["install", str(council), "--dst", str(dst)])
    result = cli_runner.invoke(cli, ["clean", str(council), "--dst", str(dst)])
    assert result.exit_code == 0, result.output
    assert not (dst / "Developer.md").exists()
    assert "Removed" in result.output


def test_main_reports_missing_source(tmp_path: Path) -> None:
    assert main(["install", str(tmp_path / "missing")]) == 2


def test_main_success(council: Path, tmp_path: Path) -> None:
    dst = tmp_path / ".claude" / "agents"
    assert main(["install", str(council), "--dst", str(dst)]) == 0


def test_main_exits_nonzero_when_destination_fails(
    council: Path, write_agent, tmp_path: Path
) -> None:
    write_agent("Bad.md", "---\nname: ../Bad\n---\n")
    dst = tmp_path / ".claude" / "agents"
    assert main(["install", str(council), "--dst", str(dst)]) == 1
