"""Tests for refbot translate."""

import json
from pathlib import Path

from click.testing import CliRunner

from refbot.cli.cli import cli
from refbot.config import RepositoryConfiguration
from refbot.context import context_for_test
from refbot.gateway.source_files.fake import FakeSourceFiles


def _repository() -> RepositoryConfiguration:
    return RepositoryConfiguration(
        configuration_id="1",
        fork_url="https://git.example.com/refbot/project.git",
        upstream_url="https://git.example.com/owner/project.git",
        bot_name="refbot",
        bot_email="refbot@example.com",
        bot_token="secret-token",
    )


def _issue(key: str, rule: str, path: str, message: str = "") -> dict[str, object]:
    return {
        "key": key,
        "rule": rule,
        "component": f"my-app:{path}",
        "project": "my-app",
        "line": 10,
        "message": message,
        "creationDate": "2018-06-01T10:00:00+0000",
    }


def _setup(tmp_path: Path, issues: list[dict[str, object]]) -> Path:
    """Create workspace 1 with two source files and write the issues report."""
    workspace = tmp_path / "workspaces" / "1"
    for relative in ("src/Foo.java", "backend/src/Bar.java"):
        source = workspace / relative
        source.parent.mkdir(parents=True, exist_ok=True)
        source.write_text("class X {}\n", encoding="utf-8")
    report = tmp_path / "issues.json"
    report.write_text(json.dumps({"total": len(issues), "issues": issues}), encoding="utf-8")
    return report


def test_translate_json_keeps_order_with_no_shuffle(tmp_path: Path) -> None:
    report = _setup(
        tmp_path,
        [
            _issue("A1", "squid:S1172", "src/Foo.java", "Remove this unused method parameter 'x'."),
            _issue("A2", "squid:S1161", "src/Bar.java"),
            _issue("A3", "squid:S9999", "src/Foo.java"),
        ],
    )
    ctx = context_for_test(
        workspace_root=tmp_path / "workspaces", repositories=(_repository(),)
    )

    result = CliRunner().invoke(
        cli, ["translate", "1", str(report), "--no-shuffle", "--json"], obj=ctx
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == [
        {
            "file_path": "src/Foo.java",
            "line": 10,
            "issue_key": "A1",
            "creation_date": "2018-06-01T10:00:00+0000",
            "operation": "Remove Parameter",
            "refactor_parameter": "x",
        },
        {
            "file_path": "backend/src/Bar.java",
            "line": 10,
            "issue_key": "A2",
            "creation_date": "2018-06-01T10:00:00+0000",
            "operation": "Add Override Annotation",
            "refactor_parameter": None,
        },
        {
            "file_path": "src/Foo.java",
            "line": 10,
            "issue_key": "A3",
            "creation_date": "2018-06-01T10:00:00+0000",
            "operation": "Unknown",
            "refactor_parameter": None,
        },
    ]


def test_translate_same_seed_gives_same_order(tmp_path: Path) -> None:
    report = _setup(
        tmp_path, [_issue(f"K{i:02d}", "squid:S1161", "src/Foo.java") for i in range(12)]
    )
    ctx = context_for_test(
        workspace_root=tmp_path / "workspaces",
        repositories=(_repository(),),
        source_files=FakeSourceFiles(),
    )
    runner = CliRunner()

    first = runner.invoke(cli, ["translate", "1", str(report), "--seed", "7", "--json"], obj=ctx)
    second = runner.invoke(cli, ["translate", "1", str(report), "--seed", "7", "--json"], obj=ctx)

    assert first.exit_code == 0, first.output
    keys = [task["issue_key"] for task in json.loads(first.stdout)]
    assert keys == [task["issue_key"] for task in json.loads(second.stdout)]
    assert sorted(keys) == [f"K{i:02d}" for i in range(12)]


def test_translate_table_goes_to_stderr(tmp_path: Path) -> None:
    report = _setup(tmp_path, [_issue("A1", "squid:S1161", "src/Foo.java")])
    ctx = context_for_test(
        workspace_root=tmp_path / "workspaces", repositories=(_repository(),)
    )

    result = CliRunner().invoke(cli, ["translate", "1", str(report)], obj=ctx)

    assert result.exit_code == 0, result.output
    assert result.stdout == ""
    assert "A1" in result.stderr
    assert "Add Override Annotation" in result.stderr


def test_translate_unresolvable_file_exits_with_error(tmp_path: Path) -> None:
    report = _setup(tmp_path, [_issue("A1", "squid:S1161", "src/Gone.java")])
    ctx = context_for_test(
        workspace_root=tmp_path / "workspaces", repositories=(_repository(),)
    )

    result = CliRunner().invoke(cli, ["translate", "1", str(report), "--json"], obj=ctx)

    assert result.exit_code == 1
    assert "Error: " in result.stderr
    assert "src/Gone.java" in result.stderr


def test_translate_reads_the_engine_workspace(tmp_path: Path) -> None:
    report = _setup(tmp_path, [_issue("A1", "squid:S1161", "src/Foo.java")])
    source_files = FakeSourceFiles()
    ctx = context_for_test(
        workspace_root=tmp_path / "workspaces",
        repositories=(_repository(),),
        source_files=source_files,
    )

    result = CliRunner().invoke(cli, ["translate", "1", str(report), "--json"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert source_files.listed_roots == [ctx.workspace_engine.workspace_path(_repository())]
