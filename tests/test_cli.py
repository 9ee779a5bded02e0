"""Tests for the sprint-planner command."""
import json

import pytest

from sprint_planner.cli import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("SPRINT_PLANNER_CONFIG", raising=False)
    monkeypatch.delenv("SPRINT_PLANNER_MAX_ENGINEERS", raising=False)


@pytest.fixture
def task_folder(tmp_path):
    folder = tmp_path / "tasks"
    folder.mkdir()
    (folder / "1.json").write_text(json.dumps({"id": "1", "subject": "Add routes to server/index.ts"}))
    (folder / "2.json").write_text(json.dumps({"id": "2", "subject": "Handle errors in server/index.ts"}))
    (folder / "3.json").write_text(json.dumps({"id": "3", "subject": "Fix typo in README"}))
    return folder


def run(args: list[str]) -> int:
    with pytest.raises(SystemExit) as exc:
        main(args)
    return exc.value.code


class TestCli:
    def test_dry_run_output(self, task_folder, tmp_path, capsys):
        assert run([str(task_folder), "--config", str(tmp_path / "none.yml")]) == 0
        out = capsys.readouterr().out
        assert "Batch 1 (parallel): #1, #3" in out
        assert "Recommended engineers: 2" in out

    def test_json_output(self, task_folder, tmp_path, capsys):
        assert run([str(task_folder), "--json", "--config", str(tmp_path / "none.yml")]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["executionPlan"]["batches"] == [["1", "3"], ["2"]]

    def test_no_infer(self, task_folder, tmp_path, capsys):
        assert run([str(task_folder), "--json", "--no-infer", "--config", str(tmp_path / "none.yml")]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["executionPlan"]["batches"] == [["1", "2", "3"]]

    def test_max_engineers_flag(self, task_folder, tmp_path, capsys):
        assert run([str(task_folder), "--json", "-e", "1", "--config", str(tmp_path / "none.yml")]) == 0
        assert json.loads(capsys.readouterr().out)["recommendedEngineers"] == 1

    def test_config_overrides(self, task_folder, tmp_path, capsys):
        config = tmp_path / ".sprint.yml"
        config.write_text('models:\n  overrides:\n    "3": claude-opus-4-6\n')
        assert run([str(task_folder), "--json", "--config", str(config)]) == 0
        routing = json.loads(capsys.readouterr().out)["modelRouting"]
        assert routing["3"]["model"] == "claude-opus-4-6"

    def test_writes_output(self, task_folder, tmp_path, capsys):
        output = tmp_path / "plan.json"
        assert run([str(task_folder), "-o", str(output), "--config", str(tmp_path / "none.yml")]) == 0
        assert json.loads(output.read_text())["executionPlan"]["criticalPath"] == ["1", "2"]

    def test_missing_folder(self, tmp_path, capsys):
        assert run([str(tmp_path / "nope")]) == 1
        assert "Task folder not found" in capsys.readouterr().out

    def test_invalid_config(self, task_folder, tmp_path, capsys):
        config = tmp_path / ".sprint.yml"
        config.write_text("planner:\n  max_engineers: many\n")
        assert run([str(task_folder), "--config", str(config)]) == 1
        assert "Invalid planner config" in capsys.readouterr().out

    def test_invalid_max_engineers_flag(self, task_folder, tmp_path, capsys):
        assert run([str(task_folder), "-e", "0", "--config", str(tmp_path / "none.yml")]) == 1
