"""Tests for the command line interface."""

import pytest
from click.testing import CliRunner

from diario.cli import main
from diario.data import FileStore, Layout, PersistenceGateway
from diario.models import TaskStatus
from diario.planner import Planner


@pytest.fixture()
def run(store_path):
    runner = CliRunner()

    def _run(*args, layout="sections", **kwargs):
        return runner.invoke(main, ["--store", str(store_path), "--layout", layout, *args], **kwargs)

    return _run


def _load(store_path, layout=Layout.SECTIONS):
    planner = Planner(PersistenceGateway(FileStore(store_path), layout))
    planner.load_all()
    return planner


class TestCli:
    """Test CLI commands against a store file."""

    def test_version(self):
        """Test the version option."""
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "diario" in result.output

    def test_empty_list(self, run):
        """Test listing with nothing stored."""
        result = run("list")
        assert result.exit_code == 0
        assert "No projects yet" in result.output

    def test_project_section_task_flow(self, run, store_path):
        """Test building a tree through the CLI and persisting every step."""
        assert run("project", "add", "Work", "--color", "0xFF2196F3").exit_code == 0
        project = _load(store_path).projects[0]
        assert project.color == 0xFF2196F3

        assert run("section", "add", project.id, "Sprint 1").exit_code == 0
        section = _load(store_path).projects[0].sections[0]

        result = run("task", "add", "Write spec", "-p", project.id, "-s", section.id)
        assert result.exit_code == 0
        task = _load(store_path).projects[0].sections[0].tasks[0]
        assert task.title == "Write spec"

        result = run("task", "status", task.id, "inprogress")
        assert result.exit_code == 0
        assert _load(store_path).get_task(task.id).status == TaskStatus.IN_PROGRESS

        result = run("list")
        assert "Work" in result.output
        assert "Sprint 1" in result.output
        assert "Write spec" in result.output

        result = run("status")
        assert result.exit_code == 0
        assert "Projects: 1" in result.output
        assert "Tasks: 1 (0 completed)" in result.output

    def test_blank_project_name(self, run, store_path):
        """Test a blank name fails without writing anything."""
        result = run("project", "add", "   ")
        assert result.exit_code == 1
        assert "must not be empty" in result.output
        assert not store_path.exists()

    def test_unknown_task_status(self, run):
        """Test changing the status of a missing task fails."""
        result = run("task", "status", "ghost", "Done")
        assert result.exit_code == 1
        assert "No task ghost" in result.output

    def test_remove_commands(self, run, store_path):
        """Test removal commands, including absent ids."""
        run("project", "add", "Work")
        project = _load(store_path).projects[0]

        result = run("project", "rm", "ghost")
        assert result.exit_code == 0
        assert "No project ghost" in result.output

        assert run("project", "rm", project.id).exit_code == 0
        assert _load(store_path).projects == []

    def test_clear_requires_confirmation(self, run, store_path):
        """Test clear asks first and deletes everything once confirmed."""
        run("project", "add", "Work")

        result = run("clear", input="n\n")
        assert result.exit_code != 0
        assert len(_load(store_path).projects) == 1

        result = run("clear", "--yes")
        assert result.exit_code == 0
        assert _load(store_path).projects == []

    def test_flat_layout(self, run, store_path):
        """Test the flat layout through the CLI."""
        assert run("task", "add", "Buy milk", layout="flat").exit_code == 0
        tasks = _load(store_path, Layout.FLAT).tasks
        assert [t.title for t in tasks] == ["Buy milk"]

        assert run("task", "status", tasks[0].id, "Done", layout="flat").exit_code == 0
        result = run("list", layout="flat")
        assert "Buy milk" in result.output
        assert "Completato" in result.output

        assert run("task", "rm", tasks[0].id, layout="flat").exit_code == 0
        assert _load(store_path, Layout.FLAT).tasks == []
