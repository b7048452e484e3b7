"""
Command Line Interface for Diario Checklist.
"""

import click
import logging
from pathlib import Path
from .version import VERSION
from .config import get_settings
from .data import FileStore, Layout, PersistenceGateway
from .display import status_label, status_rgb
from .logs import setup_logging
from .models import DEFAULT_PROJECT_COLOR, DEFAULT_PROJECT_ICON, DEFAULT_SECTION_ICON, TaskStatus
from .planner import Planner
from .recovery import DiarioError

STATUS_MARKS = {
    TaskStatus.TODO: "⬜",
    TaskStatus.IN_PROGRESS: "🔄",
    TaskStatus.DONE: "✅",
}


def _parse_int(ctx, param, value):
    """Accept decimal or 0x-prefixed identifiers for colors and icons."""
    if value is None or isinstance(value, int):
        return value
    try:
        return int(value, 0)
    except ValueError:
        raise click.BadParameter(f"{value!r} is not an integer")


def _fail(message):
    click.echo(f"❌ {message}", err=True)
    raise click.exceptions.Exit(1)


def _progress(container):
    return f"{container.percentage_complete:.0f}% ({container.done_count}/{container.task_count})"


def _echo_task(task, indent):
    label = click.style(status_label(task.status), fg=status_rgb(task.status))
    click.echo(f"{indent}{STATUS_MARKS[task.status]} {task.title} [{task.id}] ({label})")
    if task.description:
        click.echo(f"{indent}   {task.description}")


@click.group()
@click.version_option(version=VERSION, prog_name="diario")
@click.option('--store', 'store_path', type=click.Path(dir_okay=False, path_type=Path),
              help='Store file (.yml or .json); defaults to DIARIO_DATA_DIR/DIARIO_STORE_FILE')
@click.option('--layout', type=click.Choice([layout.value for layout in Layout]),
              help='Data layout; defaults to DIARIO_LAYOUT or "sections"')
@click.option('-v', '--verbose', count=True, help='Log to stderr: -v for info, -vv for debug')
@click.pass_context
def main(ctx, store_path, layout, verbose):
    """
    Diario Checklist - projects, sections and tasks kept on this machine.
    """
    if verbose:
        setup_logging(logging.INFO if verbose == 1 else logging.DEBUG)
    settings = get_settings()
    store = FileStore(store_path or settings.store_path)
    planner = Planner(PersistenceGateway(store, layout or settings.layout))
    planner.load_all()
    ctx.obj = planner


@main.command()
@click.pass_obj
def status(planner):
    """Show where data is kept and overall progress."""
    click.echo("🔧 Diario Checklist")
    click.echo(f"📦 Version: {VERSION}")
    click.echo(f"📍 Store: {planner.gateway.store.path}")
    click.echo(f"🗂️  Layout: {planner.layout.value} (key '{planner.gateway.key}')")
    click.echo("")

    tasks = planner.all_tasks()
    done = sum(1 for t in tasks if t.status == TaskStatus.DONE)
    if not planner.is_flat:
        click.echo(f"📁 Projects: {len(planner.projects)}")
    click.echo(f"📋 Tasks: {len(tasks)} ({done} completed)")
    for project in planner.projects:
        click.echo(f"   {project.name}: {_progress(project)}")


@main.command(name="list")
@click.pass_obj
def list_items(planner):
    """List every project, section and task."""
    if planner.is_flat:
        if not planner.tasks:
            click.echo("📭 No tasks yet. Use 'diario task add' to start!")
            return
        for task in planner.tasks:
            _echo_task(task, "")
        return

    if not planner.projects:
        click.echo("📭 No projects yet. Use 'diario project add' to start!")
        return

    for project in planner.projects:
        click.echo(f"📁 {project.name} [{project.id}] {_progress(project)}")
        for task in project.tasks:
            _echo_task(task, "   ")
        for section in project.sections:
            click.echo(f"   📂 {section.name} [{section.id}] {_progress(section)}")
            for task in section.tasks:
                _echo_task(task, "      ")


@main.command()
@click.confirmation_option(prompt='Are you sure you want to delete every project and task?')
@click.pass_obj
def clear(planner):
    """Delete all stored data."""
    planner.clear_all()
    click.echo("🗑️  All data deleted")


@main.group()
def project():
    """Manage projects."""
    pass


@project.command(name="add")
@click.argument('name')
@click.option('-d', '--description', default="", help='Project description')
@click.option('--color', default=DEFAULT_PROJECT_COLOR, type=str, callback=_parse_int, help='Color identifier (e.g. 0xFF2196F3)')
@click.option('--icon', default=DEFAULT_PROJECT_ICON, type=str, callback=_parse_int, help='Icon identifier')
@click.pass_obj
def add_project(planner, name, description, color, icon):
    """Add a new project."""
    try:
        new_project = planner.add_project(name, description, color, icon)
    except (DiarioError, ValueError) as e:
        _fail(f"Error adding project: {e}")
    planner.save_all()
    click.echo(f"✅ Project added: {new_project.name} [{new_project.id}]")


@project.command(name="rm")
@click.argument('project_id')
@click.pass_obj
def remove_project(planner, project_id):
    """Delete a project with all its sections and tasks."""
    if planner.delete_project(project_id):
        planner.save_all()
        click.echo(f"🗑️  Project {project_id} deleted")
    else:
        click.echo(f"📭 No project {project_id}")


@main.group()
def section():
    """Manage project sections."""
    pass


@section.command(name="add")
@click.argument('project_id')
@click.argument('name')
@click.option('-d', '--description', default="", help='Section description')
@click.option('--icon', default=DEFAULT_SECTION_ICON, type=str, callback=_parse_int, help='Icon identifier')
@click.pass_obj
def add_section(planner, project_id, name, description, icon):
    """Add a section to a project."""
    try:
        new_section = planner.add_section(project_id, name, description, icon)
    except (DiarioError, ValueError) as e:
        _fail(f"Error adding section: {e}")
    planner.save_all()
    click.echo(f"✅ Section added: {new_section.name} [{new_section.id}]")


@section.command(name="rm")
@click.argument('project_id')
@click.argument('section_id')
@click.pass_obj
def remove_section(planner, project_id, section_id):
    """Delete a section with all its tasks."""
    if planner.delete_section(project_id, section_id):
        planner.save_all()
        click.echo(f"🗑️  Section {section_id} deleted")
    else:
        click.echo(f"📭 No section {section_id} in project {project_id}")


@main.group()
def task():
    """Manage tasks."""
    pass


@task.command(name="add")
@click.argument('title')
@click.option('-d', '--description', default="", help='Task description')
@click.option('-p', '--project', 'project_id', help='Project id (projects and sections layouts)')
@click.option('-s', '--section', 'section_id', help='Section id (sections layout)')
@click.pass_obj
def add_task(planner, title, description, project_id, section_id):
    """Add a new task."""
    try:
        new_task = planner.add_task(title, description, project_id, section_id)
    except (DiarioError, ValueError) as e:
        _fail(f"Error adding task: {e}")
    planner.save_all()
    click.echo(f"✅ Task added: {new_task.title} [{new_task.id}]")


@task.command(name="status")
@click.argument('task_id')
@click.argument('new_status', type=click.Choice([s.value for s in TaskStatus], case_sensitive=False))
@click.pass_obj
def set_status(planner, task_id, new_status):
    """Move a task to ToDo, InProgress or Done."""
    if not planner.set_task_status(task_id, new_status):
        _fail(f"No task {task_id}")
    planner.save_all()
    click.echo(f"{STATUS_MARKS[TaskStatus(new_status)]} Task {task_id} is now {new_status}")


@task.command(name="rm")
@click.argument('task_id')
@click.pass_obj
def remove_task(planner, task_id):
    """Delete a task."""
    if planner.delete_task(task_id):
        planner.save_all()
        click.echo(f"🗑️  Task {task_id} deleted")
    else:
        click.echo(f"📭 No task {task_id}")


if __name__ == "__main__":
    main()
