"""
Planner - owns the canonical in-memory tree and the mutation operations on it.

Mutations only touch memory; callers flush with save_all() when they are done.
The flat layout keeps a bare task list in ``tasks``; the project layouts keep
``projects``.
"""
from typing import List, Optional, Union

from .data.codec import Layout
from .data.gateway import PersistenceGateway
from .logs import get_logger
from .models import (
    DEFAULT_PROJECT_COLOR,
    DEFAULT_PROJECT_ICON,
    DEFAULT_SECTION_ICON,
    Project,
    Section,
    Task,
    TaskStatus,
    find_by_id,
    remove_by_id,
)
from .recovery import NotFoundError

log = get_logger("planner")

class Planner:
    """Main entry point for the presentation layer."""

    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway
        self.projects: List[Project] = []
        self.tasks: List[Task] = []

    @property
    def layout(self) -> Layout:
        return self.gateway.layout

    @property
    def is_flat(self) -> bool:
        return self.layout == Layout.FLAT

    @property
    def is_ready(self) -> bool:
        return self.gateway.is_ready

    def _require_layout(self, *layouts: Layout):
        if self.layout not in layouts:
            raise ValueError(f"Operation not available in the {self.layout.value} layout")

    # ---- persistence ----

    def load_all(self) -> List[Union[Project, Task]]:
        """Replace the in-memory tree with whatever the store holds."""
        items = self.gateway.load()
        if self.is_flat:
            self.tasks = items
            self.projects = []
        else:
            self.projects = items
            self.tasks = []
        return items

    def save_all(self) -> None:
        self.gateway.save(self.tasks if self.is_flat else self.projects)

    def clear_all(self) -> None:
        """Forget every project and task, in memory and in the store."""
        self.projects.clear()
        self.tasks.clear()
        self.gateway.clear()
        log.info("Cleared all data")

    # ---- lookups ----

    def get_project(self, project_id: str) -> Project:
        project = find_by_id(self.projects, project_id)
        if project is None:
            raise NotFoundError(f"No project with id {project_id}")
        return project

    def get_section(self, project_id: str, section_id: str) -> Section:
        return self.get_project(project_id).find_section(section_id)

    def get_task(self, task_id: str) -> Task:
        """Find a task anywhere in the tree."""
        if self.is_flat:
            task = find_by_id(self.tasks, task_id)
        else:
            task = next((t for p in self.projects for t in p.iter_tasks() if t.id == task_id), None)
        if task is None:
            raise NotFoundError(f"No task with id {task_id}")
        return task

    def all_tasks(self) -> List[Task]:
        if self.is_flat:
            return list(self.tasks)
        return [t for p in self.projects for t in p.iter_tasks()]

    # ---- mutations ----

    def add_project(self, name: str, description: str = "", color: int = DEFAULT_PROJECT_COLOR,
                    icon: int = DEFAULT_PROJECT_ICON) -> Project:
        self._require_layout(Layout.PROJECTS, Layout.SECTIONS)
        project = Project.create(name, description, color, icon)
        self.projects.append(project)
        log.debug(f"Added project {project.id} '{project.name}'")
        return project

    def add_section(self, project_id: str, name: str, description: str = "",
                    icon: int = DEFAULT_SECTION_ICON) -> Section:
        self._require_layout(Layout.SECTIONS)
        section = self.get_project(project_id).add_section(name, description, icon)
        log.debug(f"Added section {section.id} '{section.name}' to project {project_id}")
        return section

    def add_task(self, title: str, description: str = "", project_id: Optional[str] = None,
                 section_id: Optional[str] = None) -> Task:
        """
        Create a task and append it to its container.

        The flat layout takes no parent, the projects layout needs project_id,
        and the sections layout needs both project_id and section_id.

        Raises:
            ValidationError: If the title is empty after trimming.
            NotFoundError: If the parent project or section does not exist.
        """
        if self.is_flat:
            task = Task.create(title, description)
            self.tasks.append(task)
        elif project_id is None:
            raise NotFoundError("A project is required to add a task")
        elif self.layout == Layout.SECTIONS:
            if section_id is None:
                raise NotFoundError("A section is required to add a task")
            task = self.get_section(project_id, section_id).add_task(title, description)
        else:
            task = self.get_project(project_id).add_task(title, description)
        log.debug(f"Added task {task.id} '{task.title}'")
        return task

    def set_task_status(self, task_id: str, status: Union[TaskStatus, str]) -> bool:
        """Change a task's status. Returns False, after logging, when the task is gone."""
        try:
            task = self.get_task(task_id)
        except NotFoundError as e:
            log.warning(f"Status change ignored: {e}")
            return False
        task.set_status(status)
        return True

    def delete_project(self, project_id: str) -> bool:
        """Delete a project with all its sections and tasks. Absent ids are a no-op."""
        return remove_by_id(self.projects, project_id)

    def delete_section(self, project_id: str, section_id: str) -> bool:
        project = find_by_id(self.projects, project_id)
        if project is None:
            return False
        return project.remove_section(section_id)

    def delete_task(self, task_id: str) -> bool:
        if self.is_flat:
            return remove_by_id(self.tasks, task_id)
        return any(project.remove_task(task_id) for project in self.projects)
