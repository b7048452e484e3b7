from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator
from datetime import datetime
from enum import Enum
from typing import Optional, List, Iterator, Union, Sequence, TypeVar

from .ids import new_id
from .logs import get_logger
from .recovery import ValidationError, NotFoundError

log = get_logger("models")

# Opaque platform identifiers, passed through unchanged
DEFAULT_PROJECT_COLOR = 0xFF673AB7
DEFAULT_PROJECT_ICON = 0xE2C7
DEFAULT_SECTION_ICON = 0xE896

class TaskStatus(Enum):
    TODO = "ToDo"
    IN_PROGRESS = "InProgress"
    DONE = "Done"

def _require_text(value: Optional[str], what: str) -> str:
    """Trim a required name/title, refusing it when nothing is left."""
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{what} must not be empty")
    return text

def _created_at_field():
    return Field(
        default_factory=datetime.now,
        frozen=True,
        validation_alias=AliasChoices("createdAt", "created_at"),
        serialization_alias="createdAt",
        description="When the entity was created",
    )

Entity = TypeVar("Entity")

def find_by_id(items: Sequence[Entity], entity_id: str) -> Optional[Entity]:
    """Return the first entity with the given id, or None."""
    return next((item for item in items if item.id == entity_id), None)

def remove_by_id(items: List[Entity], entity_id: str) -> bool:
    """Remove the first entity with the given id. Returns False if it was absent."""
    for index, item in enumerate(items):
        if item.id == entity_id:
            del items[index]
            return True
    return False

def ensure_unique_ids(items: Sequence[Entity], kind: str) -> None:
    seen = set()
    for item in items:
        if item.id in seen:
            raise ValueError(f"Duplicate {kind} id: {item.id}")
        seen.add(item.id)

class Task(BaseModel):
    """A single actionable item. Only its status changes after creation."""

    id: str = Field(default_factory=new_id, frozen=True, description="Unique identifier for the task")
    title: str = Field(frozen=True, description="Title of the task")
    description: str = Field(default="", description="Optional details")
    created_at: datetime = _created_at_field()
    status: TaskStatus = Field(default=TaskStatus.TODO, description="Current status of the task")

    @field_validator('description', mode='before')
    @classmethod
    def missing_description(cls, v):
        return "" if v is None else v

    @field_validator('status', mode='before')
    @classmethod
    def fallback_status(cls, v):
        if isinstance(v, TaskStatus):
            return v
        try:
            return TaskStatus(v)
        except ValueError:
            log.warning(f"Unknown task status {v!r}, using {TaskStatus.TODO.value}")
            return TaskStatus.TODO

    @classmethod
    def create(cls, title: str, description: str = "") -> 'Task':
        """Build a new task with a fresh id and the current time."""
        return cls(title=_require_text(title, "Task title"), description=(description or "").strip())

    def set_status(self, status: Union[TaskStatus, str]) -> None:
        """Move the task to another status; raises ValueError for unknown values."""
        self.status = TaskStatus(status)

class TaskStats(BaseModel):
    """Snapshot of the derived statistics of a task container."""

    total: int
    todo: int
    in_progress: int
    done: int
    percentage_complete: float

class TaskStatsMixin:
    """Derived statistics, recomputed from the owned tasks on every read."""

    def iter_tasks(self) -> Iterator[Task]:
        raise NotImplementedError

    @property
    def task_count(self) -> int:
        return sum(1 for _ in self.iter_tasks())

    def count(self, status: TaskStatus) -> int:
        return sum(1 for t in self.iter_tasks() if t.status == status)

    @property
    def todo_count(self) -> int:
        return self.count(TaskStatus.TODO)

    @property
    def in_progress_count(self) -> int:
        return self.count(TaskStatus.IN_PROGRESS)

    @property
    def done_count(self) -> int:
        return self.count(TaskStatus.DONE)

    @property
    def percentage_complete(self) -> float:
        total = self.task_count
        if total == 0:
            return 0.0
        return self.done_count / total * 100

    def tasks_with_status(self, status: TaskStatus) -> List[Task]:
        """Tasks in the given status, in display order."""
        return [t for t in self.iter_tasks() if t.status == status]

    def stats(self) -> TaskStats:
        return TaskStats(
            total=self.task_count,
            todo=self.todo_count,
            in_progress=self.in_progress_count,
            done=self.done_count,
            percentage_complete=self.percentage_complete,
        )

    def find_task(self, task_id: str) -> Task:
        """Find a task by id; raises NotFoundError when no task has it."""
        task = find_by_id(list(self.iter_tasks()), task_id)
        if task is None:
            raise NotFoundError(f"No task with id {task_id}")
        return task

    def set_task_status(self, task_id: str, status: Union[TaskStatus, str]) -> Task:
        task = self.find_task(task_id)
        task.set_status(status)
        return task

class Section(TaskStatsMixin, BaseModel):
    """A named grouping of tasks within a project."""

    id: str = Field(default_factory=new_id, frozen=True, description="Unique identifier for the section")
    name: str = Field(description="Name of the section")
    description: str = Field(default="", description="Optional details")
    icon: int = Field(default=DEFAULT_SECTION_ICON, description="Opaque icon identifier")
    tasks: List[Task] = Field(
        default_factory=list,
        description="Tasks of the section, in display order"
    )

    @field_validator('description', mode='before')
    @classmethod
    def missing_description(cls, v):
        return "" if v is None else v

    @model_validator(mode='after')
    def validate_ids(self):
        ensure_unique_ids(self.tasks, "task")
        return self

    @classmethod
    def create(cls, name: str, description: str = "", icon: int = DEFAULT_SECTION_ICON) -> 'Section':
        return cls(name=_require_text(name, "Section name"), description=(description or "").strip(), icon=icon)

    def iter_tasks(self) -> Iterator[Task]:
        return iter(self.tasks)

    def add_task(self, title: str, description: str = "") -> Task:
        task = Task.create(title, description)
        self.tasks.append(task)
        return task

    def remove_task(self, task_id: str) -> bool:
        return remove_by_id(self.tasks, task_id)

class Project(TaskStatsMixin, BaseModel):
    """
    Top-level unit of organization.

    A project owns either tasks directly or sections of tasks, never both.
    Statistics aggregate every task the project owns.
    """

    id: str = Field(default_factory=new_id, frozen=True, description="Unique identifier for the project")
    name: str = Field(description="Name of the project")
    description: str = Field(default="", description="Optional details")
    color: int = Field(default=DEFAULT_PROJECT_COLOR, description="Opaque color identifier")
    icon: int = Field(default=DEFAULT_PROJECT_ICON, description="Opaque icon identifier")
    created_at: datetime = _created_at_field()
    tasks: List[Task] = Field(
        default_factory=list,
        description="Tasks owned directly by the project"
    )
    sections: List[Section] = Field(
        default_factory=list,
        description="Sections of the project, in display order"
    )

    @field_validator('description', mode='before')
    @classmethod
    def missing_description(cls, v):
        return "" if v is None else v

    @model_validator(mode='after')
    def validate_children(self):
        if self.tasks and self.sections:
            raise ValueError("A project holds either tasks or sections, not both")
        ensure_unique_ids(self.tasks, "task")
        ensure_unique_ids(self.sections, "section")
        return self

    @classmethod
    def create(cls, name: str, description: str = "", color: int = DEFAULT_PROJECT_COLOR,
               icon: int = DEFAULT_PROJECT_ICON) -> 'Project':
        return cls(name=_require_text(name, "Project name"), description=(description or "").strip(),
                   color=color, icon=icon)

    def iter_tasks(self) -> Iterator[Task]:
        yield from self.tasks
        for section in self.sections:
            yield from section.tasks

    def find_section(self, section_id: str) -> Section:
        """Find a section by id; raises NotFoundError when absent."""
        section = find_by_id(self.sections, section_id)
        if section is None:
            raise NotFoundError(f"No section with id {section_id} in project {self.id}")
        return section

    def add_section(self, name: str, description: str = "", icon: int = DEFAULT_SECTION_ICON) -> Section:
        if self.tasks:
            raise ValueError("Project already holds tasks directly")
        section = Section.create(name, description, icon)
        self.sections.append(section)
        return section

    def remove_section(self, section_id: str) -> bool:
        return remove_by_id(self.sections, section_id)

    def add_task(self, title: str, description: str = "") -> Task:
        if self.sections:
            raise ValueError("Project tasks live in its sections")
        task = Task.create(title, description)
        self.tasks.append(task)
        return task

    def remove_task(self, task_id: str) -> bool:
        """Remove a task owned directly or through any section."""
        if remove_by_id(self.tasks, task_id):
            return True
        return any(section.remove_task(task_id) for section in self.sections)

Project.model_rebuild()
