"""
Codec - conversion between the entity tree and the text kept in the store.

Projects are stored as one JSON array of records. The flat layout keeps one
JSON record per task in a list of strings instead.
"""

import json
from enum import Enum
from typing import List, Sequence, Union

from pydantic import TypeAdapter, ValidationError as ModelValidationError

from diario.logs import get_logger
from diario.models import Project, Task
from diario.recovery import DecodeError
from .validate import validate_records, TASK_SCHEMA, PROJECTS_SCHEMA, SECTIONS_SCHEMA

log = get_logger("data.codec")

class Layout(Enum):
    FLAT = "flat"
    PROJECTS = "projects"
    SECTIONS = "sections"

    @property
    def store_key(self) -> str:
        return _STORE_KEYS[self]

_STORE_KEYS = {
    Layout.FLAT: "tasks",
    Layout.PROJECTS: "projects",
    Layout.SECTIONS: "projects_data",
}

_SCHEMAS = {
    Layout.PROJECTS: PROJECTS_SCHEMA,
    Layout.SECTIONS: SECTIONS_SCHEMA,
}

_PROJECT_LIST = TypeAdapter(List[Project])

def _project_layout(layout: Union[Layout, str]) -> Layout:
    layout = Layout(layout)
    if layout == Layout.FLAT:
        raise ValueError("The flat layout stores tasks, not projects")
    return layout

def _parse_json(text: str):
    try:
        return json.loads(text)
    except (ValueError, TypeError) as e:
        raise DecodeError(f"Stored text is not valid JSON: {e}") from e
    except RecursionError as e:
        raise DecodeError("Stored text is nested too deeply to decode") from e

def encode(projects: Sequence[Project], layout: Union[Layout, str] = Layout.SECTIONS) -> str:
    """Encode projects as JSON text, writing only the layout's nested collection."""
    layout = _project_layout(layout)
    if layout == Layout.SECTIONS:
        dropped, kept = "tasks", "sections"
    else:
        dropped, kept = "sections", "tasks"

    records = []
    for project in projects:
        if getattr(project, dropped):
            raise ValueError(f"Project {project.id} holds {dropped}, which the {layout.value} layout cannot store")
        records.append(project.model_dump(mode="json", by_alias=True, exclude={dropped}))
    log.debug(f"Encoded {len(records)} project(s) with {kept}")
    return json.dumps(records, ensure_ascii=False)

def decode(text: str, layout: Union[Layout, str] = Layout.SECTIONS) -> List[Project]:
    """
    Decode JSON text back into projects.

    Raises:
        DecodeError: If the text is malformed or the records have the wrong shape.
    """
    layout = _project_layout(layout)
    data = _parse_json(text)
    validate_records(data, _SCHEMAS[layout])
    try:
        return _PROJECT_LIST.validate_python(data)
    except ModelValidationError as e:
        raise DecodeError(f"Stored projects are invalid: {e}") from e

def encode_task(task: Task) -> str:
    return json.dumps(task.model_dump(mode="json", by_alias=True), ensure_ascii=False)

def decode_task(text: str) -> Task:
    data = _parse_json(text)
    validate_records(data, TASK_SCHEMA)
    try:
        return Task.model_validate(data)
    except ModelValidationError as e:
        raise DecodeError(f"Stored task is invalid: {e}") from e

def encode_task_list(tasks: Sequence[Task]) -> List[str]:
    return [encode_task(task) for task in tasks]

def decode_task_list(items: Sequence[str]) -> List[Task]:
    """Decode the flat layout; a broken entry is skipped, the rest survive."""
    tasks = []
    seen = set()
    for item in items:
        try:
            task = decode_task(item)
        except DecodeError as e:
            log.warning(f"Skipping unreadable task record: {e}")
            continue
        if task.id in seen:
            log.warning(f"Skipping task with duplicate id {task.id}")
            continue
        seen.add(task.id)
        tasks.append(task)
    return tasks
