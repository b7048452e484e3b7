import json
from functools import lru_cache
from importlib.resources import files
from typing import Any

from jsonschema import validate, ValidationError, SchemaError

from diario.logs import get_logger
from diario.recovery import DecodeError, FatalError

log = get_logger("data.validate")

TASK_SCHEMA = "task.schema.json"
PROJECTS_SCHEMA = "projects.schema.json"
SECTIONS_SCHEMA = "sections.schema.json"

@lru_cache(maxsize=None)
def load_schema(schema_name: str) -> dict:
    """
    Loads one of the JSON schemas bundled with the package.

    Args:
        schema_name: The name of the schema file (e.g., 'sections.schema.json').

    Returns:
        A dictionary representing the loaded JSON schema.

    Raises:
        FatalError: If the schema file is missing or is not valid JSON.
    """
    resource = files("diario") / "schemas" / schema_name
    log.debug(f"Loading schema: {schema_name}")
    try:
        return json.loads(resource.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise FatalError(f"Schema file not found: {schema_name}") from e
    except json.JSONDecodeError as e:
        raise FatalError(f"Schema file {schema_name} is not valid JSON: {e}") from e

def validate_records(data: Any, schema_name: str) -> None:
    """
    Validates decoded store records against a bundled schema.

    Raises:
        DecodeError: If the records do not match the expected shape.
        FatalError: If the schema itself is broken.
    """
    schema = load_schema(schema_name)
    try:
        validate(instance=data, schema=schema)
    except ValidationError as e:
        log.error(f"Records FAILED validation against '{schema_name}': {e.message}")
        raise DecodeError(f"Records do not match {schema_name}: {e.message}") from e
    except SchemaError as e:
        log.critical(f"The schema '{schema_name}' is invalid: {e.message}")
        raise FatalError(f"Invalid schema {schema_name}: {e.message}") from e
    log.debug(f"Records are VALID for '{schema_name}'.")
