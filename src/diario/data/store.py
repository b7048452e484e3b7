import abc
from pathlib import Path
from typing import Dict, List, Optional, Union

from diario.logs import get_logger
from diario.recovery import CorruptionError
from .io import atomic_write, data_type_for, load_data_file

log = get_logger("data.store")

StoreValue = Union[str, List[str]]

class KeyValueStore(abc.ABC):
    """
    A local key-value store holding text or lists of text under string keys.

    Every write replaces the whole value stored under the key.
    """

    @abc.abstractmethod
    def get(self, key: str) -> Optional[StoreValue]:
        """Return the value stored under key, or None when there is none."""
        pass

    @abc.abstractmethod
    def set(self, key: str, value: StoreValue) -> None:
        pass

    @abc.abstractmethod
    def remove(self, key: str) -> None:
        """Remove key; removing a missing key does nothing."""
        pass

    def contains(self, key: str) -> bool:
        return self.get(key) is not None

    @staticmethod
    def _check_value(value: StoreValue) -> StoreValue:
        if isinstance(value, str):
            return value
        if isinstance(value, list) and all(isinstance(item, str) for item in value):
            return list(value)
        raise TypeError(f"Store values must be text or a list of text, got {type(value).__name__}")

class MemoryStore(KeyValueStore):
    """Dict-backed store; nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, StoreValue]] = None):
        self._data: Dict[str, StoreValue] = dict(initial or {})

    def get(self, key: str) -> Optional[StoreValue]:
        value = self._data.get(key)
        return list(value) if isinstance(value, list) else value

    def set(self, key: str, value: StoreValue) -> None:
        self._data[key] = self._check_value(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

class FileStore(KeyValueStore):
    """
    Store kept in a single YAML or JSON document on disk.

    The document is read on every access and rewritten atomically on every
    change, so each key is always read and written as a whole.
    """

    def __init__(self, path: Union[Path, str]):
        self.path = Path(path).expanduser()
        self.data_type = data_type_for(self.path)

    def _read(self) -> Dict[str, StoreValue]:
        return load_data_file(self.path) or {}

    def _write(self, data: Dict[str, StoreValue]) -> None:
        atomic_write(self.data_type, self.path, data, create_dirs=True)

    def get(self, key: str) -> Optional[StoreValue]:
        value = self._read().get(key)
        if value is None:
            return None
        try:
            return self._check_value(value)
        except TypeError as e:
            raise CorruptionError(f"Value under '{key}' in {self.path} is unreadable: {e}") from e

    def set(self, key: str, value: StoreValue) -> None:
        value = self._check_value(value)
        try:
            data = self._read()
        except CorruptionError as e:
            # Unreadable documents are replaced wholesale
            log.error(f"Overwriting unreadable store {self.path}: {e}")
            data = {}
        data[key] = value
        self._write(data)
        log.debug(f"Stored '{key}' in {self.path}")

    def remove(self, key: str) -> None:
        try:
            data = self._read()
        except CorruptionError as e:
            log.error(f"Resetting unreadable store {self.path}: {e}")
            self._write({})
            return
        if key not in data:
            return
        del data[key]
        self._write(data)
        log.debug(f"Removed '{key}' from {self.path}")
