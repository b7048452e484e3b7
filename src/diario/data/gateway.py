"""
PersistenceGateway - the single reader and writer of the stored entity tree.

Loading never fails: a missing key and an unreadable value both yield an
empty tree, and the gateway ends up READY either way.
"""
from enum import Enum
from typing import List, Sequence, Union

from diario.logs import get_logger
from diario.models import Project, Task
from diario.recovery import CorruptionError
from .codec import Layout, decode, decode_task_list, encode, encode_task_list
from .store import KeyValueStore

log = get_logger("data.gateway")

class GatewayState(Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"

class PersistenceGateway:
    """Reads and writes the whole tree under the layout's store key."""

    def __init__(self, store: KeyValueStore, layout: Union[Layout, str] = Layout.SECTIONS):
        self.store = store
        self.layout = Layout(layout)
        self.state = GatewayState.UNINITIALIZED

    @property
    def key(self) -> str:
        return self.layout.store_key

    @property
    def is_ready(self) -> bool:
        return self.state == GatewayState.READY

    def load(self) -> List[Union[Project, Task]]:
        """Load the stored tree; absent or corrupt data gives an empty list."""
        self.state = GatewayState.LOADING
        try:
            items = self._decode_stored()
        except CorruptionError as e:
            log.error(f"Discarding unreadable data under '{self.key}': {e}")
            items = []
        except Exception:
            self.state = GatewayState.UNINITIALIZED
            raise
        self.state = GatewayState.READY
        log.info(f"Loaded {len(items)} item(s) from '{self.key}'")
        return items

    def _decode_stored(self) -> List[Union[Project, Task]]:
        value = self.store.get(self.key)
        if not value:
            return []

        if self.layout == Layout.FLAT:
            if not isinstance(value, list):
                raise CorruptionError(f"Expected a list of task records under '{self.key}'")
            return decode_task_list(value)

        if not isinstance(value, str):
            raise CorruptionError(f"Expected project text under '{self.key}'")
        return decode(value, self.layout)

    def save(self, items: Sequence[Union[Project, Task]]) -> None:
        """Overwrite the stored tree with items."""
        if self.layout == Layout.FLAT:
            self.store.set(self.key, encode_task_list(items))
        else:
            self.store.set(self.key, encode(items, self.layout))
        log.debug(f"Saved {len(items)} item(s) under '{self.key}'")

    def clear(self) -> None:
        """Remove the stored tree entirely."""
        self.store.remove(self.key)
        log.info(f"Cleared '{self.key}'")
