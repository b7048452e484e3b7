"""
Data management submodule: codec, local store and persistence gateway.
"""

from .codec import Layout, encode, decode, encode_task_list, decode_task_list
from .store import KeyValueStore, MemoryStore, FileStore
from .gateway import PersistenceGateway, GatewayState

__all__ = [
    'Layout',
    'encode',
    'decode',
    'encode_task_list',
    'decode_task_list',
    'KeyValueStore',
    'MemoryStore',
    'FileStore',
    'PersistenceGateway',
    'GatewayState',
]
