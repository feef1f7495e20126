from enum import Enum


class StorageBackend(str, Enum):
    """
    Backend for persisted session state (cart lines and favorite ids).

    MEMORY: Process-local dict, lost on restart (default for development)
    REDIS: Redis server, survives restarts and is shared between processes
    """
    MEMORY = "memory"
    REDIS = "redis"
