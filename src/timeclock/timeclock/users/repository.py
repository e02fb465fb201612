from __future__ import annotations

from typing import Optional, Protocol

from .model import Worker


class WorkerRepository(Protocol):
    """Read-only access to workers; account CRUD lives outside this package."""

    def get_by_id(self, user_id: int) -> Optional[Worker]:
        raise NotImplementedError
