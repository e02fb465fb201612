from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Worker:
    """Domain entity: a user who punches in and out.

    `location_id` is the primary location on the profile; historical bindings
    live in LocationAssignment rows.
    """

    user_id: int
    full_name: str
    email: str
    role: Role
    location_id: Optional[int]
    is_active: bool = True
