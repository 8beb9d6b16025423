from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role carried by a User; drives the capability checks."""

    USER = "User"
    MANAGER = "Manager"


class RequestStatus(str, Enum):
    """Lifecycle of a telework request. Pending is the only non-terminal state."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
