from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Employee role stored on the directory record."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class PaymentStatus(str, Enum):
    """Collection lifecycle of a payment obligation."""

    PENDING = "Pending"
    COLLECTED = "Collected"
    OVERDUE = "Overdue"


class ConnectionState(str, Enum):
    """Connectivity of the database handle, reported by the health endpoint."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    DISCONNECTING = "disconnecting"


class DeletePolicy(str, Enum):
    """What happens to referencing records when a referenced record is deleted."""

    KEEP = "keep"
    RESTRICT = "restrict"
    CASCADE = "cascade"
