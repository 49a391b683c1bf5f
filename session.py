from enum import Enum
from typing import Optional, Protocol

from errors import InvalidTransition
from logging_config import get_logger
from schemas.messages import ProtocolMessage

logger = get_logger(__name__)


class Role(str, Enum):
    UNASSIGNED = "unassigned"
    HOST = "host"
    CLIENT = "client"


class SessionState(str, Enum):
    CONNECTED = "connected"
    ROLE_ASSIGNED = "role-assigned"
    PAIRED = "paired"
    TERMINATED = "terminated"


class Connection(Protocol):
    """Outbound half of a device connection. ``send`` must not block."""

    @property
    def is_live(self) -> bool: ...

    def send(self, message: dict) -> None: ...


class DeviceSession:
    """Per-connection state: identity, role, room and lifecycle state.

    Role and room are assigned together, exactly once. Rooms hold references to
    sessions but never own them; a session stops being live as soon as it is
    terminated or its connection goes away.
    """

    def __init__(self, session_id: str, connection: Connection, origin: str = ""):
        self.session_id = session_id
        self.connection = connection
        self.origin = origin
        self.state = SessionState.CONNECTED
        self._role = Role.UNASSIGNED
        self._room_code: Optional[str] = None

    def __repr__(self):
        return f"DeviceSession({self.session_id!r}, role={self._role.value}, state={self.state.value})"

    @property
    def role(self) -> Role:
        return self._role

    @property
    def room_code(self) -> Optional[str]:
        return self._room_code

    @property
    def is_live(self) -> bool:
        return self.state is not SessionState.TERMINATED and self.connection.is_live

    def send(self, message: ProtocolMessage) -> bool:
        """Best-effort delivery. Returns False when the connection is gone."""
        if not self.is_live:
            logger.debug(f"Skipping {message.type} for session {self.session_id}: connection not live")
            return False
        self.connection.send(message.to_wire())
        logger.debug(f"Queued {message.type} for session {self.session_id}")
        return True

    def assign_role(self, role: Role, room_code: str):
        if self.state is not SessionState.CONNECTED:
            raise InvalidTransition(self.session_id, self.state.value, f"assign {role.value}")
        if role is Role.UNASSIGNED:
            raise ValueError("cannot assign the unassigned role")
        self._role = role
        self._room_code = room_code
        self.state = SessionState.ROLE_ASSIGNED
        logger.info(f"Session {self.session_id} is now {role.value} of room {room_code}")

    def mark_paired(self):
        if self.state not in (SessionState.ROLE_ASSIGNED, SessionState.PAIRED):
            raise InvalidTransition(self.session_id, self.state.value, "pair")
        self.state = SessionState.PAIRED

    def mark_unpaired(self):
        # Host goes back to waiting once its client leaves
        if self.state is SessionState.PAIRED:
            self.state = SessionState.ROLE_ASSIGNED

    def terminate(self):
        self.state = SessionState.TERMINATED
