from typing import Any, Optional

from logging_config import get_logger
from registry import RoomRegistry
from schemas.messages import SignalMessage
from session import Role

logger = get_logger(__name__)


class SignalRouter:
    """Forwards opaque signal payloads between the two members of a room."""

    def __init__(self, registry: RoomRegistry):
        self.registry = registry

    def relay(self, room_code: Optional[str], sender_role: Role, sender_session_id: str, payload: Any) -> bool:
        """Deliver ``payload`` to the sender's peer at most once.

        Returns False when nothing was delivered: no such room, the sender is no
        longer a member of it, or the peer is absent or not live. The sender is
        never told either way.
        """
        room = self.registry.get_room(room_code) if room_code else None
        if room is None:
            logger.debug(f"Dropping signal from {sender_session_id}: room {room_code} not open")
            return False

        member = room.host_session if sender_role is Role.HOST else room.client_session
        if member is None or member.session_id != sender_session_id:
            logger.debug(f"Dropping signal from {sender_session_id}: not the {sender_role.value} of room {room_code}")
            return False

        peer = self.registry.get_peer(room_code, sender_role)
        if peer is None:
            logger.debug(f"Dropping signal from {sender_session_id} in room {room_code}: peer unavailable")
            return False

        return peer.send(SignalMessage(sender=sender_session_id, signal=payload))
