from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from constants import ROOM_CODE_MAX_ATTEMPTS
from errors import RoomCodeExhausted, RoomFull, RoomNotFound
from ids import IdGenerator, generate_room_code
from logging_config import get_logger
from session import DeviceSession, Role

logger = get_logger(__name__)


@dataclass
class Room:
    room_code: str
    host_session: DeviceSession
    client_session: Optional[DeviceSession] = None
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def has_client(self) -> bool:
        return self.client_session is not None


class RoomRegistry:
    """In-memory table of open rooms, keyed by room code.

    The registry is the only place rooms are created or destroyed, and it alone
    enforces code uniqueness and the one-client-per-room limit. It never sends
    anything; callers notify devices using what it returns.
    """

    def __init__(self, code_generator: IdGenerator = generate_room_code, max_attempts: int = ROOM_CODE_MAX_ATTEMPTS):
        self.code_generator = code_generator
        self.max_attempts = max_attempts
        self._rooms: Dict[str, Room] = {}
        logger.info("Initializing in-memory RoomRegistry")

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, room_code: str) -> bool:
        return room_code in self._rooms

    def create_room(self, host_session: DeviceSession) -> str:
        for attempt in range(1, self.max_attempts + 1):
            room_code = self.code_generator()
            if room_code not in self._rooms:
                break
            logger.warning(f"Room code collision on attempt {attempt}, regenerating")
        else:
            raise RoomCodeExhausted(self.max_attempts)

        self._rooms[room_code] = Room(room_code=room_code, host_session=host_session)
        logger.info(f"Room {room_code} created by host {host_session.session_id} ({len(self._rooms)} open)")
        return room_code

    def get_room(self, room_code: str) -> Optional[Room]:
        return self._rooms.get(room_code)

    def join_room(self, room_code: Any, client_session: DeviceSession) -> Room:
        room = self._rooms.get(room_code) if isinstance(room_code, str) else None
        if room is None:
            logger.info(f"Join failed: room {room_code} not found")
            raise RoomNotFound(room_code)
        if room.client_session is not None:
            logger.info(f"Join failed: room {room_code} already has client {room.client_session.session_id}")
            raise RoomFull(room_code)

        room.client_session = client_session
        logger.info(f"Client {client_session.session_id} joined room {room_code}")
        return room

    def get_peer(self, room_code: str, requesting_role: Role) -> Optional[DeviceSession]:
        room = self._rooms.get(room_code)
        if room is None:
            return None
        if requesting_role is Role.HOST:
            peer = room.client_session
        elif requesting_role is Role.CLIENT:
            peer = room.host_session
        else:
            return None
        if peer is None or not peer.is_live:
            return None
        return peer

    def remove_host(self, room_code: str) -> Optional[Room]:
        room = self._rooms.pop(room_code, None)
        if room is None:
            logger.debug(f"remove_host: room {room_code} already gone")
        else:
            logger.info(f"Room {room_code} removed ({len(self._rooms)} open)")
        return room

    def remove_client(self, room_code: str) -> Optional[DeviceSession]:
        room = self._rooms.get(room_code)
        if room is None:
            logger.debug(f"remove_client: room {room_code} already gone")
            return None
        client_session, room.client_session = room.client_session, None
        logger.info(f"Room {room_code} is open for a new client")
        return client_session
