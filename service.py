from typing import Dict, Optional, Union

from errors import RoomCodeExhausted, RoomFull, RoomNotFound
from ids import IdGenerator, generate_session_id
from logging_config import get_logger
from registry import RoomRegistry
from schemas.messages import (
    ClientJoinedMessage,
    ConnectionConfirmedMessage,
    CreateRoomRequest,
    JoinedRoomMessage,
    JoinRoomRequest,
    RoomCreatedMessage,
    RoomFullMessage,
    RoomNotFoundMessage,
    SignalRequest,
    Unrecognized,
    parse_message,
)
from session import Connection, DeviceSession, Role, SessionState
from signal_router import SignalRouter
from supervisor import SessionSupervisor

logger = get_logger(__name__)


class SignalingService:
    """Pairs hosts with clients and relays their signals.

    Every method runs to completion without awaiting, so as long as all calls
    come from one event loop no two events interleave on the shared registry.
    """

    def __init__(
        self,
        registry: Optional[RoomRegistry] = None,
        session_id_generator: IdGenerator = generate_session_id,
        public_origin: Optional[str] = None,
    ):
        self.registry = registry if registry is not None else RoomRegistry()
        self.router = SignalRouter(self.registry)
        self.supervisor = SessionSupervisor(self.registry)
        self.session_id_generator = session_id_generator
        self.public_origin = public_origin.rstrip('/') if public_origin else None
        self.sessions: Dict[str, DeviceSession] = {}

    def client_url(self, session: DeviceSession, room_code: str) -> str:
        origin = self.public_origin or session.origin.rstrip('/')
        return f"{origin}/client?room={room_code}"

    def connect(self, connection: Connection, origin: str = "") -> DeviceSession:
        session_id = self.session_id_generator()
        while session_id in self.sessions:
            session_id = self.session_id_generator()

        session = DeviceSession(session_id, connection, origin=origin)
        self.sessions[session_id] = session
        logger.info(f"Session {session_id} connected ({len(self.sessions)} active)")
        session.send(ConnectionConfirmedMessage())
        return session

    def disconnect(self, session: DeviceSession):
        self.sessions.pop(session.session_id, None)
        self.supervisor.on_disconnect(session)
        logger.info(f"Session {session.session_id} terminated ({len(self.sessions)} active)")

    def handle_raw(self, session: DeviceSession, raw: Union[str, bytes]):
        try:
            self.handle(session, parse_message(raw))
        except Exception as e:
            # One bad message must not take the connection down
            logger.error(f"Error handling message from session {session.session_id}: {e}", exc_info=True)

    def handle(self, session: DeviceSession, message):
        if session.state is SessionState.TERMINATED:
            logger.debug(f"Ignoring message for terminated session {session.session_id}")
            return

        if isinstance(message, CreateRoomRequest):
            self._on_create_room(session)
        elif isinstance(message, JoinRoomRequest):
            self._on_join_room(session, message.room_id)
        elif isinstance(message, SignalRequest):
            self._on_signal(session, message.signal)
        elif isinstance(message, Unrecognized):
            if message.malformed:
                logger.warning(f"Ignoring malformed message from session {session.session_id}: {message.reason}")
            else:
                logger.warning(f"Ignoring unknown message type {message.type!r} from session {session.session_id}")
        else:
            raise TypeError(f"unexpected message {message!r}")

    def _on_create_room(self, session: DeviceSession):
        if session.state is not SessionState.CONNECTED:
            logger.warning(f"Session {session.session_id} sent create-room as {session.role.value}, ignoring")
            return

        try:
            room_code = self.registry.create_room(session)
        except RoomCodeExhausted as e:
            logger.error(f"Room creation failed for session {session.session_id}: {e}")
            return

        session.assign_role(Role.HOST, room_code)
        client_url = self.client_url(session, room_code)
        session.send(RoomCreatedMessage(room_id=room_code, client_url=client_url))
        logger.info(f"Room {room_code} created, client URL: {client_url}")

    def _on_join_room(self, session: DeviceSession, room_code):
        logger.info(f"Join request for room {room_code} from session {session.session_id}")
        if session.state is not SessionState.CONNECTED:
            logger.warning(f"Session {session.session_id} sent join-room as {session.role.value}, ignoring")
            return

        try:
            room = self.registry.join_room(room_code, session)
        except RoomNotFound:
            session.send(RoomNotFoundMessage())
            return
        except RoomFull:
            session.send(RoomFullMessage())
            return

        session.assign_role(Role.CLIENT, room_code)
        session.mark_paired()
        session.send(JoinedRoomMessage(room_id=room_code))

        host = room.host_session
        if host.send(ClientJoinedMessage(client_id=session.session_id)):
            host.mark_paired()

    def _on_signal(self, session: DeviceSession, payload):
        if session.role is Role.UNASSIGNED:
            logger.debug(f"Dropping signal from session {session.session_id}: no room yet")
            return
        self.router.relay(session.room_code, session.role, session.session_id, payload)
