from logging_config import get_logger
from registry import RoomRegistry
from schemas.messages import ClientDisconnectedMessage, HostDisconnectedMessage
from session import DeviceSession, Role, SessionState

logger = get_logger(__name__)


class SessionSupervisor:
    """Reconciles the registry and notifies the surviving peer when a connection ends."""

    def __init__(self, registry: RoomRegistry):
        self.registry = registry

    def on_disconnect(self, session: DeviceSession):
        if session.state is SessionState.TERMINATED:
            return
        session.terminate()

        role, room_code = session.role, session.room_code
        if role is Role.UNASSIGNED:
            logger.info(f"Session {session.session_id} closed before creating or joining a room")
            return

        room = self.registry.get_room(room_code)
        if room is None:
            logger.info(f"Session {session.session_id} closed, room {room_code} already gone")
            return

        if role is Role.HOST:
            if room.host_session is not session:
                return
            if room.client_session is not None:
                room.client_session.send(HostDisconnectedMessage())
            self.registry.remove_host(room_code)
            logger.info(f"Host {session.session_id} disconnected, room {room_code} closed")
        elif role is Role.CLIENT:
            if room.client_session is not session:
                return
            room.host_session.send(ClientDisconnectedMessage())
            self.registry.remove_client(room_code)
            room.host_session.mark_unpaired()
            logger.info(f"Client {session.session_id} disconnected from room {room_code}")
