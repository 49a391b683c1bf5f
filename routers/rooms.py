from fastapi import APIRouter, HTTPException, Request
from schemas.rooms import RoomDetailsResponse
from logging_config import get_logger

logger = get_logger(__name__)

rooms_router = APIRouter(prefix="/rooms", tags=["rooms"])


@rooms_router.get("/{room_id}", response_model=RoomDetailsResponse)
async def get_room_details(room_id: str, request: Request):
    """
    Look up an open room without joining it.

    Returns:
    - room_id: Room code
    - created_at: Room creation timestamp
    - has_client: Whether a client is already paired (a join would fail with room-full)
    - client_url: URL a client opens to join the room
    """
    client_host = request.client.host if request.client else 'unknown'
    logger.info(f"Room details request for {room_id} from {client_host}")

    service = request.app.state.signaling
    room = service.registry.get_room(room_id)
    if not room:
        logger.warning(f"Room details failed: Room {room_id} not found")
        raise HTTPException(status_code=404, detail="Room not found")

    return RoomDetailsResponse(
        room_id=room.room_code,
        created_at=room.created_at,
        has_client=room.has_client,
        client_url=service.client_url(room.host_session, room.room_code),
    )
