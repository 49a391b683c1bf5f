from pydantic import BaseModel


class RoomDetailsResponse(BaseModel):
    room_id: str
    created_at: str
    has_client: bool
    client_url: str
