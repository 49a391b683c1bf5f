"""Wire protocol between devices and the relay.

Inbound frames are parsed once, at the connection boundary, into one variant of
the closed ``InboundMessage`` union. Anything that does not fit becomes an
``Unrecognized`` value so the dispatcher can log and ignore it.
"""
import json
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class ProtocolMessage(BaseModel):
    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


# device -> server

class CreateRoomRequest(ProtocolMessage):
    type: Literal["create-room"]


class JoinRoomRequest(ProtocolMessage):
    type: Literal["join-room"]
    # Any value is accepted; codes that are not open rooms are answered with room-not-found
    room_id: Any = Field(None, alias="roomId")


class SignalRequest(ProtocolMessage):
    type: Literal["signal"]
    # Opaque negotiation payload, never inspected
    signal: Any = None


InboundMessage = Annotated[
    Union[CreateRoomRequest, JoinRoomRequest, SignalRequest],
    Field(discriminator="type"),
]

INBOUND_TYPES = frozenset({"create-room", "join-room", "signal"})


class Unrecognized(BaseModel):
    """Input that is not valid JSON, not a JSON object, or of an unknown type."""
    type: Optional[str] = None
    reason: str
    malformed: bool = True


# server -> device

class OutboundMessage(ProtocolMessage):
    model_config = ConfigDict(populate_by_name=True)


class ConnectionConfirmedMessage(OutboundMessage):
    type: Literal["connection-confirmed"] = "connection-confirmed"
    message: str = "Connected, waiting for further instructions"


class RoomCreatedMessage(OutboundMessage):
    type: Literal["room-created"] = "room-created"
    room_id: str = Field(alias="roomId")
    client_url: str = Field(alias="clientUrl")


class JoinedRoomMessage(OutboundMessage):
    type: Literal["joined-room"] = "joined-room"
    room_id: str = Field(alias="roomId")


class RoomFullMessage(OutboundMessage):
    type: Literal["room-full"] = "room-full"


class RoomNotFoundMessage(OutboundMessage):
    type: Literal["room-not-found"] = "room-not-found"


class ClientJoinedMessage(OutboundMessage):
    type: Literal["client-joined"] = "client-joined"
    client_id: str = Field(alias="clientId")


class SignalMessage(OutboundMessage):
    type: Literal["signal"] = "signal"
    sender: str = Field(alias="from")
    signal: Any


class HostDisconnectedMessage(OutboundMessage):
    type: Literal["host-disconnected"] = "host-disconnected"


class ClientDisconnectedMessage(OutboundMessage):
    type: Literal["client-disconnected"] = "client-disconnected"


_inbound_adapter = TypeAdapter(InboundMessage)


def parse_message(raw: Union[str, bytes]) -> Union[CreateRoomRequest, JoinRoomRequest, SignalRequest, Unrecognized]:
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as e:
        return Unrecognized(reason=f"invalid JSON: {e}")

    if not isinstance(data, dict):
        return Unrecognized(reason="message is not a JSON object")

    message_type = data.get("type")
    if not isinstance(message_type, str) or message_type not in INBOUND_TYPES:
        return Unrecognized(
            type=message_type if isinstance(message_type, str) else None,
            reason="unknown message type",
            malformed=False,
        )

    return _inbound_adapter.validate_python(data)
