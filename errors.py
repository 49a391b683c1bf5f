class RelayError(Exception):
    """Base class for recoverable relay errors. None of them are fatal to the process."""


class RoomNotFound(RelayError):
    def __init__(self, room_code):
        super().__init__(f"Room {room_code!r} not found")
        self.room_code = room_code


class RoomFull(RelayError):
    def __init__(self, room_code: str):
        super().__init__(f"Room {room_code} already has a client")
        self.room_code = room_code


class RoomCodeExhausted(RelayError):
    def __init__(self, attempts: int):
        super().__init__(f"Could not generate a free room code after {attempts} attempts")
        self.attempts = attempts


class InvalidTransition(RelayError):
    def __init__(self, session_id: str, state: str, event: str):
        super().__init__(f"Session {session_id} cannot handle {event} in state {state}")
        self.session_id = session_id
        self.state = state
        self.event = event
