import random
import string
import uuid
from typing import Callable

from constants import ROOM_CODE_LENGTH

# Identifier generators are plain zero-argument callables so tests can inject fixed sequences
IdGenerator = Callable[[], str]

ROOM_CODE_ALPHABET = string.ascii_lowercase + string.digits

_random = random.SystemRandom()


def generate_room_code(length: int = ROOM_CODE_LENGTH) -> str:
    return ''.join(_random.choices(ROOM_CODE_ALPHABET, k=length))


def generate_session_id() -> str:
    return uuid.uuid4().hex
