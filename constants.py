import os

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 3000))

# Origin used to build the client join URL. Derived from the websocket request when unset.
PUBLIC_ORIGIN = os.getenv("PUBLIC_ORIGIN", None)

ROOM_CODE_LENGTH = int(os.getenv("ROOM_CODE_LENGTH", 8))
ROOM_CODE_MAX_ATTEMPTS = int(os.getenv("ROOM_CODE_MAX_ATTEMPTS", 32))

PUBLIC_DIR = os.getenv("PUBLIC_DIR", "public")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", None)
