from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from routers.pages import pages_router
from routers.rooms import rooms_router
from connection import WebSocketConnection
from service import SignalingService
from registry import RoomRegistry
from constants import LOG_FILE, LOG_LEVEL, PUBLIC_DIR, PUBLIC_ORIGIN
from typing import Optional
import asyncio
from logging_config import get_logger, setup_logging

# Setup logging
setup_logging(log_level=LOG_LEVEL, log_file=LOG_FILE)
logger = get_logger(__name__)


def websocket_origin(websocket: WebSocket) -> str:
    """HTTP origin the device connected through, e.g. ws://host:3000/ -> http://host:3000"""
    base_url = str(websocket.base_url).rstrip('/')
    return base_url.replace("ws://", "http://").replace("wss://", "https://")


async def websocket_endpoint(websocket: WebSocket):
    """One connection per device. Every inbound frame is handled to completion before the next await."""
    service: SignalingService = websocket.app.state.signaling
    client_host = websocket.client.host if websocket.client else "unknown"
    logger.info(f"New WebSocket connection from {client_host}")

    await websocket.accept()
    connection = WebSocketConnection(websocket, label=client_host)
    writer = asyncio.create_task(connection.pump())
    session = service.connect(connection, origin=websocket_origin(websocket))
    connection.label = session.session_id

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))

            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes")
            if raw is None:
                continue
            logger.debug(f"Received frame from session {session.session_id}")
            service.handle_raw(session, raw)
    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected for session {session.session_id}")
    except Exception as e:
        logger.error(f"WebSocket error for session {session.session_id}: {e}", exc_info=True)
    finally:
        connection.close()
        service.disconnect(session)
        writer.cancel()
        try:
            await writer
        except asyncio.CancelledError:
            pass


def create_app(service: Optional[SignalingService] = None, public_dir: str = PUBLIC_DIR) -> FastAPI:
    app = FastAPI()

    # Configure CORS to allow all origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.signaling = service if service is not None else SignalingService(
        registry=RoomRegistry(),
        public_origin=PUBLIC_ORIGIN,
    )
    app.state.public_dir = public_dir

    app.include_router(rooms_router)
    app.include_router(pages_router)

    # Devices may connect on the root path, as the page server and relay share one port
    app.add_api_websocket_route("/", websocket_endpoint)
    app.add_api_websocket_route("/ws", websocket_endpoint)

    logger.info("FastAPI application initialized")
    return app


app = create_app()
