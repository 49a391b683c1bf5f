import os
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import FileResponse
from logging_config import get_logger

logger = get_logger(__name__)

pages_router = APIRouter(tags=["pages"])


def _page(request: Request, filename: str) -> FileResponse:
    path = os.path.join(request.app.state.public_dir, filename)
    if not os.path.isfile(path):
        logger.warning(f"Page {filename} not found in {request.app.state.public_dir}")
        raise HTTPException(status_code=404, detail="Page not found")
    return FileResponse(path, media_type="text/html")


@pages_router.get("/")
async def host_page(request: Request):
    return _page(request, "index.html")


@pages_router.get("/client")
async def client_page(request: Request, room: Optional[str] = Query(None, description="Room code to join")):
    # The page itself reads the room code from the query string
    logger.debug(f"Client page requested for room {room}")
    return _page(request, "client.html")
