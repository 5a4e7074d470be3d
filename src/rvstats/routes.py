from __future__ import annotations

import json
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse, RedirectResponse, Response
from nonebot.log import logger

from rvstats.store import SnapshotStore

STATIC_FILES: dict[str, str] = {
    "index.html": "text/html",
    "style.css": "text/css",
    "stats.js": "application/javascript",
}


def _error_response() -> Response:
    return PlainTextResponse("error", status_code=500)


def build_router(store: SnapshotStore, web_dir: Path) -> APIRouter:
    router = APIRouter()

    @router.get("/servers")
    async def servers() -> Response:
        snapshots = await store.snapshot()
        try:
            body = json.dumps([s.to_dict() for s in snapshots])
        except (TypeError, ValueError):
            logger.exception("Failed to encode {} server snapshots", len(snapshots))
            return _error_response()
        return Response(content=body, media_type="application/json")

    @router.get("/")
    async def index() -> Response:
        return RedirectResponse("/index.html")

    def _static_route(name: str, media_type: str) -> None:
        async def serve() -> Response:
            try:
                content = (web_dir / name).read_bytes()
            except OSError as exc:
                logger.warning("Read of static file {} failed: {}", name, exc)
                return _error_response()
            return Response(content=content, media_type=media_type)

        router.add_api_route(f"/{name}", serve, methods=["GET"], name=name)

    for name, media_type in STATIC_FILES.items():
        _static_route(name, media_type)

    return router
