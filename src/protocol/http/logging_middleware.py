from __future__ import annotations

import logging
import re
import time
import uuid
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "x-request-id"

_GAME_PATH = re.compile(r"^/api/games/([0-9a-f]+)(?:/|$)")


def _game_id(path: str) -> Optional[str]:
    m = _GAME_PATH.match(path)
    return m.group(1) if m else None


class RequestIDLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ID and log it together with the game it touches.

    A caller-supplied ``x-request-id`` is kept so that a UI can correlate its
    own logs; otherwise a fresh one is generated. The ID is echoed back in the
    response header and stored on ``request.state`` for the error handlers.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        start = time.perf_counter()
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        path = request.url.path
        context = {"request_id": request_id, "game_id": _game_id(path)}

        logger.info("request", extra={**context, "method": request.method, "path": path})

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        duration_ms = int((time.perf_counter() - start) * 1000)

        level = logging.WARNING if response.status_code >= 400 else logging.INFO
        logger.log(
            level,
            "response",
            extra={**context, "status_code": response.status_code, "duration_ms": duration_ms},
        )
        return response
