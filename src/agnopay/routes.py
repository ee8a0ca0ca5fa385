"""
FastAPI binding for :class:`agnopay.server.OrderRouteHandler`.

Install with the ``server`` extra::

    app.include_router(create_order_router(os.environ["AGNOPAY_SECRET_KEY"]), prefix="/api/agnopay")
"""

from __future__ import annotations

from typing import Optional

import requests
from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from .core.config import SDKConfig
from .server import create_order_route_handler

__all__ = ["create_order_router"]


def create_order_router(
    api_key: str,
    *,
    path: str = "/orders",
    config: Optional[SDKConfig] = None,
    session: Optional[requests.Session] = None,
) -> APIRouter:
    handler = create_order_route_handler(api_key, config=config, session=session)
    router = APIRouter(tags=["AgnoPay"])

    @router.post(path)
    async def create_order(request: Request) -> JSONResponse:
        body = await request.body()
        # The AgnoPay client is blocking.
        result = await run_in_threadpool(handler, body)
        return JSONResponse(result.body, status_code=result.status_code)

    return router
