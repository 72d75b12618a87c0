# api/server.py
from __future__ import annotations

import argparse
import asyncio
import logging
from functools import partial
from typing import Optional

from aiohttp import web

from api.holders import holders_response
from common.logging_setup import setup_logging
from common.settings import Settings, get_settings

logger = logging.getLogger(__name__)

SETTINGS_KEY = web.AppKey("settings", Settings)


async def handle_holders(request: web.Request) -> web.Response:
    q = request.query
    st = request.app[SETTINGS_KEY]
    loop = asyncio.get_running_loop()
    # aggregation is blocking (requests), keep it off the event loop
    status, body = await loop.run_in_executor(
        None,
        partial(holders_response, q.get("mint"), q.get("limit"), q.get("rpc"), st),
    )
    return web.json_response(body, status=status)


def create_app(settings: Optional[Settings] = None) -> web.Application:
    app = web.Application()
    app[SETTINGS_KEY] = settings or get_settings()
    app.router.add_get("/api/holders", handle_holders)
    return app


def main():
    st = get_settings()
    p = argparse.ArgumentParser(description="Top holders HTTP API")
    p.add_argument("--host", default=st.server.host, help="Bind address")
    p.add_argument("--port", type=int, default=st.server.port, help="Bind port")
    args = p.parse_args()

    setup_logging()
    logger.info("serving /api/holders on %s:%s (default rpc %s)", args.host, args.port, st.rpc.url)
    web.run_app(create_app(st), host=args.host, port=args.port, print=None)


if __name__ == "__main__":
    main()
