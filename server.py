# server.py
from __future__ import annotations

import asyncio
import logging

from aiohttp import web

from config import (
    DB_PATH, DB_ECHO, POOL_SIZE, MAX_OVERFLOW,
    HOST, PORT, IDENTITY_HEADER, LOG_LEVEL,
)
from database.database import Store
from database.repository import ContentRepository
from handlers import error_middleware, identity_middleware, wall_routes, SERVICE_KEY
from services.content import ContentService

STORE_KEY = web.AppKey("store", Store)


# ───────────────────────────  Cycle de vie
async def _on_startup(app: web.Application):
    await app[STORE_KEY].init_db()
    logging.info("Store ready")


async def _on_cleanup(app: web.Application):
    await app[STORE_KEY].close()


def make_app(store: Store | None = None, identity_header: str = IDENTITY_HEADER) -> web.Application:
    """Assemble store -> repository -> service -> routes ; rien de global."""
    if store is None:
        store = Store(DB_PATH, echo=DB_ECHO, pool_size=POOL_SIZE, max_overflow=MAX_OVERFLOW)

    app = web.Application(middlewares=[error_middleware, identity_middleware(identity_header)])
    app[STORE_KEY] = store
    app[SERVICE_KEY] = ContentService(ContentRepository(store))
    app.add_routes(wall_routes)
    app.on_startup.append(_on_startup)
    app.on_cleanup.append(_on_cleanup)
    return app


# ───────────────────────────  Main
async def main():
    logging.basicConfig(level=LOG_LEVEL)

    runner = web.AppRunner(make_app())
    await runner.setup()
    site = web.TCPSite(runner, HOST, PORT)
    await site.start()
    logging.info("Wall API listening on %s:%s", HOST, PORT)

    try:
        await asyncio.Event().wait()
    finally:
        await runner.cleanup()


if __name__ == "__main__":
    asyncio.run(main())
