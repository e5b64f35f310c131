# database/database.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from errors import StoreError

# 1. Créer Base tout de suite
Base = declarative_base()


def _sqlite_foreign_keys(dbapi_conn, _record) -> None:
    # SQLite n'applique les FK que si on le demande, connexion par connexion
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA foreign_keys = ON")
    cur.close()


class Store:
    """
    Adaptateur relationnel : engine + pool, sessions et transactions scopées.

    Une instance est construite explicitement (server.py, create_db.py, tests)
    puis passée au repository ; aucun engine global.
    """

    def __init__(self, url: str, echo: bool = False, pool_size: int | None = None,
                 max_overflow: int | None = None):
        kwargs = {}
        if not url.startswith("sqlite"):
            if pool_size is not None:
                kwargs["pool_size"] = pool_size
            if max_overflow is not None:
                kwargs["max_overflow"] = max_overflow

        # 2. Construire l'engine + session
        self.engine = create_async_engine(url, echo=echo, **kwargs)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _sqlite_foreign_keys)
        self.async_session = sessionmaker(self.engine, expire_on_commit=False, class_=AsyncSession)

    # ───────────────────────────────  SESSION  ────────────────────────────────
    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Session en lecture ; la connexion retourne au pool à la sortie."""
        try:
            async with self.async_session() as ses:
                yield ses
        except (SQLAlchemyError, OSError) as e:
            logging.exception("Store read failed: %s", e)
            raise StoreError() from e

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """
        Une transaction : commit si le bloc se termine, rollback sinon.

        Le rollback a toujours lieu avant que l'erreur ne remonte ; les erreurs
        SQLAlchemy deviennent des StoreError, les autres passent telles quelles.
        """
        try:
            async with self.async_session() as ses:
                async with ses.begin():
                    yield ses
        except (SQLAlchemyError, OSError) as e:
            logging.exception("Store transaction rolled back: %s", e)
            raise StoreError() from e

    async def init_db(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        await self.engine.dispose()


# 3. Importer les modèles APRÈS (ils verront déjà Base)
from database import user, post, comment   # noqa: E402,F401
