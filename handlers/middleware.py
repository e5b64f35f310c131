# handlers/middleware.py
from __future__ import annotations

import logging

from aiohttp import web

from errors import ContentError, Forbidden, NotFound, StoreError, ValidationError

CALLER_ID = "caller_id"          # request[CALLER_ID] -> int
PUBLIC_PATHS = {"/health"}

# ───── Erreurs métier -> statut HTTP
_STATUS = (
    (ValidationError, 400),
    (Forbidden,       403),
    (NotFound,        404),
    (StoreError,      500),
)


def error_response(status: int, message: str) -> web.Response:
    return web.json_response({"status": False, "error": message}, status=status)


@web.middleware
async def error_middleware(request: web.Request, handler):
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except ContentError as e:
        status = next((code for cls, code in _STATUS if isinstance(e, cls)), 500)
        if status == 500:
            # détail déjà loggé par le Store ; rien d'interne vers le client
            return error_response(500, "Server error")
        return error_response(status, e.message)
    except Exception:
        logging.exception("Unhandled error on %s %s", request.method, request.path)
        return error_response(500, "Server error")


def identity_middleware(header: str = "X-User-Id"):
    """
    Le fournisseur d'identité (proxy, couche session) pose l'id utilisateur
    dans un header ; on le prend tel quel, converti en int.
    """

    @web.middleware
    async def middleware(request: web.Request, handler):
        if request.path in PUBLIC_PATHS:
            return await handler(request)

        raw = (request.headers.get(header) or "").strip()
        try:
            request[CALLER_ID] = int(raw)
        except ValueError:
            logging.info("Rejected %s %s: missing or invalid %s", request.method, request.path, header)
            return error_response(401, "Unauthorized")
        return await handler(request)

    return middleware
