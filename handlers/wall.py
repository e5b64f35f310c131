# handlers/wall.py
from __future__ import annotations

from aiohttp import web

from errors import ValidationError
from handlers.middleware import CALLER_ID
from services.content import ContentService

SERVICE_KEY = web.AppKey("service", ContentService)

wall_routes = web.RouteTableDef()


# ───── Helpers
def ok(result=None, status: int = 200) -> web.Response:
    if isinstance(result, list):
        result = [item.model_dump(mode="json") for item in result]
    elif result is not None:
        result = result.model_dump(mode="json")
    return web.json_response({"status": True, "result": result}, status=status)


def path_id(request: web.Request, name: str, label: str) -> int:
    try:
        value = int(request.match_info[name])
    except ValueError:
        raise ValidationError(f"Invalid {label} ID")
    if value <= 0:
        raise ValidationError(f"Invalid {label} ID")
    return value


async def read_content(request: web.Request):
    """`content` depuis un body JSON ou un formulaire urlencoded."""
    if request.content_type == "application/json":
        try:
            data = await request.json()
        except ValueError:
            # JSON invalide ou octets non UTF-8
            raise ValidationError("Invalid JSON body")
    else:
        data = await request.post()
    if not hasattr(data, "get"):
        raise ValidationError("Invalid body")
    return data.get("content")


def service(request: web.Request) -> ContentService:
    return request.app[SERVICE_KEY]


# ───── Wall
@wall_routes.get("/health")
async def health(request: web.Request):
    return web.json_response({"ok": True})


@wall_routes.get("/wall")
async def show_wall(request: web.Request):
    return ok(await service(request).list_wall())


# ───── Posts
@wall_routes.post("/posts")
async def create_post(request: web.Request):
    content = await read_content(request)
    post = await service(request).create_post(request[CALLER_ID], content)
    return ok(post, status=201)


@wall_routes.get("/posts/{id}")
async def get_post(request: web.Request):
    return ok(await service(request).get_post(path_id(request, "id", "post")))


@wall_routes.put("/posts/{id}")
async def update_post(request: web.Request):
    post_id = path_id(request, "id", "post")
    content = await read_content(request)
    return ok(await service(request).update_post(request[CALLER_ID], post_id, content))


@wall_routes.delete("/posts/{id}")
async def delete_post(request: web.Request):
    post_id = path_id(request, "id", "post")
    await service(request).delete_post(request[CALLER_ID], post_id)
    return ok()


# ───── Comments / replies
@wall_routes.post("/posts/{post_id}/comments")
async def create_comment(request: web.Request):
    post_id = path_id(request, "post_id", "post")
    content = await read_content(request)
    comment = await service(request).create_comment(request[CALLER_ID], post_id, content)
    return ok(comment, status=201)


@wall_routes.get("/comments/{id}")
async def get_comment(request: web.Request):
    return ok(await service(request).get_comment(path_id(request, "id", "comment")))


@wall_routes.put("/comments/{id}")
async def update_comment(request: web.Request):
    comment_id = path_id(request, "id", "comment")
    content = await read_content(request)
    return ok(await service(request).update_comment(request[CALLER_ID], comment_id, content))


@wall_routes.delete("/comments/{id}")
async def delete_comment(request: web.Request):
    comment_id = path_id(request, "id", "comment")
    await service(request).delete_comment(request[CALLER_ID], comment_id)
    return ok()


@wall_routes.post("/comments/{comment_id}/replies")
async def create_reply(request: web.Request):
    comment_id = path_id(request, "comment_id", "comment")
    content = await read_content(request)
    reply = await service(request).create_reply(request[CALLER_ID], comment_id, content)
    return ok(reply, status=201)
