"""Talk API routes, including the long-polling change feed."""

import json
from typing import TypeVar

from fastapi import APIRouter, Query, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, StrictStr, ValidationError

from ...app import IApplication
from ...errors import BadRequest, MalformedPayload
from ...logging_config import get_logger

logger = get_logger(__name__)


class TalkPayload(BaseModel):
    """Request body for creating or replacing a talk."""

    presenter: StrictStr
    summary: StrictStr


class CommentPayload(BaseModel):
    """Request body for adding a comment."""

    author: StrictStr
    message: StrictStr


PayloadT = TypeVar("PayloadT", bound=BaseModel)


async def read_payload(request: Request, model: type[PayloadT], kind: str) -> PayloadT:
    """Decode a JSON request body and validate it against `model`."""
    body = await request.body()
    try:
        data = json.loads(body)
    except ValueError as e:
        raise MalformedPayload(str(e)) from e

    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.warning(
            "Rejected %s payload", kind, extra={"context": {"errors": e.errors()}}
        )
        raise BadRequest(f"Bad {kind} data") from None


def create_talks_router(app: IApplication) -> APIRouter:
    """Create talks router."""
    router = APIRouter(tags=["talks"])

    @router.get("/talks")
    async def list_talks(
        changes_since: str | None = Query(
            None,
            alias="changesSince",
            description="Server time (epoch ms) of the last known state",
        ),
    ) -> JSONResponse:
        """List all talks, or long-poll for changes since a server time."""
        change_set = await app.board.query_changes(changes_since)
        return JSONResponse(change_set.to_dict())

    @router.get("/talks/{title}")
    async def get_talk(title: str) -> JSONResponse:
        """Get a single talk."""
        return JSONResponse(app.board.get_talk(title).to_dict())

    @router.put("/talks/{title}", status_code=204)
    async def put_talk(title: str, request: Request) -> Response:
        """Create or replace a talk."""
        payload = await read_payload(request, TalkPayload, "talk")
        app.board.put_talk(title, payload.presenter, payload.summary)
        return Response(status_code=204)

    @router.delete("/talks/{title}", status_code=204)
    async def delete_talk(title: str) -> Response:
        """Delete a talk. Succeeds whether or not it existed."""
        app.board.remove_talk(title)
        return Response(status_code=204)

    @router.post("/talks/{title}/comments", status_code=204)
    async def add_comment(title: str, request: Request) -> Response:
        """Add a comment to a talk."""
        payload = await read_payload(request, CommentPayload, "comment")
        app.board.append_comment(title, payload.author, payload.message)
        return Response(status_code=204)

    return router
