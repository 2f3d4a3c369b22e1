"""API key routes."""

from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

router = APIRouter(tags=["keys"])


class KeyUpdate(BaseModel):
    """Request body for storing a user key."""

    key: str


def _key_status(request: Request) -> dict[str, Any]:
    credentials = request.app.state.credentials
    return {"configured": bool(credentials.active_key), "source": credentials.source}


@router.get("/key")
async def get_key_status(request: Request) -> dict[str, Any]:
    """Report whether a key is active and where it came from. Never returns the key."""
    return _key_status(request)


@router.put("/key")
async def put_key(request: Request, body: KeyUpdate) -> dict[str, Any]:
    if not request.app.state.credentials.save_user_key(body.key):
        raise HTTPException(status_code=400, detail="API key must not be empty")
    return _key_status(request)


@router.delete("/key")
async def delete_key(request: Request) -> dict[str, Any]:
    request.app.state.credentials.clear_user_key()
    return _key_status(request)
