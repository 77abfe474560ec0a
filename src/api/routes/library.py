"""Folder and tag endpoints for organising stored notes."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from src.api.models import Folder, FolderCreate, Tag, TagCreate
from src.notes.storage import (
    DEFAULT_FOLDER_COLOR,
    DEFAULT_TAG_COLOR,
    create_folder,
    create_tag,
    get_supabase_client,
    list_folders,
    list_tags,
)

router = APIRouter()


def _label_fields(row: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": str(row["id"]),
        "name": row["name"],
        "color": row.get("color") or "",
        "user_id": row.get("user_id"),
        "created_at": row.get("created_at"),
    }


@router.get("/api/folders", response_model=list[Folder])
async def list_all_folders(user_id: str | None = None) -> list[Folder]:
    """List folders, newest first."""
    client = get_supabase_client()
    return [Folder(**_label_fields(row)) for row in list_folders(client, user_id=user_id)]


@router.post("/api/folders", response_model=Folder, status_code=201)
async def create_one_folder(request: FolderCreate) -> Folder:
    client = get_supabase_client()
    row = create_folder(
        client, request.name, user_id=request.user_id, color=request.color or DEFAULT_FOLDER_COLOR
    )
    return Folder(**_label_fields(row))


@router.get("/api/tags", response_model=list[Tag])
async def list_all_tags(user_id: str | None = None) -> list[Tag]:
    """List tags, newest first."""
    client = get_supabase_client()
    return [Tag(**_label_fields(row)) for row in list_tags(client, user_id=user_id)]


@router.post("/api/tags", response_model=Tag, status_code=201)
async def create_one_tag(request: TagCreate) -> Tag:
    client = get_supabase_client()
    row = create_tag(
        client, request.name, user_id=request.user_id, color=request.color or DEFAULT_TAG_COLOR
    )
    return Tag(**_label_fields(row))
