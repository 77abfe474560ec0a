"""Supabase storage helpers for notes, folders and tags."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from supabase import Client, create_client

from src.config import settings
from src.errors import InvalidInputError

if TYPE_CHECKING:
    from src.notes.models import CombinedNotes

NOTES_TABLE = "notes"
FOLDERS_TABLE = "folders"
TAGS_TABLE = "tags"
NOTE_TAGS_TABLE = "note_tags"

DEFAULT_FOLDER_COLOR = "#c6ac8f"
DEFAULT_TAG_COLOR = "#8a7559"

# Columns a caller may change on a stored note
UPDATABLE_NOTE_FIELDS = frozenset({"title", "content", "folder_id", "is_favorite"})


def get_supabase_client() -> Client:
    """Create and return a Supabase client from settings."""
    return create_client(settings.supabase_url, settings.supabase_key)


def store_notes(
    client: Client,
    notes: CombinedNotes,
    user_id: str | None = None,
    folder_id: str | None = None,
    tag_ids: list[str] | None = None,
) -> str:
    """Store a combined note document and return the generated note ID."""
    result = (
        client.table(NOTES_TABLE)
        .insert(
            {
                "title": notes.title,
                "content": notes.to_dict(),
                "difficulty": notes.difficulty,
                "duration": notes.duration,
                "user_id": user_id,
                "folder_id": folder_id,
            }
        )
        .execute()
    )
    note_id = str(result.data[0]["id"])

    if tag_ids:
        add_note_tags(client, note_id, tag_ids)
    return note_id


def get_notes(client: Client, note_id: str) -> dict[str, Any] | None:
    """Fetch a stored note row by ID, or ``None`` if it does not exist."""
    result = client.table(NOTES_TABLE).select("*").eq("id", note_id).execute()
    rows = cast(list[dict[str, Any]], result.data)
    return rows[0] if rows else None


def list_notes(
    client: Client,
    user_id: str | None = None,
    folder_id: str | None = None,
) -> list[dict[str, Any]]:
    """List stored notes, newest first, optionally filtered by owner or folder."""
    query = client.table(NOTES_TABLE).select(
        "id, title, difficulty, duration, folder_id, is_favorite, created_at"
    )
    if user_id:
        query = query.eq("user_id", user_id)
    if folder_id:
        query = query.eq("folder_id", folder_id)
    result = query.order("created_at", desc=True).execute()
    return cast(list[dict[str, Any]], result.data)


def update_notes(
    client: Client,
    note_id: str,
    updates: dict[str, Any],
    user_id: str | None = None,
) -> dict[str, Any] | None:
    """Apply *updates* to a stored note and return the updated row.

    Returns ``None`` when no note matched (wrong ID or another owner).

    Raises:
        InvalidInputError: If *updates* is empty or names a column that cannot change.
    """
    if not updates:
        raise InvalidInputError("No fields to update")
    unknown = set(updates) - UPDATABLE_NOTE_FIELDS
    if unknown:
        raise InvalidInputError(f"Cannot update fields: {', '.join(sorted(unknown))}")

    query = client.table(NOTES_TABLE).update(updates).eq("id", note_id)
    if user_id:
        query = query.eq("user_id", user_id)
    rows = cast(list[dict[str, Any]], query.execute().data)
    return rows[0] if rows else None


def delete_notes(client: Client, note_id: str, user_id: str | None = None) -> bool:
    """Delete a stored note and return whether one was deleted.

    Tag links in ``note_tags`` are removed by the table's cascading foreign key.
    """
    query = client.table(NOTES_TABLE).delete().eq("id", note_id)
    if user_id:
        query = query.eq("user_id", user_id)
    return bool(query.execute().data)


def add_note_tags(client: Client, note_id: str, tag_ids: list[str]) -> None:
    """Link tags to a note."""
    rows = [{"note_id": note_id, "tag_id": tag_id} for tag_id in tag_ids]
    client.table(NOTE_TAGS_TABLE).insert(rows).execute()


def create_folder(
    client: Client,
    name: str,
    user_id: str | None = None,
    color: str = DEFAULT_FOLDER_COLOR,
) -> dict[str, Any]:
    """Create a folder and return the stored row."""
    result = (
        client.table(FOLDERS_TABLE)
        .insert({"name": name, "color": color, "user_id": user_id})
        .execute()
    )
    return cast(dict[str, Any], result.data[0])


def list_folders(client: Client, user_id: str | None = None) -> list[dict[str, Any]]:
    query = client.table(FOLDERS_TABLE).select("*")
    if user_id:
        query = query.eq("user_id", user_id)
    result = query.order("created_at", desc=True).execute()
    return cast(list[dict[str, Any]], result.data)


def create_tag(
    client: Client,
    name: str,
    user_id: str | None = None,
    color: str = DEFAULT_TAG_COLOR,
) -> dict[str, Any]:
    """Create a tag and return the stored row."""
    result = (
        client.table(TAGS_TABLE)
        .insert({"name": name, "color": color, "user_id": user_id})
        .execute()
    )
    return cast(dict[str, Any], result.data[0])


def list_tags(client: Client, user_id: str | None = None) -> list[dict[str, Any]]:
    query = client.table(TAGS_TABLE).select("*")
    if user_id:
        query = query.eq("user_id", user_id)
    result = query.order("created_at", desc=True).execute()
    return cast(list[dict[str, Any]], result.data)
