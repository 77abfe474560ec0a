"""Tests for API endpoints (no external API keys required)."""

from unittest.mock import MagicMock, patch

import httpx
from anthropic import APIStatusError
from fastapi.testclient import TestClient

from src.api.main import app
from src.errors import NoteGenerationError
from tests.helpers import GRADIENT_PAYLOADS, FakeGenerator, sentence_transcript

client = TestClient(app)


def _api_status_error() -> APIStatusError:
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    return APIStatusError("overloaded", response=httpx.Response(529, request=request), body=None)


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


# --- /api/chunks ---


def test_chunks_short_transcript():
    response = client.post("/api/chunks", json={"transcript": sentence_transcript(20)})
    assert response.status_code == 200
    body = response.json()
    assert body["total_chunks"] == 1
    assert body["chunks"][0]["id"] == "chunk-0"
    assert body["chunks"][0]["start_index"] == 0
    assert body["chunks"][0]["is_valid"] is True
    assert body["estimated_seconds"] == 15


def test_chunks_custom_options_split():
    response = client.post(
        "/api/chunks",
        json={
            "transcript": sentence_transcript(200),
            "options": {"max_chunk_size": 2000, "overlap_size": 100, "min_chunk_size": 500},
        },
    )
    assert response.status_code == 200
    body = response.json()
    assert body["total_chunks"] > 1
    assert body["options"]["max_chunk_size"] == 2000
    assert [c["id"] for c in body["chunks"]] == [f"chunk-{i}" for i in range(body["total_chunks"])]


def test_chunks_reports_invalid_chunk():
    response = client.post("/api/chunks", json={"transcript": "Too short"})
    chunk = response.json()["chunks"][0]
    assert chunk["is_valid"] is False
    assert "Insufficient word count" in chunk["issues"]


def test_chunks_adaptive_tunes_overlap():
    response = client.post("/api/chunks", json={"transcript": "word " * 60 + "end.", "adaptive": True})
    assert response.json()["options"]["overlap_size"] == 750


def test_chunks_adaptive_small_chunks_keep_overlap_valid():
    response = client.post(
        "/api/chunks",
        json={
            "transcript": "word " * 60 + "end.",
            "adaptive": True,
            "options": {"max_chunk_size": 500, "overlap_size": 400, "min_chunk_size": 100},
        },
    )
    assert response.status_code == 200
    assert response.json()["options"]["overlap_size"] == 499


def test_chunks_overlap_not_below_max_returns_400():
    response = client.post(
        "/api/chunks",
        json={
            "transcript": "Hello.",
            "options": {"max_chunk_size": 1000, "overlap_size": 1000, "min_chunk_size": 500},
        },
    )
    assert response.status_code == 400
    assert "overlap_size" in response.json()["detail"]


def test_chunks_requires_transcript():
    response = client.post("/api/chunks", json={})
    assert response.status_code == 422


# --- /api/notes/combine ---


def test_combine_merges_results():
    response = client.post(
        "/api/notes/combine",
        json={"results": GRADIENT_PAYLOADS, "transcript": "x" * 30000, "duration": "40:00"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["note_id"] is None
    notes = body["notes"]
    assert notes["title"] == "Intro to Gradient Descent"
    assert [s["title"] for s in notes["sections"]] == ["Intro", "Momentum"]
    assert notes["concepts"][0]["definition"] == "The step size of each update."
    assert notes["estimatedStudyTime"] == "1-2 hours"
    assert notes["duration"] == "40:00"
    assert notes["contentType"] == "educational"


def test_combine_empty_results_returns_400():
    response = client.post("/api/notes/combine", json={"results": []})
    assert response.status_code == 400
    assert response.json()["detail"] == "No chunked results to combine"


# --- /api/notes/generate ---


def test_generate_no_key_returns_501():
    with patch("src.api.routes.notes.settings") as mock_settings:
        mock_settings.anthropic_api_key = ""
        response = client.post("/api/notes/generate", json={"transcript": "Hello there."})
    assert response.status_code == 501
    assert "not configured" in response.json()["detail"].lower()


def test_generate_empty_transcript_returns_422():
    response = client.post("/api/notes/generate", json={"transcript": ""})
    assert response.status_code == 422


def test_generate_returns_notes():
    generator = FakeGenerator(payloads=GRADIENT_PAYLOADS)
    with patch("src.api.routes.notes.get_text_generator", return_value=generator):
        response = client.post(
            "/api/notes/generate",
            json={"transcript": sentence_transcript(20), "title": "Optimisers", "duration": "5:00"},
        )
    assert response.status_code == 200
    notes = response.json()["notes"]
    assert notes["title"] == "Optimisers"
    assert notes["difficulty"] == "intermediate"
    assert len(notes["nextSteps"]) == 4
    assert len(generator.prompts) == 1


def test_generate_with_options_chunks_transcript():
    generator = FakeGenerator(payloads=GRADIENT_PAYLOADS)
    with patch("src.api.routes.notes.get_text_generator", return_value=generator):
        response = client.post(
            "/api/notes/generate",
            json={
                "transcript": sentence_transcript(200),
                "options": {"max_chunk_size": 2000, "overlap_size": 100, "min_chunk_size": 500},
            },
        )
    assert response.status_code == 200
    assert len(generator.prompts) > 1
    assert [s["title"] for s in response.json()["notes"]["sections"]] == ["Intro", "Momentum"]


def test_generate_save_stores_notes():
    generator = FakeGenerator(payloads=GRADIENT_PAYLOADS)
    mock_supabase = MagicMock()
    with (
        patch("src.api.routes.notes.get_text_generator", return_value=generator),
        patch("src.api.routes.notes.get_supabase_client", return_value=mock_supabase),
        patch("src.api.routes.notes.store_notes", return_value="note-123") as mock_store,
    ):
        response = client.post(
            "/api/notes/generate",
            json={"transcript": sentence_transcript(20), "save": True, "user_id": "user-1"},
        )
    assert response.status_code == 200
    assert response.json()["note_id"] == "note-123"
    mock_store.assert_called_once()
    assert mock_store.call_args.args[0] is mock_supabase
    assert mock_store.call_args.kwargs["user_id"] == "user-1"
    assert mock_store.call_args.kwargs["folder_id"] is None


def test_generate_llm_unavailable_returns_503():
    generator = FakeGenerator(error=_api_status_error())
    with patch("src.api.routes.notes.get_text_generator", return_value=generator):
        response = client.post("/api/notes/generate", json={"transcript": "Hello there."})
    assert response.status_code == 503
    assert response.json()["detail"].startswith("LLM unavailable")


def test_generate_bad_model_output_returns_502():
    generator = FakeGenerator(error=NoteGenerationError("Failed to generate valid JSON: boom"))
    with patch("src.api.routes.notes.get_text_generator", return_value=generator):
        response = client.post("/api/notes/generate", json={"transcript": "Hello there."})
    assert response.status_code == 502
    assert "valid JSON" in response.json()["detail"]


# --- stored notes ---


def test_get_missing_note_returns_404():
    mock_supabase = MagicMock()
    mock_supabase.table.return_value.select.return_value.eq.return_value.execute.return_value.data = []
    with patch("src.api.routes.notes.get_supabase_client", return_value=mock_supabase):
        response = client.get("/api/notes/missing")
    assert response.status_code == 404
    assert response.json()["detail"] == "Note not found"


def test_get_note_returns_document():
    row = {
        "id": "note-1",
        "title": "Optimisers",
        "created_at": "2026-01-01T00:00:00Z",
        "content": {"title": "Optimisers", "sections": []},
    }
    mock_supabase = MagicMock()
    mock_supabase.table.return_value.select.return_value.eq.return_value.execute.return_value.data = [row]
    with patch("src.api.routes.notes.get_supabase_client", return_value=mock_supabase):
        response = client.get("/api/notes/note-1")
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == "note-1"
    assert body["notes"] == {"title": "Optimisers", "sections": []}


def test_list_notes_filters_by_user():
    rows = [{"id": 7, "title": "Optimisers", "difficulty": "beginner", "created_at": "2026-01-01"}]
    mock_supabase = MagicMock()
    query = mock_supabase.table.return_value.select.return_value
    query.eq.return_value.order.return_value.execute.return_value.data = rows
    with patch("src.api.routes.notes.get_supabase_client", return_value=mock_supabase):
        response = client.get("/api/notes", params={"user_id": "user-1"})
    assert response.status_code == 200
    assert response.json() == [
        {
            "id": "7",
            "title": "Optimisers",
            "difficulty": "beginner",
            "duration": None,
            "folder_id": None,
            "is_favorite": False,
            "created_at": "2026-01-01",
        }
    ]
    query.eq.assert_called_once_with("user_id", "user-1")


def test_update_note():
    row = {"id": "note-1", "title": "Renamed", "is_favorite": True, "content": {"title": "Old"}}
    mock_supabase = MagicMock()
    query = mock_supabase.table.return_value.update.return_value
    query.eq.return_value.eq.return_value.execute.return_value.data = [row]
    with patch("src.api.routes.notes.get_supabase_client", return_value=mock_supabase):
        response = client.patch(
            "/api/notes/note-1",
            params={"user_id": "user-1"},
            json={"title": "Renamed", "is_favorite": True},
        )
    assert response.status_code == 200
    assert response.json()["title"] == "Renamed"
    assert response.json()["is_favorite"] is True
    mock_supabase.table.return_value.update.assert_called_once_with({"title": "Renamed", "is_favorite": True})


def test_update_note_without_fields_returns_400():
    with patch("src.api.routes.notes.get_supabase_client", return_value=MagicMock()):
        response = client.patch("/api/notes/note-1", json={})
    assert response.status_code == 400
    assert response.json()["detail"] == "No fields to update"


def test_update_missing_note_returns_404():
    mock_supabase = MagicMock()
    mock_supabase.table.return_value.update.return_value.eq.return_value.execute.return_value.data = []
    with patch("src.api.routes.notes.get_supabase_client", return_value=mock_supabase):
        response = client.patch("/api/notes/missing", json={"title": "X"})
    assert response.status_code == 404


def test_delete_note():
    mock_supabase = MagicMock()
    query = mock_supabase.table.return_value.delete.return_value
    query.eq.return_value.execute.return_value.data = [{"id": "note-1"}]
    with patch("src.api.routes.notes.get_supabase_client", return_value=mock_supabase):
        response = client.delete("/api/notes/note-1")
    assert response.status_code == 204
    query.eq.assert_called_once_with("id", "note-1")


def test_delete_missing_note_returns_404():
    mock_supabase = MagicMock()
    mock_supabase.table.return_value.delete.return_value.eq.return_value.execute.return_value.data = []
    with patch("src.api.routes.notes.get_supabase_client", return_value=mock_supabase):
        response = client.delete("/api/notes/missing")
    assert response.status_code == 404


# --- folders and tags ---


def test_create_folder_default_color():
    mock_supabase = MagicMock()
    mock_supabase.table.return_value.insert.return_value.execute.return_value.data = [
        {"id": 3, "name": "ML", "color": "#c6ac8f", "user_id": "user-1"}
    ]
    with patch("src.api.routes.library.get_supabase_client", return_value=mock_supabase):
        response = client.post("/api/folders", json={"name": "ML", "user_id": "user-1"})
    assert response.status_code == 201
    assert response.json()["id"] == "3"
    mock_supabase.table.assert_called_once_with("folders")
    mock_supabase.table.return_value.insert.assert_called_once_with(
        {"name": "ML", "color": "#c6ac8f", "user_id": "user-1"}
    )


def test_create_folder_requires_name():
    response = client.post("/api/folders", json={"name": ""})
    assert response.status_code == 422


def test_list_tags():
    mock_supabase = MagicMock()
    query = mock_supabase.table.return_value.select.return_value
    query.order.return_value.execute.return_value.data = [{"id": "t1", "name": "exam", "color": "#8a7559"}]
    with patch("src.api.routes.library.get_supabase_client", return_value=mock_supabase):
        response = client.get("/api/tags")
    assert response.status_code == 200
    assert [t["name"] for t in response.json()] == ["exam"]
    mock_supabase.table.assert_called_once_with("tags")


def test_create_tag_custom_color():
    mock_supabase = MagicMock()
    mock_supabase.table.return_value.insert.return_value.execute.return_value.data = [
        {"id": "t2", "name": "review", "color": "#ff0000"}
    ]
    with patch("src.api.routes.library.get_supabase_client", return_value=mock_supabase):
        response = client.post("/api/tags", json={"name": "review", "color": "#ff0000"})
    assert response.status_code == 201
    assert response.json()["color"] == "#ff0000"


# --- study helpers ---


def test_highlight_actions_listed():
    response = client.get("/api/ai/highlight-explain")
    assert response.status_code == 200
    assert [a["type"] for a in response.json()["actions"]] == [
        "simplify",
        "example",
        "analogy",
        "practice-question",
    ]


def test_highlight_explain():
    generator = FakeGenerator(text="A gradient is a slope.")
    with patch("src.api.routes.assist.get_text_generator", return_value=generator):
        response = client.post(
            "/api/ai/highlight-explain", json={"text": "gradient", "action": "simplify"}
        )
    assert response.status_code == 200
    body = response.json()
    assert body["action"] == "simplify"
    assert body["content"] == "A gradient is a slope."
    assert body["timestamp"]


def test_highlight_explain_invalid_action_returns_400():
    with patch("src.api.routes.assist.get_text_generator", return_value=FakeGenerator()):
        response = client.post("/api/ai/highlight-explain", json={"text": "gradient", "action": "dance"})
    assert response.status_code == 400


def test_highlight_explain_no_key_returns_501():
    with patch("src.api.routes.notes.settings") as mock_settings:
        mock_settings.anthropic_api_key = ""
        response = client.post("/api/ai/highlight-explain", json={"text": "gradient", "action": "simplify"})
    assert response.status_code == 501


def test_highlight_explain_llm_unavailable_returns_503():
    generator = FakeGenerator(text_error=_api_status_error())
    with patch("src.api.routes.assist.get_text_generator", return_value=generator):
        response = client.post("/api/ai/highlight-explain", json={"text": "gradient", "action": "analogy"})
    assert response.status_code == 503


def test_summarize():
    generator = FakeGenerator(text="Short summary.")
    with patch("src.api.routes.assist.get_text_generator", return_value=generator):
        response = client.post("/api/ai/summarize", json={"content": "Long notes.", "max_length": 100})
    assert response.status_code == 200
    assert response.json() == {"summary": "Short summary."}


def test_concepts():
    generator = FakeGenerator(payloads=[[{"term": "Epoch", "definition": "One pass over the data."}]])
    with patch("src.api.routes.assist.get_text_generator", return_value=generator):
        response = client.post("/api/ai/concepts", json={"content": "Training loops."})
    assert response.status_code == 200
    assert response.json() == {"concepts": [{"term": "Epoch", "definition": "One pass over the data."}]}
