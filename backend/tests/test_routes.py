"""
NoteCache Backend — HTTP Endpoint Tests
=========================================

What:  End-to-end tests of the HTTP surface against a temporary cache dir.
How:   HTTPX AsyncClient over ASGITransport (no server process needed).

What we test:
    ✅ The create → read → update → read → delete → read scenario
    ✅ Status codes: 201/400 for /write, 200/404 for /notes/{name}
    ✅ Files on disk match what the API reports
    ✅ Plain-text error bodies, X-Request-ID header
    ✅ Upload form, health check, OpenAPI docs
"""

import os
import shutil
import sys
from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient

from notecache.main import create_app
from notecache.middleware.request_id import resolve_request_id
from notecache.services.note_service import NoteStore


class TestNoteScenario:

    @pytest.mark.asyncio
    async def test_full_lifecycle(self, test_client, cache_dir):
        response = await test_client.post("/write", data={"note_name": "foo", "note": "hello"})
        assert response.status_code == 201
        assert response.text == "Note created"
        assert (cache_dir / "foo.txt").read_text(encoding="utf-8") == "hello"

        response = await test_client.get("/notes/foo")
        assert response.status_code == 200
        assert response.text == "hello"
        assert response.headers["content-type"].startswith("text/plain")

        response = await test_client.put(
            "/notes/foo", content="world", headers={"Content-Type": "text/plain"}
        )
        assert response.status_code == 200
        assert response.text == "Note updated"

        response = await test_client.get("/notes/foo")
        assert response.status_code == 200
        assert response.text == "world"

        response = await test_client.delete("/notes/foo")
        assert response.status_code == 200
        assert response.text == "Note deleted"
        assert not (cache_dir / "foo.txt").exists()

        response = await test_client.get("/notes/foo")
        assert response.status_code == 404
        assert response.text == "Note not found"


class TestWrite:

    @pytest.mark.asyncio
    async def test_duplicate_name_is_400(self, test_client, cache_dir):
        await test_client.post("/write", data={"note_name": "dup", "note": "first"})

        response = await test_client.post("/write", data={"note_name": "dup", "note": "second"})

        assert response.status_code == 400
        assert response.text == "Note already exists"
        assert (cache_dir / "dup.txt").read_text(encoding="utf-8") == "first"

    @pytest.mark.asyncio
    async def test_multipart_form(self, test_client, cache_dir):
        """The upload form posts multipart/form-data."""
        boundary = "notecacheboundary"
        body = (
            f"--{boundary}\r\n"
            'Content-Disposition: form-data; name="note_name"\r\n\r\n'
            "multi\r\n"
            f"--{boundary}\r\n"
            'Content-Disposition: form-data; name="note"\r\n\r\n'
            "from a form\r\n"
            f"--{boundary}--\r\n"
        )

        response = await test_client.post(
            "/write",
            content=body.encode("utf-8"),
            headers={"Content-Type": f"multipart/form-data; boundary={boundary}"},
        )

        assert response.status_code == 201
        assert (cache_dir / "multi.txt").read_text(encoding="utf-8") == "from a form"

    @pytest.mark.asyncio
    async def test_empty_note_text(self, test_client, cache_dir):
        response = await test_client.post("/write", data={"note_name": "blank", "note": ""})

        assert response.status_code == 201
        assert (cache_dir / "blank.txt").read_text(encoding="utf-8") == ""

    @pytest.mark.asyncio
    async def test_missing_name_is_400(self, test_client):
        response = await test_client.post("/write", data={"note": "orphan"})

        assert response.status_code == 400
        assert "note_name" in response.text

    @pytest.mark.asyncio
    async def test_traversal_name_rejected(self, test_client, cache_dir):
        response = await test_client.post(
            "/write", data={"note_name": "../escape", "note": "x"}
        )

        assert response.status_code == 400
        assert response.text.startswith("Invalid note name")
        assert not (cache_dir.parent / "escape.txt").exists()

    @pytest.mark.asyncio
    async def test_missing_note_field_creates_empty_note(self, test_client, cache_dir):
        """An absent `note` field is indistinguishable from an empty one."""
        response = await test_client.post("/write", data={"note_name": "bare"})

        assert response.status_code == 201
        assert (cache_dir / "bare.txt").read_text(encoding="utf-8") == ""

    @pytest.mark.asyncio
    async def test_overlong_name_is_400(self, test_client, cache_dir):
        response = await test_client.post("/write", data={"note_name": "n" * 300, "note": "x"})

        assert response.status_code == 400
        assert response.text.startswith("Invalid note name")
        assert list(cache_dir.iterdir()) == []

        response = await test_client.get("/notes/" + "n" * 300)
        assert response.status_code == 400


class TestNotesByName:

    @pytest.mark.asyncio
    async def test_get_missing_is_404(self, test_client):
        response = await test_client.get("/notes/ghost")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_put_missing_is_404_and_not_created(self, test_client, cache_dir):
        response = await test_client.put("/notes/ghost", content="text")

        assert response.status_code == 404
        assert not (cache_dir / "ghost.txt").exists()

    @pytest.mark.asyncio
    async def test_delete_missing_is_404(self, test_client):
        response = await test_client.delete("/notes/ghost")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_name_with_space_and_unicode(self, test_client, cache_dir):
        (cache_dir / "мої нотатки.txt").write_text("вміст", encoding="utf-8")

        response = await test_client.get("/notes/мої нотатки")

        assert response.status_code == 200
        assert response.text == "вміст"

    @pytest.mark.asyncio
    async def test_backslash_name_rejected(self, test_client):
        response = await test_client.get("/notes/a%5Cb")
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_put_non_utf8_body_is_400(self, test_client, cache_dir):
        (cache_dir / "bin.txt").write_text("before", encoding="utf-8")

        response = await test_client.put("/notes/bin", content=b"\xff\xfe\xfd")

        assert response.status_code == 400
        assert (cache_dir / "bin.txt").read_text(encoding="utf-8") == "before"

    @pytest.mark.asyncio
    async def test_put_empty_body_clears_note(self, test_client, cache_dir):
        (cache_dir / "clear.txt").write_text("content", encoding="utf-8")

        response = await test_client.put("/notes/clear", content=b"")

        assert response.status_code == 200
        assert (cache_dir / "clear.txt").read_text(encoding="utf-8") == ""


class TestListNotes:

    @pytest.mark.asyncio
    async def test_empty_cache(self, test_client):
        response = await test_client.get("/notes")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_lists_name_text_pairs(self, test_client, cache_dir):
        await test_client.post("/write", data={"note_name": "a", "note": "x"})
        await test_client.post("/write", data={"note_name": "b", "note": "y"})
        (cache_dir / "ignored.md").write_text("not a note", encoding="utf-8")

        response = await test_client.get("/notes")

        assert response.status_code == 200
        items = sorted(response.json(), key=lambda n: n["name"])
        assert items == [{"name": "a", "text": "x"}, {"name": "b", "text": "y"}]

    @pytest.mark.asyncio
    @pytest.mark.skipif(sys.platform != "linux", reason="needs a filesystem that accepts raw byte names")
    async def test_skips_file_with_non_utf8_name(self, test_client, cache_dir):
        (cache_dir / "ok.txt").write_text("fine", encoding="utf-8")
        (cache_dir / os.fsdecode(b"caf\xe9.txt")).write_text("latin-1 name", encoding="utf-8")

        response = await test_client.get("/notes")

        assert response.status_code == 200
        assert response.json() == [{"name": "ok", "text": "fine"}]


class TestServerErrors:

    @pytest.mark.asyncio
    async def test_storage_error_is_500_without_details(self, test_client, cache_dir):
        (cache_dir / "locked.txt").write_text("secret", encoding="utf-8")

        with patch("aiofiles.open", side_effect=PermissionError(f"denied: {cache_dir}")):
            response = await test_client.get("/notes/locked")

        assert response.status_code == 500
        assert response.text == "Failed to read note"
        assert str(cache_dir) not in response.text

    @pytest.mark.asyncio
    async def test_unexpected_error_is_500(self, test_settings):
        app = create_app(test_settings)
        # raise_app_exceptions=False: Starlette re-raises after the 500 is sent
        transport = ASGITransport(app=app, raise_app_exceptions=False)

        with patch.object(NoteStore, "list_all", side_effect=RuntimeError("boom")):
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get("/notes")

        assert response.status_code == 500
        assert response.text == "Internal server error"


class TestAuxiliaryRoutes:

    @pytest.mark.asyncio
    async def test_upload_form(self, test_client):
        response = await test_client.get("/UploadForm.html")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert 'action="/write"' in response.text
        assert 'name="note_name"' in response.text

    @pytest.mark.asyncio
    async def test_request_id_header(self, test_client):
        response = await test_client.get("/notes")
        assert response.headers.get("X-Request-ID")

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/notes", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("client_id", ["bad id", "x" * 65, "semi;colon"])
    async def test_unsafe_request_id_replaced(self, test_client, client_id):
        response = await test_client.get(
            "/notes", headers={"X-Request-ID": client_id}
        )

        rid = response.headers["X-Request-ID"]
        assert rid != client_id
        assert len(rid) == 8
        int(rid, 16)

    def test_log_breaking_request_id_never_reused(self):
        rid = resolve_request_id("abc\n[00000000] forged line")

        assert "\n" not in rid
        assert len(rid) == 8

    @pytest.mark.asyncio
    async def test_openapi_lists_routes(self, test_client):
        response = await test_client.get("/openapi.json")

        paths = response.json()["paths"]
        assert "/write" in paths
        assert "/notes/{name}" in paths


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy(self, test_client, cache_dir):
        (cache_dir / "one.txt").write_text("1", encoding="utf-8")

        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["note_count"] == 1
        assert body["cache_dir"] == str(cache_dir)

    @pytest.mark.asyncio
    async def test_unhealthy_when_cache_removed(self, test_client, cache_dir):
        shutil.rmtree(cache_dir)

        response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
