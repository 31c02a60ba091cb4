"""Tests for the FastAPI routes, using the in-process TestClient."""

# pylint: disable=missing-class-docstring,missing-function-docstring

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from apa_table.errors import ExportTransportError
from apa_table.web.app import app, reset_sessions

SESSION = "test-session"
SCORES = "Name,Score\nAlice,90\nBob,85"


@pytest.fixture
def client():
    reset_sessions()
    yield TestClient(app)
    reset_sessions()


def _update(client, field, value):
    return client.post("/api/update", json={"session_id": SESSION, "field": field, "value": value})


def _paste(client, text=SCORES):
    return client.post("/api/paste", data={"session_id": SESSION, "text": text})


class TestIndex:

    def test_serves_ui(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "tableContainer" in response.text


class TestAcquisition:

    def test_paste_renders_table(self, client):
        response = _paste(client)
        assert response.status_code == 200
        payload = response.json()
        assert payload["has_table"] is True
        assert '<table class="apa-table"' in payload["html"]

    def test_blank_paste_is_noop(self, client):
        payload = _paste(client, "   \n ").json()
        assert payload["html"] is None
        assert payload["has_table"] is False

    def test_upload_tsv(self, client):
        files = {"file": ("scores.tsv", b"Name\tScore\nAlice\t90", "text/tab-separated-values")}
        payload = client.post("/api/upload", data={"session_id": SESSION}, files=files).json()
        assert "<td style=\"text-align: left;\">Alice</td>" in payload["html"]

    def test_upload_undecodable_returns_inline_error(self, client):
        files = {"file": ("scores.csv", b"\xff\xfe\xfa", "text/csv")}
        response = client.post("/api/upload", data={"session_id": SESSION}, files=files)
        assert response.status_code == 400
        payload = response.json()
        assert payload["error_type"] == "AcquisitionError"
        assert "Error processing data" in payload["html"]

    def test_failed_upload_clears_exportable_table(self, client):
        _paste(client)
        files = {"file": ("scores.csv", b"\xff\xfe\xfa", "text/csv")}
        assert client.post("/api/upload", data={"session_id": SESSION}, files=files).status_code == 400
        assert client.post("/api/export/word", data={"session_id": SESSION}).status_code == 409
        assert client.post("/api/export/png", data={"session_id": SESSION}).status_code == 409

    def test_blank_lines_file_renders_placeholder(self, client):
        files = {"file": ("empty.csv", b"\n   \n", "text/csv")}
        payload = client.post("/api/upload", data={"session_id": SESSION}, files=files).json()
        assert payload["html"] == "<p>No data found.</p>"
        assert payload["has_table"] is False


class TestUpdate:

    def test_fields_before_data_do_not_render(self, client):
        payload = _update(client, "caption", "Table 1. Scores").json()
        assert payload["redrawn"] is False
        assert payload["html"] is None

    def test_caption_set_before_paste_is_used(self, client):
        _update(client, "caption", "Table 1. Scores")
        html = _paste(client).json()["html"]
        assert "<strong>Table 1.</strong>" in html

    def test_note_change_redraws(self, client):
        _paste(client)
        payload = _update(client, "note", "n=2.").json()
        assert payload["redrawn"] is True
        assert ">Note. n=2.</p>" in payload["html"]

    def test_font_locked_after_load(self, client):
        _paste(client)
        payload = _update(client, "font_family", "Arial").json()
        assert payload["redrawn"] is False
        html = _update(client, "note", "x").json()["html"]
        assert "Times New Roman" in html
        assert "Arial" not in html

    def test_unknown_field(self, client):
        assert _update(client, "bogus", "x").status_code == 400

    def test_missing_session(self, client):
        assert client.post("/api/update", json={"field": "note"}).status_code == 400


class TestExports:

    def test_word_before_table(self, client):
        response = client.post("/api/export/word", data={"session_id": SESSION})
        assert response.status_code == 409
        assert response.json()["message"] == "Please generate a table first."

    def test_png_before_table(self, client):
        response = client.post("/api/export/png", data={"session_id": SESSION})
        assert response.status_code == 409

    def test_word_download(self, client):
        _paste(client)
        response = client.post("/api/export/word", data={"session_id": SESSION})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/msword")
        assert 'attachment; filename="APA_Table.doc"' == response.headers["content-disposition"]
        assert b"apa-table" in response.content

    def test_png_download(self, client):
        _paste(client)
        response = client.post("/api/export/png", data={"session_id": SESSION})
        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.content.startswith(b"\x89PNG")

    def test_png_inline_for_clipboard(self, client):
        _paste(client)
        response = client.post("/api/export/png", data={"session_id": SESSION, "inline": "true"})
        assert response.headers["content-disposition"].startswith("inline")

    def test_png_transport_failure(self, client):
        _paste(client)
        with patch("apa_table.web.app.export_png", side_effect=ExportTransportError("Rasteriser unavailable")):
            response = client.post("/api/export/png", data={"session_id": SESSION})
        assert response.status_code == 502
        assert response.json()["fallback"] == "Please try the Download PNG option."


class TestPreferences:

    def test_default_off(self, client):
        assert client.get("/api/preferences").json() == {"dark_mode": False}

    def test_toggle_persists_and_redraws(self, client):
        _paste(client)
        payload = client.post("/api/preferences", json={"session_id": SESSION, "dark_mode": True}).json()
        assert payload["dark_mode"] is True
        assert payload["has_table"] is True
        assert client.get("/api/preferences").json() == {"dark_mode": True}

    def test_toggle_without_session(self, client):
        payload = client.post("/api/preferences", json={"dark_mode": True}).json()
        assert payload["html"] is None
