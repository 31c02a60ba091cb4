"""FastAPI web server for the APA table builder.

Serves a single-page UI where the user uploads a CSV/TSV file or pastes raw
text, adjusts font, colours, alignment, caption and note, and exports the
result as a Word document or PNG image.  Every input change re-renders the
table from scratch via the pure engine.

Usage:
    python -m apa_table.web.app
    # => Uvicorn running on http://localhost:8000
"""

import logging
from pathlib import Path

from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse, Response

from apa_table.config import get_settings
from apa_table.engine.constants import PNG_MEDIA_TYPE, WORD_MEDIA_TYPE
from apa_table.engine.pipeline import acquire_file, acquire_raw_text, apply_change, load_data, recompute
from apa_table.engine.schema import EngineState, RawInput, RenderedTable
from apa_table.errors import AcquisitionError, ApaTableError, ExportPreconditionError, ExportTransportError
from apa_table.export.document import export_word
from apa_table.export.raster import export_png
from apa_table.preferences import load_dark_mode, save_dark_mode

logger = logging.getLogger(__name__)

# Path to static frontend assets
STATIC_DIR = Path(__file__).parent / "static"

# Inline diagnostic shown in place of the table when acquisition fails
ACQUISITION_ERROR_HTML = '<p style="color: red;">Error processing data. Check formatting or encoding.</p>'

# ---------------------------------------------------------------------------
# In-memory state (ephemeral — lost on server restart)
# ---------------------------------------------------------------------------

_sessions: dict[str, EngineState] = {}  # session_id -> current engine state
_rendered: dict[str, RenderedTable] = {}  # session_id -> last table shown on screen


def reset_sessions() -> None:
    """Drop all session state."""
    _sessions.clear()
    _rendered.clear()


def _get_state(session_id: str) -> EngineState:
    if session_id not in _sessions:
        _sessions[session_id] = EngineState()
        logger.info("New session created: %s", session_id)
    return _sessions[session_id]


def _redraw(session_id: str, changed_field: str | None = None) -> RenderedTable | None:
    """Recompute the session's table and remember it for export; None means nothing was redrawn."""
    rendered = recompute(_sessions[session_id], changed_field)
    if rendered is not None:
        _rendered[session_id] = rendered
    return rendered


def _render_payload(rendered: RenderedTable | None) -> dict:
    return {
        "ok": True,
        "html": rendered.markup if rendered is not None else None,
        "has_table": rendered.has_table if rendered is not None else False,
    }


def _install_data(session_id: str, raw: RawInput) -> JSONResponse:
    _sessions[session_id] = load_data(_get_state(session_id), raw)
    rendered = _redraw(session_id)
    logger.info(
        "Session %s loaded data (%d chars, delimiter=%r)",
        session_id,
        len(raw.text),
        raw.delimiter,
    )
    return JSONResponse(_render_payload(rendered))


# ---------------------------------------------------------------------------
# FastAPI application
# ---------------------------------------------------------------------------

app = FastAPI(title="APA Table Builder")


@app.exception_handler(ApaTableError)
async def apa_table_error_handler(_request: Request, exc: ApaTableError):
    """Map the error taxonomy onto HTTP responses the UI can show."""
    if isinstance(exc, AcquisitionError):
        status_code = 400
    elif isinstance(exc, ExportPreconditionError):
        status_code = 409
    elif isinstance(exc, ExportTransportError):
        status_code = 502
    else:
        status_code = 500
    payload = exc.to_dict()
    if isinstance(exc, AcquisitionError):
        payload["html"] = ACQUISITION_ERROR_HTML
    return JSONResponse(payload, status_code=status_code)


def _attachment(filename: str, payload: bytes, media_type: str, inline: bool = False) -> Response:
    disposition = "inline" if inline else "attachment"
    return Response(
        content=payload,
        media_type=media_type,
        headers={"Content-Disposition": f'{disposition}; filename="{filename}"'},
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.get("/", response_class=HTMLResponse)
async def index():
    """Serve the table builder UI."""
    return HTMLResponse(STATIC_DIR.joinpath("index.html").read_text(encoding="utf-8"))


@app.post("/api/upload")
async def upload(session_id: str = Form(...), file: UploadFile = File(...)):
    """Read an uploaded CSV/TSV file and render it."""
    if not file.filename:
        raise HTTPException(status_code=400, detail="File required")
    try:
        content = await file.read()
        raw = acquire_file(file.filename, content)
    except OSError as exc:
        logger.error("Failed to read upload %s: %s", file.filename, exc)
        _rendered.pop(session_id, None)
        raise AcquisitionError(source=file.filename) from exc
    except AcquisitionError:
        # The diagnostic replaces the table on screen, so there is nothing left to export
        _rendered.pop(session_id, None)
        raise
    return _install_data(session_id, raw)


@app.post("/api/paste")
async def paste(session_id: str = Form(...), text: str = Form("")):
    """Render pasted raw text; blank text is a no-op."""
    raw = acquire_raw_text(text)
    if raw is None:
        return JSONResponse({"ok": True, "html": None, "has_table": False})
    return _install_data(session_id, raw)


@app.post("/api/update")
async def update(request: Request):
    """Apply one input-field change and re-render."""
    body = await request.json()
    session_id = body.get("session_id")
    field = body.get("field")
    if not session_id or not field:
        raise HTTPException(status_code=400, detail="session_id and field are required")

    value = body.get("value")
    value = "" if value is None else str(value)
    try:
        _sessions[session_id] = apply_change(_get_state(session_id), field, value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    rendered = _redraw(session_id, field)
    payload = _render_payload(rendered)
    payload["redrawn"] = rendered is not None
    return JSONResponse(payload)


@app.post("/api/export/word")
async def export_word_route(session_id: str = Form(...)):
    """Download the current table as a Word document."""
    filename, payload = export_word(_rendered.get(session_id))
    return _attachment(filename, payload, WORD_MEDIA_TYPE)


@app.post("/api/export/png")
async def export_png_route(session_id: str = Form(...), inline: bool = Form(False)):
    """Return the current table as PNG bytes, for download or the clipboard (``inline``)."""
    filename, payload = export_png(_rendered.get(session_id))
    return _attachment(filename, payload, PNG_MEDIA_TYPE, inline=inline)


# ---------------------------------------------------------------------------
# Preferences
# ---------------------------------------------------------------------------


@app.get("/api/preferences")
async def get_preferences():
    """Return the persisted dark-mode flag."""
    return JSONResponse({"dark_mode": load_dark_mode()})


@app.post("/api/preferences")
async def set_preferences(request: Request):
    """Persist the dark-mode flag and redraw the session's table."""
    body = await request.json()
    dark_mode = bool(body.get("dark_mode", False))
    save_dark_mode(dark_mode)

    payload = {"ok": True, "dark_mode": dark_mode, "html": None, "has_table": False}
    session_id = body.get("session_id")
    if session_id and session_id in _sessions:
        payload.update(_render_payload(_redraw(session_id)))
    return JSONResponse(payload)


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main():
    """Start the web server via uvicorn."""
    import uvicorn  # pylint: disable=import-outside-toplevel

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
