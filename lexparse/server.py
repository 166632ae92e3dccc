"""FastAPI server for lexparse.

Accepts uploaded legal documents (or raw text), parses them into the seven
structural levels and returns the flat records together with CSV text and
SQL insert statements. Export files are written under the configured
output directory and served back through ``/api/download``.

Endpoints are registered on an ``APIRouter`` so that a larger application
can mount them; the standalone ``app`` includes the router directly::

    uvicorn lexparse.server:app --reload --port 8080
"""

from __future__ import annotations

import logging
import sqlite3
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, File, Form, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, HTMLResponse
from pydantic import BaseModel

from lexparse import __version__
from lexparse.core.errors import ExportError, LoaderError, UploadRejected
from lexparse.core.levels import LEVEL_ORDER, ancestors_of
from lexparse.exporters.csv_export import CSVExporter
from lexparse.exporters.sql import SQLGenerator
from lexparse.hierarchy import AttachMode, SplitMode
from lexparse.loaders import LoaderRegistry
from lexparse.pipeline import DEFAULT_FORMATS, ParseResult, export_result, parse_file, parse_text
from lexparse.settings import Settings, get_settings
from lexparse.storage import SQLiteStore
from lexparse.uploads import UploadValidator, check_document_id, resolve_download

logger = logging.getLogger(__name__)

router = APIRouter()

app = FastAPI(
    title="lexparse API",
    description="Structural parser for bilingual legal codes",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_CONTENT_TYPES = {
    ".csv": "text/csv",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".sql": "application/sql",
    ".json": "application/json",
}

_UPLOAD_FORM = """<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Загрузка документа</title>
</head>
<body>
    <h1>Загрузка документа для парсинга</h1>
    <form method="post" action="/api/parse" enctype="multipart/form-data">
        <input type="file" name="document" accept="{accept}" required />
        <label><input type="checkbox" name="persist" value="true" /> Сохранить в базу</label>
        <button type="submit">Загрузить и обработать</button>
    </form>
</body>
</html>
"""


# ============================================================================
# Request Models
# ============================================================================


class ParseTextRequest(BaseModel):
    text: str
    document_id: str = "text"
    split_mode: SplitMode | None = None
    attach_mode: AttachMode | None = None
    export: bool = False
    persist: bool = False


# ============================================================================
# Helpers
# ============================================================================


def _run_id(stem: str) -> str:
    return f"{stem}_{uuid.uuid4().hex[:8]}"


def _build_response(
    result: ParseResult,
    settings: Settings,
    export: bool,
    persist: bool,
) -> dict[str, Any]:
    """Assemble the JSON body shared by both parse endpoints."""
    response = result.to_dict()
    response["sql_queries"] = SQLGenerator(settings.sql_dialect).insert_statements(result.data)
    response["csv_files"] = CSVExporter().render(result.data)

    if export:
        try:
            written = export_result(
                result,
                settings.output_dir,
                DEFAULT_FORMATS,
                sql_dialect=settings.sql_dialect,
            )
        except (ExportError, OSError) as e:
            logger.error("Export of %s failed: %s", result.document_id, e)
            raise HTTPException(status_code=500, detail=f"Export failed: {e}")
        response["files"] = _downloadable_files(written, settings.output_dir)

    if persist:
        try:
            with SQLiteStore(settings.database_path) as store:
                store.initialize_schema()
                response["stored_records"] = store.replace(result.data)
        except sqlite3.Error as e:
            logger.error("Storing %s failed: %s", result.document_id, e)
            raise HTTPException(status_code=500, detail=f"Database error: {e}")

    response["processed_at"] = datetime.now().isoformat()
    return response


def _downloadable_files(written: dict[str, Path], output_dir: Path) -> dict[str, Any]:
    """Map export formats to names accepted by ``/api/download``."""
    base = output_dir.resolve()
    files: dict[str, Any] = {}
    for fmt, path in written.items():
        path = path.resolve()
        if path.is_dir():
            files[fmt] = sorted(p.relative_to(base).as_posix() for p in path.iterdir())
        else:
            files[fmt] = path.relative_to(base).as_posix()
    return files


# ============================================================================
# Endpoints
# ============================================================================


@router.get("/", response_class=HTMLResponse)
def index() -> str:
    """Minimal upload form."""
    return _UPLOAD_FORM.format(accept=",".join(LoaderRegistry.supported_extensions()))


@router.get("/api/health")
def health(settings: Settings = Depends(get_settings)) -> dict[str, Any]:
    return {
        "status": "ok",
        "version": __version__,
        "environment": settings.environment,
    }


@router.get("/api/levels")
def list_levels() -> dict[str, Any]:
    """Describe the seven structural levels, shallowest first."""
    return {
        "levels": [
            {
                "value": level.value,
                "label": level.label,
                "key": level.key,
                "table": level.table,
                "depth": level.depth,
                "ancestors": [a.value for a in ancestors_of(level)],
            }
            for level in LEVEL_ORDER
        ],
        "supported_extensions": LoaderRegistry.supported_extensions(),
    }


@router.post("/api/parse")
def parse_document(
    document: UploadFile = File(...),
    persist: bool = Form(False),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    """Upload a .txt or .docx document, parse it and export the results."""
    validator = UploadValidator(
        upload_dir=settings.uploads_dir,
        allowed_extensions=LoaderRegistry.supported_extensions(),
        max_bytes=settings.max_upload_bytes,
    )

    try:
        name = validator.sanitize_filename(document.filename)
        content = document.file.read(settings.max_upload_bytes + 1)
        saved = validator.save(content, name)
    except UploadRejected as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    try:
        result = parse_file(
            saved,
            split_mode=settings.title_split_mode,
            attach_mode=settings.attach_mode,
        )
    except LoaderError as e:
        logger.warning("Could not load %s: %s", name, e)
        raise HTTPException(status_code=400, detail=str(e))
    finally:
        saved.unlink(missing_ok=True)

    # the saved copy carries a random prefix; name outputs after the upload
    result.tree.document_id = _run_id(Path(name).stem)
    response = _build_response(result, settings, export=True, persist=persist)
    response["filename"] = name
    return response


@router.post("/api/parse/text")
def parse_raw_text(
    request: ParseTextRequest,
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    """Parse text posted as JSON."""
    if len(request.text.encode("utf-8")) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="Text exceeds the upload size limit")
    try:
        document_id = check_document_id(request.document_id)
    except UploadRejected as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    result = parse_text(
        request.text,
        document_id=_run_id(document_id) if request.export else document_id,
        split_mode=request.split_mode or settings.title_split_mode,
        attach_mode=request.attach_mode or settings.attach_mode,
    )
    return _build_response(result, settings, export=request.export, persist=request.persist)


@router.get("/api/download")
def download(file: str | None = None, settings: Settings = Depends(get_settings)) -> FileResponse:
    """Serve a previously exported file from the output directory."""
    try:
        path = resolve_download(file, settings.output_dir)
    except UploadRejected as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    media_type = _CONTENT_TYPES.get(path.suffix.lower(), "application/octet-stream")
    return FileResponse(path, media_type=media_type, filename=path.name)


app.include_router(router)


def run_server(host: str = "127.0.0.1", port: int = 8080) -> None:
    """Start the lexparse server via uvicorn.

    Args:
        host: Bind address. Defaults to localhost.
        port: Port number. Defaults to 8080.
    """
    import uvicorn

    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    run_server()
