"""
FastAPI server exposing the viewer core as a REST API.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, FastAPI, File, Query, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel
from pydantic import ValidationError as PayloadError

from sqlviewer.config import settings
from sqlviewer.engine import ViewerEngine
from sqlviewer.exceptions import SQLViewerError, ValidationError
from sqlviewer.types import BrowseRequest

logger = logging.getLogger("sqlviewer.api")

router = APIRouter()


# Pydantic models for request validation
class SwitchRequest(BaseModel):
    name: Optional[str] = None


def get_engine(request: Request) -> ViewerEngine:
    """The engine owning the active session for this app."""
    return request.app.state.engine


async def _read_json(request: Request) -> Dict[str, Any]:
    """Parse the request body as a JSON object."""
    try:
        payload = await request.json()
    except ValueError:
        raise ValidationError("Invalid JSON body")
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def _error(e: SQLViewerError, status_code: Optional[int] = None) -> JSONResponse:
    return JSONResponse({"error": str(e)}, status_code=status_code or e.status_code)


def _text(e: SQLViewerError, status_code: Optional[int] = None) -> PlainTextResponse:
    return PlainTextResponse(str(e), status_code=status_code or e.status_code)


# ========== ENDPOINTS ==========

@router.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "SQL Viewer API",
        "version": "1.0.0",
        "endpoints": {
            "POST /query": "Execute a SQL statement",
            "GET /tables": "Schema of every table",
            "GET /tables/{name}": "Columns and row count of one table",
            "GET /tables/{name}/rows": "Browse a table page by page",
            "POST /upload": "Upload a .sql dump or a .sqlite/.db file",
            "GET /databases": "List database files",
            "DELETE /databases?name=": "Delete an uploaded database file",
            "POST /databases/switch": "Change the active database",
        },
    }


@router.post("/query")
async def execute_query(request: Request, engine: ViewerEngine = Depends(get_engine)):
    """Execute a raw SQL statement."""
    try:
        sql = (await _read_json(request)).get("query")
        if sql is not None and not isinstance(sql, str):
            raise ValidationError("Query must be a string")

        result = engine.execute(sql)
        return {"results": result.to_results(), "duration": result.duration_ms}
    except SQLViewerError as e:
        return _error(e, status_code=400)


@router.get("/tables")
async def list_tables(engine: ViewerEngine = Depends(get_engine)):
    """Column list of every table in the active database."""
    schema = engine.get_schema()
    return {
        table: [column.to_dict() for column in columns]
        for table, columns in schema.items()
    }


@router.get("/tables/{table_name}")
async def get_table_info(table_name: str, engine: ViewerEngine = Depends(get_engine)):
    """Get information about a specific table."""
    try:
        return engine.get_table_info(table_name)
    except SQLViewerError as e:
        return _error(e)


@router.get("/tables/{table_name}/rows")
async def browse_table(
    table_name: str,
    page: int = Query(0, ge=0),
    page_size: int = Query(50, gt=0),
    search: str = Query(""),
    engine: ViewerEngine = Depends(get_engine),
):
    """One page of a table, optionally filtered by a search term."""
    try:
        request = BrowseRequest(table=table_name, page=page, page_size=page_size, search_term=search)
        return engine.browse(request).to_dict()
    except SQLViewerError as e:
        return _error(e, status_code=400)


@router.post("/upload")
async def upload(file: Optional[UploadFile] = File(None),
                 engine: ViewerEngine = Depends(get_engine)):
    """Store a database file, or convert a SQL dump into a new one."""
    if file is None or not file.filename:
        return PlainTextResponse("No file uploaded", status_code=400)

    file_name = file.filename.lower()
    data = await file.read()

    if file_name.endswith(settings.DUMP_EXTENSIONS):
        try:
            database = engine.import_dump(file.filename, data.decode("utf-8", errors="replace"))
        except SQLViewerError as e:
            return PlainTextResponse(f"Error executing SQL: {e}", status_code=500)
        return PlainTextResponse(
            f"SQL imported successfully into {engine.storage.converted_name(file.filename)}"
        )

    if file_name.endswith(settings.DATABASE_EXTENSIONS):
        engine.upload_database(file.filename, data)
        return PlainTextResponse(f"Database uploaded: {file.filename}")

    return PlainTextResponse("Invalid file type. Upload .sql, .sqlite, or .db", status_code=400)


@router.get("/databases")
async def list_databases(engine: ViewerEngine = Depends(get_engine)):
    """Known database files, default first."""
    return [database.to_dict() for database in engine.list_databases()]


@router.delete("/databases")
async def delete_database(name: Optional[str] = Query(None),
                          engine: ViewerEngine = Depends(get_engine)):
    """Delete an uploaded database file."""
    try:
        engine.delete_database(name)
    except SQLViewerError as e:
        return _text(e)
    return PlainTextResponse("Deleted")


@router.post("/databases/switch")
async def switch_database(request: Request, engine: ViewerEngine = Depends(get_engine)):
    """Make another database file the active one."""
    try:
        try:
            name = SwitchRequest.model_validate(await _read_json(request)).name
        except PayloadError:
            raise ValidationError("Name must be a string")
        engine.switch_database(name)
    except SQLViewerError as e:
        return _text(e)
    return PlainTextResponse(f"Switched to {name}")


# ========== APPLICATION ==========

@asynccontextmanager
async def lifespan(app: FastAPI):
    created = app.state.engine is None
    if created:
        app.state.engine = ViewerEngine.from_settings(settings)
    logger.info("Active database: %s", app.state.engine.active_path)
    yield
    if created:
        app.state.engine.close()
        app.state.engine = None


def create_app(engine: Optional[ViewerEngine] = None) -> FastAPI:
    """
    Build the API application.

    Args:
        engine: engine to serve; when omitted one is built from settings
            at startup and closed at shutdown
    """
    app = FastAPI(title="SQL Viewer API", version="1.0.0", lifespan=lifespan)
    app.state.engine = engine

    # Enable CORS for browser clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s -> %d (%.2f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - start_time) * 1000,
        )
        return response

    app.include_router(router)
    return app


app = create_app()


def main():
    """Run the API server."""
    import uvicorn

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
