"""
HTTP API

FastAPI application exposing the current resume:

    GET  /api/cv          current document as JSON
    POST /api/cv          sanitize a submission, persist it, return the result
    GET  /api/cv/pdf      programmatic PDF download
    GET  /api/cv/preview  HTML preview fragment (?standalone=true for a full page)

Static editor assets are served from PUBLIC_DIR when that directory exists.

Run with scripts/serve.py, or directly:
    uvicorn cvbuilder.api:app --port 3000
"""

import os
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from cvbuilder import __version__
from cvbuilder.api_logger import log_invalid_json, log_pdf_unavailable, log_static_assets
from cvbuilder.contexts.intake.normalizer import normalize_resume
from cvbuilder.contexts.rendering.composer import compose_pdf
from cvbuilder.contexts.rendering.strategies import (
    PDF_CONTENT_TYPE,
    PdfStrategy,
    ProgrammaticPdfStrategy,
)
from cvbuilder.contexts.storage.store import InMemoryResumeStore, ResumeStore
from cvbuilder.contexts.templating.preview import render_preview, render_preview_document

load_dotenv()

PUBLIC_DIR = Path(os.getenv("PUBLIC_DIR", "public"))
SERVER_PDF_ENABLED = os.getenv("SERVER_PDF_ENABLED", "true").lower() == "true"

PDF_FILENAME = "cv-builder.pdf"
PDF_ERROR_MESSAGE = "Failed to generate PDF"
PDF_DISABLED_MESSAGE = "Server PDF rendering is disabled"


class ErrorResponse(BaseModel):
    error: str


def get_store(request: Request) -> ResumeStore:
    return request.app.state.store


def create_app(
    store: Optional[ResumeStore] = None,
    pdf_strategies: Optional[Sequence[PdfStrategy]] = None,
    server_pdf_enabled: bool = SERVER_PDF_ENABLED,
    public_dir: Optional[Path] = PUBLIC_DIR,
) -> FastAPI:
    """
    Build the application.

    Args:
        store: Document store. Defaults to an InMemoryResumeStore seeded
               with the example resume
        pdf_strategies: Strategies for GET /api/cv/pdf, in order. Defaults to
                        programmatic drawing only; the snapshot path runs
                        client-side
        server_pdf_enabled: When False, GET /api/cv/pdf answers 503
        public_dir: Static asset directory (skipped if missing or None)

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(title="CV Builder", version=__version__)
    app.state.store = store if store is not None else InMemoryResumeStore()
    app.state.pdf_strategies = (
        list(pdf_strategies) if pdf_strategies is not None else [ProgrammaticPdfStrategy()]
    )
    app.state.server_pdf_enabled = server_pdf_enabled

    @app.get("/api/cv")
    def read_cv(store: ResumeStore = Depends(get_store)):
        return store.get().to_dict()

    @app.post("/api/cv")
    async def update_cv(request: Request, store: ResumeStore = Depends(get_store)):
        try:
            raw = await request.json()
        except ValueError:
            log_invalid_json()
            raw = None
        doc = normalize_resume(raw, store.get())
        store.set(doc)
        return doc.to_dict()

    @app.get(
        "/api/cv/pdf",
        response_class=Response,
        responses={500: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
    )
    def download_pdf(request: Request, store: ResumeStore = Depends(get_store)):
        if not request.app.state.server_pdf_enabled:
            log_pdf_unavailable(503, PDF_DISABLED_MESSAGE)
            return JSONResponse(status_code=503, content={"error": PDF_DISABLED_MESSAGE})

        result = compose_pdf(store.get(), request.app.state.pdf_strategies)
        if not result.success:
            log_pdf_unavailable(500, PDF_ERROR_MESSAGE)
            return JSONResponse(status_code=500, content={"error": PDF_ERROR_MESSAGE})

        return Response(
            content=result.pdf,
            media_type=PDF_CONTENT_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{PDF_FILENAME}"'},
        )

    @app.get("/api/cv/preview", response_class=HTMLResponse)
    def preview_cv(standalone: bool = False, store: ResumeStore = Depends(get_store)):
        doc = store.get()
        if standalone:
            return HTMLResponse(render_preview_document(doc))
        return HTMLResponse(render_preview(doc))

    # Mounted last so the API routes above take precedence
    if public_dir is not None and Path(public_dir).is_dir():
        app.mount("/", StaticFiles(directory=str(public_dir), html=True), name="public")
        log_static_assets(public_dir)

    return app


app = create_app()
