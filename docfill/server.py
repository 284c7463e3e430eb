"""
FastAPI server for docfill.

Exposes template listing, text and file extraction, and pipeline
settings. Routes live on ``router`` so a parent application can mount
them via ``include_router(router)``; ``app`` is the standalone entry
point.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from docfill import __version__
from docfill.config import PipelineConfig
from docfill.intake import IntakeError, TextIntake
from docfill.pipeline import ExtractionPipeline
from docfill.schemas import UnknownSchemaError

logger = logging.getLogger(__name__)

router = APIRouter()

app = FastAPI(
    title="docfill API",
    description="Rule-based field extraction and validation for document templates",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Module-level state
# ---------------------------------------------------------------------------

_state: dict[str, Any] = {}


def configure(config: PipelineConfig | None = None) -> ExtractionPipeline:
    """(Re)build the pipeline and intake for a configuration.

    Args:
        config: Settings to apply. Defaults to PipelineConfig().

    Returns:
        The active ExtractionPipeline.
    """
    config = config or PipelineConfig()
    pipeline = ExtractionPipeline(config)
    _state["config"] = config
    _state["pipeline"] = pipeline
    _state["intake"] = TextIntake(config)
    return pipeline


def _get_pipeline() -> ExtractionPipeline:
    if "pipeline" not in _state:
        return configure()
    return _state["pipeline"]


def _get_intake() -> TextIntake:
    if "intake" not in _state:
        configure()
    return _state["intake"]


configure()


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class ExtractRequest(BaseModel):
    """Request body for text extraction."""

    text: str
    template: str = Field(..., min_length=1)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("/api/health")
def health() -> dict[str, Any]:
    """Health check."""
    return {"status": "ok", "version": __version__}


@router.get("/api/templates")
def list_templates() -> list[dict[str, Any]]:
    """List the available template schemas."""
    return [schema.to_dict() for schema in _get_pipeline().registry]


@router.post("/api/extract")
def extract(request: ExtractRequest) -> dict[str, Any]:
    """Extract and validate fields from raw text."""
    pipeline = _get_pipeline()
    try:
        schema = pipeline.registry.require(request.template)
    except UnknownSchemaError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if not request.text.strip():
        raise HTTPException(status_code=400, detail="Text is required")

    return pipeline.process(request.text, schema.id).to_dict()


@router.post("/api/extract/upload")
def extract_upload(
    template: str,
    file: UploadFile = File(...),
) -> dict[str, Any]:
    """Extract and validate fields from an uploaded file.

    Args:
        template: Template schema identifier.
        file: The uploaded file.
    """
    pipeline = _get_pipeline()
    try:
        schema = pipeline.registry.require(template)
    except UnknownSchemaError as e:
        raise HTTPException(status_code=404, detail=str(e))

    data = file.file.read()
    try:
        intake = _get_intake().read_bytes(data, file.filename, file.content_type)
    except IntakeError as e:
        raise HTTPException(status_code=400, detail=e.to_dict())

    result = pipeline.process(intake.text, schema.id).to_dict()
    result["source"] = intake.to_dict()
    return result


@router.get("/api/settings")
def get_settings() -> dict[str, Any]:
    """Get current pipeline settings."""
    _get_pipeline()
    return _state["config"].to_dict()


@router.post("/api/settings")
def update_settings(changes: dict[str, Any]) -> dict[str, Any]:
    """Update pipeline settings.

    Only keys present in the request are changed; unknown keys, values
    of the wrong type and out-of-range values are rejected.
    """
    _get_pipeline()
    try:
        config = _state["config"].updated(changes)
    except (TypeError, ValueError) as e:
        logger.warning("Rejected settings update %s: %s", changes, e)
        raise HTTPException(status_code=400, detail=str(e))

    configure(config)
    logger.info("Settings updated: %s", ", ".join(sorted(changes)) or "none")
    return config.to_dict()


app.include_router(router)


def run_server(host: str = "127.0.0.1", port: int = 8430) -> None:
    """Run the docfill server.

    Args:
        host: Bind address. Defaults to localhost.
        port: Port number. Defaults to 8430.
    """
    import uvicorn

    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    run_server()
