# app_builder/api/extract.py
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from app_builder.core.errors import ExtractionError, InvalidInput
from app_builder.core.extractor import Extractor
from app_builder.core.llm_client import GeminiCompletionClient
from app_builder.core.mock_ui import build_preview
from app_builder.models import AppSpec, PreviewResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def get_extractor(app: FastAPI) -> Extractor:
    """Extractor over the client held on app.state; the Gemini client is built on first use."""
    state = app.state
    if state.client is None:
        state.client = GeminiCompletionClient.from_settings(state.settings)
    return Extractor(state.client, state.settings)


@router.post("/extract")
async def extract(request: Request):
    """
    Request JSON: {"description": "free text, first 2000 chars are used"}
    Response: the validated AppSpec
      {"app_name": "...", "entities": [...], "roles": [...]}
    """
    try:
        payload = await request.json()
    except ValueError:
        payload = None
    if not isinstance(payload, dict):
        raise InvalidInput()
    description = payload.get("description")
    # reject before the client is built: no key should still give a 400 here
    if not description or not isinstance(description, str):
        raise InvalidInput()

    try:
        extractor = get_extractor(request.app)
        app_spec = await run_in_threadpool(extractor.extract, description)
    except ExtractionError:
        raise
    except Exception as e:
        logger.exception("Server error")
        return JSONResponse(status_code=500, content={"error": "Server error", "details": str(e)})
    return app_spec.model_dump()


@router.post("/preview", response_model=PreviewResponse)
async def preview(app_spec: AppSpec, seed: Optional[int] = None):
    """
    Mock UI for an extracted AppSpec: one view per role action.
    'detected' is false when the model found no app in the description.
    """
    return build_preview(app_spec, seed=seed)


async def handle_extraction_error(request: Request, exc: ExtractionError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


def health_payload(app: FastAPI) -> Dict[str, Any]:
    return {"status": "ok", "model": app.state.settings.model}
