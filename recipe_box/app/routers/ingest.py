# recipe_box/app/routers/ingest.py
from __future__ import annotations

import logging
import time
from typing import Optional, Union

from fastapi import APIRouter, Depends, File, Form, UploadFile
from starlette.concurrency import run_in_threadpool

from recipe_box.app.config import settings
from recipe_box.app.deps import get_import_service
from recipe_box.app.schemas.ingest import (
    BatchSummaryData,
    ErrorResponse,
    RecipeClassificationResponse,
    RecipeDraft,
    ScrapeRequest,
    SummaryResponse,
)
from recipe_box.services.errors import InvalidRequestError, ServiceError
from recipe_box.services.ingest import RecipeImportService
from recipe_box.services.types import FileImportOutcome

log = logging.getLogger("ingest")
router = APIRouter(tags=["ingest"])

DEFAULT_MIME_TYPE = "application/octet-stream"
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _describe(exc: BaseException) -> str:
    message = str(exc).strip()
    return message or UNKNOWN_ERROR_MESSAGE


def _outcome_to_response(
    outcome: FileImportOutcome,
) -> Union[RecipeClassificationResponse, SummaryResponse]:
    if outcome.summary is not None:
        summary = outcome.summary
        return SummaryResponse(
            data=BatchSummaryData(
                message=summary.message,
                total=summary.total_urls,
                success=summary.success_count,
                errors=summary.error_count,
            )
        )
    return RecipeClassificationResponse(data=outcome.recipe or {})


@router.post("/scrape-recipe", response_model=RecipeDraft, responses=_ERROR_RESPONSES)
async def scrape_recipe(
    body: ScrapeRequest,
    service: RecipeImportService = Depends(get_import_service),
) -> RecipeDraft:
    if not body.userId or not (body.url or body.text):
        raise InvalidRequestError("URL and User ID are required")

    t0 = time.time()
    try:
        recipe = await run_in_threadpool(
            service.scrape_recipe,
            body.userId,
            url=body.url,
            text=body.text,
        )
    except ServiceError:
        log.warning("scrape.fail url=%s user=%s dt=%.2fs", body.url, body.userId, time.time() - t0)
        raise
    except Exception as exc:
        log.exception("scrape.error url=%s user=%s", body.url, body.userId)
        raise ServiceError(_describe(exc)) from exc

    log.info("scrape.ok url=%s user=%s dt=%.2fs", body.url, body.userId, time.time() - t0)
    return RecipeDraft(
        name=recipe.name,
        ingredients=recipe.ingredients,
        instructions=recipe.instructions,
    )


@router.post(
    "/ocr-recipe",
    response_model=Union[RecipeClassificationResponse, SummaryResponse],
    responses={**_ERROR_RESPONSES, 501: {"model": ErrorResponse}},
)
async def ocr_recipe(
    file: Optional[UploadFile] = File(default=None),
    userId: Optional[str] = Form(default=None),
    service: RecipeImportService = Depends(get_import_service),
) -> Union[RecipeClassificationResponse, SummaryResponse]:
    if file is None or not userId:
        raise InvalidRequestError("File and userId are required")

    file_bytes = await file.read()
    if len(file_bytes) > settings.MAX_UPLOAD_BYTES:
        raise InvalidRequestError(
            f"File too large. Maximum size: {settings.MAX_UPLOAD_BYTES // (1024 * 1024)}MB"
        )
    mime_type = file.content_type or DEFAULT_MIME_TYPE

    t0 = time.time()
    log.info("ocr.start user=%s mime=%s bytes=%d", userId, mime_type, len(file_bytes))
    try:
        outcome = await run_in_threadpool(service.import_file, userId, file_bytes, mime_type)
    except ServiceError:
        log.warning("ocr.fail user=%s dt=%.2fs", userId, time.time() - t0)
        raise
    except Exception as exc:
        log.exception("ocr.error user=%s", userId)
        raise ServiceError(f"Failed to process file: {_describe(exc)}") from exc

    log.info("ocr.ok user=%s kind=%s dt=%.2fs", userId, outcome.kind.value, time.time() - t0)
    return _outcome_to_response(outcome)
