"""
Word-Help HTTP Handlers

Receives word lookups from the reading UI and returns generated text.
This module is I/O only and does NOT contain business logic.

Response mapping:
  WordHelpResult                       → 200 {word, definition, imagePrompt}
  ValidationError                      → 400 {error: "Word is required"}
  GenerationFailure(stage=resolution)  → 500 {error: "Server not ready", message}
  GenerationFailure(other stage)       → 500 {error: "Failed to process word", message}
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from kindred.errors import ValidationError
from kindred.service import WordHelpService
from kindred.types import GenerationFailure

# Setup logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api", tags=["word-help"])

WORD_REQUIRED = "Word is required"


class WordHelpRequest(BaseModel):
    """Body of every word endpoint. Type checks happen in the service."""

    word: Optional[Any] = None


def get_word_help_service(request: Request) -> WordHelpService:
    return request.app.state.word_help_service


def word_required_response() -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": WORD_REQUIRED})


def failure_response(failure: GenerationFailure) -> JSONResponse:
    if failure.stage == "resolution":
        return JSONResponse(
            status_code=500,
            content={"error": "Server not ready", "message": failure.message},
        )
    return JSONResponse(
        status_code=500,
        content={"error": "Failed to process word", "message": failure.message},
    )


@router.post("/word-help")
async def word_help(body: WordHelpRequest, request: Request):
    """
    Definition and image prompt for one word.

    Expected payload:
        {"word": "cat"}

    Returns:
        {"word": "cat", "definition": "...", "imagePrompt": "..."}
    """
    service = get_word_help_service(request)
    try:
        outcome = await service.lookup(body.word)
    except ValidationError:
        return word_required_response()

    if isinstance(outcome, GenerationFailure):
        return failure_response(outcome)
    return outcome.to_dict()


@router.post("/define-word")
async def define_word(body: WordHelpRequest, request: Request):
    """Definition only: {"word", "definition"}."""
    service = get_word_help_service(request)
    try:
        outcome = await service.define(body.word)
    except ValidationError:
        return word_required_response()

    if isinstance(outcome, GenerationFailure):
        return failure_response(outcome)
    return {"word": body.word.strip(), "definition": outcome}


@router.post("/generate-image-prompt")
async def generate_image_prompt(body: WordHelpRequest, request: Request):
    """Image prompt only: {"word", "imagePrompt"}."""
    service = get_word_help_service(request)
    try:
        outcome = await service.describe_image(body.word)
    except ValidationError:
        return word_required_response()

    if isinstance(outcome, GenerationFailure):
        return failure_response(outcome)
    return {"word": body.word.strip(), "imagePrompt": outcome}
