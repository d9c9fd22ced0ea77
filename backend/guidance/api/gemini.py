from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from typing import Any
import json
import logging

from guidance.api.dependencies import get_llm_service
from guidance.exceptions import InvalidRequest, UpstreamError
from guidance.services.llm_service import GeminiService

logger = logging.getLogger(__name__)

router = APIRouter()


async def _read_prompt(request: Request) -> Any:
    """Pull `prompt` out of the JSON body; anything that is not an object yields None."""
    raw = await request.body()
    if not raw:
        return None
    try:
        data = json.loads(raw)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    return data.get("prompt")


@router.post("")
async def generate(
    request: Request,
    llm: GeminiService = Depends(get_llm_service),
):
    """Forward a prompt to Gemini; the API key never leaves the server.

    The body is read by hand rather than through a pydantic model so that a
    missing, malformed or non-object body gets the 400 below instead of a 422.
    """
    prompt = await _read_prompt(request)
    try:
        return await llm.generate(prompt)
    except InvalidRequest as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except UpstreamError as e:
        logger.error("Gemini proxy failed: %s (status=%s)", e, e.status_code)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})
