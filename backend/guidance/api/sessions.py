from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from typing import Optional
import logging

from guidance.api.dependencies import get_session_log_service
from guidance.exceptions import StorageError
from guidance.services.session_log_service import SessionLogService

logger = logging.getLogger(__name__)

router = APIRouter()

ANONYMOUS_USER_NAME = "Pengguna Anonim"
GENERAL_GROUP = "Umum"


class SessionCreate(BaseModel):
    user_name: Optional[str] = Field(None, alias="userName")
    ethnic_group: Optional[str] = Field(None, alias="ethnicGroup")
    education_level: Optional[str] = Field(None, alias="educationLevel")

    class Config:
        populate_by_name = True


class SessionCreated(BaseModel):
    sessionId: int


def _or_default(value: Optional[str], default: str) -> str:
    if value is None or not value.strip():
        return default
    return value


@router.post("", status_code=201, response_model=SessionCreated)
async def create_session(
    req: SessionCreate,
    service: SessionLogService = Depends(get_session_log_service),
):
    """Start a guidance session; blank fields fall back to the anonymous/general labels."""
    try:
        session_id = await service.create_session(
            _or_default(req.user_name, ANONYMOUS_USER_NAME),
            _or_default(req.ethnic_group, GENERAL_GROUP),
            _or_default(req.education_level, GENERAL_GROUP),
        )
    except StorageError:
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    return SessionCreated(sessionId=session_id)
