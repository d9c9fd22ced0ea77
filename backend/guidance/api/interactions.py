from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from guidance.api.dependencies import get_session_log_service
from guidance.exceptions import StorageError
from guidance.services.session_log_service import SessionLogService

router = APIRouter()


class InteractionCreate(BaseModel):
    session_id: int = Field(..., alias="sessionId")
    feature_title: str = Field(..., alias="featureTitle")
    user_input: str = Field(..., alias="userInput")
    ai_output: str = Field(..., alias="aiOutput")

    class Config:
        populate_by_name = True


@router.post("", status_code=201, response_class=Response)
async def record_interaction(
    req: InteractionCreate,
    service: SessionLogService = Depends(get_session_log_service),
):
    # no session existence check here; a dangling id is rejected by the store's foreign key
    try:
        await service.record_interaction(
            req.session_id,
            req.feature_title,
            req.user_input,
            req.ai_output,
        )
    except StorageError:
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    return Response(status_code=201)
