"""
Dependency functions: services are built from what create_app() put on app.state
"""
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from guidance.database.connection import get_db
from guidance.services.llm_service import GeminiService
from guidance.services.session_log_service import SessionLogService


def get_session_log_service(db: AsyncSession = Depends(get_db)) -> SessionLogService:
    return SessionLogService(db)


def get_llm_service(request: Request) -> GeminiService:
    return request.app.state.llm_service
