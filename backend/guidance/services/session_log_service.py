"""
Insert-only log of guidance sessions and the AI interactions inside them.
"""
import logging
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from guidance.exceptions import StorageError
from guidance.models.session import CounselingSession
from guidance.models.interaction import Interaction

logger = logging.getLogger(__name__)


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


class SessionLogService:
    """Sessions and interactions: only create, never read back, update or delete."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_session(
        self,
        user_name: Optional[str],
        ethnic_group: Optional[str],
        education_level: Optional[str],
    ) -> int:
        """Insert a session row and return its generated id.

        Values are stored as given (empty strings included); defaulting is
        done by the caller.
        """
        session = CounselingSession(
            user_name=_as_text(user_name),
            ethnic_group=_as_text(ethnic_group),
            education_level=_as_text(education_level),
        )
        try:
            self.db.add(session)
            await self.db.flush()
            session_id = session.id
            await self.db.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to create session: %s", e, exc_info=True)
            await self._rollback()
            raise StorageError("could not create session") from e

        logger.info("Created session id=%s", session_id)
        return session_id

    async def record_interaction(
        self,
        session_id: int,
        feature_title: str,
        user_input: str,
        ai_output: str,
    ) -> None:
        # existence of session_id is left to the foreign key constraint
        interaction = Interaction(
            session_id=session_id,
            feature_title=_as_text(feature_title),
            user_input=_as_text(user_input),
            ai_output=_as_text(ai_output),
        )
        try:
            self.db.add(interaction)
            await self.db.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to record interaction for session %s: %s", session_id, e, exc_info=True)
            await self._rollback()
            raise StorageError("could not record interaction") from e

        logger.info("Recorded interaction session_id=%s feature=%r", session_id, feature_title)

    async def _rollback(self) -> None:
        try:
            await self.db.rollback()
        except SQLAlchemyError as e:
            # connection already gone; the original error is what gets reported
            logger.warning("Rollback failed: %s", e)
