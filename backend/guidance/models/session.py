from sqlalchemy import Column, Integer, Text, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from guidance.database.connection import Base


class CounselingSession(Base):
    """One guidance visit by one student."""
    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_name = Column(Text, nullable=True)
    ethnic_group = Column(Text, nullable=True)
    education_level = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    interactions = relationship("Interaction", back_populates="session")
