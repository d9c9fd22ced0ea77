"""
Logged AI-assisted exchange within a session.
Append-only: rows are never updated or deleted, duplicates are allowed.
"""
from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from guidance.database.connection import Base


class Interaction(Base):
    __tablename__ = "interactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(Integer, ForeignKey("sessions.id"), nullable=False, index=True)

    feature_title = Column(Text, nullable=True)
    user_input = Column(Text, nullable=True)
    ai_output = Column(Text, nullable=True)  # cleaned text as shown to the student

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    session = relationship("CounselingSession", back_populates="interactions")
