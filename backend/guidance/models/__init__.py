from guidance.models.session import CounselingSession
from guidance.models.interaction import Interaction

__all__ = [
    "CounselingSession",
    "Interaction",
]
