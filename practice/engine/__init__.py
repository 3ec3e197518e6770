"""Practice Engines - Logica de sessao."""

from .presentation import PresentedQuestion, QuestionPresenter
from .session_engine import (
    SessionEngine,
    advance,
    filter_questions,
    record_answer,
    restart,
    skip,
    start_session,
)
from .shuffler import ShuffleResult, shuffle
from .summary_engine import SummaryEngine

__all__ = [
    "shuffle",
    "ShuffleResult",
    "PresentedQuestion",
    "QuestionPresenter",
    "SessionEngine",
    "SummaryEngine",
    "filter_questions",
    "start_session",
    "record_answer",
    "skip",
    "advance",
    "restart",
]
