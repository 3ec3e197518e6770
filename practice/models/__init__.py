"""Practice Models - Enums, Schemas e SessionState."""

from .enums import Difficulty, FeedbackTier, SessionPhase
from .schemas import (
    DEFAULT_QUESTION_COUNT,
    MAX_QUESTION_COUNT,
    MIN_QUESTION_COUNT,
    AnswerRequest,
    AnswerResponse,
    Category,
    CategoryInfo,
    CategorySummary,
    PreferencesResponse,
    PreferencesUpdateRequest,
    PresentedQuestionView,
    Question,
    SessionProgress,
    SessionStateResponse,
    SessionSummary,
    Topic,
    UserPreferences,
)
from .state import SessionState

__all__ = [
    # Enums
    "Difficulty",
    "FeedbackTier",
    "SessionPhase",
    # Limites
    "MIN_QUESTION_COUNT",
    "MAX_QUESTION_COUNT",
    "DEFAULT_QUESTION_COUNT",
    # Dominio
    "Category",
    "Topic",
    "Question",
    "UserPreferences",
    # API
    "AnswerRequest",
    "AnswerResponse",
    "CategoryInfo",
    "CategorySummary",
    "PreferencesResponse",
    "PreferencesUpdateRequest",
    "PresentedQuestionView",
    "SessionProgress",
    "SessionStateResponse",
    "SessionSummary",
    # State
    "SessionState",
]
