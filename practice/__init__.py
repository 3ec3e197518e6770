"""Practice Module - Sessoes de pratica para a prova de board medica.

Arquitetura:
- models/: Enums, Schemas Pydantic, SessionState
- engine/: shuffle, SessionEngine, QuestionPresenter, SummaryEngine
- repository/: Banco de questoes (somente leitura)
- storage/: PreferenceStore (KV store)
- identity.py: Usuario atual e status de login
- catalog.py: Categorias oferecidas
- router.py: FastAPI endpoints
"""

from .engine import QuestionPresenter, SessionEngine, SummaryEngine, shuffle
from .exceptions import (
    InternalConsistencyError,
    InvalidPreferencesError,
    InvalidUserIdError,
    PracticeError,
    RepositoryError,
)
from .identity import AnonymousIdentity, IdentityProvider, StaticIdentity
from .models import Difficulty, FeedbackTier, Question, SessionState, UserPreferences
from .repository import InMemoryQuestionRepository, JsonQuestionRepository, QuestionRepository
from .storage import InMemoryKV, KVPreferenceStore, PreferenceStore

__all__ = [
    # Models
    "Difficulty",
    "FeedbackTier",
    "Question",
    "UserPreferences",
    "SessionState",
    # Engines
    "shuffle",
    "QuestionPresenter",
    "SessionEngine",
    "SummaryEngine",
    # Repository
    "QuestionRepository",
    "InMemoryQuestionRepository",
    "JsonQuestionRepository",
    # Storage
    "PreferenceStore",
    "KVPreferenceStore",
    "InMemoryKV",
    # Identity
    "IdentityProvider",
    "AnonymousIdentity",
    "StaticIdentity",
    # Errors
    "PracticeError",
    "InvalidPreferencesError",
    "InternalConsistencyError",
    "RepositoryError",
    "InvalidUserIdError",
]
