"""Practice Repository - Acesso ao banco de questoes."""

from .question_repository import (
    InMemoryQuestionRepository,
    JsonQuestionRepository,
    QuestionRepository,
    load_default_repository,
)

__all__ = [
    "QuestionRepository",
    "InMemoryQuestionRepository",
    "JsonQuestionRepository",
    "load_default_repository",
]
