"""Practice Exceptions - Erros do motor de sessao de pratica."""

from __future__ import annotations

from typing import Any


class PracticeError(Exception):
    """Erro base do modulo de pratica.

    Attributes:
        message: Mensagem legivel do erro
        details: Contexto adicional (ids, contagens) para logs e respostas HTTP
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {"error": type(self).__name__, "message": self.message, "details": self.details}


class InvalidPreferencesError(PracticeError):
    """Nenhuma categoria ou nenhuma dificuldade selecionada."""


class InternalConsistencyError(PracticeError):
    """Invariante da sessao violada (ex: contagem dupla de tentativas)."""


class RepositoryError(PracticeError):
    """Banco de questoes malformado ou com ids duplicados."""


class InvalidUserIdError(PracticeError):
    """Identificador de usuario com formato invalido."""
