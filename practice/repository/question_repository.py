"""Question Repository - Banco de questoes imutavel."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..exceptions import RepositoryError
from ..models.schemas import Category, Question

logger = logging.getLogger(__name__)

DEFAULT_BANK_PACKAGE = "practice"
DEFAULT_BANK_RESOURCE = "data/question_bank.json"


class QuestionRepository(ABC):
    """Colecao ordenada e imutavel de questoes, carregada uma vez."""

    @abstractmethod
    def get_all(self) -> list[Question]:
        pass

    def categories(self) -> list[Category]:
        """Categorias presentes no banco, na ordem de aparicao."""
        seen: dict[str, Category] = {}
        for question in self.get_all():
            seen.setdefault(question.category.id, question.category)
        return list(seen.values())


class InMemoryQuestionRepository(QuestionRepository):
    """Banco em memoria; valida ids unicos na construcao."""

    def __init__(self, questions: Iterable[Question]):
        self._questions = tuple(questions)
        _validate_unique_ids(self._questions)

    def get_all(self) -> list[Question]:
        return list(self._questions)

    def __len__(self) -> int:
        return len(self._questions)


class JsonQuestionRepository(InMemoryQuestionRepository):
    """Banco carregado de um arquivo JSON (lista de questoes)."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        raw = json.loads(self.path.read_text(encoding="utf-8"))
        super().__init__(_questions_from_raw(raw, source=str(self.path)))
        logger.info(f"Banco de questoes carregado: {len(self)} questoes de {self.path}")


def load_default_repository() -> InMemoryQuestionRepository:
    """Carrega o banco embutido no pacote."""
    resource = resources.files(DEFAULT_BANK_PACKAGE).joinpath(DEFAULT_BANK_RESOURCE)
    raw = json.loads(resource.read_text(encoding="utf-8"))
    repository = InMemoryQuestionRepository(_questions_from_raw(raw, source=DEFAULT_BANK_RESOURCE))
    logger.info(f"Banco de questoes embutido carregado: {len(repository)} questoes")
    return repository


def _questions_from_raw(raw: Any, source: str) -> list[Question]:
    if isinstance(raw, dict):
        raw = raw.get("questions", [])
    if not isinstance(raw, list):
        raise RepositoryError("Banco de questoes deve ser uma lista", details={"source": source})

    questions = []
    for position, item in enumerate(raw):
        try:
            questions.append(Question.model_validate(item))
        except ValidationError as e:
            raise RepositoryError(
                f"Questao invalida na posicao {position}",
                details={"source": source, "errors": e.error_count()},
            ) from e
    return questions


def _validate_unique_ids(questions: Iterable[Question]) -> None:
    seen: set[str] = set()
    for question in questions:
        if question.id in seen:
            raise RepositoryError(
                f"ID de questao duplicado: {question.id}", details={"question_id": question.id}
            )
        seen.add(question.id)
