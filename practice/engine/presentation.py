"""Presentation - Embaralhamento das alternativas da questao exibida."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from ..models.schemas import Question
from .shuffler import shuffle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PresentedQuestion:
    """Copia local da questao com alternativas permutadas.

    `question.correct_answer` ja esta remapeado para a ordem exibida.
    """

    question: Question
    original_indices: tuple[int, ...]

    @property
    def id(self) -> str:
        return self.question.id

    @property
    def options(self) -> list[str]:
        return self.question.options

    @property
    def correct_answer(self) -> int:
        return self.question.correct_answer

    def get_original_index(self, presented_index: int) -> int:
        """Converte indice exibido para o indice canonico do banco."""
        return self.original_indices[presented_index]


class QuestionPresenter:
    """Embaralha as alternativas da questao atual, com memoizacao.

    So reembaralha quando a identidade da questao (`id`) muda; chamadas
    repetidas para a mesma questao devolvem a mesma apresentacao, entao o
    usuario ve ordem fixa enquanto responde.

    Example:
        >>> presenter = QuestionPresenter()
        >>> first = presenter.present(question)
        >>> presenter.present(question) is first
        True
    """

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng
        self._cache_key: str | None = None
        self._cached: PresentedQuestion | None = None

    def present(self, question: Question) -> PresentedQuestion:
        if self._cached is not None and self._cache_key == question.id:
            return self._cached

        result = shuffle(question.options, self._rng)
        presented = PresentedQuestion(
            question=question.with_options(
                result.shuffled, result.new_position(question.correct_answer)
            ),
            original_indices=tuple(result.original_indices),
        )
        self._cache_key = question.id
        self._cached = presented
        logger.debug(f"Alternativas embaralhadas para questao {question.id}: {result.original_indices}")
        return presented

    def reset(self) -> None:
        """Descarta a apresentacao em cache (nova sessao)."""
        self._cache_key = None
        self._cached = None
