"""Session State - Estado de uma sessao de pratica em andamento."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .enums import SessionPhase
from .schemas import Question


@dataclass
class SessionState:
    """Estado completo de uma sessao de pratica.

    A sequencia de questoes e fixada no sorteio e nunca reembaralhada.
    As marcacoes por posicao ficam em tres vetores booleanos do tamanho
    da sessao; `correct` e subconjunto de `answered` e `answered` e
    disjunto de `skipped`.

    Attributes:
        questions: Questoes sorteadas, na ordem da sessao
        position: Indice da questao atual
        terminal: Se a sessao chegou ao resumo
    """

    questions: list[Question] = field(default_factory=list)
    position: int = 0
    terminal: bool = False
    _answered: list[bool] = field(init=False, repr=False)
    _correct: list[bool] = field(init=False, repr=False)
    _skipped: list[bool] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        size = len(self.questions)
        self._answered = [False] * size
        self._correct = [False] * size
        self._skipped = [False] * size

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def phase(self) -> SessionPhase:
        return SessionPhase.SUMMARY if self.terminal else SessionPhase.ACTIVE

    @property
    def answered(self) -> frozenset[int]:
        return frozenset(i for i, flag in enumerate(self._answered) if flag)

    @property
    def correct(self) -> frozenset[int]:
        return frozenset(i for i, flag in enumerate(self._correct) if flag)

    @property
    def skipped(self) -> frozenset[int]:
        return frozenset(i for i, flag in enumerate(self._skipped) if flag)

    @property
    def attempted_count(self) -> int:
        return sum(self._answered) + sum(self._skipped)

    def is_attempted(self, position: int) -> bool:
        return self._answered[position] or self._skipped[position]

    def current_question(self) -> Question | None:
        if self.terminal or not (0 <= self.position < self.total):
            return None
        return self.questions[self.position]

    def mark_answered(self, position: int, is_correct: bool) -> None:
        """Marca posicao como respondida (e correta, se for o caso)."""
        self._answered[position] = True
        self._correct[position] = is_correct

    def mark_skipped(self, position: int) -> None:
        self._skipped[position] = True

    def progress(self) -> dict[str, int]:
        """Contadores para o cabecalho ('questao k de n')."""
        return {
            "answered": sum(self._answered),
            "skipped": sum(self._skipped),
            "attempted": self.attempted_count,
            "total": self.total,
            "current_number": self.position + 1 if self.total else 0,
        }

    def to_dict(self) -> dict[str, Any]:
        """Converte para dicionario (para a camada de apresentacao)."""
        return {
            "questions": [q.model_dump(by_alias=True) for q in self.questions],
            "position": self.position,
            "answered": sorted(self.answered),
            "correct": sorted(self.correct),
            "skipped": sorted(self.skipped),
            "terminal": self.terminal,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SessionState:
        """Cria instancia a partir de dicionario."""
        questions = [
            q if isinstance(q, Question) else Question.model_validate(q)
            for q in data.get("questions", [])
        ]
        state = cls(
            questions=questions,
            position=data.get("position", 0),
            terminal=data.get("terminal", False),
        )
        correct = set(data.get("correct", []))
        for index in data.get("answered", []):
            state.mark_answered(index, index in correct)
        for index in data.get("skipped", []):
            state.mark_skipped(index)
        return state
