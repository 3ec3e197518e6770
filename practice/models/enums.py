"""Practice Enums - Dificuldade, fases da sessao e faixas de feedback."""

from enum import Enum


class Difficulty(str, Enum):
    """Niveis de dificuldade das questoes."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class SessionPhase(str, Enum):
    """Fases do ciclo de vida de uma sessao de pratica."""

    UNINITIALIZED = "uninitialized"  # Nenhuma sessao sorteada ainda
    ACTIVE = "active"
    SUMMARY = "summary"  # Todas as questoes tentadas


class FeedbackTier(str, Enum):
    """Faixas de feedback do resumo da sessao."""

    ALL_SKIPPED = "all_skipped"  # Nenhuma questao respondida
    PERFECT = "perfect"  # 100%
    EXCELLENT = "excellent"  # 80-99%
    GOOD = "good"  # 70-79%
    KEEP_GOING = "keep_going"  # 60-69%
    NEEDS_REVIEW = "needs_review"  # <60%
