"""Summary Engine - Agregacao de desempenho e faixas de feedback."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..models.enums import FeedbackTier
from ..models.schemas import CategorySummary, Question, SessionSummary
from ..models.state import SessionState


class SummaryEngine:
    """Motor de resumo da sessao de pratica.

    Calcula percentual geral, desempenho por categoria e a faixa de
    feedback exibida no fim da sessao.

    Percentual:
        corretas / (total - puladas) * 100, ou 0 se todas foram puladas

    Faixas de feedback:
        - Todas puladas: faixa propria, independente do percentual
        - 100%: Perfect Score
        - 80-99%: Excellent Performance
        - 70-79%: Good Progress
        - 60-69%: Keep Going
        - <60%: Room for Improvement

    Example:
        >>> engine = SummaryEngine()
        >>> tier, title, message = engine.calculate_tier(85.0, skipped_count=0, total=5)
        >>> print(title)  # "Excellent Performance! 🌟"
    """

    # (threshold, tier, title, mensagem sem puladas, mensagem com puladas)
    FEEDBACK_TIERS = [
        (
            100,
            FeedbackTier.PERFECT,
            "Perfect Score! 🎉",
            "Outstanding work! You've mastered these concepts completely. "
            "Keep up the excellent work!",
            "Outstanding work on the questions you attempted! "
            "Try the {skipped} when you feel ready.",
        ),
        (
            80,
            FeedbackTier.EXCELLENT,
            "Excellent Performance! 🌟",
            "Great job! You're showing strong understanding of the material. "
            "Focus on the few questions you missed to achieve perfection.",
            "Great job on the questions you attempted! Review the ones you missed "
            "and try the {skipped} when ready.",
        ),
        (
            70,
            FeedbackTier.GOOD,
            "Good Progress! 👍",
            "You're on the right track! Review the questions you missed to "
            "strengthen your knowledge in those areas.",
            "You're on the right track! Review the questions you missed and tackle "
            "the {skipped} after some study.",
        ),
        (
            60,
            FeedbackTier.KEEP_GOING,
            "Keep Going! 💪",
            "You're making progress! Focus on understanding the explanations for "
            "the questions you missed.",
            "You're making progress! Review the material, then try both the missed "
            "and {skipped}.",
        ),
        (
            0,
            FeedbackTier.NEEDS_REVIEW,
            "Room for Improvement 📚",
            "Don't get discouraged! Use the explanations as learning opportunities "
            "and try again after reviewing the material.",
            "Don't get discouraged! Review the material thoroughly before attempting "
            "the {skipped}.",
        ),
    ]

    ALL_SKIPPED = (
        FeedbackTier.ALL_SKIPPED,
        "No Questions Attempted 🤔",
        "Try answering some questions! It's okay to make mistakes - that's how we learn.",
    )

    @staticmethod
    def calculate_percentage(correct_count: int, total: int, skipped_count: int) -> float:
        graded = total - skipped_count
        return (correct_count / graded * 100) if graded > 0 else 0.0

    def calculate_tier(
        self, percentage: float, skipped_count: int, total: int
    ) -> tuple[FeedbackTier, str, str]:
        """Escolhe a faixa de feedback.

        Args:
            percentage: Percentual de acerto (0-100)
            skipped_count: Quantidade de questoes puladas
            total: Total de questoes da sessao

        Returns:
            Tuple de (tier, title, message)
        """
        if skipped_count == total:
            return self.ALL_SKIPPED

        skipped_phrase = f"{skipped_count} skipped question{'s' if skipped_count > 1 else ''}"
        for threshold, tier, title, message, message_with_skips in self.FEEDBACK_TIERS:
            if percentage >= threshold:
                if skipped_count > 0:
                    return tier, title, message_with_skips.format(skipped=skipped_phrase)
                return tier, title, message

        # Percentual negativo nao ocorre; cai na ultima faixa
        _, tier, title, message, _ = self.FEEDBACK_TIERS[-1]
        return tier, title, message

    def summarize_categories(
        self,
        questions: Sequence[Question],
        answered: Iterable[int],
        correct: Iterable[int],
        skipped: Iterable[int],
    ) -> list[CategorySummary]:
        """Agrupa por nome de categoria, ordenado por total decrescente (estavel)."""
        answered, correct, skipped = set(answered), set(correct), set(skipped)
        groups: dict[str, CategorySummary] = {}

        for index, question in enumerate(questions):
            name = question.category.name
            summary = groups.setdefault(name, CategorySummary(name=name))
            summary.total += 1

            if index in skipped:
                summary.skipped += 1
            elif index in correct:
                summary.correct += 1
            elif index in answered:
                summary.incorrect += 1

        return sorted(groups.values(), key=lambda c: c.total, reverse=True)

    def summarize(
        self,
        questions: Sequence[Question],
        answered: Iterable[int],
        correct: Iterable[int],
        skipped: Iterable[int],
    ) -> SessionSummary:
        """Calcula o resumo completo de uma sessao finalizada ou abortada.

        Args:
            questions: Questoes da sessao, na ordem sorteada
            answered: Posicoes respondidas
            correct: Posicoes respondidas corretamente (subconjunto de answered)
            skipped: Posicoes puladas

        Returns:
            SessionSummary com percentual, categorias e faixa de feedback
        """
        answered, correct, skipped = set(answered), set(correct), set(skipped)
        total = len(questions)
        percentage = self.calculate_percentage(len(correct), total, len(skipped))
        tier, title, message = self.calculate_tier(percentage, len(skipped), total)

        return SessionSummary(
            total_questions=total,
            correct_count=len(correct),
            graded_count=total - len(skipped),
            skipped_count=len(skipped),
            overall_percentage=percentage,
            categories=self.summarize_categories(questions, answered, correct, skipped),
            tier=tier,
            title=title,
            message=message,
        )

    def summarize_state(self, state: SessionState) -> SessionSummary:
        return self.summarize(state.questions, state.answered, state.correct, state.skipped)
