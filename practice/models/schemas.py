"""Practice Schemas - Modelos Pydantic do banco de questoes e da API."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .enums import Difficulty, FeedbackTier, SessionPhase

logger = logging.getLogger(__name__)

MIN_QUESTION_COUNT = 3
MAX_QUESTION_COUNT = 15
DEFAULT_QUESTION_COUNT = 10


class Category(BaseModel):
    """Grande area medica (ex: Cardiology) que agrupa topicos."""

    id: str = Field(..., description="Slug da categoria (ex: cardiology)")
    name: str = Field(..., description="Nome exibido da categoria")
    description: str = Field(default="", description="Descricao curta da area")


class Topic(BaseModel):
    """Topico especifico dentro de uma categoria."""

    id: str
    name: str
    category: Category
    subtopics: list[str] = Field(default_factory=list)


class Question(BaseModel):
    """Questao de multipla escolha do banco (imutavel).

    `correct_answer` sempre aponta para uma posicao valida de `options`;
    o validador roda de novo sempre que as alternativas sao permutadas
    via `with_options`.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="ID unico dentro do banco")
    text: str = Field(..., description="Enunciado da questao")
    options: list[str] = Field(..., min_length=2, description="Alternativas na ordem atual")
    correct_answer: int = Field(
        ..., ge=0, alias="correctAnswer", description="Indice da alternativa correta"
    )
    explanation: str = Field(default="", description="Explicacao da resposta correta")
    topic: Topic
    difficulty: Difficulty = Difficulty.MEDIUM
    tags: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_correct_answer(self) -> Question:
        if self.correct_answer >= len(self.options):
            raise ValueError(
                f"correct_answer {self.correct_answer} fora do intervalo "
                f"de {len(self.options)} alternativas (questao {self.id})"
            )
        return self

    @property
    def category(self) -> Category:
        return self.topic.category

    def with_options(self, options: list[str], correct_answer: int) -> Question:
        """Retorna copia com alternativas reordenadas (revalidada)."""
        data = self.model_dump()
        data["options"] = list(options)
        data["correct_answer"] = correct_answer
        return Question.model_validate(data)


class UserPreferences(BaseModel):
    """Preferencias do usuario para sortear sessoes.

    Persistido como JSON plano:
    `{"categories": [...], "questionCount": n, "difficulties": [...]}`.
    """

    model_config = ConfigDict(populate_by_name=True)

    categories: list[str] = Field(default_factory=list, description="IDs das categorias")
    question_count: int = Field(
        default=DEFAULT_QUESTION_COUNT,
        ge=0,
        alias="questionCount",
        description="Tamanho desejado da sessao (limitado ao total disponivel)",
    )
    difficulties: list[Difficulty] = Field(default_factory=lambda: list(Difficulty))

    @classmethod
    def onboarding_defaults(cls, question_count: int = DEFAULT_QUESTION_COUNT) -> UserPreferences:
        """Valores iniciais do onboarding: sem categorias, 10 questoes, todas dificuldades."""
        return cls(question_count=question_count)

    @classmethod
    def from_json(cls, raw: str | bytes | None) -> UserPreferences | None:
        """Desserializa o blob persistido; JSON invalido vira ausencia."""
        if not raw:
            return None
        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Preferencias persistidas invalidas, ignorando: {e.error_count()} erro(s)")
            return None

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    def is_startable(self) -> bool:
        """Sessao so pode comecar com ao menos uma categoria e uma dificuldade."""
        return bool(self.categories) and bool(self.difficulties)

    def merge(self, **updates) -> UserPreferences:
        """Aplica atualizacao parcial (nomes de campo) e revalida."""
        data = self.model_dump()
        data.update({k: v for k, v in updates.items() if v is not None})
        return UserPreferences.model_validate(data)

    def toggle_category(self, category_id: str) -> UserPreferences:
        selected = list(self.categories)
        if category_id in selected:
            selected.remove(category_id)
        else:
            selected.append(category_id)
        return self.merge(categories=selected)

    def toggle_difficulty(self, difficulty: Difficulty | str) -> UserPreferences:
        """Alterna uma dificuldade, sem nunca remover a ultima selecionada."""
        difficulty = Difficulty(difficulty)
        selected = list(self.difficulties)
        if difficulty in selected:
            if len(selected) > 1:
                selected.remove(difficulty)
        else:
            selected.append(difficulty)
        return self.merge(difficulties=selected)


# =============================================================================
# API - request/response
# =============================================================================


class PreferencesUpdateRequest(BaseModel):
    """Atualizacao (total ou parcial) das preferencias vinda da UI."""

    model_config = ConfigDict(populate_by_name=True)

    categories: list[str] | None = Field(default=None, description="IDs das categorias")
    question_count: int | None = Field(
        default=None,
        ge=1,
        alias="questionCount",
        description="Numero de questoes (limites em PracticeConfig)",
    )
    difficulties: list[Difficulty] | None = Field(
        default=None, min_length=1, description="Dificuldades (ao menos uma)"
    )


class PreferencesResponse(BaseModel):
    """Preferencias atuais e se a ultima gravacao foi confirmada."""

    preferences: UserPreferences | None
    persisted: bool = True


class CategoryInfo(BaseModel):
    """Entrada do catalogo de categorias."""

    id: str
    name: str
    description: str
    emoji: str = ""


class AnswerRequest(BaseModel):
    """Resposta do usuario na ordem de alternativas apresentada."""

    selected_index: int = Field(..., ge=0, description="Indice da alternativa apresentada")


class PresentedQuestionView(BaseModel):
    """Questao atual como exibida (alternativas embaralhadas, sem gabarito)."""

    id: str
    text: str
    options: list[str]
    difficulty: Difficulty
    topic: Topic
    tags: list[str]


class SessionProgress(BaseModel):
    """Contadores do cabecalho: respondidas, puladas, 'questao k de n'."""

    answered: int
    skipped: int
    attempted: int
    total: int
    current_number: int


class SessionStateResponse(BaseModel):
    """Estado da sessao exposto (somente leitura) para a camada de apresentacao."""

    phase: SessionPhase
    total_questions: int
    position: int
    answered: list[int]
    correct: list[int]
    skipped: list[int]
    terminal: bool
    progress: SessionProgress
    current_question: PresentedQuestionView | None = None
    prompt_sign_in: bool = False


class AnswerResponse(BaseModel):
    """Resultado de uma resposta: correcao na ordem apresentada e explicacao."""

    accepted: bool = Field(..., description="False se a questao ja havia sido tentada")
    is_correct: bool
    correct_index: int = Field(..., description="Indice correto na ordem apresentada")
    explanation: str
    state: SessionStateResponse


class CategorySummary(BaseModel):
    """Desempenho agregado de uma categoria na sessao."""

    name: str
    correct: int = 0
    incorrect: int = 0
    skipped: int = 0
    total: int = 0


class SessionSummary(BaseModel):
    """Resumo final da sessao com faixa de feedback."""

    total_questions: int
    correct_count: int
    graded_count: int = Field(..., description="Total menos puladas (denominador do percentual)")
    skipped_count: int
    overall_percentage: float = Field(..., description="Corretas / nao puladas * 100")
    categories: list[CategorySummary]
    tier: FeedbackTier
    title: str
    message: str
