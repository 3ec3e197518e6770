"""Session Engine - Sorteio, sequencia e pontuacao de uma sessao de pratica."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence
from typing import Any

from ..exceptions import InternalConsistencyError
from ..identity import AnonymousIdentity, IdentityProvider
from ..models.enums import SessionPhase
from ..models.schemas import Question, SessionSummary, UserPreferences
from ..models.state import SessionState
from ..repository.question_repository import QuestionRepository
from ..storage.preference_store import PreferenceStore
from .presentation import PresentedQuestion, QuestionPresenter
from .shuffler import shuffle
from .summary_engine import SummaryEngine

logger = logging.getLogger(__name__)

# Convite de login para visitantes apos N questoes respondidas
SIGN_IN_PROMPT_AFTER = 2

StateListener = Callable[[dict[str, Any]], None]


# =============================================================================
# OPERACOES PURAS
# =============================================================================


def filter_questions(
    questions: Sequence[Question], preferences: UserPreferences
) -> list[Question]:
    """Questoes cuja categoria E dificuldade estao nas preferencias."""
    categories = set(preferences.categories)
    difficulties = set(preferences.difficulties)
    return [
        q for q in questions if q.category.id in categories and q.difficulty in difficulties
    ]


def start_session(
    questions: Sequence[Question],
    preferences: UserPreferences,
    rng: random.Random | None = None,
) -> SessionState:
    """Sorteia uma nova sessao.

    Filtra o banco pelas preferencias, embaralha os candidatos e fica com
    os primeiros `min(question_count, candidatos)`. Preferencias sem
    categoria/dificuldade ou filtro sem resultado geram sessao vazia
    (estado valido, nunca excecao).

    Args:
        questions: Banco completo (somente leitura)
        preferences: Preferencias atuais
        rng: Fonte aleatoria opcional (testes deterministicos)

    Returns:
        SessionState na posicao 0, sem tentativas
    """
    if not preferences.is_startable():
        logger.warning(
            f"Nao e possivel iniciar sessao: categorias={len(preferences.categories)}, "
            f"dificuldades={len(preferences.difficulties)}"
        )
        return SessionState(questions=[])

    candidates = filter_questions(questions, preferences)
    if not candidates:
        logger.warning(
            f"Nenhuma questao para categorias={preferences.categories} "
            f"dificuldades={[d.value for d in preferences.difficulties]}"
        )
        return SessionState(questions=[])

    count = min(preferences.question_count, len(candidates))
    selected = shuffle(candidates, rng).shuffled[:count]
    logger.info(f"Sessao sorteada: {count} de {len(candidates)} candidatas")
    return SessionState(questions=selected)


def restart(
    questions: Sequence[Question],
    preferences: UserPreferences,
    rng: random.Random | None = None,
) -> SessionState:
    """Refaz filtro e sorteio do zero (nunca reaproveita a sequencia anterior)."""
    return start_session(questions, preferences, rng)


def _can_attempt(state: SessionState) -> bool:
    if state.terminal or state.total == 0:
        return False
    return not state.is_attempted(state.position)


def record_answer(state: SessionState, selected_option_index: int) -> SessionState:
    """Registra resposta para a posicao atual (nao avanca).

    A comparacao e feita na ordem canonica de `options` da questao da
    sessao. Reenvio para posicao ja tentada e no-op: a primeira resposta
    e definitiva.
    """
    if not _can_attempt(state):
        logger.debug(f"Resposta ignorada na posicao {state.position} (ja tentada ou sessao encerrada)")
        return state

    question = state.questions[state.position]
    state.mark_answered(state.position, selected_option_index == question.correct_answer)
    return state


def skip(state: SessionState) -> SessionState:
    """Marca a posicao atual como pulada (nao avanca)."""
    if not _can_attempt(state):
        logger.debug(f"Pulo ignorado na posicao {state.position} (ja tentada ou sessao encerrada)")
        return state

    state.mark_skipped(state.position)
    return state


def advance(state: SessionState) -> SessionState:
    """Vai para a proxima posicao nao tentada, ou encerra a sessao.

    Raises:
        InternalConsistencyError: se ainda ha tentativas pendentes pela
            contagem mas nenhuma posicao livre e encontrada em uma volta
    """
    total = state.total
    if state.attempted_count == total:
        state.terminal = True
        return state

    for step in range(1, total + 1):
        candidate = (state.position + step) % total
        if not state.is_attempted(candidate):
            state.position = candidate
            return state

    raise InternalConsistencyError(
        "Nenhuma posicao livre encontrada com tentativas pendentes",
        details={"attempted": state.attempted_count, "total": total, "position": state.position},
    )


# =============================================================================
# MOTOR COM ESTADO (um usuario, uma sessao)
# =============================================================================


class SessionEngine:
    """Fachada de sessao para um unico usuario.

    Mantem preferencias em memoria (autoritativas assim que atualizadas),
    a sessao atual e a apresentacao embaralhada da questao corrente.
    Preferencias novas sempre forcam um sorteio novo.

    Respostas recebidas por `answer()` estao na ordem apresentada e sao
    convertidas para a ordem canonica antes de `record_answer`.

    Example:
        >>> engine = SessionEngine(repository, store, identity)
        >>> await engine.load_preferences()
        >>> presented = engine.current_question()
        >>> engine.answer(presented.correct_answer)
        >>> engine.next_question()
    """

    def __init__(
        self,
        repository: QuestionRepository,
        preference_store: PreferenceStore | None = None,
        identity: IdentityProvider | None = None,
        *,
        rng: random.Random | None = None,
        sign_in_prompt_after: int = SIGN_IN_PROMPT_AFTER,
    ):
        """Inicializa motor.

        Args:
            repository: Banco de questoes (somente leitura)
            preference_store: Persistencia das preferencias (opcional)
            identity: Usuario atual; padrao e visitante anonimo
            rng: Fonte aleatoria compartilhada por sorteio e apresentacao
            sign_in_prompt_after: Respostas antes do convite de login
        """
        self.repository = repository
        self.store = preference_store
        self.identity = identity or AnonymousIdentity()
        self.presenter = QuestionPresenter(rng)
        self.summary_engine = SummaryEngine()
        self.sign_in_prompt_after = sign_in_prompt_after
        self.preferences: UserPreferences | None = None
        self.state: SessionState | None = None
        self.should_prompt_sign_in = False
        self._rng = rng
        self._sign_in_prompted = False
        self._listeners: list[StateListener] = []

    @property
    def phase(self) -> SessionPhase:
        if self.state is None:
            return SessionPhase.UNINITIALIZED
        return self.state.phase

    # -------------------------------------------------------------------------
    # Observadores
    # -------------------------------------------------------------------------

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Registra callback chamado a cada mudanca de estado.

        O callback recebe uma copia (`SessionState.to_dict()`), nunca o
        estado vivo do motor.

        Returns:
            Funcao que cancela a inscricao
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self) -> None:
        if self.state is None:
            return
        snapshot = self.state.to_dict()
        for listener in list(self._listeners):
            listener(snapshot)

    # -------------------------------------------------------------------------
    # Preferencias
    # -------------------------------------------------------------------------

    async def load_preferences(
        self, fallback: UserPreferences | None = None
    ) -> UserPreferences | None:
        """Carrega preferencias persistidas e sorteia sessao se houver.

        Args:
            fallback: Usado quando o store nao tem registro (ex: cookie)
        """
        loaded = None
        if self.store is not None:
            try:
                loaded = await self.store.load()
            except Exception as e:
                logger.warning(f"Falha ao carregar preferencias de {self.identity.user_id}: {e}")

        if loaded is None:
            loaded = fallback

        if loaded is not None:
            self.preferences = loaded
            self.start()
        return self.preferences

    async def update_preferences(self, preferences: UserPreferences) -> bool:
        """Substitui preferencias, sorteia nova sessao e persiste.

        A sessao nova e sorteada antes da gravacao; falha ao persistir
        vira aviso e as preferencias em memoria continuam valendo.

        Returns:
            True se persistiu (ou nao ha store), False se a gravacao falhou
        """
        self.preferences = preferences
        self.start()

        if self.store is None:
            return True

        try:
            await self.store.save(preferences)
        except Exception as e:
            logger.warning(f"Falha ao salvar preferencias de {self.identity.user_id}: {e}")
            return False
        return True

    async def clear_preferences(self) -> bool:
        """Esquece preferencias e sessao (volta ao onboarding).

        Returns:
            True se o registro foi removido (ou nao ha store)
        """
        self.preferences = None
        self.state = None
        self.presenter.reset()
        self.should_prompt_sign_in = False
        self._sign_in_prompted = False

        if self.store is None:
            return True

        try:
            await self.store.clear()
        except Exception as e:
            logger.warning(f"Falha ao remover preferencias de {self.identity.user_id}: {e}")
            return False
        return True

    # -------------------------------------------------------------------------
    # Ciclo da sessao
    # -------------------------------------------------------------------------

    def start(self) -> SessionState:
        """Sorteia sessao nova com as preferencias atuais (zera progresso)."""
        preferences = self.preferences or UserPreferences.onboarding_defaults()
        self.state = start_session(self.repository.get_all(), preferences, self._rng)
        self.presenter.reset()
        self.should_prompt_sign_in = False
        self._sign_in_prompted = False
        self._publish()
        return self.state

    def restart(self) -> SessionState:
        logger.info(f"Reiniciando sessao de {self.identity.user_id}")
        return self.start()

    def _require_state(self) -> SessionState:
        if self.state is None:
            return self.start()
        return self.state

    def current_question(self) -> PresentedQuestion | None:
        """Questao atual com alternativas embaralhadas (estavel ate mudar)."""
        if self.state is None:
            return None
        question = self.state.current_question()
        if question is None:
            return None
        return self.presenter.present(question)

    def answer(self, presented_index: int) -> SessionState:
        """Registra resposta dada na ordem de alternativas exibida."""
        state = self._require_state()
        presented = self.current_question()
        if presented is None:
            return state

        if not 0 <= presented_index < len(presented.options):
            logger.warning(
                f"Indice {presented_index} fora das {len(presented.options)} alternativas; ignorado"
            )
            return state

        before = state.attempted_count
        record_answer(state, presented.get_original_index(presented_index))
        if state.attempted_count != before:
            self._check_sign_in_prompt(state)
            self._publish()
        return state

    def skip(self) -> SessionState:
        state = self._require_state()
        before = state.attempted_count
        skip(state)
        if state.attempted_count != before:
            self._publish()
        return state

    def next_question(self) -> SessionState:
        """Avanca para a proxima questao pendente ou para o resumo."""
        state = advance(self._require_state())
        if state.terminal:
            logger.info(
                f"Sessao concluida: {len(state.correct)}/{state.total} corretas, "
                f"{len(state.skipped)} puladas"
            )
        self._publish()
        return state

    def skip_and_advance(self) -> SessionState:
        """Pular na UI tambem avanca."""
        self.skip()
        return self.next_question()

    def summary(self) -> SessionSummary:
        """Resumo da sessao atual (finalizada ou abortada)."""
        return self.summary_engine.summarize_state(self._require_state())

    # -------------------------------------------------------------------------
    # Convite de login
    # -------------------------------------------------------------------------

    def _check_sign_in_prompt(self, state: SessionState) -> None:
        if self._sign_in_prompted or self.identity.is_signed_in():
            return
        if len(state.answered) == self.sign_in_prompt_after:
            self.should_prompt_sign_in = True
            self._sign_in_prompted = True

    def dismiss_sign_in_prompt(self) -> None:
        """Continuar como visitante."""
        self.should_prompt_sign_in = False
