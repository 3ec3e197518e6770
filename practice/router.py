"""Practice Router - Endpoints FastAPI da sessao de pratica."""

from __future__ import annotations

import logging
import uuid
from urllib.parse import quote, unquote

from fastapi import APIRouter, Depends, Header, HTTPException, Request, Response

import app_state
from config import get_config
from utils.validators import validate_user_id

from .catalog import list_categories
from .engine.session_engine import SessionEngine
from .exceptions import InvalidPreferencesError, InvalidUserIdError
from .identity import AnonymousIdentity, IdentityProvider, StaticIdentity
from .models.enums import SessionPhase
from .models.schemas import (
    AnswerRequest,
    AnswerResponse,
    CategoryInfo,
    PreferencesResponse,
    PreferencesUpdateRequest,
    PresentedQuestionView,
    SessionProgress,
    SessionStateResponse,
    SessionSummary,
    UserPreferences,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/practice", tags=["Practice"])


# =============================================================================
# COOKIES
# =============================================================================


def read_preferences_cookie(request: Request) -> UserPreferences | None:
    raw = request.cookies.get(get_config().preferences_cookie_name)
    if not raw:
        return None
    return UserPreferences.from_json(unquote(raw))


def write_preferences_cookie(response: Response, preferences: UserPreferences) -> None:
    config = get_config()
    response.set_cookie(
        key=config.preferences_cookie_name,
        value=quote(preferences.to_json()),
        max_age=config.preferences_cookie_max_age,
        samesite="lax",
    )


# =============================================================================
# DEPENDENCY INJECTION
# =============================================================================


def get_identity(
    request: Request,
    response: Response,
    x_user_id: str | None = Header(default=None),
) -> IdentityProvider:
    """Usuario autenticado via X-User-Id; sem header vira visitante com cookie."""
    if x_user_id is not None:
        return StaticIdentity(validate_user_id(x_user_id))

    config = get_config()
    guest_id = request.cookies.get(config.guest_cookie_name)
    if guest_id:
        try:
            return AnonymousIdentity(validate_user_id(guest_id))
        except InvalidUserIdError:
            logger.warning("Cookie de visitante invalido, gerando novo id")

    guest_id = f"guest-{uuid.uuid4()}"
    response.set_cookie(
        key=config.guest_cookie_name,
        value=guest_id,
        max_age=config.preferences_cookie_max_age,
        samesite="lax",
    )
    return AnonymousIdentity(guest_id)


async def get_session_engine(
    request: Request,
    identity: IdentityProvider = Depends(get_identity),
) -> SessionEngine:
    """Dependency para obter o SessionEngine do usuario atual.

    O cookie de preferencias so vale para visitantes; usuario autenticado
    depende apenas do store.
    """
    fallback = None if identity.is_signed_in() else read_preferences_cookie(request)
    return await app_state.get_engine(identity, fallback)


def require_session(engine: SessionEngine) -> None:
    if engine.state is None:
        raise HTTPException(status_code=409, detail="Nenhuma sessao iniciada")


# =============================================================================
# RESPONSE BUILDERS
# =============================================================================


def build_state_response(engine: SessionEngine) -> SessionStateResponse:
    """Converte o estado do motor para o modelo exposto pela API."""
    state = engine.state
    if state is None:
        return SessionStateResponse(
            phase=SessionPhase.UNINITIALIZED,
            total_questions=0,
            position=0,
            answered=[],
            correct=[],
            skipped=[],
            terminal=False,
            progress=SessionProgress(answered=0, skipped=0, attempted=0, total=0, current_number=0),
        )

    current = None
    presented = engine.current_question()
    if presented is not None:
        question = presented.question
        current = PresentedQuestionView(
            id=question.id,
            text=question.text,
            options=question.options,
            difficulty=question.difficulty,
            topic=question.topic,
            tags=question.tags,
        )

    return SessionStateResponse(
        phase=state.phase,
        total_questions=state.total,
        position=state.position,
        answered=sorted(state.answered),
        correct=sorted(state.correct),
        skipped=sorted(state.skipped),
        terminal=state.terminal,
        progress=SessionProgress(**state.progress()),
        current_question=current,
        prompt_sign_in=engine.should_prompt_sign_in,
    )


# =============================================================================
# CATALOGO
# =============================================================================


@router.get("/categories", response_model=list[CategoryInfo])
async def get_categories():
    """Categorias na ordem do curriculo."""
    return list_categories()


# =============================================================================
# PREFERENCIAS
# =============================================================================


@router.get("/preferences", response_model=PreferencesResponse)
async def get_preferences(engine: SessionEngine = Depends(get_session_engine)):
    """Preferencias atuais (null antes do onboarding)."""
    return PreferencesResponse(preferences=engine.preferences)


def check_question_count(request: PreferencesUpdateRequest) -> None:
    """Valida questionCount contra os limites configurados (422 fora do intervalo)."""
    if request.question_count is None:
        return
    config = get_config()
    if not config.min_question_count <= request.question_count <= config.max_question_count:
        raise HTTPException(
            status_code=422,
            detail=(
                f"questionCount deve estar entre {config.min_question_count} "
                f"e {config.max_question_count}"
            ),
        )


async def _apply_preferences(
    engine: SessionEngine, preferences: UserPreferences, response: Response
) -> PreferencesResponse:
    persisted = await engine.update_preferences(preferences)
    write_preferences_cookie(response, preferences)
    logger.info(
        f"Preferencias de {engine.identity.user_id}: {len(preferences.categories)} categorias, "
        f"{preferences.question_count} questoes, persistido={persisted}"
    )
    return PreferencesResponse(preferences=preferences, persisted=persisted)


@router.put("/preferences", response_model=PreferencesResponse)
async def replace_preferences(
    request: PreferencesUpdateRequest,
    response: Response,
    engine: SessionEngine = Depends(get_session_engine),
):
    """Substitui preferencias (onboarding). Sorteia uma sessao nova."""
    check_question_count(request)
    base = UserPreferences.onboarding_defaults(get_config().default_question_count)
    preferences = base.merge(**request.model_dump())
    return await _apply_preferences(engine, preferences, response)


@router.patch("/preferences", response_model=PreferencesResponse)
async def update_preferences(
    request: PreferencesUpdateRequest,
    response: Response,
    engine: SessionEngine = Depends(get_session_engine),
):
    """Atualiza parte das preferencias (painel de ajustes). Sorteia uma sessao nova."""
    check_question_count(request)
    base = engine.preferences or UserPreferences.onboarding_defaults(
        get_config().default_question_count
    )
    preferences = base.merge(**request.model_dump(exclude_unset=True))
    return await _apply_preferences(engine, preferences, response)


@router.delete("/preferences", response_model=PreferencesResponse)
async def clear_preferences(
    response: Response,
    engine: SessionEngine = Depends(get_session_engine),
):
    """Esquece preferencias e sessao; o proximo acesso volta ao onboarding."""
    persisted = await engine.clear_preferences()
    response.delete_cookie(get_config().preferences_cookie_name)
    logger.info(f"Preferencias de {engine.identity.user_id} removidas")
    return PreferencesResponse(preferences=None, persisted=persisted)


# =============================================================================
# SESSAO
# =============================================================================


def _start(engine: SessionEngine, restart: bool) -> SessionStateResponse:
    if engine.preferences is None:
        raise HTTPException(status_code=409, detail="Defina as preferencias antes de iniciar")
    if not engine.preferences.is_startable():
        raise InvalidPreferencesError(
            "Selecione ao menos uma categoria e uma dificuldade",
            details={
                "categories": len(engine.preferences.categories),
                "difficulties": len(engine.preferences.difficulties),
            },
        )
    if restart:
        engine.restart()
    else:
        engine.start()
    return build_state_response(engine)


@router.post("/session/start", response_model=SessionStateResponse)
async def start_session(engine: SessionEngine = Depends(get_session_engine)):
    """Sorteia uma sessao nova com as preferencias atuais."""
    return _start(engine, restart=False)


@router.post("/session/restart", response_model=SessionStateResponse)
async def restart_session(engine: SessionEngine = Depends(get_session_engine)):
    """Descarta o progresso e sorteia de novo."""
    return _start(engine, restart=True)


@router.get("/session", response_model=SessionStateResponse)
async def get_session(engine: SessionEngine = Depends(get_session_engine)):
    return build_state_response(engine)


@router.post("/session/answer", response_model=AnswerResponse)
async def answer_question(
    request: AnswerRequest,
    engine: SessionEngine = Depends(get_session_engine),
):
    """Responde a questao atual (indice na ordem exibida). Nao avanca.

    A primeira resposta e definitiva: reenvios retornam accepted=false.
    """
    require_session(engine)
    presented = engine.current_question()
    if presented is None:
        raise HTTPException(status_code=409, detail="Nenhuma questao pendente")
    if request.selected_index >= len(presented.options):
        raise HTTPException(
            status_code=400,
            detail=f"selected_index deve ser menor que {len(presented.options)}",
        )

    state = engine.state
    position = state.position
    before = state.attempted_count
    engine.answer(request.selected_index)

    return AnswerResponse(
        accepted=state.attempted_count != before,
        is_correct=position in state.correct,
        correct_index=presented.correct_answer,
        explanation=presented.question.explanation,
        state=build_state_response(engine),
    )


@router.post("/session/skip", response_model=SessionStateResponse)
async def skip_question(
    advance: bool = True,
    engine: SessionEngine = Depends(get_session_engine),
):
    """Pula a questao atual; por padrao ja avanca para a proxima."""
    require_session(engine)
    if advance:
        engine.skip_and_advance()
    else:
        engine.skip()
    return build_state_response(engine)


@router.post("/session/next", response_model=SessionStateResponse)
async def next_question(engine: SessionEngine = Depends(get_session_engine)):
    """Vai para a proxima questao pendente ou para o resumo."""
    require_session(engine)
    engine.next_question()
    return build_state_response(engine)


@router.get("/session/summary", response_model=SessionSummary)
async def get_summary(engine: SessionEngine = Depends(get_session_engine)):
    """Resumo da sessao (tambem disponivel antes do fim)."""
    require_session(engine)
    return engine.summary()


@router.post("/session/sign-in-prompt/dismiss", response_model=SessionStateResponse)
async def dismiss_sign_in_prompt(engine: SessionEngine = Depends(get_session_engine)):
    """Continuar como visitante."""
    engine.dismiss_sign_in_prompt()
    return build_state_response(engine)
