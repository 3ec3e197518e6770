"""Core module - shared state and helper functions."""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Optional

from config import PracticeConfig, get_config
from practice.engine.session_engine import SessionEngine
from practice.identity import IdentityProvider
from practice.models.schemas import UserPreferences
from practice.repository.question_repository import (
    JsonQuestionRepository,
    QuestionRepository,
    load_default_repository,
)
from practice.storage.preference_store import InMemoryKV, KVPreferenceStore

logger = logging.getLogger(__name__)

# =============================================================================
# GLOBAL STATE
# =============================================================================

repository: Optional[QuestionRepository] = None
kv: Optional[InMemoryKV] = None

# Um SessionEngine por usuario (user_id -> engine), do menos ao mais recente
engines: OrderedDict[str, SessionEngine] = OrderedDict()


# =============================================================================
# ACCESSORS
# =============================================================================


def get_repository(config: Optional[PracticeConfig] = None) -> QuestionRepository:
    """Get question repository (loaded once per process)."""
    global repository
    if repository is None:
        config = config or get_config()
        if config.question_bank_path:
            repository = JsonQuestionRepository(config.question_bank_path)
        else:
            repository = load_default_repository()
    return repository


def get_kv() -> InMemoryKV:
    """Get key-value backend used for preferences."""
    global kv
    if kv is None:
        kv = InMemoryKV()
    return kv


async def get_engine(
    identity: IdentityProvider, fallback_preferences: Optional[UserPreferences] = None
) -> SessionEngine:
    """Get SessionEngine for the current user (creates and loads on first use).

    Args:
        identity: Current user
        fallback_preferences: Preferences from the cookie, used only when
            nothing is stored for this user yet
    """
    engine = engines.get(identity.user_id)
    if engine is not None:
        engines.move_to_end(identity.user_id)
        return engine

    config = get_config()
    engine = SessionEngine(
        get_repository(config),
        KVPreferenceStore(get_kv(), identity.user_id),
        identity,
        sign_in_prompt_after=config.sign_in_prompt_after,
    )
    await engine.load_preferences(fallback=fallback_preferences)

    # Evict se necessario (preferencias continuam no KV)
    while len(engines) >= config.max_engines:
        oldest_id, _ = engines.popitem(last=False)
        logger.debug(f"Engine de {oldest_id} descartado (limite {config.max_engines})")

    engines[identity.user_id] = engine
    logger.info(
        f"Engine criado para {identity.user_id} "
        f"(login={identity.is_signed_in()}, preferencias={engine.preferences is not None})"
    )
    return engine


def reset_state() -> None:
    """Drop every engine and the cached repository/backend."""
    global repository, kv
    engines.clear()
    repository = None
    kv = None


async def cleanup() -> None:
    """Cleanup resources on shutdown."""
    count = len(engines)
    engines.clear()
    logger.info(f"{count} sessao(oes) de pratica descartada(s)")
