# =============================================================================
# CONFIGURACAO DO PRACTICE SERVER
# =============================================================================
# Valores lidos de variaveis de ambiente, com padroes para desenvolvimento
# =============================================================================

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Optional

from practice.models.schemas import (
    DEFAULT_QUESTION_COUNT,
    MAX_QUESTION_COUNT,
    MIN_QUESTION_COUNT,
)

DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]

DEFAULT_MAX_ENGINES = 1000


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} deve ser inteiro, recebido: {raw!r}") from None


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class PracticeConfig:
    """Configuracao centralizada do servidor de pratica."""

    # Banco de questoes (None = banco embutido no pacote)
    question_bank_path: Optional[str] = None

    # Limites de tamanho da sessao
    default_question_count: int = DEFAULT_QUESTION_COUNT
    min_question_count: int = MIN_QUESTION_COUNT
    max_question_count: int = MAX_QUESTION_COUNT

    # Cookie de preferencias
    preferences_cookie_name: str = "userPreferences"
    preferences_cookie_days: int = 365
    guest_cookie_name: str = "practiceGuestId"

    # Convite de login para visitantes
    sign_in_prompt_after: int = 2

    # Maximo de SessionEngines em memoria (LRU)
    max_engines: int = DEFAULT_MAX_ENGINES

    # Servidor
    allowed_origins: list[str] = field(default_factory=lambda: list(DEFAULT_ALLOWED_ORIGINS))
    log_level: str = "INFO"
    environment: str = "development"

    def __post_init__(self) -> None:
        if not self.min_question_count <= self.default_question_count <= self.max_question_count:
            raise ValueError(
                f"DEFAULT_QUESTION_COUNT ({self.default_question_count}) fora de "
                f"[{self.min_question_count}, {self.max_question_count}]"
            )
        if self.max_engines < 1:
            raise ValueError(f"MAX_ENGINES deve ser >= 1, recebido: {self.max_engines}")
        self.log_level = self.log_level.upper()

    @classmethod
    def from_env(cls) -> PracticeConfig:
        """Carrega configuracao das variaveis de ambiente."""
        return cls(
            question_bank_path=os.getenv("QUESTION_BANK_PATH") or None,
            default_question_count=_env_int("DEFAULT_QUESTION_COUNT", DEFAULT_QUESTION_COUNT),
            min_question_count=_env_int("MIN_QUESTION_COUNT", MIN_QUESTION_COUNT),
            max_question_count=_env_int("MAX_QUESTION_COUNT", MAX_QUESTION_COUNT),
            preferences_cookie_name=os.getenv("PREFERENCES_COOKIE_NAME", "userPreferences"),
            preferences_cookie_days=_env_int("PREFERENCES_COOKIE_DAYS", 365),
            guest_cookie_name=os.getenv("GUEST_COOKIE_NAME", "practiceGuestId"),
            sign_in_prompt_after=_env_int("SIGN_IN_PROMPT_AFTER", 2),
            max_engines=_env_int("MAX_ENGINES", DEFAULT_MAX_ENGINES),
            allowed_origins=_env_list("ALLOWED_ORIGINS", DEFAULT_ALLOWED_ORIGINS),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            environment=os.getenv("ENVIRONMENT", "development"),
        )

    @property
    def preferences_cookie_max_age(self) -> int:
        """Validade do cookie em segundos."""
        return self.preferences_cookie_days * 24 * 60 * 60

    def to_dict(self) -> dict[str, Any]:
        return {
            "question_bank": {"path": self.question_bank_path or "bundled"},
            "session": {
                "default_question_count": self.default_question_count,
                "min_question_count": self.min_question_count,
                "max_question_count": self.max_question_count,
                "sign_in_prompt_after": self.sign_in_prompt_after,
                "max_engines": self.max_engines,
            },
            "cookies": {
                "preferences": self.preferences_cookie_name,
                "preferences_days": self.preferences_cookie_days,
                "guest": self.guest_cookie_name,
            },
            "server": {
                "allowed_origins": self.allowed_origins,
                "log_level": self.log_level,
                "environment": self.environment,
            },
        }


_config: Optional[PracticeConfig] = None


def get_config() -> PracticeConfig:
    """Retorna configuracao global (carregada na primeira chamada)."""
    global _config
    if _config is None:
        _config = PracticeConfig.from_env()
    return _config


def reload_config() -> PracticeConfig:
    """Recarrega configuracao das variaveis de ambiente."""
    global _config
    _config = PracticeConfig.from_env()
    return _config
