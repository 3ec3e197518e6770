"""Preference Store - Persistencia das preferencias do usuario em KV store."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Protocol

from ..models.schemas import UserPreferences

logger = logging.getLogger(__name__)


class KVBackend(Protocol):
    """Contrato minimo de um KV store assincrono."""

    async def get(self, key: str) -> Any: ...

    async def set(self, key: str, value: Any) -> None: ...

    async def delete(self, key: str) -> None: ...


class InMemoryKV:
    """KV store em memoria (padrao do processo e dos testes)."""

    def __init__(self):
        self._storage: dict[str, Any] = {}

    async def get(self, key: str) -> Any:
        return self._storage.get(key)

    async def set(self, key: str, value: Any) -> None:
        self._storage[key] = value

    async def delete(self, key: str) -> None:
        self._storage.pop(key, None)


class PreferenceStore(ABC):
    """Leitura/gravacao do registro unico de preferencias do usuario atual."""

    @abstractmethod
    async def load(self) -> UserPreferences | None:
        pass

    @abstractmethod
    async def save(self, preferences: UserPreferences) -> None:
        pass

    @abstractmethod
    async def clear(self) -> None:
        pass


class KVPreferenceStore(PreferenceStore):
    """Preferencias como blob JSON em um KV store.

    Estrutura de chaves:
        - preferences:{user_id} -> JSON `{"categories", "questionCount", "difficulties"}`

    Example:
        >>> store = KVPreferenceStore(InMemoryKV(), "user-1")
        >>> await store.save(UserPreferences(categories=["cardiology"]))
        >>> loaded = await store.load()
    """

    KEY_PREFIX = "preferences"

    def __init__(self, backend: KVBackend, user_id: str):
        """Inicializa store.

        Args:
            backend: KV store assincrono (get/set/delete)
            user_id: Dono do registro de preferencias
        """
        self.backend = backend
        self.user_id = user_id

    def _key(self) -> str:
        return f"{self.KEY_PREFIX}:{self.user_id}"

    async def load(self) -> UserPreferences | None:
        """Carrega preferencias; ausentes ou malformadas retornam None."""
        raw = await self.backend.get(self._key())
        if not raw:
            logger.debug(f"Preferencias nao encontradas: {self.user_id}")
            return None

        return UserPreferences.from_json(raw)

    async def save(self, preferences: UserPreferences) -> None:
        await self.backend.set(self._key(), preferences.to_json())
        logger.debug(f"Preferencias salvas: {self.user_id}")

    async def clear(self) -> None:
        await self.backend.delete(self._key())
        logger.info(f"Preferencias removidas: {self.user_id}")
