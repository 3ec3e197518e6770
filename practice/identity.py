"""Identity - Capacidade de identidade injetada no motor de sessao."""

from __future__ import annotations

from abc import ABC, abstractmethod

ANONYMOUS_USER_ID = "anonymous"


class IdentityProvider(ABC):
    """Quem esta praticando e se ja fez login.

    O provedor de autenticacao real fica fora do motor; este contrato e
    tudo que o motor consulta (escopo das preferencias e convite de login).
    """

    @property
    @abstractmethod
    def user_id(self) -> str:
        pass

    @abstractmethod
    def is_signed_in(self) -> bool:
        pass


class AnonymousIdentity(IdentityProvider):
    """Visitante sem login (opcionalmente com id de convidado)."""

    def __init__(self, guest_id: str | None = None):
        self._user_id = guest_id or ANONYMOUS_USER_ID

    @property
    def user_id(self) -> str:
        return self._user_id

    def is_signed_in(self) -> bool:
        return False


class StaticIdentity(IdentityProvider):
    """Usuario autenticado com id fixo."""

    def __init__(self, user_id: str, signed_in: bool = True):
        self._user_id = user_id
        self._signed_in = signed_in

    @property
    def user_id(self) -> str:
        return self._user_id

    def is_signed_in(self) -> bool:
        return self._signed_in
