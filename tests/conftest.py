# =============================================================================
# CONFTEST - Fixtures compartilhadas para todos os testes
# =============================================================================
# Centraliza banco de questoes, stores e engines usados nos testes
# =============================================================================

import random
from typing import Any

import pytest

# =============================================================================
# FIXTURES DO FASTAPI
# =============================================================================


@pytest.fixture
def client():
    """Cliente de teste FastAPI com estado global limpo."""
    from fastapi.testclient import TestClient

    import app_state
    from server import app

    app_state.reset_state()
    with TestClient(app) as test_client:
        yield test_client
    app_state.reset_state()


@pytest.fixture
def async_client():
    """Cliente assíncrono para testes async."""
    from httpx import ASGITransport, AsyncClient

    from server import app

    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


# =============================================================================
# FIXTURES DE DADOS - QUESTOES
# =============================================================================

CATEGORIES = {
    "cardiology": ("Cardiology", "Heart and blood vessels"),
    "pulmonology": ("Pulmonology", "Respiratory system"),
    "neurology": ("Neurology", "Nervous system"),
    "gastroenterology": ("Gastroenterology", "Digestive system"),
    "endocrinology": ("Endocrinology", "Endocrine system"),
}


def make_question_data(
    question_id: str,
    category_id: str = "cardiology",
    difficulty: str = "medium",
    options: list[str] | None = None,
    correct_answer: int = 0,
) -> dict[str, Any]:
    """Monta o dicionario de uma questao no formato do banco (JSON)."""
    name, description = CATEGORIES.get(category_id, (category_id.title(), ""))
    return {
        "id": question_id,
        "text": f"Question {question_id} about {name}?",
        "options": options or ["Option A", "Option B", "Option C", "Option D"],
        "correctAnswer": correct_answer,
        "explanation": f"Explanation for question {question_id}.",
        "topic": {
            "id": f"{category_id}-topic",
            "name": f"{name} Topic",
            "category": {"id": category_id, "name": name, "description": description},
        },
        "difficulty": difficulty,
        "tags": [category_id],
    }


@pytest.fixture
def make_question():
    """Factory de Question."""
    from practice.models.schemas import Question

    def _make(question_id: str, **kwargs) -> Question:
        return Question.model_validate(make_question_data(question_id, **kwargs))

    return _make


@pytest.fixture
def sample_question(make_question):
    """Questao unica de cardiologia (resposta correta no indice 2)."""
    return make_question("q-1", options=["A", "B", "C", "D", "E"], correct_answer=2)


@pytest.fixture
def sample_questions(make_question):
    """Banco pequeno com categorias e dificuldades variadas."""
    return [
        make_question("c-1", category_id="cardiology", difficulty="easy"),
        make_question("c-2", category_id="cardiology", difficulty="medium", correct_answer=1),
        make_question("c-3", category_id="cardiology", difficulty="hard", correct_answer=3),
        make_question("p-1", category_id="pulmonology", difficulty="medium", correct_answer=2),
        make_question("p-2", category_id="pulmonology", difficulty="hard"),
        make_question("n-1", category_id="neurology", difficulty="medium", correct_answer=1),
        make_question("g-1", category_id="gastroenterology", difficulty="easy"),
        make_question("e-1", category_id="endocrinology", difficulty="medium", correct_answer=3),
    ]


@pytest.fixture
def all_categories():
    return list(CATEGORIES)


@pytest.fixture
def repository(sample_questions):
    from practice.repository.question_repository import InMemoryQuestionRepository

    return InMemoryQuestionRepository(sample_questions)


@pytest.fixture
def rng():
    """Fonte aleatoria com semente fixa (testes deterministicos)."""
    return random.Random(1234)


@pytest.fixture
def all_preferences(all_categories):
    """Preferencias que aceitam todo o banco de exemplo."""
    from practice.models.schemas import UserPreferences

    return UserPreferences(categories=all_categories, question_count=15)


# =============================================================================
# FIXTURES DE STORAGE E ENGINE
# =============================================================================


@pytest.fixture
def kv():
    from practice.storage.preference_store import InMemoryKV

    return InMemoryKV()


@pytest.fixture
def preference_store(kv):
    from practice.storage.preference_store import KVPreferenceStore

    return KVPreferenceStore(kv, "user-1")


@pytest.fixture
def engine(repository, preference_store, rng):
    """SessionEngine de visitante com store em memoria."""
    from practice.engine.session_engine import SessionEngine
    from practice.identity import AnonymousIdentity

    return SessionEngine(repository, preference_store, AnonymousIdentity("guest-1"), rng=rng)


@pytest.fixture
def signed_in_engine(repository, preference_store, rng):
    """SessionEngine de usuario autenticado."""
    from practice.engine.session_engine import SessionEngine
    from practice.identity import StaticIdentity

    return SessionEngine(repository, preference_store, StaticIdentity("user-1"), rng=rng)


class FailingPreferenceStore:
    """Store que sempre falha (simula KV indisponivel)."""

    def __init__(self):
        self.save_calls = 0

    async def load(self):
        raise ConnectionError("kv indisponivel")

    async def save(self, preferences):
        self.save_calls += 1
        raise ConnectionError("kv indisponivel")

    async def clear(self):
        raise ConnectionError("kv indisponivel")


@pytest.fixture
def failing_store():
    return FailingPreferenceStore()
