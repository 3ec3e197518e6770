# =============================================================================
# TESTES - App State
# =============================================================================
# Testes unitários para o registro de engines por usuario
# =============================================================================

import pytest


@pytest.fixture
def fresh_state(monkeypatch):
    """Estado global limpo com limite de 2 engines."""
    import app_state
    from config import reload_config

    monkeypatch.setenv("MAX_ENGINES", "2")
    reload_config()
    app_state.reset_state()
    yield app_state
    app_state.reset_state()


class TestEngineRegistry:
    """Testes para get_engine e o limite LRU."""

    @pytest.mark.asyncio
    async def test_same_user_same_engine(self, fresh_state):
        """Mesmo usuario reaproveita o engine."""
        from practice.identity import StaticIdentity

        first = await fresh_state.get_engine(StaticIdentity("ana"))
        second = await fresh_state.get_engine(StaticIdentity("ana"))

        assert first is second
        assert len(fresh_state.engines) == 1

    @pytest.mark.asyncio
    async def test_least_recently_used_is_evicted(self, fresh_state):
        """Acima do limite sai o engine usado ha mais tempo."""
        from practice.identity import StaticIdentity

        await fresh_state.get_engine(StaticIdentity("ana"))
        await fresh_state.get_engine(StaticIdentity("bia"))
        await fresh_state.get_engine(StaticIdentity("ana"))
        await fresh_state.get_engine(StaticIdentity("caio"))

        assert list(fresh_state.engines) == ["ana", "caio"]

    @pytest.mark.asyncio
    async def test_evicted_user_reloads_preferences(self, fresh_state):
        """Engine descartado volta com as preferencias gravadas no KV."""
        from practice.identity import StaticIdentity
        from practice.models.schemas import UserPreferences

        engine = await fresh_state.get_engine(StaticIdentity("ana"))
        await engine.update_preferences(UserPreferences(categories=["neurology"], question_count=3))

        await fresh_state.get_engine(StaticIdentity("bia"))
        await fresh_state.get_engine(StaticIdentity("caio"))
        assert "ana" not in fresh_state.engines

        reloaded = await fresh_state.get_engine(StaticIdentity("ana"))

        assert reloaded is not engine
        assert reloaded.preferences.categories == ["neurology"]
        assert reloaded.state.total == 3
