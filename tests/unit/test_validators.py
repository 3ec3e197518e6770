# =============================================================================
# TESTES - Validators
# =============================================================================
# Testes unitários para validação de identificadores de usuário
# =============================================================================

import pytest


class TestValidateUserId:
    """Testes para validate_user_id."""

    @pytest.mark.parametrize(
        "user_id",
        ["user-1", "guest-3f2b6c1e-8d4a-4c55-9a0e-2b7f1d9c0a11", "ana.souza@example.com", "ID_42"],
    )
    def test_valid_ids(self, user_id):
        """Verifica ids aceitos."""
        from utils.validators import validate_user_id

        assert validate_user_id(user_id) == user_id

    def test_strips_whitespace(self):
        """Espaços nas bordas são removidos."""
        from utils.validators import validate_user_id

        assert validate_user_id("  user-1 ") == "user-1"

    @pytest.mark.parametrize("user_id", ["", "   ", "user 1", "a/b", "x:y", "<script>"])
    def test_invalid_format(self, user_id):
        """Verifica formatos rejeitados."""
        from practice.exceptions import InvalidUserIdError
        from utils.validators import validate_user_id

        with pytest.raises(InvalidUserIdError):
            validate_user_id(user_id)

    def test_path_traversal(self):
        """Verifica bloqueio de '..'."""
        from practice.exceptions import InvalidUserIdError
        from utils.validators import validate_user_id

        with pytest.raises(InvalidUserIdError):
            validate_user_id("..hidden")

    def test_too_long(self):
        """Verifica limite de tamanho."""
        from practice.exceptions import InvalidUserIdError
        from utils.validators import MAX_USER_ID_LENGTH, validate_user_id

        with pytest.raises(InvalidUserIdError) as exc_info:
            validate_user_id("a" * (MAX_USER_ID_LENGTH + 1))

        assert exc_info.value.details["user_id"] == "a" * 20
