"""Input validators for security."""

import re

from practice.exceptions import InvalidUserIdError

MAX_USER_ID_LENGTH = 128

_USER_ID_PATTERN = re.compile(r"^[a-zA-Z0-9\-_.@]+$")


def validate_user_id(user_id: str) -> str:
    """Validate user_id before it becomes part of a storage key.

    Returns the stripped id if valid, raises InvalidUserIdError if invalid.
    """
    user_id = (user_id or "").strip()
    if not user_id:
        raise InvalidUserIdError(message="user_id não pode ser vazio")
    if len(user_id) > MAX_USER_ID_LENGTH:
        raise InvalidUserIdError(
            message=f"user_id excede {MAX_USER_ID_LENGTH} caracteres",
            details={"user_id": user_id[:20]},
        )
    # Only allow email-like and UUID-like ids
    if not _USER_ID_PATTERN.match(user_id):
        raise InvalidUserIdError(
            message="Formato de user_id inválido",
            details={"user_id": user_id[:20]},
        )
    # Prevent path traversal
    if ".." in user_id:
        raise InvalidUserIdError(
            message="Sequência proibida no user_id",
            details={"user_id": user_id[:20]},
        )
    return user_id
