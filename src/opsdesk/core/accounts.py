"""Read-only account registry loaded from the environment.

``OPSDESK_ACCOUNTS`` holds a JSON list of accounts::

    [{"username": "ops", "password_hash": "<salt>:<digest>", "role": "admin"}]

Hashes are produced with ``opsdesk-hash``.
"""

import os
from functools import lru_cache
from typing import Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from opsdesk.core.errors import ConfigurationError
from opsdesk.core.logging import get_logger
from opsdesk.core.security import hash_password, verify_password
from opsdesk.models.user import User

logger = get_logger(__name__)

ACCOUNTS_ENV = "OPSDESK_ACCOUNTS"

_accounts_adapter = TypeAdapter(list[User])

# Verified against for unknown usernames so the miss path costs one hash too
_DUMMY_HASH = hash_password("opsdesk-dummy-password")


class AccountRegistry:
    """Accounts keyed by lower-cased username."""

    def __init__(self, users: list[User]):
        self._users: dict[str, User] = {}
        for user in users:
            if user.id in self._users:
                raise ConfigurationError(
                    f"Duplicate account: {user.username}",
                    details={"username": user.username},
                )
            self._users[user.id] = user

    def __len__(self) -> int:
        return len(self._users)

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return self._users.get(username.strip().lower())

    def authenticate(self, username: str, password: str) -> Optional[User]:
        """Return the user when the password matches, else None."""
        user = self.get_by_username(username)
        if user is None:
            verify_password(password, _DUMMY_HASH)
            return None

        if not verify_password(password, user.hashed_password):
            return None

        return user


def parse_accounts(raw: str) -> AccountRegistry:
    """Build a registry from the JSON account list."""
    try:
        users = _accounts_adapter.validate_json(raw)
    except PydanticValidationError as exc:
        raise ConfigurationError(
            f"{ACCOUNTS_ENV} is not a valid account list",
            details={"errors": exc.error_count()},
        ) from exc

    return AccountRegistry(users)


@lru_cache
def get_account_registry() -> AccountRegistry:
    """Dependency returning the process-wide account registry."""
    raw = os.getenv(ACCOUNTS_ENV, "").strip()
    if not raw:
        logger.warning("accounts.empty", message=f"{ACCOUNTS_ENV} not set, no one can log in")
        return AccountRegistry([])

    registry = parse_accounts(raw)
    logger.info("accounts.loaded", count=len(registry))
    return registry
