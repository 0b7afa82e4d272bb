"""Directory of registered residents, keyed by e-mail address.

Addresses are compared case-insensitively: they are stored lower-cased and
every lookup lower-cases its argument first.
"""

from __future__ import annotations

import datetime
import logging
from typing import Iterator, Optional, Tuple

from ..datastructures import HashMap, InvalidArgumentError, KeyNotFoundError
from .models import User

logger = logging.getLogger(__name__)


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


class AccountDirectory:
    def __init__(self) -> None:
        self._next_id = 1
        self._by_email: HashMap[str, User] = HashMap()
        self._by_id: HashMap[int, User] = HashMap()

    def register(
        self,
        email: str,
        first_name: str,
        last_name: str,
        phone_number: Optional[str] = None,
        created_at: Optional[datetime.datetime] = None,
    ) -> User:
        """Create an account; each e-mail address may register only once.

        Raises:
            InvalidArgumentError: for an invalid or already registered address,
                or invalid name/phone fields.
        """
        key = normalize_email(email)
        if self._by_email.contains_key(key):
            raise InvalidArgumentError(f"an account with email {key!r} already exists")

        user = User(
            id=self._next_id,
            email=key,
            first_name=first_name.strip() if first_name else first_name,
            last_name=last_name.strip() if last_name else last_name,
            created_at=created_at or datetime.datetime.now(),
            phone_number=phone_number,
        )
        self._next_id += 1
        self._by_id.add(user.id, user)
        self._by_email.add(key, user)
        logger.info("Registered account %d (%s)", user.id, key)
        return user

    # -----------------------------
    # Lookups
    # -----------------------------
    def find(self, email: str) -> Tuple[Optional[User], bool]:
        return self._by_email.try_get(normalize_email(email))

    def profile(self, email: str) -> User:
        """The account for `email`; raises KeyNotFoundError when unknown."""
        user, found = self.find(email)
        if not found:
            raise KeyNotFoundError(normalize_email(email))
        return user  # type: ignore[return-value]

    def get(self, user_id: int) -> User:
        return self._by_id[user_id]

    # -----------------------------
    # Account state
    # -----------------------------
    def record_login(self, email: str, when: Optional[datetime.datetime] = None) -> User:
        """Stamp the last-login time of an active account."""
        user = self.profile(email)
        if not user.is_active:
            raise InvalidArgumentError(f"account {user.email!r} is deactivated")
        user.last_login_at = when or datetime.datetime.now()
        return user

    def deactivate(self, email: str) -> User:
        user = self.profile(email)
        user.is_active = False
        logger.info("Deactivated account %d", user.id)
        return user

    def __len__(self) -> int:
        return len(self._by_email)

    def __contains__(self, email: str) -> bool:
        return self._by_email.contains_key(normalize_email(email))

    def __iter__(self) -> Iterator[User]:
        """Accounts in registration order."""
        for user_id in range(1, self._next_id):
            user, found = self._by_id.try_get(user_id)
            if found:
                yield user  # type: ignore[misc]
