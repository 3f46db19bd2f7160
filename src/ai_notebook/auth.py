"""
Admin authentication.

The admin signs in with a username and password before editing sources. The
check is local and only unlocks the editing surface; write access to the Gist
is still gated by the stored GitHub token.
"""

import hmac
from abc import ABC, abstractmethod


class AdminAuthenticator(ABC):
    @abstractmethod
    def authenticate(self, username: str, password: str) -> bool:
        pass


class StaticCredentialAuthenticator(AdminAuthenticator):
    """Compares against one configured username/password pair. Disabled when either is unset."""

    def __init__(self, username: str | None, password: str | None) -> None:
        self.username = username
        self.password = password

    def authenticate(self, username: str, password: str) -> bool:
        if not self.username or not self.password:
            return False
        username_ok = hmac.compare_digest(username.encode("utf-8"), self.username.encode("utf-8"))
        password_ok = hmac.compare_digest(password.encode("utf-8"), self.password.encode("utf-8"))
        return username_ok and password_ok
