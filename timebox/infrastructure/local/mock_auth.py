"""
Mock authentication provider for local development.
"""

from timebox.interfaces.auth_provider import IAuthProvider, User

DEV_USER_ID = "dev_user"


class MockAuthProvider(IAuthProvider):
    """Treats the bearer token itself as the user id."""

    def __init__(self, enabled: bool = False):
        self._enabled = enabled

    async def verify_token(self, token: str) -> User:
        token = token.strip()
        if not token:
            raise ValueError("Empty token")
        return User(id=token, display_name=token)

    def default_user(self) -> User:
        return User(id=DEV_USER_ID, display_name="Developer")

    def is_enabled(self) -> bool:
        return self._enabled
