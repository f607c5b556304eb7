"""In-memory password reset repository for testing."""

from typing import Optional

from newsboard.domain.model.password_reset import PasswordResetToken
from newsboard.domain.repository.password_reset import PasswordResetRepository


class InMemoryPasswordResetRepository(PasswordResetRepository):
    """In-memory implementation of PasswordResetRepository for testing."""

    def __init__(self) -> None:
        self._tokens: dict[str, PasswordResetToken] = {}

    async def insert(self, token: PasswordResetToken) -> PasswordResetToken:
        self._tokens[token.token] = token
        return token

    async def find_valid(self, token: str, now: int) -> Optional[PasswordResetToken]:
        found = self._tokens.get(token)
        if found is None or not found.is_valid(now):
            return None
        return found

    async def mark_used(self, token: str) -> None:
        found = self._tokens.get(token)
        if found is not None:
            self._tokens[token] = found.model_copy(update={"used": True})

    async def purge_expired(self, now: int) -> int:
        expired = [t for t, tok in self._tokens.items() if tok.expires_at <= now]
        for token in expired:
            del self._tokens[token]
        return len(expired)
