"""Test configuration and fixtures."""

from newsboard.domain.model import Item, User
from newsboard.domain.value import ItemId, ItemUrl, UserId, Username
from tests.di.clock import DEFAULT_NOW


def make_user(
    user_id: int = 1,
    username: str = "alice",
    flags: str = "",
    created_at: int = DEFAULT_NOW,
    **overrides,
) -> User:
    """Build a user with throwaway credentials."""
    return User(
        id=UserId(user_id),
        username=Username(username),
        password_hash="hash",
        created_at=created_at,
        auth_token=f"token-{user_id}",
        api_secret=f"secret-{user_id}",
        flags=flags,
        karma_incr_time=created_at,
        **overrides,
    )


def make_item(
    item_id: int = 1,
    author_id: int = 1,
    title: str = "Test Item",
    url: str = "https://example.com/story",
    created_at: int = DEFAULT_NOW,
    **overrides,
) -> Item:
    """Build an item without going through submission."""
    return Item(
        id=ItemId(item_id),
        title=title,
        url=ItemUrl(url),
        author_id=UserId(author_id),
        created_at=created_at,
        **overrides,
    )
