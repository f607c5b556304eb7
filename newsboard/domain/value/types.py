"""Domain value objects for newsboard.

Value objects are immutable and defined by their values, not identity.
"""

import re
from enum import Enum

from pydantic import field_validator

from newsboard.domain.value.common import RootValueObject

TEXT_URL_PREFIX = "text://"


class VoteType(str, Enum):
    """Type of vote."""

    UP = "up"
    DOWN = "down"


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    ITEM = "item"
    COMMENT = "comment"


class UserFlag(str, Enum):
    """Single-character user flags."""

    ADMIN = "a"
    KARMA_SOURCE = "k"
    NEW_WINDOW = "n"


class Username(RootValueObject[str]):
    """Login name, 2-21 characters, starting with a letter."""

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username format."""
        if not re.match(r"^[a-z][a-z0-9_\-]{1,20}$", v, re.IGNORECASE):
            raise ValueError(
                "Username must start with a letter and contain 2-21 "
                "letters, digits, underscores or hyphens"
            )
        return v


class ItemUrl(RootValueObject[str]):
    """Persisted item url.

    Either a real http(s) url (link post) or a synthetic text:// marker
    embedding the truncated body (text post).
    """

    @field_validator("root")
    @classmethod
    def validate_item_url(cls, v: str) -> str:
        """Validate the url is one of the two representations."""
        if not (
            v.startswith("http://")
            or v.startswith("https://")
            or v.startswith(TEXT_URL_PREFIX)
        ):
            raise ValueError("Item url must be http(s):// or a text:// marker")
        return v

    @property
    def is_text(self) -> bool:
        """Whether this is a text post marker."""
        return self.root.startswith(TEXT_URL_PREFIX)

    @property
    def text(self) -> str | None:
        """Embedded text for text posts, None for link posts."""
        if self.is_text:
            return self.root[len(TEXT_URL_PREFIX) :]
        return None

    @property
    def domain(self) -> str | None:
        """Host part of a link post url."""
        if self.is_text:
            return None
        rest = self.root.split("://", 1)[1]
        return rest.split("/", 1)[0]

    @classmethod
    def for_text(cls, text: str, max_length: int) -> "ItemUrl":
        """Build the synthetic marker for a text post."""
        return cls(TEXT_URL_PREFIX + text[:max_length])
