"""SQLAlchemy table definitions for newsboard.

All timestamps are integer epoch seconds. Ids of items and users are minted
from the counters table, so no column relies on autoincrement.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    Float,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
    UniqueConstraint,
    func,
)

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("username", String(32), nullable=False),
    Column("password_hash", Text, nullable=False),  # Opaque, produced externally
    Column("created_at", BigInteger, nullable=False),
    Column("karma", Integer, nullable=False, server_default="1"),
    Column("about", Text, nullable=False, server_default=""),
    Column("email", String(255), nullable=True),
    Column("auth_token", String(64), nullable=False, unique=True),
    Column("api_secret", String(64), nullable=False),
    Column("flags", String(16), nullable=False, server_default=""),
    Column("karma_incr_time", BigInteger, nullable=False, server_default="0"),
    Column("replies", Integer, nullable=False, server_default="0"),
    CheckConstraint("replies >= 0", name="replies_non_negative"),
)

# Usernames are unique case-insensitively
Index("idx_users_username_lower", func.lower(users_table.c.username), unique=True)

# ============================================================================
# ITEMS TABLE
# ============================================================================
items_table = Table(
    "items",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("title", String(256), nullable=False),
    Column("url", Text, nullable=False),  # http(s) url or text:// marker
    Column("author_id", Integer, ForeignKey("users.id"), nullable=False),
    Column("created_at", BigInteger, nullable=False),
    Column("score", Float, nullable=False, server_default="0"),
    Column("rank", Float, nullable=False, server_default="0"),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column("deleted", Boolean, nullable=False, server_default="false"),
    CheckConstraint("comment_count >= 0", name="comment_count_non_negative"),
)

Index("idx_items_rank", items_table.c.rank.desc())
Index("idx_items_created_at", items_table.c.created_at.desc())
Index("idx_items_author_id", items_table.c.author_id)

# ============================================================================
# COMMENTS TABLE (ids scoped per item)
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("item_id", Integer, ForeignKey("items.id"), nullable=False),
    Column("id", Integer, nullable=False),
    Column("parent_id", Integer, nullable=False, server_default="-1"),
    Column("author_id", Integer, ForeignKey("users.id"), nullable=False),
    Column("body", Text, nullable=False),
    Column("created_at", BigInteger, nullable=False),
    Column("score", Integer, nullable=False, server_default="0"),
    Column("deleted", Boolean, nullable=False, server_default="false"),
    PrimaryKeyConstraint("item_id", "id", name="pk_comments"),
)

Index("idx_comments_author_id", comments_table.c.author_id)
Index("idx_comments_created_at", comments_table.c.created_at)

# ============================================================================
# VOTES TABLE (append-only ledger)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("user_id", Integer, ForeignKey("users.id"), nullable=False),
    Column("votable_type", String(16), nullable=False),  # "item" or "comment"
    Column("votable_id", String(64), nullable=False),  # "<item>" or "<item>-<comment>"
    Column("vote_type", String(8), nullable=False),
    Column("created_at", BigInteger, nullable=False),
    CheckConstraint("votable_type IN ('item', 'comment')", name="votable_type_valid"),
    CheckConstraint("vote_type IN ('up', 'down')", name="vote_type_valid"),
    UniqueConstraint("user_id", "votable_type", "votable_id", name="unique_vote"),
)

Index("idx_votes_votable", votes_table.c.votable_type, votes_table.c.votable_id)
Index("idx_votes_user_created", votes_table.c.user_id, votes_table.c.created_at)

# ============================================================================
# TTL AND COUNTER TABLES
# ============================================================================
rate_limits_table = Table(
    "rate_limits",
    metadata,
    Column("key", String(255), primary_key=True),
    Column("expires_at", BigInteger, nullable=False),
)

Index("idx_rate_limits_expires_at", rate_limits_table.c.expires_at)

counters_table = Table(
    "counters",
    metadata,
    Column("name", String(255), primary_key=True),
    Column("value", BigInteger, nullable=False, server_default="0"),
)

repost_window_table = Table(
    "repost_window",
    metadata,
    Column("url", Text, primary_key=True),
    Column("item_id", Integer, ForeignKey("items.id"), nullable=False),
    Column("expires_at", BigInteger, nullable=False),
)

Index("idx_repost_window_expires_at", repost_window_table.c.expires_at)
Index("idx_repost_window_item_id", repost_window_table.c.item_id)

# ============================================================================
# PASSWORD RESET TOKENS TABLE
# ============================================================================
password_reset_tokens_table = Table(
    "password_reset_tokens",
    metadata,
    Column("token", String(64), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id"), nullable=False),
    Column("created_at", BigInteger, nullable=False),
    Column("expires_at", BigInteger, nullable=False),
    Column("used", Boolean, nullable=False, server_default="false"),
)

Index("idx_password_reset_tokens_user_id", password_reset_tokens_table.c.user_id)
Index("idx_password_reset_tokens_expires_at", password_reset_tokens_table.c.expires_at)
