"""Oracle collections schema.

Creates divine_words (catalog), user_collections (ledger) and
user_statistics (running totals), their indexes and row-level security
policies, and seeds the catalog.

Row-level security keys on the transaction-local setting ``oracle.user_id``,
which the API sets for the authenticated caller before touching user rows.

Revision ID: 001_oracle_collections
Revises: None
Create Date: 2026-02-24
"""

from collections.abc import Sequence

from alembic import op

revision: str = "001_oracle_collections"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_OWNER_CHECK = "user_id::text = current_setting('oracle.user_id', true)"

SEED_WORDS: list[tuple[str, str]] = [
    ("うんこ", "SSR"),
    ("ちんこ", "SSR"),
    ("まんこ", "SSR"),
    ("ぱんこ", "SSR"),
    ("あんこ", "SSR"),
    ("さんこ", "SSR"),
    ("きんこ", "SSR"),
    ("わんこ", "SSR"),
    ("げんこ", "SSR"),
    ("てんき", "SR"),
    ("げんき", "SR"),
    ("りんご", "SR"),
    ("だんご", "SR"),
    ("きんご", "SR"),
    ("ぶんこ", "SR"),
    ("はんこ", "SR"),
    ("さんご", "SR"),
]


def upgrade() -> None:
    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto")

    # --- Catalog ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS divine_words (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            word TEXT UNIQUE NOT NULL,
            rarity TEXT NOT NULL CONSTRAINT ck_divine_words_rarity CHECK (rarity IN ('SSR', 'SR')),
            last_found_at TIMESTAMPTZ DEFAULT NOW(),
            created_at TIMESTAMPTZ DEFAULT NOW()
        )
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_divine_words_rarity
        ON divine_words(rarity)
    """)

    # --- Collection ledger ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS user_collections (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id UUID NOT NULL,
            divine_word_id UUID NOT NULL REFERENCES divine_words(id) ON DELETE CASCADE,
            found_count INTEGER NOT NULL DEFAULT 1
                CONSTRAINT ck_user_collections_found_count CHECK (found_count > 0),
            first_found_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_user_collections_user_word UNIQUE (user_id, divine_word_id)
        )
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_user_collections_user_id
        ON user_collections(user_id)
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_user_collections_word_id
        ON user_collections(divine_word_id)
    """)

    # --- Statistics ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS user_statistics (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id UUID NOT NULL UNIQUE,
            total_spins INTEGER NOT NULL DEFAULT 0,
            total_points INTEGER NOT NULL DEFAULT 0,
            divine_count INTEGER NOT NULL DEFAULT 0,
            reality_count INTEGER NOT NULL DEFAULT 0,
            collection_completion INTEGER NOT NULL DEFAULT 0,
            highest_score INTEGER NOT NULL DEFAULT 0,
            last_spin_at TIMESTAMPTZ,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_user_statistics_user_id
        ON user_statistics(user_id)
    """)

    # --- Row-level security ---
    # The catalog is readable by everyone and written only by the table owner
    # (migrations, startup seeding, last_found_at refresh).
    op.execute("ALTER TABLE divine_words ENABLE ROW LEVEL SECURITY")
    op.execute("""
        CREATE POLICY divine_words_read_all ON divine_words
        FOR SELECT USING (true)
    """)

    # Ledger and statistics rows belong to their user, the owner role included.
    for table in ("user_collections", "user_statistics"):
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY")
        op.execute(f"ALTER TABLE {table} FORCE ROW LEVEL SECURITY")
        op.execute(f"""
            CREATE POLICY {table}_select_own ON {table}
            FOR SELECT USING ({_OWNER_CHECK})
        """)
        op.execute(f"""
            CREATE POLICY {table}_insert_own ON {table}
            FOR INSERT WITH CHECK ({_OWNER_CHECK})
        """)
        op.execute(f"""
            CREATE POLICY {table}_update_own ON {table}
            FOR UPDATE USING ({_OWNER_CHECK}) WITH CHECK ({_OWNER_CHECK})
        """)

    # --- Seed catalog ---
    values = ",\n".join(f"('{word}', '{rarity}')" for word, rarity in SEED_WORDS)
    op.execute(f"""
        INSERT INTO divine_words (word, rarity) VALUES
        {values}
        ON CONFLICT (word) DO NOTHING
    """)  # noqa: S608


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS user_statistics")
    op.execute("DROP TABLE IF EXISTS user_collections")
    op.execute("DROP TABLE IF EXISTS divine_words")
