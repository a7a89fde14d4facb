"""001: create staking_journal table

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE staking_journal (
            id              BIGSERIAL       PRIMARY KEY,
            command_type    VARCHAR(40)     NOT NULL,
            caller          VARCHAR(128)    NOT NULL,
            occurred_at     BIGINT          NOT NULL,
            payload         JSONB           NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_journal_command_type CHECK (
                command_type IN (
                    'DEPLOY',
                    'SCHEDULE_FUTURE',
                    'DROP_FUTURE',
                    'APPLY_NOW',
                    'STAKING_OPEN',
                    'STAKING_CLAIM',
                    'STAKING_PAUSE',
                    'STAKING_UNPAUSE',
                    'FLAT_ADD_SUPPORTED',
                    'FLAT_REMOVE_SUPPORTED',
                    'FLAT_MINE',
                    'FLAT_CLAIM',
                    'FLAT_PAUSE',
                    'FLAT_UNPAUSE',
                    'POOL_DEPOSIT',
                    'POOL_EMERGENCY_CLAIM',
                    'ASSET_CREDIT',
                    'ASSET_APPROVAL'
                )
            ),
            CONSTRAINT ck_journal_occurred_at CHECK (occurred_at >= 0)
        );
    """)
    op.execute("CREATE INDEX idx_journal_caller ON staking_journal (caller, id);")
    op.execute("COMMENT ON TABLE staking_journal IS 'Append-only command journal; replayed in id order on startup';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS staking_journal CASCADE;")
