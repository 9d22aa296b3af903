"""Initial schema for Signal Sync.

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """
    PURPOSE: Create the signals and debug_logs tables with their indexes.
    """
    # Signals Table
    op.create_table(
        "signals",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("symbol", sa.String(length=50), nullable=False),
        sa.Column("indicator_type", sa.String(length=20), nullable=False),
        sa.Column("reason", sa.String(length=500), nullable=False),
        sa.Column("time", sa.Time(), nullable=False),
        sa.Column("capital_deployed_cr", sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_signals_date_type_created",
        "signals",
        ["date", "indicator_type", "created_at"],
    )
    op.create_index("ix_signals_date_symbol", "signals", ["date", "symbol"])

    # Debug Logs Table
    op.create_table(
        "debug_logs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        sa.Column("context", sa.String(length=500), nullable=False),
        sa.Column("error_message", sa.Text(), nullable=False),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column("stack_trace", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_debug_logs_timestamp", "debug_logs", ["timestamp"])


def downgrade() -> None:
    """
    PURPOSE: Drop all tables created by upgrade().
    """
    op.drop_index("ix_debug_logs_timestamp", table_name="debug_logs")
    op.drop_table("debug_logs")
    op.drop_index("ix_signals_date_symbol", table_name="signals")
    op.drop_index("ix_signals_date_type_created", table_name="signals")
    op.drop_table("signals")
