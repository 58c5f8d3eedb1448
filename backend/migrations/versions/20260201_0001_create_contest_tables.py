from __future__ import annotations
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = "20260201_0001"
down_revision = None
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "profiles",
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, nullable=False),
        sa.Column("display_name", sa.String(length=80), nullable=False, server_default="Anonymous"),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("now()"), nullable=False),
    )

    op.create_table(
        "burpee_entries",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("entry_date", sa.Date(), nullable=False),
        sa.Column("burpees", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.UniqueConstraint("user_id", "entry_date", name="uq_entry_one_per_day"),
        sa.CheckConstraint("burpees >= 0", name="ck_entry_burpees_non_negative"),
    )
    op.create_index("ix_burpee_entries_user_id", "burpee_entries", ["user_id"])
    op.create_index("ix_burpee_entries_entry_date", "burpee_entries", ["entry_date"])

    op.create_table(
        "burpee_audit",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("occurred_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("action", sa.String(length=8), nullable=False),
        sa.Column("actor_id", sa.Uuid(), nullable=True),
        sa.Column("target_id", sa.Uuid(), nullable=False),
        sa.Column("entry_date", sa.Date(), nullable=False),
        sa.Column("old_burpees", sa.Integer(), nullable=True),
        sa.Column("new_burpees", sa.Integer(), nullable=True),
        sa.CheckConstraint("action in ('INSERT', 'UPDATE', 'DELETE')", name="ck_audit_action"),
    )
    op.create_index("ix_burpee_audit_occurred_at", "burpee_audit", ["occurred_at"])
    op.create_index("ix_burpee_audit_target_id", "burpee_audit", ["target_id"])

def downgrade() -> None:
    op.drop_index("ix_burpee_audit_target_id", table_name="burpee_audit")
    op.drop_index("ix_burpee_audit_occurred_at", table_name="burpee_audit")
    op.drop_table("burpee_audit")
    op.drop_index("ix_burpee_entries_entry_date", table_name="burpee_entries")
    op.drop_index("ix_burpee_entries_user_id", table_name="burpee_entries")
    op.drop_table("burpee_entries")
    op.drop_table("profiles")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
