"""create service requests table"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "0001_create_service_requests"
down_revision = None
branch_labels: tuple[str, ...] | None = None
depends_on: tuple[str, ...] | None = None


def upgrade() -> None:
    op.create_table(
        "service_requests",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("contact_number", sa.String(length=50), nullable=False),
        sa.Column("service", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.current_timestamp(),
        ),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_service_requests_created_at", "service_requests", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_service_requests_created_at", table_name="service_requests")
    op.drop_table("service_requests")
