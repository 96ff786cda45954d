"""Create external_tools table.

Revision ID: 001
Revises:
Create Date: 2026-10-19

Tables: external_tools
"""

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import UUID

revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create the tool definition table."""
    op.create_table(
        "external_tools",
        sa.Column("id", UUID, primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("endpoint_url", sa.Text, nullable=False),
        sa.Column("http_method", sa.String(10)),
        sa.Column("auth_type", sa.String(20), nullable=False, server_default="NONE"),
        sa.Column("auth_config", sa.Text),
        sa.Column("request_template", sa.Text),
        sa.Column("response_mapping", sa.Text),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("tool_type", sa.String(50), nullable=False, server_default="API"),
        sa.Column("usage_count", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("last_used_at", sa.TIMESTAMP(timezone=True)),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("NOW()")),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("NOW()")),
    )
    # Case-insensitive uniqueness on name
    op.execute("CREATE UNIQUE INDEX uq_external_tools_lower_name ON external_tools (LOWER(name))")
    op.create_index("idx_external_tools_type", "external_tools", ["tool_type"])
    op.create_index("idx_external_tools_active", "external_tools", ["is_active"])


def downgrade() -> None:
    """Drop the tool definition table."""
    op.drop_index("idx_external_tools_active", table_name="external_tools")
    op.drop_index("idx_external_tools_type", table_name="external_tools")
    op.execute("DROP INDEX IF EXISTS uq_external_tools_lower_name")
    op.drop_table("external_tools")
