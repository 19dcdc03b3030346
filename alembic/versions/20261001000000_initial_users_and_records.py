"""Initial users, data_records and user_access tables.

Revision ID: 20261001000000
Revises:
Create Date: 2026-10-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261001000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False, server_default="user"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_users")),
    )
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)

    op.create_table(
        "data_records",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("aadhaar_number", sa.String(length=12), nullable=False),
        sa.Column("srn", sa.String(length=50), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="Pending"),
        sa.Column("receipt_filename", sa.String(length=255), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_data_records")),
    )
    op.create_index(
        op.f("ix_data_records_receipt_filename"),
        "data_records",
        ["receipt_filename"],
        unique=False,
    )

    op.create_table(
        "user_access",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("record_id", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            ondelete="CASCADE",
            name=op.f("fk_user_access_user_id_users"),
        ),
        sa.ForeignKeyConstraint(
            ["record_id"],
            ["data_records.id"],
            ondelete="CASCADE",
            name=op.f("fk_user_access_record_id_data_records"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_user_access")),
        sa.UniqueConstraint("user_id", "record_id", name="uq_user_access_user_record"),
    )
    op.create_index(op.f("ix_user_access_user_id"), "user_access", ["user_id"], unique=False)
    op.create_index(
        op.f("ix_user_access_record_id"), "user_access", ["record_id"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_user_access_record_id"), table_name="user_access")
    op.drop_index(op.f("ix_user_access_user_id"), table_name="user_access")
    op.drop_table("user_access")
    op.drop_index(op.f("ix_data_records_receipt_filename"), table_name="data_records")
    op.drop_table("data_records")
    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_table("users")
