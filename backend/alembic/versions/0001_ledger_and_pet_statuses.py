"""ledger and pet statuses

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False, unique=True),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("total_donation", sa.Numeric(14, 2), nullable=True, server_default="0"),
    )
    op.create_table(
        "shelters",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("phone_number", sa.String(), nullable=True),
        sa.Column("capacity", sa.Integer(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("website", sa.String(), nullable=True),
        sa.Column("donation_amount", sa.Numeric(14, 2), nullable=True, server_default="0"),
    )
    op.create_table(
        "donations",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("donor_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("shelter_id", sa.Integer(), sa.ForeignKey("shelters.id"), nullable=False),
        sa.CheckConstraint("amount > 0", name="ck_donations_amount_positive"),
    )
    op.create_index("ix_donations_donor_id", "donations", ["donor_id"])
    op.create_index("ix_donations_shelter_id", "donations", ["shelter_id"])

    op.create_table(
        "pets",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("shelter_id", sa.Integer(), sa.ForeignKey("shelters.id"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column("breed", sa.String(), nullable=True),
        sa.Column("gender", sa.String(), nullable=True),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("size", sa.String(), nullable=True),
        sa.Column("color", sa.String(), nullable=True),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("adoption_status", sa.String(), nullable=True),
        sa.Column("image", sa.String(), nullable=True),
    )
    op.create_table(
        "statuses",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("disease", sa.String(), nullable=False),
        sa.Column("vaccine", sa.String(), nullable=False),
    )
    op.create_table(
        "pet_statuses",
        sa.Column("pet_id", sa.Integer(), sa.ForeignKey("pets.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("status_id", sa.Integer(), sa.ForeignKey("statuses.id", ondelete="CASCADE"), primary_key=True),
    )


def downgrade() -> None:
    op.drop_table("pet_statuses")
    op.drop_table("statuses")
    op.drop_table("pets")
    op.drop_index("ix_donations_shelter_id", table_name="donations")
    op.drop_index("ix_donations_donor_id", table_name="donations")
    op.drop_table("donations")
    op.drop_table("shelters")
    op.drop_table("users")
