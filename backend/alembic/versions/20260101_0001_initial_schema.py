from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "20260101_0001"
down_revision = None
branch_labels = None
depends_on = None


def _uuid_type():
    bind = op.get_bind()
    dialect = bind.dialect.name if bind else "sqlite"
    if dialect == "postgresql":
        return postgresql.UUID(as_uuid=True)
    return sa.CHAR(length=36)


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
        nullable=False,
    )


def _member_tables(uuid_type, member_table: str, income_table: str, member_key: str) -> None:
    op.create_table(
        member_table,
        sa.Column("id", uuid_type, primary_key=True),
        sa.Column("name", sa.String(length=150), nullable=False, unique=True),
        _created_at(),
    )
    op.create_table(
        income_table,
        sa.Column("id", uuid_type, primary_key=True),
        sa.Column(
            member_key,
            uuid_type,
            sa.ForeignKey(f"{member_table}.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("total_income", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.UniqueConstraint(member_key, "year", "month", name=f"uq_{income_table}_period"),
    )
    op.create_index(f"{income_table}_period_idx", income_table, ["year", "month"])


def upgrade() -> None:
    uuid_type = _uuid_type()

    op.create_table(
        "sports_stats",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("sport", sa.String(length=50), nullable=False),
        sa.Column("courts_rented", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_income", sa.Numeric(14, 2), nullable=False, server_default="0"),
        _created_at(),
        sa.UniqueConstraint("year", "month", "sport", name="uq_sports_stats_period_sport"),
    )
    op.create_index("sports_stats_period_idx", "sports_stats", ["year", "month"])

    op.create_table(
        "food_stats",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("total_income", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("total_expense", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("raw_materials_expense", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("salaries_expense", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("taxes_expense", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("other_expense", sa.Numeric(14, 2), nullable=False, server_default="0"),
        _created_at(),
    )
    op.create_index("food_stats_period_idx", "food_stats", ["year", "month"])

    op.create_table(
        "clothing_stats",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("total_income", sa.Numeric(14, 2), nullable=False, server_default="0"),
        _created_at(),
    )
    op.create_index("clothing_stats_period_idx", "clothing_stats", ["year", "month"])

    _member_tables(uuid_type, "tenants", "tenant_monthly_income", "tenant_id")
    _member_tables(uuid_type, "events", "event_monthly_income", "event_id")


def downgrade() -> None:
    for table in ("event_monthly_income", "tenant_monthly_income"):
        op.drop_index(f"{table}_period_idx", table_name=table)
        op.drop_table(table)
    op.drop_table("events")
    op.drop_table("tenants")
    for table in ("clothing_stats", "food_stats", "sports_stats"):
        op.drop_index(f"{table}_period_idx", table_name=table)
        op.drop_table(table)
