"""Add enrichment columns to meal_analyses and backfill defaults

Revision ID: 0002_meal_analyses_columns
Revises: 0001_initial_schema
Create Date: 2026-10-05 00:00:00.000000

Columns that already exist are left alone, so the migration also applies
cleanly to databases that were patched by hand.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0002_meal_analyses_columns"
down_revision: Union[str, None] = "0001_initial_schema"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# name -> (type, server default, backfill value)
ENRICHMENT_COLUMNS = {
    "nutritional_score": (sa.Float(), "0", 0.0),
    "confidence": (sa.Float(), "0", 0.0),
    "total_calories": (sa.Integer(), "0", 0),
    "carbohydrates": (sa.Float(), "0", 0.0),
    "protein": (sa.Float(), "0", 0.0),
    "fat": (sa.Float(), "0", 0.0),
    "glycemic_index": (sa.Integer(), "0", 0),
    "glp1_compatibility_score": (sa.Float(), "0", 0.0),
    "overall_health_score": (sa.Float(), "0", 0.0),
    "is_favorite": (sa.Boolean(), sa.false(), False),
    "analysis_version": (sa.String(), "1.0", "1.0"),
}

PLAIN_COLUMNS = {
    "primary_dish": sa.String(),
    "key_recommendations": sa.Text(),
    "warnings": sa.Text(),
    "image_url": sa.String(),
    "user_rating": sa.Integer(),
    "user_notes": sa.Text(),
}


def upgrade() -> None:
    bind = op.get_bind()
    existing = {c["name"] for c in sa.inspect(bind).get_columns("meal_analyses")}

    for name, (column_type, server_default, _) in ENRICHMENT_COLUMNS.items():
        if name not in existing:
            op.add_column(
                "meal_analyses",
                sa.Column(name, column_type, nullable=True, server_default=server_default),
            )
    for name, column_type in PLAIN_COLUMNS.items():
        if name not in existing:
            op.add_column("meal_analyses", sa.Column(name, column_type, nullable=True))

    meal_analyses = sa.table(
        "meal_analyses",
        sa.column("meal_name", sa.String()),
        *[sa.column(name, spec[0]) for name, spec in ENRICHMENT_COLUMNS.items()],
    )
    for name, (_, _, value) in ENRICHMENT_COLUMNS.items():
        column = meal_analyses.c[name]
        op.execute(
            meal_analyses.update().where(column.is_(None)).values({name: value})
        )
    op.execute(
        meal_analyses.update()
        .where(sa.or_(meal_analyses.c.meal_name.is_(None), meal_analyses.c.meal_name == ""))
        .values(meal_name="Unknown Meal")
    )
    op.execute(
        meal_analyses.update()
        .where(meal_analyses.c.analysis_version == "")
        .values(analysis_version="1.0")
    )


def downgrade() -> None:
    with op.batch_alter_table("meal_analyses") as batch_op:
        for name in list(PLAIN_COLUMNS) + list(ENRICHMENT_COLUMNS):
            batch_op.drop_column(name)
