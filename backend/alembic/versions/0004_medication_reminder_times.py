"""Add reminder_times to medications

Revision ID: 0004_medication_reminder_times
Revises: 0003_auth_auto_confirm
Create Date: 2026-10-18 00:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0004_medication_reminder_times"
down_revision: Union[str, None] = "0003_auth_auto_confirm"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column("medications", sa.Column("reminder_times", sa.JSON(), nullable=True))


def downgrade() -> None:
    with op.batch_alter_table("medications") as batch_op:
        batch_op.drop_column("reminder_times")
