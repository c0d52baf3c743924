"""Disable email confirmation and confirm pending accounts

Revision ID: 0003_auth_auto_confirm
Revises: 0002_meal_analyses_columns
Create Date: 2026-10-08 00:00:00.000000

New accounts are confirmed on insert by the ORM listener in
diabfit.models.auth while this row has confirmations switched off.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0003_auth_auto_confirm"
down_revision: Union[str, None] = "0002_meal_analyses_columns"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

auth_config = sa.table(
    "auth_config",
    sa.column("id", sa.Integer()),
    sa.column("enable_signup", sa.Boolean()),
    sa.column("enable_confirmations", sa.Boolean()),
    sa.column("enable_email_confirmations", sa.Boolean()),
)

auth_users = sa.table(
    "auth_users",
    sa.column("email_confirmed_at", sa.DateTime()),
    sa.column("confirmed_at", sa.DateTime()),
)


def _set_confirmations(enabled: bool) -> None:
    bind = op.get_bind()
    row = bind.execute(sa.select(auth_config.c.id).where(auth_config.c.id == 1)).first()
    values = {
        "enable_signup": True,
        "enable_confirmations": enabled,
        "enable_email_confirmations": enabled,
    }
    if row is None:
        op.execute(auth_config.insert().values(id=1, **values))
    else:
        op.execute(auth_config.update().where(auth_config.c.id == 1).values(**values))


def upgrade() -> None:
    _set_confirmations(False)
    op.execute(
        auth_users.update()
        .where(auth_users.c.email_confirmed_at.is_(None))
        .values(email_confirmed_at=sa.func.now(), confirmed_at=sa.func.now())
    )


def downgrade() -> None:
    _set_confirmations(True)
