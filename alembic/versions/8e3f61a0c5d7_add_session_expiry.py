"""add_session_expiry

Revision ID: 8e3f61a0c5d7
Revises: 5b1d0c7e2a94
Create Date: 2026-10-06 16:41:09.552310

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8e3f61a0c5d7'
down_revision: Union[str, Sequence[str], None] = '5b1d0c7e2a94'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # 已存在的会话保持永不过期
    op.add_column('sessiontoken', sa.Column('expires_at', sa.DateTime(), nullable=True))


def downgrade() -> None:
    """Downgrade schema."""
    with op.batch_alter_table('sessiontoken') as batch_op:
        batch_op.drop_column('expires_at')
