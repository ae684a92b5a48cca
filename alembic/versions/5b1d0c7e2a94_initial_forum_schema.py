"""Initial forum schema

Revision ID: 5b1d0c7e2a94
Revises:
Create Date: 2026-09-28 10:12:44.318205

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b1d0c7e2a94'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema - create all initial tables."""
    op.create_table(
        'useraccount',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False, server_default='user'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_useraccount_email'), 'useraccount', ['email'], unique=True)
    op.create_index(op.f('ix_useraccount_role'), 'useraccount', ['role'], unique=False)

    op.create_table(
        'sessiontoken',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('token', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['useraccount.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_sessiontoken_user_id'), 'sessiontoken', ['user_id'], unique=False)
    op.create_index(op.f('ix_sessiontoken_token'), 'sessiontoken', ['token'], unique=True)

    op.create_table(
        'question',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('content', sa.String(), nullable=False),
        sa.Column('author_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['author_id'], ['useraccount.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_question_author_id'), 'question', ['author_id'], unique=False)

    op.create_table(
        'answer',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('content', sa.String(), nullable=False),
        sa.Column('author_id', sa.Integer(), nullable=False),
        sa.Column('question_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['author_id'], ['useraccount.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['question_id'], ['question.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_answer_author_id'), 'answer', ['author_id'], unique=False)
    op.create_index(op.f('ix_answer_question_id'), 'answer', ['question_id'], unique=False)

    op.create_table(
        'like',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('question_id', sa.Integer(), nullable=True),
        sa.Column('answer_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['useraccount.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['question_id'], ['question.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['answer_id'], ['answer.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'question_id', name='uq_like_user_question'),
        sa.UniqueConstraint('user_id', 'answer_id', name='uq_like_user_answer'),
        sa.CheckConstraint(
            '(question_id IS NULL) <> (answer_id IS NULL)',
            name='ck_like_single_target',
        ),
    )
    op.create_index(op.f('ix_like_user_id'), 'like', ['user_id'], unique=False)
    op.create_index(op.f('ix_like_question_id'), 'like', ['question_id'], unique=False)
    op.create_index(op.f('ix_like_answer_id'), 'like', ['answer_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema - drop all tables."""
    op.drop_index(op.f('ix_like_answer_id'), table_name='like')
    op.drop_index(op.f('ix_like_question_id'), table_name='like')
    op.drop_index(op.f('ix_like_user_id'), table_name='like')
    op.drop_table('like')
    op.drop_index(op.f('ix_answer_question_id'), table_name='answer')
    op.drop_index(op.f('ix_answer_author_id'), table_name='answer')
    op.drop_table('answer')
    op.drop_index(op.f('ix_question_author_id'), table_name='question')
    op.drop_table('question')
    op.drop_index(op.f('ix_sessiontoken_token'), table_name='sessiontoken')
    op.drop_index(op.f('ix_sessiontoken_user_id'), table_name='sessiontoken')
    op.drop_table('sessiontoken')
    op.drop_index(op.f('ix_useraccount_role'), table_name='useraccount')
    op.drop_index(op.f('ix_useraccount_email'), table_name='useraccount')
    op.drop_table('useraccount')
