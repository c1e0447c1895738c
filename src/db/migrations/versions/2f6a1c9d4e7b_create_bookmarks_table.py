"""
Create bookmarks table.

Revision ID: 2f6a1c9d4e7b
Revises:
Create Date: 2026-10-18 10:12:40.318202

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = '2f6a1c9d4e7b'
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'bookmarks',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('url', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.CheckConstraint(
            'rating >= 1 AND rating <= 5', name='ck_bookmarks_rating_range',
        ),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('bookmarks')
