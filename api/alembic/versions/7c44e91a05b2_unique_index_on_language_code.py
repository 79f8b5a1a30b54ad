"""make languages.language unique

Revision ID: 7c44e91a05b2
Revises: 3a1f0c2b9d4e
Create Date: 2025-09-02 18:40:03.552917

"""
from alembic import op
import sqlalchemy as sa  # noqa: F401


# revision identifiers, used by Alembic.
revision = '7c44e91a05b2'
down_revision = '3a1f0c2b9d4e'
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Same name SQLModel gives a unique+indexed column, so autogenerate stays quiet
    op.drop_index(op.f('ix_languages_language'), table_name='languages')
    op.create_index(op.f('ix_languages_language'), 'languages', ['language'], unique=True)


def downgrade() -> None:
    op.drop_index(op.f('ix_languages_language'), table_name='languages')
    op.create_index(op.f('ix_languages_language'), 'languages', ['language'], unique=False)
