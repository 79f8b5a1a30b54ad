"""create languages and translations tables

Revision ID: 3a1f0c2b9d4e
Revises:
Create Date: 2025-09-01 10:12:40.118204

"""
from alembic import op
import sqlalchemy as sa
import sqlmodel  # noqa: F401


# revision identifiers, used by Alembic.
revision = '3a1f0c2b9d4e'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'languages',
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('language', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_languages_language'), 'languages', ['language'], unique=False)

    op.create_table(
        'translations',
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('language_id', sa.Integer(), nullable=False),
        # NULL is the legacy spelling of 'single'
        sa.Column('group', sa.String(), nullable=True),
        sa.Column('key', sa.TEXT(), nullable=False),
        sa.Column('value', sa.TEXT(), nullable=False),
        sa.ForeignKeyConstraint(['language_id'], ['languages.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('language_id', 'group', 'key', name='uq_translation_language_group_key'),
    )
    op.create_index(op.f('ix_translations_language_id'), 'translations', ['language_id'], unique=False)
    op.create_index(op.f('ix_translations_group'), 'translations', ['group'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_translations_group'), table_name='translations')
    op.drop_index(op.f('ix_translations_language_id'), table_name='translations')
    op.drop_table('translations')
    op.drop_index(op.f('ix_languages_language'), table_name='languages')
    op.drop_table('languages')
