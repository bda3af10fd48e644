"""initial_schema

Revision ID: 4f1a9c2e7b3d
Revises:
Create Date: 2026-10-19 09:12:40.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f1a9c2e7b3d'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all application tables."""
    op.create_table(
        'searches',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('name', sa.Text, nullable=False),
        sa.Column('query', sa.Text, nullable=False),
        sa.Column('location', sa.Text, nullable=True),
        sa.Column('options', sa.JSON, nullable=False),
        sa.Column('thread_id', sa.Text, nullable=True),
        sa.Column('total_results', sa.Integer, nullable=False, server_default='0'),
        sa.Column('credits_used', sa.Integer, nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    )

    op.create_table(
        'candidates',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('pearch_id', sa.String(255), nullable=False, unique=True),
        sa.Column('name', sa.Text, nullable=True),
        sa.Column('headline', sa.Text, nullable=True),
        sa.Column('location', sa.Text, nullable=True),
        sa.Column('summary', sa.Text, nullable=True),
        sa.Column('experience', sa.JSON, nullable=True),
        sa.Column('education', sa.JSON, nullable=True),
        sa.Column('skills', sa.JSON, nullable=True),
        sa.Column('email', sa.Text, nullable=True),
        sa.Column('phone', sa.Text, nullable=True),
        sa.Column('linkedin_url', sa.Text, nullable=True),
        sa.Column('picture_url', sa.Text, nullable=True),
        sa.Column('score', sa.Float, nullable=True),
        sa.Column('insights', sa.Text, nullable=True),
        sa.Column('is_enriched', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('enriched_at', sa.DateTime, nullable=True),
        sa.Column('enrichment_options', sa.JSON, nullable=True),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    )

    op.create_table(
        'search_candidates',
        sa.Column('search_id', sa.Integer, sa.ForeignKey('searches.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('candidate_id', sa.Integer, sa.ForeignKey('candidates.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('score', sa.Float, nullable=True),
        sa.Column('position', sa.Integer, nullable=True),
    )

    op.create_table(
        'saved_candidates',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            'candidate_id',
            sa.Integer,
            sa.ForeignKey('candidates.id', ondelete='CASCADE'),
            nullable=False,
            unique=True,
        ),
        sa.Column('notes', sa.Text, nullable=False, server_default=''),
        sa.Column('saved_at', sa.DateTime, nullable=False),
    )

    op.create_table(
        'app_settings',
        sa.Column('key', sa.String(255), primary_key=True),
        sa.Column('value', sa.Text, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    )

    op.create_table(
        'credit_transactions',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('operation', sa.String(50), nullable=False),
        sa.Column('credits', sa.Integer, nullable=False),
        sa.Column('details', sa.Text, nullable=True),
        sa.Column('search_id', sa.Integer, sa.ForeignKey('searches.id', ondelete='SET NULL'), nullable=True),
        sa.Column('candidate_id', sa.Integer, sa.ForeignKey('candidates.id', ondelete='SET NULL'), nullable=True),
        sa.Column('created_at', sa.DateTime, nullable=False),
    )


def downgrade() -> None:
    """Drop all application tables."""
    op.drop_table('credit_transactions')
    op.drop_table('app_settings')
    op.drop_table('saved_candidates')
    op.drop_table('search_candidates')
    op.drop_table('candidates')
    op.drop_table('searches')
