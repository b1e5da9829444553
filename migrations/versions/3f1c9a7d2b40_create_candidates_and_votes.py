"""create candidates and votes

Revision ID: 3f1c9a7d2b40
Revises: 
Create Date: 2026-10-18 09:12:44.518203

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '3f1c9a7d2b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('candidates',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('name', sa.String(length=200), nullable=False),
    sa.Column('voter_id', sa.String(length=50), nullable=False),
    sa.Column('has_voted', sa.Boolean(), nullable=False),
    sa.Column('votes_received', sa.Integer(), nullable=False),
    sa.Column('created_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
    sa.CheckConstraint('votes_received >= 0', name='ck_candidates_votes_received'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('voter_id')
    )
    op.create_table('votes',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('voter_id', sa.Integer(), nullable=False),
    sa.Column('voted_for_id', sa.Integer(), nullable=False),
    sa.Column('created_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
    sa.CheckConstraint('voter_id <> voted_for_id', name='ck_votes_no_self_vote'),
    sa.ForeignKeyConstraint(['voted_for_id'], ['candidates.id'], ),
    sa.ForeignKeyConstraint(['voter_id'], ['candidates.id'], ),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('voter_id', 'voted_for_id', name='uq_votes_voter_recipient')
    )


def downgrade():
    op.drop_table('votes')
    op.drop_table('candidates')
