"""Initial schema: users, voice profiles, cascade jobs, drafts

Revision ID: initial_schema
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('role', sa.String(255), nullable=False),
        sa.Column('company', sa.String(255), nullable=False),
        sa.Column('industry', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        'voice_profiles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column(
            'user_id',
            sa.String(36),
            sa.ForeignKey('users.id', ondelete='CASCADE'),
            nullable=False,
            unique=True,
        ),
        sa.Column('tone', sa.JSON, nullable=False),
        sa.Column('sentence_style', sa.String(20), nullable=False),
        sa.Column('vocabulary', sa.String(20), nullable=False),
        sa.Column('signature_phrases', sa.JSON, nullable=False),
        sa.Column('topics', sa.JSON, nullable=False),
        sa.Column('avoid', sa.JSON, nullable=False),
        sa.Column('raw_summary', sa.Text, nullable=False),
        sa.Column('samples', sa.JSON, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        'cascade_jobs',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('master_content', sa.Text, nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='running'),
        sa.Column('created_by_id', sa.String(64), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_cascade_jobs_status', 'cascade_jobs', ['status'])
    op.create_index('ix_cascade_jobs_created_by_id', 'cascade_jobs', ['created_by_id'])

    op.create_table(
        'drafts',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column(
            'user_id',
            sa.String(36),
            sa.ForeignKey('users.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('content', sa.Text, nullable=False),
        sa.Column('topic', sa.Text, nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='draft'),
        sa.Column('cascade_job_id', sa.String(36), sa.ForeignKey('cascade_jobs.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_drafts_user_id', 'drafts', ['user_id'])
    op.create_index('ix_drafts_status', 'drafts', ['status'])
    op.create_index('ix_drafts_cascade_job_id', 'drafts', ['cascade_job_id'])
    op.create_index('ix_drafts_created_at', 'drafts', ['created_at'])


def downgrade():
    op.drop_table('drafts')
    op.drop_table('cascade_jobs')
    op.drop_table('voice_profiles')
    op.drop_table('users')
