"""Initial back-office schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


ROLES = ("admin", "recruiter", "client", "client_manager")


def _base_columns():
    return [
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    """
    Create every back-office table and seed the four roles.
    """
    op.create_table(
        'roles',
        *_base_columns(),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'company',
        *_base_columns(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('logo', sa.Text(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'management',
        *_base_columns(),
        sa.Column('company_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['company_id'], ['company.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_management_company_id', 'management', ['company_id'])

    op.create_table(
        'users',
        *_base_columns(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('position', sa.String(length=255), nullable=True),
        sa.Column('avatar', sa.String(length=1000), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('role_id', sa.Integer(), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(['role_id'], ['roles.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'users_company',
        *_base_columns(),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('company_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['company_id'], ['company.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'company_id', name='uq_users_company_pair'),
    )
    op.create_index('ix_users_company_user_id', 'users_company', ['user_id'])
    op.create_index('ix_users_company_company_id', 'users_company', ['company_id'])

    op.create_table(
        'users_management',
        *_base_columns(),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('management_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['management_id'], ['management.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'management_id', name='uq_users_management_pair'),
    )
    op.create_index('ix_users_management_user_id', 'users_management', ['user_id'])
    op.create_index('ix_users_management_management_id', 'users_management', ['management_id'])

    op.create_table(
        'process',
        *_base_columns(),
        sa.Column('job_offer', sa.String(length=255), nullable=False),
        sa.Column('job_offer_description', sa.Text(), nullable=True),
        sa.Column('management_id', sa.Integer(), nullable=False),
        sa.Column('opened_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('closed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('pre_filtered', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('status', sa.String(length=50), nullable=True),
        sa.ForeignKeyConstraint(['management_id'], ['management.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_process_management_id', 'process', ['management_id'])

    op.create_table(
        'candidates',
        *_base_columns(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('address', sa.String(length=500), nullable=True),
        sa.Column('profile_summary', sa.Text(), nullable=True),
        sa.Column('total_experience', sa.String(length=100), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_candidates_email', 'candidates', ['email'])
    op.create_index('ix_candidates_phone', 'candidates', ['phone'])

    op.create_table(
        'candidate_process',
        *_base_columns(),
        sa.Column('candidate_id', sa.Integer(), nullable=False),
        sa.Column('process_id', sa.Integer(), nullable=False),
        sa.Column('match_percent', sa.Integer(), nullable=True),
        sa.Column('stage', sa.String(length=50), nullable=False, server_default='entrevistas'),
        sa.Column('technical_skills', sa.Text(), nullable=True),
        sa.Column('soft_skills', sa.Text(), nullable=True),
        sa.Column('client_comments', sa.JSON(), nullable=True),
        sa.Column('interview_questions', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['candidate_id'], ['candidates.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['process_id'], ['process.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('candidate_id', 'process_id', name='uq_candidate_process_pair'),
    )
    op.create_index('ix_candidate_process_candidate_id', 'candidate_process', ['candidate_id'])
    op.create_index('ix_candidate_process_process_id', 'candidate_process', ['process_id'])

    op.create_table(
        'candidate_management',
        *_base_columns(),
        sa.Column('candidate_id', sa.Integer(), nullable=False),
        sa.Column('management_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=False, server_default='activo'),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('position', sa.String(length=255), nullable=True),
        sa.Column('rate', sa.Numeric(16, 6), nullable=True),
        sa.ForeignKeyConstraint(['candidate_id'], ['candidates.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['management_id'], ['management.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_candidate_management_candidate_id', 'candidate_management', ['candidate_id'])
    op.create_index('ix_candidate_management_management_id', 'candidate_management', ['management_id'])

    op.create_table(
        'post_sales_activities',
        *_base_columns(),
        sa.Column('candidate_management_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=True),
        sa.Column('eval_stack', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('eval_communication', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('eval_motivation', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('eval_compliance', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('benefit', sa.Text(), nullable=True),
        sa.Column('client_comment', sa.Text(), nullable=True),
        sa.Column('actions', sa.Text(), nullable=True),
        sa.Column('projection', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(
            ['candidate_management_id'], ['candidate_management.id'], ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_post_sales_activities_candidate_management_id',
        'post_sales_activities',
        ['candidate_management_id'],
    )

    op.create_table(
        'pre_invoices',
        *_base_columns(),
        sa.Column('company_id', sa.Integer(), nullable=False),
        sa.Column('estimated_date', sa.Date(), nullable=True),
        sa.Column('expiration_date', sa.Date(), nullable=True),
        sa.Column('total_value', sa.Numeric(30, 10), nullable=False, server_default='0'),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=50), nullable=False, server_default='borrador'),
        sa.ForeignKeyConstraint(['company_id'], ['company.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_pre_invoices_company_id', 'pre_invoices', ['company_id'])

    op.create_table(
        'pre_invoice_items',
        *_base_columns(),
        sa.Column('pre_invoice_id', sa.Integer(), nullable=False),
        sa.Column('candidate_id', sa.Integer(), nullable=False),
        sa.Column('service', sa.String(length=255), nullable=True),
        sa.Column('hours', sa.Numeric(8, 2), nullable=False, server_default='0'),
        sa.Column('rate', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('subtotal', sa.Numeric(20, 4), nullable=False, server_default='0'),
        sa.Column('vat', sa.Numeric(7, 4), nullable=False, server_default='0'),
        sa.Column('total', sa.Numeric(28, 10), nullable=False, server_default='0'),
        sa.Column('description', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['pre_invoice_id'], ['pre_invoices.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['candidate_id'], ['candidates.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_pre_invoice_items_pre_invoice_id', 'pre_invoice_items', ['pre_invoice_id'])
    op.create_index('ix_pre_invoice_items_candidate_id', 'pre_invoice_items', ['candidate_id'])

    roles = sa.table('roles', sa.column('name', sa.String))
    op.bulk_insert(roles, [{'name': name} for name in ROLES])


def downgrade() -> None:
    """Drop every back-office table."""
    for table in (
        'pre_invoice_items',
        'pre_invoices',
        'post_sales_activities',
        'candidate_management',
        'candidate_process',
        'candidates',
        'process',
        'users_management',
        'users_company',
        'users',
        'management',
        'company',
        'roles',
    ):
        op.drop_table(table)
