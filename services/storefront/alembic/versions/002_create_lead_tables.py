"""create contact, newsletter and catalogue request tables

Revision ID: 002
Revises: 001
Create Date: 2024-06-10 14:30:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '002'
down_revision = '001'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'contact_enquiries',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('first_name', sa.Text(), nullable=False),
        sa.Column('last_name', sa.Text(), nullable=False),
        sa.Column('business', sa.Text()),
        sa.Column('email', sa.Text(), nullable=False),
        sa.Column('phone', sa.Text()),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("status IN ('pending', 'resolved', 'archived')", name='contact_status_valid'),
    )
    op.create_index('idx_contact_enquiries_created', 'contact_enquiries', ['created_at'])

    op.create_table(
        'newsletter_subscriptions',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('email', sa.Text(), nullable=False, unique=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("status IN ('active', 'unsubscribed')", name='newsletter_status_valid'),
    )

    op.create_table(
        'catalogue_requests',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('product_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('products.id', ondelete='SET NULL')),
        sa.Column('product_name', sa.Text(), nullable=False),
        sa.Column('customer_name', sa.Text(), nullable=False),
        sa.Column('customer_phone', sa.Text(), nullable=False),
        sa.Column('customer_email', sa.Text(), nullable=False),
        sa.Column('catalogue_pdf_url', sa.Text()),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("status IN ('pending', 'sent', 'archived')", name='catalogue_request_status_valid'),
    )
    op.create_index('idx_catalogue_requests_created', 'catalogue_requests', ['created_at'])


def downgrade() -> None:
    op.drop_table('catalogue_requests')
    op.drop_table('newsletter_subscriptions')
    op.drop_table('contact_enquiries')
