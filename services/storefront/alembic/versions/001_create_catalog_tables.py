"""create catalog taxonomy and products tables

Revision ID: 001
Revises: 
Create Date: 2024-06-03 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'categories',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('slug', sa.Text(), nullable=False, unique=True),
        sa.Column('description', sa.Text()),
        sa.Column('image_url', sa.Text()),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        *_timestamps(),
        sa.CheckConstraint("status IN ('active', 'inactive')", name='category_status_valid'),
    )
    op.create_index('idx_categories_status', 'categories', ['status'])

    op.create_table(
        'sub_categories',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('slug', sa.Text(), nullable=False, unique=True),
        sa.Column('category_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('categories.id'), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('image_url', sa.Text()),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        *_timestamps(),
        sa.CheckConstraint("status IN ('active', 'inactive')", name='sub_category_status_valid'),
    )
    op.create_index('idx_sub_categories_category', 'sub_categories', ['category_id'])
    op.create_index('idx_sub_categories_status', 'sub_categories', ['status'])

    op.create_table(
        'super_sub_categories',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('slug', sa.Text(), nullable=False, unique=True),
        sa.Column('sub_category_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('sub_categories.id'), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('image_url', sa.Text()),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        *_timestamps(),
        sa.CheckConstraint("status IN ('active', 'inactive')", name='super_sub_category_status_valid'),
    )
    op.create_index('idx_super_sub_categories_sub_category', 'super_sub_categories', ['sub_category_id'])
    op.create_index('idx_super_sub_categories_status', 'super_sub_categories', ['status'])

    op.create_table(
        'products',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('slug', sa.Text(), nullable=False, unique=True),
        sa.Column('description', sa.Text()),
        sa.Column('key_features', sa.Text()),
        sa.Column('category_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('categories.id')),
        sa.Column('sub_category_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('sub_categories.id')),
        sa.Column('super_sub_category_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('super_sub_categories.id')),
        sa.Column('image_url', sa.Text()),
        sa.Column('image_url_2', sa.Text()),
        sa.Column('image_url_3', sa.Text()),
        sa.Column('catalogue_pdf_url', sa.Text()),
        sa.Column('featured', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        *_timestamps(),
        sa.CheckConstraint("status IN ('active', 'inactive')", name='product_status_valid'),
    )
    op.create_index('idx_products_category', 'products', ['category_id'])
    op.create_index('idx_products_sub_category', 'products', ['sub_category_id'])
    op.create_index('idx_products_super_sub_category', 'products', ['super_sub_category_id'])
    op.create_index('idx_products_status', 'products', ['status'])


def downgrade() -> None:
    op.drop_table('products')
    op.drop_table('super_sub_categories')
    op.drop_table('sub_categories')
    op.drop_table('categories')
