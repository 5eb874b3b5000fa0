"""Initial schema: users, renovations, drafts, system settings and content catalogue

Revision ID: 3f2a9c7d1e4b
Revises:
Create Date: 2026-01-10 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2a9c7d1e4b'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

userrole = sa.Enum('user', 'admin', name='userrole')
subscriptionplan = sa.Enum('free', 'pro', 'enterprise', name='subscriptionplan')


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=True),
        sa.Column('display_name', sa.String(length=200), nullable=True),
        sa.Column('photo_url', sa.Text(), nullable=True),
        sa.Column('role', userrole, nullable=False),
        sa.Column('plan', subscriptionplan, nullable=False),
        sa.Column('tokens', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_role'), 'users', ['role'], unique=False)

    op.create_table(
        'renovations',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('user_email', sa.String(length=255), nullable=True),
        sa.Column('original_image', sa.Text(), nullable=False),
        sa.Column('generated_image', sa.Text(), nullable=False),
        sa.Column('original_image_id', sa.String(length=500), nullable=True),
        sa.Column('generated_image_id', sa.String(length=500), nullable=True),
        sa.Column('config', sa.JSON(), nullable=False),
        sa.Column('analysis', sa.JSON(), nullable=True),
        sa.Column('timestamp', sa.BigInteger(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_renovations_user_id'), 'renovations', ['user_id'], unique=False)
    op.create_index(op.f('ix_renovations_timestamp'), 'renovations', ['timestamp'], unique=False)
    op.create_index('idx_renovation_user_timestamp', 'renovations', ['user_id', 'timestamp'], unique=False)

    op.create_table(
        'system_settings',
        sa.Column('key', sa.String(length=100), nullable=False),
        sa.Column('value', sa.JSON(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('updated_by', sa.String(length=36), nullable=True),
        sa.ForeignKeyConstraint(['updated_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('key'),
    )

    op.create_table(
        'drafts',
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('image', sa.Text(), nullable=True),
        sa.Column('config', sa.JSON(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('user_id'),
    )

    # Design catalogue
    op.create_table(
        'content_styles',
        sa.Column('id', sa.String(length=50), nullable=False),
        sa.Column('label', sa.String(length=100), nullable=False),
        sa.Column('value', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'content_rooms',
        sa.Column('id', sa.String(length=50), nullable=False),
        sa.Column('label', sa.String(length=100), nullable=False),
        sa.Column('value', sa.String(length=50), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'content_colors',
        sa.Column('id', sa.String(length=50), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('value', sa.String(length=50), nullable=False),
        sa.Column('bg_class', sa.String(length=100), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'content_flooring',
        sa.Column('id', sa.String(length=50), nullable=False),
        sa.Column('label', sa.String(length=100), nullable=False),
        sa.Column('value', sa.String(length=50), nullable=False),
        sa.Column('color_class', sa.String(length=100), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'content_furniture',
        sa.Column('id', sa.String(length=100), nullable=False),
        sa.Column('label', sa.String(length=100), nullable=False),
        sa.Column('icon', sa.String(length=50), nullable=True),
        sa.Column('room_types', sa.JSON(), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'content_presets',
        sa.Column('id', sa.String(length=50), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('style', sa.String(length=50), nullable=False),
        sa.Column('colors', sa.JSON(), nullable=False),
        sa.Column('flooring', sa.String(length=50), nullable=False),
        sa.Column('icon', sa.String(length=50), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    for table in ('content_styles', 'content_rooms', 'content_colors', 'content_flooring', 'content_furniture', 'content_presets'):
        op.create_index(op.f(f'ix_{table}_sort_order'), table, ['sort_order'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    for table in ('content_presets', 'content_furniture', 'content_flooring', 'content_colors', 'content_rooms', 'content_styles'):
        op.drop_index(op.f(f'ix_{table}_sort_order'), table_name=table)
        op.drop_table(table)

    op.drop_table('drafts')
    op.drop_table('system_settings')

    op.drop_index('idx_renovation_user_timestamp', table_name='renovations')
    op.drop_index(op.f('ix_renovations_timestamp'), table_name='renovations')
    op.drop_index(op.f('ix_renovations_user_id'), table_name='renovations')
    op.drop_table('renovations')

    op.drop_index(op.f('ix_users_role'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')

    subscriptionplan.drop(op.get_bind(), checkfirst=True)
    userrole.drop(op.get_bind(), checkfirst=True)
