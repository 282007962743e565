"""initial schema: users, recipes, share codes and invites

Revision ID: 8b1f3c2d9a47
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '8b1f3c2d9a47'
down_revision = None
branch_labels = None
depends_on = None


def _role(name):
    return sa.Enum('user', 'admin', name=name, native_enum=False, length=16)


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', _role('user_role'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )
    op.create_table(
        'recipes',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('slug', sa.String(length=220), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('author_id', sa.Uuid(), nullable=True),
        sa.Column('is_published', sa.Boolean(), nullable=False),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['author_id'], ['users.id'], name='fk_recipes_author_id_users', ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id', name='pk_recipes'),
        sa.UniqueConstraint('slug', name='uq_recipes_slug'),
    )
    op.create_table(
        'share_codes',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('recipe_id', sa.Uuid(), nullable=False),
        sa.Column('code', sa.String(length=64), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('max_uses', sa.Integer(), nullable=True),
        sa.Column('use_count', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('use_count >= 0', name='ck_share_codes_use_count_non_negative'),
        sa.CheckConstraint('max_uses IS NULL OR max_uses >= 1', name='ck_share_codes_max_uses_positive'),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipes.id'], name='fk_share_codes_recipe_id_recipes', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_share_codes'),
        sa.UniqueConstraint('code', name='uq_share_codes_code'),
    )
    op.create_index('ix_share_codes_recipe_id', 'share_codes', ['recipe_id'], unique=False)
    op.create_table(
        'user_invites',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('code', sa.String(length=64), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=True),
        sa.Column('role', _role('invite_role'), nullable=False),
        sa.Column('created_by', sa.Uuid(), nullable=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('used_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('used_by', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['created_by'], ['users.id'], name='fk_user_invites_created_by_users', ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['used_by'], ['users.id'], name='fk_user_invites_used_by_users', ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id', name='pk_user_invites'),
        sa.UniqueConstraint('code', name='uq_user_invites_code'),
    )


def downgrade():
    op.drop_table('user_invites')
    op.drop_index('ix_share_codes_recipe_id', table_name='share_codes')
    op.drop_table('share_codes')
    op.drop_table('recipes')
    op.drop_table('users')
