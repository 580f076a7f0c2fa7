"""initial schema: users, images, likes, social media links

Revision ID: 4b1d2e7a9c10
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '4b1d2e7a9c10'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=True),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('whatsapp', sa.String(length=32), nullable=True),
        sa.Column('watermark', sa.String(length=120), nullable=True),
        sa.Column('password_hash', sa.String(length=254), nullable=False),
        sa.Column(
            'status',
            sa.Enum('pending', 'active', 'blocked', name='enum_user_status', create_constraint=True),
            nullable=False,
        ),
        sa.Column(
            'role',
            sa.Enum('user', 'admin', name='enum_user_role', create_constraint=True),
            nullable=False,
        ),
        sa.Column('activated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('remarks', sa.Text(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )
    op.create_index('ix_users_status', 'users', ['status'])
    op.create_index('ix_users_role', 'users', ['role'])

    op.create_table(
        'images',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('original_name', sa.String(length=255), nullable=False),
        sa.Column('s3_key', sa.String(length=512), nullable=False),
        sa.Column('s3_url', sa.String(length=1024), nullable=False),
        sa.Column('size', sa.Integer(), nullable=False),
        sa.Column('mimetype', sa.String(length=100), nullable=False),
        sa.Column('uploaded_by', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ['uploaded_by'], ['users.id'], name='fk_images_uploaded_by_users', ondelete='SET NULL'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_images'),
        sa.UniqueConstraint('s3_key', name='uq_images_s3_key'),
    )
    op.create_index('ix_images_created_at', 'images', ['created_at'])

    op.create_table(
        'likes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('image_id', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'], name='fk_likes_user_id_users', ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['image_id'], ['images.id'], name='fk_likes_image_id_images', ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_likes'),
        sa.UniqueConstraint('user_id', 'image_id', name='uq_likes_user_image'),
    )
    op.create_index('ix_likes_image_id', 'likes', ['image_id'])

    op.create_table(
        'social_media_links',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column(
            'platform',
            sa.Enum(
                'youtube', 'instagram', 'facebook', 'threads',
                name='enum_social_platform', create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column('url', sa.String(length=1024), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_social_media_links'),
        sa.UniqueConstraint('platform', name='uq_social_media_links_platform'),
    )


def downgrade():
    op.drop_table('social_media_links')
    op.drop_index('ix_likes_image_id', table_name='likes')
    op.drop_table('likes')
    op.drop_index('ix_images_created_at', table_name='images')
    op.drop_table('images')
    op.drop_index('ix_users_role', table_name='users')
    op.drop_index('ix_users_status', table_name='users')
    op.drop_table('users')
    sa.Enum(name='enum_social_platform').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='enum_user_role').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='enum_user_status').drop(op.get_bind(), checkfirst=True)
