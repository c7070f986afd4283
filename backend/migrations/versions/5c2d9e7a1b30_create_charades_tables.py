"""create user, room, room_player, guess and drawing_stroke tables

Revision ID: 5c2d9e7a1b30
Revises:
Create Date: 2026-10-18 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2d9e7a1b30'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=True),
        sa.Column('password_hash', sa.String(length=256), nullable=True),
        sa.Column('games_played', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_user_username', 'user', ['username'], unique=True)

    op.create_table(
        'room',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('code', sa.String(length=6), nullable=False),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('host_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
        sa.Column('max_players', sa.Integer(), nullable=False, server_default='8'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_public', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('current_word', sa.String(length=64), nullable=True),
        sa.Column('current_drawer_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=True),
        sa.Column('time_left', sa.Integer(), nullable=False, server_default='600'),
        sa.Column('round_number', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_room_code', 'room', ['code'], unique=True)

    op.create_table(
        'room_player',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('room_id', sa.Integer(), sa.ForeignKey('room.id'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_drawing', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('has_guessed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('joined_at', sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint('room_id', 'user_id', name='uq_room_player_room_user'),
    )
    op.create_index('ix_room_player_room_id', 'room_player', ['room_id'])

    op.create_table(
        'guess',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('room_id', sa.Integer(), sa.ForeignKey('room.id'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
        sa.Column('guess', sa.String(length=255), nullable=False),
        sa.Column('is_correct', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_guess_room_id', 'guess', ['room_id'])

    op.create_table(
        'drawing_stroke',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('room_id', sa.Integer(), sa.ForeignKey('room.id'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
        sa.Column('stroke_data', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_drawing_stroke_room_id', 'drawing_stroke', ['room_id'])


def downgrade():
    op.drop_index('ix_drawing_stroke_room_id', table_name='drawing_stroke')
    op.drop_table('drawing_stroke')
    op.drop_index('ix_guess_room_id', table_name='guess')
    op.drop_table('guess')
    op.drop_index('ix_room_player_room_id', table_name='room_player')
    op.drop_table('room_player')
    op.drop_index('ix_room_code', table_name='room')
    op.drop_table('room')
    op.drop_index('ix_user_username', table_name='user')
    op.drop_table('user')
