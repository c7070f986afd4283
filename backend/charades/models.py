from charades import db
from charades.records import (
    GuessRecord,
    PlayerRecord,
    RoomRecord,
    StrokeRecord,
    UserRecord,
    utcnow,
)


class User(db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    email = db.Column(db.String(120), nullable=True)
    password_hash = db.Column(db.String(256), nullable=True)
    games_played = db.Column(db.Integer, default=0, nullable=False)
    total_score = db.Column(db.Integer, default=0, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def to_record(self):
        return UserRecord(
            id=self.id,
            username=self.username,
            email=self.email,
            password_hash=self.password_hash,
            games_played=self.games_played or 0,
            total_score=self.total_score or 0,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class Room(db.Model):
    __tablename__ = 'room'
    id = db.Column(db.Integer, primary_key=True)
    code = db.Column(db.String(6), unique=True, index=True, nullable=False)
    name = db.Column(db.String(128), nullable=False)
    host_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    max_players = db.Column(db.Integer, default=8, nullable=False)
    is_active = db.Column(db.Boolean, default=False, nullable=False)
    is_public = db.Column(db.Boolean, default=True, nullable=False)
    current_word = db.Column(db.String(64), nullable=True)
    current_drawer_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=True)
    time_left = db.Column(db.Integer, default=600, nullable=False)
    round_number = db.Column(db.Integer, default=1, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def to_record(self):
        return RoomRecord(
            id=self.id,
            code=self.code,
            name=self.name,
            host_id=self.host_id,
            max_players=self.max_players,
            is_active=self.is_active,
            is_public=self.is_public,
            current_word=self.current_word,
            current_drawer_id=self.current_drawer_id,
            time_left=self.time_left,
            round_number=self.round_number,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class RoomPlayer(db.Model):
    __tablename__ = 'room_player'
    __table_args__ = (db.UniqueConstraint('room_id', 'user_id', name='uq_room_player_room_user'),)
    id = db.Column(db.Integer, primary_key=True)
    room_id = db.Column(db.Integer, db.ForeignKey('room.id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    score = db.Column(db.Integer, default=0, nullable=False)
    is_drawing = db.Column(db.Boolean, default=False, nullable=False)
    has_guessed = db.Column(db.Boolean, default=False, nullable=False)
    joined_at = db.Column(db.DateTime(timezone=True), default=utcnow)
    user = db.relationship('User')

    def to_record(self):
        return PlayerRecord(
            id=self.id,
            room_id=self.room_id,
            user_id=self.user_id,
            score=self.score or 0,
            is_drawing=self.is_drawing,
            has_guessed=self.has_guessed,
            joined_at=self.joined_at,
            user=self.user.to_record() if self.user else None,
        )


class Guess(db.Model):
    __tablename__ = 'guess'
    id = db.Column(db.Integer, primary_key=True)
    room_id = db.Column(db.Integer, db.ForeignKey('room.id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    guess = db.Column(db.String(255), nullable=False)
    is_correct = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)
    user = db.relationship('User')

    def to_record(self):
        return GuessRecord(
            id=self.id,
            room_id=self.room_id,
            user_id=self.user_id,
            guess=self.guess,
            is_correct=self.is_correct,
            created_at=self.created_at,
            user=self.user.to_record() if self.user else None,
        )


class DrawingStroke(db.Model):
    __tablename__ = 'drawing_stroke'
    id = db.Column(db.Integer, primary_key=True)
    room_id = db.Column(db.Integer, db.ForeignKey('room.id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    stroke_data = db.Column(db.JSON, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    def to_record(self):
        return StrokeRecord(
            id=self.id,
            room_id=self.room_id,
            user_id=self.user_id,
            stroke_data=dict(self.stroke_data or {}),
            created_at=self.created_at,
        )
