# wellness/models/user.py
from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash
from .. import db
from ..scoring import level_for_points


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    is_email_verified = db.Column(db.Boolean, default=False, nullable=False)
    last_login = db.Column(db.DateTime)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    profile = db.relationship("UserProfile", back_populates="user", uselist=False)

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "fullName": self.full_name,
            "isEmailVerified": self.is_email_verified,
            "lastLogin": self.last_login.isoformat() if self.last_login else None,
        }


class UserProfile(db.Model):
    """Gamification totals and wellness preferences, one row per user."""

    __tablename__ = "user_profiles"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), unique=True, nullable=False)

    total_points = db.Column(db.Integer, default=0, nullable=False)
    level = db.Column(db.Integer, default=1, nullable=False)
    current_streak = db.Column(db.Integer, default=0, nullable=False)
    longest_streak = db.Column(db.Integer, default=0, nullable=False)

    current_weight = db.Column(db.Float)
    target_weight = db.Column(db.Float)
    height = db.Column(db.Float)
    date_of_birth = db.Column(db.Date)
    activity_level = db.Column(
        db.Enum(
            "sedentary", "light", "moderate", "active", "very-active",
            name="activity_level_enum",
        ),
        default="moderate",
        nullable=False,
    )
    notifications_enabled = db.Column(db.Boolean, default=True, nullable=False)
    preferred_workout_time = db.Column(db.String(50))
    timezone = db.Column(db.String(64))

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    user = db.relationship("User", back_populates="profile")

    def add_points(self, points: int) -> None:
        self.total_points = int(self.total_points or 0) + int(points)
        self.level = level_for_points(self.total_points)

    def to_dict(self):
        return {
            "totalPoints": int(self.total_points or 0),
            "level": int(self.level or 1),
            "currentStreak": int(self.current_streak or 0),
            "longestStreak": int(self.longest_streak or 0),
            "currentWeight": self.current_weight,
            "targetWeight": self.target_weight,
            "height": self.height,
            "dateOfBirth": self.date_of_birth.isoformat() if self.date_of_birth else None,
            "activityLevel": self.activity_level,
            "notificationsEnabled": self.notifications_enabled,
            "preferredWorkoutTime": self.preferred_workout_time,
            "timezone": self.timezone,
        }
