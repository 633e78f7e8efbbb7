# wellness/models/activity.py
from datetime import datetime
from .. import db


class Activity(db.Model):
    __tablename__ = "activities"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    type = db.Column(
        db.Enum(
            "workout", "meal", "mindfulness", "sleep", "hydration",
            name="activity_type_enum",
        ),
        nullable=False,
    )
    title = db.Column(db.String(120), nullable=False)
    description = db.Column(db.Text)
    # when it happened, not when it was logged
    date = db.Column(db.DateTime, nullable=False, index=True)

    duration = db.Column(db.Float)  # minutes
    calories = db.Column(db.Float)

    # meal only
    protein = db.Column(db.Float)
    carbs = db.Column(db.Float)
    fat = db.Column(db.Float)
    fiber = db.Column(db.Float)
    meal_type = db.Column(db.String(20))      # breakfast | lunch | dinner | snack

    # workout only
    workout_type = db.Column(db.String(20))   # cardio | strength | yoga | ...
    intensity = db.Column(db.String(20))      # low | medium | high

    meditation_type = db.Column(db.String(30))
    sleep_quality = db.Column(db.Integer)     # 1..5
    mood = db.Column(db.Integer)              # 1..5
    notes = db.Column(db.Text)
    tags = db.Column(db.JSON, default=list)

    points_earned = db.Column(db.Integer, default=0, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    user = db.relationship("User", backref="activities")

    @property
    def has_nutrition(self) -> bool:
        return any(v is not None for v in (self.protein, self.carbs, self.fat, self.fiber))

    def nutrition_dict(self):
        if not self.has_nutrition:
            return None
        return {
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
            "fiber": self.fiber,
        }

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "type": self.type,
            "title": self.title,
            "description": self.description,
            "date": self.date.isoformat() if self.date else None,
            "duration": self.duration,
            "calories": self.calories,
            "nutrition": self.nutrition_dict(),
            "workoutType": self.workout_type,
            "intensity": self.intensity,
            "mealType": self.meal_type,
            "meditationType": self.meditation_type,
            "sleepQuality": self.sleep_quality,
            "mood": self.mood,
            "notes": self.notes,
            "tags": self.tags or [],
            "pointsEarned": int(self.points_earned or 0),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
