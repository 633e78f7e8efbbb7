# wellness/models/daily_stats.py
from datetime import datetime
from .. import db


class DailyStats(db.Model):
    __tablename__ = "daily_stats"
    __table_args__ = (
        db.UniqueConstraint("user_id", "stat_date", name="uq_daily_stats_user_date"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    stat_date = db.Column(db.Date, nullable=False)

    workouts_completed = db.Column(db.Integer, default=0, nullable=False)
    meals_logged = db.Column(db.Integer, default=0, nullable=False)
    mindfulness_minutes = db.Column(db.Float, default=0, nullable=False)
    sleep_hours = db.Column(db.Float, default=0, nullable=False)
    water_glasses = db.Column(db.Integer, default=0, nullable=False)

    total_calories = db.Column(db.Float, default=0, nullable=False)
    total_protein = db.Column(db.Float, default=0, nullable=False)
    total_carbs = db.Column(db.Float, default=0, nullable=False)
    total_fat = db.Column(db.Float, default=0, nullable=False)

    goals_completed = db.Column(db.Integer, default=0, nullable=False)
    total_goals = db.Column(db.Integer, default=0, nullable=False)

    points_earned = db.Column(db.Integer, default=0, nullable=False)
    streak_maintained = db.Column(db.Boolean, default=False, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    user = db.relationship("User", backref="daily_stats")

    COUNTER_FIELDS = (
        "workouts_completed",
        "meals_logged",
        "mindfulness_minutes",
        "sleep_hours",
        "water_glasses",
        "total_calories",
        "total_protein",
        "total_carbs",
        "total_fat",
        "points_earned",
    )

    @classmethod
    def empty(cls, user_id: int, stat_date):
        row = cls(user_id=user_id, stat_date=stat_date)
        for field in cls.COUNTER_FIELDS:
            setattr(row, field, 0)
        row.goals_completed = 0
        row.total_goals = 0
        row.streak_maintained = False
        return row

    def increment(self, deltas) -> None:
        for field, value in deltas.items():
            setattr(self, field, (getattr(self, field) or 0) + value)

    def to_dict(self):
        return {
            "date": self.stat_date.isoformat(),
            "workoutsCompleted": int(self.workouts_completed or 0),
            "mealsLogged": int(self.meals_logged or 0),
            "mindfulnessMinutes": self.mindfulness_minutes or 0,
            "sleepHours": self.sleep_hours or 0,
            "waterGlasses": int(self.water_glasses or 0),
            "totalCalories": self.total_calories or 0,
            "totalProtein": self.total_protein or 0,
            "totalCarbs": self.total_carbs or 0,
            "totalFat": self.total_fat or 0,
            "goalsCompleted": int(self.goals_completed or 0),
            "totalGoals": int(self.total_goals or 0),
            "pointsEarned": int(self.points_earned or 0),
            "streakMaintained": bool(self.streak_maintained),
        }
