# wellness/models/wellness_goal.py
from datetime import datetime
from .. import db


class WellnessGoal(db.Model):
    __tablename__ = "wellness_goals"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    title = db.Column(db.String(120), nullable=False)
    description = db.Column(db.Text)
    category = db.Column(
        db.Enum(
            "fitness", "nutrition", "mindfulness", "sleep", "hydration", "weight",
            name="goal_category_enum",
        ),
        nullable=False,
    )
    target_value = db.Column(db.Float, nullable=False)
    current_value = db.Column(db.Float, default=0, nullable=False)
    unit = db.Column(db.String(30), nullable=False)  # kg, minutes, glasses, hours
    target_date = db.Column(db.Date)
    status = db.Column(
        db.Enum("active", "completed", "paused", "cancelled", name="goal_status_enum"),
        default="active",
        nullable=False,
    )
    priority = db.Column(
        db.Enum("low", "medium", "high", name="goal_priority_enum"),
        default="medium",
        nullable=False,
    )
    is_daily = db.Column(db.Boolean, default=False, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    user = db.relationship("User", backref="wellness_goals")
