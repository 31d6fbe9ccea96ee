"""SQLAlchemy ORM models for the nutrition planning service.

Profile, DietPlan and WaterLog rows. Collections (allergies, cuisines,
meal timings, conditions, day plans) are stored as JSON-encoded text.
Models stay behavior-free; conversion to and from the pydantic schemas
lives in `core.repository`.
"""

from sqlalchemy import Boolean, Column, Date, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import declarative_base
from datetime import datetime

Base = declarative_base()


class Profile(Base):
    """One intake profile per user."""

    __tablename__ = "profiles"
    user_id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    age = Column(Integer, nullable=False)
    gender = Column(String, nullable=False)
    weight = Column(Float, nullable=False)
    height = Column(Float, nullable=False)
    activity_level = Column(String, nullable=False)
    primary_goal = Column(String, nullable=False)
    target_weight = Column(Float, nullable=True)
    diet_type = Column(String, nullable=False)
    allergies = Column(Text, nullable=True)
    preferred_cuisines = Column(Text, nullable=True)
    meal_timings = Column(Text, nullable=True)
    plan_duration_days = Column(Integer, nullable=False)
    medical_conditions = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class DietPlan(Base):
    """A generated plan. `days` holds the JSON-encoded list of day plans."""

    __tablename__ = "diet_plans"
    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, index=True, nullable=False)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    duration_days = Column(Integer, nullable=False)
    daily_calories = Column(Integer, nullable=False)
    protein = Column(Integer, nullable=False)
    carbs = Column(Integer, nullable=False)
    fat = Column(Integer, nullable=False)
    days = Column(Text, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    completed_days = Column(Integer, default=0, nullable=False)
    adherence_rate = Column(Integer, default=0, nullable=False)
    source = Column(String, default="template", nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)


class WaterLog(Base):
    """A single drink logged by a user."""

    __tablename__ = "water_logs"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, index=True, nullable=False)
    logged_on = Column(Date, nullable=False)
    amount_ml = Column(Float, nullable=False)
    time = Column(String, nullable=True)
    beverage_type = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
