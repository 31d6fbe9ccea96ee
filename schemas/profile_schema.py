"""Schemas for user profiles and profile update requests."""

import datetime as dt
from typing import List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field

from .enums import ActivityLevel, DietType, Gender, MedicalCondition, PrimaryGoal


class MealTimings(BaseModel):
    """Preferred time of day for the three main meals."""

    breakfast: dt.time = Field(dt.time(8, 0), examples=["08:00"])
    lunch: dt.time = Field(dt.time(13, 0), examples=["13:00"])
    dinner: dt.time = Field(dt.time(19, 0), examples=["19:00"])


class UserProfile(BaseModel):
    """Physiological data and food preferences collected by the intake form.

    Every numeric field is range-checked on construction and on assignment,
    so a profile instance is never partially valid.
    """

    model_config = ConfigDict(validate_assignment=True)

    name: Optional[str] = Field(None, examples=["Jane Doe"])
    email: Optional[str] = Field(None, examples=["jane@example.com"])
    age: int = Field(..., ge=13, le=120, examples=[30], description="Age in years (13-120)")
    gender: Gender = Field(..., examples=["female"])
    weight: float = Field(..., ge=30, le=300, examples=[68.0], description="Weight in kilograms (30-300)")
    height: float = Field(..., ge=100, le=250, examples=[170.0], description="Height in centimeters (100-250)")
    activity_level: ActivityLevel = Field(..., examples=["moderate"])
    primary_goal: PrimaryGoal = Field(..., examples=["maintenance"])
    target_weight: Optional[float] = Field(None, ge=30, le=300, description="Goal weight in kilograms")
    diet_type: DietType = Field(DietType.OMNIVORE, examples=["vegetarian"])
    allergies: Set[str] = Field(default_factory=set, examples=[["peanuts"]])
    preferred_cuisines: List[str] = Field(default_factory=list, examples=[["indian", "italian"]])
    meal_timings: MealTimings = Field(default_factory=MealTimings)
    plan_duration_days: int = Field(30, ge=7, le=365, examples=[30], description="Plan length in days (7-365)")
    medical_conditions: Set[MedicalCondition] = Field(default_factory=set)

    @property
    def active_conditions(self) -> Set[MedicalCondition]:
        """Conditions that should drive condition-specific advice."""
        if MedicalCondition.NONE in self.medical_conditions:
            return set()
        return set(self.medical_conditions)


class ProfileUpdateRequest(BaseModel):
    """Partial profile update. Omitted fields keep their stored value."""

    name: Optional[str] = None
    email: Optional[str] = None
    age: Optional[int] = Field(None, ge=13, le=120)
    gender: Optional[Gender] = None
    weight: Optional[float] = Field(None, ge=30, le=300)
    height: Optional[float] = Field(None, ge=100, le=250)
    activity_level: Optional[ActivityLevel] = None
    primary_goal: Optional[PrimaryGoal] = None
    target_weight: Optional[float] = Field(None, ge=30, le=300)
    diet_type: Optional[DietType] = None
    allergies: Optional[Set[str]] = None
    preferred_cuisines: Optional[List[str]] = None
    meal_timings: Optional[MealTimings] = None
    plan_duration_days: Optional[int] = Field(None, ge=7, le=365)
    medical_conditions: Optional[Set[MedicalCondition]] = None
