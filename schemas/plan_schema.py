"""Schemas for meals, day plans and diet plans."""

import datetime as dt
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, computed_field, model_validator

from .enums import MealSlot, PlanSource
from .nutrition_schema import NutritionData


class Ingredient(BaseModel):
    name: str
    amount: float = Field(0, ge=0)
    unit: str = ""
    calories: float = Field(0, ge=0)
    optional: bool = False


class Meal(BaseModel):
    """A single meal inside a day plan."""

    id: str
    name: str
    description: str = ""
    ingredients: List[Ingredient] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    nutrition: NutritionData = Field(default_factory=NutritionData)
    prep_time: int = Field(0, ge=0, description="minutes")
    cook_time: int = Field(0, ge=0, description="minutes")
    servings: int = Field(1, ge=1)
    completed: bool = False
    rating: Optional[int] = Field(None, ge=1, le=5)
    notes: Optional[str] = None


class DayPlan(BaseModel):
    """One calendar day of a diet plan.

    `total_calories` and `completed` are derived from the meals on every
    read, so they cannot be set independently and cannot drift.
    """

    day: int = Field(..., ge=1)
    date: dt.date
    breakfast: Meal
    lunch: Meal
    dinner: Meal
    snacks: List[Meal] = Field(default_factory=list)
    notes: Optional[str] = None

    def meals(self) -> List[Meal]:
        return [self.breakfast, self.lunch, self.dinner, *self.snacks]

    @computed_field
    @property
    def total_calories(self) -> int:
        return round(sum(meal.nutrition.calories for meal in self.meals()))

    @computed_field
    @property
    def completed(self) -> bool:
        return all(meal.completed for meal in self.meals())


class Macros(BaseModel):
    protein: int = Field(..., ge=0)
    carbs: int = Field(..., ge=0)
    fat: int = Field(..., ge=0)


class PlanProgress(BaseModel):
    completed_days: int = Field(0, ge=0)
    total_days: int = Field(..., ge=0)
    adherence_rate: int = Field(0, ge=0, le=100)


class DietPlan(BaseModel):
    """A generated multi-day plan with its adherence progress."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    user_id: Optional[str] = None
    name: str
    description: str
    duration_days: int = Field(..., ge=7, le=365)
    daily_calories: int = Field(..., ge=0)
    macros: Macros
    days: List[DayPlan]
    is_active: bool = True
    progress: PlanProgress
    source: PlanSource = PlanSource.TEMPLATE
    created_at: dt.datetime = Field(default_factory=dt.datetime.utcnow)
    updated_at: dt.datetime = Field(default_factory=dt.datetime.utcnow)

    @model_validator(mode="after")
    def _one_day_plan_per_day(self):
        if len(self.days) != self.duration_days:
            raise ValueError(
                f"plan has {len(self.days)} day plans but duration_days is {self.duration_days}"
            )
        return self

    def day_plan(self, day: int) -> Optional[DayPlan]:
        """Return the DayPlan for a 1-based day number, if the plan has one."""
        for day_plan in self.days:
            if day_plan.day == day:
                return day_plan
        return None


class GeneratePlanRequest(BaseModel):
    """Payload for generating a new plan from the stored profile.

    `duration_days` overrides the profile's plan length and is checked by the
    generator (7-365).
    """

    use_assistant: bool = Field(False, description="Try the text-generation assistant before the templates")
    duration_days: Optional[int] = Field(None, examples=[14])


class MealCompletionRequest(BaseModel):
    slot: MealSlot = Field(..., examples=["lunch"])
    snack_index: Optional[int] = Field(None, ge=0, description="Required when slot is 'snacks'")
