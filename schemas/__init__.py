"""Pydantic schema package for domain records and request/response models."""

from .enums import (
    ActivityLevel,
    DietType,
    Gender,
    MealSlot,
    MedicalCondition,
    NutritionStatus,
    PlanSource,
    PrimaryGoal,
    Trend,
)
from .profile_schema import UserProfile, MealTimings, ProfileUpdateRequest
from .nutrition_schema import (
    NutritionData,
    NutritionTargets,
    NutritionProgress,
    NutritionReport,
    WeeklyTrend,
    WaterIntake,
    WaterStatus,
)
from .plan_schema import (
    Ingredient,
    Meal,
    DayPlan,
    DietPlan,
    Macros,
    PlanProgress,
    GeneratePlanRequest,
    MealCompletionRequest,
)

__all__ = [
    "ActivityLevel",
    "DietType",
    "Gender",
    "MealSlot",
    "MedicalCondition",
    "NutritionStatus",
    "PlanSource",
    "PrimaryGoal",
    "Trend",
    "UserProfile",
    "MealTimings",
    "ProfileUpdateRequest",
    "NutritionData",
    "NutritionTargets",
    "NutritionProgress",
    "NutritionReport",
    "WeeklyTrend",
    "WaterIntake",
    "WaterStatus",
    "Ingredient",
    "Meal",
    "DayPlan",
    "DietPlan",
    "Macros",
    "PlanProgress",
    "GeneratePlanRequest",
    "MealCompletionRequest",
]
