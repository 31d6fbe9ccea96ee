"""Schemas for nutrition values, targets, progress and reports.

Vitamins and minerals are fixed-shape records whose keys all default to 0,
so summing and comparing nutrition never has to deal with missing keys.
"""

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat

from .enums import BeverageType, NutritionStatus, Trend


class Vitamins(BaseModel):
    """Vitamin amounts (mcg for A, D, K, folate and B12; mg otherwise)."""

    vitamin_a: NonNegativeFloat = 0
    vitamin_c: NonNegativeFloat = 0
    vitamin_d: NonNegativeFloat = 0
    vitamin_e: NonNegativeFloat = 0
    vitamin_k: NonNegativeFloat = 0
    thiamin: NonNegativeFloat = 0
    riboflavin: NonNegativeFloat = 0
    niacin: NonNegativeFloat = 0
    vitamin_b6: NonNegativeFloat = 0
    folate: NonNegativeFloat = 0
    vitamin_b12: NonNegativeFloat = 0


class Minerals(BaseModel):
    """Mineral amounts (mcg for selenium; mg otherwise)."""

    calcium: NonNegativeFloat = 0
    iron: NonNegativeFloat = 0
    magnesium: NonNegativeFloat = 0
    phosphorus: NonNegativeFloat = 0
    potassium: NonNegativeFloat = 0
    zinc: NonNegativeFloat = 0
    copper: NonNegativeFloat = 0
    manganese: NonNegativeFloat = 0
    selenium: NonNegativeFloat = 0


class NutritionData(BaseModel):
    """Nutrition of a meal, a day or any sum of them."""

    calories: NonNegativeFloat = 0
    protein: NonNegativeFloat = 0
    carbs: NonNegativeFloat = 0
    fat: NonNegativeFloat = 0
    fiber: NonNegativeFloat = 0
    sugar: NonNegativeFloat = 0
    sodium: NonNegativeFloat = 0
    cholesterol: NonNegativeFloat = 0
    vitamins: Vitamins = Field(default_factory=Vitamins)
    minerals: Minerals = Field(default_factory=Minerals)


class NutritionTargets(BaseModel):
    """Daily targets derived from a profile. Read-only once computed."""

    model_config = ConfigDict(frozen=True)

    daily_calories: int = Field(..., ge=0)
    protein: int = Field(..., ge=0, description="grams")
    carbs: int = Field(..., ge=0, description="grams")
    fat: int = Field(..., ge=0, description="grams")
    fiber: NonNegativeFloat = 0
    sugar: NonNegativeFloat = 0
    sodium: NonNegativeFloat = 0
    cholesterol: NonNegativeFloat = 0
    vitamins: Vitamins = Field(default_factory=Vitamins)
    minerals: Minerals = Field(default_factory=Minerals)

    def as_nutrition(self) -> NutritionData:
        """Return the targets in the shape of a NutritionData record."""
        return NutritionData(
            calories=self.daily_calories,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
            fiber=self.fiber,
            sugar=self.sugar,
            sodium=self.sodium,
            cholesterol=self.cholesterol,
            vitamins=self.vitamins,
            minerals=self.minerals,
        )


class NutritionPercentage(BaseModel):
    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fat: int = 0
    fiber: int = 0


class NutritionProgress(BaseModel):
    current: NutritionData
    target: NutritionData
    percentage: NutritionPercentage
    status: NutritionStatus


class NutritionReport(BaseModel):
    """Point-in-time view of one day: completed meals against the targets."""

    date: dt.date
    nutrition: NutritionData
    goals: NutritionProgress
    score: int = Field(..., ge=0, le=100)
    recommendations: List[str] = Field(default_factory=list)
    achievements: List[str] = Field(default_factory=list)


class WeeklyTrend(BaseModel):
    average_score: int = 0
    trend: Trend = Trend.STABLE
    strongest_area: str = "N/A"
    weakest_area: str = "N/A"


class WaterIntake(BaseModel):
    amount_ml: float = Field(..., gt=0, examples=[250])
    time: Optional[dt.time] = Field(None, examples=["09:30"])
    type: BeverageType = BeverageType.WATER


class WaterStatus(BaseModel):
    goal_ml: int
    total_ml: int
    percentage: int
    low: bool
