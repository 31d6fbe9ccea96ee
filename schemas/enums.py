"""Enumerations shared by the profile, nutrition and plan schemas."""

from enum import Enum


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(str, Enum):
    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class PrimaryGoal(str, Enum):
    WEIGHT_LOSS = "weight_loss"
    MUSCLE_GAIN = "muscle_gain"
    MAINTENANCE = "maintenance"
    GENERAL_HEALTH = "general_health"


class DietType(str, Enum):
    OMNIVORE = "omnivore"
    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    PESCATARIAN = "pescatarian"
    KETO = "keto"
    PALEO = "paleo"


class MedicalCondition(str, Enum):
    """Conditions picked on the intake form.

    NONE is an explicit "no conditions" answer and suppresses every other
    selection. OTHER is recorded but has no condition-specific advice.
    """
    NONE = "none"
    DIABETES = "diabetes"
    HYPERTENSION = "hypertension"
    HEART_DISEASE = "heart_disease"
    HIGH_CHOLESTEROL = "high_cholesterol"
    CELIAC = "celiac"
    LACTOSE_INTOLERANCE = "lactose_intolerance"
    OTHER = "other"


class MealSlot(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACKS = "snacks"


class NutritionStatus(str, Enum):
    DEFICIT = "deficit"
    OPTIMAL = "optimal"
    EXCESS = "excess"


class Trend(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


class BeverageType(str, Enum):
    WATER = "water"
    TEA = "tea"
    COFFEE = "coffee"
    JUICE = "juice"
    OTHER = "other"


class PlanSource(str, Enum):
    TEMPLATE = "template"
    ASSISTANT = "assistant"
