"""Nutrition calculation helpers.

Turns a validated `UserProfile` into `NutritionTargets`: BMR (Mifflin-St
Jeor), TDEE, the goal adjustment, macro grams and reference intakes for
fiber, sugar, sodium, cholesterol, vitamins and minerals.

The lookup tables below are policy, not physiology. They are the single
source of truth for every target the service computes.
"""

from typing import Dict, Union

from core.logger import get_logger
from schemas.enums import ActivityLevel, DietType, Gender, PrimaryGoal
from schemas.nutrition_schema import Minerals, NutritionTargets, Vitamins
from schemas.profile_schema import UserProfile

logger = get_logger("services.nutrition_calculator")

PROTEIN_KCAL_PER_GRAM = 4
CARBS_KCAL_PER_GRAM = 4
FAT_KCAL_PER_GRAM = 9

DEFAULT_ACTIVITY_MULTIPLIER = 1.55

ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}

# Absolute kcal offsets applied to TDEE. Maintenance and general health keep TDEE.
GOAL_CALORIE_ADJUSTMENTS = {
    PrimaryGoal.WEIGHT_LOSS: -500,
    PrimaryGoal.MUSCLE_GAIN: 300,
    PrimaryGoal.MAINTENANCE: 0,
    PrimaryGoal.GENERAL_HEALTH: 0,
}

# Share of daily calories per macro. Every row sums to 1.0.
DEFAULT_MACRO_RATIOS = {"protein": 0.25, "fat": 0.30, "carbs": 0.45}
MACRO_RATIOS = {
    DietType.KETO: {"protein": 0.25, "fat": 0.70, "carbs": 0.05},
    DietType.PALEO: {"protein": 0.30, "fat": 0.35, "carbs": 0.35},
    DietType.VEGETARIAN: {"protein": 0.20, "fat": 0.25, "carbs": 0.55},
    DietType.VEGAN: {"protein": 0.20, "fat": 0.25, "carbs": 0.55},
}

# Water: ml per kg of body weight, scaled by activity.
WATER_ML_PER_KG = 35
WATER_ACTIVITY_FACTORS = {
    ActivityLevel.SEDENTARY: 1.0,
    ActivityLevel.LIGHT: 1.1,
    ActivityLevel.MODERATE: 1.2,
    ActivityLevel.ACTIVE: 1.3,
    ActivityLevel.VERY_ACTIVE: 1.4,
}

SODIUM_MG = 2300
SUGAR_CALORIE_SHARE = 0.10

REFERENCE_VITAMINS = Vitamins(
    vitamin_a=900,
    vitamin_c=90,
    vitamin_d=20,
    vitamin_e=15,
    vitamin_k=120,
    thiamin=1.2,
    riboflavin=1.3,
    niacin=16,
    vitamin_b6=1.3,
    folate=400,
    vitamin_b12=2.4,
)


def _reference_minerals(gender: Gender) -> Minerals:
    return Minerals(
        calcium=1000,
        iron=8 if gender == Gender.MALE else 18,
        magnesium=420,
        phosphorus=700,
        potassium=3500,
        zinc=11,
        copper=0.9,
        manganese=2.3,
        selenium=55,
    )


class NutritionCalculator:
    """Class-based nutrition calculator used across the app.

    Inputs are assumed to come from a validated profile; out-of-range values
    are the caller's contract violation and are not checked here.
    """

    def calculate_bmr(self, weight_kg: float, height_cm: float, age: int, gender: Union[Gender, str]) -> float:
        """Calculate BMR using the Mifflin-St Jeor equation.

        Female and other both use the -161 constant.
        """
        base = 10 * weight_kg + 6.25 * height_cm - 5 * age
        if Gender(gender) == Gender.MALE:
            return base + 5
        return base - 161

    def activity_multiplier(self, activity_level: Union[ActivityLevel, str]) -> float:
        """Return the TDEE multiplier; unknown levels count as moderate."""
        try:
            return ACTIVITY_MULTIPLIERS[ActivityLevel(activity_level)]
        except ValueError:
            logger.warning("Unknown activity level %r, using moderate multiplier", activity_level)
            return DEFAULT_ACTIVITY_MULTIPLIER

    def calculate_tdee(self, bmr: float, activity_level: Union[ActivityLevel, str]) -> float:
        """Estimate TDEE from BMR and activity multiplier."""
        val = bmr * self.activity_multiplier(activity_level)
        logger.debug("TDEE calculated: %s", val)
        return val

    def adjust_for_goal(self, tdee: float, goal: Union[PrimaryGoal, str]) -> float:
        """Apply the goal's absolute calorie offset, never going below zero."""
        val = max(0.0, tdee + GOAL_CALORIE_ADJUSTMENTS[PrimaryGoal(goal)])
        logger.debug("Target calories for goal %s: %s", goal, val)
        return val

    def macro_ratios(self, diet_type: Union[DietType, str]) -> Dict[str, float]:
        """Return the calorie share of protein, fat and carbs for a diet type."""
        return dict(MACRO_RATIOS.get(DietType(diet_type), DEFAULT_MACRO_RATIOS))

    def grams_from_calories(self, calories: float, ratio: float, calories_per_gram: float) -> int:
        return round(calories * ratio / calories_per_gram)

    def calculate_macros(self, daily_calories: float, diet_type: Union[DietType, str]) -> Dict[str, int]:
        """Allocate macronutrient grams from a calorie target.

        Protein and fat come straight from their ratios. Carbs take the
        calories left after rounding those two, so 4*protein + 4*carbs +
        9*fat stays within 2 kcal of the target.
        """
        ratios = self.macro_ratios(diet_type)
        protein = self.grams_from_calories(daily_calories, ratios["protein"], PROTEIN_KCAL_PER_GRAM)
        fat = self.grams_from_calories(daily_calories, ratios["fat"], FAT_KCAL_PER_GRAM)
        remaining = daily_calories - protein * PROTEIN_KCAL_PER_GRAM - fat * FAT_KCAL_PER_GRAM
        macros = {
            "protein": protein,
            "carbs": max(0, self.grams_from_calories(remaining, 1.0, CARBS_KCAL_PER_GRAM)),
            "fat": fat,
        }
        logger.debug("Macros calculated: %s", macros)
        return macros

    def calculate_targets(self, profile: UserProfile) -> NutritionTargets:
        """Derive the full set of daily targets for a profile.

        Grams are computed from the rounded daily calories so the macro
        energy stays within a few kcal of the calorie target.
        """
        bmr = self.calculate_bmr(profile.weight, profile.height, profile.age, profile.gender)
        tdee = self.calculate_tdee(bmr, profile.activity_level)
        daily_calories = round(self.adjust_for_goal(tdee, profile.primary_goal))
        macros = self.calculate_macros(daily_calories, profile.diet_type)

        targets = NutritionTargets(
            daily_calories=daily_calories,
            protein=macros["protein"],
            carbs=macros["carbs"],
            fat=macros["fat"],
            fiber=round(profile.age * 0.5 + 10),
            sugar=round(daily_calories * SUGAR_CALORIE_SHARE / CARBS_KCAL_PER_GRAM),
            sodium=SODIUM_MG,
            cholesterol=300 if profile.gender == Gender.MALE else 200,
            vitamins=REFERENCE_VITAMINS,
            minerals=_reference_minerals(profile.gender),
        )
        logger.info(
            "Targets for %s/%s: %s kcal, P%s C%s F%s",
            profile.primary_goal.value, profile.diet_type.value,
            targets.daily_calories, targets.protein, targets.carbs, targets.fat,
        )
        return targets

    def calculate_water_goal(self, weight_kg: float, activity_level: Union[ActivityLevel, str]) -> int:
        """Daily water goal in ml: 35 ml/kg scaled by activity level."""
        try:
            factor = WATER_ACTIVITY_FACTORS[ActivityLevel(activity_level)]
        except ValueError:
            factor = 1.0
        return round(weight_kg * WATER_ML_PER_KG * factor)


# export singleton
nutrition_calculator = NutritionCalculator()
__all__ = ["NutritionCalculator", "nutrition_calculator"]
