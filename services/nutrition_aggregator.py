"""Nutrition aggregation service.

Sums nutrition across meals and days, compares intake with targets and
turns the comparison into a status, a 0-100 score, advice strings and
achievements. Every function here is a pure function of its arguments.
"""

from typing import Iterable, List, Optional

from core.logger import get_logger
from schemas.enums import DietType, MedicalCondition, NutritionStatus, PrimaryGoal
from schemas.nutrition_schema import (
    Minerals,
    NutritionData,
    NutritionPercentage,
    NutritionProgress,
    NutritionReport,
    NutritionTargets,
    Vitamins,
)
from schemas.plan_schema import DayPlan, Meal
from schemas.profile_schema import UserProfile
from services.nutrition_calculator import nutrition_calculator

logger = get_logger("services.nutrition_aggregator")

SCALAR_FIELDS = ("calories", "protein", "carbs", "fat", "fiber", "sugar", "sodium", "cholesterol")
PERCENTAGE_FIELDS = ("calories", "protein", "carbs", "fat", "fiber")
STATUS_FIELDS = ("calories", "protein", "carbs", "fat")

LOW_PERCENT = 80
HIGH_PERCENT = 120

SCORE_WEIGHTS = {"calories": 0.4, "protein": 0.2, "carbs": 0.2, "fat": 0.1, "fiber": 0.1}

LOW_ADVICE = {
    "calories": "You're not consuming enough calories. Consider adding nutrient-dense snacks or slightly larger portions.",
    "protein": "Increase your protein intake. Add lean meats, fish, eggs, or plant-based proteins to your meals.",
    "fat": "Include more healthy fats in your diet. Add avocados, nuts, seeds, or olive oil to your meals.",
    "carbs": "Increase your carbohydrate intake. Add whole grains, fruits, and vegetables to your meals.",
    "fiber": "Increase your fiber intake. Add more vegetables, fruits, whole grains, and legumes to your diet.",
}
HIGH_ADVICE = {
    "calories": "You're exceeding your calorie goal. Consider reducing portion sizes or choosing lower-calorie options.",
    "protein": "You're consuming more protein than needed. Consider balancing with more carbohydrates and healthy fats.",
    "fat": "Reduce your fat intake. Choose leaner protein sources and limit added oils and fats.",
    "carbs": "Reduce your carbohydrate intake. Focus on complex carbs and limit refined sugars.",
}
# Advice order: calories, protein, fat, carbs, fiber.
ADVICE_ORDER = ("calories", "protein", "fat", "carbs", "fiber")

COMPLETE_PROTEIN_ADVICE = (
    "As a vegetarian/vegan, ensure you're getting complete proteins by combining different plant sources."
)
B12_ADVICE = "Consider fortified foods or supplements for vitamin B12, especially if you're vegan."
WEIGHT_LOSS_ADVICE = (
    "For weight loss, focus on creating a moderate calorie deficit while maintaining adequate protein."
)
MUSCLE_GAIN_ADVICE = "For muscle gain, ensure you're in a slight calorie surplus with adequate protein intake."

CONDITION_ADVICE = {
    MedicalCondition.DIABETES: "Spread carbohydrates evenly across meals and prefer low glycemic index foods to keep blood sugar steady.",
    MedicalCondition.HYPERTENSION: "Keep sodium low: limit processed foods and added salt, and favor potassium-rich vegetables.",
    MedicalCondition.HEART_DISEASE: "Favor unsaturated fats from fish, nuts and olive oil over saturated and trans fats.",
    MedicalCondition.HIGH_CHOLESTEROL: "Choose soluble fiber such as oats and legumes, and limit foods high in saturated fat.",
    MedicalCondition.CELIAC: "Keep every meal strictly gluten-free and check labels for hidden wheat, barley and rye.",
    MedicalCondition.LACTOSE_INTOLERANCE: "Use lactose-free dairy or fortified plant milks to keep calcium intake up.",
}

FIBER_ACHIEVEMENT = "Fiber Goal Achieved! Great job on your digestive health."
PROTEIN_ACHIEVEMENT = "Protein Goal Achieved! Perfect for muscle maintenance and growth."
SCORE_ACHIEVEMENT = "Excellent Nutrition Score! You're meeting your nutritional needs perfectly."


class NutritionAggregator:
    """Stateless aggregation over meals, days and reports."""

    # Sums
    def add(self, a: NutritionData, b: NutritionData) -> NutritionData:
        """Field-wise sum of two nutrition records, vitamins and minerals included."""
        return NutritionData(
            **{name: getattr(a, name) + getattr(b, name) for name in SCALAR_FIELDS},
            vitamins=Vitamins(**{
                name: getattr(a.vitamins, name) + getattr(b.vitamins, name) for name in Vitamins.model_fields
            }),
            minerals=Minerals(**{
                name: getattr(a.minerals, name) + getattr(b.minerals, name) for name in Minerals.model_fields
            }),
        )

    def total(self, items: Iterable[NutritionData]) -> NutritionData:
        """Sum any number of nutrition records.

        Args:
            items: Records to add up; may be empty.

        Returns:
            NutritionData: The field-wise total, all zeros for no items.
        """
        result = NutritionData()
        for item in items:
            result = self.add(result, item)
        return result

    def meal_nutrition(self, meal: Meal) -> NutritionData:
        """Nutrition of a single meal as served, regardless of completion."""
        return meal.nutrition

    def day_total(self, day: DayPlan) -> NutritionData:
        """Nutrition of every meal in the day, completed or not."""
        return self.total(self.meal_nutrition(meal) for meal in day.meals())

    def completed_total(self, day: DayPlan) -> NutritionData:
        """Nutrition of the completed meals only."""
        return self.total(self.meal_nutrition(meal) for meal in day.meals() if meal.completed)

    def recalculate_day_totals(self, day: DayPlan) -> int:
        """Return the day's rounded calorie total from its meals."""
        return round(self.day_total(day).calories)

    # Comparison
    def progress(self, current: NutritionData, target: NutritionData) -> NutritionProgress:
        """Compare intake with a target; a zero target yields 0%."""
        percentage = NutritionPercentage(**{
            name: round(getattr(current, name) / getattr(target, name) * 100) if getattr(target, name) else 0
            for name in PERCENTAGE_FIELDS
        })
        return NutritionProgress(
            current=current,
            target=target,
            percentage=percentage,
            status=self.status(percentage),
        )

    def status(self, percentage: NutritionPercentage) -> NutritionStatus:
        """Deficit wins over excess when one nutrient is low and another high."""
        values = [getattr(percentage, name) for name in STATUS_FIELDS]
        if any(v < LOW_PERCENT for v in values):
            return NutritionStatus.DEFICIT
        if any(v > HIGH_PERCENT for v in values):
            return NutritionStatus.EXCESS
        return NutritionStatus.OPTIMAL

    def _sub_score(self, pct: float) -> float:
        if 90 <= pct <= 110:
            return 100
        if LOW_PERCENT <= pct <= HIGH_PERCENT:
            return 80
        return max(0, 100 - abs(pct - 100))

    def score(self, progress: NutritionProgress) -> int:
        """Weighted 0-100 score; fiber only penalizes under-consumption."""
        pct = progress.percentage
        sub_scores = {name: self._sub_score(getattr(pct, name)) for name in STATUS_FIELDS}
        sub_scores["fiber"] = min(100, pct.fiber * 1.25)
        weighted = sum(sub_scores[name] * weight for name, weight in SCORE_WEIGHTS.items())
        return min(100, max(0, round(weighted)))

    # Advice
    def recommendations(self, progress: NutritionProgress, profile: UserProfile) -> List[str]:
        """Advice for a day's intake, in a fixed order.

        Args:
            progress: Intake compared with the day's targets.
            profile: Used for diet type, goal and medical conditions.

        Returns:
            list: Nutrient advice first, then diet, goal and condition advice.
        """
        pct = progress.percentage
        advice = []
        for name in ADVICE_ORDER:
            value = getattr(pct, name)
            if value < LOW_PERCENT:
                advice.append(LOW_ADVICE[name])
            elif value > HIGH_PERCENT and name in HIGH_ADVICE:
                advice.append(HIGH_ADVICE[name])

        if profile.diet_type in (DietType.VEGETARIAN, DietType.VEGAN):
            if pct.protein < LOW_PERCENT:
                advice.append(COMPLETE_PROTEIN_ADVICE)
            advice.append(B12_ADVICE)

        if profile.primary_goal == PrimaryGoal.WEIGHT_LOSS and progress.status == NutritionStatus.EXCESS:
            advice.append(WEIGHT_LOSS_ADVICE)
        elif profile.primary_goal == PrimaryGoal.MUSCLE_GAIN and progress.status == NutritionStatus.DEFICIT:
            advice.append(MUSCLE_GAIN_ADVICE)

        for condition in MedicalCondition:
            if condition in profile.active_conditions and condition in CONDITION_ADVICE:
                advice.append(CONDITION_ADVICE[condition])
        return advice

    def achievements(self, progress: NutritionProgress, score: int) -> List[str]:
        """Badges earned for fiber, protein on target and a high score."""
        pct = progress.percentage
        earned = []
        if pct.fiber >= 100:
            earned.append(FIBER_ACHIEVEMENT)
        if 100 <= pct.protein <= 110:
            earned.append(PROTEIN_ACHIEVEMENT)
        if score >= 90:
            earned.append(SCORE_ACHIEVEMENT)
        return earned

    def daily_report(self, day: DayPlan, profile: UserProfile,
                     targets: Optional[NutritionTargets] = None) -> NutritionReport:
        """Build the report for one day from its completed meals.

        Targets default to the profile's computed targets.
        """
        if targets is None:
            targets = nutrition_calculator.calculate_targets(profile)
        current = self.completed_total(day)
        progress = self.progress(current, targets.as_nutrition())
        score = self.score(progress)
        logger.debug("Day %s report: score=%s status=%s", day.day, score, progress.status.value)
        return NutritionReport(
            date=day.date,
            nutrition=current,
            goals=progress,
            score=score,
            recommendations=self.recommendations(progress, profile),
            achievements=self.achievements(progress, score),
        )

    def check_deficiencies(self, nutrition: NutritionData, goals: NutritionData) -> List[str]:
        """Name the nutrients that fall below 80% of their goal.

        Vitamin C, iron and calcium are only checked when both the intake and
        the goal are recorded (non-zero).
        """
        found = []
        if nutrition.protein < goals.protein * 0.8:
            found.append("Protein deficiency detected. Increase protein intake.")
        if nutrition.fiber < goals.fiber * 0.8:
            found.append("Low fiber intake. Add more fruits, vegetables, and whole grains.")

        vitamin_c, vitamin_c_goal = nutrition.vitamins.vitamin_c, goals.vitamins.vitamin_c
        if vitamin_c and vitamin_c_goal and vitamin_c < vitamin_c_goal * 0.8:
            found.append("Vitamin C deficiency. Include more citrus fruits, berries, or vegetables.")
        iron, iron_goal = nutrition.minerals.iron, goals.minerals.iron
        if iron and iron_goal and iron < iron_goal * 0.8:
            found.append("Iron deficiency. Include more lean meats, beans, or leafy greens.")
        calcium, calcium_goal = nutrition.minerals.calcium, goals.minerals.calcium
        if calcium and calcium_goal and calcium < calcium_goal * 0.8:
            found.append("Calcium deficiency. Include more dairy products, leafy greens, or fortified foods.")
        return found


# export singleton
nutrition_aggregator = NutritionAggregator()
__all__ = ["NutritionAggregator", "nutrition_aggregator"]
