"""Meal plan generator service.

Builds a multi-day `DietPlan` from a profile and its nutrition targets.
Meals come from the template pools in `data.meal_templates`, rotated by day
number, with nutrition derived from each slot's share of the daily calories.
An optional assistant can supply the days instead; whenever it returns
nothing usable the template path runs.
"""

import datetime as dt
from typing import Dict, List, Optional

from core.events import PLAN_GENERATED, EventBus, event_bus as default_event_bus
from core.exceptions import ValidationError
from core.logger import get_logger
from data.meal_templates import FULL_TEMPLATES, VEGETARIAN_TEMPLATES
from schemas.enums import DietType, MealSlot, PlanSource, PrimaryGoal
from schemas.nutrition_schema import NutritionData, NutritionTargets
from schemas.plan_schema import DayPlan, DietPlan, Ingredient, Macros, Meal, PlanProgress
from schemas.profile_schema import UserProfile

logger = get_logger("services.meal_plan_generator")

MIN_PLAN_DAYS = 7
MAX_PLAN_DAYS = 365

# Breakfast, lunch and dinner are rounded; the snack takes whatever is left.
SLOT_CALORIE_SHARES = {
    MealSlot.BREAKFAST: 0.25,
    MealSlot.LUNCH: 0.35,
    MealSlot.DINNER: 0.30,
}

# Per-meal macro split, as a share of the meal's calories.
MEAL_PROTEIN_SHARE = 0.15
MEAL_CARBS_SHARE = 0.50
MEAL_FAT_SHARE = 0.35
MEAL_FIBER_PER_KCAL = 0.02

GOAL_LABELS = {
    PrimaryGoal.WEIGHT_LOSS: "Weight Loss",
    PrimaryGoal.MUSCLE_GAIN: "Muscle Building",
    PrimaryGoal.MAINTENANCE: "Maintenance",
    PrimaryGoal.GENERAL_HEALTH: "Healthy Living",
}

DIET_LABELS = {
    DietType.OMNIVORE: "",
    DietType.VEGETARIAN: "Vegetarian",
    DietType.VEGAN: "Vegan",
    DietType.PESCATARIAN: "Pescatarian",
    DietType.KETO: "Ketogenic",
    DietType.PALEO: "Paleo",
}

VEGETARIAN_DIETS = (DietType.VEGETARIAN, DietType.VEGAN)


class MealPlanGenerator:
    """Class-based plan generator.

    Parameters
    ----------
    assistant: object, optional
        Anything with a `generate_days(profile, targets, duration_days,
        start_date)` method returning a list of DayPlan or None.
    event_bus: EventBus, optional
        Bus that receives `plan_generated`. Defaults to the shared bus.
    """

    def __init__(self, assistant=None, event_bus: Optional[EventBus] = None):
        self.assistant = assistant
        self.event_bus = event_bus if event_bus is not None else default_event_bus

    # Slot and meal helpers
    def allocate_slot_calories(self, daily_calories: int) -> Dict[MealSlot, int]:
        """Split a day's calories over the four slots; the parts sum to the total."""
        allocation = {slot: round(daily_calories * share) for slot, share in SLOT_CALORIE_SHARES.items()}
        allocation[MealSlot.SNACKS] = daily_calories - sum(allocation.values())
        return allocation

    def template_pool(self, diet_type: DietType) -> Dict[str, List[dict]]:
        if diet_type in VEGETARIAN_DIETS:
            return VEGETARIAN_TEMPLATES
        return FULL_TEMPLATES

    def select_template(self, slot: MealSlot, day: int, diet_type: DietType) -> dict:
        """Pick the template for a slot on a given day by rotating through the pool."""
        pool = self.template_pool(diet_type)[slot.value]
        return pool[day % len(pool)]

    def meal_nutrition(self, calories: int) -> NutritionData:
        """Split a slot's calories into protein, carbs, fat and fiber grams."""
        return NutritionData(
            calories=calories,
            protein=round(calories * MEAL_PROTEIN_SHARE / 4),
            carbs=round(calories * MEAL_CARBS_SHARE / 4),
            fat=round(calories * MEAL_FAT_SHARE / 9),
            fiber=round(calories * MEAL_FIBER_PER_KCAL),
        )

    def build_meal(self, meal_id: str, template: dict, calories: int) -> Meal:
        return Meal(
            id=meal_id,
            name=template["name"],
            description=template.get("description", ""),
            ingredients=[Ingredient(**ing) for ing in template.get("ingredients", [])],
            instructions=list(template.get("instructions", [])),
            nutrition=self.meal_nutrition(calories),
            prep_time=template.get("prep_time", 0),
            cook_time=template.get("cook_time", 0),
            servings=1,
        )

    def build_day(self, day: int, date: dt.date, daily_calories: int, diet_type: DietType) -> DayPlan:
        calories = self.allocate_slot_calories(daily_calories)

        def meal_for(slot: MealSlot, meal_id: str) -> Meal:
            return self.build_meal(meal_id, self.select_template(slot, day, diet_type), calories[slot])

        return DayPlan(
            day=day,
            date=date,
            breakfast=meal_for(MealSlot.BREAKFAST, f"meal_breakfast_{day}"),
            lunch=meal_for(MealSlot.LUNCH, f"meal_lunch_{day}"),
            dinner=meal_for(MealSlot.DINNER, f"meal_dinner_{day}"),
            snacks=[meal_for(MealSlot.SNACKS, f"meal_snacks_{day}_0")],
        )

    def build_template_days(self, duration_days: int, daily_calories: int, diet_type: DietType,
                            start_date: dt.date) -> List[DayPlan]:
        """Template days for the whole plan, dated from start_date."""
        return [
            self.build_day(day, start_date + dt.timedelta(days=day - 1), daily_calories, diet_type)
            for day in range(1, duration_days + 1)
        ]

    # Naming
    def plan_name(self, profile: UserProfile) -> str:
        goal_label = GOAL_LABELS.get(profile.primary_goal, "Custom")
        diet_label = DIET_LABELS.get(profile.diet_type, "")
        if diet_label:
            return f"{diet_label} {goal_label} Plan"
        return f"{goal_label} Plan"

    def plan_description(self, profile: UserProfile, daily_calories: int) -> str:
        goal_words = profile.primary_goal.value.replace("_", " ")
        description = f"A personalized {daily_calories}-calorie daily plan designed for {goal_words}"
        if profile.diet_type != DietType.OMNIVORE:
            description += f" following a {profile.diet_type.value} diet"
        return description + ". Tailored to your preferences, activity level, and dietary restrictions."

    # Validation
    def validate_inputs(self, duration_days: int, targets: NutritionTargets) -> None:
        """Raise ValidationError for a duration outside the allowed range or a negative target."""
        if not MIN_PLAN_DAYS <= duration_days <= MAX_PLAN_DAYS:
            raise ValidationError(
                f"Plan duration must be between {MIN_PLAN_DAYS} and {MAX_PLAN_DAYS} days, got {duration_days}",
                field="duration_days",
            )
        for name in ("daily_calories", "protein", "carbs", "fat"):
            if getattr(targets, name) < 0:
                raise ValidationError(f"Nutrition target '{name}' must not be negative", field=name)

    def _assistant_days(self, profile: UserProfile, targets: NutritionTargets, duration_days: int,
                        start_date: dt.date) -> Optional[List[DayPlan]]:
        if self.assistant is None:
            logger.info("Assistant requested but none configured, using templates")
            return None
        try:
            days = self.assistant.generate_days(profile, targets, duration_days, start_date)
        except Exception:
            logger.exception("Assistant failed, falling back to templates")
            return None
        if not days or len(days) != duration_days:
            logger.warning("Assistant returned no usable days, falling back to templates")
            return None
        return days

    def generate_plan(
        self,
        profile: UserProfile,
        targets: NutritionTargets,
        duration_days: Optional[int] = None,
        use_assistant: bool = False,
        user_id: Optional[str] = None,
        start_date: Optional[dt.date] = None,
    ) -> DietPlan:
        """Generate a complete plan for a profile.

        Args:
            profile: Validated user profile.
            targets: Daily targets for the profile.
            duration_days: Overrides the profile's plan length when given.
            use_assistant: Ask the assistant for the days before using templates.
            user_id: Owner recorded on the plan.
            start_date: Date of day 1; defaults to today.

        Returns:
            A new, active DietPlan with zero progress.

        Raises:
            ValidationError: duration outside 7-365 days or a negative target.
        """
        duration = duration_days if duration_days is not None else profile.plan_duration_days
        self.validate_inputs(duration, targets)
        start = start_date or dt.date.today()

        days = None
        source = PlanSource.TEMPLATE
        if use_assistant:
            days = self._assistant_days(profile, targets, duration, start)
            if days is not None:
                source = PlanSource.ASSISTANT
        if days is None:
            days = self.build_template_days(duration, targets.daily_calories, profile.diet_type, start)

        plan = DietPlan(
            user_id=user_id,
            name=self.plan_name(profile),
            description=self.plan_description(profile, targets.daily_calories),
            duration_days=duration,
            daily_calories=targets.daily_calories,
            macros=Macros(protein=targets.protein, carbs=targets.carbs, fat=targets.fat),
            days=days,
            is_active=True,
            progress=PlanProgress(completed_days=0, total_days=duration, adherence_rate=0),
            source=source,
        )
        logger.info("Generated plan %s (%s, %s days, source=%s)", plan.id, plan.name, duration, source.value)
        self.event_bus.publish(PLAN_GENERATED, {
            "plan_id": plan.id,
            "plan_name": plan.name,
            "total_days": plan.progress.total_days,
            "daily_calories": plan.daily_calories,
        })
        return plan


# export singleton
meal_plan_generator = MealPlanGenerator()
__all__ = ["MealPlanGenerator", "meal_plan_generator"]
