"""Tabular export of diet plans.

One row per meal, in day order and then breakfast, lunch, dinner, snacks.
The plan is only read.
"""

import pandas as pd

from schemas.plan_schema import DietPlan

EXPORT_COLUMNS = [
    "day", "date", "slot", "meal_id", "name", "calories", "protein", "carbs", "fat", "fiber",
    "prep_time", "cook_time", "completed", "ingredients",
]


def plan_to_frame(plan: DietPlan) -> pd.DataFrame:
    """Flatten a plan into one row per meal with the EXPORT_COLUMNS columns."""
    rows = []
    for day_plan in plan.days:
        slots = [("breakfast", day_plan.breakfast), ("lunch", day_plan.lunch), ("dinner", day_plan.dinner)]
        slots += [("snacks", snack) for snack in day_plan.snacks]
        for slot, meal in slots:
            rows.append({
                "day": day_plan.day,
                "date": day_plan.date.isoformat(),
                "slot": slot,
                "meal_id": meal.id,
                "name": meal.name,
                "calories": meal.nutrition.calories,
                "protein": meal.nutrition.protein,
                "carbs": meal.nutrition.carbs,
                "fat": meal.nutrition.fat,
                "fiber": meal.nutrition.fiber,
                "prep_time": meal.prep_time,
                "cook_time": meal.cook_time,
                "completed": meal.completed,
                "ingredients": "; ".join(
                    f"{ing.amount:g} {ing.unit} {ing.name}".strip() for ing in meal.ingredients
                ),
            })
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def plan_to_csv(plan: DietPlan) -> str:
    """Render the plan as CSV text with a header row."""
    return plan_to_frame(plan).to_csv(index=False)
