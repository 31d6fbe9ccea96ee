"""Gemini-backed meal planning assistant.

Asks a Gemini model for a small number of distinct days and rotates them to
cover the whole plan. The assistant never raises: a missing key, a failed
call, an empty answer or a response that does not validate all end in
`None`, and the generator falls back to its templates.
"""

import datetime as dt
import json
from typing import Any, Dict, List, Optional

from google import genai
from pydantic import ValidationError as PydanticValidationError

from core.config import Config
from core.logger import get_logger
from schemas.enums import DietType, MealSlot
from schemas.nutrition_schema import NutritionTargets
from schemas.plan_schema import DayPlan, Meal
from schemas.profile_schema import UserProfile

logger = get_logger("services.ai_meal_planner")

DIET_INSTRUCTIONS = {
    DietType.VEGETARIAN: "Include only vegetarian foods (no meat, fish, or poultry). Dairy and eggs are fine.",
    DietType.VEGAN: "Include only vegan foods (no animal products of any kind).",
    DietType.PESCATARIAN: "Fish and seafood are allowed, but no meat or poultry. Dairy and eggs are fine.",
    DietType.KETO: "Focus on high-fat, very low-carb foods. Keep carbs under 20g per day.",
    DietType.PALEO: "Use only whole, unprocessed foods: meat, fish, eggs, vegetables, fruit, nuts and seeds.",
    DietType.OMNIVORE: "Include a balanced mix of plant and animal foods.",
}

RESPONSE_SHAPE = """{
  "days": [
    {
      "breakfast": <meal>,
      "lunch": <meal>,
      "dinner": <meal>,
      "snacks": [<meal>]
    }
  ]
}
where <meal> is:
{
  "name": "<string>",
  "description": "<string>",
  "ingredients": [{"name": "<string>", "amount": <number>, "unit": "<string>", "calories": <number>}],
  "instructions": ["<step>"],
  "nutrition": {"calories": <number>, "protein": <number>, "carbs": <number>, "fat": <number>, "fiber": <number>},
  "prep_time": <minutes>,
  "cook_time": <minutes>
}"""


class GeminiMealPlanner:
    """Plan assistant wrapping the google-genai client."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, client=None,
                 max_distinct_days: int = Config.AI_MAX_DISTINCT_DAYS):
        self.api_key = api_key or Config.GEMINI_API_KEY
        self.model = model or Config.GEMINI_MODEL
        self.max_distinct_days = max_distinct_days
        if client is not None:
            self.client = client
        elif self.api_key:
            self.client = genai.Client(api_key=self.api_key)
        else:
            self.client = None

    @property
    def available(self) -> bool:
        return self.client is not None

    def build_prompt(self, profile: UserProfile, targets: NutritionTargets, distinct_days: int) -> str:
        conditions = sorted(c.value for c in profile.active_conditions)
        timings = profile.meal_timings
        return f"""You are a registered dietitian. Generate {distinct_days} distinct days of meals.

USER PROFILE:
- Age: {profile.age}, Gender: {profile.gender.value}
- Weight: {profile.weight}kg, Height: {profile.height}cm
- Activity Level: {profile.activity_level.value}
- Primary Goal: {profile.primary_goal.value}
- Diet Type: {profile.diet_type.value}

NUTRITIONAL TARGETS (per day):
- Calories: {targets.daily_calories}
- Protein: {targets.protein}g
- Carbohydrates: {targets.carbs}g
- Fat: {targets.fat}g

DIETARY REQUIREMENTS:
{DIET_INSTRUCTIONS[profile.diet_type]}

ALLERGIES TO AVOID: {', '.join(sorted(profile.allergies)) or 'None'}
PREFERRED CUISINES: {', '.join(profile.preferred_cuisines) or 'Any'}

MEAL TIMINGS:
- Breakfast: {timings.breakfast.strftime('%H:%M')}
- Lunch: {timings.lunch.strftime('%H:%M')}
- Dinner: {timings.dinner.strftime('%H:%M')}

MEDICAL CONDITIONS: {', '.join(conditions) or 'None'}

Each day needs breakfast, lunch, dinner and at least one snack. The meals of
a day should add up to roughly the calorie target.

Return ONLY a valid JSON object (no markdown, no code blocks) shaped like:
{RESPONSE_SHAPE}
"""

    def _extract_json(self, text: str) -> Optional[Dict[str, Any]]:
        """Pull the outermost JSON object out of a model response.

        A code fence that is never closed runs to the end of the text.
        """
        try:
            fence = "```json" if "```json" in text else "```" if "```" in text else None
            if fence:
                start = text.find(fence) + len(fence)
                end = text.find("```", start)
                text = (text[start:end] if end != -1 else text[start:]).strip()

            json_start = text.find("{")
            json_end = text.rfind("}") + 1
            if json_start != -1 and json_end > json_start:
                return json.loads(text[json_start:json_end])
            return None
        except json.JSONDecodeError as e:
            logger.error("JSON parsing error: %s", e)
            return None

    def _parse_meal(self, raw: Dict[str, Any], meal_id: str) -> Meal:
        data = dict(raw)
        data["id"] = meal_id
        data["completed"] = False
        return Meal.model_validate(data)

    def _parse_days(self, payload: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Validate the distinct days of a response into meal records.

        Raises pydantic's ValidationError, KeyError or TypeError on a
        malformed payload.
        """
        parsed = []
        for index, raw_day in enumerate(payload["days"], start=1):
            snacks = raw_day.get("snacks") or []
            parsed.append({
                MealSlot.BREAKFAST: self._parse_meal(raw_day["breakfast"], f"meal_breakfast_{index}"),
                MealSlot.LUNCH: self._parse_meal(raw_day["lunch"], f"meal_lunch_{index}"),
                MealSlot.DINNER: self._parse_meal(raw_day["dinner"], f"meal_dinner_{index}"),
                MealSlot.SNACKS: [self._parse_meal(s, f"meal_snacks_{index}_{i}") for i, s in enumerate(snacks)],
            })
        return parsed

    def _rotate(self, distinct: List[Dict[str, Any]], duration_days: int, start_date: dt.date) -> List[DayPlan]:
        days = []
        for day in range(1, duration_days + 1):
            source = distinct[(day - 1) % len(distinct)]

            def copy(meal: Meal, meal_id: str) -> Meal:
                return meal.model_copy(deep=True, update={"id": meal_id})

            days.append(DayPlan(
                day=day,
                date=start_date + dt.timedelta(days=day - 1),
                breakfast=copy(source[MealSlot.BREAKFAST], f"meal_breakfast_{day}"),
                lunch=copy(source[MealSlot.LUNCH], f"meal_lunch_{day}"),
                dinner=copy(source[MealSlot.DINNER], f"meal_dinner_{day}"),
                snacks=[copy(s, f"meal_snacks_{day}_{i}") for i, s in enumerate(source[MealSlot.SNACKS])],
            ))
        return days

    def generate_days(self, profile: UserProfile, targets: NutritionTargets, duration_days: int,
                      start_date: dt.date) -> Optional[List[DayPlan]]:
        """Ask the model for meals and return one DayPlan per plan day, or None."""
        if not self.available:
            logger.warning("Gemini API key not configured, skipping assistant")
            return None

        distinct_days = min(duration_days, self.max_distinct_days)
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=self.build_prompt(profile, targets, distinct_days),
            )
            text = getattr(response, "text", None)
            if not text:
                logger.warning("Gemini returned an empty response")
                return None
            payload = self._extract_json(text)
            if not payload:
                return None
            distinct = self._parse_days(payload)
            if not distinct:
                logger.warning("Gemini response contained no days")
                return None
            return self._rotate(distinct, duration_days, start_date)
        except (PydanticValidationError, KeyError, TypeError) as e:
            logger.error("Gemini meal plan did not validate: %s", e)
            return None
        except Exception as e:
            logger.error("Meal plan generation error: %s", e)
            return None


__all__ = ["GeminiMealPlanner"]
