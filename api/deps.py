"""Request-scoped dependencies shared by the API routers."""

from typing import Optional

from fastapi import Header

from core.config import Config
from core.exceptions import ValidationError
from services.ai_meal_planner import GeminiMealPlanner
from services.meal_plan_generator import MealPlanGenerator

# The assistant is only consulted when a request asks for it.
plan_generator = MealPlanGenerator(
    assistant=GeminiMealPlanner() if Config.ENABLE_AI_MEAL_PLANNING else None,
)


def get_current_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """Return the caller's user id from the X-User-Id header."""
    if not x_user_id or not x_user_id.strip():
        raise ValidationError("X-User-Id header is required", field="X-User-Id")
    return x_user_id.strip()


def get_plan_generator() -> MealPlanGenerator:
    return plan_generator
