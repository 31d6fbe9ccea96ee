"""Diet plan API router.

Generate plans from the stored profile, list and activate them, mark meals
eaten or reopen them, and export a plan as CSV. Every read-modify-write of a
plan runs under that plan's lock.
"""

from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from api.deps import get_current_user_id, get_plan_generator
from core.exceptions import NotFoundError
from core.logger import get_logger
from core.repository import DietPlanRepository, ProfileRepository, plan_lock
from database.deps import get_db_read, get_db_write
from schemas import DietPlan, GeneratePlanRequest, MealCompletionRequest
from services.meal_plan_generator import MealPlanGenerator
from services.nutrition_calculator import nutrition_calculator
from services.plan_export import plan_to_csv
from services.progress_tracker import progress_tracker

logger = get_logger("api.plans")
router = APIRouter(prefix="/api/plans", tags=["plans"])


@router.post("/generate", response_model=DietPlan, status_code=201)
def generate_plan(payload: GeneratePlanRequest, user_id: str = Depends(get_current_user_id),
                  db: Session = Depends(get_db_write),
                  generator: MealPlanGenerator = Depends(get_plan_generator)):
    """Generate a new plan from the caller's profile and make it the active one.

    Raises:
        NotFoundError: If the caller has no profile.
        ValidationError: If the requested duration is outside 7-365 days.
    """
    profile = ProfileRepository(db).require(user_id)
    targets = nutrition_calculator.calculate_targets(profile)
    plan = generator.generate_plan(
        profile,
        targets,
        duration_days=payload.duration_days,
        use_assistant=payload.use_assistant,
        user_id=user_id,
    )
    return DietPlanRepository(db).create_plan(plan)


@router.get("", response_model=List[DietPlan])
def list_plans(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_read)):
    """Return the caller's plans, newest first."""
    return DietPlanRepository(db).list_for_user(user_id)


@router.get("/active", response_model=DietPlan)
def get_active_plan(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_read)):
    plan = DietPlanRepository(db).get_active(user_id)
    if plan is None:
        raise NotFoundError("DietPlan", "active")
    return plan


@router.get("/{plan_id}", response_model=DietPlan)
def get_plan(plan_id: str, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_read)):
    return DietPlanRepository(db).get_owned(plan_id, user_id)


@router.post("/{plan_id}/activate", response_model=DietPlan)
def activate_plan(plan_id: str, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_write)):
    """Make this plan the caller's only active plan."""
    with plan_lock(plan_id):
        return DietPlanRepository(db).activate(plan_id, user_id)


@router.delete("/{plan_id}", status_code=204)
def delete_plan(plan_id: str, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_write)):
    """Delete an inactive plan.

    Raises:
        StateInvariantViolation: If the plan is the active one.
    """
    with plan_lock(plan_id):
        DietPlanRepository(db).remove(plan_id, user_id)
    return Response(status_code=204)


@router.post("/{plan_id}/days/{day}/complete", response_model=DietPlan)
def complete_meal(plan_id: str, day: int, payload: MealCompletionRequest,
                  user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_write)):
    """Mark one meal of a day as eaten and return the updated plan."""
    repo = DietPlanRepository(db)
    with plan_lock(plan_id):
        plan = repo.get_owned(plan_id, user_id)
        progress_tracker.complete_meal(plan, day, payload.slot, payload.snack_index)
        return repo.save(plan)


@router.post("/{plan_id}/days/{day}/reopen", response_model=DietPlan)
def reopen_meal(plan_id: str, day: int, payload: MealCompletionRequest,
                user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_write)):
    """Undo a meal completion; day and plan progress are recomputed."""
    repo = DietPlanRepository(db)
    with plan_lock(plan_id):
        plan = repo.get_owned(plan_id, user_id)
        progress_tracker.reopen_meal(plan, day, payload.slot, payload.snack_index)
        return repo.save(plan)


@router.get("/{plan_id}/export.csv")
def export_plan(plan_id: str, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_read)):
    plan = DietPlanRepository(db).get_owned(plan_id, user_id)
    return Response(
        content=plan_to_csv(plan),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="plan-{plan.id}.csv"'},
    )
