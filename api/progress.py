"""Progress API router.

Daily nutrition reports, multi-day trends and water intake for the caller.
"""

import datetime as dt
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from api.deps import get_current_user_id
from core.exceptions import NotFoundError, ValidationError
from core.logger import get_logger
from core.repository import DietPlanRepository, ProfileRepository, WaterLogRepository
from database.deps import get_db_read, get_db_write
from schemas import NutritionReport, WaterIntake, WaterStatus, WeeklyTrend
from services.nutrition_aggregator import nutrition_aggregator
from services.nutrition_calculator import nutrition_calculator
from services.progress_tracker import progress_tracker

logger = get_logger("api.progress")
router = APIRouter(prefix="/api/progress", tags=["progress"])

DEFAULT_TREND_DAYS = 7


@router.get("/water-goal", response_model=WaterStatus)
def get_water_status(on_date: Optional[dt.date] = None, user_id: str = Depends(get_current_user_id),
                     db: Session = Depends(get_db_read)):
    """Return the caller's water goal and what has been logged on a date (today by default)."""
    profile = ProfileRepository(db).require(user_id)
    goal = nutrition_calculator.calculate_water_goal(profile.weight, profile.activity_level)
    entries = WaterLogRepository(db).list_for_day(user_id, on_date or dt.date.today())
    return progress_tracker.water_status(entries, goal)


@router.post("/water", response_model=WaterStatus, status_code=201)
def log_water(payload: WaterIntake, user_id: str = Depends(get_current_user_id),
              db: Session = Depends(get_db_write)):
    """Log a drink for today and return the updated water status."""
    profile = ProfileRepository(db).require(user_id)
    repo = WaterLogRepository(db)
    today = dt.date.today()
    entries = progress_tracker.track_water_intake(repo.list_for_day(user_id, today), payload)
    repo.add(user_id, payload, today)
    goal = nutrition_calculator.calculate_water_goal(profile.weight, profile.activity_level)
    logger.info("User %s logged %s ml of %s", user_id, payload.amount_ml, payload.type.value)
    return progress_tracker.water_status(entries, goal)


@router.get("/{plan_id}/days/{day}/report", response_model=NutritionReport)
def get_day_report(plan_id: str, day: int, user_id: str = Depends(get_current_user_id),
                   db: Session = Depends(get_db_read)):
    """Report the completed meals of one plan day against the caller's targets.

    Raises:
        NotFoundError: If the plan, the day or the profile does not exist.
    """
    plan = DietPlanRepository(db).get_owned(plan_id, user_id)
    day_plan = plan.day_plan(day)
    if day_plan is None:
        raise NotFoundError("Day", day)
    profile = ProfileRepository(db).require(user_id)
    return nutrition_aggregator.daily_report(day_plan, profile)


@router.get("/{plan_id}/trends", response_model=WeeklyTrend)
def get_trends(plan_id: str, start_day: int = Query(1, ge=1), end_day: Optional[int] = Query(None, ge=1),
               user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_read)):
    """Summarize daily reports over a range of plan days (a week from start_day by default)."""
    plan = DietPlanRepository(db).get_owned(plan_id, user_id)
    if end_day is None:
        end_day = min(start_day + DEFAULT_TREND_DAYS - 1, plan.duration_days)
    if end_day < start_day:
        raise ValidationError("end_day must not be before start_day", field="end_day")

    profile = ProfileRepository(db).require(user_id)
    targets = nutrition_calculator.calculate_targets(profile)
    reports = [
        nutrition_aggregator.daily_report(day_plan, profile, targets)
        for day_plan in plan.days
        if start_day <= day_plan.day <= end_day
    ]
    return progress_tracker.weekly_summary(reports)
