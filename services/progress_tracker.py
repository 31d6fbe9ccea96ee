"""Progress tracking service.

Maintains adherence state across the days of a plan: completing and
reopening meals, recomputing plan progress, and summarizing a run of daily
reports into a weekly trend. Water intake is tracked alongside.
"""

import datetime as dt
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from core.events import PROGRESS_MILESTONE, EventBus, event_bus as default_event_bus
from core.exceptions import NotFoundError, ValidationError
from core.logger import get_logger
from schemas.enums import MealSlot, Trend
from schemas.nutrition_schema import NutritionReport, WaterIntake, WaterStatus, WeeklyTrend
from schemas.plan_schema import DayPlan, DietPlan, Meal, PlanProgress

logger = get_logger("services.progress_tracker")

TREND_THRESHOLD = 5
WATER_LOW_RATIO = 0.8
NOT_AVAILABLE = "N/A"

# Listing order doubles as the tie-break order when ranking areas.
AREAS = (
    ("Protein", "protein"),
    ("Carbohydrates", "carbs"),
    ("Fat", "fat"),
    ("Fiber", "fiber"),
)


class ProgressTracker:
    """Applies meal completion to a plan and derives its progress.

    Plans are mutated in place and returned for convenience; callers that
    share a plan between threads must serialize writes per plan id.
    """

    def __init__(self, event_bus: Optional[EventBus] = None):
        self.event_bus = event_bus if event_bus is not None else default_event_bus

    def _day(self, plan: DietPlan, day: int) -> DayPlan:
        day_plan = plan.day_plan(day)
        if day_plan is None:
            raise NotFoundError("Day", day)
        return day_plan

    def _meal(self, day_plan: DayPlan, slot: MealSlot, snack_index: Optional[int]) -> Meal:
        slot = MealSlot(slot)
        if slot != MealSlot.SNACKS:
            return getattr(day_plan, slot.value)
        if snack_index is None:
            raise ValidationError("snack_index is required for the snacks slot", field="snack_index")
        if not 0 <= snack_index < len(day_plan.snacks):
            raise NotFoundError("Snack", snack_index)
        return day_plan.snacks[snack_index]

    def recompute_progress(self, plan: DietPlan) -> PlanProgress:
        """Recount completed days and adherence from the day plans."""
        total_days = plan.duration_days
        completed_days = sum(1 for day_plan in plan.days if day_plan.completed)
        adherence = round(completed_days / total_days * 100) if total_days else 0
        plan.progress = PlanProgress(
            completed_days=completed_days,
            total_days=total_days,
            adherence_rate=adherence,
        )
        return plan.progress

    def _set_meal_state(self, plan: DietPlan, day: int, slot: MealSlot, snack_index: Optional[int],
                        completed: bool) -> Tuple[DayPlan, bool]:
        day_plan = self._day(plan, day)
        meal = self._meal(day_plan, slot, snack_index)
        was_completed = day_plan.completed
        meal.completed = completed
        self.recompute_progress(plan)
        plan.updated_at = dt.datetime.utcnow()
        return day_plan, was_completed

    def complete_meal(self, plan: DietPlan, day: int, slot: MealSlot, snack_index: Optional[int] = None) -> DietPlan:
        """Mark a meal eaten and update the plan's progress.

        Publishes `progress_milestone` when this completion finishes the day.

        Raises:
            NotFoundError: the day or snack does not exist in the plan.
            ValidationError: a snack was addressed without an index.
        """
        day_plan, was_completed = self._set_meal_state(plan, day, slot, snack_index, True)
        logger.info("Plan %s day %s: %s completed", plan.id, day, MealSlot(slot).value)
        if day_plan.completed and not was_completed:
            self.event_bus.publish(PROGRESS_MILESTONE, {
                "plan_id": plan.id,
                "plan_name": plan.name,
                "completed_days": plan.progress.completed_days,
                "total_days": plan.progress.total_days,
                "adherence_rate": plan.progress.adherence_rate,
            })
        return plan

    def reopen_meal(self, plan: DietPlan, day: int, slot: MealSlot, snack_index: Optional[int] = None) -> DietPlan:
        """Clear a meal's completed flag; the day and plan progress follow it down."""
        self._set_meal_state(plan, day, slot, snack_index, False)
        logger.info("Plan %s day %s: %s reopened", plan.id, day, MealSlot(slot).value)
        return plan

    # Trends
    def weekly_trend(self, reports: Sequence[NutritionReport]) -> Trend:
        """Compare mean scores of the first and second half of the reports."""
        if len(reports) < 2:
            return Trend.STABLE
        scores = pd.Series([report.score for report in reports], dtype="float64")
        half = len(scores) // 2
        first, second = scores.iloc[:half].mean(), scores.iloc[half:].mean()
        if second > first + TREND_THRESHOLD:
            return Trend.IMPROVING
        if second < first - TREND_THRESHOLD:
            return Trend.DECLINING
        return Trend.STABLE

    def strongest_weakest_area(self, reports: Sequence[NutritionReport]) -> Tuple[str, str]:
        """Rank mean protein, carbs, fat and fiber percentages.

        Ties keep the listing order of AREAS.
        """
        if not reports:
            return NOT_AVAILABLE, NOT_AVAILABLE
        frame = pd.DataFrame(
            [{label: getattr(r.goals.percentage, field) for label, field in AREAS} for r in reports],
            columns=[label for label, _ in AREAS],
        )
        means = frame.mean()
        ranked = sorted(means.items(), key=lambda item: -item[1])
        return ranked[0][0], ranked[-1][0]

    def weekly_summary(self, reports: Sequence[NutritionReport]) -> WeeklyTrend:
        """Summarise a run of daily reports.

        Args:
            reports: Reports in day order.

        Returns:
            WeeklyTrend: Average score, trend and strongest/weakest areas;
            the defaults when fewer than two reports are given.
        """
        if len(reports) < 2:
            return WeeklyTrend()
        strongest, weakest = self.strongest_weakest_area(reports)
        average = pd.Series([report.score for report in reports], dtype="float64").mean()
        return WeeklyTrend(
            average_score=round(average),
            trend=self.weekly_trend(reports),
            strongest_area=strongest,
            weakest_area=weakest,
        )

    # Water
    def track_water_intake(self, entries: Sequence[WaterIntake], new_entry: WaterIntake) -> List[WaterIntake]:
        """Return a new list with the entry appended; the input is left untouched."""
        return [*entries, new_entry]

    def water_status(self, entries: Sequence[WaterIntake], goal_ml: int) -> WaterStatus:
        """Compare logged water with the daily goal.

        Args:
            entries: The day's intake entries.
            goal_ml: Daily goal in millilitres; 0 yields 0%.

        Returns:
            WaterStatus: Total, percentage and whether intake is below the low mark.
        """
        total = sum(entry.amount_ml for entry in entries)
        return WaterStatus(
            goal_ml=goal_ml,
            total_ml=round(total),
            percentage=round(total / goal_ml * 100) if goal_ml else 0,
            low=total < goal_ml * WATER_LOW_RATIO,
        )


# export singleton
progress_tracker = ProgressTracker()
__all__ = ["ProgressTracker", "progress_tracker"]
