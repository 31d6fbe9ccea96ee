"""Tests for meal completion, plan progress, weekly trends and water tracking."""

import datetime as dt

import pytest

from core.exceptions import NotFoundError, ValidationError
from schemas import MealSlot, NutritionData, NutritionStatus, Trend
from schemas.nutrition_schema import NutritionPercentage, NutritionProgress, NutritionReport, WaterIntake
from services.nutrition_calculator import nutrition_calculator
from services.progress_tracker import ProgressTracker

START = dt.date(2025, 1, 1)
MAIN_SLOTS = (MealSlot.BREAKFAST, MealSlot.LUNCH, MealSlot.DINNER)


@pytest.fixture
def tracker(recorded_events):
    bus, _ = recorded_events
    return ProgressTracker(event_bus=bus)


@pytest.fixture
def plan(generator, male_profile, recorded_events):
    targets = nutrition_calculator.calculate_targets(male_profile)
    plan = generator.generate_plan(male_profile, targets, user_id="u1", start_date=START)
    _, events = recorded_events
    events.clear()
    return plan


def _complete_day(tracker, plan, day):
    for slot in MAIN_SLOTS:
        tracker.complete_meal(plan, day, slot)
    tracker.complete_meal(plan, day, MealSlot.SNACKS, snack_index=0)


def _report(score, protein=100, carbs=100, fat=100, fiber=100):
    percentage = NutritionPercentage(calories=100, protein=protein, carbs=carbs, fat=fat, fiber=fiber)
    return NutritionReport(
        date=START,
        nutrition=NutritionData(),
        goals=NutritionProgress(
            current=NutritionData(),
            target=NutritionData(),
            percentage=percentage,
            status=NutritionStatus.OPTIMAL,
        ),
        score=score,
    )


def test_day_completes_only_when_every_meal_is_completed(tracker, plan, recorded_events):
    _, events = recorded_events
    for slot in MAIN_SLOTS:
        tracker.complete_meal(plan, 1, slot)
    assert plan.days[0].completed is False
    assert plan.progress.completed_days == 0
    assert events == []

    tracker.complete_meal(plan, 1, MealSlot.SNACKS, snack_index=0)
    assert plan.days[0].completed is True
    assert plan.progress.completed_days == 1
    assert plan.progress.adherence_rate == 14
    assert [e.name for e in events] == ["progress_milestone"]
    assert events[0].payload == {
        "plan_id": plan.id,
        "plan_name": plan.name,
        "completed_days": 1,
        "total_days": 7,
        "adherence_rate": 14,
    }


def test_recompleting_a_meal_does_not_republish(tracker, plan, recorded_events):
    _, events = recorded_events
    _complete_day(tracker, plan, 2)
    tracker.complete_meal(plan, 2, MealSlot.LUNCH)
    assert len(events) == 1
    assert plan.progress.completed_days == 1


def test_adherence_after_three_of_seven_days(tracker, plan):
    for day in (1, 2, 3):
        _complete_day(tracker, plan, day)
    assert plan.progress.completed_days == 3
    assert plan.progress.adherence_rate == 43


def test_reopen_moves_progress_down(tracker, plan, recorded_events):
    _, events = recorded_events
    _complete_day(tracker, plan, 1)
    events.clear()

    tracker.reopen_meal(plan, 1, MealSlot.DINNER)
    assert plan.days[0].dinner.completed is False
    assert plan.days[0].completed is False
    assert plan.progress.completed_days == 0
    assert plan.progress.adherence_rate == 0
    assert events == []


def test_completion_touches_updated_at(tracker, plan):
    before = plan.updated_at
    tracker.complete_meal(plan, 1, MealSlot.BREAKFAST)
    assert plan.updated_at >= before


def test_recompute_progress_from_days(tracker, plan):
    for meal in plan.days[4].meals():
        meal.completed = True
    progress = tracker.recompute_progress(plan)
    assert (progress.completed_days, progress.total_days, progress.adherence_rate) == (1, 7, 14)


def test_unknown_day_or_snack(tracker, plan):
    with pytest.raises(NotFoundError):
        tracker.complete_meal(plan, 8, MealSlot.BREAKFAST)
    with pytest.raises(NotFoundError):
        tracker.complete_meal(plan, 1, MealSlot.SNACKS, snack_index=3)
    with pytest.raises(ValidationError) as exc_info:
        tracker.complete_meal(plan, 1, MealSlot.SNACKS)
    assert exc_info.value.details == {"field": "snack_index"}
    assert plan.progress.completed_days == 0


@pytest.mark.parametrize("scores, expected", [
    ([50, 50, 70, 70], Trend.IMPROVING),
    ([80, 70], Trend.DECLINING),
    ([70, 74], Trend.STABLE),
    ([70, 90, 60], Trend.STABLE),
    ([90], Trend.STABLE),
    ([], Trend.STABLE),
])
def test_weekly_trend(tracker, scores, expected):
    assert tracker.weekly_trend([_report(s) for s in scores]) == expected


def test_strongest_and_weakest_area(tracker):
    reports = [_report(80, protein=120, fiber=40), _report(80, protein=100, fiber=60)]
    assert tracker.strongest_weakest_area(reports) == ("Protein", "Fiber")
    reports = [_report(80, protein=70, carbs=90, fat=130, fiber=95)]
    assert tracker.strongest_weakest_area(reports) == ("Fat", "Protein")


def test_tied_areas_keep_listing_order(tracker):
    assert tracker.strongest_weakest_area([_report(80), _report(90)]) == ("Protein", "Fiber")


def test_no_reports_have_no_areas(tracker):
    assert tracker.strongest_weakest_area([]) == ("N/A", "N/A")


def test_weekly_summary(tracker):
    summary = tracker.weekly_summary([_report(60), _report(70), _report(85), _report(90)])
    assert summary.average_score == 76
    assert summary.trend == Trend.IMPROVING
    assert summary.strongest_area == "Protein"


def test_weekly_summary_needs_two_reports(tracker):
    summary = tracker.weekly_summary([_report(95)])
    assert summary.average_score == 0
    assert summary.trend == Trend.STABLE
    assert summary.strongest_area == summary.weakest_area == "N/A"


def test_track_water_intake_returns_new_list(tracker):
    entries = [WaterIntake(amount_ml=500)]
    updated = tracker.track_water_intake(entries, WaterIntake(amount_ml=250))
    assert len(entries) == 1
    assert [e.amount_ml for e in updated] == [500, 250]


def test_water_status(tracker):
    entries = [WaterIntake(amount_ml=1000), WaterIntake(amount_ml=1500)]
    status = tracker.water_status(entries, 3000)
    assert (status.total_ml, status.percentage, status.low) == (2500, 83, False)
    low = tracker.water_status(entries[:1], 3000)
    assert low.low is True
    assert tracker.water_status([], 0).percentage == 0
