"""Endpoint tests: the router functions are called directly with a test session."""

import datetime as dt

import pytest

from api.deps import get_current_user_id
from api.plans import (
    activate_plan,
    complete_meal,
    delete_plan,
    export_plan,
    generate_plan,
    get_active_plan,
    get_plan,
    list_plans,
    reopen_meal,
)
from api.profiles import create_profile, delete_profile, get_profile, get_targets, update_profile
from api.progress import get_day_report, get_trends, get_water_status, log_water
from core.exceptions import NotFoundError, PlanOwnershipError, StateInvariantViolation, ValidationError
from schemas import (
    DietType,
    GeneratePlanRequest,
    MealCompletionRequest,
    MealSlot,
    NutritionStatus,
    ProfileUpdateRequest,
    Trend,
    WaterIntake,
)

USER = "user-1"


@pytest.fixture
def stored_profile(db_session, male_profile):
    return create_profile(male_profile, user_id=USER, db=db_session)


@pytest.fixture
def active_plan(db_session, stored_profile, generator):
    return generate_plan(GeneratePlanRequest(), user_id=USER, db=db_session, generator=generator)


def _complete_day(db_session, plan_id, day):
    for slot in (MealSlot.BREAKFAST, MealSlot.LUNCH, MealSlot.DINNER):
        complete_meal(plan_id, day, MealCompletionRequest(slot=slot), user_id=USER, db=db_session)
    return complete_meal(
        plan_id, day, MealCompletionRequest(slot=MealSlot.SNACKS, snack_index=0), user_id=USER, db=db_session,
    )


def test_user_id_header_is_required():
    assert get_current_user_id(" user-1 ") == "user-1"
    with pytest.raises(ValidationError):
        get_current_user_id(None)
    with pytest.raises(ValidationError):
        get_current_user_id("   ")


def test_profile_lifecycle(db_session, stored_profile, male_profile):
    assert get_profile(user_id=USER, db=db_session) == male_profile

    updated = update_profile(
        ProfileUpdateRequest(weight=85, diet_type=DietType.PESCATARIAN), user_id=USER, db=db_session,
    )
    assert updated.weight == 85
    assert updated.height == male_profile.height
    assert updated.diet_type == DietType.PESCATARIAN

    response = delete_profile(user_id=USER, db=db_session)
    assert response.status_code == 204
    with pytest.raises(NotFoundError):
        get_profile(user_id=USER, db=db_session)


def test_profile_update_with_null_is_rejected(db_session, stored_profile, male_profile):
    """An explicit null for a required field is a 400, not a server error."""
    with pytest.raises(ValidationError) as exc_info:
        update_profile(ProfileUpdateRequest(age=None), user_id=USER, db=db_session)
    assert exc_info.value.status_code == 400
    assert exc_info.value.details == {"field": "age"}
    assert get_profile(user_id=USER, db=db_session).age == male_profile.age


def test_targets_for_stored_profile(db_session, stored_profile):
    targets = get_targets(user_id=USER, db=db_session)
    assert targets.daily_calories == 2759
    assert (targets.protein, targets.carbs, targets.fat) == (172, 311, 92)


def test_generate_plan_requires_profile(db_session, generator):
    with pytest.raises(NotFoundError):
        generate_plan(GeneratePlanRequest(), user_id=USER, db=db_session, generator=generator)


def test_generate_plan_rejects_bad_duration(db_session, stored_profile, generator):
    with pytest.raises(ValidationError):
        generate_plan(GeneratePlanRequest(duration_days=3), user_id=USER, db=db_session, generator=generator)
    assert list_plans(user_id=USER, db=db_session) == []


def test_generate_and_fetch_plan(db_session, active_plan):
    assert active_plan.user_id == USER
    assert active_plan.duration_days == 7
    assert get_active_plan(user_id=USER, db=db_session).id == active_plan.id
    assert get_plan(active_plan.id, user_id=USER, db=db_session).days == active_plan.days

    with pytest.raises(PlanOwnershipError):
        get_plan(active_plan.id, user_id="someone-else", db=db_session)


def test_no_active_plan(db_session):
    with pytest.raises(NotFoundError):
        get_active_plan(user_id=USER, db=db_session)


def test_regenerating_switches_active_plan(db_session, active_plan, generator):
    newer = generate_plan(
        GeneratePlanRequest(duration_days=14), user_id=USER, db=db_session, generator=generator,
    )
    assert get_active_plan(user_id=USER, db=db_session).id == newer.id

    with pytest.raises(StateInvariantViolation):
        delete_plan(newer.id, user_id=USER, db=db_session)

    activate_plan(active_plan.id, user_id=USER, db=db_session)
    assert delete_plan(newer.id, user_id=USER, db=db_session).status_code == 204
    assert [p.id for p in list_plans(user_id=USER, db=db_session)] == [active_plan.id]


def test_complete_and_reopen_meals(db_session, active_plan):
    plan = _complete_day(db_session, active_plan.id, 1)
    assert plan.days[0].completed is True
    assert plan.progress.completed_days == 1
    assert plan.progress.adherence_rate == 14

    stored = get_plan(active_plan.id, user_id=USER, db=db_session)
    assert stored.progress.completed_days == 1

    plan = reopen_meal(active_plan.id, 1, MealCompletionRequest(slot=MealSlot.LUNCH), user_id=USER, db=db_session)
    assert plan.days[0].completed is False
    assert plan.progress.completed_days == 0


def test_complete_meal_unknown_day(db_session, active_plan):
    with pytest.raises(NotFoundError):
        complete_meal(active_plan.id, 30, MealCompletionRequest(slot=MealSlot.LUNCH), user_id=USER, db=db_session)


def test_day_report(db_session, active_plan):
    report = get_day_report(active_plan.id, 1, user_id=USER, db=db_session)
    assert report.score == 0
    assert report.goals.status == NutritionStatus.DEFICIT

    _complete_day(db_session, active_plan.id, 1)
    report = get_day_report(active_plan.id, 1, user_id=USER, db=db_session)
    assert report.nutrition.calories == active_plan.daily_calories
    assert report.goals.percentage.calories == 100

    with pytest.raises(NotFoundError):
        get_day_report(active_plan.id, 9, user_id=USER, db=db_session)


def test_trends(db_session, active_plan):
    for day in (5, 6, 7):
        _complete_day(db_session, active_plan.id, day)
    summary = get_trends(active_plan.id, start_day=1, end_day=None, user_id=USER, db=db_session)
    assert summary.trend == Trend.IMPROVING
    assert 0 < summary.average_score < 100

    with pytest.raises(ValidationError):
        get_trends(active_plan.id, start_day=5, end_day=2, user_id=USER, db=db_session)


def test_water_logging(db_session, stored_profile):
    status = get_water_status(on_date=None, user_id=USER, db=db_session)
    assert (status.goal_ml, status.total_ml, status.low) == (3360, 0, True)

    log_water(WaterIntake(amount_ml=2000), user_id=USER, db=db_session)
    status = log_water(WaterIntake(amount_ml=1000), user_id=USER, db=db_session)
    assert status.total_ml == 3000
    assert status.low is False

    yesterday = dt.date.today() - dt.timedelta(days=1)
    assert get_water_status(on_date=yesterday, user_id=USER, db=db_session).total_ml == 0


def test_export_csv(db_session, active_plan):
    response = export_plan(active_plan.id, user_id=USER, db=db_session)
    assert response.media_type == "text/csv"
    lines = response.body.decode().strip().splitlines()
    assert lines[0].startswith("day,date,slot,meal_id")
    assert len(lines) == 1 + 7 * 4
