"""Tests for profile and plan persistence against an in-memory database."""

import datetime as dt

import pytest

from core.cache import TTLCache
from core.exceptions import NotFoundError, PlanOwnershipError, StateInvariantViolation, ValidationError
from core.repository import DietPlanRepository, ProfileRepository, WaterLogRepository, _plan_locks, plan_lock
from database import models
from schemas import DietType, MealSlot, MedicalCondition, WaterIntake
from services.nutrition_calculator import nutrition_calculator
from services.progress_tracker import ProgressTracker

START = dt.date(2025, 1, 1)


def _plan(generator, profile, user_id="u1", created_at=None):
    targets = nutrition_calculator.calculate_targets(profile)
    plan = generator.generate_plan(profile, targets, user_id=user_id, start_date=START)
    if created_at is not None:
        plan.created_at = created_at
    return plan


def test_profile_round_trip(db_session, vegetarian_profile):
    profile = vegetarian_profile.model_copy(update={"medical_conditions": {MedicalCondition.CELIAC}})
    repo = ProfileRepository(db_session, cache=TTLCache())
    repo.upsert("u1", profile)

    repo.cache.invalidate()
    loaded = repo.get("u1")
    assert loaded == profile
    assert loaded.allergies == {"peanuts"}
    assert loaded.medical_conditions == {MedicalCondition.CELIAC}


def test_profile_reads_come_from_cache(db_session, male_profile):
    repo = ProfileRepository(db_session, cache=TTLCache())
    repo.upsert("u1", male_profile)
    db_session.query(models.Profile).delete()
    db_session.commit()

    assert repo.get("u1") == male_profile
    repo.cache.invalidate("u1")
    assert repo.get("u1") is None


def test_cached_profile_is_not_shared(db_session, male_profile):
    repo = ProfileRepository(db_session, cache=TTLCache())
    repo.upsert("u1", male_profile)
    first = repo.get("u1")
    first.allergies.add("shellfish")
    assert repo.get("u1").allergies == set()


def test_profile_update_and_remove(db_session, male_profile):
    repo = ProfileRepository(db_session, cache=TTLCache())
    repo.upsert("u1", male_profile)
    updated = repo.update_fields("u1", {"weight": 75, "diet_type": DietType.VEGAN})
    assert updated.weight == 75
    assert updated.age == male_profile.age
    assert repo.get("u1").diet_type == DietType.VEGAN

    repo.remove("u1")
    assert repo.get("u1") is None
    with pytest.raises(NotFoundError):
        repo.require("u1")
    with pytest.raises(NotFoundError):
        repo.remove("u1")


def test_plan_round_trip(db_session, generator, male_profile):
    repo = DietPlanRepository(db_session)
    plan = repo.create_plan(_plan(generator, male_profile))
    loaded = repo.get_owned(plan.id, "u1")
    assert loaded.id == plan.id
    assert loaded.days == plan.days
    assert loaded.macros == plan.macros
    assert loaded.days[0].total_calories == plan.daily_calories


def test_only_one_active_plan(db_session, generator, male_profile):
    repo = DietPlanRepository(db_session)
    first = repo.create_plan(_plan(generator, male_profile, created_at=dt.datetime(2025, 1, 1)))
    second = repo.create_plan(_plan(generator, male_profile, created_at=dt.datetime(2025, 1, 2)))

    assert repo.get_active("u1").id == second.id
    assert [p.id for p in repo.list_for_user("u1")] == [second.id, first.id]
    assert [p.is_active for p in repo.list_for_user("u1")] == [True, False]

    repo.activate(first.id, "u1")
    assert repo.get_active("u1").id == first.id
    assert sum(p.is_active for p in repo.list_for_user("u1")) == 1


def test_plans_of_other_users_are_untouched(db_session, generator, male_profile):
    repo = DietPlanRepository(db_session)
    other = repo.create_plan(_plan(generator, male_profile, user_id="u2"))
    repo.create_plan(_plan(generator, male_profile, user_id="u1"))
    assert repo.get_active("u2").id == other.id


def test_ownership_is_enforced(db_session, generator, male_profile):
    repo = DietPlanRepository(db_session)
    plan = repo.create_plan(_plan(generator, male_profile))
    with pytest.raises(PlanOwnershipError) as exc_info:
        repo.get_owned(plan.id, "intruder")
    assert exc_info.value.status_code == 403
    with pytest.raises(NotFoundError):
        repo.get_owned("missing", "u1")


def test_active_plan_cannot_be_deleted(db_session, generator, male_profile):
    repo = DietPlanRepository(db_session)
    first = repo.create_plan(_plan(generator, male_profile, created_at=dt.datetime(2025, 1, 1)))
    second = repo.create_plan(_plan(generator, male_profile, created_at=dt.datetime(2025, 1, 2)))

    with pytest.raises(StateInvariantViolation) as exc_info:
        repo.remove(second.id, "u1")
    assert exc_info.value.status_code == 409

    repo.remove(first.id, "u1")
    assert [p.id for p in repo.list_for_user("u1")] == [second.id]


def test_saved_progress_survives_reload(db_session, generator, male_profile, recorded_events):
    bus, _ = recorded_events
    tracker = ProgressTracker(event_bus=bus)
    repo = DietPlanRepository(db_session)
    plan = repo.create_plan(_plan(generator, male_profile))

    for slot in (MealSlot.BREAKFAST, MealSlot.LUNCH, MealSlot.DINNER):
        tracker.complete_meal(plan, 1, slot)
    tracker.complete_meal(plan, 1, MealSlot.SNACKS, snack_index=0)
    repo.save(plan)

    loaded = repo.get_owned(plan.id, "u1")
    assert loaded.days[0].completed is True
    assert loaded.progress.completed_days == 1
    assert loaded.progress.adherence_rate == 14


def test_saving_a_stale_plan_keeps_one_active(db_session, generator, male_profile):
    """A plan read before a newer plan was created must not reactivate on save."""
    repo = DietPlanRepository(db_session)
    first = repo.create_plan(_plan(generator, male_profile, created_at=dt.datetime(2025, 1, 1)))
    stale = repo.get_owned(first.id, "u1")
    second = repo.create_plan(_plan(generator, male_profile, created_at=dt.datetime(2025, 1, 2)))

    stale.days[0].breakfast.completed = True
    saved = repo.save(stale)

    assert saved.is_active is False
    assert saved.days[0].breakfast.completed is True
    assert [p.id for p in repo.list_for_user("u1") if p.is_active] == [second.id]


def test_profile_update_with_invalid_value_is_rejected(db_session, male_profile):
    repo = ProfileRepository(db_session, cache=TTLCache())
    repo.upsert("u1", male_profile)
    with pytest.raises(ValidationError) as exc_info:
        repo.update_fields("u1", {"age": None})
    assert exc_info.value.status_code == 400
    assert exc_info.value.details == {"field": "age"}
    assert repo.get("u1").age == male_profile.age


def test_deleting_a_plan_drops_its_lock(db_session, generator, male_profile):
    repo = DietPlanRepository(db_session)
    old = repo.create_plan(_plan(generator, male_profile, created_at=dt.datetime(2025, 1, 1)))
    repo.create_plan(_plan(generator, male_profile, created_at=dt.datetime(2025, 1, 2)))

    with plan_lock(old.id):
        repo.remove(old.id, "u1")
    assert old.id not in _plan_locks


def test_water_log_by_day(db_session):
    repo = WaterLogRepository(db_session)
    repo.add("u1", WaterIntake(amount_ml=500, time=dt.time(9, 30)), START)
    repo.add("u1", WaterIntake(amount_ml=250), START)
    repo.add("u1", WaterIntake(amount_ml=750), START + dt.timedelta(days=1))
    repo.add("u2", WaterIntake(amount_ml=1000), START)

    entries = repo.list_for_day("u1", START)
    assert [e.amount_ml for e in entries] == [500, 250]
    assert entries[0].time == dt.time(9, 30)
