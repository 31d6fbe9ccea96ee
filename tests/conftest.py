"""Shared fixtures: sample profiles, an isolated event bus and an in-memory database."""

import datetime as dt

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.events import EventBus
from core.repository import profile_cache
from database import init_db
from schemas import ActivityLevel, DietType, Gender, PrimaryGoal, UserProfile
from services.meal_plan_generator import MealPlanGenerator

START_DATE = dt.date(2025, 1, 1)


@pytest.fixture(autouse=True)
def clear_profile_cache():
    """Each test starts with an empty process-wide profile cache."""
    profile_cache.invalidate()
    yield
    profile_cache.invalidate()


@pytest.fixture
def male_profile():
    """30 y, 80 kg, 180 cm, moderately active male on maintenance."""
    return UserProfile(
        name="Sam",
        age=30,
        gender=Gender.MALE,
        weight=80,
        height=180,
        activity_level=ActivityLevel.MODERATE,
        primary_goal=PrimaryGoal.MAINTENANCE,
        plan_duration_days=7,
    )


@pytest.fixture
def vegetarian_profile():
    return UserProfile(
        age=28,
        gender=Gender.FEMALE,
        weight=62,
        height=168,
        activity_level=ActivityLevel.LIGHT,
        primary_goal=PrimaryGoal.GENERAL_HEALTH,
        diet_type=DietType.VEGETARIAN,
        allergies={"peanuts"},
        preferred_cuisines=["indian", "italian"],
        plan_duration_days=14,
    )


@pytest.fixture
def recorded_events():
    """An isolated EventBus plus the list of events it delivered."""
    bus = EventBus()
    seen = []
    bus.subscribe("plan_generated", seen.append)
    bus.subscribe("progress_milestone", seen.append)
    return bus, seen


@pytest.fixture
def generator(recorded_events):
    bus, _ = recorded_events
    return MealPlanGenerator(event_bus=bus)


@pytest.fixture
def db_session():
    """Session bound to a fresh in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    session = sessionmaker(bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()
