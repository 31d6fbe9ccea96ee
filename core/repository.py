"""Repository classes for database operations.

`BaseRepository` holds the common CRUD helpers. The concrete repositories
convert between ORM rows and the pydantic schemas and enforce the plan
rules: one active plan per user, ownership checks, and deletion of
inactive plans only. Writes to one plan are serialized with `plan_lock`.
"""

import json
import threading
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from core.cache import TTLCache
from core.config import Config
from core.exceptions import NotFoundError, PlanOwnershipError, StateInvariantViolation, ValidationError
from core.logger import get_logger
from database import models
from database.models import Base
from schemas.nutrition_schema import WaterIntake
from schemas.plan_schema import DayPlan, DietPlan, Macros, PlanProgress
from schemas.profile_schema import MealTimings, UserProfile

logger = get_logger("core.repository")

T = TypeVar('T', bound=Base)

_plan_locks: Dict[str, threading.Lock] = {}
_plan_locks_guard = threading.Lock()


@contextmanager
def plan_lock(plan_id: str):
    """Hold the lock for one plan id for the duration of a read-modify-write."""
    with _plan_locks_guard:
        lock = _plan_locks.setdefault(plan_id, threading.Lock())
    with lock:
        yield


def discard_plan_lock(plan_id: str) -> None:
    """Forget the lock of a deleted plan."""
    with _plan_locks_guard:
        _plan_locks.pop(plan_id, None)


# shared by every ProfileRepository in the process
profile_cache = TTLCache(ttl_seconds=Config.PROFILE_CACHE_TTL_SECONDS)


class BaseRepository(Generic[T]):
    """Generic repository for common database operations.

    Attributes:
        model: SQLAlchemy model class to operate on.
        session: Database session for executing queries.
    """

    def __init__(self, model: Type[T], session: Session):
        self.model = model
        self.session = session

    def create(self, obj: T) -> T:
        """Add, commit and refresh a new object."""
        self.session.add(obj)
        self.session.commit()
        self.session.refresh(obj)
        return obj

    def get_by_id(self, id: Any) -> Optional[T]:
        """Retrieve an object by its primary key, or None."""
        return self.session.get(self.model, id)

    def update(self, obj: T) -> T:
        """Commit changes to an existing object and refresh it."""
        self.session.commit()
        self.session.refresh(obj)
        return obj

    def delete(self, obj: T) -> None:
        """Delete an object and commit."""
        self.session.delete(obj)
        self.session.commit()

    def count(self) -> int:
        """Return the number of rows of the model."""
        return self.session.query(self.model).count()


# Row <-> schema conversion
def profile_to_row(user_id: str, profile: UserProfile, row: Optional[models.Profile] = None) -> models.Profile:
    """Copy a profile onto a new or existing row; collections become JSON text."""
    row = row or models.Profile(user_id=user_id)
    row.name = profile.name
    row.email = profile.email
    row.age = profile.age
    row.gender = profile.gender.value
    row.weight = profile.weight
    row.height = profile.height
    row.activity_level = profile.activity_level.value
    row.primary_goal = profile.primary_goal.value
    row.target_weight = profile.target_weight
    row.diet_type = profile.diet_type.value
    row.allergies = json.dumps(sorted(profile.allergies))
    row.preferred_cuisines = json.dumps(profile.preferred_cuisines)
    row.meal_timings = profile.meal_timings.model_dump_json()
    row.plan_duration_days = profile.plan_duration_days
    row.medical_conditions = json.dumps(sorted(c.value for c in profile.medical_conditions))
    return row


def row_to_profile(row: models.Profile) -> UserProfile:
    """Rebuild a validated profile from its row."""
    return UserProfile(
        name=row.name,
        email=row.email,
        age=row.age,
        gender=row.gender,
        weight=row.weight,
        height=row.height,
        activity_level=row.activity_level,
        primary_goal=row.primary_goal,
        target_weight=row.target_weight,
        diet_type=row.diet_type,
        allergies=set(json.loads(row.allergies or "[]")),
        preferred_cuisines=json.loads(row.preferred_cuisines or "[]"),
        meal_timings=MealTimings.model_validate_json(row.meal_timings) if row.meal_timings else MealTimings(),
        plan_duration_days=row.plan_duration_days,
        medical_conditions=set(json.loads(row.medical_conditions or "[]")),
    )


def _dump_days(days: List[DayPlan]) -> str:
    return json.dumps([d.model_dump(mode="json", exclude={"total_calories", "completed"}) for d in days])


def plan_to_row(plan: DietPlan) -> models.DietPlan:
    """Build the row for a new plan."""
    row = models.DietPlan(id=plan.id)
    row.user_id = plan.user_id
    row.name = plan.name
    row.description = plan.description
    row.duration_days = plan.duration_days
    row.daily_calories = plan.daily_calories
    row.protein = plan.macros.protein
    row.carbs = plan.macros.carbs
    row.fat = plan.macros.fat
    row.days = _dump_days(plan.days)
    row.is_active = plan.is_active
    row.completed_days = plan.progress.completed_days
    row.adherence_rate = plan.progress.adherence_rate
    row.source = plan.source.value
    row.created_at = plan.created_at
    row.updated_at = plan.updated_at
    return row


def row_to_plan(row: models.DietPlan) -> DietPlan:
    """Rebuild a plan from its row; day totals are recomputed from the meals."""
    return DietPlan(
        id=row.id,
        user_id=row.user_id,
        name=row.name,
        description=row.description,
        duration_days=row.duration_days,
        daily_calories=row.daily_calories,
        macros=Macros(protein=row.protein, carbs=row.carbs, fat=row.fat),
        days=[DayPlan.model_validate(d) for d in json.loads(row.days)],
        is_active=row.is_active,
        progress=PlanProgress(
            completed_days=row.completed_days,
            total_days=row.duration_days,
            adherence_rate=row.adherence_rate,
        ),
        source=row.source,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class ProfileRepository(BaseRepository[models.Profile]):
    """Profiles keyed by user id, read through a TTL cache."""

    def __init__(self, session: Session, cache: Optional[TTLCache] = None):
        super().__init__(models.Profile, session)
        self.cache = cache if cache is not None else profile_cache

    def upsert(self, user_id: str, profile: UserProfile) -> UserProfile:
        """Create or replace the profile of a user.

        Args:
            user_id: Owner of the profile.
            profile: Validated profile to store.

        Returns:
            The stored profile.
        """
        row = self.get_by_id(user_id)
        if row is None:
            self.create(profile_to_row(user_id, profile))
        else:
            profile_to_row(user_id, profile, row)
            self.update(row)
        self.cache.set(user_id, profile.model_copy(deep=True))
        logger.info("Stored profile for user %s", user_id)
        return profile

    def get(self, user_id: str) -> Optional[UserProfile]:
        """Return the user's profile, cached or from the database.

        Args:
            user_id: Owner of the profile.

        Returns:
            A private copy of the profile, or None if the user has none.
        """
        cached = self.cache.get(user_id)
        if cached is not None:
            return cached.model_copy(deep=True)
        row = self.get_by_id(user_id)
        if row is None:
            return None
        profile = row_to_profile(row)
        self.cache.set(user_id, profile.model_copy(deep=True))
        return profile

    def require(self, user_id: str) -> UserProfile:
        """Like `get`, but a missing profile raises NotFoundError."""
        profile = self.get(user_id)
        if profile is None:
            raise NotFoundError("Profile", user_id)
        return profile

    def update_fields(self, user_id: str, changes: Dict[str, Any]) -> UserProfile:
        """Apply a partial update and re-validate the whole profile.

        Args:
            user_id: Owner of the profile.
            changes: Field values to overwrite.

        Returns:
            The updated, stored profile.

        Raises:
            NotFoundError: If the user has no profile.
            ValidationError: If the merged profile is invalid; nothing is stored.
        """
        current = self.require(user_id)
        try:
            updated = UserProfile.model_validate({**current.model_dump(), **changes})
        except PydanticValidationError as exc:
            error = exc.errors()[0]
            field = ".".join(str(part) for part in error["loc"]) or None
            raise ValidationError(f"Invalid profile update: {error['msg']}", field=field)
        return self.upsert(user_id, updated)

    def remove(self, user_id: str) -> None:
        """Delete the user's profile and drop it from the cache."""
        row = self.get_by_id(user_id)
        if row is None:
            raise NotFoundError("Profile", user_id)
        self.delete(row)
        self.cache.invalidate(user_id)
        logger.info("Deleted profile for user %s", user_id)


class DietPlanRepository(BaseRepository[models.DietPlan]):
    """Diet plans with the single-active-plan rule.

    Only `create_plan` and `activate` change which plan is active.
    """

    def __init__(self, session: Session):
        super().__init__(models.DietPlan, session)

    def _query_user(self, user_id: str):
        return self.session.query(models.DietPlan).filter(models.DietPlan.user_id == user_id)

    def _deactivate_all(self, user_id: str) -> None:
        self._query_user(user_id).filter(models.DietPlan.is_active.is_(True)).update(
            {models.DietPlan.is_active: False}, synchronize_session="fetch"
        )

    def create_plan(self, plan: DietPlan) -> DietPlan:
        """Persist a new plan as the user's only active plan."""
        self._deactivate_all(plan.user_id)
        plan.is_active = True
        self.create(plan_to_row(plan))
        logger.info("Stored plan %s for user %s", plan.id, plan.user_id)
        return plan

    def list_for_user(self, user_id: str) -> List[DietPlan]:
        """Return every plan of a user, newest first."""
        rows = self._query_user(user_id).order_by(models.DietPlan.created_at.desc()).all()
        return [row_to_plan(row) for row in rows]

    def get_active(self, user_id: str) -> Optional[DietPlan]:
        """Return the user's active plan, or None."""
        row = self._query_user(user_id).filter(models.DietPlan.is_active.is_(True)).first()
        return row_to_plan(row) if row else None

    def _owned_row(self, plan_id: str, user_id: str) -> models.DietPlan:
        row = self.get_by_id(plan_id)
        if row is None:
            raise NotFoundError("DietPlan", plan_id)
        if row.user_id != user_id:
            raise PlanOwnershipError(plan_id, user_id)
        return row

    def get_owned(self, plan_id: str, user_id: str) -> DietPlan:
        """Load a plan on behalf of its owner.

        Args:
            plan_id: Plan to load.
            user_id: Caller, who must own the plan.

        Returns:
            The plan.

        Raises:
            NotFoundError: If the plan does not exist.
            PlanOwnershipError: If another user owns it.
        """
        return row_to_plan(self._owned_row(plan_id, user_id))

    def activate(self, plan_id: str, user_id: str) -> DietPlan:
        """Make a plan the user's only active plan."""
        row = self._owned_row(plan_id, user_id)
        self._deactivate_all(user_id)
        row.is_active = True
        row.updated_at = datetime.utcnow()
        self.update(row)
        logger.info("Activated plan %s for user %s", plan_id, user_id)
        return row_to_plan(row)

    def save(self, plan: DietPlan) -> DietPlan:
        """Write the plan's days and progress back to its row.

        The stored active flag is left alone, so saving a plan read before
        another plan was activated cannot reactivate it.

        Args:
            plan: Plan whose meal state changed.

        Returns:
            The plan as stored.

        Raises:
            NotFoundError: If the plan was deleted meanwhile.
        """
        row = self.get_by_id(plan.id)
        if row is None:
            raise NotFoundError("DietPlan", plan.id)
        row.days = _dump_days(plan.days)
        row.completed_days = plan.progress.completed_days
        row.adherence_rate = plan.progress.adherence_rate
        row.updated_at = plan.updated_at
        self.update(row)
        return row_to_plan(row)

    def remove(self, plan_id: str, user_id: str) -> None:
        """Delete an inactive plan of the user.

        Raises:
            NotFoundError: If the plan does not exist.
            PlanOwnershipError: If another user owns it.
            StateInvariantViolation: If it is the active plan.
        """
        row = self._owned_row(plan_id, user_id)
        if row.is_active:
            raise StateInvariantViolation(
                "The active plan cannot be deleted; activate another plan first",
                details={"plan_id": plan_id},
            )
        self.delete(row)
        discard_plan_lock(plan_id)
        logger.info("Deleted plan %s for user %s", plan_id, user_id)


class WaterLogRepository(BaseRepository[models.WaterLog]):
    """Drinks logged per user and calendar day."""

    def __init__(self, session: Session):
        super().__init__(models.WaterLog, session)

    def add(self, user_id: str, intake: WaterIntake, on_date: date) -> WaterIntake:
        """Store one drink.

        Args:
            user_id: Who drank it.
            intake: Amount, optional time of day and beverage type.
            on_date: Calendar day the drink counts towards.

        Returns:
            The stored intake.
        """
        self.create(models.WaterLog(
            user_id=user_id,
            logged_on=on_date,
            amount_ml=intake.amount_ml,
            time=intake.time.strftime("%H:%M") if intake.time else None,
            beverage_type=intake.type.value,
        ))
        return intake

    def list_for_day(self, user_id: str, on_date: date) -> List[WaterIntake]:
        """Return the user's drinks for one day in logging order."""
        rows = (
            self.session.query(models.WaterLog)
            .filter(models.WaterLog.user_id == user_id, models.WaterLog.logged_on == on_date)
            .order_by(models.WaterLog.id)
            .all()
        )
        return [WaterIntake(amount_ml=r.amount_ml, time=r.time, type=r.beverage_type) for r in rows]
