"""Profile API router.

Create, read, update and delete the caller's intake profile, and read the
nutrition targets derived from it.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from api.deps import get_current_user_id
from core.logger import get_logger
from core.repository import ProfileRepository
from database.deps import get_db_read, get_db_write
from schemas import NutritionTargets, ProfileUpdateRequest, UserProfile
from services.nutrition_calculator import nutrition_calculator

logger = get_logger("api.profiles")
router = APIRouter(prefix="/api/profiles", tags=["profiles"])


@router.post("", response_model=UserProfile, status_code=201)
def create_profile(payload: UserProfile, user_id: str = Depends(get_current_user_id),
                   db: Session = Depends(get_db_write)):
    """Store the caller's profile, replacing any previous one."""
    logger.info("Saving profile for user %s", user_id)
    return ProfileRepository(db).upsert(user_id, payload)


@router.get("/me", response_model=UserProfile)
def get_profile(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_read)):
    """Return the caller's profile.

    Raises:
        NotFoundError: If the caller has no profile yet.
    """
    return ProfileRepository(db).require(user_id)


@router.patch("/me", response_model=UserProfile)
def update_profile(payload: ProfileUpdateRequest, user_id: str = Depends(get_current_user_id),
                   db: Session = Depends(get_db_write)):
    """Apply a partial update; the merged profile is validated as a whole."""
    changes = payload.model_dump(exclude_unset=True)
    logger.info("Updating profile for user %s: %s", user_id, sorted(changes))
    return ProfileRepository(db).update_fields(user_id, changes)


@router.delete("/me", status_code=204)
def delete_profile(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_write)):
    ProfileRepository(db).remove(user_id)
    return Response(status_code=204)


@router.get("/me/targets", response_model=NutritionTargets)
def get_targets(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_read)):
    """Return the daily calorie, macro and micronutrient targets for the caller."""
    profile = ProfileRepository(db).require(user_id)
    return nutrition_calculator.calculate_targets(profile)
