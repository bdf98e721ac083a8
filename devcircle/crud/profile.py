from typing import Optional

from sqlalchemy.orm import Session

from devcircle.crud.errors import StoreError, StoreErrorKind
from devcircle.models.profile import Profile

def get_profile(db: Session, user_id: int) -> Optional[Profile]:
    return db.query(Profile).filter(Profile.user_id == user_id).first()

def update_profile(db: Session, user_id: int, changes: dict) -> Profile:
    db_profile = get_profile(db, user_id)
    if not db_profile:
        raise StoreError(StoreErrorKind.NOT_FOUND, f"profile of user {user_id}")
    for key, value in changes.items():
        setattr(db_profile, key, value)
    db.commit()
    db.refresh(db_profile)
    return db_profile
