from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from devcircle.api.errors import INTERNAL_ERROR_MESSAGE, http_error
from devcircle.crud import profile as profile_crud
from devcircle.crud.errors import StoreError
from devcircle.db.base import get_db
from devcircle.schemas.profile import ProfileResponse, ProfileUpdate

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/{user_id}", response_model=ProfileResponse)
def get_profile(user_id: int, db: Session = Depends(get_db)):
    try:
        profile = profile_crud.get_profile(db, user_id)
        if not profile:
            raise HTTPException(status_code=404, detail="Profile not found")
        return profile
    except HTTPException as e:
        raise e
    except Exception as e:
        logger.error(f"프로필 조회 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)

@router.patch("/{user_id}", response_model=ProfileResponse)
def update_profile(user_id: int, changes: ProfileUpdate, db: Session = Depends(get_db)):
    """
    프로필 수정 (온보딩 완료 여부 포함, 보낸 필드만 변경)
    """
    try:
        logger.info(f"프로필 수정 요청: 사용자 ID {user_id}")
        fields = changes.model_dump(exclude_unset=True)
        if fields.get("onboarding_completed") is None:
            fields.pop("onboarding_completed", None)
        return profile_crud.update_profile(db, user_id, fields)
    except StoreError as e:
        raise http_error(e, not_found="Profile not found")
    except Exception as e:
        logger.error(f"프로필 수정 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)
