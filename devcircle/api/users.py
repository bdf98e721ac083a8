from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
import logging

from devcircle.api.errors import INTERNAL_ERROR_MESSAGE, http_error
from devcircle.crud import user as user_crud
from devcircle.crud.errors import StoreError
from devcircle.db.base import get_db
from devcircle.schemas.auth import MessageResponse
from devcircle.schemas.user import UserResponse, UserWithProfile, FollowRequest

# 로깅 설정
logger = logging.getLogger(__name__)

router = APIRouter()


def _require_user(db: Session, user_id: int):
    user = user_crud.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.get("/{user_id}", response_model=UserWithProfile, summary="특정 사용자 정보 조회")
def get_user(user_id: int, db: Session = Depends(get_db)):
    try:
        user = user_crud.get_user(db, user_id, with_profile=True)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        return user
    except HTTPException as e:
        raise e
    except Exception as e:
        logger.error(f"사용자 조회 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.delete("/{user_id}", response_model=MessageResponse, summary="사용자 삭제")
def delete_user(user_id: int, db: Session = Depends(get_db)):
    """
    사용자를 삭제합니다.

    - 프로필, 게시글, 댓글, 좋아요, 그룹 멤버십, 팔로우 관계와
      사용자가 만든 그룹까지 함께 삭제됩니다.
    """
    try:
        user_crud.delete_user(db, user_id)
        logger.info(f"사용자 삭제 완료: ID {user_id}")
        return {"message": "User deleted"}
    except StoreError as e:
        raise http_error(e, not_found="User not found")
    except Exception as e:
        db.rollback()
        logger.error(f"사용자 삭제 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.post("/{user_id}/follow", response_model=MessageResponse, summary="팔로우")
def follow_user(user_id: int, request: FollowRequest, db: Session = Depends(get_db)):
    try:
        if request.follower_id == user_id:
            raise HTTPException(status_code=400, detail="You can't follow yourself")
        user_crud.follow_user(db, request.follower_id, user_id)
        logger.info(f"팔로우: {request.follower_id} → {user_id}")
        return {"message": "You now follow this user"}
    except HTTPException as e:
        raise e
    except StoreError as e:
        raise http_error(
            e,
            conflict="You already follow this user",
            missing_reference="User with this ID not found"
        )
    except Exception as e:
        logger.error(f"팔로우 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.post("/{user_id}/unfollow", response_model=MessageResponse, summary="언팔로우")
def unfollow_user(user_id: int, request: FollowRequest, db: Session = Depends(get_db)):
    try:
        user_crud.unfollow_user(db, request.follower_id, user_id)
        return {"message": "Unfollowed this user"}
    except StoreError as e:
        raise http_error(e, not_found="You don't follow this user")
    except Exception as e:
        logger.error(f"언팔로우 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.get("/{user_id}/followers", response_model=List[UserResponse], summary="팔로워 목록")
def get_followers(user_id: int, db: Session = Depends(get_db)):
    try:
        _require_user(db, user_id)
        return user_crud.get_followers(db, user_id)
    except HTTPException as e:
        raise e
    except Exception as e:
        logger.error(f"팔로워 조회 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.get("/{user_id}/following", response_model=List[UserResponse], summary="팔로잉 목록")
def get_following(user_id: int, db: Session = Depends(get_db)):
    try:
        _require_user(db, user_id)
        return user_crud.get_following(db, user_id)
    except HTTPException as e:
        raise e
    except Exception as e:
        logger.error(f"팔로잉 조회 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)
