from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from devcircle.crud.errors import StoreError, StoreErrorKind, translate_integrity_errors
from devcircle.models.follow import Follow
from devcircle.models.user import User

def get_user(db: Session, user_id: int, with_profile: bool = False) -> Optional[User]:
    query = db.query(User)
    if with_profile:
        query = query.options(joinedload(User.profile))
    return query.filter(User.id == user_id).first()

def delete_user(db: Session, user_id: int) -> None:
    """사용자 삭제 (프로필, 게시글, 댓글, 좋아요, 멤버십, 팔로우, 생성한 그룹까지 함께 삭제)"""
    user = get_user(db, user_id)
    if not user:
        raise StoreError(StoreErrorKind.NOT_FOUND, f"user {user_id}")
    db.delete(user)
    db.commit()

def follow_user(db: Session, follower_id: int, following_id: int) -> Follow:
    follow = Follow(follower_id=follower_id, following_id=following_id)
    with translate_integrity_errors(db):
        db.add(follow)
        db.commit()
    return follow

def unfollow_user(db: Session, follower_id: int, following_id: int) -> None:
    deleted = (
        db.query(Follow)
        .filter(Follow.follower_id == follower_id, Follow.following_id == following_id)
        .delete(synchronize_session=False)
    )
    if not deleted:
        db.rollback()
        raise StoreError(StoreErrorKind.NOT_FOUND, f"follow {follower_id}->{following_id}")
    db.commit()

def get_followers(db: Session, user_id: int) -> List[User]:
    return (
        db.query(User)
        .join(Follow, Follow.follower_id == User.id)
        .filter(Follow.following_id == user_id)
        .order_by(Follow.created_at)
        .all()
    )

def get_following(db: Session, user_id: int) -> List[User]:
    return (
        db.query(User)
        .join(Follow, Follow.following_id == User.id)
        .filter(Follow.follower_id == user_id)
        .order_by(Follow.created_at)
        .all()
    )
