from typing import Iterable, List, Optional

from sqlalchemy.orm import Session, joinedload

from devcircle.crud.errors import StoreError, StoreErrorKind, translate_integrity_errors
from devcircle.models.group import Group
from devcircle.models.group_user import GroupUser
from devcircle.models.user import User


def get_groups(db: Session) -> List[Group]:
    return db.query(Group).order_by(Group.id).all()


def get_group(db: Session, group_id: int, with_members: bool = False) -> Optional[Group]:
    query = db.query(Group)
    if with_members:
        query = query.options(joinedload(Group.creator), joinedload(Group.members))
    return query.filter(Group.id == group_id).first()


def create_group(
    db: Session,
    name: str,
    bio: str,
    creator_id: int,
    members: Iterable[GroupUser] = (),
    profile_image: Optional[str] = None,
    cover_image: Optional[str] = None,
) -> Group:
    """
    그룹 생성. 생성자는 관리자 멤버로 자동 추가됩니다.
    members 에 생성자가 다시 들어있으면 생성자 행 하나로 합칩니다.
    """
    memberships = {creator_id: GroupUser(user_id=creator_id, is_admin=True)}
    for member in members:
        memberships.setdefault(member.user_id, member)

    group = Group(
        name=name,
        bio=bio,
        profile_image=profile_image,
        cover_image=cover_image,
        creator_id=creator_id,
        members=list(memberships.values()),
    )
    with translate_integrity_errors(db):
        db.add(group)
        db.commit()
    db.refresh(group)
    return group


def get_group_members(db: Session, group_id: int, page: int, page_size: int) -> List[GroupUser]:
    """페이지 번호는 1부터 시작"""
    return (
        db.query(GroupUser)
        .options(joinedload(GroupUser.user).joinedload(User.profile))
        .filter(GroupUser.group_id == group_id)
        .order_by(GroupUser.joined_at, GroupUser.user_id)
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )


def get_membership(db: Session, group_id: int, user_id: int) -> Optional[GroupUser]:
    return (
        db.query(GroupUser)
        .filter(GroupUser.group_id == group_id, GroupUser.user_id == user_id)
        .first()
    )


def set_admin(db: Session, group_id: int, user_id: int, is_admin: bool) -> GroupUser:
    membership = get_membership(db, group_id, user_id)
    if not membership:
        raise StoreError(StoreErrorKind.NOT_FOUND, f"membership {user_id}/{group_id}")
    membership.is_admin = is_admin
    db.commit()
    db.refresh(membership)
    return membership


def update_group(db: Session, group: Group, changes: dict) -> Group:
    for key, value in changes.items():
        setattr(group, key, value)
    with translate_integrity_errors(db):
        db.commit()
    db.refresh(group)
    return group


def add_member(db: Session, group_id: int, user_id: int) -> GroupUser:
    membership = GroupUser(group_id=group_id, user_id=user_id)
    with translate_integrity_errors(db):
        db.add(membership)
        db.commit()
    return membership


def remove_member(db: Session, group_id: int, user_id: int) -> None:
    deleted = (
        db.query(GroupUser)
        .filter(GroupUser.group_id == group_id, GroupUser.user_id == user_id)
        .delete(synchronize_session=False)
    )
    if not deleted:
        db.rollback()
        raise StoreError(StoreErrorKind.NOT_FOUND, f"membership {user_id}/{group_id}")
    db.commit()


def delete_group(db: Session, group: Group) -> None:
    db.delete(group)
    db.commit()
