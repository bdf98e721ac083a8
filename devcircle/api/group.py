from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List
import logging

from devcircle.api.errors import INTERNAL_ERROR_MESSAGE, http_error
from devcircle.core.config import settings
from devcircle.crud import group as group_crud
from devcircle.crud.errors import StoreError
from devcircle.db.base import get_db
from devcircle.models.group import Group
from devcircle.models.group_user import GroupUser
from devcircle.schemas.auth import MessageResponse
from devcircle.schemas.group import (
    GroupCreate,
    GroupUpdate,
    GroupResponse,
    GroupDetailResponse,
    GroupMemberResponse,
    AdminUserRequest,
    AdminUpdateResponse,
    JoinGroupRequest,
    LeaveGroupRequest,
    RemoveMemberRequest,
    DeleteGroupRequest
)

# 로깅 설정
logger = logging.getLogger(__name__)

router = APIRouter()

# 멤버 목록 페이지 번호 상한 (OFFSET 오버플로 방지)
MAX_MEMBER_PAGE = 100_000


def _require_creator(db: Session, group_id: int, requester_id: int, forbidden_message: str) -> Group:
    """그룹 존재 여부(404)와 생성자 권한(403)을 확인"""
    group = group_crud.get_group(db, group_id)
    if not group:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Group not found")
    if group.creator_id != requester_id:
        logger.warning(f"그룹 {group_id} 권한 없음: 요청자 {requester_id}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=forbidden_message)
    return group


@router.get("/", response_model=List[GroupResponse])
def get_all_groups(db: Session = Depends(get_db)):
    try:
        return group_crud.get_groups(db)
    except Exception as e:
        logger.error(f"그룹 목록 조회 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.post("/create", response_model=GroupResponse)
def create_group(request: GroupCreate, db: Session = Depends(get_db)):
    """
    그룹 생성 API

    - 이름과 소개글은 소문자로 저장됩니다.
    - 생성자는 관리자 멤버로 자동 추가됩니다.
    - 같은 생성자가 같은 이름의 그룹을 만들면 409 오류를 반환합니다.
    """
    try:
        logger.info(f"그룹 생성 요청: {request.name}, 생성자 {request.creator_id}")
        group = group_crud.create_group(
            db,
            name=request.name.lower(),
            bio=request.bio.lower(),
            creator_id=request.creator_id,
            members=[GroupUser(user_id=m.user_id, is_admin=m.is_admin) for m in request.members],
            profile_image=request.profile_image or "",
            cover_image=request.cover_image
        )
        logger.info(f"그룹 생성 완료: ID {group.id}")
        return group
    except StoreError as e:
        logger.warning(f"그룹 생성 실패 ({e.kind.value}): {e.detail}")
        raise http_error(
            e,
            conflict="Group already exists",
            missing_reference="User with this ID not found"
        )
    except Exception as e:
        logger.error(f"그룹 생성 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.get("/{group_id}", response_model=GroupDetailResponse)
def get_group(group_id: int, db: Session = Depends(get_db)):
    """
    그룹 정보 조회 (생성자와 전체 멤버 포함)
    """
    try:
        group = group_crud.get_group(db, group_id, with_members=True)
        if not group:
            raise HTTPException(status_code=404, detail="Group not found")
        return group
    except HTTPException as e:
        raise e
    except Exception as e:
        logger.error(f"그룹 조회 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.get("/{group_id}/admins", response_model=List[GroupMemberResponse])
def get_group_members(
    group_id: int,
    page: int = Query(1, ge=1, le=MAX_MEMBER_PAGE),
    db: Session = Depends(get_db)
):
    """
    그룹 멤버 목록 (페이지당 10명, 페이지는 1부터 MAX_MEMBER_PAGE 까지)

    - 결과가 비어 있으면 (멤버가 없거나 페이지 범위를 벗어나면) 404 오류를 반환합니다.
    """
    try:
        members = group_crud.get_group_members(
            db, group_id, page=page, page_size=settings.GROUP_MEMBERS_PAGE_SIZE
        )
        if not members:
            raise HTTPException(status_code=404, detail="No members yet")
        return members
    except HTTPException as e:
        raise e
    except Exception as e:
        logger.error(f"그룹 멤버 조회 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


def _set_admin(db: Session, group_id: int, request: AdminUserRequest, is_admin: bool, forbidden_message: str):
    try:
        _require_creator(db, group_id, request.creator_id, forbidden_message)
        membership = group_crud.set_admin(db, group_id, request.member_id, is_admin)
        logger.info(f"그룹 {group_id} 관리자 변경: 사용자 {request.member_id} → {is_admin}")
        return {"user": membership}
    except HTTPException as e:
        raise e
    except StoreError as e:
        raise http_error(e, not_found="User wasn't found")
    except Exception as e:
        logger.error(f"그룹 관리자 변경 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.patch("/{group_id}/add-admin", response_model=AdminUpdateResponse, summary="멤버를 관리자로 지정")
def add_admin(group_id: int, request: AdminUserRequest, db: Session = Depends(get_db)):
    return _set_admin(db, group_id, request, True, "You are not allowed to add admins")


@router.patch("/{group_id}/remove-admin", response_model=AdminUpdateResponse, summary="관리자 해제")
def remove_admin(group_id: int, request: AdminUserRequest, db: Session = Depends(get_db)):
    return _set_admin(db, group_id, request, False, "You are not allowed to remove admins")


@router.patch("/{group_id}", response_model=GroupResponse, summary="그룹 수정")
def edit_group(group_id: int, request: GroupUpdate, db: Session = Depends(get_db)):
    """
    그룹 이름 / 소개글 / 이미지 수정 (생성자만 가능, 보낸 필드만 변경)
    """
    try:
        group = _require_creator(db, group_id, request.user_id, "You are not allowed to edit the group")
        changes = request.model_dump(exclude_unset=True, exclude={"user_id"})
        for key in ("name", "bio"):
            if changes.get(key) is None:
                changes.pop(key, None)
            else:
                changes[key] = changes[key].lower()
        return group_crud.update_group(db, group, changes)
    except HTTPException as e:
        raise e
    except StoreError as e:
        raise http_error(e, conflict="Group already exists")
    except Exception as e:
        logger.error(f"그룹 수정 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.post("/{group_id}/join", response_model=MessageResponse, summary="그룹 가입")
def join_group(group_id: int, request: JoinGroupRequest, db: Session = Depends(get_db)):
    try:
        group_crud.add_member(db, group_id, request.user_id)
        logger.info(f"그룹 {group_id} 가입: 사용자 {request.user_id}")
        return {"message": "You joined group"}
    except StoreError as e:
        raise http_error(
            e,
            conflict="User already in group",
            missing_reference="User or group with this ID not found"
        )
    except Exception as e:
        logger.error(f"그룹 가입 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.delete("/{group_id}/leave", response_model=MessageResponse, summary="그룹 탈퇴")
def leave_group(group_id: int, request: LeaveGroupRequest, db: Session = Depends(get_db)):
    try:
        group_crud.remove_member(db, group_id, request.user_id)
        return {"message": "You left the group"}
    except StoreError as e:
        raise http_error(e, not_found="Not in the group")
    except Exception as e:
        logger.error(f"그룹 탈퇴 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.delete("/{group_id}/remove", response_model=MessageResponse, summary="멤버 내보내기")
def remove_member(group_id: int, request: RemoveMemberRequest, db: Session = Depends(get_db)):
    try:
        _require_creator(db, group_id, request.admin_id, "You are not allowed to remove members")
        group_crud.remove_member(db, group_id, request.member_id)
        logger.info(f"그룹 {group_id} 멤버 제거: 사용자 {request.member_id}")
        return {"message": "User removed"}
    except HTTPException as e:
        raise e
    except StoreError as e:
        raise http_error(e, not_found="User not in the group")
    except Exception as e:
        logger.error(f"멤버 제거 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.delete("/{group_id}", response_model=GroupResponse, summary="그룹 삭제")
def delete_group(group_id: int, request: DeleteGroupRequest, db: Session = Depends(get_db)):
    """
    그룹을 삭제합니다. 멤버십과 그룹 게시글도 함께 삭제됩니다.

    - 그룹이 존재하지 않으면 404, 생성자가 아니면 403 오류를 반환합니다.
    - 삭제된 그룹 정보를 반환합니다.
    """
    try:
        group = _require_creator(db, group_id, request.creator_id, "Not Allowed")
        deleted = GroupResponse.model_validate(group)
        group_crud.delete_group(db, group)
        logger.info(f"그룹 삭제 완료: ID {group_id}")
        return deleted
    except HTTPException as e:
        raise e
    except Exception as e:
        db.rollback()
        logger.error(f"그룹 삭제 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)
