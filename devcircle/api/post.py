from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
import logging

from devcircle.api.errors import INTERNAL_ERROR_MESSAGE, http_error
from devcircle.crud import comment as comment_crud
from devcircle.crud import post as post_crud
from devcircle.crud.errors import StoreError
from devcircle.db.base import get_db
from devcircle.models.post import PostType
from devcircle.schemas.auth import MessageResponse
from devcircle.schemas.comment import CommentCreate, CommentDelete, CommentResponse
from devcircle.schemas.post import (
    PostCreate,
    PostUpdate,
    PostResponse,
    LikeRequest,
    LikeResponse
)

# 로깅 설정
logger = logging.getLogger(__name__)

router = APIRouter()

POST_NOT_FOUND = "No post with that ID found"


def _require_post(db: Session, post_id: int):
    post = post_crud.get_post(db, post_id)
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=POST_NOT_FOUND)
    return post


@router.get("/", response_model=List[PostResponse])
def get_all_posts(db: Session = Depends(get_db)):
    """
    모든 게시글을 태그 이름과 함께 가져오는 API
    """
    try:
        return post_crud.get_posts(db)
    except Exception as e:
        logger.error(f"게시글 목록 조회 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.get("/type/{post_type}", response_model=List[PostResponse])
def get_posts_by_type(post_type: PostType, db: Session = Depends(get_db)):
    """
    게시글 종류(MEETUP / PODCAST / STANDARD)별 목록
    """
    try:
        return post_crud.get_posts(db, post_type=post_type)
    except Exception as e:
        logger.error(f"게시글 종류별 조회 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.get("/{post_id}", response_model=PostResponse)
def get_single_post(post_id: int, db: Session = Depends(get_db)):
    try:
        return _require_post(db, post_id)
    except HTTPException as e:
        raise e
    except Exception as e:
        logger.error(f"게시글 조회 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.post("/", response_model=PostResponse, status_code=200)
def create_post_endpoint(post_data: PostCreate, db: Session = Depends(get_db)):
    """
    게시글 생성 API

    - 태그 이름이 처음 쓰이면 태그를 만들고, 이미 있으면 기존 태그를 연결합니다.
    - 작성자나 그룹이 존재하지 않으면 404 오류를 반환합니다.
    """
    try:
        logger.info(f"게시글 생성 요청: 작성자 ID {post_data.author_id}, 태그 {post_data.tags}")
        fields = post_data.model_dump(exclude={"author_id", "tags"})
        post = post_crud.create_post(
            db,
            author_id=post_data.author_id,
            tag_names=post_data.tags,
            **fields
        )
        logger.info(f"게시글 생성 완료: ID {post.id}")
        return post
    except StoreError as e:
        logger.warning(f"게시글 생성 실패 ({e.kind.value}): {e.detail}")
        raise http_error(e, missing_reference="Author or group with this ID not found")
    except Exception as e:
        logger.error(f"게시글 생성 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.patch("/{post_id}", response_model=PostResponse)
def update_post_endpoint(post_id: int, changes: PostUpdate, db: Session = Depends(get_db)):
    """
    게시글 제목 / 내용 수정 (보낸 필드만 변경)
    """
    try:
        fields = changes.model_dump(exclude_unset=True)
        if fields.get("title") is None:
            fields.pop("title", None)
        return post_crud.update_post(db, post_id, fields)
    except StoreError as e:
        raise http_error(e, not_found="Post to update does not exist")
    except Exception as e:
        logger.error(f"게시글 수정 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.post("/{post_id}/like", response_model=MessageResponse, summary="게시글 좋아요 추가")
def like_post(post_id: int, request: LikeRequest, db: Session = Depends(get_db)):
    """
    특정 게시글에 좋아요를 추가합니다.

    - 이미 좋아요를 눌렀다면 409 오류를 반환합니다.
    - 게시글 또는 사용자가 존재하지 않으면 404 오류를 반환합니다.
    """
    try:
        post_crud.like_post(db, post_id, request.liker_id)
        return {"message": "You now like this post"}
    except StoreError as e:
        logger.warning(f"좋아요 실패 ({e.kind.value}): 게시글 {post_id}, 사용자 {request.liker_id}")
        raise http_error(
            e,
            conflict="You can't like a post twice",
            missing_reference="User with this ID not found",
            not_found="Post with this ID not found"
        )
    except Exception as e:
        logger.error(f"좋아요 추가 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.post("/{post_id}/unlike", response_model=MessageResponse, summary="게시글 좋아요 취소")
def unlike_post(post_id: int, request: LikeRequest, db: Session = Depends(get_db)):
    try:
        post_crud.unlike_post(db, post_id, request.liker_id)
        return {"message": "Unliked this post"}
    except StoreError as e:
        raise http_error(e, not_found="Record to delete does not exist")
    except Exception as e:
        logger.error(f"좋아요 취소 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.get("/{post_id}/likes", response_model=List[LikeResponse], summary="게시글 좋아요 목록")
def get_post_likes(post_id: int, db: Session = Depends(get_db)):
    try:
        _require_post(db, post_id)
        return post_crud.get_likes(db, post_id)
    except HTTPException as e:
        raise e
    except Exception as e:
        logger.error(f"좋아요 목록 조회 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.get("/{post_id}/comments", response_model=List[CommentResponse], summary="게시글 댓글 목록 조회")
def get_post_comments(post_id: int, db: Session = Depends(get_db)):
    """
    특정 게시글의 댓글 목록을 최신순으로 조회합니다.
    """
    try:
        _require_post(db, post_id)
        return comment_crud.get_comments_by_post(db, post_id)
    except HTTPException as e:
        raise e
    except Exception as e:
        logger.error(f"댓글 목록 조회 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.post("/{post_id}/comments", response_model=CommentResponse, status_code=201)
def create_comment(post_id: int, comment: CommentCreate, db: Session = Depends(get_db)):
    """
    게시글에 댓글 생성
    """
    try:
        _require_post(db, post_id)
        return comment_crud.create_comment(db, post_id, comment.content, comment.author_id)
    except HTTPException as e:
        raise e
    except StoreError as e:
        raise http_error(e, missing_reference="User with this ID not found")
    except Exception as e:
        logger.error(f"댓글 생성 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.delete("/{post_id}/comments/{comment_id}", response_model=MessageResponse, summary="댓글 삭제")
def delete_comment(post_id: int, comment_id: int, request: CommentDelete, db: Session = Depends(get_db)):
    """
    댓글을 삭제합니다.

    - 작성자만 자신의 댓글을 삭제할 수 있습니다.
    """
    try:
        db_comment = comment_crud.get_comment(db, post_id, comment_id)
        if not db_comment:
            raise HTTPException(status_code=404, detail="Comment not found")
        if db_comment.author_id != request.author_id:
            raise HTTPException(status_code=403, detail="You are not allowed to delete this comment")

        comment_crud.delete_comment(db, comment_id)
        return {"message": "Comment deleted"}
    except HTTPException as e:
        raise e
    except StoreError as e:
        raise http_error(e, not_found="Comment not found")
    except Exception as e:
        logger.error(f"댓글 삭제 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.delete("/{post_id}", response_model=MessageResponse, summary="게시글 삭제")
def delete_post(post_id: int, db: Session = Depends(get_db)):
    """
    특정 게시글을 삭제합니다. 좋아요와 댓글도 함께 삭제됩니다.
    """
    try:
        post_crud.delete_post(db, post_id)
        logger.info(f"게시글 삭제 완료: ID {post_id}")
        return {"message": "Post deleted"}
    except StoreError as e:
        raise http_error(e, not_found="Record to delete does not exist")
    except Exception as e:
        db.rollback()
        logger.error(f"게시글 삭제 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)
