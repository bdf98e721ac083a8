from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from devcircle.crud.errors import StoreError, StoreErrorKind, translate_integrity_errors
from devcircle.models.comment import Comment

def create_comment(db: Session, post_id: int, content: str, author_id: int) -> Comment:
    db_comment = Comment(post_id=post_id, content=content, author_id=author_id)
    with translate_integrity_errors(db):
        db.add(db_comment)
        db.commit()
    db.refresh(db_comment)
    return db_comment

def get_comments_by_post(db: Session, post_id: int) -> List[Comment]:
    """
    특정 게시글의 댓글 목록을 조회합니다.
    최신순(내림차순)으로 정렬합니다.
    """
    return (
        db.query(Comment)
        .filter(Comment.post_id == post_id)
        .order_by(desc(Comment.created_at), desc(Comment.id))
        .all()
    )

def get_comment(db: Session, post_id: int, comment_id: int) -> Optional[Comment]:
    return db.query(Comment).filter(Comment.id == comment_id, Comment.post_id == post_id).first()

def delete_comment(db: Session, comment_id: int) -> None:
    db_comment = db.query(Comment).filter(Comment.id == comment_id).first()
    if not db_comment:
        raise StoreError(StoreErrorKind.NOT_FOUND, f"comment {comment_id}")
    db.delete(db_comment)
    db.commit()
