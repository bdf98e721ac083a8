from typing import Iterable, List, Optional

from sqlalchemy.dialects.mysql import insert as mysql_insert
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session, selectinload

from devcircle.crud.errors import StoreError, StoreErrorKind, translate_integrity_errors
from devcircle.models.like import Like
from devcircle.models.post import Post, PostType
from devcircle.models.tag import Tag


def _insert_tag_if_absent(dialect_name: str, name: str):
    """이미 같은 이름의 태그가 있으면 아무것도 하지 않는 INSERT 문"""
    if dialect_name == "mysql":
        stmt = mysql_insert(Tag).values(name=name)
        return stmt.on_duplicate_key_update(name=stmt.inserted.name)
    if dialect_name == "postgresql":
        return pg_insert(Tag).values(name=name).on_conflict_do_nothing(index_elements=["name"])
    return sqlite_insert(Tag).values(name=name).on_conflict_do_nothing(index_elements=["name"])


def _resolve_tag(db: Session, dialect_name: str, name: str) -> Tag:
    db.execute(_insert_tag_if_absent(dialect_name, name))
    return db.query(Tag).filter(Tag.name == name).one()


def get_or_create_tags(db: Session, names: Iterable[str]) -> List[Tag]:
    """
    태그 이름마다 insert-or-get 으로 태그를 확보합니다.
    동시에 같은 새 태그를 만들어도 unique 제약 충돌이 나지 않습니다.

    - 결과는 태그 행 기준으로 중복을 제거합니다.
      (MySQL 기본 collation 처럼 대소문자를 구분하지 않으면 "Rust" 와 "rust" 가 같은 행)
    - 게시글에 붙는 태그 순서는 Post.tags 의 이름순을 따릅니다.
    """
    dialect_name = db.get_bind().dialect.name
    tags = {}
    for name in dict.fromkeys(names):
        tag = _resolve_tag(db, dialect_name, name)
        tags.setdefault(tag.id, tag)
    return list(tags.values())


def get_posts(db: Session, post_type: Optional[PostType] = None) -> List[Post]:
    query = db.query(Post).options(selectinload(Post.tags))
    if post_type is not None:
        query = query.filter(Post.type == post_type)
    return query.order_by(Post.created_at.desc(), Post.id.desc()).all()


def get_post(db: Session, post_id: int) -> Optional[Post]:
    return db.query(Post).options(selectinload(Post.tags)).filter(Post.id == post_id).first()


def create_post(db: Session, author_id: int, tag_names: Iterable[str], **fields) -> Post:
    """태그 확보와 게시글 생성을 하나의 트랜잭션으로 처리"""
    with translate_integrity_errors(db):
        tags = get_or_create_tags(db, tag_names)
        post = Post(author_id=author_id, tags=tags, **fields)
        db.add(post)
        db.commit()
    db.refresh(post)
    return post


def update_post(db: Session, post_id: int, changes: dict) -> Post:
    post = db.query(Post).filter(Post.id == post_id).first()
    if not post:
        raise StoreError(StoreErrorKind.NOT_FOUND, f"post {post_id}")
    for key, value in changes.items():
        setattr(post, key, value)
    db.commit()
    db.refresh(post)
    return post


def delete_post(db: Session, post_id: int) -> None:
    post = db.query(Post).filter(Post.id == post_id).first()
    if not post:
        raise StoreError(StoreErrorKind.NOT_FOUND, f"post {post_id}")
    db.delete(post)
    db.commit()


def get_likes(db: Session, post_id: int) -> List[Like]:
    return db.query(Like).filter(Like.post_id == post_id).order_by(Like.created_at).all()


def like_post(db: Session, post_id: int, user_id: int) -> Like:
    """
    좋아요 추가

    - 게시글이 없으면 StoreError(NOT_FOUND)
    - 이미 좋아요한 경우 StoreError(UNIQUE_VIOLATION)
    - 사용자가 없으면 StoreError(FOREIGN_KEY_VIOLATION)
    """
    if db.query(Post.id).filter(Post.id == post_id).first() is None:
        raise StoreError(StoreErrorKind.NOT_FOUND, f"post {post_id}")

    like = Like(user_id=user_id, post_id=post_id)
    with translate_integrity_errors(db):
        db.add(like)
        db.commit()
    return like


def unlike_post(db: Session, post_id: int, user_id: int) -> None:
    deleted = (
        db.query(Like)
        .filter(Like.user_id == user_id, Like.post_id == post_id)
        .delete(synchronize_session=False)
    )
    if not deleted:
        db.rollback()
        raise StoreError(StoreErrorKind.NOT_FOUND, f"like {user_id}/{post_id}")
    db.commit()
