import enum
import logging
from contextlib import contextmanager
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

# MySQL 에러 번호
MYSQL_DUPLICATE_ENTRY = {1062}
MYSQL_FOREIGN_KEY = {1216, 1217, 1451, 1452}

# PostgreSQL SQLSTATE
PG_UNIQUE_VIOLATION = "23505"
PG_FOREIGN_KEY_VIOLATION = "23503"


class StoreErrorKind(str, enum.Enum):
    UNIQUE_VIOLATION = "unique_violation"
    FOREIGN_KEY_VIOLATION = "foreign_key_violation"
    NOT_FOUND = "not_found"


class StoreError(Exception):
    """저장소 계층에서 발생하는 오류. 핸들러는 kind 만 보고 HTTP 상태 코드를 결정한다."""

    def __init__(self, kind: StoreErrorKind, detail: str = ""):
        super().__init__(detail or kind.value)
        self.kind = kind
        self.detail = detail


def classify_integrity_error(error: IntegrityError) -> Optional[StoreErrorKind]:
    """
    드라이버 오류에서 제약 조건 종류를 판별합니다.

    - MySQL(PyMySQL): args[0] 의 에러 번호
    - PostgreSQL: pgcode / sqlstate
    - SQLite: 메시지 문자열
    판별할 수 없으면 None 을 반환합니다.
    """
    orig = getattr(error, "orig", None)

    args = getattr(orig, "args", ())
    if args and isinstance(args[0], int):
        if args[0] in MYSQL_DUPLICATE_ENTRY:
            return StoreErrorKind.UNIQUE_VIOLATION
        if args[0] in MYSQL_FOREIGN_KEY:
            return StoreErrorKind.FOREIGN_KEY_VIOLATION

    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate == PG_UNIQUE_VIOLATION:
        return StoreErrorKind.UNIQUE_VIOLATION
    if sqlstate == PG_FOREIGN_KEY_VIOLATION:
        return StoreErrorKind.FOREIGN_KEY_VIOLATION

    message = str(orig if orig is not None else error).upper()
    if "UNIQUE CONSTRAINT" in message or "DUPLICATE" in message:
        return StoreErrorKind.UNIQUE_VIOLATION
    if "FOREIGN KEY" in message:
        return StoreErrorKind.FOREIGN_KEY_VIOLATION
    return None


@contextmanager
def translate_integrity_errors(db: Session):
    """IntegrityError 를 롤백 후 StoreError 로 바꿔서 올려보냄 (분류 불가 시 원래 예외 그대로)"""
    try:
        yield
    except IntegrityError as e:
        db.rollback()
        kind = classify_integrity_error(e)
        if kind is None:
            logger.error(f"분류할 수 없는 무결성 오류: {str(e.orig)}")
            raise
        raise StoreError(kind, str(e.orig)) from e
