from typing import Optional

from fastapi import HTTPException, status

from devcircle.crud.errors import StoreError, StoreErrorKind

STATUS_BY_KIND = {
    StoreErrorKind.UNIQUE_VIOLATION: status.HTTP_409_CONFLICT,
    StoreErrorKind.FOREIGN_KEY_VIOLATION: status.HTTP_404_NOT_FOUND,
    StoreErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
}

INTERNAL_ERROR_MESSAGE = "Internal server error"


def http_error(
    error: StoreError,
    conflict: Optional[str] = None,
    missing_reference: Optional[str] = None,
    not_found: Optional[str] = None,
) -> HTTPException:
    """StoreError 종류에 맞는 HTTPException 생성 (메시지가 없는 종류는 500)"""
    messages = {
        StoreErrorKind.UNIQUE_VIOLATION: conflict,
        StoreErrorKind.FOREIGN_KEY_VIOLATION: missing_reference,
        StoreErrorKind.NOT_FOUND: not_found,
    }
    message = messages[error.kind]
    if message is None:
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR_MESSAGE)
    return HTTPException(status_code=STATUS_BY_KIND[error.kind], detail=message)
