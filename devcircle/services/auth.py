from typing import Optional
import logging

from passlib.context import CryptContext
from sqlalchemy.orm import Session, joinedload

from devcircle.core.config import settings
from devcircle.crud.errors import translate_integrity_errors
from devcircle.models.user import User
from devcircle.models.profile import Profile

# 비밀번호 암호화 설정
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS
)

# 로깅 설정
logger = logging.getLogger(__name__)

def hash_password(password: str) -> str:
    """비밀번호를 해시화"""
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """비밀번호 검증 (저장된 해시가 없으면 항상 불일치)"""
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        logger.warning("저장된 비밀번호 해시 형식이 올바르지 않습니다.")
        return False

def create_user(db: Session, email: str, username: str, password: Optional[str] = None) -> User:
    """
    새로운 사용자와 빈 프로필을 한 트랜잭션으로 생성

    - 이메일은 소문자로 저장합니다.
    - password 가 None 이면 소셜 로그인 계정입니다.
    - 이메일 중복 시 StoreError(UNIQUE_VIOLATION) 이 발생합니다.
    """
    user = User(
        email=email.lower(),
        username=username,
        password=hash_password(password) if password is not None else None,
        profile=Profile(onboarding_completed=False)
    )
    with translate_integrity_errors(db):
        db.add(user)
        db.commit()
    db.refresh(user)
    return user

def get_user_by_email(db: Session, email: str, with_profile: bool = False) -> Optional[User]:
    query = db.query(User)
    if with_profile:
        query = query.options(joinedload(User.profile))
    return query.filter(User.email == email.lower()).first()

def authenticate(db: Session, email: str, password: str) -> tuple[Optional[User], bool]:
    """
    이메일로 사용자를 찾고 비밀번호를 확인

    반환값: (사용자 또는 None, 비밀번호 일치 여부)
    """
    user = get_user_by_email(db, email)
    if not user:
        return None, False
    return user, verify_password(password, user.password)
