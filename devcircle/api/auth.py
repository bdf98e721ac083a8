from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
import logging

from devcircle.api.errors import INTERNAL_ERROR_MESSAGE, http_error
from devcircle.crud.errors import StoreError
from devcircle.db.base import get_db
from devcircle.schemas.auth import (
    RegisterRequest,
    SocialRegisterRequest,
    LoginRequest,
    EmailRequest,
    MessageResponse
)
from devcircle.schemas.user import UserResponse, UserWithProfile
from devcircle.services.auth import create_user, authenticate, get_user_by_email

# 로깅 설정
logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, db: Session = Depends(get_db)):
    """
    회원가입 API (이메일 + 비밀번호)
    """
    try:
        logger.info(f"회원가입 요청: {request.email}, {request.username}")
        user = create_user(
            db=db,
            email=request.email,
            username=request.username,
            password=request.password
        )
        logger.info(f"회원가입 성공: {user.id}")
        return {"message": "User created successfully"}
    except StoreError as e:
        logger.warning(f"회원가입 실패 ({e.kind.value}): {request.email}")
        raise http_error(e, conflict="Error user already exists")
    except Exception as e:
        logger.error(f"회원가입 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)

@router.post("/register/social", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register_social(request: SocialRegisterRequest, db: Session = Depends(get_db)):
    """
    GitHub / Google 계정 정보로 회원가입 (비밀번호 없음)
    """
    try:
        logger.info(f"소셜 회원가입 요청: {request.email}")
        user = create_user(db=db, email=request.email, username=request.name)
        logger.info(f"소셜 회원가입 성공: {user.id}")
        return {"message": "User created successfully"}
    except StoreError as e:
        logger.warning(f"소셜 회원가입 실패 ({e.kind.value}): {request.email}")
        raise http_error(e, conflict="Error: User already exists")
    except Exception as e:
        logger.error(f"소셜 회원가입 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)

@router.post("/login", response_model=UserResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    """
    로그인 API

    - 토큰은 발급하지 않고 사용자 정보를 그대로 반환합니다.
    """
    try:
        logger.info(f"로그인 요청: {request.email}")
        user, is_authenticated = authenticate(db, request.email, request.password)

        if not user:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No user found")
        if not is_authenticated:
            logger.warning(f"비밀번호 불일치: {request.email}")
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Incorrect email or password")

        logger.info(f"로그인 성공: {user.id}")
        return user
    except HTTPException as e:
        raise e
    except Exception as e:
        logger.error(f"로그인 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)

@router.post("/user", response_model=UserWithProfile)
def get_user_info(request: EmailRequest, db: Session = Depends(get_db)):
    """
    이메일로 사용자 + 프로필 정보 조회 (클라이언트 세션용)
    """
    try:
        user = get_user_by_email(db, request.email, with_profile=True)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return user
    except HTTPException as e:
        raise e
    except Exception as e:
        logger.error(f"사용자 조회 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)
