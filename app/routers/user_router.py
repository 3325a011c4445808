# app/routers/user_router.py
import logging
import uuid
from functools import lru_cache
from typing import Optional, Dict

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Request, Response, UploadFile
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlmodel import Session

from ..application.identity import UserIdentity
from ..application.ports.audit_logger import AuditLogger
from ..application.ports.oauth_provider import OAuthProvider
from ..application.ports.storage_repo import StorageRepository
from ..application.ports.user_repo import UserRepository, UserDto
from ..application.services.auth_service import AuthService
from ..application.services.image_service import ImageService
from ..application.services.profile_asset_service import AssetErrorKind, ProfileAssetResolver
from ..application.services.profile_service import ProfileService
from ..core.config import settings
from ..db.session import get_session
from ..exceptions import (
    DuplicatedEmailException,
    DuplicatedNickNameException,
    InvalidCredentialsException,
    InvalidProfileImageException,
    NoRegisteredArgumentsException,
    OAuthProviderError,
    UserNotFoundException,
    create_error_response,
)
from ..infrastructure.audit.std_logger import StdAuditLogger
from ..infrastructure.oauth.kakao_provider import KakaoOAuthProvider
from ..infrastructure.persistence.sqlalchemy.repositories.user_repository_sql import SqlUserRepository
from ..infrastructure.storage.local_storage import LocalStorageRepository
from ..schemas import (
    LoginRequest, LoginResponse, OAuthHandoffResponse, UserRegisterRequest,
    UserRegisterResponse, UserResponse, UserUpdateRequest,
)
from ..services.auth import create_jwt_token, decode_jwt_token, hash_password, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/user", tags=["User"])

PROFILE_IMAGE_PATH = f"{router.prefix}/load-profile"
NOT_AN_IMAGE_MESSAGE = "The stored file is not an image."
LOAD_FAILED_MESSAGE = "Could not load the profile image."

def get_client_info(request: Optional[Request]) -> Dict[str, Optional[str]]:
    """Extract client information for audit entries"""
    if request is None:
        return {}
    return {
        'ip_address': request.client.host if request.client else None,
        'user_agent': request.headers.get('user-agent'),
    }

# ------------------------
# Minimal DI for services
# ------------------------
def get_user_repo(session: Session = Depends(get_session)) -> UserRepository:
    return SqlUserRepository(session)

def get_storage_repo() -> StorageRepository:
    return LocalStorageRepository()

@lru_cache()
def get_oauth_provider() -> OAuthProvider:
    return KakaoOAuthProvider()

def get_audit_logger() -> AuditLogger:
    return StdAuditLogger()

def get_auth_service(user_repo: UserRepository = Depends(get_user_repo)) -> AuthService:
    return AuthService(
        user_repo=user_repo,
        hash_password=hash_password,
        verify_password=verify_password,
        issue_token=create_jwt_token,
        oauth_provider=get_oauth_provider(),
    )

def get_profile_service(user_repo: UserRepository = Depends(get_user_repo), storage_repo: StorageRepository = Depends(get_storage_repo)) -> ProfileService:
    return ProfileService(user_repo=user_repo, storage_repo=storage_repo, hash_password=hash_password)

def get_image_service(storage_repo: StorageRepository = Depends(get_storage_repo)) -> ImageService:
    return ImageService(storage_repo=storage_repo, subdir=settings.PROFILE_SUBDIR, max_file_size=settings.MAX_FILE_SIZE)

def get_profile_asset_resolver(user_repo: UserRepository = Depends(get_user_repo), storage_repo: StorageRepository = Depends(get_storage_repo)) -> ProfileAssetResolver:
    return ProfileAssetResolver(user_repo=user_repo, storage_repo=storage_repo)

def get_current_identity(request: Request) -> UserIdentity:
    """Build the caller identity from a bearer token (or access_token cookie)"""
    token = None
    auth_header = request.headers.get('Authorization')
    if auth_header and auth_header.startswith('Bearer '):
        token = auth_header.split(' ', 1)[1]
    else:
        token = request.cookies.get("access_token")

    if not token:
        raise HTTPException(status_code=401, detail="Invalid authorization header")

    payload = decode_jwt_token(token)
    if not payload:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    user_id = payload.get('sub')
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid token: missing user ID")

    return UserIdentity(user_id=user_id, email=payload.get('email', ''), role=payload.get('role', 'COMMON'))

def _login_response(user: UserDto, token: str) -> LoginResponse:
    return LoginResponse(
        email=user.email,
        nick_name=user.nick_name,
        token=token,
        role=user.role,
        profile_image_url=PROFILE_IMAGE_PATH if user.profile_image_path else None,
    )

# ------------------------
# Login
# ------------------------
@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
    audit: AuditLogger = Depends(get_audit_logger),
):
    request_id = str(uuid.uuid4())
    client_info = get_client_info(request)
    try:
        result = auth_service.authenticate(payload.email, payload.password)
    except InvalidCredentialsException as e:
        logger.warning(f"Login failed: {e.message}")
        audit.log('login', payload.email, request_id=request_id,
                  ip_address=client_info.get('ip_address'), success=False)
        raise HTTPException(status_code=400, detail=e.message)

    audit.log('login', payload.email, result.user.id, request_id, client_info.get('ip_address'), True)
    return _login_response(result.user, result.token)

# ------------------------
# Kakao authorization code handoff
# ------------------------
@router.get("/kakao", response_model=OAuthHandoffResponse)
def kakao_callback(code: str = Query(..., min_length=1), auth_service: AuthService = Depends(get_auth_service)):
    logger.info("/api/user/kakao GET - authorization code received")
    try:
        auth_service.handle_oauth_code(code)
    except OAuthProviderError as e:
        logger.error(f"Kakao handoff failed: {e.message}")
        raise HTTPException(status_code=502, detail="Kakao login failed")
    return OAuthHandoffResponse(provider="kakao", received=True)

# ------------------------
# Registration
# ------------------------
@router.post("", response_model=UserRegisterResponse)
def register(
    request: Request,
    user: str = Form(...),
    profileImage: Optional[UploadFile] = File(None),
    auth_service: AuthService = Depends(get_auth_service),
    image_service: ImageService = Depends(get_image_service),
    storage_repo: StorageRepository = Depends(get_storage_repo),
    audit: AuditLogger = Depends(get_audit_logger),
):
    request_id = str(uuid.uuid4())
    client_info = get_client_info(request)

    try:
        payload = UserRegisterRequest.model_validate_json(user)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or "user"
        logger.warning(f"Registration payload rejected: {e}")
        raise HTTPException(status_code=400, detail=f"{field}: {first.get('msg')}")

    logger.info(f"/api/user POST - email={payload.email}, nick_name={payload.nick_name}")

    uploaded_path = None
    try:
        if profileImage is not None and profileImage.filename:
            logger.info(f"attached file name: {profileImage.filename}")
            uploaded_path = image_service.upload_profile_image(profileImage)

        created = auth_service.register(payload.email, payload.password, payload.nick_name, uploaded_path)
    except (NoRegisteredArgumentsException, DuplicatedEmailException, DuplicatedNickNameException, InvalidProfileImageException) as e:
        logger.warning(f"Registration rejected: {e.message}")
        _discard_upload(storage_repo, uploaded_path)
        audit.log('register', payload.email or '', request_id=request_id,
                  ip_address=client_info.get('ip_address'), success=False,
                  details={'error': type(e).__name__})
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.error(f"Registration error: {e}", exc_info=True)
        _discard_upload(storage_repo, uploaded_path)
        raise HTTPException(status_code=500, detail="Internal server error")

    audit.log('register', created.email, created.id, request_id, client_info.get('ip_address'), True)
    return UserRegisterResponse(email=created.email, nick_name=created.nick_name, join_date=created.created_at)

def _discard_upload(storage_repo: StorageRepository, path: Optional[str]) -> None:
    if not path:
        return
    try:
        storage_repo.delete(path)
    except OSError as e:
        logger.warning(f"Failed to remove orphaned upload: {e}")

# ------------------------
# Profile image
# ------------------------
@router.get("/load-profile")
def load_profile_image(
    identity: UserIdentity = Depends(get_current_identity),
    resolver: ProfileAssetResolver = Depends(get_profile_asset_resolver),
):
    logger.info(f"/api/user/load-profile GET - user: {identity.user_id}")
    try:
        result = resolver.resolve(identity)
    except Exception as e:
        logger.error(f"Unexpected error resolving profile image for user {identity.user_id}: {e}", exc_info=True)
        return JSONResponse(status_code=500, content=create_error_response(LOAD_FAILED_MESSAGE, 500))

    if result.ok:
        return Response(content=result.data, media_type=result.media_type.value)
    if result.error is AssetErrorKind.NOT_FOUND:
        return Response(status_code=404)
    if result.error is AssetErrorKind.UNSUPPORTED_TYPE:
        return JSONResponse(status_code=500, content=create_error_response(NOT_AN_IMAGE_MESSAGE, 500))
    return JSONResponse(status_code=500, content=create_error_response(LOAD_FAILED_MESSAGE, 500))

# ------------------------
# Duplicate checks
# ------------------------
@router.get("/checknick")
def check_nick(nick: str = Query(""), auth_service: AuthService = Depends(get_auth_service)) -> bool:
    if nick.strip() == "":
        raise HTTPException(status_code=400, detail="Nickname is empty!")
    return auth_service.is_duplicate_nick(nick)

@router.get("/check")
def check_email(email: str = Query(""), auth_service: AuthService = Depends(get_auth_service)) -> bool:
    if email.strip() == "":
        raise HTTPException(status_code=400, detail="Email is empty!")
    return auth_service.is_duplicate_email(email)

# ------------------------
# Profile
# ------------------------
@router.get("/me", response_model=UserResponse)
def get_profile(identity: UserIdentity = Depends(get_current_identity), profile_service: ProfileService = Depends(get_profile_service)):
    try:
        user = profile_service.get_profile(identity)
    except UserNotFoundException as e:
        raise HTTPException(status_code=404, detail=e.message)
    return UserResponse(
        id=user.id,
        email=user.email,
        nick_name=user.nick_name,
        role=user.role,
        has_profile_image=bool(user.profile_image_path),
        join_date=user.created_at,
    )

@router.patch("", response_model=LoginResponse)
def update_info(
    payload: UserUpdateRequest,
    identity: UserIdentity = Depends(get_current_identity),
    profile_service: ProfileService = Depends(get_profile_service),
    auth_service: AuthService = Depends(get_auth_service),
):
    try:
        user = profile_service.update_info(identity, payload.nick_name, payload.password)
    except DuplicatedNickNameException as e:
        raise HTTPException(status_code=400, detail=e.message)
    except UserNotFoundException as e:
        raise HTTPException(status_code=404, detail=e.message)
    return _login_response(user, auth_service.token_for(user))

@router.delete("/{id}", status_code=204)
def delete_user(
    id: str,
    request: Request,
    identity: UserIdentity = Depends(get_current_identity),
    profile_service: ProfileService = Depends(get_profile_service),
    audit: AuditLogger = Depends(get_audit_logger),
):
    if id != identity.user_id:
        raise HTTPException(status_code=403, detail="Access denied")
    try:
        profile_service.delete_user(identity)
    except UserNotFoundException as e:
        raise HTTPException(status_code=404, detail=e.message)

    audit.log('account_deleted', identity.email, identity.user_id, str(uuid.uuid4()),
              get_client_info(request).get('ip_address'), True)
    return Response(status_code=204)
