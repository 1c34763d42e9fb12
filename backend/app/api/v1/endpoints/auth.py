from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status, Request
from datetime import datetime
import uuid

from app.core.config import settings
from app.core.exceptions import EmailDeliveryError
from app.core.security import (
    verify_password,
    get_password_hash,
    generate_temporary_password,
    create_access_token,
    create_refresh_token,
    decode_token
)
from app.core.logging_config import logger, set_user_id
from app.core.rate_limiter import limiter
from app.api.dependencies import get_user_repository
from app.models.user import User, UserRole
from app.repositories.user_repository import UserRepository
from app.schemas.auth import (
    UserRegister,
    UserLogin,
    RefreshRequest,
    EmailCheckRequest,
    EmailCheckResponse,
    PasswordChangeRequest,
    ForgotPasswordRequest,
    Token,
    LoginResponse,
    UserMessageResponse,
    MessageResponse,
    UserResponse,
)
from app.modules.auth.dependencies import get_current_user
from app.services.email_service import email_service


router = APIRouter()


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def _issue_tokens(user: User) -> dict:
    token_data = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role.value
    }
    return {
        "access_token": create_access_token(token_data),
        "refresh_token": create_refresh_token(token_data),
        "token_type": "bearer",
    }


@router.post("/register", response_model=UserMessageResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("3/minute")
async def register(
    request: Request,
    user_data: UserRegister,
    background_tasks: BackgroundTasks,
    users: UserRepository = Depends(get_user_repository)
):
    """Register a new alumnus (rate limited: 3/min)"""
    client_ip = _client_ip(request)

    max_batch = datetime.utcnow().year + settings.BATCH_MAX_YEARS_AHEAD
    if not settings.BATCH_MIN_YEAR <= user_data.batch <= max_batch:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Batch must be a valid year between {settings.BATCH_MIN_YEAR} and {max_batch}"
        )

    existing_user = await users.find_existing_alumnus(
        user_data.email, user_data.roll_no, user_data.batch, user_data.branch
    )
    if existing_user:
        logger.log_auth_event(
            event="register",
            success=False,
            user_email=user_data.email,
            reason="Already registered",
            client_ip=client_ip
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User with the provided email or alumni details is already registered"
        )

    alumni_match = await users.find_alumni_record(
        user_data.name, user_data.roll_no, user_data.batch, user_data.branch
    )

    user = User(
        name=user_data.name,
        email=user_data.email,
        phone=user_data.phone,
        roll_no=user_data.roll_no,
        batch=user_data.batch,
        branch=user_data.branch,
        hashed_password=get_password_hash(user_data.password),
        role=UserRole.USER,
        is_verified=alumni_match is not None,
        achievements=[],
    )
    user = await users.save(user)

    logger.log_auth_event(
        event="register",
        success=True,
        user_email=user.email,
        client_ip=client_ip,
        auto_verified=user.is_verified
    )

    # Delivery failures are logged by the email service and never fail registration
    background_tasks.add_task(
        email_service.send_registration_confirmation,
        user.email,
        user.name,
        user.is_verified,
    )

    message = (
        "Registration successful, user auto-approved."
        if user.is_verified
        else "Registration successful, pending admin approval."
    )
    return {"message": message, "user": user}


@router.post("/login", response_model=LoginResponse)
@limiter.limit("5/minute")
async def login(
    request: Request,
    credentials: UserLogin,
    users: UserRepository = Depends(get_user_repository)
):
    """Login user (rate limited: 5/min)"""
    client_ip = _client_ip(request)

    user = await users.find_by_email(credentials.email)

    if not user or not verify_password(credentials.password, user.hashed_password):
        logger.log_auth_event(
            event="login",
            success=False,
            user_email=credentials.email,
            reason="Invalid credentials",
            client_ip=client_ip
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password"
        )

    if not user.is_verified:
        logger.log_auth_event(
            event="login",
            success=False,
            user_email=credentials.email,
            reason="Account pending verification",
            client_ip=client_ip
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is pending admin approval"
        )

    user.last_login = datetime.utcnow()
    user = await users.save(user)

    set_user_id(str(user.id))

    logger.log_auth_event(
        event="login",
        success=True,
        user_email=user.email,
        client_ip=client_ip,
        user_role=user.role.value
    )

    return {**_issue_tokens(user), "user": user}


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    """Get current user info"""
    return current_user


@router.post("/refresh", response_model=Token)
async def refresh_token(
    token_request: RefreshRequest,
    request: Request,
    users: UserRepository = Depends(get_user_repository)
):
    """Exchange a refresh token for a new token pair"""
    client_ip = _client_ip(request)

    payload = decode_token(token_request.refresh_token)

    if payload.get("type") != "refresh":
        logger.log_auth_event(
            event="token_refresh",
            success=False,
            reason="Invalid token type",
            client_ip=client_ip
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type - expected refresh token"
        )

    user_id = payload.get("sub")
    try:
        uuid.UUID(str(user_id))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user ID format"
        )

    user = await users.find_by_id(user_id)
    if not user:
        logger.log_auth_event(
            event="token_refresh",
            success=False,
            reason="User not found",
            client_ip=client_ip
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )

    logger.log_auth_event(
        event="token_refresh",
        success=True,
        user_email=user.email,
        client_ip=client_ip
    )

    return _issue_tokens(user)


@router.post("/check-email", response_model=EmailCheckResponse)
async def check_email(
    body: EmailCheckRequest,
    users: UserRepository = Depends(get_user_repository)
):
    """Whether an email address is still free to register"""
    return {"available": await users.find_by_email(body.email) is None}


@router.post("/reset-password", response_model=MessageResponse)
async def change_password(
    request: Request,
    body: PasswordChangeRequest,
    users: UserRepository = Depends(get_user_repository)
):
    """Change password given the current one"""
    user = await users.find_by_email(body.email)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    if not verify_password(body.old_password, user.hashed_password):
        logger.log_auth_event(
            event="password_change",
            success=False,
            user_email=body.email,
            reason="Invalid current password",
            client_ip=_client_ip(request)
        )
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid current password")

    user.hashed_password = get_password_hash(body.new_password)
    await users.save(user)

    logger.log_auth_event(event="password_change", success=True, user_email=user.email)
    return {"message": "Password updated successfully"}


@router.post("/forgot-password", response_model=MessageResponse)
@limiter.limit("3/minute")
async def forgot_password(
    request: Request,
    body: ForgotPasswordRequest,
    users: UserRepository = Depends(get_user_repository)
):
    """
    Replace the password with a random temporary one and mail it.

    The new hash is saved before sending, so a failed delivery still leaves
    the old password unusable.
    """
    user = await users.find_by_email(body.email)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    temporary_password = generate_temporary_password()
    user.hashed_password = get_password_hash(temporary_password)
    await users.save(user)

    sent = await email_service.send_temporary_password(user.email, temporary_password)
    if not sent:
        logger.log_auth_event(
            event="forgot_password",
            success=False,
            user_email=user.email,
            reason="Email delivery failed",
            client_ip=_client_ip(request)
        )
        raise EmailDeliveryError(user.email, "Failed to send reset email")

    logger.log_auth_event(event="forgot_password", success=True, user_email=user.email)
    return {"message": "Password reset email sent"}
