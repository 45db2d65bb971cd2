from fastapi import APIRouter, Request
from starlette import status
from schemas.auth_schemas import Token, RegisterRequest, LoginRequest, RefreshTokenRequest, LogoutRequest
from utils.deps import auth_service_dependency
from utils.logger import get_logger

# Setup logger
logger = get_logger(__name__)


router = APIRouter(
    prefix="/v1/auth",
    tags=["auth"]
)


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, auth: auth_service_dependency):
    tokens = auth.register(body.email, body.password, body.display_name)

    logger.info("User registered successfully", extra={"email": body.email.lower()})

    return tokens


@router.post("/login", response_model=Token)
def login(request: Request, body: LoginRequest, auth: auth_service_dependency):
    tokens = auth.login(
        body.email,
        body.password,
        user_agent=request.headers.get("user-agent"),
        ip_address=request.client.host if request.client else None
    )

    logger.info("User logged in successfully", extra={"email": body.email.lower()})

    return tokens


@router.post("/refresh", response_model=Token)
def refresh(body: RefreshTokenRequest, auth: auth_service_dependency):
    """
    Exchange a refresh token for a new access + refresh token pair.
    The presented refresh token stops working.
    """
    tokens = auth.refresh(body.refresh_token)

    logger.info("Session refreshed")

    return tokens


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(body: LogoutRequest, auth: auth_service_dependency):
    """
    Revoke the session behind a refresh token. Always succeeds.
    """
    auth.logout(body.refresh_token)

    logger.info("User logged out")
