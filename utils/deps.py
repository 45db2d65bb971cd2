from core.database import SessionLocal
from typing import Annotated, Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from core.config import settings
from core.exceptions import UnauthorizedError
from services.auth_service import AuthService
from services.session_store import SessionStore
from services.token_service import AccessTokenSigner

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

db_dependency = Annotated[Session, Depends(get_db)]


signer = AccessTokenSigner.from_settings(settings)


def get_auth_service(db: db_dependency) -> AuthService:
    return AuthService(SessionStore(db), signer, settings)

auth_service_dependency = Annotated[AuthService, Depends(get_auth_service)]


# missing or non-Bearer headers reach get_current_user_id as None
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user_id(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)]
) -> str:
    # UnauthorizedError is turned into a 401 by the app's exception handler
    if credentials is None:
        raise UnauthorizedError("Not authenticated")
    return signer.verify(credentials.credentials)["sub"]


current_user_dependency = Annotated[str, Depends(get_current_user_id)]
