from fastapi import APIRouter, status
from schemas.user_schemas import UserProfile, UpdateProfileRequest
from utils.deps import auth_service_dependency, current_user_dependency
from utils.logger import get_logger

# Setup logger
logger = get_logger(__name__)


router = APIRouter(
    prefix="/v1",
    tags=["users"]
)

@router.get("/me", response_model=UserProfile, status_code=status.HTTP_200_OK)
def get_me(user_id: current_user_dependency, auth: auth_service_dependency):
    """
    Get current user info (protected endpoint).
    """
    return auth.get_profile(user_id)


@router.patch("/me", response_model=UserProfile, status_code=status.HTTP_200_OK)
def update_me(body: UpdateProfileRequest, user_id: current_user_dependency, auth: auth_service_dependency):
    """
    Update the current user's display name.
    """
    if "display_name" not in body.model_fields_set:
        return auth.get_profile(user_id)

    user = auth.update_profile(user_id, body.display_name)

    logger.info("Profile updated", extra={"user_id": user_id})

    return user
