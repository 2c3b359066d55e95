"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.container import NotificationServices
from app.domain.entities import UserProfile
from app.infrastructure.database import get_db
from app.infrastructure.repositories import UserProfileRepository

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_notification_services(request: Request) -> NotificationServices:
    return request.app.state.notifications


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    services: NotificationServices = Depends(get_notification_services),
) -> str:
    """Return the id of the user authenticated by the bearer token."""

    if credentials is None or not credentials.credentials:
        raise _unauthorized("Not authenticated")
    try:
        return await services.token_verifier.verify_token(credentials.credentials)
    except ValueError as exc:
        raise _unauthorized("Could not validate credentials") from exc


def get_current_user_profile(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> UserProfile:
    """Return the active profile of the authenticated user."""

    profile = UserProfileRepository(db).get(user_id)
    if profile is None:
        raise _unauthorized("User not found")
    if not profile.is_active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")
    return profile
