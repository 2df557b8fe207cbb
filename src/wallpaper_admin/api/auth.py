"""Bearer-token session resolution and the admin guard dependency."""

from fastapi import APIRouter, Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from wallpaper_admin.containers import AppContainer
from wallpaper_admin.domain.users import SessionState
from wallpaper_admin.services.auth import GuardOutcome, require_admin

router = APIRouter(prefix="/auth", tags=["auth"])

bearer_scheme = HTTPBearer(auto_error=False)

_OUTCOME_ERRORS = {
    GuardOutcome.LOADING: (
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "Session is still being resolved",
    ),
    GuardOutcome.REDIRECT_LOGIN: (
        status.HTTP_401_UNAUTHORIZED,
        "Sign in required",
    ),
    GuardOutcome.REDIRECT_UNAUTHORIZED: (
        status.HTTP_403_FORBIDDEN,
        "Administrator role required",
    ),
}


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


async def current_session(
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
    container: AppContainer = Depends(get_container),
) -> SessionState:
    """Resolve the caller's session from the Authorization header."""
    token = credentials.credentials if credentials else None
    return container.auth_service.resolve_token(token)


async def require_admin_session(
    session: SessionState = Depends(current_session),
) -> SessionState:
    """Reject requests whose session is not an administrator."""
    outcome = require_admin(session)
    if outcome is GuardOutcome.ALLOW:
        return session
    status_code, detail = _OUTCOME_ERRORS[outcome]
    headers = (
        {"WWW-Authenticate": "Bearer"}
        if outcome is GuardOutcome.REDIRECT_LOGIN
        else None
    )
    raise HTTPException(status_code=status_code, detail=detail, headers=headers)


@router.get("/session")
async def session_state(
    session: SessionState = Depends(current_session),
) -> dict[str, object]:
    """Describe the caller's session and what the admin guard decides."""
    identity = session.identity
    return {
        "outcome": require_admin(session).value,
        "is_admin": session.is_admin,
        "role": session.role.value if session.role else None,
        "identity": (
            {
                "id": identity.id,
                "email": identity.email,
                "display_name": identity.display_name,
                "photo_url": identity.photo_url,
            }
            if identity
            else None
        ),
    }
