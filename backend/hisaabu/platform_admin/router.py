from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hisaabu.auth.deps import authenticate, current_identity, require_platform_admin
from hisaabu.auth.schemas import LoginRequest, RefreshRequest, TokenResponse
from hisaabu.auth.tokens import AccessClaims, RefreshClaims, TokenService, get_token_service
from hisaabu.core.errors import NotFound, Unauthenticated
from hisaabu.core.schemas import ApiResponse
from hisaabu.db.session import get_db
from hisaabu.platform_admin import service
from hisaabu.platform_admin.schemas import AdminLoginResponse, AdminMeResponse, PlatformAdminOut

router = APIRouter()


def _issue_tokens(tokens: TokenService, admin: PlatformAdminOut) -> TokenResponse:
    access_token = tokens.issue_access(
        AccessClaims(
            user_id=admin.id,
            email=admin.email,
            user_type="platform_admin",
            role=admin.role,
        )
    )
    refresh_token = tokens.issue_refresh(
        RefreshClaims(user_id=admin.id, user_type="platform_admin")
    )
    return TokenResponse(access_token=access_token, refresh_token=refresh_token)


@router.post("/login", response_model=ApiResponse[AdminLoginResponse])
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    admin = service.authenticate_platform_admin(db, str(payload.email), payload.password)
    issued = _issue_tokens(tokens, admin)
    return ApiResponse(
        data=AdminLoginResponse(
            user=admin,
            access_token=issued.access_token,
            refresh_token=issued.refresh_token,
        )
    )


@router.post("/refresh", response_model=ApiResponse[TokenResponse])
def refresh(
    payload: RefreshRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    claims = tokens.verify_refresh(payload.refresh_token)
    if claims is None or claims.user_type != "platform_admin":
        raise Unauthenticated("Invalid or expired refresh token. Please log in again.")

    admin = service.get_platform_admin_by_id(db, claims.user_id)
    if not admin:
        raise NotFound("Admin not found")

    return ApiResponse(data=_issue_tokens(tokens, admin))


@router.post(
    "/logout",
    response_model=ApiResponse[None],
    dependencies=[Depends(authenticate), Depends(require_platform_admin)],
)
def logout():
    return ApiResponse(message="Logged out successfully")


@router.get(
    "/me",
    response_model=ApiResponse[AdminMeResponse],
    dependencies=[Depends(authenticate), Depends(require_platform_admin)],
)
def me(
    identity: AccessClaims = Depends(current_identity),
    db: Session = Depends(get_db),
):
    admin = service.get_platform_admin_by_id(db, identity.user_id)
    if not admin:
        raise NotFound("Admin not found")
    return ApiResponse(data=AdminMeResponse(user=admin))
