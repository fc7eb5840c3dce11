from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hisaabu.auth import service
from hisaabu.auth.deps import authenticate, current_identity, require_company_user
from hisaabu.auth.schemas import (
    CompanyOut,
    CompanyUserOut,
    LoginRequest,
    RefreshRequest,
    RegisterCompanyRequest,
    RegisterCompanyResponse,
    TokenResponse,
    UserLoginResponse,
    UserWithCompany,
)
from hisaabu.auth.tokens import AccessClaims, RefreshClaims, TokenService, get_token_service
from hisaabu.core.errors import NotFound, Unauthenticated
from hisaabu.core.schemas import ApiResponse
from hisaabu.db.session import get_db

router = APIRouter()


def _issue_tokens(
    tokens: TokenService, user: CompanyUserOut, company: CompanyOut
) -> TokenResponse:
    access_token = tokens.issue_access(
        AccessClaims(
            user_id=user.id,
            email=user.email,
            user_type="company_user",
            role=user.role,
            company_id=user.company_id,
            company_status=company.status,
        )
    )
    refresh_token = tokens.issue_refresh(
        RefreshClaims(user_id=user.id, user_type="company_user")
    )
    return TokenResponse(access_token=access_token, refresh_token=refresh_token)


@router.post(
    "/register-company",
    status_code=201,
    response_model=ApiResponse[RegisterCompanyResponse],
)
def register_company(payload: RegisterCompanyRequest, db: Session = Depends(get_db)):
    result = service.register_company(db, payload.company, payload.user)
    return ApiResponse(
        message="Company registered successfully. Waiting for admin approval.",
        data=RegisterCompanyResponse(company_id=result.company_id, user_id=result.user_id),
    )


@router.post("/login", response_model=ApiResponse[UserLoginResponse])
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    user, company = service.authenticate_user(db, str(payload.email), payload.password)
    issued = _issue_tokens(tokens, user, company)
    return ApiResponse(
        data=UserLoginResponse(
            user=user,
            company=company,
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
    if claims is None or claims.user_type != "company_user":
        raise Unauthenticated("Invalid or expired refresh token. Please log in again.")

    # Re-read the user so the new access token carries the current company status.
    found = service.get_user_with_company(db, claims.user_id)
    if not found:
        raise NotFound("User not found")

    user, company = found
    return ApiResponse(data=_issue_tokens(tokens, user, company))


@router.post(
    "/logout",
    response_model=ApiResponse[None],
    dependencies=[Depends(authenticate), Depends(require_company_user)],
)
def logout():
    # Tokens are stateless; the client drops them.
    return ApiResponse(message="Logged out successfully")


@router.get(
    "/me",
    response_model=ApiResponse[UserWithCompany],
    dependencies=[Depends(authenticate), Depends(require_company_user)],
)
def me(
    identity: AccessClaims = Depends(current_identity),
    db: Session = Depends(get_db),
):
    found = service.get_user_with_company(db, identity.user_id)
    if not found:
        raise NotFound("User not found")

    user, company = found
    return ApiResponse(data=UserWithCompany(user=user, company=company))
