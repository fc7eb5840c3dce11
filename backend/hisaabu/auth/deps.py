"""
Request gates.

Each gate is a FastAPI dependency that either returns or raises an
``AppError``. Routers list them in order; ``authenticate`` attaches the
verified claims to ``request.state`` and the later gates only look at what
it attached.
"""

from fastapi import Depends, Request

from hisaabu.auth.tokens import AccessClaims, TokenService, extract_bearer, get_token_service
from hisaabu.core.errors import Forbidden, Unauthenticated

NO_TOKEN_MESSAGE = "No token provided. Please include Authorization header with Bearer token."
INVALID_TOKEN_MESSAGE = "Invalid or expired token. Please log in again."


def _identity(request: Request) -> AccessClaims | None:
    return getattr(request.state, "identity", None)


def authenticate(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
) -> AccessClaims:
    token = extract_bearer(request.headers.get("Authorization"))
    if not token:
        raise Unauthenticated(NO_TOKEN_MESSAGE)

    claims = tokens.verify_access(token)
    if claims is None:
        raise Unauthenticated(INVALID_TOKEN_MESSAGE)

    request.state.identity = claims
    if claims.company_id:
        request.state.company_id = claims.company_id
    return claims


def require_platform_admin(request: Request) -> AccessClaims:
    identity = _identity(request)
    if identity is None or identity.user_type != "platform_admin":
        raise Forbidden("This action requires platform admin privileges.")
    return identity


def require_company_user(request: Request) -> AccessClaims:
    identity = _identity(request)
    if identity is None or identity.user_type != "company_user":
        raise Forbidden("This action requires company user access.")
    return identity


def require_approved_company(request: Request) -> AccessClaims:
    identity = _identity(request)
    if identity is None or identity.company_status != "approved":
        raise Forbidden(
            "Your company must be approved to access this resource. "
            "Please wait for admin approval."
        )
    return identity


def scope_to_company(request: Request) -> None:
    identity = _identity(request)
    if identity and identity.user_type == "company_user" and identity.company_id:
        request.state.company_id = identity.company_id


def current_identity(request: Request) -> AccessClaims:
    identity = _identity(request)
    if identity is None:
        raise Unauthenticated(NO_TOKEN_MESSAGE)
    return identity


def current_company_id(request: Request) -> str:
    company_id = getattr(request.state, "company_id", None)
    if not company_id:
        raise Unauthenticated("Company ID not found in token")
    return company_id


# Router-level chains.
TENANT_GATES = [
    Depends(authenticate),
    Depends(require_company_user),
    Depends(require_approved_company),
    Depends(scope_to_company),
]
PLATFORM_ADMIN_GATES = [
    Depends(authenticate),
    Depends(require_platform_admin),
]
