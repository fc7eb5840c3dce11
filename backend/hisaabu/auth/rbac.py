from fastapi import Request

from hisaabu.auth.tokens import AccessClaims
from hisaabu.core.errors import Forbidden


def require_role(*allowed_roles: str):
    def checker(request: Request) -> AccessClaims:
        identity = getattr(request.state, "identity", None)
        if identity is None or identity.role not in allowed_roles:
            raise Forbidden(
                f"This action requires one of these roles: {', '.join(allowed_roles)}"
            )
        return identity

    return checker
