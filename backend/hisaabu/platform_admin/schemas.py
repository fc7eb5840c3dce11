from hisaabu.auth.schemas import TokenResponse
from hisaabu.core.schemas import CamelModel


class PlatformAdminOut(CamelModel):
    id: str
    name: str
    email: str
    role: str


class AdminMeResponse(CamelModel):
    user: PlatformAdminOut


class AdminLoginResponse(TokenResponse):
    user: PlatformAdminOut
