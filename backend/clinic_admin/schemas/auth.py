from pydantic import BaseModel
from clinic_admin.schemas.common import RequestModel


class LoginRequest(RequestModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    id: str
    role: str
