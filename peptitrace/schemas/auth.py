import uuid
from pydantic import BaseModel, EmailStr, Field

from peptitrace.models.user import Role, UserStatus


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    username: str | None = Field(default=None, min_length=3, max_length=100)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class RefreshRequest(BaseModel):
    # 바디에 없으면 refresh 쿠키 사용
    refresh_token: str | None = None


class UserSummary(BaseModel):
    id: uuid.UUID
    email: str
    username: str
    role: Role
    status: UserStatus


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
