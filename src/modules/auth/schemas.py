"""Auth module schemas."""

from pydantic import Field

from src.modules.studios.schemas import BusinessSettings
from src.shared.schemas import CamelModel


class LoginRequest(CamelModel):
    slug: str = Field(..., min_length=1)
    access_code: str = Field(..., min_length=1)


class RegisterRequest(LoginRequest):
    business_name: str = Field(..., min_length=1, max_length=120)


class TokenResponse(CamelModel):
    token: str
    studio: BusinessSettings
