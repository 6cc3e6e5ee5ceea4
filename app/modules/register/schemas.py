from pydantic import BaseModel, EmailStr, field_validator
from typing import Any, Optional

from app.modules.tax_id.validators import only_digits


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str
    name: Optional[str] = None
    cpf: str  # CPF (11 digits) or CNPJ (14 digits)
    whatsapp: Optional[str] = None

    @field_validator("password")
    @classmethod
    def password_present(cls, v: str) -> str:
        if not v:
            raise ValueError("password is required")
        return v

    @field_validator("cpf", mode="before")
    @classmethod
    def cpf_digits(cls, v: Any) -> str:
        digits = only_digits(v)
        if not digits:
            raise ValueError("cpf is required")
        return digits

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        v = (v or "").strip()
        return v or None

    @field_validator("whatsapp", mode="before")
    @classmethod
    def whatsapp_digits(cls, v: Any) -> Optional[str]:
        return only_digits(v) or None


class RegisterResponse(BaseModel):
    ok: bool = True
    needs_email_confirmation: bool = True
    email_redirect_to: str
