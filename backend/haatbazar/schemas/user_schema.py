# backend/haatbazar/schemas/user_schema.py
"""
Esquemas Pydantic para autenticación y páginas de cuenta del comprador.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
import enum


class UserType(str, enum.Enum):
    BUYER = "buyer"
    SELLER = "seller"
    ADMIN = "admin"


class SessionUser(BaseModel):
    """
    Usuario guardado en la sesión del navegador.

    Es el objeto que devuelve el backend al iniciar sesión; se conservan los
    campos desconocidos para no perder datos al reescribirlo.
    """
    id: str = Field(..., alias="_id")
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    billing_address: Optional[str] = None
    shipping_address: Optional[str] = None
    image: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")


# ========================================
# AUTENTICACIÓN
# ========================================

class LoginRequest(BaseModel):
    email: str
    password: str
    user_type: UserType = UserType.BUYER


class SignupRequest(BaseModel):
    name: str
    email: str
    phone: str
    password: str
    confirm_password: str
    user_type: UserType = UserType.BUYER


class VerifyPhoneRequest(BaseModel):
    phone: str


class ResetPasswordRequest(BaseModel):
    phone: str
    verification_code: str
    new_password: str
    confirm_password: str


# ========================================
# CUENTA DEL COMPRADOR
# ========================================

class ProfileUpdate(BaseModel):
    """Campos editables del perfil; la imagen de perfil no se gestiona aquí."""
    name: Optional[str] = None
    phone: Optional[str] = None
    billing_address: Optional[str] = None
    shipping_address: Optional[str] = None


class ComplaintCreate(BaseModel):
    """Queja contra un vendedor (`accuser_id` es el vendedor señalado)."""
    accuser_id: str = ""
    message: str = ""


class ReviewUpdate(BaseModel):
    rating: int = Field(5, ge=1, le=5)
    comment: str = ""
