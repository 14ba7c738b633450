# backend/haatbazar/api/v1/endpoints/auth.py
"""
Endpoints de autenticación: login, registro, recuperación de contraseña y logout.
"""

from fastapi import APIRouter, Depends
from typing import Any, Dict
import logging

from haatbazar.api import deps
from haatbazar.schemas.notice_schema import Notice
from haatbazar.schemas.user_schema import (
    LoginRequest,
    ResetPasswordRequest,
    SessionUser,
    SignupRequest,
    VerifyPhoneRequest,
)
from haatbazar.services.auth_service import AuthService

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/login", response_model=SessionUser)
async def login(credentials: LoginRequest, auth_service: AuthService = Depends(deps.get_auth_service)):
    """Inicia sesión y guarda el usuario en la sesión del navegador."""
    return await auth_service.login(credentials)

@router.post("/register", status_code=201)
async def register(form: SignupRequest, auth_service: AuthService = Depends(deps.get_auth_service)) -> Dict[str, Any]:
    """Registra una cuenta de comprador o vendedor."""
    await auth_service.register(form)
    return {"notice": Notice.success("Account created successfully"), "redirect_to": "/login"}

@router.post("/verify-phone")
async def verify_phone(form: VerifyPhoneRequest, auth_service: AuthService = Depends(deps.get_auth_service)) -> Dict[str, Any]:
    """Primer paso de la recuperación: envía el código al teléfono."""
    await auth_service.verify_phone(form.phone)
    return {"notice": Notice.success("Verification code sent to your phone")}

@router.post("/reset-password")
async def reset_password(form: ResetPasswordRequest, auth_service: AuthService = Depends(deps.get_auth_service)) -> Dict[str, Any]:
    """Segundo paso de la recuperación: código y nueva contraseña."""
    await auth_service.reset_password(form)
    return {"notice": Notice.success("Password reset successful"), "redirect_to": "/login"}

@router.post("/logout")
async def logout(auth_service: AuthService = Depends(deps.get_auth_service)) -> Dict[str, Any]:
    """Cierra la sesión y vacía el carrito del navegador."""
    await auth_service.logout()
    return {"redirect_to": "/"}

@router.get("/me", response_model=SessionUser)
async def read_current_user(user: SessionUser = Depends(deps.get_current_user)):
    """Usuario de la sesión actual (401 si no hay sesión)."""
    return user
