# backend/haatbazar/services/auth_service.py
"""
Pantallas de autenticación: login, registro, recuperación de contraseña y
logout.

La emisión de sesiones es del backend; aquí solo se guarda el usuario que
devuelve en la sesión del navegador y se valida lo que se puede validar sin
red (contraseñas que no coinciden).
"""
import logging
from typing import Optional

from pydantic import ValidationError

from haatbazar.core.exceptions import AccountValidationError, BackendAPIError
from haatbazar.crud.cart_crud import CartRepository
from haatbazar.crud.session_crud import SessionRepository
from haatbazar.schemas.user_schema import (
    LoginRequest,
    ResetPasswordRequest,
    SessionUser,
    SignupRequest,
)
from haatbazar.services.backend_client import BackendClient

logger = logging.getLogger(__name__)

PASSWORD_MISMATCH = "Passwords do not match"

class AuthService:

    def __init__(self, backend: BackendClient, sessions: SessionRepository, carts: CartRepository):
        self.backend = backend
        self.sessions = sessions
        self.carts = carts

    async def current_user(self) -> Optional[SessionUser]:
        return await self.sessions.get_user()

    async def login(self, credentials: LoginRequest) -> SessionUser:
        """Inicia sesión y guarda el usuario devuelto por el backend."""
        response = await self.backend.login(credentials.model_dump(mode="json"))
        # Algunas versiones del backend envuelven el usuario en {"user": {...}}
        user_data = response.get("user", response) if isinstance(response, dict) else response
        try:
            user = SessionUser.model_validate(user_data)
        except ValidationError as e:
            raise BackendAPIError("Invalid email or password") from e
        await self.sessions.set_user(user)
        logger.info(f"Sesión iniciada para el usuario {user.id}")
        return user

    async def register(self, form: SignupRequest) -> None:
        if form.password != form.confirm_password:
            raise AccountValidationError(PASSWORD_MISMATCH)
        await self.backend.register(form.model_dump(mode="json", exclude={"confirm_password"}))
        logger.info(f"Registro enviado para {form.email} ({form.user_type.value})")

    async def verify_phone(self, phone: str) -> None:
        await self.backend.verify_phone({"phone": phone})

    async def reset_password(self, form: ResetPasswordRequest) -> None:
        if form.new_password != form.confirm_password:
            raise AccountValidationError(PASSWORD_MISMATCH)
        await self.backend.reset_password({
            "phone": form.phone,
            "verificationCode": form.verification_code,
            "newPassword": form.new_password,
        })

    async def logout(self) -> None:
        """Cierra la sesión y descarta el carrito del navegador."""
        await self.sessions.clear_user()
        await self.carts.clear()
