# backend/haatbazar/services/buyer_service.py
"""
Páginas de cuenta del comprador: perfil, historial de pedidos, quejas y
reseñas. Todo se delega al backend; este servicio valida los formularios y
mantiene al día el usuario de la sesión tras editar el perfil.
"""
import logging
from typing import Any, Dict, List

from haatbazar.core.exceptions import AccountValidationError
from haatbazar.crud.session_crud import SessionRepository
from haatbazar.schemas.order_schema import OrderStatus
from haatbazar.schemas.user_schema import ComplaintCreate, ProfileUpdate, ReviewUpdate, SessionUser
from haatbazar.services.backend_client import BackendClient

logger = logging.getLogger(__name__)


def newest_first(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Ordena por `createdAt` descendente; los registros sin fecha van al final."""
    return sorted(records or [], key=lambda r: r.get("createdAt") or "", reverse=True)


class BuyerService:

    def __init__(self, backend: BackendClient, sessions: SessionRepository, user: SessionUser):
        self.backend = backend
        self.sessions = sessions
        self.user = user

    # ========================================
    # PERFIL
    # ========================================

    async def update_profile(self, changes: ProfileUpdate) -> SessionUser:
        """Actualiza el perfil y fusiona la respuesta en el usuario de la sesión."""
        form = {k: v for k, v in changes.model_dump().items() if v is not None}
        response = await self.backend.update_buyer(self.user.id, form)

        merged = self.user.model_dump(by_alias=True)
        merged.update(form)
        if isinstance(response, dict):
            # la imagen no se gestiona aquí; se conserva la de la sesión
            merged.update({k: v for k, v in response.items() if k != "image"})
        updated = SessionUser.model_validate(merged)
        await self.sessions.set_user(updated)
        self.user = updated
        return updated

    # ========================================
    # PEDIDOS
    # ========================================

    async def order_history(self) -> List[Dict[str, Any]]:
        return await self.backend.get_buyer_orders(self.user.id) or []

    async def cancel_order(self, order_id: str) -> Dict[str, Any]:
        logger.info(f"Cancelando pedido {order_id} del comprador {self.user.id}")
        return await self.backend.update_order(order_id, {"status": OrderStatus.CANCELLED.value})

    # ========================================
    # QUEJAS
    # ========================================

    async def complaints(self) -> List[Dict[str, Any]]:
        return newest_first(await self.backend.get_buyer_complaints(self.user.id))

    async def sellers(self) -> List[Dict[str, Any]]:
        return await self.backend.get_sellers() or []

    async def submit_complaint(self, complaint: ComplaintCreate) -> Dict[str, Any]:
        if not complaint.message.strip() or not complaint.accuser_id:
            raise AccountValidationError("Please fill in all required fields")
        return await self.backend.create_complaint({
            "complainant_id": self.user.id,
            "accuser_id": complaint.accuser_id,
            "message": complaint.message,
        })

    # ========================================
    # RESEÑAS
    # ========================================

    async def reviews(self) -> List[Dict[str, Any]]:
        return newest_first(await self.backend.get_buyer_reviews(self.user.id))

    async def update_review(self, review_id: str, review: ReviewUpdate) -> Dict[str, Any]:
        if not review.comment.strip():
            raise AccountValidationError("Please enter a comment")
        return await self.backend.update_review(review_id, {"rating": review.rating, "comment": review.comment})

    async def delete_review(self, review_id: str) -> None:
        await self.backend.delete_review(review_id)
