# backend/haatbazar/api/v1/endpoints/buyer.py
"""
Endpoints de las páginas de cuenta del comprador.

Todos requieren un usuario en la sesión del navegador.
"""

from fastapi import APIRouter, Depends
from typing import Any, Dict, List
import logging

from haatbazar.api import deps
from haatbazar.schemas.notice_schema import Notice
from haatbazar.schemas.user_schema import ComplaintCreate, ProfileUpdate, ReviewUpdate, SessionUser
from haatbazar.services.buyer_service import BuyerService

logger = logging.getLogger(__name__)
router = APIRouter()

# ========================================
# PERFIL
# ========================================

@router.get("/profile", response_model=SessionUser)
async def read_profile(user: SessionUser = Depends(deps.get_current_user)):
    return user

@router.put("/profile", response_model=SessionUser)
async def update_profile(changes: ProfileUpdate, buyer_service: BuyerService = Depends(deps.get_buyer_service)):
    return await buyer_service.update_profile(changes)

# ========================================
# HISTORIAL DE PEDIDOS
# ========================================

@router.get("/orders")
async def order_history(buyer_service: BuyerService = Depends(deps.get_buyer_service)) -> List[Dict[str, Any]]:
    return await buyer_service.order_history()

@router.post("/orders/{order_id}/cancel")
async def cancel_order(order_id: str, buyer_service: BuyerService = Depends(deps.get_buyer_service)) -> Dict[str, Any]:
    await buyer_service.cancel_order(order_id)
    return {"notice": Notice.success("Order cancelled successfully")}

# ========================================
# QUEJAS
# ========================================

@router.get("/complaints")
async def list_complaints(buyer_service: BuyerService = Depends(deps.get_buyer_service)) -> List[Dict[str, Any]]:
    return await buyer_service.complaints()

@router.get("/sellers")
async def list_sellers(buyer_service: BuyerService = Depends(deps.get_buyer_service)) -> List[Dict[str, Any]]:
    """Vendedores para el selector del formulario de quejas."""
    return await buyer_service.sellers()

@router.post("/complaints", status_code=201)
async def submit_complaint(complaint: ComplaintCreate, buyer_service: BuyerService = Depends(deps.get_buyer_service)) -> Dict[str, Any]:
    await buyer_service.submit_complaint(complaint)
    return {"notice": Notice.success("Complaint submitted successfully")}

# ========================================
# RESEÑAS
# ========================================

@router.get("/reviews")
async def list_reviews(buyer_service: BuyerService = Depends(deps.get_buyer_service)) -> List[Dict[str, Any]]:
    return await buyer_service.reviews()

@router.put("/reviews/{review_id}")
async def update_review(review_id: str, review: ReviewUpdate, buyer_service: BuyerService = Depends(deps.get_buyer_service)) -> Dict[str, Any]:
    await buyer_service.update_review(review_id, review)
    return {"notice": Notice.success("Review updated successfully")}

@router.delete("/reviews/{review_id}")
async def delete_review(review_id: str, buyer_service: BuyerService = Depends(deps.get_buyer_service)) -> Dict[str, Any]:
    await buyer_service.delete_review(review_id)
    return {"notice": Notice.success("Review deleted successfully")}
