# backend/haatbazar/api/v1/endpoints/checkout.py
"""
Checkout y paso de pago simulado.

`POST /checkout` agrupa el carrito en un pedido por vendedor y devuelve el
resumen, que el navegador reenvía tal cual a `POST /checkout/payment`
(estado de navegación, no se guarda en el servidor). Al confirmar, los
pedidos se asignan siempre al usuario de la sesión.
"""

from fastapi import APIRouter, Depends
import logging

from haatbazar.api import deps
from haatbazar.schemas.order_schema import CardDetails, CheckoutRequest, CheckoutSummary, PaymentRequest, PaymentResult
from haatbazar.schemas.user_schema import SessionUser
from haatbazar.services.cart_service import CartService
from haatbazar.services.checkout_service import checkout_service
from haatbazar.services.payment_service import PaymentService

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/", response_model=CheckoutSummary)
async def checkout(
    request: CheckoutRequest,
    user: SessionUser = Depends(deps.get_current_user),
    cart_service: CartService = Depends(deps.get_cart_service),
):
    """
    Agrupa el carrito por vendedor y calcula el total de cada pedido.
    """
    return checkout_service.group_by_seller(
        cart_service.items,
        buyer_id=user.id,
        shipping_address=request.shipping_address,
        billing_address=request.billing_address,
    )

@router.get("/payment", response_model=CardDetails)
async def payment_form(user: SessionUser = Depends(deps.get_current_user)):
    """
    Datos de tarjeta de prueba con los que se precarga el formulario de pago.
    """
    return CardDetails()

@router.post("/payment", response_model=PaymentResult)
async def confirm_payment(
    request: PaymentRequest,
    user: SessionUser = Depends(deps.get_current_user),
    payment_service: PaymentService = Depends(deps.get_payment_service),
):
    """
    Confirma el pago: crea los pedidos, registra las transacciones y vacía el carrito.

    Sin pedidos en la petición devuelve `redirect_to="/cart"` sin efectos.
    """
    logger.info(f"Pago solicitado por {user.id}: {len(request.orders)} pedidos, total {request.total_amount:.2f}")
    return await payment_service.submit(request, buyer_id=user.id)
