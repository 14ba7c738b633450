# backend/haatbazar/services/payment_service.py
"""
Paso de pago simulado del checkout.

Recibe los pedidos por vendedor y el total que produjo el checkout. Al
confirmar, cobra a través de un `PaymentProcessor` (el incluido siempre
aprueba), crea un pedido por vendedor en el backend, registra una
transacción "SUCCESS" por cada pedido creado y vacía el carrito.

Los pedidos no son atómicos: si uno falla, los ya creados no se cancelan.
El resultado enumera qué pedidos se crearon y cuáles fallaron.
"""
import asyncio
import logging
from typing import List, Optional, Protocol

from pydantic import BaseModel, ValidationError

from haatbazar.core.exceptions import BackendAPIError
from haatbazar.schemas.notice_schema import Notice
from haatbazar.schemas.order_schema import (
    CardDetails,
    CreatedOrder,
    PaymentRequest,
    PaymentResult,
    SellerOrderGroup,
    SellerOrderOutcome,
    TransactionCreate,
)
from haatbazar.services.backend_client import BackendClient
from haatbazar.services.cart_service import CartService

logger = logging.getLogger(__name__)

CART_PATH = "/cart"
ORDER_HISTORY_PATH = "/buyer/history"
PAYMENT_FAILED_MESSAGE = "Payment failed"
PAYMENT_SUCCESS_MESSAGE = "Payment successful! Orders have been placed."


class ChargeOutcome(BaseModel):
    approved: bool
    reference: Optional[str] = None
    message: Optional[str] = None


class PaymentProcessor(Protocol):
    """Pasarela de pago intercambiable."""

    async def charge(self, orders: List[SellerOrderGroup], amount: float) -> ChargeOutcome:
        ...


class MockPaymentProcessor:
    """Pasarela ficticia: aprueba cualquier cobro con la tarjeta de prueba."""

    def __init__(self, card: Optional[CardDetails] = None):
        self.card = card or CardDetails()

    async def charge(self, orders: List[SellerOrderGroup], amount: float) -> ChargeOutcome:
        last_digits = self.card.card_number.replace(" ", "")[-4:]
        logger.info(f"Pago simulado aprobado: {amount:.2f} en {len(orders)} pedidos (tarjeta ****{last_digits})")
        return ChargeOutcome(approved=True, reference=f"MOCK-{last_digits}")


class PaymentService:
    """
    Orquesta el cobro, la creación de pedidos y el registro de transacciones.
    """

    def __init__(self, backend: BackendClient, cart_service: CartService, processor: Optional[PaymentProcessor] = None):
        self.backend = backend
        self.cart_service = cart_service
        self.processor = processor

    async def submit(self, request: PaymentRequest, buyer_id: str) -> PaymentResult:
        """
        Confirma el pago de los pedidos del checkout para `buyer_id`.

        Sin pedidos (p. ej. navegación directa al pago) se redirige al carrito
        sin efectos secundarios. Los pedidos llegan del navegador, así que se
        reasignan al comprador de la sesión y sus totales se recalculan.
        """
        if not request.orders:
            logger.info("Pago sin pedidos, se redirige al carrito")
            return PaymentResult(success=False, redirect_to=CART_PATH)

        request = self._pin_to_buyer(request, buyer_id)

        processor = self.processor or MockPaymentProcessor(request.card)
        charge = await processor.charge(request.orders, request.total_amount)
        if not charge.approved:
            logger.warning(f"Cobro rechazado: {charge.message}")
            return PaymentResult(success=False, notice=Notice.error(charge.message or PAYMENT_FAILED_MESSAGE))

        outcomes = [SellerOrderOutcome(seller_id=order.seller_id, total_price=order.total_price) for order in request.orders]

        # 1. Creación de un pedido por vendedor
        created = await asyncio.gather(
            *(self._create_order(order) for order in request.orders),
            return_exceptions=True,
        )
        errors: List[str] = []
        created_orders: List[tuple] = []
        for outcome, result in zip(outcomes, created):
            if isinstance(result, BackendAPIError):
                outcome.error = result.message
                errors.append(result.message)
            elif isinstance(result, BaseException):
                raise result
            else:
                outcome.order_id = result.id
                created_orders.append((outcome, result))

        # 2. Transacciones, solo si todos los pedidos se crearon
        if not errors:
            recorded = await asyncio.gather(
                *(self._record_transaction(order) for _, order in created_orders),
                return_exceptions=True,
            )
            for (outcome, _), result in zip(created_orders, recorded):
                if isinstance(result, BackendAPIError):
                    outcome.error = result.message
                    errors.append(result.message)
                elif isinstance(result, BaseException):
                    raise result
                else:
                    outcome.transaction_recorded = True

        if errors:
            created_ids = [o.order_id for o in outcomes if o.order_id]
            logger.error(f"Pago incompleto: {len(errors)} errores, pedidos creados sin revertir: {created_ids}")
            return PaymentResult(success=False, notice=Notice.error(errors[0] or PAYMENT_FAILED_MESSAGE), outcomes=outcomes)

        await self.cart_service.clear_cart()
        logger.info(f"Pago completado: {len(outcomes)} pedidos por {request.total_amount:.2f}")
        return PaymentResult(
            success=True,
            cleared_cart=True,
            redirect_to=ORDER_HISTORY_PATH,
            notice=Notice.success(PAYMENT_SUCCESS_MESSAGE),
            outcomes=outcomes,
        )

    @staticmethod
    def _pin_to_buyer(request: PaymentRequest, buyer_id: str) -> PaymentRequest:
        """
        Copia de la petición con `buyer_id` de la sesión y totales derivados
        de los subtotales de cada pedido.
        """
        orders = []
        for order in request.orders:
            total_price = sum((product.subtotal for product in order.ordered_products), 0)
            if order.buyer_id != buyer_id or order.total_price != total_price:
                logger.warning(
                    f"Pedido de {order.seller_id} corregido: comprador {order.buyer_id} -> {buyer_id}, "
                    f"total {order.total_price} -> {total_price}"
                )
            orders.append(order.model_copy(update={"buyer_id": buyer_id, "total_price": total_price}))
        total_amount = sum((order.total_price for order in orders), 0)
        return request.model_copy(update={"orders": orders, "total_amount": total_amount})

    async def _create_order(self, order: SellerOrderGroup) -> CreatedOrder:
        payload = order.model_dump(mode="json", exclude_none=True)
        response = await self.backend.create_order(payload)
        try:
            return CreatedOrder.model_validate(response)
        except ValidationError as e:
            raise BackendAPIError("Failed to place order") from e

    async def _record_transaction(self, order: CreatedOrder):
        transaction = TransactionCreate(order_id=order.id, amount=order.total_price)
        return await self.backend.create_transaction(transaction.model_dump(mode="json"))
