# backend/haatbazar/services/checkout_service.py
"""
Agrupación del carrito por vendedor para el checkout.

Cada vendedor prepara y factura sus pedidos por separado, así que el
carrito plano se reparte en un pedido por vendedor. El total general es la
suma de los totales de cada grupo y coincide con el total del carrito en el
momento de agrupar.
"""
import logging
from typing import Dict, List, Optional

from haatbazar.core.exceptions import CheckoutValidationError
from haatbazar.schemas.cart_schema import LineItem
from haatbazar.schemas.order_schema import CheckoutSummary, OrderedProduct, SellerOrderGroup

logger = logging.getLogger(__name__)

class CheckoutService:
    """
    Transforma el carrito en pedidos por vendedor listos para `POST /orders`.
    """

    def group_by_seller(
        self,
        items: List[LineItem],
        buyer_id: str,
        shipping_address: str,
        billing_address: Optional[str] = None,
    ) -> CheckoutSummary:
        """
        Reparte los items por vendedor en orden de primera aparición.

        Los items sin vendedor van a un único grupo con `seller_id=None`.
        La dirección de facturación, si no se indica, es la de envío.
        """
        shipping_address = (shipping_address or "").strip()
        if not shipping_address:
            raise CheckoutValidationError("Please enter a shipping address")
        billing_address = (billing_address or "").strip() or shipping_address

        partitions: Dict[Optional[str], List[LineItem]] = {}
        for item in items:
            partitions.setdefault(item.seller_id, []).append(item)

        orders = []
        for seller_id, seller_items in partitions.items():
            orders.append(SellerOrderGroup(
                buyer_id=buyer_id,
                seller_id=seller_id,
                ordered_products=[
                    OrderedProduct(product_id=item.product_id, quantity=item.quantity, subtotal=item.total)
                    for item in seller_items
                ],
                total_price=sum((item.total for item in seller_items), 0),
                shipping_address=shipping_address,
                billing_address=billing_address,
            ))

        total_amount = sum((order.total_price for order in orders), 0)
        logger.info(f"Checkout: {len(items)} items agrupados en {len(orders)} pedidos, total {total_amount:.2f}")
        return CheckoutSummary(orders=orders, total_amount=total_amount)

# Instancia singleton del servicio
checkout_service = CheckoutService()
