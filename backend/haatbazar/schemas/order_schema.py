# backend/haatbazar/schemas/order_schema.py
"""
Se encarga de definir los esquemas Pydantic para pedidos, agrupación por
vendedor, transacciones y el resultado del paso de pago.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
import enum

from .notice_schema import Notice

class OrderStatus(str, enum.Enum):
    """Define los posibles estados de un pedido en el backend."""
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

class PaymentType(str, enum.Enum):
    CARD = "CARD"

class TransactionStatus(str, enum.Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"

class OrderedProduct(BaseModel):
    """Un item dentro de un pedido, en el formato que espera `POST /orders`."""
    product_id: str = Field(..., description="ID del producto")
    quantity: int = Field(..., description="Cantidad del producto", gt=0)
    subtotal: float = Field(..., description="precio * cantidad al momento de la compra", ge=0)

class SellerOrderGroup(BaseModel):
    """
    Pedido de un único vendedor, construido durante el checkout.

    Es efímero: viaja como estado de navegación hasta el paso de pago y no se
    persiste. `seller_id` es None para el grupo de "vendedor desconocido".
    """
    buyer_id: str
    seller_id: Optional[str] = None
    ordered_products: List[OrderedProduct]
    total_price: float = Field(..., ge=0)
    shipping_address: str
    billing_address: str
    status: OrderStatus = OrderStatus.PENDING

class CheckoutRequest(BaseModel):
    """Datos que el comprador introduce en la página del carrito."""
    shipping_address: str = ""
    billing_address: Optional[str] = None

class CheckoutSummary(BaseModel):
    """Estado que el checkout entrega al paso de pago."""
    orders: List[SellerOrderGroup] = []
    total_amount: float = 0.0

class CardDetails(BaseModel):
    """Formulario de tarjeta simulado, precargado con datos de prueba."""
    card_number: str = "4111 1111 1111 1111"
    expiry_date: str = "12/25"
    cvv: str = "123"

class PaymentRequest(CheckoutSummary):
    """Lo que envía el formulario de pago: el resumen del checkout y la tarjeta."""
    card: CardDetails = Field(default_factory=CardDetails)

class CreatedOrder(BaseModel):
    """Respuesta del backend al crear un pedido."""
    id: str = Field(..., alias="_id")
    total_price: float
    seller_id: Optional[str] = None
    status: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("seller_id", mode="before")
    @classmethod
    def flatten_seller(cls, v):
        if isinstance(v, dict):
            return v.get("_id") or v.get("id")
        return v

class TransactionCreate(BaseModel):
    """Esquema para `POST /transactions`."""
    order_id: str
    amount: float = Field(..., ge=0)
    payment_type: PaymentType = PaymentType.CARD
    status: TransactionStatus = TransactionStatus.SUCCESS

class SellerOrderOutcome(BaseModel):
    """Resultado del envío de un pedido de vendedor."""
    seller_id: Optional[str] = None
    total_price: float
    order_id: Optional[str] = None
    transaction_recorded: bool = False
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.order_id is not None and self.transaction_recorded and self.error is None

class PaymentResult(BaseModel):
    """
    Resultado estructurado del paso de pago.

    Los pedidos no son atómicos: si uno falla, los ya creados no se cancelan,
    y `outcomes` indica cuáles llegaron a crearse.
    """
    success: bool
    cleared_cart: bool = False
    redirect_to: Optional[str] = None
    notice: Optional[Notice] = None
    outcomes: List[SellerOrderOutcome] = []

class OrderStatusUpdate(BaseModel):
    """Esquema para actualizar únicamente el estado de un pedido."""
    status: OrderStatus = Field(..., description="Nuevo estado del pedido")
