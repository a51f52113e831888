from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional
from datetime import datetime


# Payload of the order-intake endpoint; accepted as-is and echoed back
class OrderIntake(BaseModel):
    order: Optional[Any] = None
    items: List[Any] = []
    total: Optional[float] = None

class OrderIntakeResponse(BaseModel):
    message: str
    order: Optional[Any] = None


# Schema accepting both snake_case and the storefront's camelCase keys
class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

# Item of a buy-now checkout
class BuyNowItem(CamelModel):
    product_id: int
    quantity: int = Field(default=1, gt=0)

# Reference to a cart row (or to a product in the cart) at checkout
class CartSelection(CamelModel):
    id: Optional[int] = None
    product_id: Optional[int] = None
    quantity: Optional[int] = Field(default=None, gt=0)

class PlaceOrderRequest(CamelModel):
    buy_now: bool = False
    items: List[BuyNowItem] = []
    cart_items: List[CartSelection] = []
    shipping_address: Optional[Dict[str, Any]] = None
    payment_method: Optional[str] = None
    payment_details: Optional[Dict[str, Any]] = None

class PlaceOrderResponse(BaseModel):
    success: bool = True
    order_id: int


# Output schema for an individual order line item
class OrderItemOut(BaseModel):
    id: int
    product_id: int
    product_name: Optional[str] = None
    product_images: Optional[str] = None
    quantity: int
    unit_price: float
    line_total: float

# Output schema representing the full order details
class OrderOut(BaseModel):
    id: int
    user_id: int
    status: str
    total_amount: float
    payment_method: Optional[str] = None
    shipping_address: Optional[Dict[str, Any]] = None
    payment_details: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None
    items: List[OrderItemOut] = []

class OrderStatusOut(BaseModel):
    id: int
    status: str

# Row of the order-history listing
class OrderHistoryRow(BaseModel):
    id: int
    status: str
    total_amount: float
    created_at: Optional[datetime] = None
    products: str

class ReorderResponse(BaseModel):
    message: str
    new_order_id: int
    orders: List[OrderHistoryRow]

class MessageResponse(BaseModel):
    message: str

# Schema for updating order status
class OrderStatusPatch(BaseModel):
    status: str = Field(min_length=1)

class AdminOrderRow(BaseModel):
    id: int
    user_id: int
    user_name: Optional[str] = None
    user_phone: Optional[str] = None
    status: str
    total_amount: float
    payment_method: Optional[str] = None
    created_at: Optional[datetime] = None
    items_count: int

# Schema for paginated admin order lists
class AdminOrdersPage(BaseModel):
    items: List[AdminOrderRow]
    total: int
    page: int
    pages: int
    limit: int

# Admin view of a single order, with the customer's details
class AdminOrderDetail(OrderOut):
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    user_phone: Optional[str] = None

class BulkStatusUpdate(CamelModel):
    order_ids: List[int] = Field(min_length=1)
    status: str = Field(min_length=1)

class BulkStatusResponse(BaseModel):
    message: str
    updated_rows: int
    skipped: List[int] = []
