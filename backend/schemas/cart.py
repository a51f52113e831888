from pydantic import BaseModel, Field
from typing import List, Optional

# Request schema for adding an item to the cart
class CartAddItem(BaseModel):
    product_id: int
    quantity: int = Field(default=1, gt=0)
    size: Optional[str] = None
    color: Optional[str] = None

# Request schema for updating cart item quantity
class CartUpdateItem(BaseModel):
    quantity: int = Field(gt=0)

# Response schema for a single cart line joined with its product
class CartItemOut(BaseModel):
    cart_id: int
    product_id: int
    quantity: int
    size: Optional[str] = None
    color: Optional[str] = None
    name: str
    price: float
    images: List[str] = []
    stock: Optional[int] = None

class CartAddResponse(BaseModel):
    id: int

class CartUpdateResponse(BaseModel):
    updated: int

class CartDeleteResponse(BaseModel):
    deleted: int
