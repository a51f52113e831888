# backend/schemas/product.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime


def split_list(value) -> List[str]:
    """Turn a comma-joined column value into a clean list."""
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if str(v).strip()]
    return [v.strip() for v in str(value).split(",") if v.strip()]


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class ProductOut(ORMBase):
    id: int
    name: str
    category: Optional[str] = None
    subcategory: Optional[str] = None
    price: float
    original_price: Optional[float] = None
    images: List[str] = []
    rating: Optional[float] = None
    sizes: List[str] = []
    color: Optional[str] = None
    description: Optional[str] = None
    stock: Optional[int] = None
    sold: int = 0
    updated_at: Optional[datetime] = None

    @field_validator("images", "sizes", mode="before")
    @classmethod
    def _split(cls, v):
        return split_list(v)

    @field_validator("sold", mode="before")
    @classmethod
    def _zero_if_missing(cls, v):
        return v if v is not None else 0


class ProductListMeta(BaseModel):
    total: int
    page: int
    pages: int
    limit: int


# Paginated response for product listings
class ProductListPage(BaseModel):
    meta: ProductListMeta
    data: List[ProductOut]


# Lightweight hit returned by the global search box
class ProductSearchHit(BaseModel):
    id: int
    name: str
    category: str
    subcategory: str
    section: str
    image: Optional[str] = None


class RelatedProduct(ORMBase):
    id: int
    name: str
    category: Optional[str] = None
    subcategory: Optional[str] = None
    images: List[str] = []
    price: float
    rating: Optional[float] = None

    @field_validator("images", mode="before")
    @classmethod
    def _split(cls, v):
        return split_list(v)


def join_list(value):
    """Store list input as the comma-joined column format."""
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return ",".join(split_list(value))
    return str(value).strip()


# Admin product form; the dashboard sends camelCase (originalPrice)
class AdminProductBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    category: Optional[str] = None
    subcategory: Optional[str] = None
    original_price: Optional[float] = Field(default=None, ge=0)
    images: Optional[str] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    sizes: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None
    stock: Optional[int] = Field(default=None, ge=0)

    @field_validator("images", "sizes", mode="before")
    @classmethod
    def _join(cls, v):
        return join_list(v)


class AdminProductCreate(AdminProductBase):
    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    price: float = Field(ge=0)


# Only the fields sent are changed
class AdminProductUpdate(AdminProductBase):
    name: Optional[str] = Field(default=None, min_length=1)
    price: Optional[float] = Field(default=None, ge=0)


class AdminProductsPage(BaseModel):
    data: List[ProductOut]
    total: int
    page: int
    pages: int
    limit: int


class ProductDeleteResponse(BaseModel):
    id: int
    message: str
