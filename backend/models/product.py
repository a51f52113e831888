# backend/models/product.py
from sqlalchemy import Column, Integer, String, Float, DateTime, CheckConstraint, func
from database import Base

# Catalogue entry shown in the storefront.
# Images and sizes are stored as comma-joined lists.
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    category = Column(String, index=True)
    subcategory = Column(String, index=True)

    price = Column(Float, CheckConstraint("price >= 0"), nullable=False)
    original_price = Column(Float, nullable=True)

    images = Column(String, nullable=True)
    rating = Column(Float, nullable=True)
    sizes = Column(String, nullable=True)
    color = Column(String, nullable=True)
    description = Column(String, nullable=True)

    # NULL stock means the product is not stock-tracked
    stock = Column(Integer, CheckConstraint("stock >= 0"), nullable=True)
    sold = Column(Integer, nullable=False, default=0)

    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
