# backend/routes/products.py
import math
from typing import Optional, List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from database import get_db
from models.product import Product
import schemas.product as product_schemas

router = APIRouter(prefix="/products", tags=["Products"])

DEFAULT_LIMIT = 16
SEARCH_LIMIT = 20
RELATED_LIMIT = 8

# Subcategories shown under each storefront section
SECTION_SUBCATEGORIES = {
    "men": ["Shirts", "Pants", "Hoodies", "Jeans"],
    "women": ["Dresses", "Tops", "Jeans", "Skirts"],
    "kids": ["Shirts", "Pants", "Toys", "Hoodies"],
}

SORT_MAP = {
    "price_asc": Product.price.asc(),
    "low-high": Product.price.asc(),
    "price_desc": Product.price.desc(),
    "high-low": Product.price.desc(),
    "name_asc": func.lower(Product.name).asc(),
    "name_desc": func.lower(Product.name).desc(),
    "newest": Product.id.desc(),
}

# ---- HELPERS ----
def _csv(value: Optional[str]) -> List[str]:
    return product_schemas.split_list(value)

def _in_nocase(column, values: List[str]):
    return func.lower(column).in_([v.lower() for v in values])


# =========================
# GLOBAL SEARCH
# =========================
@router.get("/search", response_model=List[product_schemas.ProductSearchHit])
def search_products(
    query: str = Query(""),
    section: str = Query("all"),
    db: Session = Depends(get_db),
):
    """Name/description search used by the navbar search box."""
    query = query.strip()
    if not query:
        return []

    like = f"%{query}%"
    q = db.query(Product).filter(or_(Product.name.ilike(like), Product.description.ilike(like)))

    section = (section or "all").lower()
    if section in SECTION_SUBCATEGORIES:
        q = q.filter(_in_nocase(Product.subcategory, SECTION_SUBCATEGORIES[section]))

    rows = q.order_by(func.lower(Product.name).asc()).limit(SEARCH_LIMIT).all()

    hits = []
    for p in rows:
        images = product_schemas.split_list(p.images)
        hits.append(product_schemas.ProductSearchHit(
            id=p.id,
            name=p.name,
            category=p.category or "Uncategorized",
            subcategory=p.subcategory or "General",
            section=section,
            image=images[0] if images else None,
        ))
    return hits


# =========================
# PRODUCT LIST
# =========================
@router.get("", response_model=product_schemas.ProductListPage)
def list_products(
    category: Optional[str] = Query(None),
    subcategory: Optional[str] = Query(None),
    colors: Optional[str] = Query(None),
    min_price: Optional[float] = Query(None, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    min_price_camel: Optional[float] = Query(None, alias="minPrice", ge=0),
    max_price_camel: Optional[float] = Query(None, alias="maxPrice", ge=0),
    sort: Optional[str] = Query(None),
    page: Optional[int] = Query(None),
    limit: Optional[str] = Query(None, description="Page size or 'all'"),
    search: Optional[str] = Query(None),
    q: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    query = db.query(Product)

    categories = _csv(category)
    if categories:
        query = query.filter(_in_nocase(Product.category, categories))

    subcategories = _csv(subcategory)
    if subcategories:
        query = query.filter(_in_nocase(Product.subcategory, subcategories))

    color_list = _csv(colors)
    if color_list:
        query = query.filter(_in_nocase(Product.color, color_list))

    # Storefront sends camelCase, other clients snake_case
    if min_price is None:
        min_price = min_price_camel
    if max_price is None:
        max_price = max_price_camel

    if min_price is not None:
        query = query.filter(Product.price >= min_price)
    if max_price is not None:
        query = query.filter(Product.price <= max_price)

    search_query = (search or q or "").strip()
    if search_query:
        like = f"%{search_query}%"
        query = query.filter(or_(Product.name.ilike(like), Product.description.ilike(like)))

    total = query.count()

    # Pagination: defaults when neither page nor limit is given, "all" returns everything
    if page is None and limit is None:
        final_limit, final_page = DEFAULT_LIMIT, 1
    elif limit is not None and limit.lower() == "all":
        final_limit, final_page = total, 1
    else:
        try:
            parsed_limit = int(limit) if limit is not None else DEFAULT_LIMIT
        except ValueError:
            raise HTTPException(status_code=400, detail="limit must be an integer or 'all'")
        final_limit = parsed_limit if parsed_limit > 0 else DEFAULT_LIMIT
        final_page = page if page and page > 0 else 1

    pages = math.ceil(total / final_limit) if final_limit > 0 else 1

    order_by = SORT_MAP.get((sort or "").lower(), Product.id.desc())
    rows = (
        query.order_by(order_by)
        .offset((final_page - 1) * final_limit)
        .limit(final_limit)
        .all()
    )

    return {
        "meta": {"total": total, "page": final_page, "pages": pages, "limit": final_limit},
        "data": [product_schemas.ProductOut.model_validate(p) for p in rows],
    }


# =========================
# RELATED PRODUCTS
# =========================
@router.get("/related/{product_id}", response_model=List[product_schemas.RelatedProduct])
def related_products(product_id: int, db: Session = Depends(get_db)):
    product = db.get(Product, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    rows = (
        db.query(Product)
        .filter(
            Product.category == product.category,
            Product.subcategory == product.subcategory,
            Product.id != product.id,
        )
        .order_by(func.random())
        .limit(RELATED_LIMIT)
        .all()
    )
    return rows


# =========================
# SINGLE PRODUCT
# =========================
@router.get("/{product_id}", response_model=product_schemas.ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    product = db.get(Product, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
