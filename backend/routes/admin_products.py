# backend/routes/admin_products.py
import math
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Query
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import get_db
from utils.tokenJWT import admin_required
from utils.audit import write_log, client_ip
from models.users import User
from models.product import Product
from models.cart import CartItem
import schemas.product as product_schemas

router = APIRouter(prefix="/admin/products", tags=["Admin"])
logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20

ADMIN_SORT_MAP = {
    "newest": (Product.updated_at.desc(), Product.id.desc()),
    "price_asc": (Product.price.asc(), Product.id.asc()),
    "price_desc": (Product.price.desc(), Product.id.asc()),
    "best_selling": (func.coalesce(Product.sold, 0).desc(), Product.id.asc()),
    "low_stock": (Product.stock.asc(), Product.id.asc()),
    "out_of_stock": (Product.id.asc(),),
}


def _get_product_or_404(db: Session, product_id: int) -> Product:
    product = db.get(Product, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


# =========================
# ADMIN PRODUCT LIST
# =========================
@router.get("", response_model=product_schemas.AdminProductsPage)
def list_products(
    search: Optional[str] = Query(None, description="Matches name, category or subcategory"),
    sort: str = Query("newest"),
    low_stock_threshold: Optional[int] = Query(None, ge=0),
    page: int = Query(1, ge=1),
    limit: Optional[str] = Query(None, description="Page size or 'all'"),
    db: Session = Depends(get_db),
    admin: User = Depends(admin_required)
):
    query = db.query(Product)

    term = (search or "").strip()
    if term:
        like = f"%{term}%"
        query = query.filter(or_(
            Product.name.ilike(like), Product.category.ilike(like), Product.subcategory.ilike(like)
        ))

    sort = sort.strip().lower()
    if sort == "out_of_stock":
        query = query.filter(Product.stock == 0)
    elif sort == "low_stock" and low_stock_threshold is not None:
        query = query.filter(Product.stock <= low_stock_threshold)

    total = query.count()

    if limit is not None and limit.lower() == "all":
        final_limit, page = max(total, 1), 1
    else:
        try:
            final_limit = int(limit) if limit is not None else DEFAULT_LIMIT
        except ValueError:
            raise HTTPException(status_code=400, detail="limit must be an integer or 'all'")
        if final_limit < 1:
            final_limit = DEFAULT_LIMIT

    order_by = ADMIN_SORT_MAP.get(sort, ADMIN_SORT_MAP["newest"])
    rows = (
        query.order_by(*order_by)
        .offset((page - 1) * final_limit)
        .limit(final_limit)
        .all()
    )

    return {
        "data": [product_schemas.ProductOut.model_validate(p) for p in rows],
        "total": total,
        "page": page,
        "pages": math.ceil(total / final_limit) or 1,
        "limit": final_limit,
    }


# =========================
# CREATE PRODUCT
# =========================
@router.post("", response_model=product_schemas.ProductOut, status_code=201)
def add_product(
    payload: product_schemas.AdminProductCreate,
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(admin_required)
):
    data = payload.model_dump()
    data["name"] = data["name"].strip()
    data["category"] = data["category"].strip()

    product = Product(**data)
    db.add(product)
    db.commit()
    db.refresh(product)

    write_log(db, user_id=admin.id, action="PRODUCT_CREATE", resource="products", status="SUCCESS",
              ip=client_ip(request), meta={"id": product.id, "name": product.name})
    return product


# =========================
# UPDATE PRODUCT
# =========================
@router.put("/{product_id}", response_model=product_schemas.ProductOut)
def update_product(
    product_id: int,
    payload: product_schemas.AdminProductUpdate,
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(admin_required)
):
    product = _get_product_or_404(db, product_id)

    changes = payload.model_dump(exclude_unset=True)
    if changes.get("name") is None:
        changes.pop("name", None)
    if changes.get("price") is None:
        changes.pop("price", None)

    for key, value in changes.items():
        setattr(product, key, value.strip() if key in ("name", "category") and value else value)

    db.commit()
    db.refresh(product)

    write_log(db, user_id=admin.id, action="PRODUCT_UPDATE", resource="products", status="SUCCESS",
              ip=client_ip(request), meta={"id": product.id, "fields": sorted(changes)})
    return product


# =========================
# DELETE PRODUCT
# =========================
@router.delete("/{product_id}", response_model=product_schemas.ProductDeleteResponse)
def delete_product(
    product_id: int,
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(admin_required)
):
    product = _get_product_or_404(db, product_id)
    pid, pname = product.id, product.name

    # Cart lines pointing at the product go with it
    db.query(CartItem).filter(CartItem.product_id == pid).delete(synchronize_session=False)
    db.delete(product)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Product %s is referenced by orders and was not deleted", pid)
        raise HTTPException(status_code=409, detail="Product is referenced by existing orders")

    write_log(db, user_id=admin.id, action="PRODUCT_DELETE", resource="products", status="SUCCESS",
              ip=client_ip(request), meta={"id": pid, "name": pname})
    return {"id": pid, "message": f"Product '{pname}' deleted"}


# =========================
# SINGLE PRODUCT (ADMIN)
# =========================
@router.get("/{product_id}", response_model=product_schemas.ProductOut)
def get_product(
    product_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(admin_required)
):
    return _get_product_or_404(db, product_id)
