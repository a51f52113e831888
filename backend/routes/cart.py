# backend/routes/cart.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session, joinedload
from database import get_db
from utils.tokenJWT import get_current_user
from utils.audit import write_log, client_ip
from models.users import User
from models.product import Product
from models.cart import CartItem
from schemas.cart import (
    CartAddItem, CartUpdateItem, CartItemOut,
    CartAddResponse, CartUpdateResponse, CartDeleteResponse,
)
from schemas.product import split_list

router = APIRouter(prefix="/cart", tags=["Cart"])

def _item_to_out(it: CartItem) -> CartItemOut:
    product = it.product
    return CartItemOut(
        cart_id=it.id,
        product_id=it.product_id,
        quantity=it.quantity,
        size=it.size,
        color=it.color,
        name=product.name,
        price=product.price,
        images=split_list(product.images),
        stock=product.stock,
    )

def _user_item(db: Session, item_id: int, user_id: int):
    return db.query(CartItem).filter(CartItem.id == item_id, CartItem.user_id == user_id).first()

# List the current user's cart lines with product details
@router.get("", response_model=List[CartItemOut])
def get_cart(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    rows = (
        db.query(CartItem)
        .options(joinedload(CartItem.product))
        .join(Product, CartItem.product_id == Product.id)
        .filter(CartItem.user_id == current_user.id)
        .order_by(CartItem.id)
        .all()
    )
    return [_item_to_out(it) for it in rows]

@router.post("", response_model=CartAddResponse)
def add_to_cart(
    payload: CartAddItem,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    product = db.get(Product, payload.product_id)
    if not product:
        raise HTTPException(status_code=404, detail=f"Product not found: {payload.product_id}")

    item = CartItem(
        user_id=current_user.id,
        product_id=product.id,
        quantity=payload.quantity,
        size=payload.size,
        color=payload.color,
    )
    db.add(item)
    db.commit()
    db.refresh(item)

    write_log(
        db,
        user_id=current_user.id,
        action="CART_ADD",
        resource="cart",
        status="SUCCESS",
        ip=client_ip(request),
        meta={"product_id": product.id, "quantity": payload.quantity},
    )
    return {"id": item.id}

@router.put("/{item_id}", response_model=CartUpdateResponse)
def update_cart_item(
    item_id: int,
    payload: CartUpdateItem,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    item = _user_item(db, item_id, current_user.id)
    if not item:
        return {"updated": 0}

    item.quantity = payload.quantity
    db.commit()

    write_log(
        db,
        user_id=current_user.id,
        action="CART_UPDATE",
        resource="cart",
        status="SUCCESS",
        ip=client_ip(request),
        meta={"item_id": item_id, "quantity": payload.quantity},
    )
    return {"updated": 1}

@router.delete("/{item_id}", response_model=CartDeleteResponse)
def delete_cart_item(
    item_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    item = _user_item(db, item_id, current_user.id)
    if not item:
        return {"deleted": 0}

    db.delete(item)
    db.commit()

    write_log(
        db,
        user_id=current_user.id,
        action="CART_DELETE",
        resource="cart",
        status="SUCCESS",
        ip=client_ip(request),
        meta={"item_id": item_id},
    )
    return {"deleted": 1}
