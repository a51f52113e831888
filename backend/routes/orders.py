# backend/routes/orders.py
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Request, Query
from sqlalchemy import update, or_, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload
import logging

from database import get_db
from utils.tokenJWT import get_current_user
from utils.audit import write_log, client_ip
from models.users import User
from models.product import Product
from models.cart import CartItem
from models.order import Order, OrderItem
from schemas.order import (
    OrderIntake, OrderIntakeResponse, PlaceOrderRequest, PlaceOrderResponse,
    OrderOut, OrderItemOut, OrderStatusOut,
)

router = APIRouter(prefix="/orders", tags=["Orders"])
logger = logging.getLogger(__name__)


class InsufficientStockError(Exception):
    def __init__(self, product_id: int):
        super().__init__(f"Insufficient stock when committing product {product_id}")
        self.product_id = product_id


# Map Order model to OrderOut schema
def order_to_out(order: Order) -> OrderOut:
    items: List[OrderItemOut] = []
    for it in order.items:
        items.append(OrderItemOut(
            id=it.id,
            product_id=it.product_id,
            product_name=it.product.name if it.product else None,
            product_images=it.product.images if it.product else None,
            quantity=it.quantity,
            unit_price=it.unit_price,
            line_total=round(it.quantity * it.unit_price, 2),
        ))
    return OrderOut(
        id=order.id,
        user_id=order.user_id,
        status=order.status,
        total_amount=round(order.total_amount or 0, 2),
        payment_method=order.payment_method,
        shipping_address=order.shipping_address,
        payment_details=order.payment_details,
        created_at=order.created_at,
        items=items,
    )

def _check_stock(product: Optional[Product], product_id: int, qty: int) -> Product:
    if not product:
        raise HTTPException(status_code=404, detail=f"Product not found: {product_id}")
    if product.stock is not None and product.stock < qty:
        raise HTTPException(status_code=400, detail=f"Insufficient stock for product {product_id}")
    return product

# Resolve buy-now items into (product, quantity, cart row id) lines
def _buy_now_lines(db: Session, payload: PlaceOrderRequest):
    if not payload.items:
        raise HTTPException(status_code=400, detail="No items provided for buy-now")

    lines = []
    for it in payload.items:
        product = _check_stock(db.get(Product, it.product_id), it.product_id, it.quantity)
        lines.append((product, it.quantity, None))
    return lines

# Resolve cart selections into lines, making sure every row belongs to the user
def _cart_lines(db: Session, payload: PlaceOrderRequest, user_id: int):
    if not payload.cart_items:
        raise HTTPException(status_code=400, detail="No cart items provided")

    lines = []
    seen_rows = set()
    for sel in payload.cart_items:
        user_rows = db.query(CartItem).filter(CartItem.user_id == user_id)
        if sel.id is not None:
            # Storefront sometimes sends the product id in `id`
            entry = user_rows.filter(CartItem.id == sel.id).first()
            if not entry:
                entry = user_rows.filter(CartItem.product_id == sel.id).first()
            ref = sel.id
        elif sel.product_id is not None:
            entry = user_rows.filter(CartItem.product_id == sel.product_id).first()
            ref = sel.product_id
        else:
            raise HTTPException(
                status_code=400,
                detail="cartItems must include either id (cart row id or product id) or product_id",
            )

        if not entry:
            raise HTTPException(status_code=400, detail=f"Cart item not found or not owned by user: {ref}")
        # A row selected twice (by row id and by product id) is ordered once
        if entry.id in seen_rows:
            continue
        seen_rows.add(entry.id)

        qty = sel.quantity or entry.quantity or 1
        product = _check_stock(db.get(Product, entry.product_id), entry.product_id, qty)
        lines.append((product, qty, entry.id))
    return lines

def _persist_order(db: Session, user_id: int, payload: PlaceOrderRequest, lines) -> Order:
    """
    Inserts the order with its items, decrements stock and removes consumed cart rows.
    Caller commits or rolls back.
    """
    total = sum(product.price * qty for product, qty, _ in lines)
    order = Order(
        user_id=user_id,
        status="pending",
        total_amount=round(total, 2),
        payment_method=payload.payment_method or "",
        shipping_address=payload.shipping_address or {},
        payment_details=payload.payment_details or {},
    )
    db.add(order)
    db.flush()

    for product, qty, _ in lines:
        db.add(OrderItem(order_id=order.id, product_id=product.id, quantity=qty, unit_price=product.price))

        # Conditional decrement keeps stock from going below zero under concurrent checkouts
        result = db.execute(
            update(Product)
            .where(Product.id == product.id, or_(Product.stock.is_(None), Product.stock >= qty))
            .values(stock=Product.stock - qty, sold=func.coalesce(Product.sold, 0) + qty)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise InsufficientStockError(product.id)

    cart_ids = [cart_id for _, _, cart_id in lines if cart_id is not None]
    if cart_ids:
        db.query(CartItem).filter(
            CartItem.id.in_(cart_ids), CartItem.user_id == user_id
        ).delete(synchronize_session=False)

    return order


# Order intake: accepts the checkout payload and echoes the order back
@router.post("", response_model=OrderIntakeResponse)
def intake_order(payload: OrderIntake):
    return {"message": "Order placed successfully", "order": payload.order}


# Create an order from the cart or a buy-now selection
@router.post("/place-order", response_model=PlaceOrderResponse)
def place_order(
    payload: PlaceOrderRequest,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if payload.buy_now:
        lines = _buy_now_lines(db, payload)
    else:
        lines = _cart_lines(db, payload, current_user.id)

    try:
        order = _persist_order(db, current_user.id, payload, lines)
        db.commit()
    except InsufficientStockError as e:
        db.rollback()
        logger.warning("Order rolled back: %s", e)
        write_log(db, user_id=current_user.id, action="ORDER_PLACE", resource="orders", status="FAIL",
                  ip=client_ip(request), meta={"product_id": e.product_id, "reason": "stock"})
        raise HTTPException(status_code=409, detail=f"Insufficient stock for product {e.product_id}")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Order insert error for user %s", current_user.id)
        raise HTTPException(status_code=500, detail="Could not place order")

    write_log(db, user_id=current_user.id, action="ORDER_PLACE", resource="orders", status="SUCCESS",
              ip=client_ip(request),
              meta={"order_id": order.id, "buy_now": payload.buy_now, "items": len(lines)})

    return PlaceOrderResponse(order_id=order.id)


# List the current user's orders with their items
@router.get("", response_model=List[OrderOut])
def list_my_orders(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    rows = db.query(Order).options(
        joinedload(Order.items).joinedload(OrderItem.product)
    ).filter(Order.user_id == current_user.id).order_by(Order.created_at.desc(), Order.id.desc()).all()
    return [order_to_out(o) for o in rows]


# Status lookup for several orders at once (?ids=1,2,3)
@router.get("/status", response_model=List[OrderStatusOut])
def order_statuses(
    ids: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    parsed = [int(part) for part in (ids or "").split(",") if part.strip().isdigit()]
    if not parsed:
        raise HTTPException(status_code=400, detail="No order IDs provided")

    rows = db.query(Order.id, Order.status).filter(
        Order.id.in_(parsed), Order.user_id == current_user.id
    ).order_by(Order.id).all()
    return [{"id": r.id, "status": r.status} for r in rows]


# Get details of a specific order
@router.get("/{order_id}", response_model=OrderOut)
def get_order_detail(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    o = db.query(Order).options(
        joinedload(Order.items).joinedload(OrderItem.product)
    ).filter(Order.id == order_id, Order.user_id == current_user.id).first()

    if not o:
        raise HTTPException(status_code=404, detail="Order not found")
    return order_to_out(o)
