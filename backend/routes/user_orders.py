# backend/routes/user_orders.py
from typing import List, Literal, Optional
from fastapi import APIRouter, Depends, HTTPException, Request, Query, Response
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from database import get_db
from utils.tokenJWT import get_current_user
from utils.audit import write_log, client_ip
from utils.pdf import generate_order_invoice_pdf
from models.users import User
from models.order import Order, OrderItem
from schemas.order import OrderHistoryRow, ReorderResponse, MessageResponse

router = APIRouter(prefix="/user/orders", tags=["Order history"])

CANCELLABLE_STATUSES = ("pending", "confirmed")

SORT_FIELDS = {
    "created_at": Order.created_at,
    "status": Order.status,
    "total_amount": Order.total_amount,
}

def _history_row(order: Order) -> OrderHistoryRow:
    names = [it.product.name for it in order.items if it.product]
    return OrderHistoryRow(
        id=order.id,
        status=order.status,
        total_amount=order.total_amount,
        created_at=order.created_at,
        products=", ".join(names),
    )

def _owned_order(db: Session, order_id: int, user_id: int) -> Order:
    order = db.query(Order).options(
        joinedload(Order.items).joinedload(OrderItem.product)
    ).filter(Order.id == order_id, Order.user_id == user_id).first()
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order

def _history_query(db: Session, user_id: int):
    # Orders without any line items are not shown in the history
    return db.query(Order).options(
        joinedload(Order.items).joinedload(OrderItem.product)
    ).filter(Order.user_id == user_id, Order.items.any())


# Paginated order history with status filter and sorting
@router.get("", response_model=List[OrderHistoryRow])
def list_order_history(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: Optional[str] = Query(None),
    sort_by: str = Query("created_at"),
    sort_dir: Literal["asc", "desc", "ASC", "DESC"] = "desc",
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    q = _history_query(db, current_user.id)

    if status and status.strip():
        q = q.filter(func.lower(Order.status) == status.strip().lower())

    column = SORT_FIELDS.get(sort_by, Order.created_at)
    ordering = column.asc() if sort_dir.lower() == "asc" else column.desc()

    rows = q.order_by(ordering, Order.id.desc()).offset((page - 1) * limit).limit(limit).all()
    return [_history_row(o) for o in rows]


@router.put("/{order_id}/cancel", response_model=MessageResponse)
def cancel_order(
    order_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    updated = db.query(Order).filter(
        Order.id == order_id,
        Order.user_id == current_user.id,
        func.lower(Order.status).in_(CANCELLABLE_STATUSES),
    ).update({Order.status: "cancelled"}, synchronize_session=False)
    db.commit()

    if updated == 0:
        raise HTTPException(status_code=400, detail="Order cannot be cancelled")

    write_log(db, user_id=current_user.id, action="ORDER_CANCEL", resource="orders", status="SUCCESS",
              ip=client_ip(request), meta={"order_id": order_id})
    return {"message": "Order cancelled successfully"}


# Place a new pending order with the same items as an earlier one
@router.post("/{order_id}/reorder", response_model=ReorderResponse)
def reorder(
    order_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    old_order = _owned_order(db, order_id, current_user.id)
    if not old_order.items:
        raise HTTPException(status_code=400, detail="No items to reorder")

    new_order = Order(
        user_id=current_user.id,
        status="pending",
        total_amount=old_order.total_amount,
        payment_method=old_order.payment_method,
        shipping_address=old_order.shipping_address,
    )
    new_order.items = [
        OrderItem(product_id=it.product_id, quantity=it.quantity, unit_price=it.unit_price)
        for it in old_order.items
    ]
    db.add(new_order)
    db.commit()
    db.refresh(new_order)

    write_log(db, user_id=current_user.id, action="ORDER_REORDER", resource="orders", status="SUCCESS",
              ip=client_ip(request), meta={"order_id": order_id, "new_order_id": new_order.id})

    rows = _history_query(db, current_user.id).order_by(Order.created_at.desc(), Order.id.desc()).all()
    return {
        "message": "Reorder placed successfully",
        "new_order_id": new_order.id,
        "orders": [_history_row(o) for o in rows],
    }


# Download a PDF invoice for an order
@router.get("/{order_id}/invoice")
def download_invoice(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    order = _owned_order(db, order_id, current_user.id)
    content = generate_order_invoice_pdf(order)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename=invoice-{order.id}.pdf"},
    )
