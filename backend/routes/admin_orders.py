# backend/routes/admin_orders.py
import math
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request, Query
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from database import get_db
from utils.tokenJWT import admin_required
from utils.audit import write_log, client_ip
from models.users import User
from models.order import Order, OrderItem
from schemas.order import (
    AdminOrdersPage, AdminOrderRow, AdminOrderDetail, OrderOut, OrderStatusPatch,
    BulkStatusUpdate, BulkStatusResponse,
)
from routes.orders import order_to_out

router = APIRouter(prefix="/admin/orders", tags=["Admin"])

DEFAULT_LIMIT = 50
FINAL_STATUSES = {"cancelled", "delivered"}


# Retrieve all orders with filtering and pagination (Admin only)
@router.get("", response_model=AdminOrdersPage)
def list_orders(
    status: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="User name or numeric user id"),
    order_id: Optional[int] = Query(None, alias="orderId"),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=500),
    db: Session = Depends(get_db),
    admin: User = Depends(admin_required)
):
    query = db.query(Order).join(User, User.id == Order.user_id)

    if order_id is not None:
        query = query.filter(Order.id == order_id)
    elif search and search.strip():
        term = search.strip()
        like = f"%{term.lower()}%"
        if term.isdigit():
            query = query.filter(or_(User.id == int(term), func.lower(User.name).like(like)))
        else:
            query = query.filter(func.lower(User.name).like(like))

    if status:
        query = query.filter(func.lower(Order.status) == status.lower())

    total = query.count()
    rows = (
        query.options(joinedload(Order.items), joinedload(Order.user))
        .order_by(Order.created_at.desc(), Order.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    items = [
        AdminOrderRow(
            id=o.id,
            user_id=o.user_id,
            user_name=o.user.name if o.user else None,
            user_phone=o.user.phone if o.user else None,
            status=o.status,
            total_amount=o.total_amount,
            payment_method=o.payment_method,
            created_at=o.created_at,
            items_count=len(o.items),
        )
        for o in rows
    ]
    return {"items": items, "total": total, "page": page, "pages": math.ceil(total / limit) or 1, "limit": limit}


# Manually update order status (Admin only)
@router.patch("/{order_id}/status", response_model=OrderOut)
def update_order_status(
    order_id: int,
    payload: OrderStatusPatch,
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(admin_required)
):
    order = db.query(Order).filter(Order.id == order_id).first()
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")

    old_status, new_status = order.status, payload.status.strip().lower()
    if (old_status or "").lower() in FINAL_STATUSES:
        raise HTTPException(status_code=400, detail=f"Cannot change status from {old_status}")

    order.status = new_status
    db.commit()
    write_log(db, user_id=admin.id, action="ORDER_STATUS_CHANGE", resource="orders", status="SUCCESS",
              ip=client_ip(request), meta={"order_id": order.id, "old": old_status, "new": new_status})

    order_with_relations = db.query(Order).options(
        joinedload(Order.items).joinedload(OrderItem.product)
    ).filter(Order.id == order.id).first()
    return order_to_out(order_with_relations)


# Set one status on many orders; orders in a final status are left alone (Admin only)
@router.put("/bulk-update", response_model=BulkStatusResponse)
def bulk_update_status(
    payload: BulkStatusUpdate,
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(admin_required)
):
    new_status = payload.status.strip().lower()
    order_ids = sorted(set(payload.order_ids))

    rows = db.query(Order.id, Order.status).filter(Order.id.in_(order_ids)).all()
    locked = [r.id for r in rows if (r.status or "").lower() in FINAL_STATUSES]
    to_update = [r.id for r in rows if r.id not in locked]

    updated = 0
    if to_update:
        updated = db.query(Order).filter(Order.id.in_(to_update)).update(
            {Order.status: new_status}, synchronize_session=False
        )
    db.commit()

    write_log(db, user_id=admin.id, action="ORDER_STATUS_CHANGE", resource="orders", status="SUCCESS",
              ip=client_ip(request), meta={"order_ids": to_update, "new": new_status, "bulk": True})
    return BulkStatusResponse(message="Bulk status update complete", updated_rows=updated, skipped=locked)


# Single order with items and customer details (Admin only)
@router.get("/{order_id}", response_model=AdminOrderDetail)
def get_order_detail(
    order_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(admin_required)
):
    order = db.query(Order).options(
        joinedload(Order.items).joinedload(OrderItem.product), joinedload(Order.user)
    ).filter(Order.id == order_id).first()
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")

    user = order.user
    return AdminOrderDetail(
        **order_to_out(order).model_dump(),
        user_name=user.name if user else None,
        user_email=user.email if user else None,
        user_phone=user.phone if user else None,
    )
