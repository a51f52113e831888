# File: tests/test_user_orders.py
from models.order import Order, OrderItem


def _order(db_session, user, products, status="pending", quantities=(1,)):
    order = Order(user_id=user.id, status=status, payment_method="COD",
                  total_amount=sum(p.price * q for p, q in zip(products, quantities)))
    order.items = [
        OrderItem(product_id=p.id, quantity=q, unit_price=p.price)
        for p, q in zip(products, quantities)
    ]
    db_session.add(order)
    db_session.commit()
    return order.id


def test_history_lists_orders_with_product_names(client, db_session, user, headers, products):
    order_id = _order(db_session, user, products[:2], quantities=(1, 2))

    resp = client.get("/user/orders", headers=headers)

    assert resp.status_code == 200
    rows = resp.json()
    assert len(rows) == 1
    assert rows[0]["id"] == order_id
    assert rows[0]["products"] == f"{products[0].name}, {products[1].name}"


def test_history_filters_and_sorts(client, db_session, user, headers, products):
    cheap = _order(db_session, user, [products[2]])
    pricey = _order(db_session, user, [products[0]], status="Delivered")
    cancelled = _order(db_session, user, [products[1]], status="cancelled")

    delivered = client.get("/user/orders", headers=headers, params={"status": "delivered"}).json()
    assert [r["id"] for r in delivered] == [pricey]

    by_total = client.get("/user/orders", headers=headers,
                          params={"sort_by": "total_amount", "sort_dir": "asc", "limit": 2}).json()
    assert [r["id"] for r in by_total] == [cheap, cancelled]


def test_history_is_scoped_to_user(client, db_session, make_user, auth_for, user, products):
    _order(db_session, user, [products[0]])
    other = make_user(email="other@example.com", name="Other")

    assert client.get("/user/orders", headers=auth_for(other)).json() == []


def test_cancel_pending_order(client, db_session, user, headers, products):
    order_id = _order(db_session, user, [products[0]])

    resp = client.put(f"/user/orders/{order_id}/cancel", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Order cancelled successfully"}

    again = client.put(f"/user/orders/{order_id}/cancel", headers=headers)
    assert again.status_code == 400
    assert again.json() == {"message": "Order cannot be cancelled"}

    db_session.expire_all()
    assert db_session.get(Order, order_id).status == "cancelled"


def test_cannot_cancel_shipped_order(client, db_session, user, headers, products):
    order_id = _order(db_session, user, [products[0]], status="shipped")

    resp = client.put(f"/user/orders/{order_id}/cancel", headers=headers)
    assert resp.status_code == 400


def test_reorder_copies_items(client, db_session, user, headers, products):
    order_id = _order(db_session, user, products[:2], status="delivered", quantities=(2, 1))

    resp = client.post(f"/user/orders/{order_id}/reorder", headers=headers)

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Reorder placed successfully"
    new_order = db_session.get(Order, body["new_order_id"])
    assert new_order.status == "pending"
    assert sorted((i.product_id, i.quantity) for i in new_order.items) == sorted(
        [(products[0].id, 2), (products[1].id, 1)]
    )
    assert {r["id"] for r in body["orders"]} == {order_id, new_order.id}


def test_reorder_unknown_order(client, headers):
    resp = client.post("/user/orders/999/reorder", headers=headers)
    assert resp.status_code == 404


def test_invoice_pdf(client, db_session, user, headers, products):
    order_id = _order(db_session, user, products[:2], quantities=(1, 1))

    resp = client.get(f"/user/orders/{order_id}/invoice", headers=headers)

    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert f"invoice-{order_id}.pdf" in resp.headers["content-disposition"]
    assert resp.content.startswith(b"%PDF")
