# File: tests/test_seed.py
from models.order import Order, OrderItem
from models.product import Product
from models.users import User
from populate_db import FIXTURE_PASSWORD, seed
from utils.hashing import verify_password
from utils.seed_products import CATALOG, seed_products


def test_seed_inserts_fixture_dataset(db_session):
    ids = seed(db_session)

    assert db_session.query(User).count() == 2
    assert db_session.query(Product).count() == 3
    order = db_session.get(Order, ids["order_id"])
    assert order.status == "pending"
    assert order.payment_method == "COD"
    assert len(order.items) == 2
    assert order.total_amount == sum(i.unit_price * i.quantity for i in order.items)

    admin = db_session.query(User).filter(User.email == "admin@example.com").one()
    assert admin.is_admin is True
    assert verify_password(FIXTURE_PASSWORD, admin.password)


def test_seed_replaces_previous_data(db_session, user, products):
    old_email = user.email

    seed(db_session)
    seed(db_session)

    assert db_session.query(User).count() == 2
    assert db_session.query(Product).count() == 3
    assert db_session.query(Order).count() == 1
    assert db_session.query(OrderItem).count() == 2
    assert db_session.query(User).filter(User.email == old_email).count() == 0


def test_seed_products_catalog(db_session, products):
    inserted = seed_products(db_session)

    assert inserted == len(CATALOG) == 16
    assert db_session.query(Product).count() == 16
    assert {p.category for p in db_session.query(Product)} == {"Men", "Women", "Kids"}
    shirt = db_session.query(Product).filter(Product.name == "Men's Casual Cotton Shirt").one()
    assert shirt.images.count(",") == 1
    assert shirt.sold == 0
