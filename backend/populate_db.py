# backend/populate_db.py
"""
Resets the development database to a small fixed dataset:
two users (admin + customer), three products and one pending order.

Run from the backend directory:  python populate_db.py
"""
from sqlalchemy.orm import Session

from database import SessionLocal, init_db
from models.users import User
from models.product import Product
from models.order import Order, OrderItem
from models.cart import CartItem
from models.log import Log
from utils.hashing import get_password_hash

FIXTURE_PASSWORD = "password123"
PLACEHOLDER_IMAGE = "https://via.placeholder.com/300"

USERS = [
    {"name": "Admin User", "email": "admin@example.com", "phone": "9999999999", "is_admin": True},
    {"name": "John Doe", "email": "john@example.com", "phone": "8888888888", "is_admin": False},
]

PRODUCTS = [
    {"name": "Nike Air Max", "category": "Men", "subcategory": "Shoes", "price": 7999, "original_price": 9999,
     "rating": 4.5, "sizes": "7,8,9", "color": "Black", "description": "Comfortable running shoes", "stock": 20},
    {"name": "Adidas Hoodie", "category": "Men", "subcategory": "Clothing", "price": 3499, "original_price": 3999,
     "rating": 4.7, "sizes": "M,L,XL", "color": "Grey", "description": "Warm winter hoodie", "stock": 15},
    {"name": "Puma T-Shirt", "category": "Women", "subcategory": "Clothing", "price": 1999, "original_price": 2499,
     "rating": 4.3, "sizes": "S,M,L", "color": "White", "description": "Cotton t-shirt", "stock": 30},
]


def clear_data(db: Session):
    # Children first so foreign keys stay satisfied
    for model in (OrderItem, Order, CartItem, Log, Product, User):
        db.query(model).delete()
    db.commit()


def seed(db: Session) -> dict:
    """Deletes existing rows and inserts the fixture dataset. Returns the new ids."""
    print("🗑 Clearing old data...")
    clear_data(db)

    print("👤 Inserting dummy users...")
    password_hash = get_password_hash(FIXTURE_PASSWORD)
    users = [User(password=password_hash, **u) for u in USERS]
    db.add_all(users)
    db.flush()
    customer = users[1]

    print("📦 Inserting dummy products...")
    products = [Product(images=PLACEHOLDER_IMAGE, **p) for p in PRODUCTS]
    db.add_all(products)
    db.flush()

    print("🛒 Inserting dummy orders...")
    ordered = products[:2]
    order = Order(
        user_id=customer.id,
        total_amount=sum(p.price for p in ordered),
        payment_method="COD",
        status="pending",
    )
    order.items = [OrderItem(product_id=p.id, quantity=1, unit_price=p.price) for p in ordered]
    db.add(order)
    db.commit()

    print("✅ Dummy data inserted successfully!")
    return {
        "user_ids": [u.id for u in users],
        "product_ids": [p.id for p in products],
        "order_id": order.id,
    }


def populate_database():
    """Main execution function to populate database."""
    init_db()
    session = SessionLocal()
    try:
        seed(session)
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


if __name__ == "__main__":
    populate_database()
