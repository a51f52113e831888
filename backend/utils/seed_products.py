# backend/utils/seed_products.py
from sqlalchemy.orm import Session

from database import SessionLocal, init_db
from models.product import Product

# Storefront catalogue used for local development
CATALOG = [
    {
        "name": "Men's Casual Cotton Shirt",
        "category": "Men",
        "subcategory": "Shirts",
        "price": 1299,
        "original_price": 1999,
        "images": ",".join([
            "https://images.unsplash.com/photo-1593032465171-d3be6b65b7c7",
            "https://images.unsplash.com/photo-1589391886645-d51941baf7b3",
        ]),
        "rating": 4.5,
        "sizes": "S,M,L,XL",
        "color": "Blue",
        "description": "A comfortable casual cotton shirt perfect for everyday wear.",
        "stock": 50,
    },
    {
        "name": "Men's Slim Fit White Shirt",
        "category": "Men",
        "subcategory": "Shirts",
        "price": 1499,
        "original_price": 2299,
        "images": ",".join([
            "https://images.unsplash.com/photo-1562157873-818bc0726f68",
            "https://images.unsplash.com/photo-1581089781785-603411fa81e5",
        ]),
        "rating": 4.2,
        "sizes": "M,L,XL",
        "color": "White",
        "description": "Slim fit white shirt made from premium cotton fabric.",
        "stock": 40,
    },
    {
        "name": "Men's Chino Pants",
        "category": "Men",
        "subcategory": "Pants",
        "price": 1599,
        "original_price": 2499,
        "images": ",".join([
            "https://images.unsplash.com/photo-1602810318383-e3f4d3e1b9aa",
            "https://images.unsplash.com/photo-1512436991641-6745cdb1723f",
        ]),
        "rating": 4.3,
        "sizes": "30,32,34,36",
        "color": "Beige",
        "description": "Stylish chino pants for semi-formal and casual occasions.",
        "stock": 35,
    },
    {
        "name": "Men's Formal Black Pants",
        "category": "Men",
        "subcategory": "Pants",
        "price": 1899,
        "original_price": 2699,
        "images": ",".join([
            "https://images.unsplash.com/photo-1602810318123-9e95f9e2c1ad",
            "https://images.unsplash.com/photo-1521572163474-6864f9cf17ab",
        ]),
        "rating": 4.6,
        "sizes": "30,32,34,36,38",
        "color": "Black",
        "description": "Perfectly tailored black formal pants for office wear.",
        "stock": 28,
    },
    {
        "name": "Men's Blue Slim Fit Jeans",
        "category": "Men",
        "subcategory": "Jeans",
        "price": 1799,
        "original_price": 2599,
        "images": ",".join([
            "https://images.unsplash.com/photo-1503342217505-b0a15ec3261c",
            "https://images.unsplash.com/photo-1583001529352-c1e8d4f3e0a1",
        ]),
        "rating": 4.4,
        "sizes": "30,32,34,36",
        "color": "Blue",
        "description": "Classic slim fit blue jeans made from stretchable denim.",
        "stock": 45,
    },
    {
        "name": "Men's Distressed Jeans",
        "category": "Men",
        "subcategory": "Jeans",
        "price": 1999,
        "original_price": 2999,
        "images": ",".join([
            "https://images.unsplash.com/photo-1594633312681-1250a1e3f36b",
            "https://images.unsplash.com/photo-1503341455253-b2e723bb3dbb",
        ]),
        "rating": 4.1,
        "sizes": "30,32,34,36",
        "color": "Light Blue",
        "description": "Trendy distressed jeans for a stylish casual look.",
        "stock": 30,
    },
    {
        "name": "Women's Oversized Hoodie",
        "category": "Women",
        "subcategory": "Hoodies",
        "price": 1699,
        "original_price": 2399,
        "images": ",".join([
            "https://images.unsplash.com/photo-1614285372440-26d7c8c94fb4",
            "https://images.unsplash.com/photo-1600185365483-26f963cfb9fc",
        ]),
        "rating": 4.7,
        "sizes": "S,M,L",
        "color": "Pink",
        "description": "Cozy oversized hoodie with a soft inner lining.",
        "stock": 25,
    },
    {
        "name": "Women's Black Zipper Hoodie",
        "category": "Women",
        "subcategory": "Hoodies",
        "price": 1599,
        "original_price": 2299,
        "images": ",".join([
            "https://images.unsplash.com/photo-1603252109303-2751441dd157",
            "https://images.unsplash.com/photo-1581089781785-603411fa81e5",
        ]),
        "rating": 4.5,
        "sizes": "S,M,L,XL",
        "color": "Black",
        "description": "Classic black hoodie with zipper closure and pockets.",
        "stock": 20,
    },
    {
        "name": "Women's Floral Print Kurti",
        "category": "Women",
        "subcategory": "Kurtis",
        "price": 1299,
        "original_price": 1899,
        "images": ",".join([
            "https://images.unsplash.com/photo-1612178995402-e4f97b6e5e7f",
            "https://images.unsplash.com/photo-1600185365483-26f963cfb9fc",
        ]),
        "rating": 4.3,
        "sizes": "S,M,L,XL",
        "color": "Red",
        "description": "Elegant floral print kurti for casual and festive wear.",
        "stock": 35,
    },
    {
        "name": "Women's Cotton Long Kurti",
        "category": "Women",
        "subcategory": "Kurtis",
        "price": 1499,
        "original_price": 2099,
        "images": ",".join([
            "https://images.unsplash.com/photo-1614285372440-26d7c8c94fb4",
            "https://images.unsplash.com/photo-1593032465171-d3be6b65b7c7",
        ]),
        "rating": 4.4,
        "sizes": "M,L,XL",
        "color": "Blue",
        "description": "Comfortable long cotton kurti with minimal design.",
        "stock": 27,
    },
    {
        "name": "Women's Pleated Skirt",
        "category": "Women",
        "subcategory": "Skirts",
        "price": 1199,
        "original_price": 1699,
        "images": ",".join([
            "https://images.unsplash.com/photo-1503342217505-b0a15ec3261c",
            "https://images.unsplash.com/photo-1581089781785-603411fa81e5",
        ]),
        "rating": 4.6,
        "sizes": "S,M,L",
        "color": "White",
        "description": "Stylish pleated skirt perfect for summer outings.",
        "stock": 22,
    },
    {
        "name": "Women's Denim Skirt",
        "category": "Women",
        "subcategory": "Skirts",
        "price": 1399,
        "original_price": 1999,
        "images": ",".join([
            "https://images.unsplash.com/photo-1594633312681-1250a1e3f36b",
            "https://images.unsplash.com/photo-1503341455253-b2e723bb3dbb",
        ]),
        "rating": 4.2,
        "sizes": "S,M,L,XL",
        "color": "Blue",
        "description": "Casual denim skirt with a trendy design.",
        "stock": 18,
    },
    {
        "name": "Kids' Cotton Shirt",
        "category": "Kids",
        "subcategory": "Shirts",
        "price": 799,
        "original_price": 1199,
        "images": ",".join([
            "https://images.unsplash.com/photo-1589391886645-d51941baf7b3",
            "https://images.unsplash.com/photo-1614285372440-26d7c8c94fb4",
        ]),
        "rating": 4.5,
        "sizes": "2-4Y,4-6Y,6-8Y",
        "color": "Yellow",
        "description": "Soft cotton shirt for kids with fun prints.",
        "stock": 40,
    },
    {
        "name": "Kids' Formal Shirt",
        "category": "Kids",
        "subcategory": "Shirts",
        "price": 899,
        "original_price": 1399,
        "images": ",".join([
            "https://images.unsplash.com/photo-1562157873-818bc0726f68",
            "https://images.unsplash.com/photo-1581089781785-603411fa81e5",
        ]),
        "rating": 4.3,
        "sizes": "4-6Y,6-8Y,8-10Y",
        "color": "White",
        "description": "Formal shirt for kids suitable for special occasions.",
        "stock": 32,
    },
    {
        "name": "Kids' Jogger Pants",
        "category": "Kids",
        "subcategory": "Pants",
        "price": 899,
        "original_price": 1299,
        "images": ",".join([
            "https://images.unsplash.com/photo-1602810318383-e3f4d3e1b9aa",
            "https://images.unsplash.com/photo-1512436991641-6745cdb1723f",
        ]),
        "rating": 4.4,
        "sizes": "2-4Y,4-6Y,6-8Y",
        "color": "Gray",
        "description": "Comfortable jogger pants for active kids.",
        "stock": 38,
    },
    {
        "name": "Kids' Blue Denim Jeans",
        "category": "Kids",
        "subcategory": "Jeans",
        "price": 999,
        "original_price": 1499,
        "images": ",".join([
            "https://images.unsplash.com/photo-1503342217505-b0a15ec3261c",
            "https://images.unsplash.com/photo-1583001529352-c1e8d4f3e0a1",
        ]),
        "rating": 4.5,
        "sizes": "4-6Y,6-8Y,8-10Y",
        "color": "Blue",
        "description": "Classic blue denim jeans for kids with soft stretch.",
        "stock": 30,
    },
]


def seed_products(db: Session) -> int:
    """Replaces the products table with CATALOG. Returns the number of inserted rows."""
    print("🗑 Clearing old products...")
    db.query(Product).delete()

    print("📦 Inserting products...")
    for entry in CATALOG:
        db.add(Product(**entry))
    db.commit()

    print(f"✅ Seeded {len(CATALOG)} products successfully!")
    return len(CATALOG)


if __name__ == "__main__":
    init_db()
    session = SessionLocal()
    try:
        seed_products(session)
    finally:
        session.close()
