from decimal import Decimal
from sqlalchemy.orm import Session
from werkzeug.security import generate_password_hash
from store_api.models.database import Category, Product, User
import logging

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "Password123"

CATEGORIES = [
    ("Electronics", "Electronic devices and gadgets"),
    ("Clothing", "Fashion and apparel"),
    ("Books", "Books and magazines"),
    ("Home & Garden", "Home improvement and garden supplies"),
    ("Sports", "Sports equipment and accessories"),
]

# (name, description, price, stock, category name)
PRODUCTS = [
    ("Laptop HP ProBook", "High-performance laptop with 16GB RAM and 512GB SSD", "899.99", 15, "Electronics"),
    ("Wireless Mouse", "Ergonomic wireless mouse with USB receiver", "29.99", 50, "Electronics"),
    ("USB-C Hub", "7-in-1 USB-C hub with HDMI and card reader", "45.99", 30, "Electronics"),
    ("Bluetooth Headphones", "Noise-cancelling wireless headphones", "149.99", 25, "Electronics"),
    ("Cotton T-Shirt", "100% cotton, available in multiple colors", "19.99", 100, "Clothing"),
    ("Denim Jeans", "Classic fit denim jeans", "49.99", 60, "Clothing"),
    ("Winter Jacket", "Warm and waterproof winter jacket", "129.99", 20, "Clothing"),
    ("The Great Gatsby", "Classic American novel by F. Scott Fitzgerald", "14.99", 40, "Books"),
    ("Programming in Python", "Comprehensive guide to Python programming", "59.99", 25, "Books"),
    ("Cookbook: Italian Cuisine", "Authentic Italian recipes", "24.99", 35, "Books"),
    ("LED Desk Lamp", "Adjustable LED desk lamp with USB port", "34.99", 45, "Home & Garden"),
    ("Garden Tool Set", "5-piece garden tool set with carrying case", "39.99", 20, "Home & Garden"),
    ("Yoga Mat", "Non-slip exercise yoga mat", "29.99", 50, "Sports"),
    ("Dumbbell Set", "Adjustable dumbbell set 5-25kg", "89.99", 15, "Sports"),
    ("Running Shoes", "Professional running shoes with cushioned sole", "79.99", 40, "Sports"),
]

# (first name, last name, email, phone, address)
USERS = [
    ("John", "Doe", "john.doe@example.com", "+1-555-0101", "123 Main St, New York, NY 10001"),
    ("Jane", "Smith", "jane.smith@example.com", "+1-555-0102", "456 Oak Ave, Los Angeles, CA 90001"),
    ("Mike", "Johnson", "mike.johnson@example.com", "+1-555-0103", "789 Pine Rd, Chicago, IL 60601"),
    ("Sarah", "Williams", "sarah.williams@example.com", "+1-555-0104", "321 Elm St, Houston, TX 77001"),
    ("David", "Brown", "david.brown@example.com", "+1-555-0105", "654 Maple Dr, Phoenix, AZ 85001"),
]


def seed_database(db: Session) -> bool:
    """Insert the demo catalog and users. Returns False if data already exists."""
    if db.query(Category.id).first() is not None:
        logger.info("Database already seeded, skipping")
        return False

    categories = {name: Category(name=name, description=description) for name, description in CATEGORIES}
    db.add_all(categories.values())

    db.add_all(
        Product(
            name=name,
            description=description,
            price=Decimal(price),
            stock=stock,
            category=categories[category_name],
        )
        for name, description, price, stock, category_name in PRODUCTS
    )

    password_hash = generate_password_hash(DEMO_PASSWORD)
    db.add_all(
        User(
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=phone,
            address=address,
            password_hash=password_hash,
        )
        for first_name, last_name, email, phone, address in USERS
    )

    db.commit()
    logger.info(f"Seeded {len(CATEGORIES)} categories, {len(PRODUCTS)} products and {len(USERS)} users")
    return True
