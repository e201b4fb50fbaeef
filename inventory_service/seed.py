"""Reset the database to a known demo state.

    python -m inventory_service.seed            # demo users and items
    python -m inventory_service.seed --fake 50  # plus 50 random items for the admin
"""
import argparse
import random
from decimal import Decimal

from faker import Faker
from sqlalchemy.orm import Session

from shared.core.database import Base, SessionLocal, engine
from shared.models.users import Users, hash_password
from inventory_service.app.enum.inventory_enum import InventoryCategory
from inventory_service.app.models.inventory_items import InventoryItem
from inventory_service.app.services.inventory_service import InventoryService

# Create tables
Base.metadata.create_all(bind=engine)

fake = Faker()

DEMO_USERS = [
    {"name": "Admin User", "email": "admin@stockwise.com",
     "password": "admin123", "role": "admin"},
    {"name": "John Doe", "email": "john@example.com",
     "password": "password123", "role": "user"},
]

DEMO_ITEMS = [
    ("MacBook Pro 16\"", "High-performance laptop with M2 chip", "Electronics", 25, "2499.99", 5),
    ("Office Desk", "Adjustable standing desk", "Furniture", 15, "599.99", 3),
    ("Wireless Mouse", "Ergonomic wireless mouse", "Electronics", 100, "49.99", 20),
    ("Office Chair", "Ergonomic office chair with lumbar support", "Furniture", 8, "299.99", 5),
    ("Business Shirt", "Professional cotton shirt", "Clothing", 50, "39.99", 10),
    ("Python Programming Book", "Learn Python in 30 days", "Books", 30, "29.99", 10),
    ("USB-C Cable", "2m USB-C charging cable", "Electronics", 5, "19.99", 15),
    ("Notebook", "A5 lined notebook - 200 pages", "Other", 75, "9.99", 20),
]


def fake_item() -> dict:
    return {
        "name": fake.catch_phrase()[:100],
        "description": fake.sentence(nb_words=8),
        "category": random.choice(InventoryCategory.values()),
        "quantity": random.randint(0, 120),
        "price": Decimal(str(round(random.uniform(1, 1500), 2))),
        "low_stock_threshold": random.choice([5, 10, 15, 20]),
    }


def seed_data(fake_count: int = 0):
    db: Session = SessionLocal()
    try:
        db.query(InventoryItem).delete()
        db.query(Users).delete()
        db.commit()
        print("Cleared existing data...")

        users = []
        for data in DEMO_USERS:
            user = Users(
                name=data["name"],
                email=data["email"],
                password=hash_password(data["password"]),
                role=data["role"],
            )
            db.add(user)
            users.append(user)
        db.commit()
        print(f"Created {len(users)} users")

        admin = users[0]
        service = InventoryService(db)
        for name, description, category, quantity, price, threshold in DEMO_ITEMS:
            service.create_item({
                "name": name,
                "description": description,
                "category": category,
                "quantity": quantity,
                "price": Decimal(price),
                "low_stock_threshold": threshold,
            }, admin.id)

        for _ in range(fake_count):
            service.create_item(fake_item(), admin.id)

        print(f"Created {len(DEMO_ITEMS) + fake_count} inventory items")
        print("Database seeded successfully!")
        print("\nTest credentials:")
        print("Admin: admin@stockwise.com / admin123")
        print("User: john@example.com / password123")

    except Exception as e:
        db.rollback()
        print("Error seeding data:", e)
        raise SystemExit(1)
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the StockWise database")
    parser.add_argument("--fake", type=int, default=0,
                        help="number of extra random items to create")
    args = parser.parse_args()
    seed_data(args.fake)
