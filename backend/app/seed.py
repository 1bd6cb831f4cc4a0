"""
Seed script for the default catalog categories.
"""

from typing import Optional

from sqlalchemy.orm import Session

from app.database import SessionLocal, init_db
from app.services.category_store import CategoryStore


# name -> {first-level name -> [second-level names]}
DEFAULT_CATALOG = {
    "Electronics": {
        "Laptops": ["Gaming Laptops", "Ultrabooks"],
        "Phones": ["Smartphones", "Feature Phones"],
        "Audio": ["Headphones", "Speakers"],
    },
    "Home & Kitchen": {
        "Appliances": ["Coffee Makers", "Blenders"],
        "Furniture": ["Chairs", "Desks"],
    },
    "Books": {
        "Fiction": [],
        "Non-Fiction": ["Biographies", "Science"],
    },
    "Sports & Outdoors": {
        "Camping": ["Tents", "Sleeping Bags"],
        "Fitness": [],
    },
}


def seed_categories(db: Optional[Session] = None) -> int:
    """
    Seed default categories into the database.

    Returns the number of categories created (0 when the table already has rows).
    """
    owns_session = db is None
    if owns_session:
        init_db()
        db = SessionLocal()

    try:
        store = CategoryStore(db)

        existing_count = len(store.get_all())
        if existing_count > 0:
            print(f"Categories already seeded ({existing_count} categories exist)")
            return 0

        created = 0
        for root_name, subcategories in DEFAULT_CATALOG.items():
            root = store.create(root_name)
            created += 1
            for first_name, second_names in subcategories.items():
                first = store.create(first_name, root.id)
                created += 1
                for second_name in second_names:
                    store.create(second_name, first.id)
                    created += 1

        print(f"Successfully seeded {len(DEFAULT_CATALOG)} root categories ({created} total)")
        return created

    finally:
        if owns_session:
            db.close()


if __name__ == "__main__":
    seed_categories()
