# shopfront/data/seed.py
from shopfront.data.database import SessionLocal
from shopfront.data.models import ItemModel

CATALOG = [
    {"title": "Keyboard", "description": "Mechanical keyboard", "price": 19999},
    {"title": "Mouse", "description": "Wireless mouse", "price": 4950},
    {"title": "Monitor", "description": "27 inch monitor", "price": 89900},
]


def seed(db=None) -> int:
    """Dodaje przykladowy katalog tylko gdy tabela items jest pusta."""
    own_session = db is None
    db = db or SessionLocal()
    try:
        if db.query(ItemModel).first():
            return 0
        db.add_all(ItemModel(**data) for data in CATALOG)
        db.commit()
        return len(CATALOG)
    finally:
        if own_session:
            db.close()


if __name__ == "__main__":
    seed()
