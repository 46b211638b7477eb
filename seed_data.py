#!/usr/bin/env python
"""
Create the schema and load demo data into the configured database.

Usage: DATABASE_URL=sqlite:///./store.db python seed_data.py
"""
from store_api.core.config import settings
from store_api.core.database import SessionLocal, engine
from store_api.core.log_config import configure_logging
from store_api.core.seed import seed_database
from store_api.models.database import Base


def main():
    configure_logging(settings.log_level)
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        seed_database(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
