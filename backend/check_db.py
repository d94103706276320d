"""Check database connectivity and list existing tables.

Usage: python check_db.py
"""
import sys

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import make_url

from config import settings
from database import SQLALCHEMY_DATABASE_URL, engine_options


def check_connection() -> int:
    url = make_url(SQLALCHEMY_DATABASE_URL)
    print("Database config:", {
        "backend": url.get_backend_name(),
        "host": url.host,
        "port": url.port,
        "user": url.username,
        "database": url.database,
    })

    try:
        if url.get_backend_name() == "mysql":
            print("\nTesting MySQL server connection...")
            server = create_engine(url.set(database=None), **engine_options(SQLALCHEMY_DATABASE_URL))
            with server.connect() as conn:
                print("MySQL connection successful!")
                exists = conn.execute(text("SHOW DATABASES LIKE :name"), {"name": url.database}).first()
                print(f"Database '{url.database}' {'exists' if exists else 'does not exist'}")
            server.dispose()

        print("\nTesting SQLAlchemy connection...")
        engine = create_engine(SQLALCHEMY_DATABASE_URL, **engine_options(SQLALCHEMY_DATABASE_URL))
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("SQLAlchemy connection successful!")

        print("\nChecking for existing tables...")
        print("Existing tables:", inspect(engine).get_table_names())
        engine.dispose()
    except Exception as e:
        print(f"\nConnection test failed ({settings.ENVIRONMENT}): {e}")
        return 1

    print("\nAll connection tests passed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(check_connection())
