#!/usr/bin/env python
# setup_db.py - Create the Storefront tables and optionally load demo data
import argparse
import sys
from datetime import date
from pathlib import Path

# Add the parent directory to the path so we can import our modules
parent_dir = str(Path(__file__).parent.parent.parent)
if parent_dir not in sys.path:
    sys.path.append(parent_dir)

from storefront.config import config
from storefront.db import db, session_scope
from storefront.exceptions import StorefrontError
from storefront.logging_setup import get_logger
from storefront.models import User, Store, Product, Warehouse, UserRole

logger = get_logger('db_setup')

# Demo data: (name, password, latitude, longitude, role)
DEMO_USERS = [
    ('Amy', 'xyz', 10.0, 10.0, UserRole.CUSTOMER),
    ('Bob', 'abc', 60.0, 60.0, UserRole.CUSTOMER),
    ('Carol', 'mgr1', 15.0, 20.0, UserRole.MANAGER),
    ('Dave', 'mgr2', 70.0, 65.0, UserRole.MANAGER),
]

# (name, latitude, longitude, manager name)
DEMO_STORES = [
    ('Downtown', 12.0, 14.0, 'Carol'),
    ('Riverside', 25.0, 30.0, 'Carol'),
    ('Hilltop', 65.0, 70.0, 'Dave'),
]

DEMO_PRODUCTS = [
    ('Pencil', 1.25, 120),
    ('Notebook', 3.50, 40),
    ('Backpack', 29.99, 8),
]

DEMO_WAREHOUSES = [
    (500.0, 20.0, 20.0),
    (750.0, 60.0, 60.0),
]

def setup_database(drop_existing=False):
    """Set up the database schema.

    Args:
        drop_existing: If True, drop existing tables before creating new ones

    Returns:
        True if setup was successful, False otherwise
    """
    try:
        if drop_existing:
            logger.info("Dropping all existing tables...")
            db.drop_all_tables()
            logger.info("All tables dropped successfully.")

        logger.info("Creating database tables...")
        db.create_all_tables()
        logger.info("Database tables created successfully.")
        return True
    except Exception as e:
        logger.error(f"Error setting up database: {str(e)}")
        logger.exception(e)
        return False

def load_demo_data():
    """Load a small set of users, stores, products and warehouses.

    Returns:
        Number of stores created, 0 if stores already exist
    """
    with session_scope() as session:
        if session.query(Store).first() is not None:
            logger.info("Stores already exist. Skipping demo data.")
            return 0

        users = {}
        for name, password, latitude, longitude, role in DEMO_USERS:
            user = User(name=name, password=password, latitude=latitude, longitude=longitude, type=role.value)
            session.add(user)
            users[name] = user
        session.flush()

        stores = []
        for name, latitude, longitude, manager in DEMO_STORES:
            store = Store(
                name=name,
                latitude=latitude,
                longitude=longitude,
                manager_id=users[manager].id,
                date_established=date.today()
            )
            session.add(store)
            stores.append(store)
        session.flush()

        for store in stores:
            for product_name, price, units in DEMO_PRODUCTS:
                session.add(Product(
                    store_id=store.id,
                    product_name=product_name,
                    price_per_unit=price,
                    number_of_units=units
                ))

        for area, latitude, longitude in DEMO_WAREHOUSES:
            session.add(Warehouse(area=area, latitude=latitude, longitude=longitude))

        logger.info(f"Loaded demo data: {len(users)} users, {len(stores)} stores")
        return len(stores)

def main():
    parser = argparse.ArgumentParser(description='Create the Storefront database tables')
    parser.add_argument('dbname', help='Name of the PostgreSQL database')
    parser.add_argument('port', help='Port the PostgreSQL server listens on')
    parser.add_argument('user', help='Database user name')
    parser.add_argument('--drop', action='store_true', help='Drop existing tables first')
    parser.add_argument('--demo-data', action='store_true', help='Load a small demo data set')
    args = parser.parse_args()

    try:
        db.initialize(config.get_db_url(database=args.dbname, port=args.port, username=args.user))
    except StorefrontError as e:
        print(f"Error - {e.message}", file=sys.stderr)
        return 1

    try:
        if not setup_database(args.drop):
            return 1
        if args.demo_data:
            load_demo_data()
        return 0
    finally:
        db.close()

if __name__ == "__main__":
    sys.exit(main())
