"""
Shared fixtures for the Storefront tests: an in-memory database built
from the same declarative models the client maps onto PostgreSQL.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from storefront.models import Base, User, Store, Product, Warehouse, UserRole
from storefront.services.auth_service import UserSession

AMY, ALICE, BART, CLEO = 1, 2, 3, 4

def make_session():
    """Create a session bound to a fresh in-memory SQLite database."""
    engine = create_engine('sqlite://')
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)()

def seed(session):
    """Load the standard fixture data.

    Users: Amy (customer at 0,0), Alice (manager of stores 1 and 2),
    Bart (manager of store 3), Cleo (customer at 90,90).
    From Amy, stores 1 (10,10) and 2 (20,5) are nearby, store 3 (50,50)
    is not.
    """
    session.add_all([
        User(id=AMY, name='Amy', password='xyz', latitude=0.0, longitude=0.0, type='customer'),
        User(id=ALICE, name='Alice', password='mgr1', latitude=5.0, longitude=5.0, type='manager'),
        User(id=BART, name='Bart', password='mgr2', latitude=80.0, longitude=80.0, type='manager'),
        User(id=CLEO, name='Cleo', password='pw', latitude=90.0, longitude=90.0, type='Customer'),
    ])
    session.add_all([
        Store(id=1, name='Downtown', latitude=10.0, longitude=10.0, manager_id=ALICE),
        Store(id=2, name='Riverside', latitude=20.0, longitude=5.0, manager_id=ALICE),
        Store(id=3, name='Hilltop', latitude=50.0, longitude=50.0, manager_id=BART),
    ])
    session.add_all([
        Product(store_id=1, product_name='Pencil', number_of_units=5, price_per_unit=1.0),
        Product(store_id=1, product_name='Notebook', number_of_units=10, price_per_unit=3.5),
        Product(store_id=2, product_name='Pencil', number_of_units=7, price_per_unit=1.1),
        Product(store_id=3, product_name='Backpack', number_of_units=4, price_per_unit=29.99),
    ])
    session.add(Warehouse(id=1, area=500.0, latitude=20.0, longitude=20.0))
    session.commit()

def customer_session(user_id=AMY, name='Amy', nearby=(1, 2)):
    return UserSession(user_id=user_id, name=name, role=UserRole.CUSTOMER, nearby_store_ids=frozenset(nearby))

def manager_session(user_id=ALICE, name='Alice', nearby=(1, 2)):
    return UserSession(user_id=user_id, name=name, role=UserRole.MANAGER, nearby_store_ids=frozenset(nearby))

def units_of(session, store_id, product_name):
    session.expire_all()
    return session.get(Product, (store_id, product_name)).number_of_units
