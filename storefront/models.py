# storefront/models.py
from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey, Index
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func
import enum

Base = declarative_base()

class UserRole(enum.Enum):
    """Enum for user roles stored in the ``type`` column of ``users``.

    Values:
        CUSTOMER ('customer'): Places orders in nearby stores
        MANAGER ('manager'): Manages stores and sees their reports
        ADMIN ('admin'): Administrative account, not a store manager
    """
    CUSTOMER = 'customer'
    MANAGER = 'manager'
    ADMIN = 'admin'

    def __str__(self):
        """Return the string value of the enum."""
        return self.value

    @classmethod
    def from_string(cls, value: str) -> 'UserRole':
        """Create a UserRole from a stored string value.

        The course schema keeps the role in a padded CHAR column and
        mixes capitalisations ('Customer', 'manager'), so the value is
        stripped and lower-cased first.

        Args:
            value: String value ('customer', 'manager', 'admin')

        Returns:
            UserRole enum value

        Raises:
            ValueError if the string value is not valid
        """
        try:
            return cls((value or '').strip().lower())
        except ValueError:
            raise ValueError(f"Invalid user role: {value}. Valid values are: customer, manager, admin")

class User(Base):
    __tablename__ = 'users'

    id = Column('userid', Integer, primary_key=True)
    name = Column('name', String(50), nullable=False)
    password = Column('password', String(11), nullable=False)
    latitude = Column('latitude', Float)
    longitude = Column('longitude', Float)
    type = Column('type', String(8), nullable=False, default=UserRole.CUSTOMER.value)

    orders = relationship("Order", back_populates="customer")

    @property
    def role(self) -> UserRole:
        return UserRole.from_string(self.type)

class Store(Base):
    __tablename__ = 'store'

    id = Column('storeid', Integer, primary_key=True)
    name = Column('name', String(30))
    latitude = Column('latitude', Float, nullable=False)
    longitude = Column('longitude', Float, nullable=False)
    manager_id = Column('managerid', Integer, ForeignKey('users.userid'), nullable=False)
    date_established = Column('dateestablished', Date)

    manager = relationship("User")
    products = relationship("Product", back_populates="store")

    __table_args__ = (
        Index('ix_store_managerid', 'managerid'),
    )

class Product(Base):
    """Product stocked by a store, keyed by (store, product name)."""
    __tablename__ = 'product'

    store_id = Column('storeid', Integer, ForeignKey('store.storeid'), primary_key=True)
    product_name = Column('productname', String(30), primary_key=True)
    number_of_units = Column('numberofunits', Integer, nullable=False, default=0)
    price_per_unit = Column('priceperunit', Float, nullable=False, default=0.0)
    image_url = Column('imageurl', String(255))

    store = relationship("Store", back_populates="products")

class Warehouse(Base):
    __tablename__ = 'warehouse'

    id = Column('warehouseid', Integer, primary_key=True)
    area = Column('area', Float)
    latitude = Column('latitude', Float)
    longitude = Column('longitude', Float)

class Order(Base):
    __tablename__ = 'orders'

    id = Column('ordernumber', Integer, primary_key=True)
    customer_id = Column('customerid', Integer, ForeignKey('users.userid'), nullable=False)
    store_id = Column('storeid', Integer, ForeignKey('store.storeid'), nullable=False)
    product_name = Column('productname', String(30), nullable=False)
    units_ordered = Column('unitsordered', Integer, nullable=False)
    order_time = Column('ordertime', DateTime, nullable=False, default=func.now())

    customer = relationship("User", back_populates="orders")
    store = relationship("Store")

    __table_args__ = (
        Index('ix_orders_storeid_ordertime', 'storeid', 'ordertime'),
        Index('ix_orders_customerid', 'customerid'),
    )

class ProductUpdate(Base):
    """Audit record appended whenever a manager overwrites a product."""
    __tablename__ = 'productupdates'

    id = Column('updatenumber', Integer, primary_key=True)
    manager_id = Column('managerid', Integer, ForeignKey('users.userid'), nullable=False)
    store_id = Column('storeid', Integer, ForeignKey('store.storeid'), nullable=False)
    product_name = Column('productname', String(30), nullable=False)
    updated_on = Column('updatedon', DateTime, nullable=False, default=func.now())

class ProductSupplyRequest(Base):
    __tablename__ = 'productsupplyrequests'

    id = Column('requestnumber', Integer, primary_key=True)
    manager_id = Column('managerid', Integer, ForeignKey('users.userid'), nullable=False)
    warehouse_id = Column('warehouseid', Integer, ForeignKey('warehouse.warehouseid'), nullable=False)
    store_id = Column('storeid', Integer, ForeignKey('store.storeid'), nullable=False)
    product_name = Column('productname', String(30), nullable=False)
    units_requested = Column('unitsrequested', Integer, nullable=False)
