# storefront/services/store_service.py
from typing import List, Dict, Optional, FrozenSet

from sqlalchemy.orm import Session

from storefront.config import config
from storefront.core.geofence import calculate_distance, find_nearby_stores
from storefront.exceptions import NotFoundError, AuthorizationError
from storefront.logging_setup import get_logger
from storefront.models import User, Store, Product, Warehouse

log = get_logger('stores')

class StoreService:
    """Service for store, product and location lookups."""

    def __init__(self, session: Session):
        """Initialize the store service.

        Args:
            session: Database session
        """
        self.session = session

    def get_store(self, store_id: int) -> Optional[Store]:
        """Get a store by ID.

        Args:
            store_id: Store ID

        Returns:
            Store object or None if not found
        """
        return self.session.get(Store, store_id)

    def get_product(self, store_id: int, product_name: str) -> Optional[Product]:
        """Get a product sold by a store.

        Args:
            store_id: Store ID
            product_name: Product name (surrounding whitespace is ignored)

        Returns:
            Product object or None if not found
        """
        return self.session.query(Product).filter(
            Product.store_id == store_id,
            Product.product_name == product_name.strip()
        ).first()

    def get_available_units(self, store_id: int, product_name: str) -> int:
        """Read the current stock of a product straight from the database.

        Raises:
            NotFoundError: If the store doesn't sell the product
        """
        units = self.session.query(Product.number_of_units).filter(
            Product.store_id == store_id,
            Product.product_name == product_name.strip()
        ).scalar()

        if units is None:
            raise NotFoundError(f"Could not find product '{product_name.strip()}' in store {store_id}")

        return units

    def get_warehouse(self, warehouse_id: int) -> Optional[Warehouse]:
        return self.session.get(Warehouse, warehouse_id)

    def get_user_location(self, user_id: int) -> tuple:
        """Get a user's registered (latitude, longitude).

        Raises:
            NotFoundError: If the user or either coordinate is missing
        """
        user = self.session.get(User, user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")

        if user.latitude is None or user.longitude is None:
            raise NotFoundError(f"No location recorded for user {user_id}")

        return (user.latitude, user.longitude)

    def compute_nearby_stores(self, user_id: int, radius: Optional[float] = None) -> FrozenSet[int]:
        """Compute the IDs of all stores within the nearby radius of a user.

        Args:
            user_id: User ID
            radius: Optional radius override; defaults to the configured one

        Returns:
            Frozen set of store IDs

        Raises:
            NotFoundError: If the user's location can't be resolved
        """
        if radius is None:
            radius = config.store_rules['nearby_radius']

        origin = self.get_user_location(user_id)
        stores = self.session.query(Store.id, Store.latitude, Store.longitude).all()

        nearby = find_nearby_stores(origin, stores, radius)
        log.info(f"User {user_id}: {len(nearby)} of {len(stores)} stores within {radius}")

        return nearby

    def describe_stores(self, user_id: int, store_ids) -> List[Dict]:
        """Describe stores with their distance from a user, nearest first.

        Args:
            user_id: User ID
            store_ids: Store IDs to describe

        Returns:
            List of dictionaries with store_id, name and distance
        """
        if not store_ids:
            return []

        lat, lon = self.get_user_location(user_id)
        stores = self.session.query(Store).filter(Store.id.in_(list(store_ids))).all()

        rows = [
            {
                'store_id': store.id,
                'name': (store.name or '').strip(),
                'distance': round(calculate_distance(lat, lon, store.latitude, store.longitude), 2)
            }
            for store in stores
        ]
        return sorted(rows, key=lambda row: (row['distance'], row['store_id']))

    def list_products(self, store_id: int) -> List[Dict]:
        """List the products of a store ordered by name.

        Raises:
            NotFoundError: If the store doesn't exist
        """
        if self.get_store(store_id) is None:
            raise NotFoundError(f"Store {store_id} not found")

        products = self.session.query(Product).filter(
            Product.store_id == store_id
        ).order_by(Product.product_name.asc()).all()

        return [
            {
                'product_name': product.product_name.strip(),
                'price_per_unit': product.price_per_unit,
                'number_of_units': product.number_of_units
            }
            for product in products
        ]

    def get_managed_store_ids(self, manager_id: int) -> List[int]:
        """Get the IDs of all stores managed by a manager, ascending."""
        rows = self.session.query(Store.id).filter(
            Store.manager_id == manager_id
        ).order_by(Store.id.asc()).all()
        return [row.id for row in rows]

    def require_store_owner(self, manager_id: int, store_id: int) -> Store:
        """Check that a manager manages a store.

        Args:
            manager_id: Manager's user ID
            store_id: Store ID

        Returns:
            The store

        Raises:
            NotFoundError: If the store doesn't exist
            AuthorizationError: If the store is managed by someone else
        """
        store = self.get_store(store_id)
        if store is None:
            raise NotFoundError(f"Store {store_id} not found")

        if store.manager_id != manager_id:
            log.warning(f"Manager {manager_id} refused access to store {store_id}")
            raise AuthorizationError(f"You don't manage the store with ID {store_id}")

        return store
