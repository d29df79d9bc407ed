# storefront/services/product_service.py
import math
from datetime import datetime

from sqlalchemy.orm import Session

from storefront.exceptions import NotFoundError, ValidationError, DatabaseError
from storefront.logging_setup import get_logger
from storefront.models import ProductUpdate, ProductSupplyRequest
from storefront.services.auth_service import AuthService, UserSession
from storefront.services.store_service import StoreService

log = get_logger('products')

class ProductService:
    """Service for manager-side product maintenance."""

    def __init__(self, session: Session):
        """Initialize the product service.

        Args:
            session: Database session
        """
        self.session = session
        self.store_service = StoreService(session)

    def update_product(
        self,
        user_session: UserSession,
        store_id: int,
        product_name: str,
        number_of_units: int,
        price_per_unit: float
    ) -> ProductUpdate:
        """Overwrite a product's stock and price and record the update.

        Args:
            user_session: Current user session (must be a manager)
            store_id: Store ID (must be managed by the user)
            product_name: Product name
            number_of_units: New number of units
            price_per_unit: New price per unit

        Returns:
            The appended ProductUpdate record

        Raises:
            AuthorizationError: If the user isn't the store's manager
            NotFoundError: If the store or product doesn't exist
            ValidationError: If units or price are negative
        """
        manager_id = AuthService.require_manager(user_session, "update products")
        self.store_service.require_store_owner(manager_id, store_id)

        if number_of_units < 0:
            raise ValidationError("Number of units cannot be negative")
        if not math.isfinite(price_per_unit) or price_per_unit < 0:
            raise ValidationError("Price per unit must be a finite, non-negative number")

        product = self.store_service.get_product(store_id, product_name)
        if product is None:
            raise NotFoundError(f"Could not find product '{product_name.strip()}' in store {store_id}")

        product.number_of_units = number_of_units
        product.price_per_unit = price_per_unit

        record = ProductUpdate(
            manager_id=manager_id,
            store_id=store_id,
            product_name=product.product_name,
            updated_on=datetime.now()
        )
        self.session.add(record)

        try:
            self.session.commit()
        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to update product: {str(e)}")

        log.info(
            f"Manager {manager_id} set {record.product_name.strip()} at store {store_id} "
            f"to {number_of_units} units at {price_per_unit:.2f}"
        )
        return record

    def place_supply_request(
        self,
        user_session: UserSession,
        store_id: int,
        product_name: str,
        units_requested: int,
        warehouse_id: int
    ) -> ProductSupplyRequest:
        """Request units from a warehouse for a managed store.

        The request is fulfilled at once: stock goes up in the same
        transaction that records the request.

        Args:
            user_session: Current user session (must be a manager)
            store_id: Store ID (must be managed by the user)
            product_name: Product name
            units_requested: Units to add, must be positive
            warehouse_id: Supplying warehouse ID

        Returns:
            The appended ProductSupplyRequest record

        Raises:
            AuthorizationError: If the user isn't the store's manager
            NotFoundError: If the store, product or warehouse doesn't exist
            ValidationError: If the unit count isn't positive
        """
        manager_id = AuthService.require_manager(user_session, "place product supply requests")
        self.store_service.require_store_owner(manager_id, store_id)

        if units_requested <= 0:
            raise ValidationError("Number of units needed must be positive")

        product = self.store_service.get_product(store_id, product_name)
        if product is None:
            raise NotFoundError(f"Could not find product '{product_name.strip()}' in store {store_id}")

        if self.store_service.get_warehouse(warehouse_id) is None:
            raise NotFoundError(f"Warehouse {warehouse_id} not found")

        product.number_of_units = product.number_of_units + units_requested

        request = ProductSupplyRequest(
            manager_id=manager_id,
            warehouse_id=warehouse_id,
            store_id=store_id,
            product_name=product.product_name,
            units_requested=units_requested
        )
        self.session.add(request)

        try:
            self.session.commit()
        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to place supply request: {str(e)}")

        log.info(
            f"Manager {manager_id} requested {units_requested} x {request.product_name.strip()} "
            f"from warehouse {warehouse_id} for store {store_id}"
        )
        return request
