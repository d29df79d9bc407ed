# storefront/services/order_service.py
from datetime import datetime
from typing import List, Dict, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from storefront.config import config
from storefront.exceptions import (
    NotFoundError, ValidationError, InsufficientStockError, OrderError
)
from storefront.logging_setup import get_logger
from storefront.models import Order, Product, Store, User
from storefront.services.auth_service import AuthService, UserSession
from storefront.services.store_service import StoreService

log = get_logger('orders')

class OrderService:
    """Service for placing and listing customer orders."""

    def __init__(self, session: Session):
        """Initialize the order service.

        Args:
            session: Database session
        """
        self.session = session
        self.store_service = StoreService(session)

    def validate_store(self, user_session: UserSession, store_id: int) -> int:
        """Check that a store is in the session's nearby set.

        Raises:
            NotFoundError: If the store is not nearby
        """
        if store_id not in user_session.nearby_store_ids:
            radius = config.store_rules['nearby_radius']
            raise NotFoundError(f"Cannot find a store with (ID: {store_id}) within {radius:g} miles")
        return store_id

    def validate_product(self, store_id: int, product_name: str) -> str:
        """Check that a store sells a product and return its stored name.

        Raises:
            NotFoundError: If the store doesn't sell the product
        """
        product = self.store_service.get_product(store_id, product_name)
        if product is None:
            raise NotFoundError(f"Could not find product with name: {product_name.strip()}")
        return product.product_name.strip()

    def validate_quantity(self, store_id: int, product_name: str, quantity: int) -> int:
        """Check a quantity against the product's current stock.

        Stock is read again on every call since it may have changed
        since the last prompt.

        Raises:
            ValidationError: If the quantity is not positive
            InsufficientStockError: If the quantity exceeds current stock
        """
        if quantity <= 0:
            raise ValidationError("Quantity must be a positive whole number")

        available = self.store_service.get_available_units(store_id, product_name)
        if quantity > available:
            raise InsufficientStockError(
                f"Count is too high: there are only {available} of this item available in this store",
                details={'available': available, 'requested': quantity}
            )
        return quantity

    def place_order(
        self,
        user_session: UserSession,
        store_id: int,
        product_name: str,
        quantity: int
    ) -> Order:
        """Place an order and take the units out of stock.

        The stock decrement is conditional on enough units remaining, and
        runs in the same transaction as the order insert, so two orders
        racing for the last units can't both succeed.

        Args:
            user_session: Current user session
            store_id: Store ID (must be nearby)
            product_name: Product name
            quantity: Units to order

        Returns:
            The created order

        Raises:
            NotFoundError: If the store isn't nearby or doesn't sell the product
            ValidationError: If the quantity is not positive
            InsufficientStockError: If stock no longer covers the quantity
            OrderError: If the database rejects the order
        """
        self.validate_store(user_session, store_id)
        product_name = self.validate_product(store_id, product_name)
        if quantity <= 0:
            raise ValidationError("Quantity must be a positive whole number")

        try:
            result = self.session.execute(
                update(Product)
                .where(
                    Product.store_id == store_id,
                    Product.product_name == product_name,
                    Product.number_of_units >= quantity
                )
                .values(number_of_units=Product.number_of_units - quantity)
                .execution_options(synchronize_session=False)
            )

            if result.rowcount != 1:
                self.session.rollback()
                available = self.store_service.get_available_units(store_id, product_name)
                log.warning(
                    f"Order refused for user {user_session.user_id}: "
                    f"{quantity} x {product_name} at store {store_id}, {available} left"
                )
                raise InsufficientStockError(
                    f"Count is too high: there are only {available} of this item available in this store",
                    details={'available': available, 'requested': quantity}
                )

            order = Order(
                customer_id=user_session.user_id,
                store_id=store_id,
                product_name=product_name,
                units_ordered=quantity,
                order_time=datetime.now()
            )
            self.session.add(order)
            self.session.commit()
        except (InsufficientStockError, NotFoundError):
            raise
        except Exception as e:
            self.session.rollback()
            raise OrderError(f"Failed to place order: {str(e)}")

        log.info(
            f"Order {order.id}: user {user_session.user_id} bought "
            f"{quantity} x {product_name} at store {store_id}"
        )
        return order

    def recent_orders(self, user_session: UserSession, limit: Optional[int] = None) -> List[Dict]:
        """Get recent orders for the current user.

        Customers see their own latest orders; managers see the latest
        orders placed in the stores they manage.

        Args:
            user_session: Current user session
            limit: Optional row limit, defaults to the configured one

        Returns:
            List of order dictionaries, most recent first
        """
        if limit is None:
            limit = config.store_rules['recent_limit']

        manager_id = AuthService.is_manager(user_session)
        if manager_id is None:
            return self._customer_orders(user_session.user_id, limit)
        return self.managed_store_orders(manager_id, limit)

    def _customer_orders(self, customer_id: int, limit: int) -> List[Dict]:
        orders = self.session.query(Order).filter(
            Order.customer_id == customer_id
        ).order_by(Order.order_time.desc(), Order.id.desc()).limit(limit).all()

        return [
            {
                'order_number': order.id,
                'store_id': order.store_id,
                'product_name': order.product_name.strip(),
                'units_ordered': order.units_ordered,
                'order_time': order.order_time
            }
            for order in orders
        ]

    def managed_store_orders(self, manager_id: int, limit: int) -> List[Dict]:
        """Get the latest orders placed in stores managed by a manager."""
        rows = self.session.query(
            Order, User.name.label('customer_name')
        ).join(
            User, Order.customer_id == User.id
        ).join(
            Store, Order.store_id == Store.id
        ).filter(
            Store.manager_id == manager_id
        ).order_by(Order.order_time.desc(), Order.id.desc()).limit(limit).all()

        return [
            {
                'order_number': order.id,
                'customer_name': customer_name.strip(),
                'store_id': order.store_id,
                'product_name': order.product_name.strip(),
                'units_ordered': order.units_ordered,
                'order_time': order.order_time
            }
            for order, customer_name in rows
        ]
