# storefront/services/reporting_service.py
from typing import List, Dict, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from storefront.config import config
from storefront.logging_setup import get_logger
from storefront.models import Order, ProductUpdate, ProductSupplyRequest, Store, User
from storefront.services.auth_service import AuthService, UserSession
from storefront.services.order_service import OrderService
from storefront.services.store_service import StoreService

log = get_logger('reports')

class ReportingService:
    """Manager-only reports, each scoped to the stores the manager runs."""

    def __init__(self, session: Session):
        """Initialize the reporting service.

        Args:
            session: Database session
        """
        self.session = session
        self.store_service = StoreService(session)

    @property
    def recent_limit(self) -> int:
        return config.store_rules['recent_limit']

    @property
    def top_limit(self) -> int:
        return config.store_rules['top_limit']

    def recent_orders(self, user_session: UserSession) -> List[Dict]:
        """Latest orders placed in the manager's stores."""
        manager_id = AuthService.require_manager(user_session, "view store orders")
        return OrderService(self.session).managed_store_orders(manager_id, self.recent_limit)

    def recent_updates(self, user_session: UserSession) -> List[Dict]:
        """Latest product updates in the manager's stores.

        Args:
            user_session: Current user session (must be a manager)

        Returns:
            List of update dictionaries, most recent first
        """
        manager_id = AuthService.require_manager(user_session, "view recent updates")

        updates = self.session.query(ProductUpdate).join(
            Store, ProductUpdate.store_id == Store.id
        ).filter(
            Store.manager_id == manager_id
        ).order_by(
            ProductUpdate.updated_on.desc(), ProductUpdate.id.desc()
        ).limit(self.recent_limit).all()

        return [
            {
                'update_number': update.id,
                'manager_id': update.manager_id,
                'store_id': update.store_id,
                'product_name': update.product_name.strip(),
                'updated_on': update.updated_on
            }
            for update in updates
        ]

    def popular_products(self, user_session: UserSession) -> List[Dict]:
        """Products with the most units ordered across the manager's stores.

        Args:
            user_session: Current user session (must be a manager)

        Returns:
            List of dictionaries with product_name and total_ordered
        """
        manager_id = AuthService.require_manager(user_session, "view popular products")

        total_ordered = func.sum(Order.units_ordered).label('total_ordered')
        rows = self.session.query(
            Order.product_name, total_ordered
        ).join(
            Store, Order.store_id == Store.id
        ).filter(
            Store.manager_id == manager_id
        ).group_by(
            Order.product_name
        ).order_by(
            total_ordered.desc(), Order.product_name.asc()
        ).limit(self.top_limit).all()

        return [
            {'product_name': name.strip(), 'total_ordered': int(total)}
            for name, total in rows
        ]

    def popular_customers(self, user_session: UserSession) -> List[Dict]:
        """Customers with the most orders across the manager's stores.

        Args:
            user_session: Current user session (must be a manager)

        Returns:
            List of dictionaries with customer_id, name and order_count
        """
        manager_id = AuthService.require_manager(user_session, "view popular customers")

        order_count = func.count(Order.id).label('order_count')
        rows = self.session.query(
            User.id, User.name, order_count
        ).join(
            Order, Order.customer_id == User.id
        ).join(
            Store, Order.store_id == Store.id
        ).filter(
            Store.manager_id == manager_id
        ).group_by(
            User.id, User.name
        ).order_by(
            order_count.desc(), User.name.asc(), User.id.asc()
        ).limit(self.top_limit).all()

        return [
            {'customer_id': user_id, 'name': name.strip(), 'order_count': int(count)}
            for user_id, name, count in rows
        ]

    def recent_supply_requests(self, user_session: UserSession, store_id: Optional[int] = None) -> List[Dict]:
        """Latest supply requests for one managed store or all of them.

        Args:
            user_session: Current user session (must be a manager)
            store_id: Optional store ID; ownership is checked when given

        Returns:
            List of request dictionaries, most recent first
        """
        manager_id = AuthService.require_manager(user_session, "view product supply requests")

        query = self.session.query(ProductSupplyRequest).join(
            Store, ProductSupplyRequest.store_id == Store.id
        ).filter(
            Store.manager_id == manager_id
        )

        if store_id is not None:
            self.store_service.require_store_owner(manager_id, store_id)
            query = query.filter(ProductSupplyRequest.store_id == store_id)

        requests = query.order_by(
            ProductSupplyRequest.id.desc()
        ).limit(self.recent_limit).all()

        log.info(f"Manager {manager_id} viewed {len(requests)} supply requests")

        return [
            {
                'request_number': request.id,
                'manager_id': request.manager_id,
                'warehouse_id': request.warehouse_id,
                'store_id': request.store_id,
                'product_name': request.product_name.strip(),
                'units_requested': request.units_requested
            }
            for request in requests
        ]
