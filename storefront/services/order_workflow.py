# storefront/services/order_workflow.py
"""Interactive order placement as a small state machine.

The workflow holds no I/O of its own: the CLI feeds it one line of user
input at a time through :meth:`OrderWorkflow.submit` and prints the
message it returns followed by the next :attr:`OrderWorkflow.prompt`.

    SELECT_STORE -> SELECT_PRODUCT -> SELECT_QUANTITY -> CONFIRM -> COMMIT

``0`` at any selection step goes back one step (or aborts at the store
step) and ``CONFIRM`` can go back, cancel or commit. Every value is
validated again against the database when it is used, never cached from
an earlier prompt.
"""
import enum
from typing import Optional

from storefront.exceptions import (
    NotFoundError, ValidationError, InsufficientStockError, OrderError, StorefrontError
)
from storefront.logging_setup import get_logger
from storefront.services.auth_service import UserSession
from storefront.services.order_service import OrderService
from storefront.utils.validation import is_numeric, parse_int

log = get_logger('orders')

class OrderState(enum.Enum):
    SELECT_STORE = 'select_store'
    SELECT_PRODUCT = 'select_product'
    SELECT_QUANTITY = 'select_quantity'
    CONFIRM = 'confirm'
    COMMIT = 'commit'
    COMMITTED = 'committed'
    CANCELLED = 'cancelled'
    ABORTED = 'aborted'

TERMINAL_STATES = frozenset({OrderState.COMMITTED, OrderState.CANCELLED, OrderState.ABORTED})

PROMPTS = {
    OrderState.SELECT_STORE: "Enter Store ID or enter 0 to go back to Main Menu: ",
    OrderState.SELECT_PRODUCT: "Enter Product name or enter 0 to go back: ",
    OrderState.SELECT_QUANTITY: "Enter quantity or enter 0 to go back: ",
    OrderState.CONFIRM: "Enter y to confirm order, b to go back, n to cancel order: ",
}

class OrderWorkflow:
    """State machine that walks a user through placing one order."""

    def __init__(self, order_service: OrderService, user_session: UserSession):
        """Initialize the workflow.

        Args:
            order_service: Order service bound to an open database session
            user_session: Current user session
        """
        self.order_service = order_service
        self.user_session = user_session
        self.state = OrderState.SELECT_STORE
        self.store_id: Optional[int] = None
        self.product_name: Optional[str] = None
        self.quantity: Optional[int] = None
        self.order = None

    @property
    def done(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def prompt(self) -> Optional[str]:
        """Prompt for the current state, or None once the workflow is over."""
        return PROMPTS.get(self.state)

    def summary(self) -> str:
        return f"Store ID: {self.store_id}   Product: {self.product_name}     Quantity: {self.quantity}"

    def submit(self, text: str) -> Optional[str]:
        """Feed one line of user input into the workflow.

        Args:
            text: Raw input line

        Returns:
            Message to show the user, if any
        """
        if self.done:
            raise OrderError(f"Order workflow already {self.state.value}")

        handler = {
            OrderState.SELECT_STORE: self._select_store,
            OrderState.SELECT_PRODUCT: self._select_product,
            OrderState.SELECT_QUANTITY: self._select_quantity,
            OrderState.CONFIRM: self._confirm,
        }[self.state]

        message = handler(text or '')

        if self.state is OrderState.COMMIT:
            message = self._commit()

        return message

    def _select_store(self, text: str) -> Optional[str]:
        value = ''.join(text.split())
        try:
            store_id = parse_int(value, 'the ID')
        except ValidationError:
            return "Please enter only digits for the ID"

        if store_id == 0:
            self.state = OrderState.ABORTED
            return None

        try:
            self.store_id = self.order_service.validate_store(self.user_session, store_id)
        except NotFoundError as e:
            return str(e)

        self.state = OrderState.SELECT_PRODUCT
        return None

    def _select_product(self, text: str) -> Optional[str]:
        value = text.strip()
        if is_numeric(value) and int(value) == 0:
            self.product_name = None
            self.state = OrderState.SELECT_STORE
            return None

        try:
            self.product_name = self.order_service.validate_product(self.store_id, value)
        except NotFoundError as e:
            return str(e)

        self.state = OrderState.SELECT_QUANTITY
        return None

    def _select_quantity(self, text: str) -> Optional[str]:
        value = ''.join(text.split())
        try:
            quantity = parse_int(value, 'the quantity', minimum=0)
        except ValidationError:
            return "Please enter only digits for the quantity"

        if quantity == 0:
            self.quantity = None
            self.state = OrderState.SELECT_PRODUCT
            return None

        try:
            self.quantity = self.order_service.validate_quantity(self.store_id, self.product_name, quantity)
        except (ValidationError, NotFoundError) as e:
            return str(e)

        self.state = OrderState.CONFIRM
        return self.summary()

    def _confirm(self, text: str) -> Optional[str]:
        choice = text.strip().lower()
        if choice == 'y':
            self.state = OrderState.COMMIT
            return None
        if choice == 'b':
            self.state = OrderState.SELECT_QUANTITY
            return None
        if choice == 'n':
            self.state = OrderState.CANCELLED
            log.info(f"User {self.user_session.user_id} cancelled an order at store {self.store_id}")
            return "Order cancelled."
        return "Please enter y, b or n"

    def _commit(self) -> str:
        try:
            self.order = self.order_service.place_order(
                self.user_session, self.store_id, self.product_name, self.quantity
            )
        except InsufficientStockError as e:
            self.quantity = None
            self.state = OrderState.SELECT_QUANTITY
            return f"Stock changed before the order was placed. {str(e)}"
        except NotFoundError as e:
            self.product_name = None
            self.quantity = None
            self.state = OrderState.SELECT_PRODUCT
            return str(e)
        except StorefrontError as e:
            log.error(f"Order for user {self.user_session.user_id} at store {self.store_id} failed: {str(e)}")
            self.state = OrderState.ABORTED
            return f"Order not placed. {e.message}"

        self.state = OrderState.COMMITTED
        return "Order Placed!"
