"""
Interactive menus for the Storefront client.

This module wires the service layer into a line-oriented menu loop. It
prompts for input, opens one database session per operation, calls the
services and prints their results as tables. Every operation catches
application errors at its own boundary so a failed operation returns
to the menu instead of ending the session.
"""
from typing import Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from tabulate import tabulate

from storefront.db import session_scope
from storefront.exceptions import StorefrontError, ValidationError
from storefront.logging_setup import get_logger, log_exception
from storefront.services import (
    AuthService, OrderService, OrderWorkflow, ProductService, ReportingService,
    StoreService, UserSession
)
from storefront.utils.validation import parse_int, parse_float

logger = get_logger('cli')

def read_line(prompt: str) -> str:
    return input(prompt)

def read_choice() -> int:
    """Read a menu choice, reprompting until an integer is given."""
    while True:
        try:
            return parse_int(read_line("Please make your choice: "), 'the choice')
        except ValidationError:
            print("Your input is invalid!")

def read_int(prompt: str, field: str, minimum: Optional[int] = None) -> int:
    while True:
        try:
            return parse_int(read_line(prompt), field, minimum)
        except ValidationError as e:
            print(f"Invalid input! {str(e)}")

def read_float(prompt: str, field: str, minimum: Optional[float] = None) -> float:
    while True:
        try:
            return parse_float(read_line(prompt), field, minimum)
        except ValidationError as e:
            print(f"Invalid input! {str(e)}")

def read_text(prompt: str, field: str) -> str:
    while True:
        text = read_line(prompt).strip()
        if text:
            return text
        print(f"{field.capitalize()} cannot be empty.")

def print_table(rows: List[dict], headers: dict, empty_message: str = "No records found.") -> None:
    """Print a list of dictionaries as a table.

    Args:
        rows: Rows to print
        headers: Mapping of row key to column header, in display order
        empty_message: Printed instead of an empty table
    """
    if not rows:
        print(empty_message)
        return

    table_data = [[row.get(key) for key in headers] for row in rows]
    print()
    print(tabulate(table_data, headers=list(headers.values())))
    print()

def greeting() -> None:
    print(
        "\n\n*******************************************************\n"
        "              User Interface                           \n"
        "*******************************************************\n"
    )

class StorefrontMenu:
    """Main and user menus of the Storefront client."""

    def __init__(self, scope: Callable = session_scope):
        """Initialize the menu.

        Args:
            scope: Context manager factory yielding a database session
        """
        self.session_scope = scope

    def run(self) -> None:
        """Show the main menu until the user exits."""
        while True:
            print("MAIN MENU")
            print("---------")
            print("1. Create user")
            print("2. Log in")
            print("9. < EXIT")

            choice = read_choice()
            if choice == 1:
                self._guard(self.create_user)
            elif choice == 2:
                user_session = self._guard(self.log_in)
                if user_session is not None:
                    self.user_menu(user_session)
            elif choice == 9:
                return
            else:
                print("Unrecognized choice!")

    def user_menu(self, user_session: UserSession) -> None:
        """Show the user menu until the user logs out."""
        actions = {
            1: self.view_stores,
            2: self.view_products,
            3: self.place_order,
            4: self.view_recent_orders,
            5: self.update_product,
            6: self.view_recent_updates,
            7: self.view_popular_products,
            8: self.view_popular_customers,
            9: self.place_supply_request,
            10: self.view_supply_requests,
        }

        while True:
            print("MAIN MENU")
            print("---------")
            print("1. View Stores within 30 miles")
            print("2. View Product List")
            print("3. Place a Order")
            print("4. View 5 recent orders")
            # Manager operations
            print("5. Update Product")
            print("6. View 5 recent Product Updates Info")
            print("7. View 5 Popular Items")
            print("8. View 5 Popular Customers")
            print("9. Place Product Supply Request to Warehouse")
            print("10. View Product Supply Requests")
            print(".........................")
            print("20. Log out")

            choice = read_choice()
            if choice == 20:
                logger.info(f"User {user_session.user_id} logged out")
                return

            action = actions.get(choice)
            if action is None:
                print("Unrecognized choice!")
                continue

            self._guard(action, user_session)

    def _guard(self, action: Callable, *args):
        """Run one operation, reporting any error and returning to the menu."""
        try:
            return action(*args)
        except StorefrontError as e:
            logger.info(f"{getattr(action, '__name__', 'operation')} failed: {str(e)}")
            print(f"Error: {e.message}")
        except SQLAlchemyError as e:
            log_exception('cli', e, f"Database error in {getattr(action, '__name__', 'operation')}")
            print(f"Error: database request failed: {str(e)}")
        return None

    def create_user(self) -> None:
        name = read_line("\tEnter name: ")
        password = read_line("\tEnter password: ")
        latitude = read_float("\tEnter latitude: ", 'latitude')
        longitude = read_float("\tEnter longitude: ", 'longitude')

        with self.session_scope() as session:
            AuthService(session).register(name, password, latitude, longitude)
        print("User successfully created!")

    def log_in(self) -> UserSession:
        name = read_line("\tEnter name: ")
        password = read_line("\tEnter password: ")

        with self.session_scope() as session:
            user_session = AuthService(session).login(name, password)
        print(f"Welcome, {user_session.name}!")
        return user_session

    def view_stores(self, user_session: UserSession) -> None:
        with self.session_scope() as session:
            stores = StoreService(session).describe_stores(
                user_session.user_id, user_session.nearby_store_ids
            )
        print("\nStores within 30 miles")
        print_table(
            stores,
            {'store_id': 'Store ID', 'name': 'Name', 'distance': 'Distance'},
            "No stores within 30 miles."
        )

    def view_products(self, user_session: UserSession) -> None:
        print("\nEnter a store ID to show that store's products")
        store_id = read_int("Store ID: ", 'the store ID')

        with self.session_scope() as session:
            products = StoreService(session).list_products(store_id)
        print_table(
            products,
            {'product_name': 'Product', 'price_per_unit': 'Price/Unit', 'number_of_units': 'Units'},
            "This store has no products."
        )

    def place_order(self, user_session: UserSession) -> None:
        with self.session_scope() as session:
            workflow = OrderWorkflow(OrderService(session), user_session)
            while not workflow.done:
                message = workflow.submit(read_line("\n" + workflow.prompt))
                if message:
                    print(message)

    def view_recent_orders(self, user_session: UserSession) -> None:
        with self.session_scope() as session:
            if user_session.is_manager:
                orders = ReportingService(session).recent_orders(user_session)
            else:
                orders = OrderService(session).recent_orders(user_session)

        if user_session.is_manager:
            headers = {
                'order_number': 'Order Number', 'customer_name': 'Customer',
                'store_id': 'Store ID', 'product_name': 'Product Name',
                'units_ordered': 'Units Ordered', 'order_time': 'Order Time'
            }
        else:
            headers = {
                'order_number': 'Order Number', 'store_id': 'Store ID',
                'product_name': 'Product Name', 'units_ordered': 'Units Ordered',
                'order_time': 'Order Time'
            }
        print_table(orders, headers, "No orders yet.")

    def update_product(self, user_session: UserSession) -> None:
        AuthService.require_manager(user_session, "update products")

        store_id = read_int("Enter the store ID: ", 'the store ID')
        with self.session_scope() as session:
            StoreService(session).require_store_owner(user_session.user_id, store_id)

        product_name = read_text("Enter the product name: ", 'product name')
        units = read_int("Enter the new number of units: ", 'the number of units', minimum=0)
        price = read_float("Enter the new price per unit: ", 'the price', minimum=0.0)

        with self.session_scope() as session:
            ProductService(session).update_product(user_session, store_id, product_name, units, price)
        print("Product information updated successfully!")

    def view_recent_updates(self, user_session: UserSession) -> None:
        with self.session_scope() as session:
            updates = ReportingService(session).recent_updates(user_session)
        print("Recent updates for your managed stores:")
        print_table(
            updates,
            {
                'update_number': 'Update Number', 'manager_id': 'Manager ID',
                'store_id': 'Store ID', 'product_name': 'Product Name',
                'updated_on': 'Updated On'
            },
            "No product updates yet."
        )

    def view_popular_products(self, user_session: UserSession) -> None:
        with self.session_scope() as session:
            products = ReportingService(session).popular_products(user_session)
        print_table(
            products,
            {'product_name': 'Product Name', 'total_ordered': 'Total Ordered'},
            "No orders yet."
        )

    def view_popular_customers(self, user_session: UserSession) -> None:
        with self.session_scope() as session:
            customers = ReportingService(session).popular_customers(user_session)
        print_table(
            customers,
            {'name': 'Name', 'order_count': 'Order Count'},
            "No orders yet."
        )

    def place_supply_request(self, user_session: UserSession) -> None:
        AuthService.require_manager(user_session, "place product supply requests")

        store_id = read_int("Enter the store ID: ", 'the store ID')
        with self.session_scope() as session:
            StoreService(session).require_store_owner(user_session.user_id, store_id)

        product_name = read_text("Enter product name: ", 'product name')
        units = read_int("Enter number of units needed: ", 'the number of units', minimum=1)
        warehouse_id = read_int("Enter warehouse ID: ", 'the warehouse ID')

        with self.session_scope() as session:
            ProductService(session).place_supply_request(
                user_session, store_id, product_name, units, warehouse_id
            )
        print("Supply request placed successfully.")

    def view_supply_requests(self, user_session: UserSession) -> None:
        AuthService.require_manager(user_session, "view product supply requests")

        store_id = read_int("Enter the store ID: ", 'the store ID')
        with self.session_scope() as session:
            requests = ReportingService(session).recent_supply_requests(user_session, store_id)
        print_table(
            requests,
            {
                'request_number': 'Request Number', 'manager_id': 'Manager ID',
                'warehouse_id': 'Warehouse ID', 'store_id': 'Store ID',
                'product_name': 'Product Name', 'units_requested': 'Units Requested'
            },
            "No supply requests yet."
        )
