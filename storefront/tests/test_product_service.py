"""
Tests for manager product updates and supply requests.
"""
import unittest

from storefront.exceptions import AuthorizationError, NotFoundError, ValidationError
from storefront.models import Product, ProductUpdate, ProductSupplyRequest
from storefront.services.product_service import ProductService
from storefront.tests.helpers import (
    make_session, seed, customer_session, manager_session, units_of, ALICE, BART
)


class TestProductService(unittest.TestCase):
    """Test cases for ProductService."""

    def setUp(self):
        """Set up test fixtures."""
        self.session = make_session()
        seed(self.session)
        self.service = ProductService(self.session)
        self.alice = manager_session()

    def tearDown(self):
        self.session.close()

    def assertNoSideEffects(self):
        self.assertEqual(units_of(self.session, 1, 'Pencil'), 5)
        self.assertEqual(self.session.query(ProductUpdate).count(), 0)
        self.assertEqual(self.session.query(ProductSupplyRequest).count(), 0)

    def test_update_product(self):
        record = self.service.update_product(self.alice, 1, 'Pencil', 50, 0.99)

        self.assertEqual(record.manager_id, ALICE)
        self.assertEqual(record.store_id, 1)
        self.assertEqual(record.product_name, 'Pencil')
        self.assertIsNotNone(record.updated_on)

        self.session.expire_all()
        product = self.session.get(Product, (1, 'Pencil'))
        self.assertEqual(product.number_of_units, 50)
        self.assertAlmostEqual(product.price_per_unit, 0.99)
        self.assertEqual(self.session.query(ProductUpdate).count(), 1)

    def test_update_product_customer_refused(self):
        with self.assertRaises(AuthorizationError):
            self.service.update_product(customer_session(), 1, 'Pencil', 50, 0.99)
        self.assertNoSideEffects()

    def test_update_product_other_managers_store_refused(self):
        bart = manager_session(user_id=BART, name='Bart')
        with self.assertRaises(AuthorizationError):
            self.service.update_product(bart, 1, 'Pencil', 50, 0.99)
        self.assertNoSideEffects()

    def test_update_product_unknown_store(self):
        with self.assertRaises(NotFoundError):
            self.service.update_product(self.alice, 77, 'Pencil', 50, 0.99)

    def test_update_product_unknown_product(self):
        with self.assertRaises(NotFoundError):
            self.service.update_product(self.alice, 1, 'Stapler', 50, 0.99)
        self.assertNoSideEffects()

    def test_update_product_negative_values(self):
        with self.assertRaises(ValidationError):
            self.service.update_product(self.alice, 1, 'Pencil', -1, 0.99)
        with self.assertRaises(ValidationError):
            self.service.update_product(self.alice, 1, 'Pencil', 3, -0.01)
        self.assertNoSideEffects()

    def test_update_product_non_finite_price(self):
        for price in (float('inf'), float('nan')):
            with self.assertRaises(ValidationError):
                self.service.update_product(self.alice, 1, 'Pencil', 3, price)
        self.assertNoSideEffects()

    def test_supply_request_increments_stock(self):
        request = self.service.place_supply_request(self.alice, 1, 'Pencil', 20, 1)

        self.assertEqual(request.manager_id, ALICE)
        self.assertEqual(request.warehouse_id, 1)
        self.assertEqual(request.units_requested, 20)
        self.assertEqual(units_of(self.session, 1, 'Pencil'), 25)
        self.assertEqual(self.session.query(ProductSupplyRequest).count(), 1)

    def test_supply_request_customer_refused(self):
        with self.assertRaises(AuthorizationError):
            self.service.place_supply_request(customer_session(), 1, 'Pencil', 20, 1)
        self.assertNoSideEffects()

    def test_supply_request_other_managers_store_refused(self):
        bart = manager_session(user_id=BART, name='Bart')
        with self.assertRaises(AuthorizationError):
            self.service.place_supply_request(bart, 1, 'Pencil', 20, 1)
        self.assertNoSideEffects()

    def test_supply_request_unknown_warehouse(self):
        with self.assertRaises(NotFoundError):
            self.service.place_supply_request(self.alice, 1, 'Pencil', 20, 9)
        self.assertNoSideEffects()

    def test_supply_request_requires_positive_units(self):
        with self.assertRaises(ValidationError):
            self.service.place_supply_request(self.alice, 1, 'Pencil', 0, 1)
        self.assertNoSideEffects()


if __name__ == '__main__':
    unittest.main()
