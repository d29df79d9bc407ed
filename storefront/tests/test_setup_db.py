import unittest

from storefront.db import db, session_scope
from storefront.models import Product, Store, Warehouse
from storefront.scripts.setup_db import (
    setup_database, load_demo_data, DEMO_PRODUCTS, DEMO_STORES, DEMO_WAREHOUSES
)
from storefront.services.auth_service import AuthService


class TestSetupDatabase(unittest.TestCase):

    def setUp(self):
        db.initialize('sqlite://')

    def tearDown(self):
        db.close()

    def test_demo_data_loads_once(self):
        self.assertTrue(setup_database())
        self.assertEqual(load_demo_data(), len(DEMO_STORES))
        self.assertEqual(load_demo_data(), 0)

        with session_scope() as session:
            self.assertEqual(session.query(Store).count(), len(DEMO_STORES))
            self.assertEqual(session.query(Product).count(), len(DEMO_STORES) * len(DEMO_PRODUCTS))
            self.assertEqual(session.query(Warehouse).count(), len(DEMO_WAREHOUSES))

    def test_demo_users_can_log_in(self):
        setup_database()
        load_demo_data()

        with session_scope() as session:
            amy = AuthService(session).login('Amy', 'xyz')
            carol = AuthService(session).login('Carol', 'mgr1')

        self.assertFalse(amy.is_manager)
        self.assertTrue(carol.is_manager)
        self.assertTrue(amy.nearby_store_ids)

    def test_drop_and_recreate(self):
        setup_database()
        load_demo_data()

        self.assertTrue(setup_database(drop_existing=True))
        with session_scope() as session:
            self.assertEqual(session.query(Store).count(), 0)


if __name__ == '__main__':
    unittest.main()
