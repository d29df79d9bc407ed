"""
Tests for the command-line entry point.
"""
import io
import unittest
from unittest.mock import patch

from storefront import main as entry
from storefront.exceptions import DatabaseConnectionError


class TestMain(unittest.TestCase):
    """Test cases for argument handling and startup."""

    def test_wrong_number_of_arguments_exits(self):
        with patch('sys.stderr', new_callable=io.StringIO), patch('sys.stdout', new_callable=io.StringIO):
            with self.assertRaises(SystemExit) as ctx:
                entry.main(['shop', '5432'])
        self.assertNotEqual(ctx.exception.code, 0)

    def test_parser_reads_positional_arguments(self):
        args = entry.build_parser().parse_args(['shop', '5432', 'postgres'])

        self.assertEqual(args.dbname, 'shop')
        self.assertEqual(args.port, '5432')
        self.assertEqual(args.user, 'postgres')

    @patch('storefront.main.StorefrontMenu')
    @patch('storefront.main.init_application')
    def test_connection_failure_returns_error_status(self, mock_init, mock_menu):
        mock_init.side_effect = DatabaseConnectionError("Unable to connect to database: refused")

        with patch('sys.stdout', new_callable=io.StringIO) as out, \
                patch('sys.stderr', new_callable=io.StringIO) as err:
            status = entry.main(['shop', '5432', 'postgres'])

        self.assertEqual(status, 1)
        self.assertIn('refused', err.getvalue())
        self.assertIn('Make sure you started postgres', out.getvalue())
        mock_menu.assert_not_called()

    @patch('storefront.main.db')
    @patch('storefront.main.StorefrontMenu')
    @patch('storefront.main.init_application')
    def test_normal_run_disconnects(self, mock_init, mock_menu, mock_db):
        with patch('sys.stdout', new_callable=io.StringIO) as out:
            status = entry.main(['shop', '5432', 'postgres'])

        self.assertEqual(status, 0)
        mock_menu.return_value.run.assert_called_once()
        mock_db.close.assert_called_once()
        self.assertIn('Bye !', out.getvalue())

    @patch('storefront.main.db')
    @patch('storefront.main.StorefrontMenu')
    @patch('storefront.main.init_application')
    def test_interrupt_still_disconnects(self, mock_init, mock_menu, mock_db):
        mock_menu.return_value.run.side_effect = KeyboardInterrupt

        with patch('sys.stdout', new_callable=io.StringIO):
            status = entry.main(['shop', '5432', 'postgres'])

        self.assertEqual(status, 0)
        mock_db.close.assert_called_once()

    @patch('storefront.main.db')
    def test_init_application_builds_url_from_arguments(self, mock_db):
        args = entry.build_parser().parse_args(['shop', '6543', 'alice'])

        with patch('sys.stdout', new_callable=io.StringIO):
            entry.init_application(args)

        url = mock_db.initialize.call_args[0][0]
        self.assertIn('alice', url)
        self.assertIn(':6543/shop', url)


if __name__ == '__main__':
    unittest.main()
