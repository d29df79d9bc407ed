import unittest

from storefront.exceptions import ValidationError
from storefront.utils.validation import (
    is_numeric, parse_int, parse_float, validate_coordinate, validate_text
)


class TestValidation(unittest.TestCase):

    def test_is_numeric(self):
        self.assertTrue(is_numeric('42'))
        self.assertTrue(is_numeric('-3'))
        self.assertFalse(is_numeric('4.2'))
        self.assertFalse(is_numeric('abc'))
        self.assertFalse(is_numeric(None))

    def test_parse_int(self):
        self.assertEqual(parse_int(' 7 ', 'the ID'), 7)
        self.assertEqual(parse_int('0', 'the quantity', minimum=0), 0)

        with self.assertRaises(ValidationError):
            parse_int('seven', 'the ID')
        with self.assertRaises(ValidationError):
            parse_int('', 'the ID')
        with self.assertRaises(ValidationError) as ctx:
            parse_int('-1', 'units', minimum=0)
        self.assertIn('at least 0', str(ctx.exception))

    def test_parse_float(self):
        self.assertEqual(parse_float('12.5', 'latitude'), 12.5)
        self.assertEqual(parse_float(' 3 ', 'price'), 3.0)

        with self.assertRaises(ValidationError):
            parse_float('north', 'latitude')
        with self.assertRaises(ValidationError):
            parse_float('-0.5', 'price', minimum=0.0)

    def test_parse_float_rejects_non_finite(self):
        for text in ('inf', '-inf', 'nan', 'Infinity'):
            with self.assertRaises(ValidationError):
                parse_float(text, 'the price', minimum=0.0)

    def test_validate_coordinate_bounds_are_inclusive(self):
        self.assertEqual(validate_coordinate(0.0, 'latitude'), 0.0)
        self.assertEqual(validate_coordinate(100.0, 'latitude'), 100.0)

        with self.assertRaises(ValidationError):
            validate_coordinate(-0.1, 'latitude')
        with self.assertRaises(ValidationError):
            validate_coordinate(100.1, 'longitude')

    def test_validate_text(self):
        self.assertEqual(validate_text('  Amy ', 'name'), 'Amy')

        with self.assertRaises(ValidationError):
            validate_text('   ', 'name')
        with self.assertRaises(ValidationError):
            validate_text(None, 'name')
        with self.assertRaises(ValidationError):
            validate_text('x' * 51, 'name', max_length=50)


if __name__ == '__main__':
    unittest.main()
