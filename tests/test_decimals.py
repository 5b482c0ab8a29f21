import unittest
from decimal import Decimal

from rationals.decimals import DECIMAL_ZERO, decimal_parts, from_float, int_to_str, make_decimal, parse_decimal, str_to_int
from rationals.exceptions import MalformedInput


class TestDecimals(unittest.TestCase):
    def test_parse(self):
        self.assertEqual(decimal_parts(parse_decimal('1.25')), (125, -2))
        self.assertEqual(decimal_parts(parse_decimal('-3')), (-3, 0))
        self.assertEqual(decimal_parts(parse_decimal('2.5e3')), (25, 2))
        self.assertEqual(decimal_parts(parse_decimal(' 0.010 ')), (10, -3))

    def test_parse_malformed(self):
        for text in ['', 'abc', '1.2.3', '1e', 'NaN', 'inf', '-Infinity', '1/2']:
            with self.assertRaises(MalformedInput, msg=text) as ctx:
                parse_decimal(text)
            self.assertEqual(ctx.exception.text, text)

    def test_parse_type(self):
        with self.assertRaises(TypeError):
            parse_decimal(1.5)

    def test_from_float(self):
        self.assertEqual(str(from_float(0.1)), '0.1')
        self.assertEqual(str(from_float(-2.5)), '-2.5')
        self.assertEqual(decimal_parts(from_float(1e-10)), (1, -10))
        self.assertEqual(from_float(10**30), Decimal(10**30))
        with self.assertRaises(MalformedInput):
            from_float(float('nan'))
        with self.assertRaises(MalformedInput):
            from_float(float('-inf'))
        with self.assertRaises(TypeError):
            from_float(True)

    def test_make_decimal(self):
        self.assertEqual(str(make_decimal(250, -2)), '2.50')
        self.assertEqual(str(make_decimal(-1, -3)), '-0.001')
        self.assertEqual(make_decimal(12, 4), Decimal('120000'))
        # no context rounding for long significands
        big = 10**60 + 1
        self.assertEqual(decimal_parts(make_decimal(big, -5)), (big, -5))
        self.assertEqual(make_decimal(0, 0), DECIMAL_ZERO)

    def test_huge_integers(self):
        big = 10**5000 + 7
        self.assertEqual(decimal_parts(make_decimal(big, -3)), (big, -3))
        self.assertEqual(decimal_parts(make_decimal(-big, 2)), (-big, 2))
        text = int_to_str(-big)
        self.assertEqual(len(text), 5002)
        self.assertTrue(text.startswith('-1000') and text.endswith('0007'))
        self.assertEqual(str_to_int(text), -big)
        self.assertEqual(int_to_str(0), '0')
