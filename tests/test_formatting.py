"""
Unit tests for formatting.py (Jinja display filters).
"""
import time
import unittest

from dashboard.formatting import (format_clock_time, format_inr,
                                  format_percent, gain_loss_class)


class TestFormatting(unittest.TestCase):

    def test_format_inr(self):
        self.assertEqual(format_inr(24500), "₹24,500.00")
        self.assertEqual(format_inr(1234.567), "₹1,234.57")
        self.assertEqual(format_inr(0), "₹0.00")

    def test_format_inr_negative(self):
        self.assertEqual(format_inr(-500), "-₹500.00")

    def test_format_percent(self):
        self.assertEqual(format_percent(500 / 24500 * 100), "2.04%")
        self.assertEqual(format_percent(100), "100.00%")

    def test_gain_loss_class(self):
        self.assertEqual(gain_loss_class(10), "profit")
        self.assertEqual(gain_loss_class(0), "profit")
        self.assertEqual(gain_loss_class(-0.01), "loss")

    def test_format_clock_time(self):
        self.assertEqual(format_clock_time(None), "-")
        ts = time.time()
        self.assertEqual(format_clock_time(ts), time.strftime("%H:%M:%S", time.localtime(ts)))


if __name__ == '__main__':
    unittest.main()
