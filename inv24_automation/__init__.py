"""
INV24 invoice automation.

Creates and sends invoices in INV24 by driving its web UI with Selenium.
"""

__version__ = "0.1.0"
