"""
INV24 workflows.

Usage:
    >>> from inv24_automation.workflows import InvoiceCreationWorkflow
    >>> from inv24_automation.utils.config import AppConfig
    >>>
    >>> result = InvoiceCreationWorkflow(AppConfig.load()).run(order)
"""

from .create_invoice import InvoiceCreationWorkflow
from .send_invoice import InvoiceDispatchWorkflow

__all__ = [
    "InvoiceCreationWorkflow",
    "InvoiceDispatchWorkflow",
]
