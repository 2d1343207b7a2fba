"""
File operation utilities.

This module provides helpers for writing execution reports (JSON and CSV).
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, Optional

import pandas as pd

from ..models.invoice import InvoiceRunResult
from ..models.order import Order


logger = logging.getLogger(__name__)


def save_json(data: Dict[str, Any], filepath: Path) -> bool:
    """
    Save data to JSON file.

    Args:
        data: Dictionary data to save
        filepath: Path to save the JSON file

    Returns:
        True if save successful, False otherwise

    Examples:
        >>> save_json({"success": True}, Path("output/inv24_data/result.json"))
        True
    """
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

        logger.debug(f"Saved JSON file: {filepath}")
        return True

    except Exception as e:
        logger.error(f"Failed to save JSON file {filepath}: {e}", exc_info=True)
        return False


def save_csv(df: pd.DataFrame, filepath: Path) -> bool:
    """
    Save DataFrame to CSV file.

    Returns:
        True if save successful, False otherwise
    """
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)

        df.to_csv(filepath, index=False, encoding='utf-8')

        logger.debug(f"Saved CSV file: {filepath}")
        return True

    except Exception as e:
        logger.error(f"Failed to save CSV file {filepath}: {e}", exc_info=True)
        return False


def generate_filename(prefix: str, extension: str, timestamp: Optional[str] = None) -> str:
    """
    Generate timestamped filename.

    Examples:
        >>> generate_filename("invoice_report", "json", "20261018_103045")
        'invoice_report_20261018_103045.json'
    """
    if timestamp is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{timestamp}.{extension}"


def save_execution_report(
    output_dir: Path,
    order: Order,
    result: InvoiceRunResult,
    invoice_type: Optional[str] = None
) -> Dict[str, Optional[Path]]:
    """
    Save the report of one invoice creation run.

    Writes ``invoice_report_<ts>.json`` (order, options, result) and, when
    the order has line items, ``invoice_items_<ts>.csv``.

    Args:
        output_dir: Directory for report files
        order: Canonical order that was submitted
        result: Workflow result
        invoice_type: Effective invoice type code

    Returns:
        Mapping with the ``json`` and ``csv`` paths written (None if skipped)
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    paths: Dict[str, Optional[Path]] = {"json": None, "csv": None}

    report = {
        "timestamp": timestamp,
        "invoice_type": invoice_type,
        "order": order.to_dict(),
        "result": result.to_dict(),
    }

    json_path = output_dir / generate_filename("invoice_report", "json", timestamp)
    if save_json(report, json_path):
        paths["json"] = json_path

    if order.items:
        df = pd.DataFrame([item for item in order.to_dict()["items"]])
        df.insert(0, "position", range(1, len(df) + 1))
        csv_path = output_dir / generate_filename("invoice_items", "csv", timestamp)
        if save_csv(df, csv_path):
            paths["csv"] = csv_path

    return paths
