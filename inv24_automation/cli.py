"""
Command-line entry points.

Create an invoice:
    inv24-create --order-json '{"client": {...}, "items": [...]}'
    inv24-create --order-file order.json --type invoice --send
    inv24-create --demo --debug

Send an existing invoice:
    inv24-send --invoice-id 1119419
    inv24-send --invoice-number 100000000023

Credentials come from data/config.json (inv24_email, inv24_password) or
from INV24_EMAIL / INV24_PASSWORD. Progress is logged to stderr; the
result JSON is printed to stdout after a "--- RESULT ---" line. The exit
status is 0 on success and 1 otherwise.
"""

import sys
import json
import argparse
import logging
from typing import List, Optional

from .errors import ConfigurationError, UsageError
from .mapping.field_mapper import DEMO_ORDER, MappingDefaults, load_order_payload, map_order
from .models.invoice import InvoiceRunResult, InvoiceType, WorkflowOptions
from .utils.config import AppConfig
from .utils.file_utils import save_execution_report
from .utils.logger import setup_logger
from .workflows import InvoiceCreationWorkflow, InvoiceDispatchWorkflow


logger = logging.getLogger(__name__)


def _add_common_arguments(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Run a visible browser instead of a headless one"
    )

    parser.add_argument(
        "--config",
        help="Configuration file (default: $INV24_CONFIG or data/config.json)"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: from configuration, INFO)"
    )


def parse_create_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments of inv24-create."""
    parser = argparse.ArgumentParser(
        prog="inv24-create",
        description="Create an invoice in INV24",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--order-json", help="Order as an inline JSON object")
    source.add_argument("--order-file", help="Path to a JSON file holding the order")
    source.add_argument(
        "--demo",
        action="store_true",
        help="Use a built-in test order"
    )

    parser.add_argument(
        "--type",
        dest="invoice_type",
        help="Document type: 0/invoice, 1/proforma, 2/offer, 3/credit_note, 4/debit_note"
    )

    parser.add_argument(
        "--send",
        action="store_true",
        help="Email the invoice to the client after creating it"
    )

    parser.add_argument(
        "--no-report",
        action="store_true",
        help="Do not write the JSON/CSV execution report"
    )

    _add_common_arguments(parser)

    args = parser.parse_args(argv)

    if args.invoice_type is not None:
        try:
            args.invoice_type = InvoiceType.parse(args.invoice_type)
        except ValueError as e:
            parser.error(str(e))

    return args


def parse_send_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments of inv24-send."""
    parser = argparse.ArgumentParser(
        prog="inv24-send",
        description="Send an existing INV24 invoice by email",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--invoice-id", help="INV24 internal invoice id")
    target.add_argument("--invoice-number", help="Invoice number as shown in the list")

    _add_common_arguments(parser)

    return parser.parse_args(argv)


def _setup(args: argparse.Namespace) -> AppConfig:
    config = AppConfig.load(args.config)
    config.validate()

    level = args.log_level or config.log_level
    setup_logger(level=getattr(logging, level, logging.INFO), log_file=str(config.log_file))
    return config


def print_result(result: InvoiceRunResult):
    """Print the machine-readable result block."""
    print("\n--- RESULT ---")
    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))


def create_main(argv: Optional[List[str]] = None, browser_factory=None) -> int:
    """
    Entry point of inv24-create.

    Returns:
        Process exit status
    """
    args = parse_create_arguments(argv)

    try:
        config = _setup(args)

        if args.demo:
            logger.warning("Using built-in demo order")
            payload = DEMO_ORDER
        else:
            payload = load_order_payload(args.order_json, args.order_file)

        order = map_order(payload, MappingDefaults.from_config(config))

        options = WorkflowOptions(
            invoice_type=args.invoice_type,
            send_email=args.send,
            debug=args.debug,
        )

        workflow = (
            InvoiceCreationWorkflow(config, browser_factory)
            if browser_factory else InvoiceCreationWorkflow(config)
        )
        result = workflow.run(order, options)

        if not args.no_report:
            paths = save_execution_report(
                config.output_dir / "inv24_data",
                order,
                result,
                invoice_type=workflow.resolve_invoice_type(options).value,
            )
            if paths["json"]:
                logger.info(f"Report saved to: {paths['json']}")

        print_result(result)
        return result.exit_code

    except UsageError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    except ConfigurationError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\n\nInterrupted by user", file=sys.stderr)
        return 130

    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        print(f"\nERROR: {e}", file=sys.stderr)
        return 1


def send_main(argv: Optional[List[str]] = None, browser_factory=None) -> int:
    """
    Entry point of inv24-send.

    Returns:
        Process exit status
    """
    args = parse_send_arguments(argv)

    try:
        config = _setup(args)

        workflow = (
            InvoiceDispatchWorkflow(config, browser_factory)
            if browser_factory else InvoiceDispatchWorkflow(config)
        )
        result = workflow.run(
            invoice_id=args.invoice_id,
            invoice_number=args.invoice_number,
            debug=args.debug,
        )

        print_result(result)
        return result.exit_code

    except UsageError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    except ConfigurationError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\n\nInterrupted by user", file=sys.stderr)
        return 130

    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        print(f"\nERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(create_main())
