import argparse
import json
import logging
import sys
import os
from datetime import datetime
from decimal import Decimal, InvalidOperation

# Add project root to path for module discovery
sys.path.append(os.getcwd())

from dotenv import load_dotenv
from pydantic import ValidationError

from app.exception.base_exception import BaseCustomException
from app.models.dto import BillingRequest
from app.services.bill_service import BillService

# Logging configuration
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stderr)
    ]
)
logger = logging.getLogger(__name__)


def _tax_rate(value: str) -> Decimal:
    try:
        rate = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid tax rate: {value!r}")
    if rate < 0:
        raise argparse.ArgumentTypeError("tax rate must not be negative")
    return rate


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Lounge bill calculator")
    parser.add_argument("--course", type=str, required=True, help="Course identifier (e.g. 'standard', '5-hour pack')")
    parser.add_argument("--entry", type=datetime.fromisoformat, required=True, help="Entry time, ISO-8601 with offset (e.g. 2021-07-17T10:10:30+09:00)")
    parser.add_argument("--exit", type=datetime.fromisoformat, required=True, dest="exit_time", help="Exit time, ISO-8601 with offset")
    parser.add_argument("--tax-rate", type=_tax_rate, default=None, help="Tax rate override (e.g. 0.08)")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # Load environment variables (.env)
    load_dotenv()

    try:
        request = BillingRequest(course=args.course, entry_time=args.entry, exit_time=args.exit_time)
        bill = BillService().create_bill(request)
        summary = bill.to_summary(args.tax_rate)
    except ValidationError as e:
        logger.error(f"Invalid billing request: {e}")
        return 1
    except BaseCustomException as e:
        logger.error(f"Bill calculation failed: {e.message}")
        return 1

    print(json.dumps(summary.model_dump(mode="json"), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
