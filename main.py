import argparse
import json
import logging
import sys

from dataclasses import asdict
from decimal import Decimal, InvalidOperation

from parking_citations.models.payment_request import PaymentRequest
from parking_citations.models.violations_lookup_request import \
    ViolationsLookupRequest
from parking_citations.services.constants.exceptions import (
    ConfigurationException, InvalidLookupRequestException)
from parking_citations.source_registry import build_default_registry
from parking_citations.violations_aggregator import ViolationsAggregator

LOGGING_LEVELS = {'critical': logging.CRITICAL,
                  'error': logging.ERROR,
                  'warning': logging.WARNING,
                  'info': logging.INFO,
                  'debug': logging.DEBUG}

LOG = logging.getLogger(__name__)


def run(args) -> int:
    registry = build_default_registry()

    if args.command == 'finders':
        output = [asdict(finder_info)
                  for finder_info in registry.describe_finders(args.state)]
        print(json.dumps(output, indent=2))
        return 0

    aggregator = ViolationsAggregator(registry=registry)

    if args.command == 'lookup':
        lookup_request = ViolationsLookupRequest.build(
            plate=args.plate,
            state=args.state,
            jurisdictions=args.jurisdictions)

        response = aggregator.look_up_violations(
            lookup_request=lookup_request,
            deadline=args.deadline)

        print(json.dumps(response.to_dict(), indent=2))
        return 0 if response.data_available else 2

    payment_response = aggregator.pay_citation(PaymentRequest(
        jurisdiction=args.jurisdiction,
        citation_number=args.citation,
        amount=args.amount))

    print(json.dumps(payment_response.to_dict(), indent=2))
    return 0 if payment_response.success else 2


def parse_amount(value: str) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f'invalid amount: {value}')

    if amount <= 0:
        raise argparse.ArgumentTypeError(f'amount must be positive: {value}')

    return amount


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Find and pay parking citations')
    parser.add_argument(
        '-l',
        '--log-level',
        help='Log level')
    parser.add_argument(
        '-f',
        '--log-file',
        help='Log file name')

    subparsers = parser.add_subparsers(dest='command', required=True)

    lookup_parser = subparsers.add_parser(
        'lookup', help='Look up citations for a plate')
    lookup_parser.add_argument('plate')
    lookup_parser.add_argument('state', help='Registration state')
    lookup_parser.add_argument(
        '-j',
        '--jurisdictions',
        nargs='+',
        help='Jurisdictions to search (default: all)')
    lookup_parser.add_argument(
        '--deadline',
        type=float,
        help='Seconds to wait for sources')

    pay_parser = subparsers.add_parser(
        'pay', help='Pay a citation at its jurisdiction')
    pay_parser.add_argument('jurisdiction')
    pay_parser.add_argument('citation')
    pay_parser.add_argument('amount', type=parse_amount)

    finders_parser = subparsers.add_parser(
        'finders', help='List registered finders')
    finders_parser.add_argument('state', nargs='?')

    return parser.parse_args(argv)


if __name__ == '__main__':
    args = parse_args()

    logging_level: int = LOGGING_LEVELS.get(
        args.log_level, logging.NOTSET)
    logging.basicConfig(level=logging_level, filename=args.log_file,
                        format='%(asctime)s %(levelname)s: %(message)s',
                        datefmt='%Y-%m-%d %H:%M:%S')

    try:
        sys.exit(run(args))
    except (ConfigurationException, InvalidLookupRequestException) as exc:
        LOG.error(exc)
        print(str(exc), file=sys.stderr)
        sys.exit(1)
