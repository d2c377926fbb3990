import argparse
import csv
import logging
import pytz

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from parking_citations import settings
from parking_citations.db import database
from parking_citations.jobs.base_job import BaseJob
from parking_citations.models.response.violations_aggregator_response \
    import ViolationsAggregatorResponse
from parking_citations.models.violations_lookup_request import \
    ViolationsLookupRequest
from parking_citations.models.violations_request import ViolationsRequest
from parking_citations.source_registry import (SourceRegistry,
    build_default_registry)
from parking_citations.violations_aggregator import ViolationsAggregator

LOG = logging.getLogger(__name__)


class FleetLookupJob(BaseJob):
    """ Look up every vehicle of a fleet and record the batch. """

    def __init__(self, registry: Optional[SourceRegistry] = None):
        self.registry = registry

    def perform(self, *args, **kwargs) -> List[ViolationsAggregatorResponse]:
        company_id: Optional[str] = kwargs.get('company_id')
        is_dry_run: bool = kwargs.get('is_dry_run') or False
        jurisdictions: Optional[Iterable[str]] = kwargs.get('jurisdictions')
        max_threads: int = kwargs.get('max_threads') or settings.MAX_THREADS
        queries: List[Tuple[str, str]] = list(kwargs.get('queries') or [])
        requestor: Optional[str] = kwargs.get('requestor')

        if not queries:
            LOG.info('No vehicles to look up.')
            return []

        registry: SourceRegistry = self.registry or build_default_registry()
        aggregator = ViolationsAggregator(registry=registry)

        lookup_requests: List[ViolationsLookupRequest] = [
            ViolationsLookupRequest.build(plate=plate,
                                          state=state,
                                          jurisdictions=jurisdictions)
            for plate, state in queries]

        LOG.info(f'Sources registered: {len(registry.all_finders())}')
        LOG.info(f'Processing {len(lookup_requests)} vehicle(s) with '
                 f'{max_threads} thread(s)')

        with ThreadPoolExecutor(max_workers=max_threads) as executor:
            responses: List[ViolationsAggregatorResponse] = list(executor.map(
                aggregator.look_up_violations, lookup_requests))

        violations_found = 0
        sources_queried = 0
        sources_failed = 0

        for lookup_request, response in zip(lookup_requests, responses):
            violations_found += len(response.violations)
            sources_queried += response.sources_queried
            sources_failed += len(response.failures)

            for violation in response.violations:
                LOG.info(f'- {violation.citation_number} [{violation.jurisdiction}] '
                         f'{lookup_request.state}:{lookup_request.plate}: '
                         f'{violation.description or ""} ${violation.amount:.2f} '
                         f'on {violation.issue_date or "unknown date"} '
                         f'[{violation.status or "unknown"}]')

        LOG.info(f'Total violations found: {violations_found}')

        if not is_dry_run:
            self._record_request(company_id=company_id,
                                 finders_count=len(registry.all_finders()),
                                 requestor=requestor,
                                 requests_count=sources_queried,
                                 sources_failed=sources_failed,
                                 vehicle_count=len(lookup_requests),
                                 violations_found=violations_found)

        return responses

    def _record_request(self, **counts) -> None:
        violations_request = ViolationsRequest.create(
            request_datetime=datetime.now(pytz.utc).replace(tzinfo=None),
            **counts)

        LOG.debug(f'Fleet lookup recorded as {violations_request.id}.')


def read_queries(path: str) -> List[Tuple[str, str]]:
    """Read plate,state pairs from a csv file with a header row."""
    with open(path, newline='') as csv_file:
        return [(row['plate'], row['state'])
                for row in csv.DictReader(csv_file)
                if row.get('plate') and row.get('state')]


def parse_args():
    parser = argparse.ArgumentParser(
        description='Look up violations for every vehicle in a fleet.')

    parser.add_argument(
        'csv_file',
        help='CSV file with plate and state columns')

    parser.add_argument(
        '--company-id',
        help='Company owning the fleet')

    parser.add_argument(
        '--create-tables',
        action='store_true',
        help='Create the audit table before running')

    parser.add_argument(
        '--dry-run',
        action='store_true',
        help="Don't save results")

    parser.add_argument(
        '--max-threads',
        type=int,
        default=settings.MAX_THREADS,
        help='Vehicles looked up concurrently')

    parser.add_argument(
        '--requestor',
        help='Who requested the batch')

    return parser.parse_args()


if __name__ == '__main__':
    arguments = parse_args()

    logging.basicConfig(level=logging.INFO,
                        format='%(asctime)s %(levelname)s: %(message)s',
                        datefmt='%Y-%m-%d %H:%M:%S')

    if arguments.create_tables and not arguments.dry_run:
        database.create_tables()

    job = FleetLookupJob()
    job.run(queries=read_queries(arguments.csv_file),
            company_id=arguments.company_id,
            is_dry_run=arguments.dry_run,
            max_threads=arguments.max_threads,
            requestor=arguments.requestor)
