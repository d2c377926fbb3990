import ddt
import mock
import os
import tempfile
import unittest

from decimal import Decimal
from typing import List

from parking_citations.constants.lookup_statuses import LookupStatus
from parking_citations.jobs.fleet_lookup_job import (FleetLookupJob,
    read_queries)
from parking_citations.models.violation import Violation
from parking_citations.services.finders.base_finder import BaseFinder
from parking_citations.source_registry import SourceRegistry


class PlateBookFinder(BaseFinder):
    """ Answers from a fixed plate -> violations table """

    def __init__(self, name, jurisdiction, violations_by_plate, fails=False):
        super().__init__()
        self.NAME = name
        self.JURISDICTION = jurisdiction
        self.LINK = f'https://{name.lower()}.example.com'
        self.fails = fails
        self.violations_by_plate = violations_by_plate

    def _search(self, plate: str, state: str) -> List[Violation]:
        if self.fails:
            raise ValueError(f'{self.NAME} is down')
        return self.violations_by_plate.get(plate, [])


@ddt.ddt
class TestFleetLookupJob(unittest.TestCase):

    def setUp(self):
        self.registry = SourceRegistry(finders=[
            PlateBookFinder('Albany', 'NY', {
                'ABC123': [Violation(citation_number='A1', amount=Decimal('50'))],
                'XYZ789': [Violation(citation_number='A2', amount=Decimal('15')),
                           Violation(citation_number='A3', amount=Decimal('20'))]}),
            PlateBookFinder('Chicago', 'IL', {}, fails=True)]).freeze()

    @ddt.data(
        {'dry_run': True},
        {'dry_run': False},
    )
    @ddt.unpack
    @mock.patch('parking_citations.jobs.fleet_lookup_job.ViolationsRequest')
    def test_perform(self, mocked_violations_request, dry_run):
        job = FleetLookupJob(registry=self.registry)

        responses = job.run(queries=[('abc 123', 'ny'), ('XYZ789', 'NJ')],
                            is_dry_run=dry_run,
                            max_threads=2,
                            requestor='fleet-manager',
                            company_id='acme-rentals')

        self.assertEqual([response.status for response in responses],
                         [LookupStatus.SUCCESS, LookupStatus.SUCCESS])
        self.assertEqual([[v.citation_number for v in response.violations]
                          for response in responses],
                         [['A1'], ['A2', 'A3']])
        self.assertEqual([len(response.failures) for response in responses],
                         [1, 1])

        if dry_run:
            mocked_violations_request.create.assert_not_called()
        else:
            mocked_violations_request.create.assert_called_once()

            kwargs = mocked_violations_request.create.call_args.kwargs

            self.assertEqual(kwargs['company_id'], 'acme-rentals')
            self.assertEqual(kwargs['finders_count'], 2)
            self.assertEqual(kwargs['requestor'], 'fleet-manager')
            self.assertEqual(kwargs['requests_count'], 4)
            self.assertEqual(kwargs['sources_failed'], 2)
            self.assertEqual(kwargs['vehicle_count'], 2)
            self.assertEqual(kwargs['violations_found'], 3)
            self.assertIsNone(kwargs['request_datetime'].tzinfo)

    def test_perform_limited_to_jurisdictions(self):
        job = FleetLookupJob(registry=self.registry)

        responses = job.run(queries=[('ABC123', 'NY')],
                            jurisdictions=['IL'],
                            is_dry_run=True)

        self.assertEqual(responses[0].status, LookupStatus.ALL_SOURCES_FAILED)
        self.assertEqual(responses[0].violations, [])

    @mock.patch('parking_citations.jobs.fleet_lookup_job.build_default_registry')
    def test_perform_without_queries(self, mocked_build_default_registry):
        self.assertEqual(FleetLookupJob().run(queries=[]), [])

        mocked_build_default_registry.assert_not_called()

    def test_read_queries(self):
        with tempfile.NamedTemporaryFile('w', suffix='.csv',
                                         delete=False) as csv_file:
            csv_file.write('plate,state\nABC123,NY\n,NJ\nXYZ789,FL\n')

        try:
            self.assertEqual(read_queries(csv_file.name),
                             [('ABC123', 'NY'), ('XYZ789', 'FL')])
        finally:
            os.remove(csv_file.name)
