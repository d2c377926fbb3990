import ddt
import mock
import unittest

from decimal import Decimal

from parking_citations.constants import endpoints
from parking_citations.services.constants.exceptions import \
    APIFailureException
from parking_citations.services.finders.nyc_socrata_finder import \
    NYCSocrataFinder


def _build_record(summons_number: str, **overrides):
    record = {
        'amount_due': '0',
        'county': 'NY',
        'fine_amount': '65',
        'interest_amount': '0',
        'issue_date': '09/18/2019',
        'issuing_agency': 'TRAFFIC',
        'license_type': 'PAS',
        'penalty_amount': '0',
        'plate': 'ABC1234',
        'precinct': '019',
        'reduction_amount': '0',
        'state': 'NY',
        'summons_image': {
            'url': f'http://nycserv.nyc.gov/NYCServWeb/ShowImage?searchID={summons_number}',
            'description': 'View Summons'},
        'summons_number': summons_number,
        'violation': 'NO PARKING-STREET CLEANING',
        'violation_status': None,
        'violation_time': '09:14A',
    }
    record.update(overrides)
    return record


@ddt.ddt
class TestNYCSocrataFinder(unittest.TestCase):

    def setUp(self):
        self.finder = NYCSocrataFinder(app_token='')

    @mock.patch(
        'parking_citations.services.finders.nyc_socrata_finder.'
        'NYCSocrataFinder._perform_query')
    def test_find_maps_records(self, mocked_perform_query):
        mocked_perform_query.return_value = [
            _build_record('1234567890',
                          amount_due='115.00',
                          penalty_amount='50',
                          violation_status='HEARING HELD-GUILTY')]

        response = self.finder.find('abc1234', 'ny')

        self.assertTrue(response.success)
        self.assertEqual(len(response.data), 1)

        violation = response.data[0]

        self.assertEqual(violation.agency, 'NYC TRAFFIC')
        self.assertEqual(violation.amount, Decimal('115.00'))
        self.assertEqual(violation.citation_number, '1234567890')
        self.assertEqual(violation.description, 'NO PARKING-STREET CLEANING')
        self.assertEqual(
            violation.image_url,
            'http://nycserv.nyc.gov/NYCServWeb/ShowImage?searchID=1234567890')
        self.assertEqual(violation.issue_date, '2019-09-18')
        self.assertEqual(violation.jurisdiction, 'NY')
        self.assertEqual(violation.link,
                         endpoints.NYC_OPEN_PARKING_AND_CAMERA_VIOLATIONS_LINK)
        self.assertEqual(violation.location, 'Precinct 019, NY County')
        self.assertEqual(violation.note,
                         'Violation: NO PARKING-STREET CLEANING | '
                         'Time: 09:14A | License Type: PAS | '
                         'Status: HEARING HELD-GUILTY | Penalty: $50.00')
        self.assertEqual(violation.notice_number, '1234567890')
        self.assertEqual(violation.source_name, 'NYC Socrata')
        self.assertEqual(violation.status, 'disputed')

        query_string = mocked_perform_query.call_args.kwargs['query_string']

        self.assertIn("upper(plate)='ABC1234'", query_string)
        self.assertIn("upper(state)='NY'", query_string)

    @ddt.data(
        {'record': {'amount_due': '0'}, 'amount': '65', 'status': 'paid'},
        {'record': {'amount_due': '45.50'}, 'amount': '45.50', 'status': 'new'},
        {'record': {'amount_due': '', 'penalty_amount': '10',
                    'interest_amount': '1.25', 'reduction_amount': '6.25'},
         'amount': '70.00', 'status': 'paid'},
        {'record': {'amount_due': '0', 'fine_amount': '20',
                    'reduction_amount': '35'},
         'amount': '0', 'status': 'paid'},
        {'record': {'amount_due': '65', 'violation_status': 'PAID IN FULL'},
         'amount': '65', 'status': 'paid'},
    )
    @ddt.unpack
    def test_amounts_and_statuses(self, record, amount, status):
        violation = self.finder._map_to_violation(
            _build_record('1111111111', **record))

        self.assertEqual(violation.amount, Decimal(amount))
        self.assertEqual(violation.status, status)

    def test_missing_issuing_agency(self):
        violation = self.finder._map_to_violation(
            _build_record('1111111111', issuing_agency=None))

        self.assertEqual(violation.agency, 'NYC DOF')

    @mock.patch(
        'parking_citations.services.finders.nyc_socrata_finder.'
        'NYCSocrataFinder._perform_query')
    def test_find_with_failing_dataset(self, mocked_perform_query):
        mocked_perform_query.side_effect = APIFailureException(
            'server error when accessing nyc open data')

        response = self.finder.find('ABC1234', 'NY')

        self.assertFalse(response.success)
        self.assertEqual(response.data, [])
        self.assertEqual(response.message,
                         'server error when accessing nyc open data')

    @mock.patch(
        'parking_citations.services.finders.nyc_socrata_finder.'
        'NYCSocrataFinder._perform_query')
    def test_find_with_blank_plate(self, mocked_perform_query):
        response = self.finder.find('  ', 'NY')

        self.assertTrue(response.success)
        self.assertEqual(response.data, [])
        mocked_perform_query.assert_not_called()

    @mock.patch(
        'parking_citations.services.finders.nyc_socrata_finder.'
        'NYCSocrataFinder._perform_query')
    def test_find_all_pages_through_results(self, mocked_perform_query):
        self.finder.DEFAULT_LIMIT = 2

        mocked_perform_query.side_effect = [
            [_build_record('1'), _build_record('2')],
            [_build_record('3'), _build_record('4')],
            [_build_record('5')]]

        violations = self.finder.find_all('ABC1234', 'NY')

        self.assertEqual([v.citation_number for v in violations],
                         ['1', '2', '3', '4', '5'])

        query_strings = [call.kwargs['query_string']
                         for call in mocked_perform_query.call_args_list]

        self.assertNotIn('$offset', query_strings[0])
        self.assertTrue(query_strings[1].endswith('&$offset=2'))
        self.assertTrue(query_strings[2].endswith('&$offset=4'))

    def test_perform_query_rejects_non_list_payload(self):
        response = mock.MagicMock(status_code=200)
        response.json.return_value = {'error': True}

        future = mock.MagicMock()
        future.result.return_value = response

        with mock.patch.object(self.finder.api, 'get', return_value=future):
            with self.assertRaises(APIFailureException):
                self.finder._perform_query(query_string='https://example.com')
