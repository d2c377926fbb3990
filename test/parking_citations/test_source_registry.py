import ddt
import mock
import unittest

from typing import List

from parking_citations.constants.jurisdictions import ALL_JURISDICTIONS
from parking_citations.models.finder_info import FinderInfo
from parking_citations.models.violation import Violation
from parking_citations.services.constants.exceptions import (
    DuplicatePayerException, RegistryFrozenException,
    UnknownJurisdictionException)
from parking_citations.services.finders.base_finder import BaseFinder
from parking_citations.services.payers.base_payer import BasePayer
from parking_citations.source_registry import (SourceRegistry,
    build_default_registry)


class NamedFinder(BaseFinder):

    def __init__(self, name: str, jurisdiction: str):
        super().__init__()
        self.NAME = name
        self.JURISDICTION = jurisdiction
        self.LINK = f'https://{name.lower()}.example.com'

    def _search(self, plate: str, state: str) -> List[Violation]:
        return []


class NamedPayer(BasePayer):

    def __init__(self, name: str, jurisdiction: str):
        super().__init__()
        self.NAME = name
        self.JURISDICTION = jurisdiction


@ddt.ddt
class TestSourceRegistry(unittest.TestCase):

    def setUp(self):
        self.first_ny = NamedFinder('First', 'NY')
        self.second_ny = NamedFinder('Second', 'NY')
        self.illinois = NamedFinder('Illinois', 'IL')
        self.national = NamedFinder('National', 'USA')

        self.registry = SourceRegistry(
            finders=[self.first_ny, self.illinois, self.second_ny])

    def test_register_finder_appends_in_order(self):
        self.assertEqual(self.registry.finders_for(['NY']),
                         [self.first_ny, self.second_ny])

    @ddt.data(['ny'], [' NY '], ['NY', 'ny'])
    def test_finders_for_normalizes_codes(self, jurisdictions):
        self.assertEqual(self.registry.finders_for(jurisdictions),
                         [self.first_ny, self.second_ny])

    def test_finders_for_several_jurisdictions(self):
        self.assertEqual(self.registry.finders_for(['IL', 'NY']),
                         [self.illinois, self.first_ny, self.second_ny])

    def test_finders_for_jurisdiction_without_sources(self):
        self.assertEqual(self.registry.finders_for(['TX']), [])
        self.assertEqual(self.registry.finders_for([]), [])

    def test_finders_for_all_jurisdictions(self):
        self.assertEqual(self.registry.finders_for(ALL_JURISDICTIONS),
                         [self.first_ny, self.second_ny, self.illinois])

    @ddt.data(['ZZ'], ['NY', 'New York'], [''])
    def test_finders_for_unknown_jurisdiction(self, jurisdictions):
        with self.assertRaises(UnknownJurisdictionException):
            self.registry.finders_for(jurisdictions)

    def test_nationwide_finders_serve_every_state(self):
        self.registry.register_finder(self.national)

        self.assertEqual(self.registry.finders_for(['IL']),
                         [self.illinois, self.national])
        self.assertEqual(self.registry.finders_for(['TX']), [self.national])

    def test_register_payer_for_same_jurisdiction_twice(self):
        self.registry.register_payer(NamedPayer('Broward Clerk', 'FL'))

        with self.assertRaises(DuplicatePayerException):
            self.registry.register_payer(NamedPayer('Other Clerk', 'fl'))

        self.assertEqual(self.registry.payer_for('FL').name, 'Broward Clerk')

    def test_duplicate_payer_rejected_at_construction(self):
        with self.assertRaises(DuplicatePayerException):
            SourceRegistry(payers=[NamedPayer('One', 'FL'),
                                   NamedPayer('Two', 'FL')])

    def test_payer_for_missing_jurisdiction(self):
        self.assertIsNone(self.registry.payer_for('NY'))

    def test_register_with_unknown_jurisdiction(self):
        with self.assertRaises(UnknownJurisdictionException):
            self.registry.register_finder(NamedFinder('Nowhere', 'XX'))

    def test_frozen_registry_rejects_registration(self):
        self.registry.freeze()

        self.assertTrue(self.registry.frozen)

        with self.assertRaises(RegistryFrozenException):
            self.registry.register_finder(NamedFinder('Late', 'NY'))

        with self.assertRaises(RegistryFrozenException):
            self.registry.register_payer(NamedPayer('Late', 'NY'))

        self.assertEqual(len(self.registry.finders_for(['NY'])), 2)

    def test_jurisdictions(self):
        self.registry.register_payer(NamedPayer('Broward Clerk', 'FL'))

        self.assertEqual(self.registry.jurisdictions(),
                         frozenset(['FL', 'IL', 'NY']))

    def test_describe_finders(self):
        self.registry.register_finder(self.national)

        self.assertEqual(self.registry.describe_finders('il'), [
            FinderInfo(class_name='NamedFinder',
                       jurisdiction='IL',
                       link='https://illinois.example.com',
                       name='Illinois'),
            FinderInfo(class_name='NamedFinder',
                       jurisdiction='USA',
                       link='https://national.example.com',
                       name='National')])

        self.assertEqual(len(self.registry.describe_finders()), 4)

    @mock.patch('parking_citations.services.payers.broward_payer.settings')
    @mock.patch('parking_citations.services.finders.broward_finder.settings')
    def test_build_default_registry_skips_unconfigured_sources(
            self, mocked_finder_settings, mocked_payer_settings):
        mocked_finder_settings.BROWARD_BASE_URL = ''
        mocked_finder_settings.BROWARD_API_KEY = ''
        mocked_payer_settings.BROWARD_BASE_URL = ''
        mocked_payer_settings.BROWARD_API_KEY = ''

        registry = build_default_registry()

        self.assertTrue(registry.frozen)
        self.assertIsNone(registry.payer_for('FL'))
        self.assertEqual(
            sorted(finder.name for finder in registry.all_finders()),
            ['Columbus PD',
             'Eastern Illinois University',
             'Fort Wayne',
             'NYC Socrata',
             'Pace University (Westchester/NYC)',
             'University of Nebraska Lincoln'])

    @mock.patch('parking_citations.services.payers.broward_payer.settings')
    @mock.patch('parking_citations.services.finders.broward_finder.settings')
    def test_build_default_registry_with_broward_configured(
            self, mocked_finder_settings, mocked_payer_settings):
        for mocked_settings in (mocked_finder_settings, mocked_payer_settings):
            mocked_settings.BROWARD_BASE_URL = 'https://clerk.example.com/'
            mocked_settings.BROWARD_API_KEY = 'secret'

        registry = build_default_registry()

        self.assertEqual(registry.payer_for('FL').name, 'Broward Clerk')
        self.assertEqual([finder.name for finder in registry.finders_for(['FL'])],
                         ['Broward Clerk'])
        self.assertEqual(len(registry.finders_for(['NY'])), 2)
        self.assertEqual([finder.name for finder in registry.finders_for(['IN'])],
                         ['Fort Wayne', 'Columbus PD'])
