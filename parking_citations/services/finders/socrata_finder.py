import logging
import requests_futures.sessions

from decimal import Decimal
from typing import Any, Dict, List, Optional

from parking_citations import settings
from parking_citations.models.violation import Violation
from parking_citations.services.apis import sessions
from parking_citations.services.constants.exceptions import \
    APIFailureException
from parking_citations.services.finders.base_finder import BaseFinder
from parking_citations.services.finders.queries import socrata

LOG = logging.getLogger(__name__)


class SocrataFinder(BaseFinder):
    """Base for city datasets published through a Socrata open data portal.

    Subclasses name the dataset and map a raw row onto a Violation.
    """

    BASE_URL: str = ''
    DATASET_ID: str = ''

    DEFAULT_LIMIT = 1000
    MAX_RECORDS = 10_000

    PLATE_FIELD = 'plate'
    STATE_FIELD = 'state'
    ORDER_FIELD = 'issue_date'

    PAID = 'paid'
    DISPUTED = 'disputed'
    NEW = 'new'

    def __init__(self, app_token: Optional[str] = None):
        super().__init__()

        s_req = requests_futures.sessions.FuturesSession(max_workers=4)

        s_req.headers.update({'Accept': 'application/json'})

        token: str = settings.SOCRATA_APP_TOKEN if app_token is None \
            else app_token
        if token:
            s_req.headers.update({'X-App-Token': token})

        self.api = sessions.mount_retries(s_req)

    def find_all(self, plate: str, state: str) -> List[Violation]:
        """Page through every matching row, up to MAX_RECORDS."""
        violations: List[Violation] = []
        offset = 0

        while offset < self.MAX_RECORDS:
            batch: List[Violation] = self._search_page(
                plate=plate,
                state=state,
                limit=self.DEFAULT_LIMIT,
                offset=offset)

            violations.extend(batch)

            if len(batch) < self.DEFAULT_LIMIT:
                break

            offset += self.DEFAULT_LIMIT

        return violations

    def _map_to_violation(self, record: Dict[str, Any]) -> Violation:
        raise NotImplementedError(
            'Subclassed finder must implement this method.')

    def _perform_query(self, query_string: str) -> List[Dict[str, Any]]:
        response = self.api.get(query_string,
                                timeout=sessions.DEFAULT_TIMEOUT_SECONDS)

        result = response.result()

        sessions.raise_for_status_range(response=result, url=query_string)

        data = result.json()

        if not isinstance(data, list):
            raise APIFailureException(
                f'unexpected payload when accessing {query_string}')

        return data

    def _search(self, plate: str, state: str) -> List[Violation]:
        return self._search_page(plate=plate,
                                 state=state,
                                 limit=self.DEFAULT_LIMIT,
                                 offset=0)

    def _search_page(self,
                     plate: str,
                     state: str,
                     limit: int,
                     offset: int) -> List[Violation]:
        if not plate or not plate.strip():
            return []

        query_string: str = socrata.get_violations_query(
            base_url=self.BASE_URL,
            dataset_id=self.DATASET_ID,
            plate=plate.strip().upper().replace(' ', ''),
            state=(state or self.jurisdiction).strip().upper(),
            plate_field=self.PLATE_FIELD,
            state_field=self.STATE_FIELD,
            order_field=self.ORDER_FIELD,
            limit=limit,
            offset=offset)

        records: List[Dict[str, Any]] = self._perform_query(
            query_string=query_string)

        LOG.debug(f'{self.name} data for {state}:{plate}: {records}')

        return [self._map_to_violation(record) for record in records]

    @classmethod
    def _determine_payment_status(cls,
                                  amount_due: Decimal,
                                  status: Optional[str]) -> str:
        if amount_due == 0:
            return cls.PAID

        if status:
            upper_status = status.upper()

            if 'PAID' in upper_status:
                return cls.PAID

            if any(term in upper_status
                   for term in ('HEARING', 'DISPUTE', 'CONTEST')):
                return cls.DISPUTED

        return cls.NEW
