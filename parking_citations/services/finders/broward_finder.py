from typing import Any, Dict, List, Optional

from parking_citations import settings
from parking_citations.constants import endpoints
from parking_citations.models.violation import Violation
from parking_citations.services.apis.broward_clerk_api import \
    BrowardClerkApiClient
from parking_citations.services.finders.base_finder import BaseFinder
from parking_citations.utils import string_utils


class BrowardFinder(BaseFinder):

    NAME = 'Broward Clerk'
    JURISDICTION = 'FL'
    LINK = endpoints.BROWARD_CLERK_LINK

    def __init__(self, api_client: Optional[BrowardClerkApiClient] = None):
        super().__init__()

        self.api_client = api_client or BrowardClerkApiClient(
            base_url=settings.BROWARD_BASE_URL,
            api_key=settings.BROWARD_API_KEY)

    def _search(self, plate: str, state: str) -> List[Violation]:
        records: List[Dict[str, Any]] = \
            self.api_client.search_violations_by_plate(
                license_plate=plate, state=state)

        return [Violation(
                    citation_number=record['citationnumber'],
                    amount=string_utils.parse_amount(record.get('amount')),
                    agency=self.name,
                    issue_date=string_utils.parse_date(record.get('issuedate')),
                    plate=record.get('licenseplate') or plate,
                    plate_state=record.get('state') or state,
                    status=record.get('status'))
                for record in records]
