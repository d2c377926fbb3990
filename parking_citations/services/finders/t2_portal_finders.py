import logging
import re

from bs4 import BeautifulSoup
from typing import Any, Dict, List, Optional

from parking_citations import settings
from parking_citations.constants import endpoints
from parking_citations.models.violation import Violation
from parking_citations.services.apis import sessions
from parking_citations.services.finders.base_finder import BaseFinder
from parking_citations.utils import string_utils

LOG = logging.getLogger(__name__)


class T2PortalFinder(BaseFinder):
    """Base for campus and municipal parking portals hosted on t2hosted.com.

    The portal answers a plate search with an HTML page holding a table of
    citations. Columns are matched by header text since each portal
    orders and labels them a little differently.
    """

    COLUMN_ALIASES = {
        'amount': ('balance due', 'amount due', 'balance', 'amount', 'fine'),
        'citation_number': ('citation number', 'citation #', 'citation',
                            'ticket number', 'ticket'),
        'description': ('violation', 'description', 'reason'),
        'issue_date': ('issue date', 'date issued', 'date'),
        'location': ('location', 'lot'),
        'plate': ('plate', 'license plate'),
        'status': ('status',),
    }

    NO_RESULTS_PATTERN = re.compile(r'no (citations|results|records) (were )?found',
                                    re.IGNORECASE)

    def __init__(self, search_path: Optional[str] = None):
        super().__init__()

        self.search_path: str = search_path or settings.T2_CITATION_SEARCH_PATH
        self.api = sessions.build_session(headers={'Accept': 'text/html'})

    def _search(self, plate: str, state: str) -> List[Violation]:
        url = f'{self.link}{self.search_path}'

        response = self.api.post(
            url,
            data={'PlateNumber': plate, 'PlateState': state},
            timeout=sessions.DEFAULT_TIMEOUT_SECONDS)

        sessions.raise_for_status_range(response=response, url=url)

        return self._parse_citations(html=response.text,
                                     plate=plate,
                                     state=state)

    def _parse_citations(self,
                         html: str,
                         plate: str,
                         state: str) -> List[Violation]:
        soup = BeautifulSoup(html, 'html.parser')

        table = self._find_citations_table(soup)

        if table is None:
            if self.NO_RESULTS_PATTERN.search(soup.get_text(' ')):
                return []

            raise ValueError(f'{self.name} returned no citation table')

        rows = table.find_all('tr')
        if not rows:
            return []

        headers: List[str] = [
            ' '.join(cell.get_text(strip=True).split()).lower()
            for cell in rows[0].find_all(['th', 'td'])]

        columns: Dict[str, int] = self._map_columns(headers)

        if 'citation_number' not in columns:
            raise ValueError(
                f'{self.name} citation table has no citation column: {headers}')

        violations: List[Violation] = []

        for row in rows[1:]:
            cells: List[str] = [' '.join(cell.get_text(strip=True).split())
                                for cell in row.find_all(['td', 'th'])]

            record: Dict[str, Any] = {
                field: cells[index] for field, index in columns.items()
                if index < len(cells)}

            if not record.get('citation_number'):
                continue

            violations.append(Violation(
                citation_number=record['citation_number'],
                amount=string_utils.parse_amount(record.get('amount')),
                agency=self.name,
                description=record.get('description'),
                issue_date=string_utils.parse_date(record.get('issue_date')),
                location=record.get('location'),
                plate=record.get('plate') or plate,
                plate_state=state,
                status=record.get('status')))

        return violations

    def _find_citations_table(self, soup: BeautifulSoup) -> Optional[Any]:
        table = soup.find('table', id=re.compile('citation', re.IGNORECASE))
        if table:
            return table

        tables = soup.find_all(
            'table', class_=lambda x: x and 'citation' in x.lower())
        if tables:
            return tables[0]

        for table in soup.find_all('table'):
            header_text = table.find('tr').get_text(' ').lower() \
                if table.find('tr') else ''
            if 'citation' in header_text:
                return table

        return None

    def _map_columns(self, headers: List[str]) -> Dict[str, int]:
        columns: Dict[str, int] = {}

        for field, aliases in self.COLUMN_ALIASES.items():
            for alias in aliases:
                if alias in headers:
                    columns[field] = headers.index(alias)
                    break

        return columns


class ColumbusPdFinder(T2PortalFinder):
    NAME = 'Columbus PD'
    JURISDICTION = 'IN'
    LINK = endpoints.COLUMBUS_PD_URL


class EiuParkingFinder(T2PortalFinder):
    NAME = 'Eastern Illinois University'
    JURISDICTION = 'IL'
    LINK = endpoints.EIU_PARKING_URL


class FortWayneViolationsFinder(T2PortalFinder):
    NAME = 'Fort Wayne'
    JURISDICTION = 'IN'
    LINK = endpoints.FORT_WAYNE_VIOLATIONS_URL


class PaceFinder(T2PortalFinder):
    NAME = 'Pace University (Westchester/NYC)'
    JURISDICTION = 'NY'
    LINK = endpoints.PACE_URL


class UnlptsFinder(T2PortalFinder):
    NAME = 'University of Nebraska Lincoln'
    JURISDICTION = 'NE'
    LINK = endpoints.UNLPTS_URL
