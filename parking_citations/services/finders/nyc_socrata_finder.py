from decimal import Decimal
from typing import Any, Dict, List

from parking_citations.constants import endpoints
from parking_citations.models.violation import Violation
from parking_citations.services.finders.socrata_finder import SocrataFinder
from parking_citations.utils import string_utils


class NYCSocrataFinder(SocrataFinder):
    """ NYC 'Open Parking and Camera Violations' dataset """

    NAME = 'NYC Socrata'
    JURISDICTION = 'NY'
    LINK = endpoints.NYC_OPEN_PARKING_AND_CAMERA_VIOLATIONS_LINK

    BASE_URL = endpoints.NYC_OPEN_DATA_BASE_URL
    DATASET_ID = endpoints.NYC_OPEN_PARKING_AND_CAMERA_VIOLATIONS_DATASET

    def _map_to_violation(self, record: Dict[str, Any]) -> Violation:
        fine_amount: Decimal = string_utils.parse_amount(record.get('fine_amount'))
        penalty_amount: Decimal = string_utils.parse_amount(record.get('penalty_amount'))
        interest_amount: Decimal = string_utils.parse_amount(record.get('interest_amount'))
        reduction_amount: Decimal = string_utils.parse_amount(record.get('reduction_amount'))
        amount_due: Decimal = string_utils.parse_amount(record.get('amount_due'))

        if amount_due > 0:
            amount = amount_due
        else:
            amount = max(fine_amount + penalty_amount + interest_amount
                         - reduction_amount, Decimal('0'))

        summons_image: Dict[str, Any] = record.get('summons_image') or {}

        return Violation(
            citation_number=record['summons_number'],
            amount=amount,
            description=record.get('violation'),
            image_url=summons_image.get('url'),
            issue_date=string_utils.parse_date(record.get('issue_date')),
            location=(f"Precinct {record.get('precinct')}, "
                      f"{record.get('county')} County"),
            note=self._build_note(record),
            notice_number=record['summons_number'],
            plate=record.get('plate'),
            plate_state=record.get('state'),
            agency=f"NYC {record.get('issuing_agency') or 'DOF'}",
            status=self._determine_payment_status(
                amount_due=amount_due,
                status=record.get('violation_status')))

    def _build_note(self, record: Dict[str, Any]) -> str:
        parts: List[str] = []

        if record.get('violation'):
            parts.append(f"Violation: {record['violation']}")

        if record.get('violation_time'):
            parts.append(f"Time: {record['violation_time']}")

        if record.get('license_type'):
            parts.append(f"License Type: {record['license_type']}")

        if record.get('violation_status'):
            parts.append(f"Status: {record['violation_status']}")

        penalty: Decimal = string_utils.parse_amount(record.get('penalty_amount'))
        interest: Decimal = string_utils.parse_amount(record.get('interest_amount'))

        if penalty > 0:
            parts.append(f'Penalty: ${penalty:.2f}')

        if interest > 0:
            parts.append(f'Interest: ${interest:.2f}')

        return ' | '.join(parts)
