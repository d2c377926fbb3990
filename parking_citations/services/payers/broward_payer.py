import logging

from decimal import Decimal
from typing import Any, Dict, Optional

from parking_citations import settings
from parking_citations.constants.lookup_statuses import PaymentOutcome
from parking_citations.models.payment_card import PaymentCard
from parking_citations.models.response.payment_response import \
    PaymentResponse
from parking_citations.services.apis.broward_clerk_api import \
    BrowardClerkApiClient
from parking_citations.services.payers.base_payer import BasePayer

LOG = logging.getLogger(__name__)


class BrowardPayer(BasePayer):

    NAME = 'Broward Clerk'
    JURISDICTION = 'FL'

    CLOSED_STATUSES = ('closed', 'paid', 'disposed')

    def __init__(self,
                 api_client: Optional[BrowardClerkApiClient] = None,
                 default_payment_card: Optional[PaymentCard] = None):
        super().__init__(default_payment_card=default_payment_card)

        self.api_client = api_client or BrowardClerkApiClient(
            base_url=settings.BROWARD_BASE_URL,
            api_key=settings.BROWARD_API_KEY)

    def _charge(self,
                citation_number: str,
                amount: Decimal,
                payment_card: Optional[PaymentCard],
                case: Any) -> PaymentResponse:
        result: Dict[str, Any] = self.api_client.pay_citation(
            citation_number=citation_number,
            amount=amount,
            payment_card=payment_card)

        success: bool = bool(result.get('success'))

        return PaymentResponse(
            success=success,
            outcome=PaymentOutcome.PAID if success else PaymentOutcome.CHARGE_FAILED,
            authorization_code=result.get('authorizationcode'),
            message=result.get('message'),
            receipt_number=result.get('receiptnumber'))

    def _find_case(self, citation_number: str) -> Optional[Dict[str, Any]]:
        case: Optional[Dict[str, Any]] = \
            self.api_client.find_case_by_citation_number(citation_number)

        if not isinstance(case, dict):
            if case is not None:
                LOG.warning(f'Unexpected Broward case payload for '
                            f'{citation_number}: {case!r}')
            return None

        status: str = str(case.get('status') or case.get('Status') or '')
        if status.strip().lower() in self.CLOSED_STATUSES:
            return None

        return case
