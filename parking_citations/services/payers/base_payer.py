import logging
import requests

from decimal import Decimal
from typing import Any, Optional

from parking_citations.constants.lookup_statuses import PaymentOutcome
from parking_citations.models.payment_card import PaymentCard
from parking_citations.models.response.payment_response import \
    PaymentResponse
from parking_citations.services.constants.exceptions import \
    APIFailureException

LOG = logging.getLogger(__name__)


class BasePayer:
    """Pays one citation at the jurisdiction that issued it.

    pay() always verifies the citation with _find_case before calling
    _charge. A missing case, a closed case, or an error while verifying
    ends the attempt with VERIFICATION_FAILED and no charge is made.
    """

    NAME: str = ''
    JURISDICTION: str = ''

    EXPECTED_ERRORS = (APIFailureException,
                       requests.RequestException,
                       KeyError,
                       ValueError)

    def __init__(self, default_payment_card: Optional[PaymentCard] = None):
        self.default_payment_card = default_payment_card

    @property
    def jurisdiction(self) -> str:
        return self.JURISDICTION

    @property
    def name(self) -> str:
        return self.NAME

    def pay(self,
            citation_number: str,
            amount: Decimal,
            payment_card: Optional[PaymentCard] = None) -> PaymentResponse:

        try:
            case: Optional[Any] = self._find_case(
                citation_number=citation_number)

        except self.EXPECTED_ERRORS as exc:
            LOG.error(f'{self.name} could not verify citation '
                      f'{citation_number}: {exc}')

            return PaymentResponse(
                success=False,
                outcome=PaymentOutcome.VERIFICATION_FAILED,
                cause=exc,
                message=str(exc))

        except Exception as exc:
            LOG.exception(f'{self.name} failed unexpectedly verifying citation '
                          f'{citation_number}: {exc}')

            return PaymentResponse(
                success=False,
                outcome=PaymentOutcome.VERIFICATION_FAILED,
                cause=exc,
                message=str(exc))

        if case is None:
            LOG.info(f'{self.name} has no outstanding case for citation '
                     f'{citation_number}')

            return PaymentResponse(
                success=False,
                outcome=PaymentOutcome.VERIFICATION_FAILED,
                message=f'citation {citation_number} not found or not outstanding')

        try:
            response: PaymentResponse = self._charge(
                citation_number=citation_number,
                amount=amount,
                payment_card=payment_card or self.default_payment_card,
                case=case)

        except self.EXPECTED_ERRORS as exc:
            LOG.error(f'{self.name} payment of citation {citation_number} '
                      f'failed: {exc}')

            return PaymentResponse(
                success=False,
                outcome=PaymentOutcome.CHARGE_FAILED,
                cause=exc,
                message=str(exc))

        except Exception as exc:
            LOG.exception(f'{self.name} payment of citation {citation_number} '
                          f'failed unexpectedly: {exc}')

            return PaymentResponse(
                success=False,
                outcome=PaymentOutcome.CHARGE_FAILED,
                cause=exc,
                message=str(exc))

        if response.success:
            LOG.info(f'{self.name} paid citation {citation_number} '
                     f'for ${amount}')
        else:
            LOG.error(f'{self.name} rejected payment of citation '
                      f'{citation_number}: {response.message}')

        return response

    def _charge(self,
                citation_number: str,
                amount: Decimal,
                payment_card: Optional[PaymentCard],
                case: Any) -> PaymentResponse:
        raise NotImplementedError(
            'Subclassed payer must implement this method.')

    def _find_case(self, citation_number: str) -> Optional[Any]:
        raise NotImplementedError(
            'Subclassed payer must implement this method.')

    def __repr__(self) -> str:
        return f'<{type(self).__name__} {self.jurisdiction} {self.name!r}>'
