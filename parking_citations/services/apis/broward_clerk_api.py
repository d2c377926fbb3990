import logging
import requests

from decimal import Decimal
from typing import Any, Dict, List, Optional

from parking_citations.models.payment_card import PaymentCard
from parking_citations.services.apis import sessions
from parking_citations.services.constants.exceptions import (
    APIFailureException, ConfigurationException)

LOG = logging.getLogger(__name__)


class BrowardClerkApiClient:
    """Thin client for the Broward County Clerk of Courts API."""

    CASE_SEARCH_PATH = '/api/search/number'
    PAYMENT_PATH = '/api/payments/citation'
    VIOLATION_SEARCH_PATH = '/api/violations/search'

    def __init__(self, base_url: str, api_key: Optional[str] = None):
        if not base_url or not base_url.strip():
            raise ConfigurationException(
                'Broward clerk base url must not be empty')

        self.base_url: str = base_url.strip().rstrip('/')

        headers: Dict[str, str] = {'Accept': 'application/json'}
        if api_key:
            headers['X-API-Key'] = api_key

        self.api: requests.Session = sessions.build_session(headers=headers)

    def find_case_by_citation_number(self, citation_number: str
                                     ) -> Optional[Dict[str, Any]]:
        """Return the case summary for a citation, or None if the clerk
        has no case on file for it.
        """
        response: Dict[str, Any] = self._post(
            path=self.CASE_SEARCH_PATH,
            payload={'CaseNumber': citation_number})

        if not response.get('success') or not response.get('data'):
            LOG.debug(f'No Broward case for {citation_number}: '
                      f"{response.get('message')}")
            return None

        return response['data']

    def pay_citation(self,
                     citation_number: str,
                     amount: Decimal,
                     payment_card: Optional[PaymentCard] = None
                     ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            'CitationNumber': citation_number,
            'Amount': str(amount),
            'Card': self._card_payload(payment_card),
        }

        return self._post(path=self.PAYMENT_PATH, payload=payload)

    def search_violations_by_plate(self,
                                   license_plate: str,
                                   state: str,
                                   vehicle_type: Optional[str] = None
                                   ) -> List[Dict[str, Any]]:
        params: Dict[str, str] = {'license_plate': license_plate,
                                  'state': state}

        if vehicle_type:
            params['vehicle_type'] = vehicle_type

        url = f'{self.base_url}{self.VIOLATION_SEARCH_PATH}'

        result = self.api.get(url,
                              params=params,
                              timeout=sessions.DEFAULT_TIMEOUT_SECONDS)

        sessions.raise_for_status_range(response=result, url=url)

        response: Dict[str, Any] = self._normalize_keys(result.json())

        if not response.get('success'):
            raise APIFailureException(
                f"Broward violation search failed: {response.get('message')}")

        return [self._normalize_keys(record)
                for record in response.get('data') or []]

    def _card_payload(self, payment_card: Optional[PaymentCard]
                      ) -> Optional[Dict[str, Any]]:
        if payment_card is None:
            return None

        return {
            'CardholderName': payment_card.cardholder_name,
            'Number': payment_card.number,
            'ExpMonth': payment_card.exp_month,
            'ExpYear': payment_card.exp_year,
            'Cvv': payment_card.cvv,
            'BillingZip': payment_card.billing_zip,
        }

    def _normalize_keys(self, payload: Any) -> Any:
        """Lower-case top-level keys; the clerk API is not consistent
        about casing.
        """
        if not isinstance(payload, dict):
            raise APIFailureException(
                f'unexpected payload from Broward clerk: {payload!r}')

        return {key.lower(): value for key, value in payload.items()}

    def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        url = f'{self.base_url}{path}'

        result = self.api.post(url,
                               json=payload,
                               timeout=sessions.DEFAULT_TIMEOUT_SECONDS)

        if result.status_code not in range(200, 300):
            return {'success': False, 'message': result.text}

        if not result.content:
            return {'success': False, 'message': 'Empty response'}

        return self._normalize_keys(result.json())
