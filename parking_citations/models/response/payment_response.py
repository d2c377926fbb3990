from dataclasses import dataclass
from typing import Any, Dict, Optional

from parking_citations.constants.lookup_statuses import PaymentOutcome


@dataclass(frozen=True)
class PaymentResponse:
    """ Represents the outcome of a payment attempt.

    · VERIFICATION_FAILED means there was nothing to pay
    · CHARGE_FAILED means a charge was attempted and did not go through
    """
    success: bool
    outcome: PaymentOutcome

    authorization_code: Optional[str] = None
    cause: Optional[BaseException] = None
    message: Optional[str] = None
    receipt_number: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'authorization_code': self.authorization_code,
            'message': self.message,
            'outcome': self.outcome.value,
            'receipt_number': self.receipt_number,
            'success': self.success,
        }
