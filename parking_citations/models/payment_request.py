from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from parking_citations.models.payment_card import PaymentCard


@dataclass(frozen=True)
class PaymentRequest:
    """ Represents a request to pay one citation at its jurisdiction """
    jurisdiction: str
    citation_number: str
    amount: Decimal

    payment_card: Optional[PaymentCard] = None
