from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class PaymentCard:
    """ A stored payment instrument """

    cardholder_name: Optional[str] = None
    number: Optional[str] = field(default=None, repr=False)
    exp_month: Optional[str] = None
    exp_year: Optional[str] = None
    cvv: Optional[str] = field(default=None, repr=False)
    billing_zip: Optional[str] = None

    @property
    def masked_number(self) -> Optional[str]:
        if not self.number:
            return None
        return f'{"*" * max(len(self.number) - 4, 0)}{self.number[-4:]}'

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
