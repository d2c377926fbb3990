from dataclasses import asdict, dataclass, replace
from decimal import Decimal
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Violation:
    """ Represents one citation reported by a source.

    Financial fields are whatever the source reported. Only the
    attribution fields (link, jurisdiction, source_name) are ever filled
    in after the fact.
    """

    citation_number: str
    amount: Decimal = Decimal('0')

    agency: Optional[str] = None
    currency: str = 'USD'
    description: Optional[str] = None
    image_url: Optional[str] = None
    issue_date: Optional[str] = None
    jurisdiction: Optional[str] = None
    link: Optional[str] = None
    location: Optional[str] = None
    note: Optional[str] = None
    notice_number: Optional[str] = None
    plate: Optional[str] = None
    plate_state: Optional[str] = None
    source_name: Optional[str] = None
    status: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', Decimal(str(self.amount)))

        if self.amount < 0:
            raise ValueError(
                f'amount for citation {self.citation_number} '
                f'cannot be negative: {self.amount}')

    def stamped(self,
                link: str,
                jurisdiction: str,
                source_name: str) -> 'Violation':
        return replace(
            self,
            jurisdiction=self.jurisdiction or jurisdiction,
            link=self.link or link,
            source_name=self.source_name or source_name)

    def with_link(self, link: str) -> 'Violation':
        return replace(self, link=link)

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result['amount'] = f'{self.amount:.2f}'
        return result
