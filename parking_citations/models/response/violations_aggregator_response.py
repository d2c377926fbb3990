from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List

from parking_citations.constants.lookup_statuses import LookupStatus
from parking_citations.models.source_failure import SourceFailure
from parking_citations.models.violation import Violation


@dataclass(frozen=True)
class ViolationsAggregatorResponse:
    """ Represents the merged results of a lookup across all sources."""
    status: LookupStatus

    failures: List[SourceFailure] = field(default_factory=list)
    sources_queried: int = 0
    violations: List[Violation] = field(default_factory=list)

    @property
    def data_available(self) -> bool:
        return self.status == LookupStatus.SUCCESS

    @property
    def success(self) -> bool:
        return self.status == LookupStatus.SUCCESS

    def total_amount(self) -> Decimal:
        return sum((violation.amount for violation in self.violations),
                   Decimal('0'))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'failures': [failure.to_dict() for failure in self.failures],
            'sources_queried': self.sources_queried,
            'status': self.status.value,
            'total_amount': f'{self.total_amount():.2f}',
            'violations': [violation.to_dict()
                           for violation in self.violations],
        }
