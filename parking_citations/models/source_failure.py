from dataclasses import dataclass
from typing import Any, Dict, Optional

from parking_citations.constants.lookup_statuses import FailureReason


@dataclass(frozen=True)
class SourceFailure:
    """ A source that could not contribute to a lookup batch """

    source_name: str
    jurisdiction: str
    plate: str
    state: Optional[str]
    reason: FailureReason
    message: str

    cause: Optional[BaseException] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'jurisdiction': self.jurisdiction,
            'message': self.message,
            'plate': self.plate,
            'reason': self.reason.value,
            'source_name': self.source_name,
            'state': self.state,
        }
