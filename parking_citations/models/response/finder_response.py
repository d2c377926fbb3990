from dataclasses import dataclass, field
from typing import List, Optional

from parking_citations.models.violation import Violation


@dataclass(frozen=True)
class FinderResponse:
    """ Represents the result of a single finder search """
    success: bool

    data: List[Violation] = field(default_factory=list)
    cause: Optional[BaseException] = None
    message: Optional[str] = None
