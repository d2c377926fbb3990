from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FinderError:
    """ Delivered to a finder's error listeners once per failed search. """
    finder_name: str
    plate: str
    state: Optional[str]
    message: str

    cause: Optional[BaseException] = None
