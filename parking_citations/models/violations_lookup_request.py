from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional, Union

from parking_citations.constants.jurisdictions import ALL_JURISDICTIONS
from parking_citations.services.constants.exceptions import \
    InvalidLookupRequestException
from parking_citations.utils import string_utils


@dataclass(frozen=True)
class ViolationsLookupRequest:
    """ Represents a plate query to be fanned out to the finders """
    plate: str
    state: str
    jurisdictions: Union[FrozenSet[str], str] = ALL_JURISDICTIONS

    @classmethod
    def build(cls,
              plate: str,
              state: str,
              jurisdictions: Optional[Iterable[str]] = None
              ) -> 'ViolationsLookupRequest':
        normalized_plate: str = string_utils.normalize_plate(plate)

        if not normalized_plate:
            raise InvalidLookupRequestException('plate must not be empty')

        if jurisdictions is None or jurisdictions == ALL_JURISDICTIONS:
            targets = ALL_JURISDICTIONS
        else:
            targets = frozenset(
                string_utils.normalize_jurisdiction(code)
                for code in jurisdictions if code and code.strip())

            if ALL_JURISDICTIONS in targets:
                targets = ALL_JURISDICTIONS

        return cls(
            plate=normalized_plate,
            state=string_utils.normalize_jurisdiction(state),
            jurisdictions=targets)

    def searches_all_jurisdictions(self) -> bool:
        return self.jurisdictions == ALL_JURISDICTIONS
