import logging

from collections import OrderedDict
from typing import Dict, FrozenSet, Iterable, List, Optional, Union

from parking_citations.constants.jurisdictions import (ALL_JURISDICTIONS,
    KNOWN_JURISDICTIONS, NATIONWIDE)
from parking_citations.models.finder_info import FinderInfo
from parking_citations.services.constants.exceptions import (
    ConfigurationException, DuplicatePayerException, RegistryFrozenException,
    UnknownJurisdictionException)
from parking_citations.services.finders.base_finder import BaseFinder
from parking_citations.services.payers.base_payer import BasePayer
from parking_citations.utils import string_utils

LOG = logging.getLogger(__name__)


class SourceRegistry:
    """Maps jurisdiction codes to the finders and the payer serving them.

    Any number of finders may serve a jurisdiction, kept in registration
    order. A jurisdiction has at most one payer. Once frozen the registry
    is read-only and can be shared across concurrent lookups.
    """

    def __init__(self,
                 finders: Iterable[BaseFinder] = (),
                 payers: Iterable[BasePayer] = ()):
        self._finders: Dict[str, List[BaseFinder]] = OrderedDict()
        self._payers: Dict[str, BasePayer] = {}
        self._frozen = False

        for finder in finders:
            self.register_finder(finder)

        for payer in payers:
            self.register_payer(payer)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def describe_finders(self, state: Optional[str] = None) -> List[FinderInfo]:
        """List registered finders, optionally those serving one state.
        Nationwide finders are included for every state.
        """
        if state is None:
            finders = self.all_finders()
        else:
            finders = self.finders_for([state])

        return [finder.info() for finder in finders]

    def all_finders(self) -> List[BaseFinder]:
        return [finder for finders in self._finders.values()
                for finder in finders]

    def finders_for(self,
                    jurisdictions: Union[Iterable[str], str]
                    ) -> List[BaseFinder]:
        if jurisdictions == ALL_JURISDICTIONS:
            return self.all_finders()

        codes: List[str] = []
        for jurisdiction in jurisdictions:
            code = self._validate_jurisdiction(jurisdiction)
            if code not in codes:
                codes.append(code)

        if codes and NATIONWIDE not in codes:
            codes.append(NATIONWIDE)

        return [finder for code in codes
                for finder in self._finders.get(code, [])]

    def freeze(self) -> 'SourceRegistry':
        self._frozen = True
        return self

    def jurisdictions(self) -> FrozenSet[str]:
        return frozenset(self._finders.keys()) | frozenset(self._payers.keys())

    def payer_for(self, jurisdiction: str) -> Optional[BasePayer]:
        return self._payers.get(self._validate_jurisdiction(jurisdiction))

    def register_finder(self, finder: BaseFinder) -> None:
        self._ensure_not_frozen()

        code: str = self._validate_jurisdiction(finder.jurisdiction)

        self._finders.setdefault(code, []).append(finder)

        LOG.debug(f'registered finder {finder.name} for {code}')

    def register_payer(self, payer: BasePayer) -> None:
        self._ensure_not_frozen()

        code: str = self._validate_jurisdiction(payer.jurisdiction)

        existing: Optional[BasePayer] = self._payers.get(code)
        if existing is not None:
            raise DuplicatePayerException(
                f'{code} already has payer {existing.name}, '
                f'cannot also register {payer.name}')

        self._payers[code] = payer

        LOG.debug(f'registered payer {payer.name} for {code}')

    def _ensure_not_frozen(self) -> None:
        if self._frozen:
            raise RegistryFrozenException(
                'sources cannot be registered after the registry is frozen')

    def _validate_jurisdiction(self, jurisdiction: str) -> str:
        code: str = string_utils.normalize_jurisdiction(jurisdiction)

        if code not in KNOWN_JURISDICTIONS:
            raise UnknownJurisdictionException(
                f'unknown jurisdiction code: {jurisdiction!r}')

        return code


def build_default_registry() -> SourceRegistry:
    """Wire up every bundled finder and payer. Sources whose settings are
    missing are skipped with a warning rather than failing startup.
    """
    from parking_citations.services.finders.broward_finder import \
        BrowardFinder
    from parking_citations.services.finders.nyc_socrata_finder import \
        NYCSocrataFinder
    from parking_citations.services.finders.t2_portal_finders import (
        ColumbusPdFinder, EiuParkingFinder, FortWayneViolationsFinder, PaceFinder,
        UnlptsFinder)
    from parking_citations.services.payers.broward_payer import BrowardPayer

    registry = SourceRegistry()

    for finder_class in (EiuParkingFinder, UnlptsFinder,
                         FortWayneViolationsFinder, ColumbusPdFinder,
                         NYCSocrataFinder, PaceFinder, BrowardFinder):
        try:
            registry.register_finder(finder_class())
        except ConfigurationException as exc:
            LOG.warning(f'skipping finder {finder_class.__name__}: {exc}')

    for payer_class in (BrowardPayer,):
        try:
            registry.register_payer(payer_class())
        except DuplicatePayerException:
            raise
        except ConfigurationException as exc:
            LOG.warning(f'skipping payer {payer_class.__name__}: {exc}')

    return registry.freeze()
