import logging
import requests
import threading

from typing import Callable, List

from parking_citations.models.finder_error import FinderError
from parking_citations.models.finder_info import FinderInfo
from parking_citations.models.response.finder_response import FinderResponse
from parking_citations.models.violation import Violation
from parking_citations.services.constants.exceptions import \
    APIFailureException

LOG = logging.getLogger(__name__)

ErrorListener = Callable[[FinderError], None]


class BaseFinder:
    """Searches one jurisdiction's citation records for a plate.

    Subclasses set NAME, JURISDICTION and LINK and implement _search.
    find() never raises when _search fails: it notifies the
    error listeners once and hands back an unsuccessful FinderResponse
    with no data. Implementations must tolerate concurrent calls.
    """

    NAME: str = ''
    JURISDICTION: str = ''
    LINK: str = ''

    EXPECTED_ERRORS = (APIFailureException,
                       requests.RequestException,
                       KeyError,
                       ValueError)

    def __init__(self):
        self._error_listeners: List[ErrorListener] = []
        self._listeners_lock = threading.Lock()

    @property
    def jurisdiction(self) -> str:
        return self.JURISDICTION

    @property
    def link(self) -> str:
        return self.LINK

    @property
    def name(self) -> str:
        return self.NAME

    def add_error_listener(self, listener: ErrorListener) -> None:
        with self._listeners_lock:
            self._error_listeners.append(listener)

    def remove_error_listener(self, listener: ErrorListener) -> None:
        with self._listeners_lock:
            if listener in self._error_listeners:
                self._error_listeners.remove(listener)

    def find(self, plate: str, state: str) -> FinderResponse:
        try:
            violations: List[Violation] = self._search(plate=plate,
                                                       state=state)

        except self.EXPECTED_ERRORS as exc:
            LOG.error(f'{self.name} lookup failed for {state}:{plate}: {exc}')

            self._notify_error(FinderError(
                finder_name=self.name,
                plate=plate,
                state=state,
                message=str(exc),
                cause=exc))

            return FinderResponse(success=False,
                                  cause=exc,
                                  message=str(exc))

        except Exception as exc:
            LOG.exception(f'{self.name} lookup failed unexpectedly for '
                          f'{state}:{plate}: {exc}')

            self._notify_error(FinderError(
                finder_name=self.name,
                plate=plate,
                state=state,
                message=str(exc),
                cause=exc))

            return FinderResponse(success=False,
                                  cause=exc,
                                  message=str(exc))

        LOG.debug(f'{self.name} found {len(violations)} violation(s) '
                  f'for {state}:{plate}')

        return FinderResponse(
            success=True,
            data=[violation.with_link(self.link).stamped(
                      link=self.link,
                      jurisdiction=self.jurisdiction,
                      source_name=self.name)
                  for violation in violations])

    def info(self) -> FinderInfo:
        return FinderInfo(class_name=type(self).__name__,
                          jurisdiction=self.jurisdiction,
                          link=self.link,
                          name=self.name)

    def _notify_error(self, error: FinderError) -> None:
        with self._listeners_lock:
            listeners = list(self._error_listeners)

        for listener in listeners:
            try:
                listener(error)
            except Exception as exc:
                LOG.exception(
                    f'error listener for {self.name} raised: {exc}')

    def _search(self, plate: str, state: str) -> List[Violation]:
        raise NotImplementedError(
            'Subclassed finder must implement this method.')

    def __repr__(self) -> str:
        return f'<{type(self).__name__} {self.jurisdiction} {self.name!r}>'
