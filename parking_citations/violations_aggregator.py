import logging
import threading
import time

from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Any, List, Optional, Set, Tuple

from parking_citations import settings
from parking_citations.constants.lookup_statuses import (FailureReason,
    LookupStatus, PaymentOutcome)
from parking_citations.models.payment_request import PaymentRequest
from parking_citations.models.response.finder_response import FinderResponse
from parking_citations.models.response.payment_response import \
    PaymentResponse
from parking_citations.models.response.violations_aggregator_response \
    import ViolationsAggregatorResponse
from parking_citations.models.source_failure import SourceFailure
from parking_citations.models.violation import Violation
from parking_citations.models.violations_lookup_request import \
    ViolationsLookupRequest
from parking_citations.services.constants.exceptions import (
    LookupCancelledException, SourceTimeoutException)
from parking_citations.services.finders.base_finder import BaseFinder
from parking_citations.services.payers.base_payer import BasePayer
from parking_citations.source_registry import SourceRegistry

LOG = logging.getLogger(__name__)


class ViolationsAggregator:
    """Fans a plate lookup out to every matching finder and merges the
    outcomes, and routes payments to the payer for a jurisdiction.

    Each finder runs in its own task and only ever produces its own
    result. Results are merged once every task has finished, the batch
    deadline has passed, or the caller's cancel event has been set.
    """

    # how often a running batch checks the cancel event
    CANCEL_POLL_SECONDS = 0.05

    def __init__(self,
                 registry: SourceRegistry,
                 max_workers: int = settings.MAX_WORKERS,
                 deadline: float = settings.LOOKUP_DEADLINE_SECONDS):
        self.registry = registry
        self.max_workers = max_workers
        self.deadline = deadline

    def look_up_violations(self,
                           lookup_request: ViolationsLookupRequest,
                           cancel_event: Optional[threading.Event] = None,
                           deadline: Optional[float] = None
                           ) -> ViolationsAggregatorResponse:
        finders: List[BaseFinder] = self.registry.finders_for(
            lookup_request.jurisdictions)

        LOG.debug(f'Looking up {lookup_request.state}:{lookup_request.plate} '
                  f'across {len(finders)} source(s)')

        if not finders:
            if lookup_request.searches_all_jurisdictions():
                requested = 'any jurisdiction'
            else:
                requested = ', '.join(sorted(lookup_request.jurisdictions))

            LOG.info(f'No sources serve {requested}')

            return ViolationsAggregatorResponse(
                status=LookupStatus.NO_SOURCES_AVAILABLE)

        executor = ThreadPoolExecutor(
            max_workers=min(self.max_workers, len(finders)),
            thread_name_prefix='finder')

        try:
            tasks: List[Tuple[BaseFinder, Future]] = [
                (finder, executor.submit(finder.find,
                                         lookup_request.plate,
                                         lookup_request.state))
                for finder in finders]

            cancelled: bool = self._wait_for_tasks(
                futures={future for _, future in tasks},
                cancel_event=cancel_event,
                deadline=self.deadline if deadline is None else deadline)

            if cancelled:
                return self._cancelled_response(
                    lookup_request=lookup_request, tasks=tasks)

            return self._merge_results(
                lookup_request=lookup_request, tasks=tasks)

        finally:
            # tasks stuck past the deadline are abandoned, not joined
            executor.shutdown(wait=False, cancel_futures=True)

    def pay_citation(self, payment_request: PaymentRequest) -> PaymentResponse:
        payer: Optional[BasePayer] = self.registry.payer_for(
            payment_request.jurisdiction)

        if payer is None:
            LOG.error(f'No payer registered for {payment_request.jurisdiction}, '
                      f'cannot pay citation {payment_request.citation_number}')

            return PaymentResponse(
                success=False,
                outcome=PaymentOutcome.NO_PAYER,
                message=(f'no payer registered for jurisdiction '
                         f'{payment_request.jurisdiction}'))

        LOG.debug(f'Routing citation {payment_request.citation_number} '
                  f'to {payer.name}')

        return payer.pay(
            citation_number=payment_request.citation_number,
            amount=payment_request.amount,
            payment_card=payment_request.payment_card)

    def _cancelled_response(self,
                            lookup_request: ViolationsLookupRequest,
                            tasks: List[Tuple[BaseFinder, Future]]
                            ) -> ViolationsAggregatorResponse:
        failures: List[SourceFailure] = []

        for finder, future in tasks:
            if future.done():
                continue

            future.cancel()

            failures.append(self._build_failure(
                finder=finder,
                lookup_request=lookup_request,
                reason=FailureReason.CANCELLED,
                cause=LookupCancelledException(
                    f'lookup cancelled before {finder.name} finished')))

        LOG.info(f'Lookup for {lookup_request.state}:{lookup_request.plate} '
                 f'cancelled with {len(failures)} source(s) in flight')

        return ViolationsAggregatorResponse(
            status=LookupStatus.CANCELLED,
            failures=failures,
            sources_queried=len(tasks))

    def _merge_results(self,
                       lookup_request: ViolationsLookupRequest,
                       tasks: List[Tuple[BaseFinder, Future]]
                       ) -> ViolationsAggregatorResponse:
        violations: List[Violation] = []
        failures: List[SourceFailure] = []

        for finder, future in tasks:
            if not future.done():
                future.cancel()

                failures.append(self._build_failure(
                    finder=finder,
                    lookup_request=lookup_request,
                    reason=FailureReason.TIMEOUT,
                    cause=SourceTimeoutException(
                        f'{finder.name} did not respond before the deadline')))
                continue

            try:
                result: Any = future.result()
            except Exception as exc:
                failures.append(self._build_failure(
                    finder=finder,
                    lookup_request=lookup_request,
                    reason=FailureReason.ERROR,
                    cause=exc))
                continue

            if isinstance(result, FinderResponse):
                if not result.success:
                    failures.append(self._build_failure(
                        finder=finder,
                        lookup_request=lookup_request,
                        reason=FailureReason.ERROR,
                        cause=result.cause,
                        message=result.message))
                    continue

                found: List[Violation] = result.data
            else:
                found = list(result or [])

            violations.extend(
                violation.stamped(link=finder.link,
                                  jurisdiction=finder.jurisdiction,
                                  source_name=finder.name)
                for violation in found)

        if len(failures) == len(tasks):
            status = LookupStatus.ALL_SOURCES_FAILED
        else:
            status = LookupStatus.SUCCESS

        LOG.info(f'Lookup for {lookup_request.state}:{lookup_request.plate} '
                 f'found {len(violations)} violation(s), '
                 f'{len(failures)}/{len(tasks)} source(s) failed')

        return ViolationsAggregatorResponse(
            status=status,
            failures=failures,
            sources_queried=len(tasks),
            violations=violations)

    def _build_failure(self,
                       finder: BaseFinder,
                       lookup_request: ViolationsLookupRequest,
                       reason: FailureReason,
                       cause: Optional[BaseException] = None,
                       message: Optional[str] = None) -> SourceFailure:
        failure = SourceFailure(
            source_name=finder.name,
            jurisdiction=finder.jurisdiction,
            plate=lookup_request.plate,
            state=lookup_request.state,
            reason=reason,
            message=message or (str(cause) if cause else reason.value),
            cause=cause)

        LOG.error(f'{failure.source_name} ({failure.jurisdiction}) failed '
                  f'for {failure.state}:{failure.plate} '
                  f'[{reason.value}]: {failure.message}')

        return failure

    def _wait_for_tasks(self,
                        futures: Set[Future],
                        cancel_event: Optional[threading.Event],
                        deadline: float) -> bool:
        """Block until every future is done or the deadline passes.
        Returns True if the cancel event was set first.
        """
        deadline_at: float = time.monotonic() + deadline
        pending: Set[Future] = set(futures)

        while pending:
            if cancel_event is not None and cancel_event.is_set():
                return True

            remaining: float = deadline_at - time.monotonic()
            if remaining <= 0:
                break

            if cancel_event is not None:
                remaining = min(remaining, self.CANCEL_POLL_SECONDS)

            _, pending = wait(pending,
                              timeout=remaining,
                              return_when=FIRST_COMPLETED)

        return cancel_event is not None and cancel_event.is_set() and \
            bool(pending)
