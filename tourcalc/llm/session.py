"""In-flight tracking for advisory requests with a last-result-wins policy."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from tourcalc.errors import AdvisoryGenerationError
from tourcalc.llm.client import AdvisoryClient
from tourcalc.models.costs import CostBreakdown
from tourcalc.models.trip import TripParameters
from tourcalc.utils.metrics import metrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdvisoryOutcome:
    """Result of one advisory request: text on success, error otherwise."""

    request_id: int
    kind: str
    text: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class AdvisorySession:
    """Issues advisory requests and keeps only the newest one's result.

    A new request may start while an older one is still in flight. When the
    older one resolves after it has been superseded, its text or error is
    dropped and `latest` keeps pointing at the newest completed request.
    """

    def __init__(self, client: AdvisoryClient) -> None:
        self._client = client
        self._last_request_id = 0
        self._in_flight: set[int] = set()
        self.latest: AdvisoryOutcome | None = None

    @property
    def busy(self) -> bool:
        """True while the newest request has not resolved."""
        return self._last_request_id in self._in_flight

    async def request_proposal(
        self, params: TripParameters, breakdown: CostBreakdown
    ) -> AdvisoryOutcome | None:
        """Request a proposal draft; None if superseded before it resolved."""
        return await self._run("proposal", lambda: self._client.draft_proposal(params, breakdown))

    async def request_analysis(self, breakdown: CostBreakdown) -> AdvisoryOutcome | None:
        """Request a cost analysis; None if superseded before it resolved."""
        return await self._run("analysis", lambda: self._client.analyze_costs(breakdown))

    async def _run(self, kind: str, call: Callable[[], Awaitable[str]]) -> AdvisoryOutcome | None:
        self._last_request_id += 1
        request_id = self._last_request_id
        self._in_flight.add(request_id)

        try:
            outcome = AdvisoryOutcome(request_id=request_id, kind=kind, text=await call())
        except AdvisoryGenerationError as e:
            outcome = AdvisoryOutcome(request_id=request_id, kind=kind, error=str(e))
        finally:
            self._in_flight.discard(request_id)

        if request_id != self._last_request_id:
            logger.info(f"Discarding superseded advisory {kind} request {request_id}")
            metrics.inc_advisory(kind, "superseded")
            return None

        metrics.inc_advisory(kind, "ok" if outcome.ok else "error")
        self.latest = outcome
        return outcome
