"""QuoteService: in-memory venue registry returning explicit result envelopes."""
import logging
from typing import Any

from src.pm_amm.domain.models import AmmQuote
from src.pm_common.errors import QuoteError, UnknownVenueError
from src.pm_common.response import QuoteResponse, error_response, success_response
from src.pm_ladder.domain.models import LadderLevel, LadderQuote
from src.pm_quote.application.schemas import (
    AmmQuoteData,
    LadderLevelData,
    LadderQuoteData,
    QuoteRequest,
)
from src.pm_quote.domain.provider import QuoteProviderProtocol

logger = logging.getLogger(__name__)


def _levels(levels: tuple[LadderLevel, ...]) -> list[LadderLevelData]:
    return [LadderLevelData(price=lv.price, size=lv.size) for lv in levels]


def to_quote_data(q: Any) -> dict[str, Any]:
    """Serialize an AmmQuote or LadderQuote to a plain dict."""
    if isinstance(q, AmmQuote):
        return AmmQuoteData(
            in_amount=q.in_amount,
            out_amount=q.out_amount,
            price_impact_bps=q.price_impact_bps,
            fee_amount=q.fee_amount,
            direction=q.direction,
            reserve_in_after=q.reserve_in_after,
            reserve_out_after=q.reserve_out_after,
        ).model_dump()
    if isinstance(q, LadderQuote):
        return LadderQuoteData(
            in_amount=q.in_amount,
            out_amount=q.out_amount,
            effective_price=q.effective_price,
            levels_touched=q.levels_touched,
            direction=q.direction,
            ladder_exhausted=q.ladder_exhausted,
            asks=_levels(q.ladder.asks),
            bids=_levels(q.ladder.bids),
        ).model_dump()
    raise TypeError(f"Unsupported quote type: {type(q).__name__}")


class QuoteService:
    """Routes quote requests to registered providers.

    Engine errors never escape: they come back as a QuoteResponse with the
    error code and data=None. No retries.
    """

    def __init__(self) -> None:
        self._providers: dict[str, QuoteProviderProtocol] = {}

    def register(self, venue_id: str, provider: QuoteProviderProtocol) -> None:
        self._providers[venue_id] = provider
        logger.info("Venue registered: %s (%s)", venue_id, type(provider).__name__)

    def unregister(self, venue_id: str) -> None:
        self._providers.pop(venue_id, None)

    def venues(self) -> list[str]:
        return sorted(self._providers)

    def get_provider(self, venue_id: str) -> QuoteProviderProtocol:
        if venue_id not in self._providers:
            raise UnknownVenueError(venue_id)
        return self._providers[venue_id]

    def quote(self, venue_id: str, request: QuoteRequest) -> QuoteResponse:
        """Quote and advance the venue's state."""
        return self._run(venue_id, request, commit=True)

    def preview(self, venue_id: str, request: QuoteRequest) -> QuoteResponse:
        """Quote without advancing the venue's state."""
        return self._run(venue_id, request, commit=False)

    def _run(self, venue_id: str, request: QuoteRequest, commit: bool) -> QuoteResponse:
        try:
            provider = self.get_provider(venue_id)
            if commit:
                q = provider.quote(request.amount, request.direction)
            else:
                q = provider.preview(request.amount, request.direction)
        except QuoteError as e:
            logger.warning(
                "Quote rejected: venue=%s code=%d kind=%s msg=%s",
                venue_id, e.code, e.kind.value, e.message,
            )
            return error_response(e.code, e.message, e.kind)
        return success_response(to_quote_data(q))


_service: QuoteService | None = None


def get_quote_service() -> QuoteService:
    global _service  # noqa: PLW0603
    if _service is None:
        _service = QuoteService()
    return _service
