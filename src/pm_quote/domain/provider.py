# src/pm_quote/domain/provider.py
"""QuoteProvider Protocol: the contract both engines satisfy."""
from typing import Any, Protocol

from src.pm_common.enums import SwapDirection


class QuoteProviderProtocol(Protocol):
    def quote(self, amount: Any, direction: SwapDirection) -> Any: ...

    def preview(self, amount: Any, direction: SwapDirection) -> Any: ...
