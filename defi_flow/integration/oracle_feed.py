"""Price feed adapters.

``StaticPriceFeed`` is a deterministic fixture: it returns whatever sample it
was last given. ``CallablePriceFeed`` wraps any zero-argument reader (an HTTP
client, a chain account decoder) and maps its failures to
``OracleUnavailable`` so the core sees a single error kind.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from ..core.oracle import PriceSample
from ..errors import OracleUnavailable

logger = logging.getLogger(__name__)


class StaticPriceFeed:
    def __init__(self, sample: Optional[PriceSample] = None) -> None:
        self._sample = sample
        self._lock = threading.Lock()

    def publish(self, sample: Optional[PriceSample]) -> None:
        with self._lock:
            self._sample = sample

    def read_price(self) -> Optional[PriceSample]:
        with self._lock:
            return self._sample


class CallablePriceFeed:
    def __init__(self, reader: Callable[[], Optional[PriceSample]]) -> None:
        self._reader = reader

    def read_price(self) -> Optional[PriceSample]:
        try:
            return self._reader()
        except OracleUnavailable:
            raise
        except Exception as exc:
            logger.warning("price feed read failed: %s", exc)
            raise OracleUnavailable(f"price feed read failed: {exc}") from exc
