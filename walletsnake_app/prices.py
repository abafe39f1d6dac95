"""Price sources mapping token ids to their current USD price."""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Set

import httpx

from walletsnake.tokens import valid_price

from .errors import PriceFetchError
from .wallet import SOL_MINT

logger = logging.getLogger(__name__)

DEXSCREENER_URL = "https://api.dexscreener.com/latest/dex/tokens"
SOL_REFERENCE_PRICE = 140.0
SOL_PRICE_JITTER = 5.0
SYNTHETIC_PRICE_CEILING = 10.0
SYNTHETIC_PRICE_STEP = 0.03


class PriceSource(Protocol):
    async def fetch_prices(self, token_ids: Iterable[str]) -> Dict[str, float]:
        ...


def parse_pairs(payload: Mapping[str, Any]) -> Dict[str, float]:
    """Return the first valid USD price quoted for each base token."""

    prices: Dict[str, float] = {}
    for pair in payload.get("pairs") or []:
        token_id = (pair.get("baseToken") or {}).get("address")
        if not token_id or token_id in prices:
            continue
        try:
            price = valid_price(float(pair.get("priceUsd")))
        except (TypeError, ValueError):
            continue
        if price is not None:
            prices[token_id] = price
    return prices


def synthetic_prices(
    token_ids: Iterable[str],
    rng: random.Random,
    previous: Optional[Mapping[str, float]] = None,
) -> Dict[str, float]:
    """Make up plausible prices for ``token_ids``.

    Ids with a ``previous`` synthetic price take a small random step from
    it instead of jumping to an unrelated value.
    """

    previous = previous or {}
    prices: Dict[str, float] = {}
    for token_id in token_ids:
        if token_id in previous:
            step = rng.uniform(-SYNTHETIC_PRICE_STEP, SYNTHETIC_PRICE_STEP)
            prices[token_id] = max(previous[token_id] * (1.0 + step), 1e-6)
        elif token_id == SOL_MINT:
            prices[token_id] = SOL_REFERENCE_PRICE + (rng.random() - 0.5) * SOL_PRICE_JITTER
        else:
            prices[token_id] = max(rng.random() * SYNTHETIC_PRICE_CEILING, 1e-6)
    return prices


class DexScreenerPriceSource:
    """Query the DexScreener token endpoint for USD prices."""

    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        *,
        url: str = DEXSCREENER_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._url = url.rstrip("/")
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def start(self) -> None:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self._timeout))
            self._owns_client = True

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def fetch_prices(self, token_ids: Iterable[str]) -> Dict[str, float]:
        ids: List[str] = [token_id for token_id in token_ids if token_id]
        if not ids:
            return {}
        await self.start()
        assert self._client is not None
        try:
            response = await self._client.get(f"{self._url}/{','.join(ids)}")
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise PriceFetchError(f"Price fetch failed: {exc}") from exc
        except ValueError as exc:
            raise PriceFetchError("Price fetch failed: malformed response") from exc
        if not isinstance(payload, dict):
            raise PriceFetchError("Price fetch failed: malformed response")
        try:
            prices = parse_pairs(payload)
        except (AttributeError, TypeError) as exc:
            raise PriceFetchError("Price fetch failed: malformed pair list") from exc
        return {token_id: price for token_id, price in prices.items() if token_id in ids}


class FallbackPriceSource:
    """Wrap a price source and fill gaps with synthetic prices.

    Ids the upstream source has never quoted get a synthetic quote. Ids with
    a real quote on record are left out when the upstream misses them, so
    their last real price and size stand. With no upstream at all the
    source is fully synthetic, which is what offline play uses.
    """

    def __init__(self, upstream: Optional[PriceSource] = None, rng: Optional[random.Random] = None) -> None:
        self.upstream = upstream
        self.rng = rng if rng is not None else random.Random()
        self._synthetic: Dict[str, float] = {}
        self._quoted: Set[str] = set()

    async def fetch_prices(self, token_ids: Iterable[str]) -> Dict[str, float]:
        ids = list(token_ids)
        prices: Dict[str, float] = {}
        if self.upstream is not None:
            try:
                prices = dict(await self.upstream.fetch_prices(ids))
            except PriceFetchError:
                logger.warning("Upstream price source failed, keeping last real prices", exc_info=True)
        self._quoted.update(prices)
        missing = [token_id for token_id in ids if token_id not in prices and token_id not in self._quoted]
        made_up = synthetic_prices(missing, self.rng, self._synthetic)
        self._synthetic.update(made_up)
        prices.update(made_up)
        return prices
