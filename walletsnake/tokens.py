"""Token records supplied to the simulation by the wallet and price sources."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, List, Mapping, Optional

from .utils import is_finite_number


@dataclass(frozen=True)
class TokenHolding:
    """One fungible balance held by a wallet."""

    token_id: str
    symbol: str
    name: str
    balance: float
    decimals: int = 0


@dataclass(frozen=True)
class PricedToken:
    """A holding together with its live price and the price at game start."""

    token_id: str
    symbol: str
    name: str
    balance: float
    price: float
    price_at_start: float
    price_change: float = 0.0

    @classmethod
    def from_holding(cls, holding: TokenHolding, price: float) -> "PricedToken":
        return cls(
            token_id=holding.token_id,
            symbol=holding.symbol,
            name=holding.name,
            balance=holding.balance,
            price=price,
            price_at_start=price,
        )

    def with_price(self, price: float, price_change: float) -> "PricedToken":
        return replace(self, price=price, price_change=price_change)

    def to_dict(self) -> dict:
        """Serialise the token to a JSON friendly dictionary."""

        return {
            "id": self.token_id,
            "symbol": self.symbol,
            "name": self.name,
            "balance": self.balance,
            "price": self.price,
            "priceAtStart": self.price_at_start,
            "priceChange": self.price_change,
        }


def valid_price(value: object) -> Optional[float]:
    """Return ``value`` as a float if it is a usable price, else ``None``.

    Non-numeric, non-finite and non-positive quotes are not usable.
    """

    if not is_finite_number(value):
        return None
    price = float(value)  # type: ignore[arg-type]
    if price <= 0:
        return None
    return price


def percent_change(price: float, price_at_start: float) -> float:
    """Return the percentage move of ``price`` relative to ``price_at_start``."""

    if price_at_start <= 0:
        return 0.0
    return (price - price_at_start) / price_at_start * 100.0


def price_tokens(holdings: Iterable[TokenHolding], prices: Mapping[str, object]) -> List[PricedToken]:
    """Attach start prices to ``holdings``, dropping tokens without a valid price."""

    priced: List[PricedToken] = []
    for holding in holdings:
        price = valid_price(prices.get(holding.token_id))
        if price is None:
            continue
        priced.append(PricedToken.from_holding(holding, price))
    return priced
