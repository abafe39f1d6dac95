"""Wallet sources returning the token holdings of an address."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
import re
from typing import Any, Dict, List, Optional, Protocol

import httpx

from walletsnake.tokens import TokenHolding

from .errors import InvalidWalletAddress, WalletFetchError

logger = logging.getLogger(__name__)

HELIUS_RPC_URL = "https://mainnet.helius-rpc.com/"
SOL_MINT = "So11111111111111111111111111111111111111112"
LAMPORTS_PER_SOL = 1_000_000_000
_ADDRESS_RE = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")


def is_valid_wallet_address(address: str) -> bool:
    """Return ``True`` for a base58 string of 32 to 44 characters."""

    return bool(_ADDRESS_RE.match(address or ""))


def short_address(address: str) -> str:
    """Return the ``abcd...wxyz`` form of ``address`` used for display."""

    if len(address) <= 8:
        return address
    return f"{address[:4]}...{address[-4:]}"


class WalletSource(Protocol):
    async def fetch_holdings(self, address: str) -> List[TokenHolding]:
        ...


def parse_assets(result: Optional[Dict[str, Any]]) -> List[TokenHolding]:
    """Convert a ``getAssetsByOwner`` result into holdings.

    The native balance becomes a SOL holding; fungible assets with a
    positive raw balance are scaled by their decimals.
    """

    if not result:
        return []
    holdings: List[TokenHolding] = []
    native = result.get("nativeBalance") or {}
    lamports = native.get("lamports") or 0
    if lamports > 0:
        holdings.append(
            TokenHolding(SOL_MINT, "SOL", "Solana", lamports / LAMPORTS_PER_SOL, decimals=9)
        )
    for asset in result.get("items") or []:
        info = asset.get("token_info") or {}
        balance = info.get("balance") or 0
        if balance <= 0 or "id" not in asset:
            continue
        decimals = int(info.get("decimals") or 0)
        metadata = (asset.get("content") or {}).get("metadata") or {}
        holdings.append(
            TokenHolding(
                token_id=asset["id"],
                symbol=metadata.get("symbol") or "UNKNOWN",
                name=metadata.get("name") or "Unknown Token",
                balance=balance / (10 ** decimals),
                decimals=decimals,
            )
        )
    return holdings


class HeliusWalletSource:
    """Fetch holdings through the Helius ``getAssetsByOwner`` RPC method."""

    DEFAULT_TIMEOUT = 10.0
    PAGE_LIMIT = 50

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        url: str = HELIUS_RPC_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else os.getenv("HELIUS_API_KEY", "")
        self._url = url
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

    async def fetch_holdings(self, address: str) -> List[TokenHolding]:
        if not is_valid_wallet_address(address):
            raise InvalidWalletAddress(f"Invalid wallet address format: {address!r}")
        await self.start()
        assert self._client is not None
        payload = {
            "jsonrpc": "2.0",
            "id": "1",
            "method": "getAssetsByOwner",
            "params": {
                "ownerAddress": address,
                "page": 1,
                "limit": self.PAGE_LIMIT,
                "displayOptions": {"showFungible": True, "showNativeBalance": True},
            },
        }
        try:
            response = await self._client.post(self._url, params={"api-key": self._api_key}, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            raise WalletFetchError(f"Wallet fetch failed: {exc}") from exc
        except ValueError as exc:
            raise WalletFetchError("Wallet fetch failed: malformed response") from exc
        if not isinstance(data, dict):
            raise WalletFetchError("Wallet fetch failed: malformed response")
        try:
            holdings = parse_assets(data.get("result"))
        except (AttributeError, TypeError, ValueError) as exc:
            raise WalletFetchError("Wallet fetch failed: malformed asset list") from exc
        logger.info("Fetched %d holdings for %s", len(holdings), short_address(address))
        return holdings


class FileWalletSource:
    """Read holdings from a JSON file, for offline play.

    The file holds a list of ``{"id", "symbol", "name", "balance"}`` objects,
    or a mapping from wallet address to such a list.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    async def fetch_holdings(self, address: str) -> List[TokenHolding]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise WalletFetchError(f"Wallet fetch failed: cannot read {self.path}") from exc
        if isinstance(data, dict):
            data = data.get(address, [])
        if not isinstance(data, list):
            raise WalletFetchError(f"Wallet fetch failed: {self.path} is not a token list")
        holdings = []
        for entry in data:
            try:
                holdings.append(
                    TokenHolding(
                        token_id=str(entry["id"]),
                        symbol=str(entry.get("symbol", "UNKNOWN")),
                        name=str(entry.get("name", entry.get("symbol", "Unknown Token"))),
                        balance=float(entry.get("balance", 0.0)),
                        decimals=int(entry.get("decimals", 0)),
                    )
                )
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                raise WalletFetchError(f"Wallet fetch failed: bad entry {entry!r}") from exc
        return holdings
