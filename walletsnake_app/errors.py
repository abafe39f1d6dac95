"""Domain level failures reported by the external data sources."""


class WalletSnakeError(Exception):
    """Base class for every failure surfaced to the game host."""


class WalletFetchError(WalletSnakeError):
    """Wallet fetch failed."""


class InvalidWalletAddress(WalletFetchError):
    """The wallet address is not a well-formed base58 account key."""


class PriceFetchError(WalletSnakeError):
    """Price fetch failed."""


class LeaderboardError(WalletSnakeError):
    """Score submission or retrieval failed."""
