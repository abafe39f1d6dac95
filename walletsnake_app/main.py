"""Entry point for the pygame based wallet snake game."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from pathlib import Path
import random
from typing import List, Optional, Sequence, Tuple

import pygame

from walletsnake import config as game_config
from walletsnake import world
from walletsnake.protocol import encode_snapshot
from walletsnake.store import WorldStore
from walletsnake.tokens import PricedToken, price_tokens

from .errors import InvalidWalletAddress, LeaderboardError, PriceFetchError, WalletFetchError
from .input import InputManager
from .leaderboard import InMemoryLeaderboard, JsonFileLeaderboard, Leaderboard, score_entry_for
from .prices import DexScreenerPriceSource, FallbackPriceSource, PriceSource
from .render import Renderer
from .wallet import FileWalletSource, HeliusWalletSource, WalletSource, is_valid_wallet_address, short_address

logger = logging.getLogger(__name__)

OFFLINE_IDENTITY = "offline"
DEMO_TOKENS_FILE = Path(__file__).with_name("demo_tokens.json")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play your wallet as a pit of snakes")
    parser.add_argument("--wallet", help="Wallet address whose tokens become snakes")
    parser.add_argument("--tokens-file", type=Path, help="Read holdings from a JSON file instead of the RPC")
    parser.add_argument("--width", type=int, default=game_config.CANVAS_WIDTH, help="World width")
    parser.add_argument("--height", type=int, default=game_config.CANVAS_HEIGHT, help="World height")
    parser.add_argument("--fps", type=int, default=game_config.TICK_RATE, help="Simulation ticks per second")
    parser.add_argument(
        "--price-interval",
        type=float,
        default=game_config.PRICE_REFRESH_SECONDS,
        help="Seconds between price refreshes",
    )
    parser.add_argument("--seed", type=int, help="Seed for the world random source")
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Use synthetic prices; without --wallet or --tokens-file, play the demo holdings",
    )
    parser.add_argument("--leaderboard", type=Path, help="JSON file to persist scores in")
    parser.add_argument("--dump-state", type=Path, help="Write the final world snapshot to this file")
    parser.add_argument(
        "--log-level",
        default=os.getenv("WALLETSNAKE_LOG_LEVEL", "INFO"),
        help="Logging level (DEBUG, INFO, ...)",
    )
    return parser.parse_args(argv)


def build_wallet_source(args: argparse.Namespace) -> WalletSource:
    if args.tokens_file is not None:
        return FileWalletSource(args.tokens_file)
    if args.wallet is None or (args.offline and not is_valid_wallet_address(args.wallet)):
        return FileWalletSource(DEMO_TOKENS_FILE)
    return HeliusWalletSource()


def make_rngs(seed: Optional[int]) -> Tuple[random.Random, random.Random]:
    """Return separate world and price generators derived from ``seed``.

    Price refreshes run on their own timer, so they draw from their own
    stream and never shift the world sequence.
    """

    world_rng = random.Random(seed)
    return world_rng, random.Random(world_rng.random())


def player_identity(args: argparse.Namespace) -> str:
    return args.wallet or OFFLINE_IDENTITY


def build_price_source(args: argparse.Namespace, rng: random.Random) -> PriceSource:
    if args.offline:
        return FallbackPriceSource(rng=rng)
    return FallbackPriceSource(DexScreenerPriceSource(), rng=rng)


def build_leaderboard(args: argparse.Namespace) -> Leaderboard:
    if args.leaderboard is not None:
        return JsonFileLeaderboard(args.leaderboard)
    return InMemoryLeaderboard()


async def load_tokens(wallet: WalletSource, prices: PriceSource, address: str) -> List[PricedToken]:
    """Fetch the wallet's holdings and their start prices.

    Any failure is reported as "no tokens" so the caller can decide what to
    show the player.
    """

    try:
        holdings = await wallet.fetch_holdings(address)
    except InvalidWalletAddress as exc:
        logger.error("%s", exc)
        return []
    except WalletFetchError:
        logger.exception("Wallet fetch failed for %s", short_address(address))
        return []
    if not holdings:
        return []
    try:
        quotes = await prices.fetch_prices([holding.token_id for holding in holdings])
    except PriceFetchError:
        logger.exception("Price fetch failed for %d tokens", len(holdings))
        return []
    return price_tokens(holdings, quotes)


async def refresh_prices(store: WorldStore, prices: PriceSource, interval: float) -> None:
    """Feed fresh prices into the world every ``interval`` seconds until cancelled."""

    while True:
        await asyncio.sleep(interval)
        token_ids = [snake.id for snake in store.state.snakes]
        if not token_ids:
            continue
        try:
            quotes = await prices.fetch_prices(token_ids)
        except PriceFetchError:
            logger.warning("Price refresh failed, keeping last known prices", exc_info=True)
            continue
        store.apply_prices(quotes)
        logger.debug("Applied %d price quotes", len(quotes))


def handle_events(store: WorldStore, inputs: InputManager, overlay: dict) -> bool:
    """Apply pending pygame events to the store. Returns ``False`` on quit."""

    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False
        if event.type != pygame.KEYDOWN:
            continue
        command = inputs.handle_key(event.key, bool(event.mod & pygame.KMOD_SHIFT))
        if command.quit:
            return False
        if command.direction is not None:
            store.steer(command.direction)
        elif command.select_index is not None:
            ranked = world.standings(store.state.snakes)
            if command.select_index < len(ranked):
                store.select(ranked[command.select_index].id)
        elif command.cycle:
            store.cycle_selection(command.cycle)
        elif command.toggle_pause:
            store.set_running(not store.state.is_running)
        elif command.toggle_standings:
            overlay["standings"] = not overlay["standings"]
    return True


async def run_game(args: argparse.Namespace) -> int:
    rng, price_rng = make_rngs(args.seed)
    config = game_config.DEFAULT_CONFIG
    identity = player_identity(args)
    price_source = build_price_source(args, price_rng)

    wallet_source = build_wallet_source(args)
    tokens = await load_tokens(wallet_source, price_source, identity)
    close = getattr(wallet_source, "close", None)
    if close is not None:
        await close()
    if not tokens:
        logger.error("No priced tokens found for %s", short_address(identity))

    store = WorldStore(
        world.initialize_game(tokens, args.width, args.height, rng=rng, config=config),
        config=config,
        rng=rng,
    )
    logger.info("World ready with %d snakes", len(store.state.snakes))

    pygame.init()
    screen = pygame.display.set_mode((max(1, args.width), max(1, args.height)))
    pygame.display.set_caption(f"Wallet Snakes - {short_address(identity)}")
    renderer = Renderer(screen)
    clock = pygame.time.Clock()
    inputs = InputManager()
    overlay = {"standings": False}

    price_task = asyncio.create_task(refresh_prices(store, price_source, args.price_interval))
    try:
        running = True
        while running:
            clock.tick(args.fps)
            running = handle_events(store, inputs, overlay)
            store.tick()
            state, events = store.consume()
            if events:
                logger.debug("Frame %d consumption: %s", state.tick, events)

            renderer.clear()
            renderer.draw_grid(state.width, state.height)
            renderer.draw_food(state.food)
            renderer.draw_snakes(state.snakes, state.selected_id)
            renderer.draw_hud(state)
            if overlay["standings"]:
                renderer.draw_standings(world.standings(state.snakes), state.selected_id)
            renderer.present()
            await asyncio.sleep(0)
    finally:
        price_task.cancel()
        try:
            await price_task
        except asyncio.CancelledError:
            pass
        for source in (price_source, getattr(price_source, "upstream", None)):
            close = getattr(source, "close", None)
            if close is not None:
                await close()
        pygame.quit()

    final = store.stop()
    if args.dump_state is not None:
        args.dump_state.write_text(encode_snapshot(final), encoding="utf-8")
    submit_score(build_leaderboard(args), final, identity)
    return 0


def submit_score(board: Leaderboard, state: world.GameState, identity: str) -> None:
    entry = score_entry_for(state, identity)
    try:
        top = board.submit(entry)
    except LeaderboardError:
        logger.exception("Score submission failed")
        return
    logger.info("Final score %d with %s", entry.score, entry.top_symbol)
    for place, item in enumerate(top[:10], start=1):
        logger.info("%2d. %-12s %6d  %s (%d snakes)", place, item.identity_short, item.score, item.top_symbol, item.entity_count)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="[%(levelname)s] %(name)s: %(message)s")
    raise SystemExit(asyncio.run(run_game(args)))


if __name__ == "__main__":
    main()
