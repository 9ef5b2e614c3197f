"""
Pocket Arcade CLI - Command-line interface for the engine.

Usage:
    pocket-arcade games                       List playable games
    pocket-arcade serve [--host] [--port]     Run the HTTP/WebSocket API
    pocket-arcade duel [--seed] [--max-turns] Watch a bot-vs-bot Card Duel
"""

import argparse
import asyncio
import sys

from .config import ARCADE_HOST, ARCADE_LOG_FILE, ARCADE_LOG_LEVEL, ARCADE_PORT
from .log import setup_logging


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Pocket Arcade - Casual games engine",
        prog="pocket-arcade",
    )
    parser.add_argument("--log-level", default=ARCADE_LOG_LEVEL, help="Log level")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Games command
    subparsers.add_parser("games", help="List playable games")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default=ARCADE_HOST, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=ARCADE_PORT, help="Bind port")

    # Duel command
    duel_parser = subparsers.add_parser("duel", help="Watch a bot-vs-bot Card Duel")
    duel_parser.add_argument("--seed", type=int, default=None, help="Duel seed")
    duel_parser.add_argument("--max-turns", type=int, default=40, help="Stop after this many turns")

    args = parser.parse_args()
    setup_logging(args.log_level, ARCADE_LOG_FILE)

    if args.command == "games":
        cmd_games(args)
    elif args.command == "serve":
        cmd_serve(args)
    elif args.command == "duel":
        asyncio.run(cmd_duel(args))
    else:
        parser.print_help()
        sys.exit(1)


def cmd_games(args):
    """List playable games."""
    from .games.registry import default_registry

    for game in default_registry().all_games():
        meta = game.metadata
        timing = f"{game.tick.tick_rate:g} ticks/s" if game.tick else "turn-based"
        print(f"{meta.game_id:<14} {meta.category.value:<8} {timing}")


def cmd_serve(args):
    """Run the API with uvicorn."""
    import uvicorn

    from .api.app import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port, log_level=args.log_level.lower())


async def cmd_duel(args):
    """Play a Card Duel where the player side is driven by the heuristic bot."""
    from .bots import HeuristicDuelBot
    from .config import PacingSettings
    from .engine_core.store import StateStore
    from .games.card_duel import CardDuelAction, CardDuelReducer, CardDuelState, TurnOwner

    store = StateStore(
        CardDuelState.create(seed=args.seed),
        CardDuelReducer(pacing=PacingSettings.instant()),
    )
    player_bot = HeuristicDuelBot(side=TurnOwner.PLAYER)
    await store.send(CardDuelAction.start())

    while not store.state.is_game_over and store.state.turn_number <= args.max_turns:
        await play_player_turn(store, player_bot)
        if not store.state.is_game_over:
            await store.send(CardDuelAction.end_turn())

    state = store.state
    for line in state.battle_log:
        print(line)
    print(f"\nSeed {state.seed}: player {state.player_hp} HP, AI {state.ai_hp} HP, "
          f"score {state.score} after {state.turn_number} turn(s)")
    await store.close()


async def play_player_turn(store, bot):
    """Execute the bot's plays, then its attacks one at a time."""
    from .games.card_duel import CardDuelAction

    for plan in bot.play_plans(store.state):
        hand_ids = [card.card_id for card in store.state.player_hand]
        if plan.card_id not in hand_ids:
            continue
        await store.send(CardDuelAction.play_card(hand_ids.index(plan.card_id), plan.target))
        if store.state.is_game_over:
            return

    attacked: set[int] = set()
    while not store.state.is_game_over:
        plan = next(
            (p for p in bot.attack_plans(store.state) if p.attacker_id not in attacked),
            None,
        )
        if plan is None:
            return
        attacked.add(plan.attacker_id)
        await store.send(CardDuelAction.minion_attack(plan.attacker_id, plan.target))


if __name__ == "__main__":
    main()
