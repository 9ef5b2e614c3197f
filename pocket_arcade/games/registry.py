"""
Game Registry - The catalog of playable games.

Each game contributes a GameDefinition: display metadata plus everything
the session layer needs to run it (state factory, reducer, lifecycle
controls, wire parser and optional tick configuration).
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping

from ..config import PacingSettings, load_pacing
from ..engine_core.action import Action, SessionControls
from ..engine_core.reducer import Reducer
from ..engine_core.state import GameState
from ..session.game_loop import TickConfiguration
from . import block_puzzle, breakout, card_duel, memory_match, minesweeper, reaction_tap, snake


class UnknownGameError(KeyError):
    """Raised when a game id is not registered."""


class GameCategory(Enum):
    ACTION = "Action"
    PUZZLE = "Puzzle"
    CLASSIC = "Classic"
    REFLEX = "Reflex"


@dataclass(frozen=True)
class GameMetadata:
    """Catalog entry. Names and descriptions are localization keys."""
    game_id: str
    display_name_key: str
    description_key: str
    icon_name: str
    category: GameCategory
    min_age: int = 4


@dataclass(frozen=True)
class GameDefinition:
    metadata: GameMetadata
    make_state: Callable[[int | None], GameState]
    reducer: Reducer
    controls: SessionControls
    parse_action: Callable[[str, Mapping[str, Any]], Action]
    tick: TickConfiguration | None = None

    @property
    def game_id(self) -> str:
        return self.metadata.game_id


class GameRegistry:
    """
    Registered games, looked up by id.

    Usage:
        registry = default_registry()
        snake = registry.get("snake")
        for meta in registry.all_metadata():
            ...
    """

    def __init__(self, games: list[GameDefinition] | None = None):
        self._games: dict[str, GameDefinition] = {}
        for game in games or []:
            self.register(game)

    def register(self, game: GameDefinition) -> None:
        """Add a game. A game id registered twice is replaced."""
        self._games[game.game_id] = game

    def get(self, game_id: str) -> GameDefinition:
        try:
            return self._games[game_id]
        except KeyError:
            raise UnknownGameError(game_id) from None

    def __contains__(self, game_id: object) -> bool:
        return game_id in self._games

    def __len__(self) -> int:
        return len(self._games)

    def all_games(self) -> list[GameDefinition]:
        """Definitions sorted by display name key."""
        return sorted(self._games.values(), key=lambda g: g.metadata.display_name_key)

    def all_metadata(self) -> list[GameMetadata]:
        return [g.metadata for g in self.all_games()]


def default_registry(pacing: PacingSettings | None = None) -> GameRegistry:
    """All seven games. ``pacing`` defaults to the environment settings."""
    if pacing is None:
        pacing = load_pacing()

    return GameRegistry([
        GameDefinition(
            metadata=GameMetadata(
                game_id="snake",
                display_name_key="game.snake.name",
                description_key="game.snake.description",
                icon_name="arrow.trianglehead.2.clockwise.rotate.90",
                category=GameCategory.CLASSIC,
            ),
            make_state=lambda seed: snake.SnakeState.create(seed),
            reducer=snake.SnakeReducer(),
            controls=snake.CONTROLS,
            parse_action=snake.parse_action,
            tick=TickConfiguration(tick_rate=7, make_action=lambda dt: snake.SnakeAction.tick()),
        ),
        GameDefinition(
            metadata=GameMetadata(
                game_id="block-puzzle",
                display_name_key="game.blockPuzzle.name",
                description_key="game.blockPuzzle.description",
                icon_name="square.grid.3x2.fill",
                category=GameCategory.PUZZLE,
            ),
            make_state=lambda seed: block_puzzle.BlockPuzzleState.create(seed),
            reducer=block_puzzle.BlockPuzzleReducer(),
            controls=block_puzzle.CONTROLS,
            parse_action=block_puzzle.parse_action,
            tick=TickConfiguration(tick_rate=3.5, make_action=lambda dt: block_puzzle.BlockPuzzleAction.tick()),
        ),
        GameDefinition(
            metadata=GameMetadata(
                game_id="breakout",
                display_name_key="game.breakout.name",
                description_key="game.breakout.description",
                icon_name="circle.grid.cross",
                category=GameCategory.ACTION,
            ),
            # Breakout has no random decisions
            make_state=lambda seed: breakout.BreakoutState(),
            reducer=breakout.BreakoutReducer(),
            controls=breakout.CONTROLS,
            parse_action=breakout.parse_action,
            tick=TickConfiguration(tick_rate=60, make_action=breakout.BreakoutAction.tick),
        ),
        GameDefinition(
            metadata=GameMetadata(
                game_id="card-duel",
                display_name_key="game.cardDuel.name",
                description_key="game.cardDuel.description",
                icon_name="rectangle.on.rectangle",
                category=GameCategory.PUZZLE,
            ),
            make_state=lambda seed: card_duel.CardDuelState.create(seed),
            reducer=card_duel.CardDuelReducer(pacing=pacing),
            controls=card_duel.CONTROLS,
            parse_action=card_duel.parse_action,
        ),
        GameDefinition(
            metadata=GameMetadata(
                game_id="minesweeper",
                display_name_key="game.minesweeper.name",
                description_key="game.minesweeper.description",
                icon_name="flag.pattern.checkered",
                category=GameCategory.PUZZLE,
            ),
            make_state=lambda seed: minesweeper.MinesweeperState.create(seed),
            reducer=minesweeper.MinesweeperReducer(),
            controls=minesweeper.CONTROLS,
            parse_action=minesweeper.parse_action,
        ),
        GameDefinition(
            metadata=GameMetadata(
                game_id="memory-match",
                display_name_key="game.memoryMatch.name",
                description_key="game.memoryMatch.description",
                icon_name="square.on.square",
                category=GameCategory.PUZZLE,
            ),
            make_state=lambda seed: memory_match.MemoryMatchState.create(seed),
            reducer=memory_match.MemoryMatchReducer(pacing=pacing),
            controls=memory_match.CONTROLS,
            parse_action=memory_match.parse_action,
        ),
        GameDefinition(
            metadata=GameMetadata(
                game_id="reaction-tap",
                display_name_key="game.reactionTap.name",
                description_key="game.reactionTap.description",
                icon_name="hand.tap.fill",
                category=GameCategory.REFLEX,
            ),
            make_state=lambda seed: reaction_tap.ReactionTapState.create(seed),
            reducer=reaction_tap.ReactionTapReducer(pacing=pacing),
            controls=reaction_tap.CONTROLS,
            parse_action=reaction_tap.parse_action,
        ),
    ])
