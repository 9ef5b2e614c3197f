"""
Games module - One subpackage per game.

Each game has its own subpackage with:
- state.py: the game's GameState subclass and constants
- actions.py: the action enum, action dataclass, CONTROLS and parse_action
- reducer.py: the Reducer subclass holding the rules

The registry module ties them together as GameDefinitions.
"""
