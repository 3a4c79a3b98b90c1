"""Sample games built on the core."""

from gamecore.games.dice_race import (
    DiceRaceConfig,
    DiceRaceData,
    DiceRaceGame,
    DiceRaceRules,
    RollAction,
    create_players,
)

__all__ = [
    "DiceRaceConfig",
    "DiceRaceData",
    "DiceRaceGame",
    "DiceRaceRules",
    "RollAction",
    "create_players",
]
