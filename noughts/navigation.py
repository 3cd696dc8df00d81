"""
screen flow: pick a mode, pick the starting symbol, play.

each screen is its own small value type carrying what it needs; the window
dispatches on the type and never on flags.
"""

from dataclasses import dataclass

from .game_logic import Cell, GameMode


@dataclass(frozen=True)
class ModeSelection:
    pass


@dataclass(frozen=True)
class SymbolSelection:
    mode: GameMode


@dataclass(frozen=True)
class Playing:
    mode: GameMode
    starting_symbol: Cell


def choose_mode(screen, mode):
    if not isinstance(screen, ModeSelection):
        raise ValueError(f"can't pick a mode from {type(screen).__name__}")
    return SymbolSelection(GameMode(mode))


def choose_symbol(screen, symbol):
    if not isinstance(screen, SymbolSelection):
        raise ValueError(f"can't pick a symbol from {type(screen).__name__}")
    if symbol not in (Cell.X, Cell.O):
        raise ValueError(f"starting symbol must be X or O, got {symbol!r}")
    return Playing(screen.mode, symbol)


def back(screen):
    """
    reset from the game goes back to symbol selection with the mode kept;
    from symbol selection, back to the mode screen
    """
    if isinstance(screen, Playing):
        return SymbolSelection(screen.mode)
    if isinstance(screen, SymbolSelection):
        return ModeSelection()
    if isinstance(screen, ModeSelection):
        return screen
    raise TypeError(f"unknown screen {screen!r}")


def title(screen):
    # heading text per screen
    if isinstance(screen, ModeSelection):
        return "Choose a game mode"
    if isinstance(screen, SymbolSelection):
        if screen.mode is GameMode.PLAYER_VS_COMPUTER:
            return "Who moves first?"
        return "Choose your symbol"
    if isinstance(screen, Playing):
        if screen.mode is GameMode.PLAYER_VS_COMPUTER:
            return "Player vs Computer"
        return "Player vs Player"
    raise TypeError(f"unknown screen {screen!r}")
