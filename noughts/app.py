import argparse
import logging
import sys

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt
from PySide6.QtGui import QPalette, QColor

from .config import GameConfig, ConfigError
from .ui.main_window import TicTacToeWindow

log = logging.getLogger("noughts")

# -----------------------------------------------------------------------------
# DARK THEME
# -----------------------------------------------------------------------------

DARK = QColor(53, 53, 53)
DARKER = QColor(35, 35, 35)
ACCENT = QColor(42, 130, 218)
DISABLED = QColor(127, 127, 127)

PALETTE_ROLES = {
    QPalette.Window: DARK,
    QPalette.WindowText: Qt.white,
    QPalette.Base: DARKER,
    QPalette.AlternateBase: DARK,
    QPalette.Text: Qt.white,
    QPalette.Button: QColor(66, 66, 66),
    QPalette.ButtonText: Qt.white,
    QPalette.BrightText: Qt.red,
    QPalette.Highlight: ACCENT,
    QPalette.HighlightedText: Qt.white,
}


def apply_dark_palette(app: QApplication):
    """
    Fusion style with a dark palette; disabled text greyed out.
    """
    app.setStyle('Fusion')
    palette = QPalette()
    for role, color in PALETTE_ROLES.items():
        palette.setColor(role, color)
    for role in (QPalette.Text, QPalette.ButtonText, QPalette.WindowText):
        palette.setColor(QPalette.Disabled, role, DISABLED)
    app.setPalette(palette)

# -----------------------------------------------------------------------------
# COMMAND LINE
# -----------------------------------------------------------------------------

def build_parser():
    p = argparse.ArgumentParser(description="Tic-tac-toe, against a friend or the computer")
    p.add_argument("--delay", type=int, default=None,
                   help="computer move delay in ms (default 500)")
    p.add_argument("--seed", type=int, default=None,
                   help="seed the computer's random moves")
    p.add_argument("--computer-symbol", choices=["X", "O", "x", "o"], default=None,
                   help="symbol the computer plays (default O)")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return p


def load_config(argv=None):
    ns = build_parser().parse_args(argv)
    return GameConfig.from_env().with_overrides(
        delay=ns.delay, computer_symbol=ns.computer_symbol,
        seed=ns.seed, verbose=ns.verbose,
    )

# -----------------------------------------------------------------------------
# ENTRY POINT
# -----------------------------------------------------------------------------

def run(argv=None):
    try:
        config = load_config(argv)
    except ConfigError as e:
        logging.basicConfig(level=logging.ERROR)
        log.error("bad configuration: %s", e)
        return 2
    logging.basicConfig(level=getattr(logging, config.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    log.info("starting, computer plays %s after %d ms",
             config.computer_symbol.value, config.computer_delay_ms)

    app = QApplication(sys.argv[:1])
    apply_dark_palette(app)

    window = TicTacToeWindow(config)
    window.show()
    return app.exec()

