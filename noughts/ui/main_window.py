import logging

from ..computer import ComputerAgent
from ..config import GameConfig
from ..engine import GameEngine
from ..game_logic import Cell, GameMode, Outcome, select_mode, select_starting_symbol
from ..navigation import (
    ModeSelection, SymbolSelection, Playing,
    choose_mode, choose_symbol, back, title,
)
from ..scheduler import QtMoveScheduler
from ..ui.board_widget import BoardWidget

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QStackedWidget,
    QPushButton, QLabel, QMenuBar, QMenu, QSizePolicy
)
from PySide6.QtGui import QAction, QFont
from PySide6.QtCore import Qt, Slot

log = logging.getLogger(__name__)


class TicTacToeWindow(QMainWindow):
    """
    main window: mode screen, symbol screen, game screen
    """
    def __init__(self, config=None):
        """
        init engine, ui widgets, signals
        """
        super().__init__()
        self.config = config or GameConfig()
        self.scheduler = QtMoveScheduler(self)
        self.engine = GameEngine(
            self.scheduler,
            agent=ComputerAgent(seed=self.config.seed),
            delay_ms=self.config.computer_delay_ms,
            on_change=self._on_session_changed,
        )
        self.board_widget = BoardWidget(parent=self)
        self.screen = ModeSelection()

        self._setup_ui()
        self._show_screen(self.screen)

    def _setup_ui(self):
        '''window look + layout'''
        self.setWindowTitle("Tic-Tac-Toe")
        self.setStyleSheet("""
            QMainWindow { background-color: #222; }
            QPushButton { padding: 6px 14px; }
            QPushButton#symbolButton {
                font-size: 28px; min-width: 100px; min-height: 100px;
                border-radius: 50px; background-color: black; color: white;
            }
        """)
        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.main_layout = QVBoxLayout(self.central_widget)

        self._create_menu_bar()            # top menu
        self.title_label = QLabel("")
        f = QFont(); f.setPointSize(18); self.title_label.setFont(f)
        self.title_label.setAlignment(Qt.AlignCenter)
        self.main_layout.addWidget(self.title_label)

        self.stack = QStackedWidget()
        self.mode_page = self._create_mode_page()
        self.symbol_page = self._create_symbol_page()
        self.game_page = self._create_game_page()
        for page in (self.mode_page, self.symbol_page, self.game_page):
            self.stack.addWidget(page)
        self.main_layout.addWidget(self.stack, 1)
        self.board_widget.cell_clicked.connect(self._on_cell_clicked)

    def _create_menu_bar(self):
        '''game menu actions'''
        menu_bar = QMenuBar()
        game_menu = QMenu("Game", self)
        mode_action = QAction("Change Mode", self)
        mode_action.triggered.connect(self.change_mode)
        reset_action = QAction("Reset Game", self)
        reset_action.triggered.connect(self.reset_game)
        quit_action = QAction("Quit", self)
        quit_action.triggered.connect(self.close)
        for act in (mode_action, reset_action): game_menu.addAction(act)
        game_menu.addSeparator(); game_menu.addAction(quit_action)
        menu_bar.addMenu(game_menu)
        self.setMenuBar(menu_bar)

    def _create_mode_page(self):
        '''pvp / pvc buttons'''
        page = QWidget()
        hl = QHBoxLayout(page)
        self.pvp_button = QPushButton("Player vs Player")
        self.pvp_button.clicked.connect(lambda: self.select_mode(GameMode.PLAYER_VS_PLAYER))
        self.pvc_button = QPushButton("Player vs Computer")
        self.pvc_button.clicked.connect(lambda: self.select_mode(GameMode.PLAYER_VS_COMPUTER))
        hl.addStretch(1)
        for b in (self.pvp_button, self.pvc_button): hl.addWidget(b)
        hl.addStretch(1)
        return page

    def _create_symbol_page(self):
        '''X / O buttons'''
        page = QWidget()
        vl = QVBoxLayout(page)
        self.symbol_hint = QLabel("")
        self.symbol_hint.setAlignment(Qt.AlignCenter)
        vl.addWidget(self.symbol_hint)
        hl = QHBoxLayout()
        self.x_button = QPushButton("X"); self.x_button.setObjectName("symbolButton")
        self.x_button.clicked.connect(lambda: self.select_symbol(Cell.X))
        self.o_button = QPushButton("O"); self.o_button.setObjectName("symbolButton")
        self.o_button.clicked.connect(lambda: self.select_symbol(Cell.O))
        hl.addStretch(1)
        for b in (self.x_button, self.o_button): hl.addWidget(b)
        hl.addStretch(1)
        vl.addLayout(hl)
        back_button = QPushButton("Back"); back_button.clicked.connect(self.change_mode)
        vl.addWidget(back_button, alignment=Qt.AlignCenter)
        return page

    def _create_game_page(self):
        # board + status + reset
        page = QWidget()
        vl = QVBoxLayout(page)
        vl.addWidget(self.board_widget, 1)
        bottom = QWidget()
        hl = QHBoxLayout(bottom)
        bottom.setStyleSheet("background: transparent;")
        self.message_label = QLabel("")
        f = QFont(); f.setPointSize(12); self.message_label.setFont(f)
        self.message_label.setAlignment(Qt.AlignLeft | Qt.AlignVCenter)
        self.message_label.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)
        self.message_label.setWordWrap(True)
        self.reset_button = QPushButton("Reset Game"); self.reset_button.clicked.connect(self.reset_game)
        hl.addWidget(self.message_label); hl.addStretch(1); hl.addWidget(self.reset_button)
        vl.addWidget(bottom)
        return page

    # --- screens ---------------------------------------------------------------

    def _show_screen(self, screen):
        # one branch per screen type
        self.screen = screen
        self.title_label.setText(title(screen))
        if isinstance(screen, ModeSelection):
            self.engine.stop()
            self.stack.setCurrentWidget(self.mode_page)
        elif isinstance(screen, SymbolSelection):
            self.engine.stop()
            if screen.mode is GameMode.PLAYER_VS_COMPUTER:
                comp = self.config.computer_symbol
                self.symbol_hint.setText(
                    f"You play {comp.opposite().value}, the computer plays {comp.value}.")
            else:
                self.symbol_hint.setText("")
            self.stack.setCurrentWidget(self.symbol_page)
        elif isinstance(screen, Playing):
            session = select_mode(screen.mode, computer_symbol=self.config.computer_symbol)
            session = select_starting_symbol(session, screen.starting_symbol)
            self.stack.setCurrentWidget(self.game_page)
            self.engine.start(session)
        else:
            raise TypeError(f"unknown screen {screen!r}")

    def select_mode(self, mode):
        self._show_screen(choose_mode(self.screen, mode))

    def select_symbol(self, symbol):
        self._show_screen(choose_symbol(self.screen, symbol))

    @Slot()
    def change_mode(self):
        self._show_screen(ModeSelection())

    @Slot()
    def reset_game(self):
        # back to symbol choice; picking a symbol starts a fresh session
        if isinstance(self.screen, Playing):
            self._show_screen(back(self.screen))

    # --- game ------------------------------------------------------------------

    @Slot(int)
    def _on_cell_clicked(self, index):
        reason = self.engine.check_move(index)
        if reason is not None:
            log.debug("click on %d ignored: %s", index, reason.value)
            return
        self.engine.apply_move(index)

    def _on_session_changed(self, session):
        # re-render from the engine's session
        self.board_widget.set_session(session)
        pending = self.engine.is_computer_pending()
        self.board_widget.set_accept_clicks(
            session.outcome is Outcome.ACTIVE and not pending)
        if session.outcome is not Outcome.ACTIVE:
            self._update_message(session.outcome.text, is_success=True)
        elif pending:
            self._update_message(f"computer ({session.turn.value}) is thinking...")
        else:
            self._update_message(f"player {session.turn.value}'s turn", is_turn=True)

    @Slot(str)
    def _update_message(self, text, is_success=False, is_turn=False):
        # set message text + style
        style = "color: #eee;"
        if is_success:   style = "color: lime; font-weight: bold;"
        elif is_turn:    style = "color: #8acaff; font-weight: bold;"
        self.message_label.setStyleSheet(style)
        self.message_label.setText(text)

    def closeEvent(self, event):
        # drop any pending computer move
        self.engine.stop()
        event.accept()
