from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtCore import Qt, QSize, Signal, QPointF, QRect
from PySide6.QtGui import QPainter, QColor, QPen, QFont

from ..game_logic import BOARD_SIZE, Cell, Outcome, winning_line

X_COLOR = QColor("#8acaff")     # blue
O_COLOR = QColor("#ff8a8a")     # red


class BoardWidget(QWidget):
    """
    draws a session's board and turns clicks into cell indexes
    """
    cell_clicked = Signal(int)  # emits 0..8, row-major

    def __init__(self, parent=None):
        super().__init__(parent)
        self.session = None             # GameSession being shown
        self.setSizePolicy(QSizePolicy.Ignored, QSizePolicy.Ignored)
        self.setMinimumSize(QSize(150, 150))
        self._accept_clicks = True      # toggle click handling

    def set_session(self, session):
        self.session = session
        self.update()

    def set_accept_clicks(self, accept):
        # enable/disable user input
        self._accept_clicks = accept

    def heightForWidth(self, width):
        # keep square shape
        return width

    def hasHeightForWidth(self):
        return True

    def _geometry(self):
        w, h = self.width(), self.height()
        side = min(w, h)
        return (w-side)/2, (h-side)/2, side

    def paintEvent(self, event):
        """
        draw grid, X/O marks, and strike through the winning line
        """
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.Antialiasing, True)
            offset_x, offset_y, side = self._geometry()
            painter.fillRect(self.rect(), QColor("#333"))
            cell_size = side / BOARD_SIZE
            # grid lines
            painter.setPen(QPen(QColor("#555"), 2))
            for i in range(1, BOARD_SIZE):
                x = offset_x + i*cell_size
                painter.drawLine(int(x), int(offset_y), int(x), int(offset_y+side))
                y = offset_y + i*cell_size
                painter.drawLine(int(offset_x), int(y), int(offset_x+side), int(y))
            if self.session is None:
                return

            def centre(index):
                r, c = divmod(index, BOARD_SIZE)
                return QPointF(offset_x + c*cell_size + cell_size/2,
                               offset_y + r*cell_size + cell_size/2)

            rad = cell_size/2 * 0.7
            for index, sym in enumerate(self.session.board):
                if sym is Cell.EMPTY:
                    continue
                p = centre(index)
                cx, cy = p.x(), p.y()
                if sym is Cell.X:
                    painter.setPen(QPen(X_COLOR, 4))
                    painter.drawLine(QPointF(cx-rad, cy-rad), QPointF(cx+rad, cy+rad))
                    painter.drawLine(QPointF(cx+rad, cy-rad), QPointF(cx-rad, cy+rad))
                else:
                    painter.setPen(QPen(O_COLOR, 4))
                    painter.drawEllipse(p, rad, rad)

            outcome = self.session.outcome
            line = winning_line(self.session.board)
            if line is not None:
                color = X_COLOR if outcome is Outcome.X_WON else O_COLOR
                painter.setPen(QPen(color, 8, Qt.SolidLine, Qt.RoundCap, Qt.RoundJoin))
                painter.drawLine(centre(line[0]), centre(line[2]))
            elif outcome is Outcome.DRAW:
                painter.setFont(QFont("Arial", int(side*0.08), QFont.Bold))
                painter.setPen(QPen(QColor("#eee"), 2))
                rect = QRect(int(offset_x), int(offset_y), int(side), int(side))
                painter.drawText(rect, Qt.AlignCenter, outcome.text)
        finally:
            painter.end()

    def mouseReleaseEvent(self, event):
        """
        map click to a cell index and emit
        """
        if not self._accept_clicks or self.session is None \
           or self.session.outcome is not Outcome.ACTIVE:
            return
        ox, oy, side = self._geometry()
        x, y = event.position().x(), event.position().y()
        # only inside grid
        if not (ox <= x < ox+side and oy <= y < oy+side):
            return
        cell = side / BOARD_SIZE
        if cell <= 0:
            return
        col = int((x-ox)//cell); row = int((y-oy)//cell)
        # clamp to valid range
        row = max(0, min(row, BOARD_SIZE-1)); col = max(0, min(col, BOARD_SIZE-1))
        self.cell_clicked.emit(row*BOARD_SIZE + col)
