# =====================================================================
# Smokey - drifting smoke sketch
# =====================================================================
# A meandering stem is drawn at the bottom of the window. Smoke branches
# grow off random points of the stem and carry fading particles along
# their paths. Burnt-out smokes are replaced by fresh ones.
#
# CONTROLS:
# • SPACE  pause / resume
# • P      show / hide the raw smoke paths
# • R      regrow the stem and all smokes
# • ESC    quit
#
# Requirements: Python 3.9+, PyQt5, numpy
# =====================================================================

import argparse
import logging
import math
import sys
from typing import Callable, List, Optional

from PyQt5 import QtCore, QtGui, QtWidgets

from .canvas import QtCanvas
from .config import (APP_NAME, APP_VERSION, FRAME_MS, ORG_DOMAIN, ORG_NAME,
                     PATH_WIDTH, STEM_WIDTH, Config)
from .logging_config import setup_logging
from .noise import RandomSource
from .paths import Figure, PathSegment
from .smoke import Smoke, millis

logger = logging.getLogger(__name__)

STEM_NOISE_STEP = 0.02     # noise cursor advance per stem segment
STEM_MAX_TURN   = 0.2      # full turn range per stem segment (radians)
STEM_MARGIN     = 40       # distance of the stem root from the bottom edge


def build_stem(source: RandomSource, origin: QtCore.QPointF,
               segments: int, segment_length: float) -> Figure:
    """Grow the parent figure: a gently curving stem heading up from `origin`."""
    stem = Figure(QtCore.QPointF(origin), -math.pi / 2)
    xoff = source.random(1000.0)
    for _ in range(segments):
        angle = (source.noise(xoff) - 0.5) * STEM_MAX_TURN
        stem.add_segment(PathSegment(angle, segment_length))
        xoff += STEM_NOISE_STEP
    return stem


class SmokeWindow(QtWidgets.QWidget):
    """Window running the frame loop: tick() updates, paintEvent() draws.

    Signals:
        paused_changed (bool): Emitted when pause state changes
    """
    paused_changed = QtCore.pyqtSignal(bool)

    def __init__(self, cfg: Config, source: Optional[RandomSource] = None,
                 clock: Optional[Callable[[], float]] = None):
        super().__init__()
        self.cfg = cfg
        self.source = source if source is not None else RandomSource(cfg.seed)
        self.clock = clock if clock is not None else millis

        self.setWindowTitle(f"{APP_NAME} {APP_VERSION}")
        self.resize(800, 600)

        # Frozen time for pause: the sketch only sees effective time
        self.paused = False
        self._frozen_time: Optional[float] = None
        self._time_when_frozen: Optional[float] = None
        self._total_pause_time: float = 0.0

        self.stem: Optional[Figure] = None
        self.smokes: List[Smoke] = []
        self.regrow()

        self.timer = QtCore.QTimer(self)
        self.timer.timeout.connect(self.tick)
        self.timer.start(FRAME_MS)

    # ----- pause -----
    def set_paused(self, p: bool):
        if p == self.paused:
            return
        if p:
            self._frozen_time = self.effective_time()
            self._time_when_frozen = self.clock()
        else:
            self._total_pause_time += self.clock() - self._time_when_frozen
            self._frozen_time = None
            self._time_when_frozen = None
        self.paused = p
        self.paused_changed.emit(p)

    def effective_time(self) -> float:
        """Clock reading in ms with paused stretches removed."""
        if self._frozen_time is not None:
            return self._frozen_time
        return self.clock() - self._total_pause_time

    # ----- scene -----
    def regrow(self):
        root = QtCore.QPointF(self.width() / 2.0, self.height() - STEM_MARGIN)
        self.stem = build_stem(self.source, root, self.cfg.stem_segments,
                               self.cfg.stem_segment_length)
        self.smokes = [self._new_smoke() for _ in range(self.cfg.smoke_count)]
        logger.debug(f"Regrew stem at ({root.x():.0f}, {root.y():.0f}) "
                     f"with {len(self.smokes)} smokes")

    def _new_smoke(self) -> Smoke:
        return Smoke(self.stem, None, self.cfg.min_length, self.cfg.max_length,
                     source=self.source, clock=self.effective_time,
                     color=self.cfg.particle_color)

    # ===================================================================
    # MAIN UPDATE LOOP
    # ===================================================================
    def tick(self):
        if not self.paused:
            now = self.effective_time()
            for smoke in self.smokes:
                smoke.update(now)

            for i, smoke in enumerate(self.smokes):
                if smoke.is_finished:
                    logger.debug(f"Smoke from segment {smoke.branch_index} burnt out, replacing")
                    self.smokes[i] = self._new_smoke()
                    self.smokes[i].update(now)

        self.update()

    # ===================================================================
    # RENDERING
    # ===================================================================
    def paintEvent(self, ev: QtGui.QPaintEvent):
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
        painter.fillRect(self.rect(), self.cfg.background_color)
        canvas = QtCanvas(painter)

        if self.cfg.show_stem and self.stem is not None:
            canvas.push()
            canvas.no_fill()
            canvas.stroke(self.cfg.stem_color, STEM_WIDTH)
            self.stem.draw(canvas)
            canvas.pop()

        if self.cfg.show_paths:
            canvas.push()
            canvas.no_fill()
            canvas.stroke(self.cfg.path_color, PATH_WIDTH)
            for smoke in self.smokes:
                smoke.figure.draw(canvas)
            canvas.pop()

        for smoke in self.smokes:
            smoke.draw(canvas)
        painter.end()

    # ===================================================================
    # INPUT
    # ===================================================================
    def keyPressEvent(self, ev: QtGui.QKeyEvent):
        key = ev.key()
        if key == QtCore.Qt.Key_Space:
            self.set_paused(not self.paused)
        elif key == QtCore.Qt.Key_P:
            self.cfg.show_paths = not self.cfg.show_paths
            self.update()
        elif key == QtCore.Qt.Key_R:
            self.regrow()
        elif key == QtCore.Qt.Key_Escape:
            self.close()
        else:
            super().keyPressEvent(ev)

    def resizeEvent(self, ev: QtGui.QResizeEvent):
        super().resizeEvent(ev)
        if ev.oldSize() != ev.size():
            self.regrow()


# ------------------------- main -------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="smokey", description="Drifting smoke sketch.")
    parser.add_argument("--seed", type=int, default=None, help="seed for a reproducible sketch")
    parser.add_argument("--smokes", type=int, default=None, help="number of smokes alive at once")
    parser.add_argument("--min-length", type=int, default=None, help="minimum smoke path segments")
    parser.add_argument("--max-length", type=int, default=None, help="maximum smoke path segments")
    parser.add_argument("--show-paths", action="store_true", help="draw the raw smoke paths")
    parser.add_argument("--save", action="store_true", help="persist these options as the new defaults")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--log-file", default=None, help="also write the log to this file")
    return parser


def config_error(cfg: Config) -> Optional[str]:
    """Return why `cfg` can't run the sketch, or None when it can."""
    if cfg.smoke_count < 0:
        return f"smoke count must be non-negative, got {cfg.smoke_count}"
    if cfg.min_length < 0 or cfg.max_length < cfg.min_length:
        return f"invalid smoke length range {cfg.min_length}..{cfg.max_length}"
    if cfg.stem_segments < 1:
        return f"the stem needs at least one segment, got {cfg.stem_segments}"
    return None


def apply_args(cfg: Config, args: argparse.Namespace) -> Config:
    if args.seed is not None:
        cfg.seed = args.seed
    if args.smokes is not None:
        cfg.smoke_count = args.smokes
    if args.min_length is not None:
        cfg.min_length = args.min_length
    if args.max_length is not None:
        cfg.max_length = args.max_length
    if args.show_paths:
        cfg.show_paths = True
    return cfg


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    QtWidgets.QApplication.setAttribute(QtCore.Qt.AA_UseHighDpiPixmaps, True)
    app = QtWidgets.QApplication(sys.argv[:1])
    app.setOrganizationName(ORG_NAME); app.setOrganizationDomain(ORG_DOMAIN); app.setApplicationName(APP_NAME)

    settings = QtCore.QSettings(QtCore.QSettings.UserScope, ORG_NAME, APP_NAME)
    cfg = apply_args(Config.load(settings), args)
    error = config_error(cfg)
    if error:
        parser.error(error)
    if args.save:
        cfg.save(settings)
        logger.info(f"Saved settings to {settings.fileName()}")

    logger.info(f"Starting {APP_NAME} {APP_VERSION} (seed={cfg.seed})")
    window = SmokeWindow(cfg)
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
