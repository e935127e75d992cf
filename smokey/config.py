# =====================================================================
# CONFIGURATION
# =====================================================================
# Default values for the sketch plus the persisted Config model.
# Config is stored with QSettings; colors are kept as hex strings.
# =====================================================================

from dataclasses import dataclass, field
from typing import Optional

from PyQt5 import QtCore, QtGui

from .smoke import DEFAULT_MAX_LENGTH, DEFAULT_MIN_LENGTH, PARTICLE_COLOR

# Application identity
APP_NAME    = "Smokey"
APP_VERSION = "1.0.0"
ORG_NAME    = "Smokey"           # for QSettings
ORG_DOMAIN  = "smokey.local"

# Frame timing
FRAME_MS    = 16                 # ~60 FPS

# Scene defaults
SMOKE_COUNT          = 3         # smokes alive at once
STEM_SEGMENTS        = 120       # segments in the parent figure
STEM_SEGMENT_LENGTH  = 4.0       # length of each parent segment
STEM_WIDTH           = 3.0
PATH_WIDTH           = 1.0

# Colors
BACKGROUND_HEX = "#101018"
STEM_HEX       = "#8C6E4B"
PATH_HEX       = "#3C5A78"


@dataclass
class Config:
    particle_color:   QtGui.QColor = field(default_factory=lambda: QtGui.QColor(PARTICLE_COLOR))
    path_color:       QtGui.QColor = field(default_factory=lambda: QtGui.QColor(PATH_HEX))
    stem_color:       QtGui.QColor = field(default_factory=lambda: QtGui.QColor(STEM_HEX))
    background_color: QtGui.QColor = field(default_factory=lambda: QtGui.QColor(BACKGROUND_HEX))
    smoke_count: int = SMOKE_COUNT
    min_length:  int = DEFAULT_MIN_LENGTH
    max_length:  int = DEFAULT_MAX_LENGTH
    stem_segments: int = STEM_SEGMENTS
    stem_segment_length: float = STEM_SEGMENT_LENGTH
    show_stem:  bool = True
    show_paths: bool = False     # debug: draw the raw smoke meanders
    seed: Optional[int] = None   # None = different sketch every run

    @staticmethod
    def _qcolor_to_hex(c: QtGui.QColor) -> str:
        return "#{:02X}{:02X}{:02X}".format(c.red(), c.green(), c.blue())

    @staticmethod
    def _hex_to_qcolor(txt: str, fallback: QtGui.QColor) -> QtGui.QColor:
        c = QtGui.QColor(txt)
        return c if c.isValid() else fallback

    @staticmethod
    def _number(s: QtCore.QSettings, key: str, fallback, cast):
        try:
            return cast(s.value(key, fallback))
        except (TypeError, ValueError):
            return fallback

    def save(self, s: QtCore.QSettings):
        s.setValue("particle_color",   self._qcolor_to_hex(self.particle_color))
        s.setValue("path_color",       self._qcolor_to_hex(self.path_color))
        s.setValue("stem_color",       self._qcolor_to_hex(self.stem_color))
        s.setValue("background_color", self._qcolor_to_hex(self.background_color))
        s.setValue("smoke_count", self.smoke_count)
        s.setValue("min_length",  self.min_length)
        s.setValue("max_length",  self.max_length)
        s.setValue("stem_segments", self.stem_segments)
        s.setValue("stem_segment_length", self.stem_segment_length)
        s.setValue("show_stem",  self.show_stem)
        s.setValue("show_paths", self.show_paths)
        # QSettings can't hold None portably; empty string means "unseeded"
        s.setValue("seed", "" if self.seed is None else str(self.seed))

    @staticmethod
    def load(s: QtCore.QSettings) -> "Config":
        cfg = Config()
        cfg.particle_color   = Config._hex_to_qcolor(s.value("particle_color", PARTICLE_COLOR), cfg.particle_color)
        cfg.path_color       = Config._hex_to_qcolor(s.value("path_color", PATH_HEX), cfg.path_color)
        cfg.stem_color       = Config._hex_to_qcolor(s.value("stem_color", STEM_HEX), cfg.stem_color)
        cfg.background_color = Config._hex_to_qcolor(s.value("background_color", BACKGROUND_HEX), cfg.background_color)
        cfg.smoke_count = Config._number(s, "smoke_count", cfg.smoke_count, int)
        cfg.min_length  = Config._number(s, "min_length",  cfg.min_length,  int)
        cfg.max_length  = Config._number(s, "max_length",  cfg.max_length,  int)
        cfg.stem_segments = Config._number(s, "stem_segments", cfg.stem_segments, int)
        cfg.stem_segment_length = Config._number(s, "stem_segment_length", cfg.stem_segment_length, float)
        cfg.show_stem  = s.value("show_stem",  cfg.show_stem,  type=bool)
        cfg.show_paths = s.value("show_paths", cfg.show_paths, type=bool)
        seed_txt = str(s.value("seed", "") or "").strip()
        cfg.seed = int(seed_txt) if seed_txt.lstrip("-").isdigit() else None
        return cfg
