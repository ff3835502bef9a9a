# tactician/config.py
from dataclasses import dataclass, field
from typing import Dict, Optional
import os
import tomllib

from tactician.errors import ConfigurationError

# Defaults (centipawns). KING doubles as the checkmate magnitude.
PIECE_VALUES = {
    "PAWN": 100,
    "KNIGHT": 320,
    "BISHOP": 330,
    "ROOK": 500,
    "QUEEN": 900,
    "KING": 20000,
}

@dataclass
class SearchConfig:
    depth: int = 3
    use_alpha_beta: bool = True
    use_quiescence: bool = False
    use_move_ordering: bool = True
    engine_is_white: bool = False
    q_max_depth: int = 64

    def __post_init__(self):
        if isinstance(self.depth, bool) or not isinstance(self.depth, int) or self.depth < 1:
            raise ConfigurationError("search depth must be a positive integer",
                                     {"depth": self.depth})
        if not isinstance(self.q_max_depth, int) or self.q_max_depth < 0:
            raise ConfigurationError("q_max_depth must be a non-negative integer",
                                     {"q_max_depth": self.q_max_depth})

@dataclass
class EvalConfig:
    piece_values: Dict[str, int] = field(default_factory=lambda: PIECE_VALUES.copy())
    activity_factor: float = 1.0  # scales every piece-square table once per Evaluator
    big_delta: Optional[int] = None  # None means the queen's value

    def value_of(self, name: str) -> int:
        try:
            return self.piece_values[name]
        except KeyError:
            raise ConfigurationError(f"no material value for {name}") from None

    @property
    def delta_margin(self) -> int:
        return self.big_delta if self.big_delta is not None else self.value_of("QUEEN")

@dataclass
class UIConfig:
    engine_name: str = "Tactician"
    engine_author: str = "Tactician developers"
    api_port: int = 8000

@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("search", "eval", "ui"):
            if section in raw:
                target = getattr(cfg, section)
                for k, v in raw[section].items():
                    if hasattr(target, k):
                        setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"]).upper()
        # setattr bypasses __post_init__, so validate the merged values again
        cfg.search = SearchConfig(**vars(cfg.search))
        return cfg


def _apply_env_overrides(cfg: Config) -> Config:
    override_depth = os.environ.get("TACTICIAN_SEARCH_DEPTH")
    if override_depth:
        try:
            depth = int(override_depth)
        except ValueError:
            raise ConfigurationError("TACTICIAN_SEARCH_DEPTH must be an integer",
                                     {"value": override_depth}) from None
        cfg.search = SearchConfig(**{**vars(cfg.search), "depth": depth})
    return cfg


# single globally importable config instance
CONFIG = _apply_env_overrides(
    Config.load_from_toml(os.environ.get("TACTICIAN_CONFIG_TOML", "config.toml"))
)
