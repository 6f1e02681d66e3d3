# calmtac/config.py
from dataclasses import dataclass, field
from typing import Dict
import os
import tomllib

# Static evaluator weights
EVAL_WEIGHTS = {
    "center": 3,
    "corner": 2,
    "win_threat": 40,
    "block_threat": 35,
}

@dataclass
class SearchConfig:
    depth: int = 9
    engine_player: int = -1  # PLAYER_B, the second mover
    win_score: int = 1000
    min_depth: int = 1
    max_depth: int = 9

@dataclass
class EvalConfig:
    weights: Dict[str, int] = field(default_factory=lambda: EVAL_WEIGHTS.copy())
    move_priority: Dict[str, int] = field(default_factory=lambda: {
        "center": 100, "corner": 50, "edge": 10
    })

@dataclass
class UIConfig:
    app_name: str = "CalmTac"
    theme: str = "Calm"
    cell_size: int = 160
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
        return cfg

    @property
    def verbose(self) -> bool:
        return self.log_level.upper() in ("DEBUG", "INFO")

# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("CALMTAC_CONFIG_TOML", "config.toml"))
# allow env override of depth for quick debugging
override_depth = os.environ.get("CALMTAC_SEARCH_DEPTH")
if override_depth:
    try:
        CONFIG.search.depth = int(override_depth)
    except ValueError:
        print(f"Ignoring CALMTAC_SEARCH_DEPTH={override_depth!r}: not an integer")
