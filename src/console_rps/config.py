from __future__ import annotations

import copy
import os
from typing import Any, Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from console_rps.ai_policy import Personality
from console_rps.game_logic import ConfigError, Vocabulary, VOCABULARIES, get_vocabulary

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "config.yaml")
KNOWN_SYMBOLS = {s for v in VOCABULARIES.values() for s in v.symbols}
LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


# ---------------- Models ----------------
class GameSection(BaseModel):
    model_config = ConfigDict(extra="forbid")

    variant: Literal["classic", "extended"] = "classic"
    wins_limit: int = Field(3, ge=1)


class PersonalityConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    weights: Dict[str, int]


class AIConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    use_personalities: bool = True
    counter_min_history: int = Field(3, ge=0)
    personalities: List[PersonalityConfig] = Field(min_length=1)


class UIConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    color: bool = True
    clear_screen: bool = True
    theme: Dict[str, str] = Field(default_factory=dict)


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: LogLevel = "WARNING"
    file: Optional[str] = None

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v):
        return v.upper() if isinstance(v, str) else v


class GameConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    game: GameSection = Field(default_factory=GameSection)
    ai: AIConfig
    ui: UIConfig = Field(default_factory=UIConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def vocabulary(self) -> Vocabulary:
        return get_vocabulary(self.game.variant)

    def build_personalities(self) -> List[Personality]:
        vocab = self.vocabulary
        personalities = []
        for p in self.ai.personalities:
            # weights for moves of the other variant are ignored; typos are not
            weights = {s: w for s, w in p.weights.items() if s in vocab or s not in KNOWN_SYMBOLS}
            personalities.append(Personality(p.name, weights, vocab))
        return personalities


# ---------------- Loading ----------------
def _read_yaml(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config {path} must be a mapping at the top level")
    return data


def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursive merge; lists and scalars in `override` replace those in `base`."""
    out = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = merge_dicts(out[key], value)
        else:
            out[key] = copy.deepcopy(value)
    return out


def load_config(path: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None) -> GameConfig:
    """
    Load the packaged defaults, layer the user's file and any overrides on top,
    and validate the result. Any problem is reported as ConfigError.
    """
    data = _read_yaml(DEFAULT_CONFIG_PATH)
    if path:
        data = merge_dicts(data, _read_yaml(path))
    if overrides:
        data = merge_dicts(data, overrides)
    try:
        cfg = GameConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"invalid configuration:\n{e}") from e
    # fail at startup rather than mid-game on a bad personality table
    cfg.build_personalities()
    return cfg
