"""Configuration management for Solo Chief."""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .core.scoring import ScoringWeights
from .core.tasks import Goal

logger = logging.getLogger(__name__)

SOLOCHIEF_HOME = Path(os.environ.get("SOLOCHIEF_HOME", Path.home() / "solochief"))
CONFIG_FILE = SOLOCHIEF_HOME / "config" / "solochief.conf"
DATA_DIR = SOLOCHIEF_HOME / "data"

WEIGHT_KEYS = {
    "weight_goal_alignment": "goal_alignment",
    "weight_impact_magnitude": "impact_magnitude",
    "weight_time_efficiency": "time_efficiency",
    "weight_deadline_proximity": "deadline_proximity",
    "weight_energy_fit": "energy_fit",
}


@dataclass
class Config:
    """Solo Chief configuration."""

    energy_level: int = 4
    available_minutes: int = 480
    goals: list[Goal] = field(default_factory=list)
    snapshot_file: str = ""
    weight_overrides: dict[str, float] = field(default_factory=dict)

    def weights(self) -> ScoringWeights:
        """Scoring weights with overrides applied. Raises ValueError if they don't sum to 1."""
        return ScoringWeights(**self.weight_overrides)

    def snapshot_path(self) -> Path:
        if self.snapshot_file:
            return Path(self.snapshot_file).expanduser()
        return DATA_DIR / "snapshot.json"


def _unquote(value: str) -> str:
    """Strip matching quotes, or an inline comment from unquoted values."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def parse_goals(value: str) -> list[Goal]:
    """
    Parse the GOALS setting.

    JSON format: [{"description": "...", "progress": 40}]
    Simple format: "Ship the MVP:65,Reach 10k MRR:30"
    """
    goals = []
    if value.startswith("["):
        try:
            for item in json.loads(value):
                goals.append(Goal(item["description"], int(item.get("progress", 0))))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Failed to parse GOALS JSON: {e}")
        return goals

    for entry in value.split(","):
        entry = entry.strip()
        if not entry:
            continue
        description, sep, progress = entry.rpartition(":")
        if sep and progress.strip().isdigit():
            goals.append(Goal(description.strip(), int(progress.strip())))
        else:
            goals.append(Goal(entry))
    return goals


def _parse_int(key: str, value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid {key.upper()} value '{value}', using {default}")
        return default


def load_config(path: Path | None = None) -> Config:
    """Load configuration from solochief.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "energy_level":
                config.energy_level = _parse_int(key, value, config.energy_level)
            case "available_minutes":
                config.available_minutes = _parse_int(key, value, config.available_minutes)
            case "goals":
                config.goals = parse_goals(value)
            case "snapshot_file":
                config.snapshot_file = value
            case _ if key in WEIGHT_KEYS:
                try:
                    config.weight_overrides[WEIGHT_KEYS[key]] = float(value)
                except ValueError:
                    logger.warning(f"Invalid {key.upper()} value '{value}', ignoring")
            case _:
                logger.debug(f"Ignoring unknown config key '{key}'")

    return config
