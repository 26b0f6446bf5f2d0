"""DCA risk engine — application configuration.

Loads .env variables into a typed config object.  Nothing is required;
every variable has a default.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from dcarisk.calc.models import StrategyParameters


# Parameters the form starts with and resets to.
DEFAULT_PARAMS = StrategyParameters(
    pip_step=5,
    first_volume=1,
    volume_exponent=1,
    max_positions=20,
    max_drawdown_pips=200,
    pip_value=10,
)


@dataclass(frozen=True)
class Config:
    """Typed configuration loaded from environment variables."""

    db_path: str
    export_dir: str
    log_level: str
    api_port: int


def _int_var(name: str, default: str) -> int:
    raw = os.environ.get(name, default)
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_config(env_path: str | None = None) -> Config:
    """Load configuration from environment variables.

    Raises ``ValueError`` naming the variable when a numeric value is
    malformed.
    """
    load_dotenv(dotenv_path=env_path)

    return Config(
        db_path=os.environ.get("DCA_DB_PATH", "data/dcarisk.db"),
        export_dir=os.environ.get("DCA_EXPORT_DIR", "exports"),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        api_port=_int_var("API_PORT", "8080"),
    )
