"""Saved-parameters repository — persists the last-used inputs to SQLite."""

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Optional

from dcarisk.calc.models import StrategyParameters
from dcarisk.repos.db import get_connection

logger = logging.getLogger("dcarisk")

DEFAULT_KEY = "dcaBotParams"


class ParamsRepo:
    """Data access layer for the ``saved_params`` table.

    Args:
        db_path: Path to the SQLite database file.
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    def save(
        self,
        params: StrategyParameters,
        key: str = DEFAULT_KEY,
        saved_at: Optional[datetime] = None,
    ) -> str:
        """Store *params* under *key*, replacing any earlier value.

        Returns the ISO timestamp recorded with the row.
        """
        stamp = (saved_at or datetime.now(timezone.utc)).isoformat()
        conn = get_connection(self._db_path)
        try:
            conn.execute(
                """
                INSERT OR REPLACE INTO saved_params
                    (key, pip_step, first_volume, volume_exponent,
                     max_positions, max_drawdown_pips, pip_value, saved_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    key,
                    params.pip_step,
                    params.first_volume,
                    params.volume_exponent,
                    params.max_positions,
                    params.max_drawdown_pips,
                    params.pip_value,
                    stamp,
                ),
            )
            conn.commit()
        except sqlite3.Error as exc:
            logger.error("Failed to save parameters under %r: %s", key, exc)
            raise
        finally:
            conn.close()
        return stamp

    def load(self, key: str = DEFAULT_KEY) -> Optional[StrategyParameters]:
        """Return the parameters stored under *key*, or ``None``."""
        conn = get_connection(self._db_path)
        try:
            row = conn.execute(
                "SELECT * FROM saved_params WHERE key = ?", (key,),
            ).fetchone()
        finally:
            conn.close()

        if row is None:
            return None
        return StrategyParameters(
            pip_step=row["pip_step"],
            first_volume=row["first_volume"],
            volume_exponent=row["volume_exponent"],
            max_positions=row["max_positions"],
            max_drawdown_pips=row["max_drawdown_pips"],
            pip_value=row["pip_value"],
        )

    def delete(self, key: str = DEFAULT_KEY) -> bool:
        """Remove the row for *key*.  Returns ``True`` if one existed."""
        conn = get_connection(self._db_path)
        try:
            cur = conn.execute("DELETE FROM saved_params WHERE key = ?", (key,))
            conn.commit()
            return cur.rowcount > 0
        finally:
            conn.close()
