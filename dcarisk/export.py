"""Export documents — JSON-safe snapshots of a calculation.

Builds the analysis and debug documents and writes them to disk.  Keys
are camelCase so exported files stay compatible with earlier exports.
"""

import dataclasses
import json
import logging
import pathlib
from datetime import datetime, timezone
from typing import Optional

from dcarisk.calc.debug import calculation_debug_info, formula_verification
from dcarisk.calc.models import CalculationResult, Position, StrategyParameters

logger = logging.getLogger("dcarisk")

EXPORT_VERSION = "1.0"
EXPORT_TYPE = "cTrader_DCA_cBot_Analysis"
DEBUG_EXPORT_VERSION = "1.0-debug"
DEBUG_EXPORT_TYPE = "DCA_Debug_Analysis"


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _record(obj) -> dict:
    out = {_camel(f.name): getattr(obj, f.name) for f in dataclasses.fields(obj)}
    if isinstance(obj, Position):
        out["level"] = obj.display_level
    return out


def to_dict(result: CalculationResult) -> dict:
    """Convert *result* into plain dicts and lists.

    Position levels are reported 1-indexed.
    """
    return {
        "positions": [_record(p) for p in result.positions],
        "totalVolume": result.total_volume,
        "totalInvestment": result.total_investment,
        "avgCostPrice": result.avg_cost_price,
        "drawdownAnalysis": [_record(p) for p in result.drawdown_analysis],
        "riskMetrics": _record(result.risk_metrics),
    }


def _timestamp(now: Optional[datetime]) -> str:
    return (now or datetime.now(timezone.utc)).isoformat()


def build_export(
    params: StrategyParameters,
    result: CalculationResult,
    advice: list[str],
    now: Optional[datetime] = None,
) -> dict:
    """Analysis document: inputs, results, advice and a timestamp."""
    return {
        "inputParams": params.to_dict(),
        "calculationResults": to_dict(result),
        "riskAdvice": "\n".join(advice),
        "timestamp": _timestamp(now),
        "version": EXPORT_VERSION,
        "type": EXPORT_TYPE,
    }


def build_debug_export(
    params: StrategyParameters,
    result: CalculationResult,
    now: Optional[datetime] = None,
) -> dict:
    """Debug document: results plus per-level steps and formula checks."""
    return {
        "timestamp": _timestamp(now),
        "inputParams": params.to_dict(),
        "calculationResults": to_dict(result),
        "debugInfo": calculation_debug_info(params),
        "formulaVerification": formula_verification(params, result),
        "version": DEBUG_EXPORT_VERSION,
        "type": DEBUG_EXPORT_TYPE,
    }


def export_filename(document: dict) -> str:
    """``dca-cbot-analysis-YYYY-MM-DD.json`` or the debug equivalent."""
    prefix = "dca-debug-analysis" if document.get("type") == DEBUG_EXPORT_TYPE else "dca-cbot-analysis"
    return f"{prefix}-{document['timestamp'][:10]}.json"


def write_export(document: dict, directory: str) -> pathlib.Path:
    """Write *document* as indented JSON into *directory*.  Returns the path."""
    out_dir = pathlib.Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / export_filename(document)
    path.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")
    logger.info("Exported %s to %s", document.get("type"), path)
    return path
