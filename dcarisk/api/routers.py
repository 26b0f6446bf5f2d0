"""Internal API routers — /defaults, /validate, /calculate, /params, /export, /debug.

No calculation logic. Delegates to the engine, the params repo and the
export builders.
"""

import logging
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, HTTPException

from dcarisk.calc.advice import optimization_suggestions
from dcarisk.calc.engine import advise, run, validate
from dcarisk.calc.metrics import overall_risk_level
from dcarisk.calc.models import CalculationResult, StrategyParameters
from dcarisk.config import DEFAULT_PARAMS
from dcarisk.errors import ComputeFault, ValidationError
from dcarisk.export import build_debug_export, build_export, to_dict, write_export

logger = logging.getLogger("dcarisk")
router = APIRouter()

# ── Shared state (set during app startup) ────────────────────────────────

_params_repo = None  # Set via configure_routers()
_export_dir: Optional[str] = None  # Set via configure_routers()


def configure_routers(params_repo=None, export_dir: Optional[str] = None) -> None:
    """Inject dependencies from the application startup.

    Args:
        params_repo: A ``ParamsRepo`` instance (or duck-type for tests).
        export_dir: Directory export files are written to.  ``None`` keeps
            exports in the response only.
    """
    global _params_repo, _export_dir  # noqa: PLW0603
    _params_repo = params_repo
    _export_dir = export_dir


def _calculate(body: dict) -> tuple[StrategyParameters, CalculationResult]:
    """Run the engine, translating compute faults into HTTP 500."""
    params = StrategyParameters.from_dict(body)
    try:
        return params, run(params)
    except ComputeFault as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


def _validation_error(exc: ValidationError) -> dict:
    return {"status": "error", "errors": exc.errors}


# ── Endpoints ────────────────────────────────────────────────────────────


@router.get("/defaults")
async def get_defaults():
    """Return the default strategy parameters."""
    return {"params": DEFAULT_PARAMS.to_dict()}


@router.post("/validate")
async def post_validate(body: dict):
    """Validate parameters without running the calculation."""
    result = validate(StrategyParameters.from_dict(body))
    return {"valid": result.valid, "errors": result.errors}


@router.post("/calculate")
async def post_calculate(body: dict):
    """Run the full analysis and attach advice and suggestions."""
    try:
        params, result = _calculate(body)
    except ValidationError as exc:
        return _validation_error(exc)

    return {
        "status": "ok",
        "result": to_dict(result),
        "advice": advise(result),
        "suggestions": [asdict(s) for s in optimization_suggestions(params)],
        "overallRisk": overall_risk_level(result.risk_metrics),
    }


@router.get("/params")
async def get_params():
    """Return the last saved parameters, or ``null`` when none are stored."""
    if _params_repo is None:
        return {"params": None}
    params = _params_repo.load()
    return {"params": params.to_dict() if params is not None else None}


@router.post("/params")
async def post_params(body: dict):
    """Persist parameters for the next session."""
    if _params_repo is None:
        return {"status": "error", "errors": ["parameter storage is not configured"]}
    params = StrategyParameters.from_dict(body)
    saved_at = _params_repo.save(params)
    logger.info("Parameters saved: %s", params.to_dict())
    return {"status": "ok", "savedAt": saved_at}


@router.post("/export")
async def post_export(body: dict):
    """Build the analysis document and write it to the export directory."""
    try:
        params, result = _calculate(body)
    except ValidationError as exc:
        return _validation_error(exc)

    document = build_export(params, result, advise(result))
    path = write_export(document, _export_dir) if _export_dir else None
    return {
        "status": "ok",
        "path": str(path) if path is not None else None,
        "document": document,
    }


@router.post("/debug")
async def post_debug(body: dict):
    """Return per-level calculation steps and formula checks."""
    try:
        params, result = _calculate(body)
    except ValidationError as exc:
        return _validation_error(exc)
    return build_debug_export(params, result)
