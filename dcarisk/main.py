"""DCA risk engine — application entry point.

Boots the FastAPI internal server and provides the CLI entry point for
one-shot analysis and server mode.
"""

import logging

from fastapi import FastAPI

from dcarisk.api.routers import router

app = FastAPI(title="DCA Risk Internal API", version="0.1.0")
app.include_router(router)

logger = logging.getLogger("dcarisk")


@app.get("/health")
async def health():
    """Liveness probe."""
    return {"status": "ok"}


# ── CLI ──────────────────────────────────────────────────────────────────


def _run_cli(argv: list[str] | None = None) -> int:
    """Parse CLI arguments and either serve the API or print one analysis."""
    import argparse

    from dcarisk.api.routers import configure_routers
    from dcarisk.config import DEFAULT_PARAMS, load_config
    from dcarisk.repos.db import init_db
    from dcarisk.repos.params_repo import ParamsRepo

    parser = argparse.ArgumentParser(description="DCA ladder risk analysis")
    parser.add_argument("--serve", action="store_true", help="Run the internal API server")
    parser.add_argument("--pip-step", type=float, default=DEFAULT_PARAMS.pip_step)
    parser.add_argument("--first-volume", type=float, default=DEFAULT_PARAMS.first_volume)
    parser.add_argument("--volume-exponent", type=float, default=DEFAULT_PARAMS.volume_exponent)
    parser.add_argument("--max-positions", type=int, default=DEFAULT_PARAMS.max_positions)
    parser.add_argument("--max-drawdown-pips", type=float, default=DEFAULT_PARAMS.max_drawdown_pips)
    parser.add_argument("--pip-value", type=float, default=DEFAULT_PARAMS.pip_value)
    parser.add_argument(
        "--export",
        action="store_true",
        help="Write the analysis document to the export directory",
    )
    args = parser.parse_args(argv)

    config = load_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.serve:
        import uvicorn

        init_db(config.db_path)
        configure_routers(
            params_repo=ParamsRepo(config.db_path),
            export_dir=config.export_dir,
        )
        logger.info("API available at http://localhost:%d", config.api_port)
        uvicorn.run(app, host="0.0.0.0", port=config.api_port, log_level="info")
        return 0

    from dcarisk.calc.engine import advise, run
    from dcarisk.calc.models import StrategyParameters
    from dcarisk.cli.report import print_summary
    from dcarisk.errors import ValidationError
    from dcarisk.export import build_export, write_export

    params = StrategyParameters(
        pip_step=args.pip_step,
        first_volume=args.first_volume,
        volume_exponent=args.volume_exponent,
        max_positions=args.max_positions,
        max_drawdown_pips=args.max_drawdown_pips,
        pip_value=args.pip_value,
    )
    try:
        result = run(params)
    except ValidationError as exc:
        for err in exc.errors:
            logger.error("Invalid parameter: %s", err)
        return 2

    advice = advise(result)
    print_summary(result, advice)
    if args.export:
        write_export(build_export(params, result, advice), config.export_dir)
    return 0


if __name__ == "__main__":
    raise SystemExit(_run_cli())
