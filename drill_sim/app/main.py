"""Main entrypoint for the drilling simulator app."""

from __future__ import annotations

import logging

from ..core.config import normalize_run_config
from ..core.runner import run_headless
from .cli import parse_args

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    cfg_norm = normalize_run_config(args)

    logger.info("=" * 60)
    logger.info("Starting drilling simulation")
    logger.info("=" * 60)
    logger.info(f"Loading config from: {cfg_norm.config_path}")

    if cfg_norm.pilot_name == "keyboard":
        from .interactive import run_interactive

        run_interactive(cfg_norm)
        return

    try:
        run_log = run_headless(cfg_norm)
    except RuntimeError as exc:
        logger.error(str(exc))
        raise SystemExit(1)

    if args.no_plot:
        return

    from ..visualizer import plot_run

    plot_run(run_log, cfg_norm.params, visual_cfg=cfg_norm.visual_cfg, show=True)


if __name__ == "__main__":
    main()
