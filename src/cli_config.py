"""Runtime configuration: YAML config file plus CLI overrides.

Precedence, lowest to highest: Constants defaults, the YAML config file,
CLI flags.
"""

from __future__ import annotations

import logging

from constants import Constants, _load_yaml_config, apply_config

logger = logging.getLogger(__name__)


def apply_cli_overrides(args) -> None:
    """Load the YAML config named by --config (or found by search), then apply CLI flags."""
    cfg = _load_yaml_config(getattr(args, "CONFIG", None))
    apply_config(cfg)

    forge = getattr(args, "FORGE", None)
    if forge:
        Constants.DEFAULT_FORGE = forge
    timeout = getattr(args, "TIMEOUT", None)
    if timeout is not None:
        if timeout <= 0:
            logger.warning("Ignoring non-positive --timeout %s", timeout)
        else:
            Constants.REQUEST_TIMEOUT = timeout
    logger.debug(
        "Effective settings: forge=%s timeout=%s",
        Constants.DEFAULT_FORGE,
        Constants.REQUEST_TIMEOUT,
    )
