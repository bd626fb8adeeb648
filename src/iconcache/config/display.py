"""Tray and menu icon sizes derived from the display scaling factor.

Probing the platform for its scaling factor is left to the caller: pass any
zero-argument callable returning a ``ScalingFactor``. It is consulted once and
its answer is frozen into a ``DisplayConfig`` that call sites receive
explicitly.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from iconcache.config.defaults import DEFAULT_MENU_SIZE, DEFAULT_TRAY_SIZE
from iconcache.types import DisplayConfig, ScalingFactor

logger = logging.getLogger(__name__)

ScalingDetector = Callable[[], ScalingFactor]


def display_config_for(
    scaling: ScalingFactor,
    default_tray_size: int = DEFAULT_TRAY_SIZE,
    default_menu_size: int = DEFAULT_MENU_SIZE,
) -> DisplayConfig:
    """Scale the default sizes. Factors of 1 or less leave the default alone."""
    tray_size = default_tray_size
    if scaling.tray > 1:
        tray_size = int(default_tray_size * scaling.tray)

    entry_size = default_menu_size
    if scaling.menu > 1:
        entry_size = int(default_menu_size * scaling.menu)

    logger.debug("Scaling factor is '%s', tray icon size is '%d'.", scaling.tray, tray_size)
    logger.debug("Scaling factor is '%s', menu entry size is '%d'.", scaling.menu, entry_size)
    return DisplayConfig(tray_size=tray_size, entry_size=entry_size)


def detect_display_config(
    detector: ScalingDetector | None = None,
    default_tray_size: int = DEFAULT_TRAY_SIZE,
    default_menu_size: int = DEFAULT_MENU_SIZE,
) -> DisplayConfig:
    """Run the scaling detector once and turn its answer into icon sizes.

    A missing or failing detector yields the unscaled defaults.
    """
    scaling = ScalingFactor()
    if detector is not None:
        try:
            scaling = detector()
        except Exception as e:
            logger.error("Cannot determine display scaling factor, using defaults: %s", e)
    return display_config_for(scaling, default_tray_size, default_menu_size)
