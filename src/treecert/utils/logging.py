from __future__ import annotations

import logging

from ..core.settings import ROOT_LOGGER_NAME


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger under the ``treecert`` namespace.

    No configuration happens here; the package level is applied when
    settings are first loaded (see core.settings.get_settings) and
    handlers are left to the host application.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
