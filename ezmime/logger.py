"""Logging helper for ezmime.

All package loggers live under the ``ezmime`` namespace and no handlers
are installed; applications decide level and output. What gets logged:

- ``ezmime.core`` DEBUG: part counts of each built message.
- ``ezmime.core`` WARNING: unreadable files kept empty or dropped under
  the ``"empty"`` and ``"skip"`` missing-file policies.
- ``ezmime.transport`` DEBUG/INFO: connection target and delivery count.
- ``ezmime.transport`` WARNING: recipients refused by the server.

Example:
    import logging

    logging.getLogger("ezmime").setLevel(logging.WARNING)
"""

import logging


def get_logger(name: str = "ezmime") -> logging.Logger:
    """Returns the logger for an ezmime module, e.g. ``get_logger(__name__)``."""
    return logging.getLogger(name)
