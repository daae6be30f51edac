"""
Custom logging configuration for Currency Crisis Lab.

Extends Python's standard logging with a custom DEEP_DEBUG level (5)
for very verbose debugging output (full state dumps every tick).
Provides CrisisLogger class with per-module log level configuration
support.

Log Levels
----------
- CRITICAL (50): Critical errors
- ERROR (40): Errors
- WARNING (30): Warnings
- INFO (20): Crisis entry / recovery, run summaries (default)
- DEBUG (10): Per-tick pressure breakdown
- DEEP_DEBUG (5): Full state dump after every tick

A DEEP record from ``crisislab.engine`` is the whole post-tick
``SimulationState.to_dict()``: every indicator, the regime and the
preferred regime, the crisis label and the bounded market log. Enable it
for one module only (``{"modules": {"engine": "DEEP_DEBUG"}}``); at one
record per tick it dwarfs the rest of the output.

Records are formatted as ``LOG_FORMAT`` (time, level, logger name,
message), so crisis entries from ``crisislab.engine`` and shocks from
``crisislab.policy`` can be told apart in a headless CLI run.

Examples
--------
Use logger in a module:

>>> from crisislab import logging
>>> logger = logging.getLogger("crisislab.systems.my_rule")
>>> logger.info("Rule executing")
>>> logger.deep("Very verbose output")

Configure per-module log levels:

>>> import crisislab as cl
>>> log_config = {
...     "default_level": "INFO",
...     "modules": {"engine": "DEBUG", "systems.regimes": "WARNING"},
... }
>>> sim = cl.Simulation.init(logging=log_config)

See Also
--------
crisislab.simulation.Simulation._configure_logging : Applies log config
crisislab.config.validator.ConfigValidator : Validates log config
"""

import logging
from typing import Any

(CRITICAL, ERROR, WARNING, INFO, DEBUG) = (
    logging.CRITICAL,
    logging.ERROR,
    logging.WARNING,
    logging.INFO,
    logging.DEBUG,
)
DEEP_DEBUG = 5
logging.addLevelName(DEEP_DEBUG, "DEEP")


class CrisisLogger(logging.Logger):
    """
    Custom logger with DEEP_DEBUG level support.

    Extends Python's Logger with `deep()` (level 5), which the engine uses
    for its post-tick state dump. Callers building an expensive message
    should still guard with ``isEnabledFor(DEEP_DEBUG)``.

    Examples
    --------
    >>> logger = CrisisLogger("test")
    >>> logger.setLevel(5)  # DEEP_DEBUG
    >>> logger.deep("Very verbose message")
    """

    def deep(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """
        Log message at DEEP_DEBUG level (5).

        Parameters
        ----------
        msg : str
            Message format string.
        *args : Any
            Arguments for message formatting.
        **kwargs : Any
            Additional logging kwargs.
        """
        if self.isEnabledFor(DEEP_DEBUG):
            self._log(DEEP_DEBUG, msg, args, **kwargs)


# Make the logging module hand out our subclass from now on
logging.setLoggerClass(CrisisLogger)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, datefmt="%H:%M:%S")


def getLogger(name: str | None = None) -> CrisisLogger:
    """
    Get a CrisisLogger instance.

    Convenience wrapper around logging.getLogger() that returns
    a CrisisLogger instance with DEEP_DEBUG support.

    Parameters
    ----------
    name : str, optional
        Logger name. If None, returns root logger.

    Returns
    -------
    CrisisLogger
        Logger instance with deep() method.
    """
    return logging.getLogger(name)  # type: ignore[return-value]


def level_from_name(name: str) -> int:
    """Translate a level name (``"DEEP_DEBUG"``, ``"info"``...) into its int."""
    upper = name.upper()
    if upper == "DEEP_DEBUG":
        return DEEP_DEBUG
    level = logging.getLevelName(upper)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level '{name}'")
    return level
