"""
HUMAN logging level -- Readable indexing report.

Custom level between INFO (20) and WARNING (30).
Does not indicate severity -- marks the lines a user reads to follow an
indexing run (module headers, progress, summaries) without technical noise.

Hierarchy:
    debug  (10) -> full path lists, per-file decisions
    info   (20) -> System operations (config loaded, hierarchy built)
    human  (25) -> * What the indexer reports: modules, progress, totals
    warn   (30) -> Non-fatal problems (symlink loops, files outside basedir)
    error  (40) -> Errors
"""

import logging

import structlog

# Custom level: between INFO (20) and WARNING (30)
HUMAN = 25
logging.addLevelName(HUMAN, "HUMAN")


# Inject the .human() method into Python's Logger class
# so structlog's stdlib proxy can dispatch the level by name
def _human_method(self, message, *args, **kwargs):
    if self.isEnabledFor(HUMAN):
        self._log(HUMAN, message, args, **kwargs)


logging.Logger.human = _human_method

# Register the level in structlog to avoid KeyError: 25
for _module in (getattr(structlog, "_log_levels", None), getattr(structlog, "stdlib", None)):
    _level_to_name = getattr(_module, "LEVEL_TO_NAME", None)
    if isinstance(_level_to_name, dict):
        _level_to_name[HUMAN] = "human"
    _name_to_level = getattr(_module, "NAME_TO_LEVEL", None)
    if isinstance(_name_to_level, dict):
        _name_to_level["human"] = HUMAN

# structlog's own loggers (used when logging is not configured) need the
# method too, otherwise the proxy raises AttributeError: 'human'
for _logger_cls in (structlog.PrintLogger, structlog.WriteLogger):
    if not hasattr(_logger_cls, "human"):
        _logger_cls.human = _logger_cls.msg
