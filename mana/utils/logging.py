"""Logging utilities (dependency-free).

Invariants
- Idempotent handler installation per logger.
- No hidden global state beyond the standard logging registry.

Public API
- get_logger(name="mana", level=logging.WARNING) -> logging.Logger
"""
from __future__ import annotations

import logging


def get_logger(name: str = "mana", level: int = logging.WARNING) -> logging.Logger:
    """
    Return a configured logger with concise formatter.

    Idempotent: installs at most one StreamHandler marked by _mana_handler.
    Child loggers ("mana.so3", ...) share the handler of the "mana" root.
    """
    if not isinstance(name, str) or not name:
        raise ValueError("name must be a non-empty string")
    root_name = name.split(".", 1)[0]
    root = logging.getLogger(root_name)

    has_handler = any(getattr(h, "_mana_handler", False) for h in root.handlers)
    if not has_handler:
        root.setLevel(int(level))
        root.propagate = False  # avoid duplicate logs through root
        handler = logging.StreamHandler()
        handler._mana_handler = True  # type: ignore[attr-defined]
        formatter = logging.Formatter(
            fmt="%(asctime)s %(name)s %(levelname)s: %(message)s",
            datefmt="%H:%M:%S",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
    return logging.getLogger(name)


__all__ = ["get_logger"]
