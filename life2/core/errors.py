"""Error taxonomy for the life2 engine.

All of these are programmer or configuration errors. They are raised straight
to the caller and never retried or swallowed inside the engine.
"""

from typing import Any


class Life2Error(Exception):
    """Base class for every error raised by the engine."""


class DuplicateRuleError(Life2Error, ValueError):
    """A rule with the same name is already registered."""

    def __init__(self, name: str):
        super().__init__(f"Rule '{name}' is already registered")
        self.name = name


class UnknownRuleError(Life2Error, LookupError):
    """No rule is registered under the requested name."""

    def __init__(self, name: str):
        super().__init__(f"Rule '{name}' is not registered")
        self.name = name


class InvalidRuleOutputError(Life2Error, ValueError):
    """A rule expression returned something outside {EMPTY, TEAM_A, TEAM_B, None}."""

    def __init__(self, rule_name: str, value: Any):
        super().__init__(f"Rule '{rule_name}' returned an invalid state: {value!r}")
        self.rule_name = rule_name
        self.value = value


class InvalidDimensionError(Life2Error, ValueError):
    """A board was configured with a non-positive width or height."""

    def __init__(self, width: int, height: int):
        super().__init__(f"Board dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
