"""
Error taxonomy for the movement layer.

Every error here is a local configuration error: it points at a setup bug
(bad direction value, incomplete animation set) and is raised straight to the
caller. Nothing retries.
"""


class MotionError(Exception):
    """Base class for movement/animation configuration errors"""


class InvalidDirectionError(MotionError, ValueError):
    """A value outside the Direction set was passed where a direction is required"""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid direction: {value!r}")


class MissingAnimationError(MotionError, LookupError):
    """A requested animation slot, clip or actor type is not configured"""

    def __init__(self, message: str, key=None):
        self.key = key
        super().__init__(message)
