"""Exception hierarchy for FlashDrill."""


class FlashDrillError(Exception):
    """Base class for all FlashDrill errors."""


class SetLoadError(FlashDrillError):
    """A flashcard set could not be loaded (missing, malformed or empty)."""


class SchedulerExhausted(FlashDrillError):
    """Selection was attempted on a set without cards."""


class PersistenceError(FlashDrillError):
    """The proficiency store could not be read or written."""


class EmptySetError(FlashDrillError):
    """Aggregation was requested over zero cards."""
