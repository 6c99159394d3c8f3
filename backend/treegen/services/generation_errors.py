"""
Typed generation failures.

All of them are raised synchronously and never retried here. A raised error
means nothing was produced; there is no partial structure to clean up.
"""


class GenerationError(ValueError):
    """Base class for every failure of a generation run."""


class InsufficientEntrants(GenerationError):
    def __init__(self, count: int = 0):
        self.count = count
        super().__init__(f"Cannot build a bracket from {count} entrants")


class InvalidGroupSize(GenerationError):
    def __init__(self, group_size: int):
        self.group_size = group_size
        super().__init__(f"preliminary_group_size must be >= 1, got {group_size}")


class InconsistentAdvancingCount(GenerationError):
    def __init__(self, message: str, advancing: int, expected_groups: int):
        self.advancing = advancing
        self.expected_groups = expected_groups
        super().__init__(message)


class InvalidRoster(GenerationError):
    """Roster mixes competitors and teams, or does not match the category kind."""
