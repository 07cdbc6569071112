"""Context window configuration.

A context window bounds how much history is included in an assembled
athlete context and which sections appear at all. It is pure
configuration: validated once when built, never mutated afterwards.
"""

from dataclasses import dataclass

from athlo.coach.errors import ContextValidationError


@dataclass(frozen=True)
class ContextWindow:
    days: int = 14
    include_profile: bool = True
    include_workouts: bool = True
    include_check_ins: bool = True
    include_metrics: bool = True
    include_plan: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.days, bool) or not isinstance(self.days, int):
            raise ContextValidationError(f"ContextWindow.days must be an integer, got {self.days!r}")
        if self.days <= 0:
            raise ContextValidationError(f"ContextWindow.days must be positive, got {self.days}")


DEFAULT_CONTEXT_WINDOW = ContextWindow()

SHORT_CONTEXT_WINDOW = ContextWindow(
    days=7,
    include_metrics=False,
    include_plan=False,
)

MINIMAL_CONTEXT_WINDOW = ContextWindow(
    days=3,
    include_workouts=False,
    include_check_ins=False,
    include_metrics=False,
    include_plan=False,
)
