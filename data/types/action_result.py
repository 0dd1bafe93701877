from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class ActionResult:
    """Outcome of applying an input to a game state snapshot.

    Rejected inputs carry the untouched original snapshot and the reason they
    were refused; accepted inputs carry the new snapshot.
    """

    state: Any
    accepted: bool = True
    message: Optional[str] = None

    @classmethod
    def reject(cls, state: Any, message: str) -> "ActionResult":
        return cls(state=state, accepted=False, message=message)

    def __bool__(self) -> bool:
        return self.accepted
