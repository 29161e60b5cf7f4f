from .controller import DialogStateError, PromptGridController
from .state import CLOSED, Closed, ConfirmingDelete, Creating, DialogState, Draft, Editing

__all__ = [
    "CLOSED",
    "Closed",
    "ConfirmingDelete",
    "Creating",
    "DialogState",
    "DialogStateError",
    "Draft",
    "Editing",
    "PromptGridController",
]
