"""Print dialog state machine.

::

    IDLE ──start_loading──▶ LOADING ──succeed──▶ READY
                              │  └────fail─────▶ FAILED
                              └──abort──▶ IDLE

``start_loading`` is allowed from any phase (open, refetch, retry) and
``reset`` returns to IDLE from anywhere.
"""

from collections.abc import Iterable
from enum import StrEnum

from wit.models.label import DEFAULT_LABEL_SIZE, LabelRecord, LabelSizePreset

MIN_COLUMNS = 1
MAX_COLUMNS = 4
DEFAULT_COLUMNS = 2


class DialogPhase(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class InvalidTransition(Exception):
    """Exception raised for a state change the dialog does not allow."""

    def __init__(self, phase: DialogPhase, operation: str) -> None:
        super().__init__(f"Cannot {operation} while {phase}")
        self.phase = phase
        self.operation = operation


class DialogState:
    """Fetch phase, fetched labels and layout options of one dialog opening."""

    def __init__(self) -> None:
        self._phase = DialogPhase.IDLE
        self._labels: tuple[LabelRecord, ...] = ()
        self._error: str | None = None
        self._columns = DEFAULT_COLUMNS
        self.label_size: LabelSizePreset = DEFAULT_LABEL_SIZE
        self.show_qr_only = False

    @property
    def phase(self) -> DialogPhase:
        return self._phase

    @property
    def loading(self) -> bool:
        return self._phase == DialogPhase.LOADING

    @property
    def labels(self) -> tuple[LabelRecord, ...]:
        return self._labels

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def columns(self) -> int:
        return self._columns

    @columns.setter
    def columns(self, value: int) -> None:
        if not MIN_COLUMNS <= value <= MAX_COLUMNS:
            raise ValueError(f"columns must be between {MIN_COLUMNS} and {MAX_COLUMNS}, got {value}")
        self._columns = value

    def start_loading(self) -> None:
        self._phase = DialogPhase.LOADING
        self._labels = ()
        self._error = None

    def succeed(self, labels: Iterable[LabelRecord]) -> None:
        self._require(DialogPhase.LOADING, "succeed")
        self._labels = tuple(labels)
        self._phase = DialogPhase.READY

    def fail(self, message: str) -> None:
        self._require(DialogPhase.LOADING, "fail")
        self._labels = ()
        self._error = message
        self._phase = DialogPhase.FAILED

    def abort(self) -> None:
        """Leave LOADING without a result (cancelled fetch)."""
        self._require(DialogPhase.LOADING, "abort")
        self._phase = DialogPhase.IDLE

    def reset(self) -> None:
        """Return every field to its default."""
        self._phase = DialogPhase.IDLE
        self._labels = ()
        self._error = None
        self._columns = DEFAULT_COLUMNS
        self.label_size = DEFAULT_LABEL_SIZE
        self.show_qr_only = False

    def _require(self, phase: DialogPhase, operation: str) -> None:
        if self._phase != phase:
            raise InvalidTransition(self._phase, operation)
