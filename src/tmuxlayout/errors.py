"""Exception hierarchy for the layout engine and its tmux adapter.

Engine errors are structured: each carries the values a caller needs to
render a precise message (position, offending token, pane id, sizes).
"""


class LayoutError(Exception):
    """Base class for all layout engine errors."""


# === Schema errors (declarative config) ===


class SchemaError(LayoutError):
    """The declarative split tree is invalid. Raised before any tmux command."""


class ConflictingAxesError(SchemaError):
    """A node declares both a left/right pair and a top/bottom pair."""

    def __init__(self, keys: list[str]):
        self.keys = keys
        super().__init__(f"node declares both horizontal and vertical splits: {', '.join(keys)}")


class OverAllocatedSizeError(SchemaError):
    """Sibling percentages add up to more than 100."""

    def __init__(self, sizes: list[int | None], total: int):
        self.sizes = sizes
        self.total = total
        super().__init__(f"sibling sizes sum to {total}% (> 100%): {sizes}")


class InvalidSizeError(SchemaError):
    """A width/height value is not a percentage between 0 and 100."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"invalid size {value!r}: expected an integer percentage 0-100")


class ZeroSizeError(SchemaError):
    """A sibling would be left with no space (declared 0% or nothing left over)."""

    def __init__(self, sizes: list[int | None], index: int):
        self.sizes = sizes
        self.index = index
        super().__init__(f"sibling #{index} gets no space: {sizes}")


# === Grammar errors (layout descriptors) ===


class GrammarError(LayoutError):
    """A layout descriptor could not be decoded."""


class UnexpectedTokenError(GrammarError):
    """A character that does not fit the descriptor grammar."""

    def __init__(self, position: int, found: str, expected: str | None = None):
        self.position = position
        self.found = found
        self.expected = expected
        msg = f"unexpected {found!r} at position {position}"
        if expected:
            msg += f" (expected {expected})"
        super().__init__(msg)


class UnbalancedBracketsError(GrammarError):
    """A split's closing bracket is missing or does not match its opener."""

    def __init__(self, position: int, expected: str, found: str | None = None):
        self.position = position
        self.expected = expected
        self.found = found
        what = "end of input" if found is None else repr(found)
        super().__init__(f"expected {expected!r} at position {position}, found {what}")


class ChecksumMismatchError(GrammarError):
    """The embedded checksum disagrees with the recomputed one.

    Decoding treats this as a warning: the error is returned alongside the
    tree and only raised in strict mode.
    """

    def __init__(self, embedded: str, computed: str):
        self.embedded = embedded
        self.computed = computed
        super().__init__(f"layout checksum mismatch: embedded {embedded}, computed {computed}")


# === Plan errors ===


class PlanError(LayoutError):
    """A split plan or command script is not self-consistent."""


class AlreadyRealizedError(PlanError):
    """The tree handed to the compiler already has pane ids."""

    def __init__(self, pane_id: int):
        self.pane_id = pane_id
        super().__init__(f"leaf already bound to pane %{pane_id}; only unrealized trees can be compiled")


class DanglingPaneRefError(PlanError):
    """A command targets a pane no earlier command created."""

    def __init__(self, index: int, ref: object):
        self.index = index
        self.ref = ref
        super().__init__(f"command #{index} targets {ref} before it is created")


# === Projection errors ===


class ProjectionError(LayoutError):
    """A decoded tree and its live pane metadata do not agree."""


class UnknownPaneError(ProjectionError):
    """Metadata references a pane that is not part of the layout tree."""

    def __init__(self, pane_id: int):
        self.pane_id = pane_id
        super().__init__(f"pane %{pane_id} is not part of the window layout")


# === Outside the engine ===


class ConfigError(Exception):
    """A config file could not be read or validated."""

    def __init__(self, message: str, *, file_path: str | None = None):
        self.message = message
        self.file_path = file_path
        if file_path:
            super().__init__(f"{file_path}: {message}")
        else:
            super().__init__(message)


class TmuxCommandError(Exception):
    """tmux rejected a command while a script was running."""

    def __init__(self, argv: list[str], stderr: str = ""):
        self.argv = argv
        self.stderr = stderr
        super().__init__(f"tmux command failed: {' '.join(argv)}: {stderr.strip()}")
