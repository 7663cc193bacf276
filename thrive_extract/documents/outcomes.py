from dataclasses import dataclass


@dataclass(frozen=True)
class Ok:
    """Extraction succeeded."""

    text: str
    status: str = "ok"


@dataclass(frozen=True)
class Degraded:
    """Usable text that comes with a caveat for the reviewer."""

    text: str
    reason: str
    status: str = "degraded"


@dataclass(frozen=True)
class Fatal:
    """No usable text; the caller substitutes placeholder content."""

    reason: str
    partial_text: str = ""
    status: str = "fatal"


ExtractionOutcome = Ok | Degraded | Fatal


def with_note(outcome: ExtractionOutcome, note: str) -> ExtractionOutcome:
    """Attach an extra caveat to a successful outcome.

    Notes accumulate, so an already degraded outcome keeps its earlier reason.
    """
    if isinstance(outcome, Fatal):
        return outcome
    if isinstance(outcome, Degraded):
        return Degraded(text=outcome.text, reason=f"{outcome.reason} {note}")
    return Degraded(text=outcome.text, reason=note)
