"""
Data model shared by the compliance engine.

Everything here is immutable: rules produce outcomes, the runner folds them
into a HostResult and the report only ever reads them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(Enum):
    """Severity of a single report message."""

    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


SEVERITY_COLORS = {
    Severity.INFO: "green",
    Severity.WARNING: "yellow",
    Severity.CRITICAL: "red",
}


class Mode(Enum):
    """Run mode: report only, or remediate."""

    SCAN = "scan"
    FIX = "fix"

    @property
    def enforce(self) -> bool:
        return self is Mode.FIX


@dataclass(frozen=True)
class Message:
    """
    A line of the compliance log.

    Args:
        text: Rendered text of the message.
        severity: Drives verbosity filtering in the presentation layer.
        color: Display colour; defaults to the severity colour.
        newline: Whether the renderer ends the line after this message.
    """

    text: str
    severity: Severity = Severity.INFO
    color: str = ""
    newline: bool = True

    def __post_init__(self):
        if not self.color:
            object.__setattr__(self, "color", SEVERITY_COLORS[self.severity])

    @classmethod
    def info(cls, text: str) -> "Message":
        return cls(text, Severity.INFO)

    @classmethod
    def warning(cls, text: str) -> "Message":
        return cls(text, Severity.WARNING)

    @classmethod
    def critical(cls, text: str) -> "Message":
        return cls(text, Severity.CRITICAL)


@dataclass(frozen=True)
class RuleOutcome:
    """Result of evaluating one rule against one host."""

    rule: str
    compliant: bool
    messages: tuple[Message, ...] = ()

    @classmethod
    def ok(cls, rule: str, *messages: Message) -> "RuleOutcome":
        return cls(rule, True, tuple(messages))

    @classmethod
    def drift(cls, rule: str, *messages: Message) -> "RuleOutcome":
        return cls(rule, False, tuple(messages))


@dataclass(frozen=True)
class HostRef:
    """
    Engine-side handle to a managed host.

    ``handle`` carries the collaborator's own object (a ``vim.HostSystem``
    for the vSphere gateway) and is never inspected by the engine.
    """

    name: str
    connection_state: str
    model: str = ""
    handle: Any = field(default=None, compare=False, repr=False)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Package:
    """An installed software package and its acceptance level."""

    name: str
    acceptance_level: str


@dataclass(frozen=True)
class HostResult:
    """All rule outcomes of one host for one run."""

    host: HostRef
    outcomes: tuple[RuleOutcome, ...] = ()

    @property
    def compliant(self) -> bool:
        return all(outcome.compliant for outcome in self.outcomes)

    @property
    def messages(self) -> list[Message]:
        return [message for outcome in self.outcomes for message in outcome.messages]

    @property
    def failed_rules(self) -> list[str]:
        return [outcome.rule for outcome in self.outcomes if not outcome.compliant]
