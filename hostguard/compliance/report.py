"""
Aggregation of host results for a whole run.
"""

from dataclasses import dataclass, field

from .models import HostResult, Message


@dataclass
class ComplianceReport:
    """HostResults of one run, in the order the hosts were processed."""

    results: list[HostResult] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    def add(self, result: HostResult) -> None:
        self.results.append(result)

    def skip(self, host_name: str) -> None:
        self.skipped.append(host_name)

    @property
    def messages(self) -> list[Message]:
        return [message for result in self.results for message in result.messages]

    @property
    def count_compliant(self) -> int:
        return sum(1 for result in self.results if result.compliant)

    @property
    def count_non_compliant(self) -> int:
        return sum(1 for result in self.results if not result.compliant)

    @property
    def all_compliant(self) -> bool:
        return self.count_non_compliant == 0

    def summary(self) -> dict[str, int]:
        return {
            "compliant": self.count_compliant,
            "non_compliant": self.count_non_compliant,
        }
