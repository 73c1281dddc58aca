"""
Hardening baseline: the target value of every monitored setting.
"""

from dataclasses import dataclass, field
from enum import Enum


class SettingKind(Enum):
    SCALAR = "scalar"
    SERVICE = "service"
    ACCEPTANCE_LEVEL = "acceptanceLevel"


# Acceptance levels a package may carry without blocking the target level
PERMITTED_ACCEPTANCE_LEVELS = frozenset({"VMwareCertified", "VMwareAccepted", "PartnerSupported"})

# The only package the resolver is allowed to remove on its own
TOLERATED_PACKAGE = "smartctl"


@dataclass(frozen=True)
class SettingSpec:
    """
    A single setting and the value it must hold.

    Args:
        name: Setting identifier, e.g. ``UserVars.ESXiShellTimeOut``.
        target: Baseline value.
        kind: Which evaluator handles the setting.
        label: Short human readable name used in messages.
    """

    name: str
    target: str | int
    kind: SettingKind = SettingKind.SCALAR
    label: str = ""

    @property
    def display_name(self) -> str:
        return self.label or self.name


@dataclass(frozen=True)
class ServicePolicySpec:
    """
    Desired state of a host service.

    ``must_be_stopped`` additionally requires the service not to be running.
    """

    key: str
    policy: str
    must_be_stopped: bool = False
    label: str = ""
    kind: SettingKind = field(default=SettingKind.SERVICE, init=False)

    @property
    def name(self) -> str:
        return self.key

    @property
    def display_name(self) -> str:
        return self.label or self.key


@dataclass(frozen=True)
class SettingsCatalog:
    """Immutable set of targets handed to the runner."""

    scalars: tuple[SettingSpec, ...]
    ssh_service: ServicePolicySpec
    ntp_service: ServicePolicySpec
    acceptance_level: SettingSpec = SettingSpec(
        "AcceptanceLevel", "PartnerSupported", SettingKind.ACCEPTANCE_LEVEL, "Acceptance level"
    )

    @classmethod
    def default(cls) -> "SettingsCatalog":
        return cls(
            scalars=(
                SettingSpec("UserVars.ESXiShellTimeOut", 900, label="Shell timeout"),
                SettingSpec(
                    "UserVars.ESXiShellInteractiveTimeOut", 900, label="Shell interactive timeout"
                ),
                SettingSpec("Security.AccountUnlockTime", 900, label="Account unlock time"),
                SettingSpec("Security.AccountLockFailures", 3, label="Account lock failures"),
                SettingSpec(
                    "Security.PasswordQualityControl",
                    "retry=3 min=disabled,disabled,disabled,disabled,15",
                    label="Password quality",
                ),
                SettingSpec("Mem.ShareForceSalting", 2, label="Memory share salting"),
            ),
            ssh_service=ServicePolicySpec(
                "TSM-SSH", "off", must_be_stopped=True, label="SSH service"
            ),
            ntp_service=ServicePolicySpec("ntpd", "on", label="NTP service"),
        )

    def rules(self) -> tuple[SettingSpec | ServicePolicySpec, ...]:
        """Every rule in evaluation order: scalars, SSH, NTP, acceptance level."""
        return (*self.scalars, self.ssh_service, self.ntp_service, self.acceptance_level)

    def rule_names(self) -> list[str]:
        """Rule names in evaluation order."""
        return [rule.name for rule in self.rules()]
