"""
Compliance evaluation and remediation engine.
"""

from .acceptance import AcceptanceLevelResolver
from .catalog import SettingKind, SettingsCatalog, SettingSpec, ServicePolicySpec
from .engine import run_compliance
from .exceptions import ConfigError, GatewayError, HostguardError, HostNotFoundError
from .filters import HostFilter
from .gateway import HostGateway, ServiceState
from .models import HostRef, HostResult, Message, Mode, Package, RuleOutcome, Severity
from .report import ComplianceReport
from .rules import RuleEvaluator
from .runner import HostComplianceRunner

__all__ = [
    "AcceptanceLevelResolver",
    "ComplianceReport",
    "ConfigError",
    "GatewayError",
    "HostComplianceRunner",
    "HostFilter",
    "HostGateway",
    "HostNotFoundError",
    "HostRef",
    "HostResult",
    "HostguardError",
    "Message",
    "Mode",
    "Package",
    "RuleEvaluator",
    "RuleOutcome",
    "ServicePolicySpec",
    "ServiceState",
    "SettingKind",
    "SettingSpec",
    "SettingsCatalog",
    "Severity",
    "run_compliance",
]
