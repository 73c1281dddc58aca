"""
Per-host orchestration of all baseline rules.
"""

import logging
import re
from collections.abc import Callable

from .acceptance import AcceptanceLevelResolver
from .catalog import ServicePolicySpec, SettingKind, SettingsCatalog, SettingSpec
from .exceptions import GatewayError
from .gateway import HostGateway
from .models import HostRef, HostResult, Message, RuleOutcome
from .rules import RuleEvaluator

logger = logging.getLogger(__name__)

# Clusters still being set up carry "config" in their name
PENDING_CLUSTER_PATTERN = re.compile(r"config", re.IGNORECASE)


class HostComplianceRunner:
    """
    Runs every rule of a catalog against a single host.

    Rules run in a fixed order: scalar settings, SSH service, NTP service,
    acceptance level. The host is compliant only if every rule is. A
    GatewayError inside one rule marks that rule non-compliant and the
    remaining rules still run.
    """

    def __init__(
        self,
        gateway: HostGateway,
        evaluator: RuleEvaluator | None = None,
        resolver: AcceptanceLevelResolver | None = None,
        pending_pattern: re.Pattern = PENDING_CLUSTER_PATTERN,
    ):
        self.gateway = gateway
        self.evaluator = evaluator or RuleEvaluator(gateway)
        self.resolver = resolver or AcceptanceLevelResolver(gateway)
        self.pending_pattern = pending_pattern

    def is_pending(self, host: HostRef) -> bool:
        """True if the host sits in a cluster that is still pending configuration."""
        try:
            cluster = self.gateway.get_cluster_of(host)
        except GatewayError as e:
            logger.debug(f"No cluster for {host}: {e.reason}")
            return False
        return bool(cluster) and bool(self.pending_pattern.search(cluster))

    def run(
        self,
        host: HostRef,
        catalog: SettingsCatalog,
        enforce: bool,
        include_pending: bool = False,
    ) -> HostResult | None:
        """
        Evaluate all rules for a host.

        Returns:
            HostResult, or None when the host is skipped as pending
        """
        if not include_pending and self.is_pending(host):
            logger.info(f"Skipping {host}: cluster pending configuration")
            return None

        logger.debug(f"Checking {host} (enforce={enforce})")
        outcomes = [
            self._isolated(rule.name, host, lambda r=rule: self._evaluate(host, r, enforce))
            for rule in catalog.rules()
        ]

        result = HostResult(host=host, outcomes=tuple(outcomes))
        logger.debug(f"{host}: compliant={result.compliant}")
        return result

    def _evaluate(
        self, host: HostRef, rule: SettingSpec | ServicePolicySpec, enforce: bool
    ) -> RuleOutcome:
        if rule.kind is SettingKind.ACCEPTANCE_LEVEL:
            return self.resolver.resolve(host, rule.target, enforce)
        if rule.kind is SettingKind.SERVICE:
            # a service that must be stopped gets the remote shell treatment
            if rule.must_be_stopped:
                return self.evaluator.evaluate_ssh(host, rule, enforce)
            return self.evaluator.evaluate_ntp(host, rule, enforce)
        return self.evaluator.evaluate(host, rule, enforce)

    def _isolated(
        self, rule: str, host: HostRef, evaluate: Callable[[], RuleOutcome]
    ) -> RuleOutcome:
        try:
            return evaluate()
        except GatewayError as e:
            logger.error(f"Rule {rule} failed on {host}: {e}")
            return RuleOutcome.drift(rule, Message.critical(f"{host} - {rule}: {e.reason}"))
