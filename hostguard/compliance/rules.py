"""
Rule evaluation for scalar host settings and host services.

Every rule follows the same contract: compare the observed value with the
target, report it, and in FIX mode apply the target through the gateway.
An applied change is reported compliant without reading the value back.
"""

import logging
from typing import Any

from .catalog import ServicePolicySpec, SettingSpec
from .exceptions import GatewayError
from .gateway import HostGateway
from .models import HostRef, Message, RuleOutcome

logger = logging.getLogger(__name__)


def values_match(current: Any, target: Any) -> bool:
    """Compare a setting value with its target, treating "900" and 900 as equal."""
    if current is None:
        return False
    if isinstance(target, int) and not isinstance(target, bool):
        try:
            return int(str(current).strip()) == target
        except ValueError:
            return False
    return str(current) == str(target)


class RuleEvaluator:
    """Evaluates and optionally enforces individual baseline rules on a host."""

    def __init__(self, gateway: HostGateway):
        self.gateway = gateway

    def evaluate(self, host: HostRef, spec: SettingSpec, enforce: bool) -> RuleOutcome:
        """
        Evaluate one scalar setting.

        Args:
            host: Host to check
            spec: Setting and its target value
            enforce: Apply the target when the host drifts from it

        Returns:
            RuleOutcome for the setting
        """
        current = self.gateway.get_setting(host, spec.name)
        logger.debug(f"{host} {spec.name} = {current!r}")

        if values_match(current, spec.target):
            return RuleOutcome.ok(spec.name, Message.info(f"{host} - {spec.display_name}: OK"))

        if not enforce:
            return RuleOutcome.drift(
                spec.name,
                Message.warning(
                    f"{host} - {spec.display_name}: {current} (expected {spec.target})"
                ),
            )

        message = Message.warning(
            f"{host} - {spec.display_name}: changing {current} -> {spec.target}"
        )
        logger.info(f"Setting {spec.name} on {host}: {current} -> {spec.target}")
        self.gateway.set_setting(host, spec.name, spec.target)
        return RuleOutcome.ok(spec.name, message)

    def evaluate_ssh(self, host: HostRef, spec: ServicePolicySpec, enforce: bool) -> RuleOutcome:
        """
        Check startup policy and running state of the remote shell service.

        In FIX mode a running service is stopped whether or not the policy
        change was needed or succeeded.
        """
        state = self.gateway.get_service_state(host, spec.key)
        messages = []
        compliant = True

        if state.policy == spec.policy:
            messages.append(Message.info(f"{host} - {spec.display_name} policy: OK"))
        elif not enforce:
            compliant = False
            messages.append(
                Message.warning(
                    f"{host} - {spec.display_name} policy: {state.policy} (expected {spec.policy})"
                )
            )
        else:
            messages.append(
                Message.warning(
                    f"{host} - {spec.display_name} policy: changing {state.policy} -> {spec.policy}"
                )
            )
            logger.info(f"Setting {spec.key} policy on {host} to {spec.policy}")
            try:
                self.gateway.set_service_policy(host, spec.key, spec.policy)
            except GatewayError as e:
                logger.error(f"Policy change of {spec.key} failed on {host}: {e}")
                compliant = False
                messages.append(
                    Message.critical(f"{host} - {spec.display_name} policy: {e.reason}")
                )

        if not spec.must_be_stopped:
            return RuleOutcome(spec.key, compliant, tuple(messages))

        if not state.running:
            messages.append(Message.info(f"{host} - {spec.display_name} stopped: OK"))
        elif not enforce:
            compliant = False
            messages.append(Message.warning(f"{host} - {spec.display_name}: running"))
        else:
            messages.append(Message.warning(f"{host} - {spec.display_name}: stopping"))
            logger.info(f"Stopping {spec.key} on {host}")
            self.gateway.stop_service(host, spec.key)

        return RuleOutcome(spec.key, compliant, tuple(messages))

    def evaluate_ntp(self, host: HostRef, spec: ServicePolicySpec, enforce: bool) -> RuleOutcome:
        """
        Check the startup policy of the time service.

        The service is only enabled when the host has NTP servers configured;
        otherwise the rule stays non-compliant.
        """
        state = self.gateway.get_service_state(host, spec.key)

        if state.policy == spec.policy:
            return RuleOutcome.ok(spec.key, Message.info(f"{host} - {spec.display_name}: OK"))

        if not enforce:
            return RuleOutcome.drift(
                spec.key,
                Message.warning(
                    f"{host} - {spec.display_name} policy: {state.policy} (expected {spec.policy})"
                ),
            )

        servers = self._ntp_servers(host)
        if not servers:
            return RuleOutcome.drift(
                spec.key,
                Message.warning(
                    f"{host} - {spec.display_name}: no NTP servers configured, not enabling"
                ),
            )

        message = Message.warning(
            f"{host} - {spec.display_name} policy: changing {state.policy} -> {spec.policy}"
            f" (servers: {', '.join(servers)})"
        )
        logger.info(f"Setting {spec.key} policy on {host} to {spec.policy}")
        self.gateway.set_service_policy(host, spec.key, spec.policy)
        return RuleOutcome.ok(spec.key, message)

    def _ntp_servers(self, host: HostRef) -> list[str]:
        try:
            return list(self.gateway.get_configured_ntp_servers(host) or [])
        except GatewayError as e:
            logger.warning(f"Cannot read NTP servers of {host}: {e.reason}")
            return []
