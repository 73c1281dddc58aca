"""
Software acceptance level rule.

Lowering the acceptance level is only possible once no installed package
carries a level outside the permitted set. The resolver removes at most one
package, the tolerated ``smartctl`` package, and never sets the level while a
conflict remains.
"""

import logging

from .catalog import PERMITTED_ACCEPTANCE_LEVELS, TOLERATED_PACKAGE
from .exceptions import GatewayError
from .gateway import HostGateway
from .models import HostRef, Message, Package, RuleOutcome

logger = logging.getLogger(__name__)

RULE_NAME = "AcceptanceLevel"


class AcceptanceLevelResolver:
    """Brings a host's acceptance level to the target when it is safe to do so."""

    def __init__(
        self,
        gateway: HostGateway,
        permitted_levels: frozenset[str] = PERMITTED_ACCEPTANCE_LEVELS,
        tolerated_package: str = TOLERATED_PACKAGE,
    ):
        self.gateway = gateway
        self.permitted_levels = permitted_levels
        self.tolerated_package = tolerated_package

    def conflicting_packages(self, host: HostRef) -> list[Package]:
        """List installed packages whose acceptance level is not permitted."""
        return [
            package
            for package in self.gateway.list_installed_packages(host)
            if package.acceptance_level not in self.permitted_levels
        ]

    def resolve(self, host: HostRef, target_level: str, enforce: bool) -> RuleOutcome:
        """
        Evaluate and optionally enforce the acceptance level.

        Args:
            host: Host to check
            target_level: Acceptance level the host must have
            enforce: Change the level (and remove the tolerated package) if needed

        Returns:
            RuleOutcome for the acceptance level rule
        """
        current = self.gateway.get_acceptance_level(host)

        if current == target_level:
            return RuleOutcome.ok(RULE_NAME, Message.info(f"{host} - Acceptance level: OK"))

        if not enforce:
            return RuleOutcome.drift(
                RULE_NAME,
                Message.warning(f"{host} - Acceptance level: {current} (expected {target_level})"),
            )

        conflicts = self.conflicting_packages(host)
        messages = []

        if conflicts and self.tolerated_package in _names(conflicts):
            messages.append(
                Message.warning(f"{host} - Removing package {self.tolerated_package}")
            )
            logger.info(f"Removing {self.tolerated_package} from {host}")
            self.gateway.remove_package(host, self.tolerated_package)
            # removal changes the inventory, list again
            conflicts = self.conflicting_packages(host)

        if conflicts:
            blocking = ", ".join(_names(conflicts))
            messages.append(
                Message.critical(
                    f"{host} - Acceptance level: {current}, cannot change to {target_level};"
                    f" blocking packages: {blocking}"
                )
            )
            logger.warning(f"{host}: acceptance level left at {current}, blocked by {blocking}")
            return RuleOutcome.drift(RULE_NAME, *messages)

        messages.append(
            Message.warning(f"{host} - Acceptance level: changing {current} -> {target_level}")
        )
        logger.info(f"Setting acceptance level on {host}: {current} -> {target_level}")
        try:
            self.gateway.set_acceptance_level(host, target_level)
        except GatewayError as e:
            logger.error(f"Acceptance level change failed on {host}: {e}")
            messages.append(Message.critical(f"{host} - Acceptance level: {e.reason}"))
            return RuleOutcome.drift(RULE_NAME, *messages)
        return RuleOutcome.ok(RULE_NAME, *messages)


def _names(packages: list[Package]) -> list[str]:
    return [package.name for package in packages]
