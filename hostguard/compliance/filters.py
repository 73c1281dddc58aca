"""
Host inclusion rules applied before any rule runs.
"""

import re
from collections.abc import Iterable

from .models import HostRef

ELIGIBLE_CONNECTION_STATES = frozenset({"Connected", "Maintenance"})

# Witness appliances run as virtual machines and report a VMware model
WITNESS_MODEL_PATTERN = re.compile(r"^VMware", re.IGNORECASE)


class HostFilter:
    """Narrows a host collection to the hosts the runner should see."""

    def __init__(self, witness_pattern: re.Pattern = WITNESS_MODEL_PATTERN):
        self.witness_pattern = witness_pattern

    def is_witness(self, host: HostRef) -> bool:
        return bool(host.model) and bool(self.witness_pattern.search(host.model))

    def accepts(self, host: HostRef, include_witness: bool = False) -> bool:
        if host.connection_state not in ELIGIBLE_CONNECTION_STATES:
            return False
        return include_witness or not self.is_witness(host)

    def apply(self, hosts: Iterable[HostRef], include_witness: bool = False) -> list[HostRef]:
        """Return the eligible hosts, in input order."""
        return [host for host in hosts if self.accepts(host, include_witness)]
