"""
Entry point of the compliance engine.
"""

import logging
from collections.abc import Iterable

from .catalog import SettingsCatalog
from .filters import HostFilter
from .gateway import HostGateway
from .models import HostRef, Mode
from .report import ComplianceReport
from .runner import HostComplianceRunner

logger = logging.getLogger(__name__)


def run_compliance(
    hosts: Iterable[HostRef],
    gateway: HostGateway,
    mode: Mode = Mode.SCAN,
    include_witness: bool = False,
    include_pending: bool = False,
    catalog: SettingsCatalog | None = None,
) -> ComplianceReport:
    """
    Check (and in FIX mode remediate) a collection of hosts.

    Hosts are processed one after another, in the order given.

    Args:
        hosts: Hosts supplied by the caller
        gateway: Access to the virtualization manager
        mode: SCAN reports only, FIX applies the baseline
        include_witness: Also process witness appliances
        include_pending: Also process hosts in clusters pending configuration
        catalog: Baseline to apply; defaults to SettingsCatalog.default()

    Returns:
        ComplianceReport with one HostResult per processed host
    """
    catalog = catalog or SettingsCatalog.default()
    runner = HostComplianceRunner(gateway)
    report = ComplianceReport()

    eligible = HostFilter().apply(hosts, include_witness=include_witness)
    logger.info(f"{mode.value}: {len(eligible)} eligible host(s)")

    for host in eligible:
        result = runner.run(host, catalog, mode.enforce, include_pending=include_pending)
        if result is None:
            report.skip(host.name)
            continue
        report.add(result)

    return report
