"""Pytest configuration for the `tests/` suite.

Provides an in-memory HostGateway that behaves like a single ESXi host and
records every call made against it, so tests can assert on exactly which
mutating operations the engine performed.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from hostguard.compliance import GatewayError, HostRef, Package, ServiceState, SettingsCatalog

MUTATING_CALLS = {
    "set_setting",
    "set_service_policy",
    "stop_service",
    "set_acceptance_level",
    "remove_package",
}


class FakeGateway:
    """HostGateway double. Starts fully compliant with the default catalog."""

    def __init__(
        self,
        settings=None,
        services=None,
        cluster=None,
        ntp_servers=None,
        acceptance_level="PartnerSupported",
        packages=None,
        failures=None,
    ):
        catalog = SettingsCatalog.default()
        self.settings = {spec.name: spec.target for spec in catalog.scalars}
        self.settings.update(settings or {})
        self.services = {
            "TSM-SSH": ServiceState(policy="off", running=False),
            "ntpd": ServiceState(policy="on", running=True),
        }
        self.services.update(services or {})
        self.cluster = cluster
        self.ntp_servers = ["0.pool.ntp.org"] if ntp_servers is None else ntp_servers
        self.acceptance_level = acceptance_level
        self.packages = list(packages or [])
        self.failures = dict(failures or {})
        self.calls = []

    def _record(self, name, *args):
        self.calls.append((name, *args))
        if name in self.failures:
            raise self.failures[name]

    @property
    def mutating_calls(self):
        return [call for call in self.calls if call[0] in MUTATING_CALLS]

    def calls_to(self, name):
        return [call[1:] for call in self.calls if call[0] == name]

    def get_setting(self, host, name):
        self._record("get_setting", host.name, name)
        return self.settings[name]

    def set_setting(self, host, name, value):
        self._record("set_setting", host.name, name, value)
        self.settings[name] = value

    def get_service_state(self, host, service_key):
        self._record("get_service_state", host.name, service_key)
        return self.services[service_key]

    def set_service_policy(self, host, service_key, policy):
        self._record("set_service_policy", host.name, service_key, policy)
        state = self.services[service_key]
        self.services[service_key] = ServiceState(policy=policy, running=state.running)

    def stop_service(self, host, service_key):
        self._record("stop_service", host.name, service_key)
        state = self.services[service_key]
        self.services[service_key] = ServiceState(policy=state.policy, running=False)

    def get_cluster_of(self, host):
        self._record("get_cluster_of", host.name)
        return self.cluster

    def get_configured_ntp_servers(self, host):
        self._record("get_configured_ntp_servers", host.name)
        if isinstance(self.ntp_servers, Exception):
            raise self.ntp_servers
        return self.ntp_servers

    def get_acceptance_level(self, host):
        self._record("get_acceptance_level", host.name)
        return self.acceptance_level

    def set_acceptance_level(self, host, level):
        self._record("set_acceptance_level", host.name, level)
        self.acceptance_level = level

    def list_installed_packages(self, host):
        self._record("list_installed_packages", host.name)
        return list(self.packages)

    def remove_package(self, host, package_name):
        self._record("remove_package", host.name, package_name)
        self.packages = [p for p in self.packages if p.name != package_name]


@pytest.fixture
def make_gateway():
    return FakeGateway


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def host():
    return HostRef(name="esx01.lab.local", connection_state="Connected", model="PowerEdge R750")


@pytest.fixture
def catalog():
    return SettingsCatalog.default()


@pytest.fixture
def community_package():
    def _make(name):
        return Package(name=name, acceptance_level="CommunitySupported")

    return _make


@pytest.fixture
def gateway_error():
    def _make(operation="call", reason="host unreachable"):
        return GatewayError(operation, "esx01.lab.local", reason)

    return _make
