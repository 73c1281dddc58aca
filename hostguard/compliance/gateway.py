"""
Contract between the compliance engine and the virtualization manager.

The engine only talks to hosts through an object satisfying HostGateway.
Implementations raise GatewayError when a call fails.
"""

from dataclasses import dataclass
from typing import Any, Protocol

from .models import HostRef, Package


@dataclass(frozen=True)
class ServiceState:
    """Startup policy ("on", "off", "automatic") and running flag of a service."""

    policy: str
    running: bool


class HostGateway(Protocol):
    def get_setting(self, host: HostRef, name: str) -> Any: ...

    def set_setting(self, host: HostRef, name: str, value: Any) -> None: ...

    def get_service_state(self, host: HostRef, service_key: str) -> ServiceState: ...

    def set_service_policy(self, host: HostRef, service_key: str, policy: str) -> None: ...

    def stop_service(self, host: HostRef, service_key: str) -> None: ...

    def get_cluster_of(self, host: HostRef) -> str | None: ...

    def get_configured_ntp_servers(self, host: HostRef) -> list[str]: ...

    def get_acceptance_level(self, host: HostRef) -> str: ...

    def set_acceptance_level(self, host: HostRef, level: str) -> None: ...

    def list_installed_packages(self, host: HostRef) -> list[Package]: ...

    def remove_package(self, host: HostRef, package_name: str) -> None: ...
