"""
HostGateway implementation backed by the vSphere API (pyVmomi).
"""

import functools
import http.client
import logging

from pyVim.task import WaitForTask
from pyVmomi import VmomiSupport, vim, vmodl

from hostguard.compliance.exceptions import GatewayError
from hostguard.compliance.gateway import ServiceState
from hostguard.compliance.models import HostRef, Package

logger = logging.getLogger(__name__)

# The API reports acceptance levels under different names than esxcli
API_ACCEPTANCE_LEVELS = {
    "vmware_certified": "VMwareCertified",
    "vmware_accepted": "VMwareAccepted",
    "partner": "PartnerSupported",
    "community": "CommunitySupported",
}
CLI_ACCEPTANCE_LEVELS = {cli: api for api, cli in API_ACCEPTANCE_LEVELS.items()}


def from_api_level(level: str) -> str:
    return API_ACCEPTANCE_LEVELS.get(level, level)


def to_api_level(level: str) -> str:
    return CLI_ACCEPTANCE_LEVELS.get(level, level)


def translate_faults(operation: str):
    """
    Re-raise vSphere faults and transport errors from a gateway method as
    GatewayError, so a dropped session fails only the rule that hit it.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, host: HostRef, *args, **kwargs):
            try:
                return func(self, host, *args, **kwargs)
            except vmodl.MethodFault as e:
                raise GatewayError(operation, host.name, e.msg or type(e).__name__) from e
            except (OSError, http.client.HTTPException) as e:
                raise GatewayError(operation, host.name, str(e) or type(e).__name__) from e

        return wrapper

    return decorator


class VSphereHostGateway:
    """Reads and changes host configuration through the host's config managers."""

    @translate_faults("get setting")
    def get_setting(self, host: HostRef, name: str):
        options = host.handle.configManager.advancedOption.QueryView(name=name)
        if not options:
            raise GatewayError("get setting", host.name, f"{name} not found")
        return options[0].value

    @translate_faults("set setting")
    def set_setting(self, host: HostRef, name: str, value) -> None:
        # integer options are typed long on the host side
        if isinstance(value, int) and not isinstance(value, bool):
            value = VmomiSupport.GetVmodlType("long")(value)
        option = vim.option.OptionValue(key=name, value=value)
        host.handle.configManager.advancedOption.UpdateOptions(changedValue=[option])

    @translate_faults("get service state")
    def get_service_state(self, host: HostRef, service_key: str) -> ServiceState:
        service_system = host.handle.configManager.serviceSystem
        for service in service_system.serviceInfo.service:
            if service.key == service_key:
                return ServiceState(policy=service.policy, running=bool(service.running))
        raise GatewayError("get service state", host.name, f"service {service_key} not found")

    @translate_faults("set service policy")
    def set_service_policy(self, host: HostRef, service_key: str, policy: str) -> None:
        host.handle.configManager.serviceSystem.UpdateServicePolicy(id=service_key, policy=policy)

    @translate_faults("stop service")
    def stop_service(self, host: HostRef, service_key: str) -> None:
        host.handle.configManager.serviceSystem.StopService(id=service_key)

    @translate_faults("get cluster")
    def get_cluster_of(self, host: HostRef) -> str | None:
        parent = host.handle.parent
        if isinstance(parent, vim.ClusterComputeResource):
            return parent.name
        return None

    @translate_faults("get NTP servers")
    def get_configured_ntp_servers(self, host: HostRef) -> list[str]:
        info = host.handle.configManager.dateTimeSystem.dateTimeInfo
        if not info.ntpConfig or not info.ntpConfig.server:
            return []
        return list(info.ntpConfig.server)

    @translate_faults("get acceptance level")
    def get_acceptance_level(self, host: HostRef) -> str:
        level = host.handle.configManager.imageConfigManager.HostImageConfigGetAcceptance()
        return from_api_level(level)

    @translate_faults("set acceptance level")
    def set_acceptance_level(self, host: HostRef, level: str) -> None:
        host.handle.configManager.imageConfigManager.UpdateHostImageAcceptanceLevel(
            newAcceptanceLevel=to_api_level(level)
        )

    @translate_faults("list packages")
    def list_installed_packages(self, host: HostRef) -> list[Package]:
        packages = host.handle.configManager.imageConfigManager.FetchSoftwarePackages()
        return [
            Package(name=package.name, acceptance_level=from_api_level(package.acceptanceLevel))
            for package in packages or []
        ]

    @translate_faults("remove package")
    def remove_package(self, host: HostRef, package_name: str) -> None:
        """
        Uninstall exactly one named package, without forcing or skipping checks.

        The package name is passed as the bulletin id. This holds for
        standalone VIBs such as smartctl; a package shipped inside a vendor
        bulletin with a different id is rejected by the host and the failure
        surfaces as GatewayError.
        """
        spec = vim.host.PatchManager.PatchManagerOperationSpec()
        task = host.handle.configManager.patchManager.UninstallHostPatch_Task(
            bulletinIds=[package_name], spec=spec
        )
        WaitForTask(task)
        logger.info(f"Removed {package_name} from {host.name}")
