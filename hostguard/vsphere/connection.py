"""
vCenter session handling and host lookup.
"""

import logging
import ssl

from pyVim.connect import Disconnect, SmartConnect
from pyVmomi import vim, vmodl

from hostguard.compliance.exceptions import ConfigError, GatewayError, HostNotFoundError
from hostguard.compliance.models import HostRef
from hostguard.env_loader import ConnectionSettings

logger = logging.getLogger(__name__)

CONNECTION_STATES = {
    "connected": "Connected",
    "disconnected": "Disconnected",
    "notResponding": "NotResponding",
}


def to_host_ref(host_system) -> HostRef:
    """Build the engine's host handle from a vim.HostSystem."""
    runtime = host_system.runtime
    raw_state = str(runtime.connectionState)
    state = CONNECTION_STATES.get(raw_state, raw_state)
    if state == "Connected" and runtime.inMaintenanceMode:
        state = "Maintenance"

    hardware = getattr(host_system.summary, "hardware", None)
    model = getattr(hardware, "model", "") or ""

    return HostRef(name=host_system.name, connection_state=state, model=model, handle=host_system)


class VCenterConnection:
    """
    Authenticated session against a vCenter server.

    Use as a context manager so the session is always released.
    """

    def __init__(self, settings: ConnectionSettings):
        self.settings = settings
        self.si = None
        self.content = None

    def __enter__(self) -> "VCenterConnection":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disconnect()

    def _create_ssl_context(self) -> ssl.SSLContext:
        if self.settings.verify_ssl:
            return ssl.create_default_context()
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        return context

    def connect(self) -> None:
        server = self.settings.server
        try:
            self.si = SmartConnect(
                host=server,
                user=self.settings.user,
                pwd=self.settings.password,
                port=self.settings.port,
                sslContext=self._create_ssl_context(),
            )
        except vim.fault.InvalidLogin as e:
            raise ConfigError(f"Invalid credentials for {self.settings.user}@{server}") from e
        except vmodl.MethodFault as e:
            raise GatewayError("connect", server, e.msg or type(e).__name__) from e
        except OSError as e:
            raise GatewayError("connect", server, str(e)) from e

        self.content = self.si.RetrieveContent()
        logger.info(f"Connected to {server}")

    def disconnect(self) -> None:
        if self.si is None:
            return
        try:
            Disconnect(self.si)
        except (vmodl.MethodFault, OSError) as e:
            logger.debug(f"Error during disconnect: {e}")
        finally:
            self.si = None
            self.content = None

    def host_systems(self) -> list:
        """Every vim.HostSystem in the inventory."""
        if self.content is None:
            raise GatewayError("list hosts", self.settings.server, "not connected")
        view = self.content.viewManager.CreateContainerView(
            self.content.rootFolder, [vim.HostSystem], True
        )
        try:
            return list(view.view)
        finally:
            view.Destroy()

    def find_hosts(self, names: list[str]) -> list[HostRef]:
        """
        Resolve host names to HostRefs, keeping the order given.

        Raises:
            HostNotFoundError: If a requested name is not in the inventory
        """
        by_name = {host.name: host for host in self.host_systems()}
        missing = [name for name in names if name not in by_name]
        if missing:
            raise HostNotFoundError(f"Host(s) not found: {', '.join(missing)}")
        return [to_host_ref(by_name[name]) for name in names]
