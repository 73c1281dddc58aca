"""
Connection settings read from the environment.

hostguard has no configuration file; the vCenter endpoint and credentials
come from HOSTGUARD_* environment variables. A missing password is asked for
interactively.
"""

import os
from dataclasses import dataclass, field

from rich.prompt import Prompt

from hostguard.compliance.exceptions import ConfigError

ENV_PREFIX = "HOSTGUARD_"
DEFAULT_PORT = 443

_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class ConnectionSettings:
    server: str
    user: str
    password: str = field(default="", repr=False)
    port: int = DEFAULT_PORT
    verify_ssl: bool = True


def _env(name: str, default: str = "") -> str:
    return os.environ.get(ENV_PREFIX + name, default).strip()


def load_env(prompt_password: bool = True) -> ConnectionSettings:
    """
    Build ConnectionSettings from the environment.

    Raises:
        ConfigError: If the server or user is missing, or the port is invalid
    """
    server = _env("VCENTER_SERVER")
    user = _env("VCENTER_USER")
    if not server:
        raise ConfigError(f"{ENV_PREFIX}VCENTER_SERVER is not set")
    if not user:
        raise ConfigError(f"{ENV_PREFIX}VCENTER_USER is not set")

    raw_port = _env("VCENTER_PORT", str(DEFAULT_PORT))
    try:
        port = int(raw_port)
    except ValueError:
        raise ConfigError(f"Invalid {ENV_PREFIX}VCENTER_PORT: {raw_port}")
    if not 1 <= port <= 65535:
        raise ConfigError(f"Invalid {ENV_PREFIX}VCENTER_PORT: {port}")

    password = os.environ.get(ENV_PREFIX + "VCENTER_PASSWORD", "")
    if not password and prompt_password:
        password = Prompt.ask(f"Password for [bold]{user}@{server}[/bold]", password=True)

    return ConnectionSettings(
        server=server,
        user=user,
        password=password,
        port=port,
        verify_ssl=_env("VERIFY_SSL", "true").lower() not in _FALSE_VALUES,
    )
