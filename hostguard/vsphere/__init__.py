"""
vSphere access for hostguard.
"""

from .connection import VCenterConnection, to_host_ref
from .gateway import VSphereHostGateway

__all__ = ["VCenterConnection", "VSphereHostGateway", "to_host_ref"]
