from .branding import VERSION

__version__ = VERSION

# "main" is not exported here to keep imports light during testing
__all__ = ["__version__"]
