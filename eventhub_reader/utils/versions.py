# ==============================================================================
# Version Utilities
# ==============================================================================
"""
Installed distribution versions, for the startup log line.
"""

from importlib.metadata import version, PackageNotFoundError

READER_DISTRIBUTION = "eventhub-reader"
SDK_DISTRIBUTION = "azure-eventhub"


def get_package_version(package_name: str) -> str:
    """
    Get the version of an installed distribution.

    Args:
        package_name: Distribution name (e.g., "azure-eventhub")

    Returns:
        Version string, or "unknown" when the distribution is not installed
    """
    try:
        return version(package_name)
    except PackageNotFoundError:
        return "unknown"
