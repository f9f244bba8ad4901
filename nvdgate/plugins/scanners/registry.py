"""Scanner registry for selecting the saved scan report loader by name."""
import logging
from typing import List
from nvdgate.core.interfaces import ScannerBase
from nvdgate.plugins.scanners.dependency_check import DependencyCheckReportLoader
from nvdgate.plugins.scanners.grype import GrypeReportLoader

logger = logging.getLogger(__name__)


class ScannerRegistry:
    """Registry for managing available report loaders."""

    _scanners = {
        "dependency-check": DependencyCheckReportLoader,
        "grype": GrypeReportLoader,
    }

    @classmethod
    def get_scanner(cls, name: str) -> ScannerBase:
        """Get a scanner instance by name.

        Args:
            name: Scanner name (e.g., 'grype')

        Returns:
            An instantiated scanner

        Raises:
            ValueError: If an unknown scanner name is provided
        """
        name_lower = name.lower()
        if name_lower not in cls._scanners:
            raise ValueError(f"Unknown scanner: {name}. Available: {', '.join(cls._scanners.keys())}")
        logger.debug(f"Using scanner {name_lower}")
        return cls._scanners[name_lower]()

    @classmethod
    def available_scanners(cls) -> List[str]:
        """Get list of available scanner names."""
        return list(cls._scanners.keys())
