from abc import ABC, abstractmethod
from .models import ScanResult

class ScannerBase(ABC):
    @abstractmethod
    def scan(self, target: str) -> ScanResult:
        """Produce the dependency/vulnerability snapshot for a target (path, image or report file)."""
        pass
