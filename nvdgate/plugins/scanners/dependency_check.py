import json
import logging
from typing import Optional
from pydantic import ValidationError
from nvdgate.core.errors import ScanError
from nvdgate.core.interfaces import ScannerBase
from nvdgate.core.models import ScanResult, Dependency, Vulnerability, ScoreSource, ScoreScheme

logger = logging.getLogger(__name__)

# JSON report keys for each scheme.
_SCHEME_KEYS = {
    ScoreScheme.CVSS_V2: "cvssv2",
    ScoreScheme.CVSS_V3: "cvssv3",
}

class DependencyCheckReportLoader(ScannerBase):
    """Reads the JSON report written by OWASP dependency-check."""

    def scan(self, target: str) -> ScanResult:
        logger.info(f"Loading dependency-check report {target}...")
        try:
            with open(target, 'r') as f:
                data = json.load(f)
        except OSError as e:
            logger.error(f"Failed to read dependency-check report {target}: {e}")
            raise ScanError(f"Failed to read dependency-check report {target}: {e}") from e
        except json.JSONDecodeError as e:
            logger.error(f"Failed to decode dependency-check report {target}")
            raise ScanError(f"Failed to decode dependency-check report {target}") from e
        return self.parse(data, target)

    def parse(self, data: dict, target: str = "") -> ScanResult:
        if not isinstance(data, dict):
            raise ScanError("dependency-check report must be a JSON object")
        try:
            dependencies = [self._parse_dependency(d) for d in data.get("dependencies") or []]
        except (ValidationError, AttributeError, TypeError) as e:
            logger.error(f"Invalid dependency-check report {target}: {e}")
            raise ScanError(f"Invalid dependency-check report {target}: {e}") from e
        info = data.get("scanInfo") or {}
        metadata = {"target": target}
        if isinstance(info, dict) and info.get("engineVersion"):
            metadata["engine_version"] = info["engineVersion"]
        return ScanResult(tool_name="dependency-check", dependencies=dependencies, metadata=metadata)

    def _parse_dependency(self, dep_data: dict) -> Dependency:
        vulns = [self._parse_vulnerability(v) for v in dep_data.get("vulnerabilities") or []]
        return Dependency(file_name=dep_data.get("fileName", ""), vulnerabilities=vulns)

    def _parse_vulnerability(self, vuln_data: dict) -> Vulnerability:
        sources = []
        for scheme, key in _SCHEME_KEYS.items():
            source = self._parse_source(scheme, vuln_data.get(key))
            if source:
                sources.append(source)
        return Vulnerability(
            name=vuln_data.get("name", ""),
            sources=sources,
            description=vuln_data.get("description")
        )

    def _parse_source(self, scheme: ScoreScheme, metrics: Optional[dict]) -> Optional[ScoreSource]:
        if not metrics:
            return None
        return ScoreSource(
            scheme=scheme,
            exploitability_score=_optional_float(metrics.get("exploitabilityScore")),
            impact_score=_optional_float(metrics.get("impactScore"))
        )

def _optional_float(value) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring non-numeric CVSS sub-score {value!r}")
        return None
