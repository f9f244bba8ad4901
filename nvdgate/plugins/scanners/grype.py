import subprocess
import json
import logging
from typing import Dict, List, Optional
from pydantic import ValidationError
from nvdgate.core.errors import ScanError
from nvdgate.core.interfaces import ScannerBase
from nvdgate.core.models import ScanResult, Dependency, Vulnerability, ScoreSource, ScoreScheme

logger = logging.getLogger(__name__)

class GrypeScanner(ScannerBase):
    def scan(self, target: str) -> ScanResult:
        logger.info(f"Scanning target {target} with Grype...")
        try:
            result = subprocess.run(
                ["grype", target, "-o", "json"],
                capture_output=True,
                text=True,
                check=True
            )
            data = json.loads(result.stdout)
        except FileNotFoundError as e:
            logger.error("Grype executable not found")
            raise ScanError("Grype executable not found on PATH") from e
        except subprocess.CalledProcessError as e:
            logger.error(f"Grype failed: {e.stderr}")
            raise ScanError(f"Grype scan failed: {e.stderr}") from e
        except json.JSONDecodeError as e:
            logger.error(f"Failed to decode Grype output")
            raise ScanError("Failed to decode Grype output") from e
        return self.parse(data, target)

    def parse(self, data: dict, target: str = "") -> ScanResult:
        """Group grype matches into dependencies keyed by artifact name and version."""
        if not isinstance(data, dict):
            raise ScanError("Grype output must be a JSON object")
        grouped: Dict[str, List[Vulnerability]] = {}
        try:
            for match in data.get("matches") or []:
                artifact = match.get("artifact") or {}
                file_name = self._artifact_name(artifact)
                grouped.setdefault(file_name, []).append(self._parse_vulnerability(match.get("vulnerability") or {}))
        except (ValidationError, AttributeError, TypeError) as e:
            logger.error(f"Invalid Grype output for {target}: {e}")
            raise ScanError(f"Invalid Grype output for {target}: {e}") from e

        dependencies = [Dependency(file_name=name, vulnerabilities=vulns) for name, vulns in grouped.items()]
        return ScanResult(tool_name="grype", dependencies=dependencies, metadata={"target": target})

    def _artifact_name(self, artifact: dict) -> str:
        name = artifact.get("name") or "unknown"
        version = artifact.get("version")
        return f"{name}-{version}" if version else name

    def _parse_vulnerability(self, vuln_data: dict) -> Vulnerability:
        return Vulnerability(
            name=vuln_data.get("id", ""),
            sources=self._get_sources(vuln_data),
            description=vuln_data.get("description")
        )

    def _get_sources(self, vuln_data: dict) -> List[ScoreSource]:
        sources = []
        for m in vuln_data.get("cvss") or []:
            scheme = self._scheme(str(m.get("version") or ""))
            if scheme is None:
                logger.debug(f"Skipping unsupported CVSS version {m.get('version')} for {vuln_data.get('id')}")
                continue
            metrics = m.get("metrics") or {}
            sources.append(ScoreSource(
                scheme=scheme,
                exploitability_score=metrics.get("exploitabilityScore"),
                impact_score=metrics.get("impactScore")
            ))
        return sources

    def _scheme(self, version: str) -> Optional[ScoreScheme]:
        if version.startswith("2"):
            return ScoreScheme.CVSS_V2
        if version.startswith("3"):
            return ScoreScheme.CVSS_V3
        return None

class GrypeReportLoader(ScannerBase):
    """Reads a JSON report saved with ``grype <target> -o json``."""

    def scan(self, target: str) -> ScanResult:
        logger.info(f"Loading Grype report {target}...")
        try:
            with open(target, 'r') as f:
                data = json.load(f)
        except OSError as e:
            logger.error(f"Failed to read Grype report {target}: {e}")
            raise ScanError(f"Failed to read Grype report {target}: {e}") from e
        except json.JSONDecodeError as e:
            logger.error(f"Failed to decode Grype report {target}")
            raise ScanError(f"Failed to decode Grype report {target}") from e
        return GrypeScanner().parse(data, target)
