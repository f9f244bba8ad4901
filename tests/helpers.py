"""Builders shared by the test modules."""
from typing import List, Optional
from nvdgate.core.models import Dependency, ScanResult, ScoreScheme, ScoreSource, Vulnerability


def vuln(name: str, cvss_score: Optional[float] = None, scheme: ScoreScheme = ScoreScheme.CVSS_V2) -> Vulnerability:
    """A vulnerability whose risk score is ``cvss_score`` (no CVSS data when None)."""
    if cvss_score is None:
        return Vulnerability(name=name)
    return Vulnerability(name=name, sources=[ScoreSource(scheme=scheme, exploitability_score=cvss_score)])


def dep(file_name: str, vulnerabilities: Optional[List[Vulnerability]] = None) -> Dependency:
    return Dependency(file_name=file_name, vulnerabilities=vulnerabilities or [])


def scan(*dependencies: Dependency) -> ScanResult:
    return ScanResult(tool_name="test", dependencies=list(dependencies))
