from pydantic import BaseModel, ConfigDict, Field, computed_field
from typing import List, Optional, Dict, Any
from enum import Enum
from datetime import datetime

class ScoreScheme(str, Enum):
    CVSS_V2 = "cvssV2"
    CVSS_V3 = "cvssV3"

# Primary scheme first; later schemes are only consulted when earlier ones are absent.
SCHEME_PRIORITY = (ScoreScheme.CVSS_V2, ScoreScheme.CVSS_V3)

class Severity(str, Enum):
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _SEVERITY_ORDER.index(self)

    def __lt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank

_SEVERITY_ORDER = (Severity.NONE, Severity.LOW, Severity.MEDIUM, Severity.HIGH)

class ScoreSource(BaseModel):
    model_config = ConfigDict(frozen=True)

    scheme: ScoreScheme
    exploitability_score: Optional[float] = Field(default=None, ge=0)
    impact_score: Optional[float] = Field(default=None, ge=0)

    @property
    def provided(self) -> bool:
        return self.exploitability_score is not None or self.impact_score is not None

class Vulnerability(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    sources: List[ScoreSource] = []
    description: Optional[str] = None

    def source(self, scheme: ScoreScheme) -> Optional[ScoreSource]:
        """Return the first source for a scheme, or None when the scheme is absent."""
        for s in self.sources:
            if s.scheme == scheme:
                return s
        return None

class Dependency(BaseModel):
    model_config = ConfigDict(frozen=True)

    file_name: str
    vulnerabilities: List[Vulnerability] = []

    @property
    def vulnerable(self) -> bool:
        return len(self.vulnerabilities) > 0

class ScanResult(BaseModel):
    timestamp: datetime = Field(default_factory=datetime.now)
    tool_name: str
    dependencies: List[Dependency] = []
    metadata: Dict[str, Any] = {}

class StatusEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    severity: Severity

class SummaryRow(BaseModel):
    dependency: str
    status: List[StatusEntry]

class RunSummary(BaseModel):
    rows: List[SummaryRow] = []
    scores: List[float] = []
    worst_score: float = 0.0
    worst_severity: Severity = Severity.NONE

    @computed_field
    @property
    def vulnerability_count(self) -> int:
        return len(self.scores)

class GateVerdict(BaseModel):
    failed: bool
    highest_score: float
    fail_threshold: float
