"""Per-vulnerability risk scoring, severity tiers and their display colors."""
import logging
from typing import Optional
from nvdgate.core.models import Vulnerability, Severity, SCHEME_PRIORITY

logger = logging.getLogger(__name__)

# Score used when a flagged vulnerability carries no usable CVSS data.
FALLBACK_SCORE = 1.0

LOW_THRESHOLD = 4.0
HIGH_THRESHOLD = 7.0

_COLORS = {
    Severity.NONE: "green",
    Severity.LOW: "cyan",
    Severity.MEDIUM: "yellow",
    Severity.HIGH: "red",
}

def score(vulnerability: Vulnerability, log: Optional[logging.Logger] = None) -> float:
    """Derive the risk score of a vulnerability.

    The first scheme in SCHEME_PRIORITY that provides a sub-score wins; its score
    is the larger of the exploitability and impact sub-scores. Schemes are never
    combined. Without any usable scheme the fallback score is returned and one
    warning is written to ``log``.
    """
    log = log or logger
    for scheme in SCHEME_PRIORITY:
        source = vulnerability.source(scheme)
        if source is None or not source.provided:
            continue
        return max(float(source.exploitability_score or 0), float(source.impact_score or 0))

    log.warning(f"No CVSS found for: {vulnerability.name}")
    return FALLBACK_SCORE

def severity(score: float) -> Severity:
    # Branch order matters at the 4 and 7 boundaries.
    if score < 0:
        raise ValueError(f"Risk score must be non-negative, got {score}")
    if score == 0:
        return Severity.NONE
    if score < LOW_THRESHOLD:
        return Severity.LOW
    if score >= HIGH_THRESHOLD:
        return Severity.HIGH
    return Severity.MEDIUM

def color(severity: Severity) -> str:
    tag = _COLORS.get(severity)
    assert tag, f"No color mapped for severity {severity!r}"
    return tag
