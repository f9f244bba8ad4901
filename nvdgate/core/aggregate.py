import logging
from typing import List, Optional, Tuple
from nvdgate.core.models import Dependency, ScanResult, Severity, StatusEntry, SummaryRow, RunSummary, Vulnerability
from nvdgate.core.scoring import score, severity

logger = logging.getLogger(__name__)

OK_STATUS = "OK"

def _scored(dependency: Dependency, log: Optional[logging.Logger]) -> List[Tuple[float, Vulnerability]]:
    return [(score(v, log), v) for v in dependency.vulnerabilities]

def _status_entries(scored: List[Tuple[float, Vulnerability]]) -> List[StatusEntry]:
    if not scored:
        return [StatusEntry(text=OK_STATUS, severity=Severity.NONE)]
    # Stable ascending sort then reverse; ties differ from a descending sort.
    ranked = sorted(scored, key=lambda pair: pair[0])
    ranked.reverse()
    return [StatusEntry(text=v.name, severity=severity(s)) for s, v in ranked]

def dependency_status(dependency: Dependency, log: Optional[logging.Logger] = None) -> List[StatusEntry]:
    """Status entries for one dependency, highest risk first, or a single OK entry when clean."""
    return _status_entries(_scored(dependency, log))

def worst_score(scores: List[float]) -> float:
    return max([0.0, *scores])

def summarize(scan_result: ScanResult, include_clean: bool = False,
              log: Optional[logging.Logger] = None) -> RunSummary:
    """Build the summary rows and the flat score list for a scan result.

    Every vulnerability is scored once. Clean dependencies only get a row when
    ``include_clean`` is set. Rows are ordered by dependency file name; the
    score list follows dependency-then-vulnerability order.
    """
    rows = []
    scores = []
    for dep in scan_result.dependencies:
        scored = _scored(dep, log)
        scores.extend(s for s, _ in scored)
        if dep.vulnerable or include_clean:
            rows.append(SummaryRow(dependency=dep.file_name, status=_status_entries(scored)))
    rows.sort(key=lambda row: row.dependency)

    worst = worst_score(scores)
    logger.debug(f"Summarized {len(scan_result.dependencies)} dependencies, {len(scores)} vulnerabilities, worst score {worst}")
    return RunSummary(rows=rows, scores=scores, worst_score=worst, worst_severity=severity(worst))
