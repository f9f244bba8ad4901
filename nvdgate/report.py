import json
import os
import logging
from typing import List, Optional
from nvdgate.config import DEFAULT_OUTPUT_DIR
from nvdgate.core.models import GateVerdict, RunSummary, StatusEntry, SummaryRow
from nvdgate.core.scoring import color

logger = logging.getLogger(__name__)

_ANSI = {
    "green": 32,
    "cyan": 36,
    "yellow": 33,
    "red": 31,
    "magenta": 35,
}
_BRIGHT = 1
_RESET = "\033[0m"

WARRANTY_BANNER = "   *** THIS REPORT IS WITHOUT WARRANTY ***"

class ReportGenerator:
    def __init__(self, summary: RunSummary, verdict: Optional[GateVerdict] = None,
                 output_dir: str = DEFAULT_OUTPUT_DIR, verbose: bool = False, use_color: bool = True):
        self.summary = summary
        self.verdict = verdict
        self.output_dir = output_dir
        self.verbose = verbose
        self.use_color = use_color

    def style(self, text: str, color_name: Optional[str] = None, bright: bool = False) -> str:
        if not self.use_color:
            return text
        codes = []
        if bright:
            codes.append(str(_BRIGHT))
        if color_name:
            codes.append(str(_ANSI[color_name]))
        if not codes:
            return text
        return f"\033[{';'.join(codes)}m{text}{_RESET}"

    def render_status(self, entries: List[StatusEntry]) -> str:
        return ", ".join(self.style(e.text, color(e.severity), bright=True) for e in entries)

    def render_table(self, rows: List[SummaryRow]) -> str:
        """Boxed two-column table; widths come from the unstyled text."""
        header = ("dependency", "status")
        plain = [(r.dependency, ", ".join(e.text for e in r.status)) for r in rows]
        widths = [max([len(header[i])] + [len(p[i]) for p in plain]) for i in range(2)]

        border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"
        lines = [border, "| " + " | ".join(h.ljust(w) for h, w in zip(header, widths)) + " |", border]
        for row, (dep, status) in zip(rows, plain):
            styled = self.render_status(row.status)
            # Pad using the plain width since escape codes take no columns.
            padding = " " * (widths[1] - len(status))
            lines.append(f"| {dep.ljust(widths[0])} | {styled}{padding} |")
        lines.append(border)
        return "\n".join(lines)

    def render(self) -> str:
        s = self.summary
        lines = []
        if self.verbose or s.vulnerability_count > 0:
            lines.append(self.render_table(s.rows))

        tier = s.worst_severity.value.upper()
        lines.append("")
        lines.append(f"{s.vulnerability_count} vulnerabilities detected. Severity: "
                     f"{self.style(tier, color(s.worst_severity), bright=True)}")
        if self.verdict is not None:
            outcome = "FAILED" if self.verdict.failed else "passed"
            lines.append(f"Highest score: {self.verdict.highest_score} "
                         f"(fail threshold {self.verdict.fail_threshold}): {outcome}")
        lines.append(f"Detailed reports saved in: {self.style(os.path.abspath(self.output_dir), bright=True)}")
        html_report = os.path.join(self.output_dir, "dependency-check-report.html")
        if os.path.exists(html_report):
            lines.append(f"HTML report : {self.style(os.path.abspath(html_report), bright=True)}")
        lines.append("")
        lines.append(self.style(WARRANTY_BANNER, "magenta", bright=True))
        return "\n".join(lines)

    def write_verdict(self, output_path: str):
        if self.verdict is None:
            raise ValueError("No gate verdict to write")
        # Ensure directory exists
        dir_path = os.path.dirname(output_path)
        if dir_path:
            os.makedirs(dir_path, exist_ok=True)

        data = self.verdict.model_dump(mode='json')
        data["severity"] = self.summary.worst_severity.value
        data["vulnerability_count"] = self.summary.vulnerability_count
        with open(output_path, 'w') as f:
            json.dump(data, f, indent=2)
        logger.info(f"Saved gate verdict to {output_path}")
