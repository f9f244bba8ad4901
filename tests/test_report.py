import json
import os
import shutil
import tempfile
import unittest
from nvdgate.core.aggregate import summarize
from nvdgate.core.gate import gate
from nvdgate.core.models import Severity, StatusEntry
from nvdgate.report import ReportGenerator, WARRANTY_BANNER
from helpers import vuln, dep, scan


class TestReportGenerator(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.result = scan(dep("b.jar", [vuln("CVE-LOW", 2), vuln("CVE-HIGH", 9)]), dep("a.jar"))

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_style(self):
        reporter = ReportGenerator(summarize(scan()))
        self.assertEqual(reporter.style("OK", "green", bright=True), "\033[1;32mOK\033[0m")
        self.assertEqual(reporter.style("plain"), "plain")

    def test_style_disabled(self):
        reporter = ReportGenerator(summarize(scan()), use_color=False)
        self.assertEqual(reporter.style("OK", "green", bright=True), "OK")

    def test_render_status_colors(self):
        reporter = ReportGenerator(summarize(scan()))
        text = reporter.render_status([StatusEntry(text="CVE-HIGH", severity=Severity.HIGH),
                                       StatusEntry(text="CVE-LOW", severity=Severity.LOW)])
        self.assertEqual(text, "\033[1;31mCVE-HIGH\033[0m, \033[1;36mCVE-LOW\033[0m")

    def test_render_plain(self):
        summary = summarize(self.result, include_clean=True)
        verdict = gate(summary.worst_score, 7)
        text = ReportGenerator(summary, verdict, output_dir=self.test_dir,
                               verbose=True, use_color=False).render()
        lines = text.splitlines()
        self.assertEqual(lines[0], "+------------+-------------------+")
        self.assertEqual(lines[1], "| dependency | status            |")
        self.assertEqual(lines[3], "| a.jar      | OK                |")
        self.assertEqual(lines[4], "| b.jar      | CVE-HIGH, CVE-LOW |")
        self.assertIn("2 vulnerabilities detected. Severity: HIGH", text)
        self.assertIn("Highest score: 9.0 (fail threshold 7.0): FAILED", text)
        self.assertIn(f"Detailed reports saved in: {os.path.abspath(self.test_dir)}", text)
        self.assertNotIn("HTML report", text)
        self.assertTrue(text.endswith(WARRANTY_BANNER))

    def test_table_hidden_for_clean_run(self):
        summary = summarize(scan(dep("a.jar")))
        text = ReportGenerator(summary, output_dir=self.test_dir, use_color=False).render()
        self.assertNotIn("dependency", text)
        self.assertIn("0 vulnerabilities detected. Severity: NONE", text)

    def test_html_report_linked_when_present(self):
        open(os.path.join(self.test_dir, "dependency-check-report.html"), 'w').close()
        text = ReportGenerator(summarize(scan()), output_dir=self.test_dir, use_color=False).render()
        self.assertIn("HTML report :", text)

    def test_write_verdict(self):
        summary = summarize(self.result)
        reporter = ReportGenerator(summary, gate(summary.worst_score, 9))
        path = os.path.join(self.test_dir, "nested", "verdict.json")
        reporter.write_verdict(path)
        with open(path) as f:
            data = json.load(f)
        self.assertEqual(data, {
            "failed": False,
            "highest_score": 9.0,
            "fail_threshold": 9.0,
            "severity": "high",
            "vulnerability_count": 2,
        })

    def test_write_verdict_without_verdict(self):
        with self.assertRaises(ValueError):
            ReportGenerator(summarize(scan())).write_verdict(os.path.join(self.test_dir, "v.json"))


if __name__ == '__main__':
    unittest.main()
