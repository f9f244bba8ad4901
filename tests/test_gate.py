import unittest
from nvdgate.core.errors import ConfigurationError
from nvdgate.core.gate import gate


class TestGate(unittest.TestCase):
    def test_equal_to_threshold_passes(self):
        self.assertFalse(gate(5, 5).failed)

    def test_above_threshold_fails(self):
        self.assertTrue(gate(5.01, 5).failed)

    def test_clean_run_passes_default_threshold(self):
        verdict = gate(0)
        self.assertFalse(verdict.failed)
        self.assertEqual(verdict.fail_threshold, 0)

    def test_any_vulnerability_fails_default_threshold(self):
        self.assertTrue(gate(1).failed)

    def test_reports_highest_score_when_passing(self):
        verdict = gate(6.4, 7)
        self.assertFalse(verdict.failed)
        self.assertEqual(verdict.highest_score, 6.4)

    def test_negative_threshold_rejected(self):
        with self.assertRaises(ConfigurationError):
            gate(3, -1)

    def test_missing_threshold_rejected(self):
        with self.assertRaises(ConfigurationError):
            gate(3, None)

    def test_nan_threshold_rejected(self):
        with self.assertRaises(ConfigurationError):
            gate(10, float("nan"))

    def test_infinite_threshold_rejected(self):
        with self.assertRaises(ConfigurationError):
            gate(10, float("inf"))


if __name__ == '__main__':
    unittest.main()
