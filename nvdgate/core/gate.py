import logging
import math
from nvdgate.core.errors import ConfigurationError
from nvdgate.core.models import GateVerdict

logger = logging.getLogger(__name__)

DEFAULT_FAIL_THRESHOLD = 0.0

def gate(worst_score: float, fail_threshold: float = DEFAULT_FAIL_THRESHOLD) -> GateVerdict:
    """Fail when the worst score is strictly above the threshold.

    A threshold of 0 fails on any scored vulnerability. The worst score is
    reported whether or not the gate fails.
    """
    if fail_threshold is None:
        raise ConfigurationError("fail_threshold must be set")
    if not math.isfinite(fail_threshold):
        raise ConfigurationError(f"fail_threshold must be a finite number, got {fail_threshold}")
    if fail_threshold < 0:
        raise ConfigurationError(f"fail_threshold must be non-negative, got {fail_threshold}")

    failed = worst_score > fail_threshold
    logger.info(f"Highest score {worst_score} against fail threshold {fail_threshold}: {'FAILED' if failed else 'passed'}")
    return GateVerdict(failed=failed, highest_score=worst_score, fail_threshold=fail_threshold)
