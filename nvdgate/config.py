"""Gate configuration: CLI values, then environment variables, then defaults."""
import json
import math
import os
import logging
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ValidationError, field_validator

from nvdgate.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = "target/nvd"

ENV_FAIL_THRESHOLD = "NVDGATE_FAIL_THRESHOLD"
ENV_VERBOSE_SUMMARY = "NVDGATE_VERBOSE_SUMMARY"
ENV_OUTPUT_DIR = "NVDGATE_OUTPUT_DIR"


class GateConfig(BaseModel):
    fail_threshold: float = 0.0
    verbose_summary: bool = False
    output_dir: str = DEFAULT_OUTPUT_DIR

    @field_validator("fail_threshold")
    @classmethod
    def validate_fail_threshold(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("fail_threshold must be a finite number")
        if v < 0:
            raise ValueError("fail_threshold must be non-negative")
        return v

    @field_validator("output_dir")
    @classmethod
    def validate_output_dir(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("output_dir must be set and non-empty")
        return v.strip()

    @classmethod
    def build(cls, values: Dict[str, Any]) -> "GateConfig":
        """Validate raw values, reporting failures as ConfigurationError."""
        try:
            return cls(**values)
        except ValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            raise ConfigurationError(f"Invalid configuration ({fields}): {e}") from e

    @classmethod
    def from_sources(cls, fail_threshold: Optional[float] = None, verbose_summary: Optional[bool] = None,
                     output_dir: Optional[str] = None, environ: Optional[Mapping[str, str]] = None,
                     base: Optional["GateConfig"] = None) -> "GateConfig":
        """Merge explicit values over environment variables over ``base`` (or the defaults)."""
        env = os.environ if environ is None else environ
        values = base.model_dump() if base else {}

        if ENV_FAIL_THRESHOLD in env:
            values["fail_threshold"] = env[ENV_FAIL_THRESHOLD]
        if ENV_VERBOSE_SUMMARY in env:
            values["verbose_summary"] = env[ENV_VERBOSE_SUMMARY]
        if ENV_OUTPUT_DIR in env:
            values["output_dir"] = env[ENV_OUTPUT_DIR]

        if fail_threshold is not None:
            values["fail_threshold"] = fail_threshold
        if verbose_summary is not None:
            values["verbose_summary"] = verbose_summary
        if output_dir is not None:
            values["output_dir"] = output_dir

        return cls.build(values)

    @classmethod
    def from_file(cls, path: str) -> "GateConfig":
        """Load options from a JSON file. Keys may use dashes or underscores."""
        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read configuration from {path}: {e}")
            raise ConfigurationError(f"Failed to read configuration from {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration in {path} must be a JSON object")

        # The gate options may live at the top level or under an "nvd" key.
        section = data.get("nvd", data)
        values = {}
        for key, value in section.items():
            name = key.replace("-", "_")
            if name in cls.model_fields:
                values[name] = value
            else:
                logger.debug(f"Ignoring unknown configuration key {key}")
        return cls.build(values)
