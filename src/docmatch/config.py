"""
Engine configuration.

All thresholds used by the comparators and the match classifier live here.
The engine never reads the environment; callers build an ``EngineConfig``
(usually via ``EngineConfig.from_env()``) and pass it in.

Environment variables (optional, loaded from .env):
    DOCMATCH_NUMERIC_TOLERANCE      - plain match band (default 0.2)
    DOCMATCH_NUMERIC_WARN_TOLERANCE - match-with-warning band (default 0.3)
    DOCMATCH_MAX_DOCUMENT_AGE_DAYS  - document freshness limit (default 90)
    DOCMATCH_GOOD_MATCH_PERCENT     - good_match threshold (default 70)
    DOCMATCH_PARTIAL_MATCH_PERCENT  - partial_match threshold (default 50)
    DOCMATCH_GOOD_MATCH_MAX_WARNINGS - warnings allowed for good_match (default 2)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv


@dataclass(frozen=True)
class EngineConfig:
    """Thresholds for comparison and classification."""
    numeric_tolerance: float = 0.2
    numeric_warn_tolerance: float = 0.3
    max_document_age_days: int = 90
    good_match_percent: int = 70
    partial_match_percent: int = 50
    good_match_max_warnings: int = 2

    @classmethod
    def from_env(cls, env_path: Optional[Union[str, Path]] = None) -> "EngineConfig":
        """
        Build a config from DOCMATCH_* environment variables.

        Args:
            env_path: .env file to load first (default: package .env)

        Returns:
            EngineConfig with defaults for unset variables
        """
        if env_path is None:
            env_path = Path(__file__).parent / ".env"
        load_dotenv(env_path)

        defaults = cls()
        return cls(
            numeric_tolerance=float(os.getenv("DOCMATCH_NUMERIC_TOLERANCE", defaults.numeric_tolerance)),
            numeric_warn_tolerance=float(os.getenv("DOCMATCH_NUMERIC_WARN_TOLERANCE", defaults.numeric_warn_tolerance)),
            max_document_age_days=int(os.getenv("DOCMATCH_MAX_DOCUMENT_AGE_DAYS", defaults.max_document_age_days)),
            good_match_percent=int(os.getenv("DOCMATCH_GOOD_MATCH_PERCENT", defaults.good_match_percent)),
            partial_match_percent=int(os.getenv("DOCMATCH_PARTIAL_MATCH_PERCENT", defaults.partial_match_percent)),
            good_match_max_warnings=int(os.getenv("DOCMATCH_GOOD_MATCH_MAX_WARNINGS", defaults.good_match_max_warnings)),
        )


DEFAULT_CONFIG = EngineConfig()
