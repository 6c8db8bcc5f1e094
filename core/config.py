"""
Extraction configuration loader.

Reads core/extraction.yaml (or the file named by JOBCAPTURE_CONFIG) once per
process and exposes it as an immutable ExtractionConfig.
"""
import os
import re
import logging
from pathlib import Path
from typing import Dict, Optional, Tuple, Pattern

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / 'extraction.yaml'

# Cache for loaded config
_config_cache: Optional['ExtractionConfig'] = None


class ExtractionConfig:
    """Read-only view over the extraction YAML."""

    def __init__(self, data: Optional[Dict] = None):
        data = data or {}
        classifier = data.get('classifier') or {}

        self.job_site_domains: Tuple[str, ...] = self._as_tuple(classifier.get('job_site_domains'))
        self.path_indicators: Tuple[str, ...] = self._as_tuple(classifier.get('path_indicators'))
        self.url_keywords: Tuple[str, ...] = self._as_tuple(classifier.get('url_keywords'))
        self.title_keywords: Tuple[str, ...] = self._as_tuple(classifier.get('title_keywords'))
        self.job_element_selectors: Tuple[str, ...] = self._as_tuple(classifier.get('job_element_selectors'))
        self.skills: Tuple[str, ...] = self._as_tuple(data.get('skills'), lower=False)

        patterns = []
        for raw in self._as_tuple(classifier.get('url_patterns'), lower=False):
            try:
                patterns.append(re.compile(raw, re.IGNORECASE))
            except re.error as e:
                logger.warning(f"Ignoring invalid URL pattern {raw!r}: {e}")
        self.url_patterns: Tuple[Pattern, ...] = tuple(patterns)

    @staticmethod
    def _as_tuple(values, lower: bool = True) -> Tuple[str, ...]:
        if not values:
            return ()
        items = [str(v).strip() for v in values if v is not None and str(v).strip()]
        if lower:
            items = [v.lower() for v in items]
        return tuple(items)

    def __repr__(self):
        return (
            f"<ExtractionConfig(domains={len(self.job_site_domains)}, "
            f"skills={len(self.skills)}, url_patterns={len(self.url_patterns)})>"
        )


def load_extraction_config(path: Optional[Path] = None) -> ExtractionConfig:
    """
    Load extraction configuration from YAML.

    Falls back to an empty configuration when the file is missing or
    unreadable; extraction still runs, known-site checks simply never match.
    """
    if path is None:
        env_path = os.getenv('JOBCAPTURE_CONFIG')
        path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.warning(f"Extraction config file not found: {path}. Using empty config.")
        return ExtractionConfig()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
        logger.info(f"Loaded extraction config from {path}")
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Error loading extraction config: {e}")
        data = {}

    if not isinstance(data, dict):
        logger.error(f"Extraction config {path} is not a mapping, ignoring it")
        data = {}

    return ExtractionConfig(data)


def get_extraction_config() -> ExtractionConfig:
    """Get the process-wide extraction configuration, loading it on first use."""
    global _config_cache

    if _config_cache is None:
        _config_cache = load_extraction_config()
    return _config_cache


def reset_extraction_config():
    """Drop the cached configuration so the next access reloads it."""
    global _config_cache
    _config_cache = None
