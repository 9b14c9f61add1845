# SPDX-License-Identifier: BUSL-1.1
"""Configuration system: global YAML settings and their validation."""

from tigen.config.loader import ConfigStore, Settings
from tigen.config.validation import ValidationResult, validate_settings

__all__ = ["ConfigStore", "Settings", "ValidationResult", "validate_settings"]
