# SPDX-License-Identifier: BUSL-1.1
"""Validation of global settings."""

from tigen.errors import ConfigError

KNOWN_BUILDERS = ("docker", "podman")


class ValidationResult:
    """Collects errors from validation."""
    def __init__(self):
        self.errors = []

    def error(self, msg: str):
        self.errors.append(msg)

    @property
    def valid(self) -> bool:
        return len(self.errors) == 0

    def raise_if_invalid(self):
        if not self.valid:
            raise ConfigError("; ".join(self.errors))


def validate_settings(values: dict) -> ValidationResult:
    """Check raw setting values keyed by Settings field name."""
    result = ValidationResult()

    for field_name, value in values.items():
        if not isinstance(value, (str, int, float)):
            result.error(f"{field_name} must be a string, got {type(value).__name__}")

    builder = str(values.get("builder", "docker")).strip().lower()
    if builder not in KNOWN_BUILDERS:
        result.error(
            f"builder '{values.get('builder')}' is not supported, "
            f"choose one of: {', '.join(KNOWN_BUILDERS)}"
        )

    if "images_dir" in values and not str(values["images_dir"]).strip():
        result.error("imagesDir must not be empty")

    return result
