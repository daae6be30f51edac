"""Configuration module for Currency Crisis Lab."""

from crisislab.config.schema import Config, package_defaults
from crisislab.config.validator import ConfigValidator

__all__ = ["Config", "ConfigValidator", "package_defaults"]
