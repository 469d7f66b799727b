"""Configuration — defaults, YAML/env hierarchy, validated model."""

from edtexport.config.hierarchy import load_config_hierarchy, load_export_config
from edtexport.config.schema import ExportConfig

__all__ = ["ExportConfig", "load_config_hierarchy", "load_export_config"]
