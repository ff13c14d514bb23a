"""Data models for sync system."""

from .config import (
    CacheConfiguration,
    LanguageOverride,
    OutputTarget,
    SyncConfig,
    SyncSettings,
)
from .naming import (
    ANDROID,
    APPLE,
    COMPOSE_RESOURCES,
    JSON,
    FileNamingFromFormat,
    Format,
    NamingStrategy,
    TemplateNaming,
    default_folder_naming,
    format_from_name,
)
from .project import (
    ExportedLocalization,
    LanguageConfiguration,
    ProjectInfo,
    format_timestamp,
    load_project_info,
    parse_timestamp,
    save_project_info,
)

__all__ = [
    "ANDROID",
    "APPLE",
    "COMPOSE_RESOURCES",
    "JSON",
    "CacheConfiguration",
    "ExportedLocalization",
    "FileNamingFromFormat",
    "Format",
    "LanguageConfiguration",
    "LanguageOverride",
    "NamingStrategy",
    "OutputTarget",
    "ProjectInfo",
    "SyncConfig",
    "SyncSettings",
    "TemplateNaming",
    "default_folder_naming",
    "format_from_name",
    "format_timestamp",
    "load_project_info",
    "parse_timestamp",
    "save_project_info",
]
