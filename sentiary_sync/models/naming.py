"""Folder and file naming strategies for exported localizations.

A naming strategy is any callable ``(language, is_default) -> str``. The
built-in strategies are frozen dataclasses or plain functions so they can be
written to and read from the YAML configuration.
"""

from dataclasses import dataclass
from typing import Any, Callable

from ..errors import ConfigurationError

NamingStrategy = Callable[[str, bool], str]


@dataclass(frozen=True)
class Format:
    """An export format understood by the Sentiary API."""

    api_name: str  # Value of the ``format`` query parameter
    file_name: str  # Default file name for this format


APPLE = Format(api_name="apple", file_name="Localizable.strings")
ANDROID = Format(api_name="android", file_name="strings.xml")
COMPOSE_RESOURCES = Format(api_name="compose", file_name="strings.xml")
JSON = Format(api_name="json", file_name="strings.json")

FORMATS: dict[str, Format] = {
    fmt.api_name: fmt for fmt in (APPLE, ANDROID, COMPOSE_RESOURCES, JSON)
}


def format_from_name(name: str) -> Format:
    """Look up a built-in format by its API name.

    Raises:
        ConfigurationError: If the format is unknown
    """
    fmt = FORMATS.get(name.lower())
    if fmt is None:
        known = ", ".join(sorted(FORMATS))
        raise ConfigurationError(f"Unknown format '{name}'. Expected one of: {known}")
    return fmt


def default_folder_naming(language: str, is_default: bool) -> str:
    """Return "values" for the default language and "values-{language}" otherwise."""
    return "values" if is_default else f"values-{language}"


@dataclass(frozen=True)
class FileNamingFromFormat:
    """Names every file after the format's default file name."""

    format: Format

    def __call__(self, language: str, is_default: bool) -> str:
        return self.format.file_name


@dataclass(frozen=True)
class TemplateNaming:
    """Uses a fixed name for the default language and a pattern for the rest.

    Example: ``TemplateNaming("Base.lproj", "{language}.lproj")``.
    """

    default: str
    pattern: str

    def __call__(self, language: str, is_default: bool) -> str:
        if is_default:
            return self.default
        return self.pattern.format(language=language)


def naming_strategy_from_dict(data: dict[str, Any] | None, fmt: Format, kind: str) -> NamingStrategy:
    """Build a naming strategy from its configuration form.

    Args:
        data: Mapping with a ``type`` key (``default``, ``format`` or ``template``),
            or None to use the default for ``kind``
        fmt: Format of the owning output, used by the ``format`` strategy
        kind: Either "folder" or "file", selects the default strategy

    Returns:
        The naming strategy
    """
    if not data:
        return default_folder_naming if kind == "folder" else FileNamingFromFormat(fmt)

    strategy_type = data.get("type", "default")
    if strategy_type == "default":
        return default_folder_naming
    if strategy_type == "format":
        return FileNamingFromFormat(fmt)
    if strategy_type == "template":
        if "pattern" not in data:
            raise ConfigurationError("Template naming strategy requires a 'pattern'")
        pattern = str(data["pattern"])
        try:
            pattern.format(language="en-US")
        except (KeyError, IndexError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid template pattern {pattern!r}: only the {{language}} placeholder is supported"
            ) from e
        return TemplateNaming(default=str(data.get("default", pattern)), pattern=pattern)

    raise ConfigurationError(f"Unknown naming strategy type '{strategy_type}'")


def naming_strategy_to_dict(strategy: NamingStrategy) -> dict[str, Any]:
    """Convert a built-in naming strategy back to its configuration form."""
    if strategy is default_folder_naming:
        return {"type": "default"}
    if isinstance(strategy, FileNamingFromFormat):
        return {"type": "format"}
    if isinstance(strategy, TemplateNaming):
        return {"type": "template", "default": strategy.default, "pattern": strategy.pattern}
    raise ConfigurationError(f"Naming strategy {strategy!r} cannot be serialized")
