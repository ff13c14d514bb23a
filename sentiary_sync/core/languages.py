"""Computing which languages must exist and which must be downloaded."""

from collections.abc import Iterable, Mapping
from pathlib import Path

from ..models.config import LanguageOverride, OutputTarget
from ..models.project import LanguageConfiguration


def resolve_languages(
    available: Iterable[str],
    overrides: Mapping[str, LanguageOverride],
    disabled: Iterable[str],
) -> LanguageConfiguration:
    """Derive the expected and to-fetch language sets.

    Overrides with ``fetch`` enabled are expected on disk but produced by
    copying their fallback, so they are never downloaded themselves. Their
    fallbacks are downloaded when the remote project provides them.
    Overrides with ``fetch`` disabled are neither expected nor downloaded.

    Args:
        available: Languages reported by the remote project
        overrides: Declared overrides keyed by name
        disabled: Languages excluded from the output

    Returns:
        LanguageConfiguration with both sets
    """
    disabled_set = frozenset(disabled)
    remote = frozenset(available) - disabled_set

    derived = {o.name for o in overrides.values() if o.fetch}
    excluded = {o.name for o in overrides.values() if not o.fetch}

    expected = (remote | derived) - disabled_set - excluded

    fallback_sources = {
        o.fallback_to
        for o in overrides.values()
        if o.fetch and o.fallback_to and o.fallback_to in remote and o.fallback_to not in derived | excluded
    }
    to_fetch = (expected - derived) | fallback_sources

    return LanguageConfiguration(expected=frozenset(expected), to_fetch=frozenset(to_fetch))


class OutputLayout:
    """Maps (language, output target) pairs to files on disk."""

    def __init__(
        self,
        languages: LanguageConfiguration,
        targets: Iterable[OutputTarget],
        default_language: str,
    ) -> None:
        self.languages = languages
        self.targets = list(targets)
        self.default_language = default_language

    def output_file_for(self, language: str, target: OutputTarget) -> Path:
        """Path of the file holding ``language`` within ``target``."""
        is_default = language == self.default_language
        folder_name = target.folder_naming(language, is_default)
        file_name = target.file_naming(language, is_default)  # type: ignore[misc]
        return target.output_dir / folder_name / file_name

    def output_files(self) -> list[Path]:
        """Every file expected to exist after a successful sync."""
        return [
            self.output_file_for(language, target)
            for target in self.targets
            for language in sorted(self.languages.expected)
        ]

    def missing_files(self) -> list[Path]:
        """Expected files that are not on disk."""
        return [path for path in self.output_files() if not path.is_file()]
