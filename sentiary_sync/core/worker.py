"""Orchestration of a single localization sync run."""

import shutil
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from rich.console import Console
from rich.markup import escape

from ..errors import OutputWriteError, TransportError, UnresolvedFallbackError
from ..models.config import OutputTarget, SyncConfig
from ..models.naming import Format
from ..models.project import ExportedLocalization, ProjectInfo
from .cache import CacheMarker
from .graph import resolve_override_order
from .languages import OutputLayout, resolve_languages
from .staleness import StalenessChecker, StalenessReason

TAG = "[Sentiary]"

default_console = Console()


class LocalizationSource(Protocol):
    """What the worker needs from a transport client."""

    def get_project_info(self) -> ProjectInfo: ...

    def fetch_localization(self, language: str, fmt: Format, output_file: Path) -> None: ...


@dataclass
class SyncResult:
    """Result of a sync run."""

    did_work: bool
    reason: str
    message: str = ""
    fetched: list[ExportedLocalization] = field(default_factory=list)
    derived: list[ExportedLocalization] = field(default_factory=list)
    cache_updated: bool = False


class SyncWorker:
    """Downloads localizations, builds overrides and updates the cache marker."""

    def __init__(
        self,
        client: LocalizationSource,
        config: SyncConfig,
        force_update: bool = False,
        console: Console | None = None,
    ) -> None:
        """Initialize the worker.

        Args:
            client: Transport client (owned and closed by the caller)
            config: Sync configuration
            force_update: Ignore the cache and always download
            console: Rich console for output (module console if not provided)
        """
        self.client = client
        self.config = config
        self.force_update = force_update
        self.console = console if console is not None else default_console
        self.marker = CacheMarker(config.caching)

    def _print(self, message: str, style: str | None = None) -> None:
        self.console.print(escape(f"{TAG} {message}"), style=style, highlight=False)

    def _info(self, message: str) -> None:
        self._print(message)

    def _debug(self, message: str) -> None:
        if self.config.settings.verbose:
            self._print(message, style="dim")

    def _warn(self, message: str) -> None:
        self._print(message, style="yellow")

    def _error(self, message: str) -> None:
        self._print(message, style="red")

    def run(self) -> bool:
        """Run a sync.

        Returns:
            True if files were fetched or written, False if everything was up to date
        """
        return self.sync().did_work

    def sync(self) -> SyncResult:
        """Run a sync and report what happened.

        Raises:
            SyncError: Any failure; the cache marker is left untouched
        """
        project_info = self.client.get_project_info()
        self._info(f"Project Name: {project_info.name}")
        self._info(f"Languages: {', '.join(project_info.languages)}")

        overrides = self.config.language_overrides
        languages = resolve_languages(
            project_info.languages,
            overrides,
            self.config.disabled_languages,
        )
        layout = OutputLayout(languages, self.config.outputs.values(), self.config.default_language)
        self._debug(f"Expected languages: {', '.join(sorted(languages.expected))}")
        self._debug(f"Languages to fetch: {', '.join(sorted(languages.to_fetch))}")

        # Disabled overrides are ordered for cycle detection but never written
        order = [lang for lang in resolve_override_order(overrides) if lang in languages.expected]
        for override in overrides.values():
            if override.fetch and not override.fallback_to:
                self._warn(f"Override '{override.name}' has no fallback, skipping")

        decision = StalenessChecker(layout, self.marker).check(project_info, self.force_update)
        if decision.reason == StalenessReason.INVALID_CACHE_MARKER:
            self._warn(decision.message)
        elif decision.must_sync:
            self._info(decision.message)
        else:
            self._debug(decision.message)

        if not decision.must_sync:
            self._info("Localizations are up to date")
            return SyncResult(did_work=False, reason=decision.reason, message=decision.message)

        fetched = self._fetch_all(sorted(languages.to_fetch), layout)
        derived = self._apply_overrides(order, fetched, layout)
        cache_updated = self.marker.write(project_info.terms_last_modified)
        if cache_updated:
            self._debug(f"Saved last modified {project_info.terms_last_modified.isoformat()} to {self.marker.cache_file}")

        return SyncResult(
            did_work=True,
            reason=decision.reason,
            message=decision.message,
            fetched=fetched,
            derived=derived,
            cache_updated=cache_updated,
        )

    def _fetch_all(self, languages: list[str], layout: OutputLayout) -> list[ExportedLocalization]:
        """Download every (output, language) pair in parallel.

        The first failure cancels fetches that have not started yet and is
        re-raised once running fetches finish.
        """
        jobs = [(target, language) for target in layout.targets for language in languages]
        if not jobs:
            return []

        max_workers = max(1, min(self.config.settings.max_workers, len(jobs)))
        exported: list[ExportedLocalization] = []

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {
                executor.submit(self._fetch_one, language, target, layout.output_file_for(language, target)): language
                for target, language in jobs
            }
            try:
                for future in as_completed(futures):
                    exported.append(future.result())
            except BaseException:
                for pending in futures:
                    pending.cancel()
                raise

        exported.sort(key=lambda e: (e.target.name, e.language))
        return exported

    def _fetch_one(self, language: str, target: OutputTarget, output_file: Path) -> ExportedLocalization:
        self._info(f"Downloading '{language}' for export '{target.name}' to {output_file}")
        try:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            self.client.fetch_localization(language, target.format, output_file)
        except TransportError:
            self._error(f"Failed to fetch localization for {language}!")
            raise
        except OSError as e:
            self._error(f"Failed to fetch localization for {language}!")
            raise OutputWriteError(output_file, e) from e

        return ExportedLocalization(language=language, output_file=output_file, target=target)

    def _apply_overrides(
        self,
        order: list[str],
        fetched: list[ExportedLocalization],
        layout: OutputLayout,
    ) -> list[ExportedLocalization]:
        """Copy fallback files onto override paths, in dependency order.

        Returns:
            The override files written
        """
        by_language: dict[str, list[ExportedLocalization]] = {}
        for exported in fetched:
            by_language.setdefault(exported.language, []).append(exported)

        derived: list[ExportedLocalization] = []
        for language in order:
            fallback = self.config.language_overrides[language].fallback_to
            sources = by_language.get(fallback)
            if not sources:
                self._error(f"Could not resolve language override '{language}'")
                raise UnresolvedFallbackError(language, fallback)

            self._debug(f"Resolving fallback for '{language}' from '{fallback}'")
            created = [self._copy_fallback(language, fallback, source, layout) for source in sources]
            by_language[language] = created
            derived.extend(created)

        return derived

    def _copy_fallback(
        self,
        language: str,
        fallback: str,
        source: ExportedLocalization,
        layout: OutputLayout,
    ) -> ExportedLocalization:
        output_file = layout.output_file_for(language, source.target)
        self._info(
            f"Creating '{language}' from fallback '{fallback}' "
            f"for export '{source.target.name}' at {output_file}"
        )
        try:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source.output_file, output_file)
        except OSError as e:
            raise OutputWriteError(output_file, e) from e

        return ExportedLocalization(language=language, output_file=output_file, target=source.target)
