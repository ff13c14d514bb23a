"""Tests for override ordering."""

import pytest

from sentiary_sync.core.graph import resolve_override_order
from sentiary_sync.errors import CycleError
from sentiary_sync.models.config import LanguageOverride


def _overrides(*overrides: LanguageOverride) -> dict[str, LanguageOverride]:
    return {o.name: o for o in overrides}


class TestResolveOverrideOrder:
    """Tests for resolve_override_order."""

    def test_empty(self) -> None:
        assert resolve_override_order({}) == []

    def test_single_override(self) -> None:
        overrides = _overrides(LanguageOverride("en-GB", fallback_to="en-US"))

        assert resolve_override_order(overrides) == ["en-GB"]

    def test_chain_orders_fallbacks_first(self) -> None:
        overrides = _overrides(
            LanguageOverride("de-AT", fallback_to="de-CH"),
            LanguageOverride("de-CH", fallback_to="de-DE"),
        )

        assert resolve_override_order(overrides) == ["de-CH", "de-AT"]

    def test_base_languages_excluded(self) -> None:
        overrides = _overrides(
            LanguageOverride("en-GB", fallback_to="en-US"),
            LanguageOverride("pt-PT", fallback_to="pt-BR"),
        )

        order = resolve_override_order(overrides)

        assert sorted(order) == ["en-GB", "pt-PT"]

    def test_ignores_non_fetched_and_fallbackless(self) -> None:
        overrides = _overrides(
            LanguageOverride("fr-FR", fetch=False),
            LanguageOverride("it-IT", fallback_to="fr-FR", fetch=False),
            LanguageOverride("es-MX"),
        )

        assert resolve_override_order(overrides) == []

    def test_cycle(self) -> None:
        overrides = _overrides(
            LanguageOverride("en-GB", fallback_to="en-AU"),
            LanguageOverride("en-AU", fallback_to="en-GB"),
        )

        with pytest.raises(CycleError, match="Circular dependency") as exc_info:
            resolve_override_order(overrides)

        assert exc_info.value.languages == ("en-AU", "en-GB")

    def test_cycle_reports_only_cycle_members(self) -> None:
        overrides = _overrides(
            LanguageOverride("en-GB", fallback_to="en-US"),
            LanguageOverride("a", fallback_to="b"),
            LanguageOverride("b", fallback_to="c"),
            LanguageOverride("c", fallback_to="a"),
        )

        with pytest.raises(CycleError) as exc_info:
            resolve_override_order(overrides)

        assert exc_info.value.languages == ("a", "b", "c")

    def test_self_fallback_is_cycle(self) -> None:
        overrides = _overrides(LanguageOverride("en-GB", fallback_to="en-GB"))

        with pytest.raises(CycleError) as exc_info:
            resolve_override_order(overrides)

        assert exc_info.value.languages == ("en-GB",)

    def test_fallbackless_override_used_as_fallback(self) -> None:
        overrides = _overrides(
            LanguageOverride("es-MX"),
            LanguageOverride("es-AR", fallback_to="es-MX"),
        )

        assert resolve_override_order(overrides) == ["es-AR"]
