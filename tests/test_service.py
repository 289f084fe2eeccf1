"""Tests for I18NService.

Tests the resource-set chain fallback, locale handling, formatting, and the
error policy: missing keys degrade to the key, missing resource sets are
reported only when every name in the chain failed.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

import pytest

from i18nengine import (
    FallbackInfo,
    I18NConfig,
    I18NService,
    Locale,
    MappingResourceSetProvider,
    PathResourceSetProvider,
    ResourceSetNotFoundError,
)
from tests.catalogs import BAR, FOO, I18N, AmbientLocale


class TestLocalization:
    """Test text lookup across locales and resource sets."""

    def test_default_set_and_ambient_locale(self, i18n: I18NService) -> None:
        """No name and no locale use the default set and ambient locale."""
        assert i18n.get_string("key1") == "[] value1"

    def test_regional_catalog(self, i18n: I18NService) -> None:
        """en_US text comes from the en_US catalog."""
        assert i18n.get_string("key2", Locale("en", "US")) == "[en_US] value2"

    def test_language_catalog_for_regional_request(self, i18n: I18NService) -> None:
        """ko_KR is served by the ko catalog."""
        assert i18n.get_string("key3", Locale("ko", "KR"), bundle_name=BAR) == "[ko] value3"

    def test_unsupported_locale_falls_back_to_root(self, i18n: I18NService) -> None:
        """A locale without catalogs gets root text."""
        assert i18n.get_string("key1", Locale("ja"), bundle_name=BAR) == "[] value1"

    @pytest.mark.parametrize("locale", [Locale("fr"), Locale("fr", "FR")])
    def test_language_and_region_request_same_text(self, i18n: I18NService, locale: Locale) -> None:
        """fr and fr_FR both resolve to the fr catalog."""
        assert i18n.get_string("key3", locale, bundle_name=FOO) == "[fr] value3"

    def test_explicit_default_name(self, i18n: I18NService) -> None:
        """Naming the default set explicitly behaves like omitting it."""
        assert i18n.get_string("key1", bundle_name=I18N) == "[] value1"

    def test_no_fallback_to_ambient_when_root_exists(
        self, i18n: I18NService, ambient: AmbientLocale
    ) -> None:
        """English with ambient French gets root text, Italian gets Italian."""
        ambient.locale = Locale("fr")

        assert i18n.get_string("key1", Locale("en"), bundle_name=I18N) == "[] value1"
        assert i18n.get_string("key1", Locale("it"), bundle_name=I18N) == "[it] value1"

    def test_hebrew_with_german_ambient_gets_root(
        self, i18n: I18NService, ambient: AmbientLocale
    ) -> None:
        """iw_IL with ambient de must not return the German text."""
        ambient.locale = Locale("de")

        assert i18n.get_string("key1", Locale("iw", "IL"), bundle_name=I18N) == "[] value1"

    def test_non_standard_locale(self, i18n: I18NService) -> None:
        """An unknown language still finds keys along the chain."""
        assert i18n.get_string("name", Locale("xx")) == "plexus"

    def test_bundle_name_stripped(self, i18n: I18NService) -> None:
        """Whitespace around a requested name is ignored."""
        assert i18n.get_string("key3", Locale("fr"), bundle_name=f"  {FOO} ") == "[fr] value3"


class TestChainFallback:
    """Test walking the configured names on a key miss."""

    def test_key_found_in_later_set(self, i18n: I18NService) -> None:
        """A key missing from BarBundle is served by FooBundle for the same locale."""
        assert i18n.get_string("key4", Locale("en"), bundle_name=BAR) == "[en] value4"

    def test_missing_key_returns_key(self, i18n: I18NService, caplog: pytest.LogCaptureFixture) -> None:
        """A key absent everywhere comes back unchanged and is logged at DEBUG."""
        with caplog.at_level(logging.DEBUG, logger="i18nengine.localization.service"):
            assert i18n.get_string("no.such.key") == "no.such.key"

        assert "Noticed missing resource" in caplog.text

    def test_on_fallback_reports_serving_set(
        self, catalog_provider: MappingResourceSetProvider, ambient: AmbientLocale
    ) -> None:
        """The callback receives the requested and serving names."""
        events: list[FallbackInfo] = []
        i18n = I18NService(
            catalog_provider,
            bundle_names=(BAR, FOO),
            default_bundle_name=I18N,
            default_locale=ambient,
            on_fallback=events.append,
        )

        i18n.get_string("key4", Locale("en"), bundle_name=BAR)
        i18n.get_string("key1", Locale("en"), bundle_name=BAR)

        assert events == [
            FallbackInfo(
                requested_bundle=BAR, resolved_bundle=FOO, locale=Locale("en"), key="key4"
            )
        ]

    def test_unresolvable_primary_with_resolvable_chain(self, i18n: I18NService) -> None:
        """A missing requested set is not an error when another name resolves."""
        assert i18n.get_string("key3", Locale("fr"), bundle_name="org.example.Missing") == (
            "[fr] value3"
        )

    def test_unresolvable_primary_and_missing_key_returns_key(self, i18n: I18NService) -> None:
        """Other sets resolving but lacking the key still degrade to the key."""
        assert i18n.get_string("nope", bundle_name="org.example.Missing") == "nope"

    def test_every_name_unresolvable_raises(self, ambient: AmbientLocale) -> None:
        """ResourceSetNotFoundError surfaces only when the whole chain failed."""
        i18n = I18NService(
            MappingResourceSetProvider({}),
            bundle_names=("a", "b"),
            default_bundle_name="main",
            default_locale=ambient,
        )

        with pytest.raises(ResourceSetNotFoundError) as exc_info:
            i18n.get_string("key1", Locale("fr"))

        assert exc_info.value.bundle_name == "main"
        assert exc_info.value.locale == Locale("fr")

    def test_no_name_at_all_raises_value_error(self, catalog_provider: MappingResourceSetProvider) -> None:
        """Without a requested or default name there is nothing to search."""
        i18n = I18NService(catalog_provider, bundle_names=(BAR,))

        with pytest.raises(ValueError, match="default_bundle_name"):
            i18n.get_string("key1", Locale("en"))

    def test_has_key(self, i18n: I18NService) -> None:
        """has_key sees keys anywhere in the chain."""
        assert i18n.has_key("key4", Locale("en"))
        assert not i18n.has_key("no.such.key", Locale("en"))


class TestLocaleArguments:
    """Test the accepted locale forms."""

    def test_header_string(self, i18n: I18NService) -> None:
        """A string locale is read as an Accept-Language value."""
        assert i18n.get_string("key3", "fr-FR, en;q=0.5", bundle_name=FOO) == "[fr] value3"

    def test_unparseable_string_uses_ambient(self, i18n: I18NService, ambient: AmbientLocale) -> None:
        """A string that yields no locale falls back to the ambient default."""
        ambient.locale = Locale("it")

        assert i18n.get_string("key1", "*;q=0.5") == "[it] value1"

    def test_ambient_re_read_per_call(self, i18n: I18NService, ambient: AmbientLocale) -> None:
        """Changing the ambient locale affects the next call."""
        ambient.locale = Locale("de")
        assert i18n.get_string("key1") == "[de] value1"

        ambient.locale = Locale("it")
        assert i18n.get_string("key1") == "[it] value1"

    def test_invalid_locale_type(self, i18n: I18NService) -> None:
        """Other locale types raise TypeError."""
        with pytest.raises(TypeError, match="locale must be"):
            i18n.get_string("key1", 42)  # type: ignore[arg-type]

    def test_get_locale(self, i18n: I18NService, ambient: AmbientLocale) -> None:
        """get_locale returns the top header candidate or the ambient locale."""
        assert i18n.get_locale("en, es;q=0.8, zh-TW;q=0.1") == Locale("en")
        assert i18n.get_locale("zh-TW;q=0.1, es;q=0.8") == Locale("es")
        assert i18n.get_locale(None) == ambient.locale
        assert i18n.get_locale("") == ambient.locale

    def test_get_locale_uses_highest_weight_of_repeated_locale(self, i18n: I18NService) -> None:
        """A locale repeated with a heavier weight is preferred."""
        assert i18n.get_locale("en;q=0.1, fr;q=0.5, en") == Locale("en")


class TestFormatting:
    """Test formatted lookups."""

    def test_single_argument(self, i18n: I18NService) -> None:
        """One positional argument."""
        assert i18n.format("thanks.message", "jason", bundle_name=I18N) == "Thanks jason!"

    def test_two_arguments(self, i18n: I18NService) -> None:
        """Two positional arguments."""
        assert i18n.format("thanks.message1", "jason", "van zyl") == "Thanks jason van zyl!"

    def test_sequence_form_matches_variadic(self, i18n: I18NService) -> None:
        """format_args with a sequence gives the same text as format."""
        assert i18n.format_args("thanks.message2", ["jason", "van zyl"], bundle_name=I18N) == (
            i18n.format("thanks.message2", "jason", "van zyl", bundle_name=I18N)
        )

    def test_no_arguments_keeps_placeholders(self, i18n: I18NService) -> None:
        """Placeholders without arguments stay in the text."""
        assert i18n.format_args("thanks.message", None) == "Thanks {0}!"

    def test_number_uses_target_locale(self, i18n: I18NService) -> None:
        """Numbers follow the conventions of the requested locale."""
        assert i18n.format("items.count", 1234567, locale=Locale("de", "DE")) == "1.234.567 items"
        assert i18n.format("items.count", 1234567, locale=Locale("en", "US")) == "1,234,567 items"

    def test_missing_key_formats_key(self, i18n: I18NService) -> None:
        """A missing key is returned as the text to format."""
        assert i18n.format("no.such.key", "x") == "no.such.key"


class TestBundles:
    """Test resource-set access and the cache."""

    def test_get_bundle(self, i18n: I18NService) -> None:
        """get_bundle returns the resolved set with its resolved locale."""
        rs = i18n.get_bundle(FOO, Locale("fr", "FR"))

        assert rs.name == FOO
        assert rs.locale == Locale("fr")
        assert i18n.get_bundle(FOO, Locale("fr", "FR")) is rs

    def test_get_bundle_defaults(self, i18n: I18NService) -> None:
        """No arguments means the default set for the ambient locale."""
        assert i18n.get_bundle().name == I18N

    def test_get_bundle_for_header(self, i18n: I18NService) -> None:
        """The header's preferred locale selects the set."""
        rs = i18n.get_bundle_for_header(BAR, "ko-KR, en;q=0.3")

        assert rs.locale == Locale("ko")

    def test_get_bundle_not_found(self, i18n: I18NService) -> None:
        """A single unresolvable set raises."""
        with pytest.raises(ResourceSetNotFoundError):
            i18n.get_bundle("org.example.Missing", Locale("fr"))

    def test_clear_cache(self, i18n: I18NService) -> None:
        """clear_cache forces re-resolution."""
        first = i18n.get_bundle(FOO, Locale("fr"))

        i18n.clear_cache()

        assert len(i18n.cache) == 0
        assert i18n.get_bundle(FOO, Locale("fr")) is not first

    def test_dev_mode_reloads_catalogs(self, tmp_path: Path, ambient: AmbientLocale) -> None:
        """In development mode catalog edits show up on the next lookup."""
        catalog = tmp_path / "Messages.json"
        catalog.write_text('{"greeting": "Hello"}', encoding="utf-8")
        i18n = I18NService(
            PathResourceSetProvider(tmp_path),
            config=I18NConfig(default_bundle_name="Messages", dev_mode=True),
            default_locale=ambient,
        )
        assert i18n.get_string("greeting") == "Hello"

        catalog.write_text('{"greeting": "Hi"}', encoding="utf-8")

        assert i18n.get_string("greeting") == "Hi"

    def test_without_dev_mode_catalogs_stay_cached(self, tmp_path: Path, ambient: AmbientLocale) -> None:
        """Outside development mode the first resolution sticks."""
        catalog = tmp_path / "Messages.json"
        catalog.write_text('{"greeting": "Hello"}', encoding="utf-8")
        i18n = I18NService(
            PathResourceSetProvider(tmp_path),
            default_bundle_name="Messages",
            default_locale=ambient,
        )
        assert i18n.get_string("greeting") == "Hello"

        catalog.write_text('{"greeting": "Hi"}', encoding="utf-8")

        assert i18n.get_string("greeting") == "Hello"


class TestConfigurationAccessors:
    """Test construction and accessors."""

    def test_accessors(self, i18n: I18NService, ambient: AmbientLocale) -> None:
        """Names, default name, dev mode and ambient subtags are exposed."""
        ambient.locale = Locale("pt", "BR")

        assert i18n.bundle_names == (I18N, BAR, FOO)
        assert i18n.default_bundle_name == I18N
        assert i18n.dev_mode is False
        assert i18n.default_language == "pt"
        assert i18n.default_region == "BR"
        assert i18n.config == I18NConfig((BAR, FOO), I18N)

    def test_config_object(self, catalog_provider: MappingResourceSetProvider) -> None:
        """A config object may replace the individual settings."""
        config = I18NConfig(bundle_names=(FOO,), default_bundle_name=I18N)
        i18n = I18NService(catalog_provider, config=config)

        assert i18n.config is config
        assert i18n.bundle_names == (I18N, FOO)

    def test_config_and_settings_conflict(self, catalog_provider: MappingResourceSetProvider) -> None:
        """Mixing a config with individual settings is rejected."""
        with pytest.raises(ValueError, match="not both"):
            I18NService(catalog_provider, config=I18NConfig(), dev_mode=True)

    def test_dev_mode_logged(
        self, catalog_provider: MappingResourceSetProvider, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Enabling development mode is logged at INFO."""
        with caplog.at_level(logging.INFO, logger="i18nengine.localization.service"):
            i18n = I18NService(catalog_provider, default_bundle_name=I18N, dev_mode=True)

        assert i18n.dev_mode
        assert i18n.cache.dev_mode
        assert "Development mode enabled" in caplog.text

    def test_repr(self, i18n: I18NService) -> None:
        """repr shows the chain and cache state."""
        assert repr(i18n).startswith(f"I18NService(bundle_names=('{I18N}', '{BAR}', '{FOO}')")


class TestServiceConcurrency:
    """Test concurrent lookups."""

    def test_concurrent_lookups(self, i18n: I18NService) -> None:
        """Parallel lookups across locales and names all get the right text."""
        cases = [
            ("key1", Locale("de"), None, "[de] value1"),
            ("key2", Locale("en", "US"), None, "[en_US] value2"),
            ("key3", Locale("ko", "KR"), BAR, "[ko] value3"),
            ("key4", Locale("en"), BAR, "[en] value4"),
            ("key3", Locale("fr", "FR"), FOO, "[fr] value3"),
            ("no.such.key", Locale("it"), None, "no.such.key"),
        ]

        def lookup(index: int) -> bool:
            key, locale, name, expected = cases[index % len(cases)]
            return i18n.get_string(key, locale, bundle_name=name) == expected

        with ThreadPoolExecutor(max_workers=10) as executor:
            futures = [executor.submit(lookup, i) for i in range(300)]
            results = [future.result() for future in as_completed(futures)]

        assert all(results)
