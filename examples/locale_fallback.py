"""I18NService Example - Locale Fallback and Resource-Set Chains.

Demonstrates how lookups degrade when translations are incomplete.

Scenarios covered:
1. Locale fallback inside one resource set
2. Key fallback across a chain of resource sets
3. Accept-Language values as locales
4. Catalogs on disk with development-mode reloading

Python 3.13+.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from i18nengine import (
    FallbackInfo,
    I18NConfig,
    I18NService,
    Locale,
    MappingResourceSetProvider,
    PathResourceSetProvider,
)

CATALOGS = {
    ("shop.Messages", ""): {
        "welcome": "Welcome, {0}!",
        "cart": "Cart",
        "total": "Total: {0,number,currency}",
    },
    ("shop.Messages", "lv"): {"welcome": "Sveiki, {0}!", "cart": "Grozs"},
    ("shop.Common", ""): {"checkout": "Checkout"},
    ("shop.Common", "lv"): {"checkout": "Kase"},
}


def example_1_locale_fallback() -> None:
    """Example 1: lv_LV -> lv -> root inside one resource set."""
    print("=" * 60)
    print("Example 1: Locale fallback")
    print("=" * 60)

    i18n = I18NService(
        MappingResourceSetProvider(CATALOGS),
        default_bundle_name="shop.Messages",
        default_locale=lambda: Locale("en", "US"),
    )
    lv = Locale("lv", "LV")

    print(i18n.format("welcome", "Anna", locale=lv))
    print(i18n.get_string("cart", lv))
    # Not translated to Latvian: root text, formatted for lv_LV
    print(i18n.format("total", 1234.5, locale=lv))
    # Not present anywhere: the key comes back
    print(i18n.get_string("no.such.key", lv))


def example_2_resource_set_chain() -> None:
    """Example 2: keys missing from one set are found in the next."""
    print("\n" + "=" * 60)
    print("Example 2: Resource-set chain")
    print("=" * 60)

    def report(info: FallbackInfo) -> None:
        print(f"  ({info.key!r} served by {info.resolved_bundle}, not {info.requested_bundle})")

    i18n = I18NService(
        MappingResourceSetProvider(CATALOGS),
        bundle_names=("shop.Common",),
        default_bundle_name="shop.Messages",
        on_fallback=report,
    )

    print(i18n.get_string("checkout", Locale("lv")))
    print(i18n.get_string("checkout", Locale("de")))


def example_3_accept_language() -> None:
    """Example 3: pass a raw Accept-Language value as the locale."""
    print("\n" + "=" * 60)
    print("Example 3: Accept-Language")
    print("=" * 60)

    i18n = I18NService(
        MappingResourceSetProvider(CATALOGS),
        default_bundle_name="shop.Messages",
    )
    header = "lv-LV, en;q=0.8, *;q=0.1"

    print(f"Preferred locale: {i18n.get_locale(header)}")
    print(i18n.get_string("cart", header))


def example_4_disk_catalogs(root_dir: Path) -> None:
    """Example 4: JSON catalogs on disk, reloaded in development mode."""
    print("\n" + "=" * 60)
    print("Example 4: Catalogs on disk")
    print("=" * 60)

    package_dir = root_dir / "shop"
    package_dir.mkdir()
    (package_dir / "Messages.json").write_text('{"cart": "Cart"}', encoding="utf-8")
    (package_dir / "Messages_lv.json").write_text('{"cart": "Grozs"}', encoding="utf-8")

    i18n = I18NService(
        PathResourceSetProvider(root_dir),
        config=I18NConfig(default_bundle_name="shop.Messages", dev_mode=True),
    )
    print(i18n.get_string("cart", Locale("lv")))

    (package_dir / "Messages_lv.json").write_text('{"cart": "Iepirkumu grozs"}', encoding="utf-8")
    print(i18n.get_string("cart", Locale("lv")))


# Main execution
if __name__ == "__main__":
    example_1_locale_fallback()
    example_2_resource_set_chain()
    example_3_accept_language()

    with tempfile.TemporaryDirectory() as tmp_dir_main:
        example_4_disk_catalogs(Path(tmp_dir_main))

    print("\n" + "=" * 60)
    print("[SUCCESS] All examples complete!")
    print("=" * 60)
