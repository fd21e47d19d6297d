"""Project metadata checks run before every build."""

from __future__ import annotations

from typing import Iterable

DEFAULT_FALLBACK_COMPANY_NAME = "Dhruva Interactive Pvt. Ltd."
DEFAULT_BUNDLE_VENDOR_PREFIX = "com.dhruva"
DEFAULT_PLACEHOLDER_COMPANY_NAMES = ("", "DefaultCompany")
DEFAULT_PLACEHOLDER_BUNDLE_IDENTIFIERS = ("", "com.Company.ProductName")
DEFAULT_DISALLOWED_BUNDLE_PREFIXES = ("com.gametantra.",)


def company_name_is_proper(
    company_name: str,
    placeholders: Iterable[str] = DEFAULT_PLACEHOLDER_COMPANY_NAMES,
) -> bool:
    return company_name != "" and company_name not in set(placeholders)


def bundle_identifier_is_proper(
    bundle_identifier: str,
    placeholders: Iterable[str] = DEFAULT_PLACEHOLDER_BUNDLE_IDENTIFIERS,
    disallowed_prefixes: Iterable[str] = DEFAULT_DISALLOWED_BUNDLE_PREFIXES,
) -> bool:
    if bundle_identifier == "" or bundle_identifier in set(placeholders):
        return False
    return not any(bundle_identifier.startswith(prefix) for prefix in disallowed_prefixes if prefix)


def default_bundle_identifier(product_name: str, vendor_prefix: str = DEFAULT_BUNDLE_VENDOR_PREFIX) -> str:
    """Bundle identifiers are lowercase with no spaces: ``<vendor>.<product>``."""
    suffix = product_name.lower().replace(" ", "")
    return f"{vendor_prefix.rstrip('.')}.{suffix}"
