"""Per-member emission overrides and the built-in providers."""

from .providers import install_builtin_overrides, registry_listing, tag_listing
from .registry import OverrideGenerator, OverrideKey, OverrideRegistry

__all__ = [
    "OverrideGenerator",
    "OverrideKey",
    "OverrideRegistry",
    "install_builtin_overrides",
    "registry_listing",
    "tag_listing",
]
