"""Label and annotation merging for operator-managed resources."""

from __future__ import annotations

from typing import Mapping, Optional


def merge_maps(
    base: Optional[Mapping[str, str]], extra: Optional[Mapping[str, str]]
) -> Optional[dict[str, str]]:
    """Merge two string maps, with ``extra`` winning on shared keys.

    Returns None when both inputs are empty. The inputs are never modified.
    """
    if not base and not extra:
        return None
    merged = dict(base or {})
    merged.update(extra or {})
    return merged


def merge_labels(
    base: Optional[Mapping[str, str]], extra: Optional[Mapping[str, str]]
) -> dict[str, str]:
    """Merge labels, with ``extra`` winning; always returns a dict, even when empty."""
    return merge_maps(base, extra) or {}


def merge_annotations(
    base: Optional[Mapping[str, str]], extra: Optional[Mapping[str, str]]
) -> Optional[dict[str, str]]:
    """Merge annotations, with ``extra`` winning; None when both inputs are empty."""
    return merge_maps(base, extra)