"""Read-only Baseline support lookups over web-features data."""

from __future__ import annotations

from collections.abc import Mapping
import json
import os
from pathlib import Path
from types import MappingProxyType
from typing import Any, cast

from .constants import COMPAT_KEY_PREFIXES, DATA_PATH_ENV, DATA_TIMEOUT_SECONDS
from .exceptions import SupportDataError
from .http import fetch_support_payload
from .model import BaselineTier, SupportEntry
from .util.html import debug_log


def _coerce_tier(value: object) -> BaselineTier:
    if value == "high" or value == "low":
        return cast(BaselineTier, value)
    if value is False:
        return False
    return None


def _is_compat_key(key: str) -> bool:
    return key.startswith(COMPAT_KEY_PREFIXES)


class SupportDatabase:
    """Lookup collaborator mapping feature ids and BCD keys to Baseline tiers.

    ``features`` maps web-features ids to their feature records and
    ``compat_statuses`` maps BCD compat keys (``css.properties.gap``) to status
    records. Both are frozen on construction.
    """

    def __init__(
        self,
        features: Mapping[str, Any],
        compat_statuses: Mapping[str, Any] | None = None,
    ) -> None:
        self._features: Mapping[str, Any] = MappingProxyType(dict(features))
        self._compat: Mapping[str, Any] = MappingProxyType(dict(compat_statuses or {}))

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> SupportDatabase:
        """Build a database from a web-features ``data.json`` payload."""
        features = payload.get("features")
        if not isinstance(features, Mapping):
            raise SupportDataError("payload", cause="missing 'features' mapping")

        compat: dict[str, Any] = {}
        for record in features.values():
            if not isinstance(record, Mapping):
                continue
            status = record.get("status")
            if not isinstance(status, Mapping):
                continue
            by_compat_key = status.get("by_compat_key")
            if not isinstance(by_compat_key, Mapping):
                continue
            for compat_key, compat_status in by_compat_key.items():
                if isinstance(compat_key, str) and compat_key not in compat:
                    compat[compat_key] = compat_status

        return cls(features, compat)

    @property
    def feature_count(self) -> int:
        return len(self._features)

    @property
    def compat_key_count(self) -> int:
        return len(self._compat)

    def lookup(self, key: str) -> SupportEntry | None:
        """Resolve a feature id or BCD key; None when the key is unknown."""
        if _is_compat_key(key):
            return self.lookup_compat_key(key)
        return self.lookup_feature(key)

    def lookup_feature(self, feature_id: str) -> SupportEntry | None:
        record = self._features.get(feature_id)
        if isinstance(record, Mapping) and record.get("kind") == "moved":
            target = record.get("redirect_target")
            record = self._features.get(target) if isinstance(target, str) else None
            if isinstance(record, Mapping) and record.get("kind") == "moved":
                record = None
        if not isinstance(record, Mapping) or record.get("kind", "feature") != "feature":
            return None

        status = record.get("status")
        has_status = isinstance(status, Mapping)
        baseline = _coerce_tier(status.get("baseline")) if isinstance(status, Mapping) else None

        name = record.get("name")
        description = record.get("description_html") or record.get("description")
        return SupportEntry(
            key=feature_id,
            name=name if isinstance(name, str) and name else None,
            description=description if isinstance(description, str) else None,
            has_status=has_status,
            baseline=baseline,
        )

    def lookup_compat_key(self, compat_key: str) -> SupportEntry | None:
        status = self._compat.get(compat_key)
        if status is None:
            return None
        has_status = isinstance(status, Mapping)
        return SupportEntry(
            key=compat_key,
            name=None,
            description=None,
            has_status=has_status,
            baseline=_coerce_tier(status.get("baseline")) if isinstance(status, Mapping) else None,
        )


def _read_payload(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SupportDataError(str(path), cause=exc.__class__.__name__) from exc
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SupportDataError(str(path), cause="invalid JSON") from exc
    if not isinstance(payload, dict):
        raise SupportDataError(str(path), cause="unexpected JSON payload")
    return payload


def load_support_database(
    path: str | os.PathLike[str] | None = None,
    *,
    timeout: float = DATA_TIMEOUT_SECONDS,
) -> SupportDatabase:
    """Load web-features data from a local file, the env override, or the network.

    Meant to be called once per process; the result is immutable and can be
    shared by concurrent scans.
    """
    source = path or os.environ.get(DATA_PATH_ENV, "").strip() or None
    if source is not None:
        payload = _read_payload(Path(source))
        origin = str(source)
    else:
        payload = fetch_support_payload(timeout=timeout)
        origin = "web-features"

    database = SupportDatabase.from_payload(payload)
    debug_log(
        f"support data from {origin}: {database.feature_count} features, "
        f"{database.compat_key_count} compat keys"
    )
    return database
