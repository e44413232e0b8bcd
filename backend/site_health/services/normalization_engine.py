"""Input Normalization Engine.

Maps the loosely-shaped measurement records the collectors have produced
over time into one canonical ``BasicInputs``.  Tolerated shapes:

- device split:   ``{"mobile": {...}, "desktop": {...}, "seo": {...}, "url": ...}``
- CrUX style:     ``{"field": {"mobile": {...}}, "lab": {"mobile": {...}}}``
- legacy flat:    ``{"lcpMobile": ..., "clsDesktop": ..., "hasTitle": ...}``

Rules
-----
- NO API calls
- NO DB writes
- NO scoring or weighting
- Never raises; unknown stays unknown (no invented zeros)
- Mobile first: mobile data always beats desktop data
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Mapping, Optional

from ..schemas.basic_inputs_schema import BasicInputs, MobileReady, SeoKey

logger = logging.getLogger(__name__)

Lookup = Callable[[], Any]

_EMPTY: Mapping[str, Any] = {}


# ===================================================================== #
#  Lookup helpers                                                         #
# ===================================================================== #

def _as_mapping(value: Any) -> Mapping[str, Any]:
    """Return *value* if it is a mapping, else an empty mapping."""
    return value if isinstance(value, Mapping) else _EMPTY


def _dig(record: Any, *path: str) -> Any:
    """Follow *path* through nested mappings; None on any miss."""
    current = record
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def _usable_number(value: Any) -> Optional[float]:
    """Accept finite, non-negative ints/floats; bools and the rest are missing."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return float(value)


def _usable_bool(value: Any) -> Optional[bool]:
    return value if isinstance(value, bool) else None


def _first(
    lookups: list[Lookup],
    accept: Callable[[Any], Any],
) -> Any:
    """Return the first lookup result that *accept* turns into a non-None value."""
    for lookup in lookups:
        value = accept(lookup())
        if value is not None:
            return value
    return None


def _first_number(*lookups: Lookup) -> Optional[float]:
    return _first(list(lookups), _usable_number)


def _first_bool(*lookups: Lookup) -> Optional[bool]:
    return _first(list(lookups), _usable_bool)


def _bytes_to_kb(value: Any) -> Optional[float]:
    number = _usable_number(value)
    if number is None:
        return None
    return float(math.floor(number / 1024 + 0.5))


# ===================================================================== #
#  Primary device record                                                  #
# ===================================================================== #

_PRIMARY_SOURCES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("mobile", ("mobile",)),
    ("field.mobile", ("field", "mobile")),
    ("lab.mobile", ("lab", "mobile")),
    ("desktop", ("desktop",)),
)


def _select_primary(raw: Mapping[str, Any]) -> tuple[str, Mapping[str, Any]]:
    """Pick the device record metrics are read from (mobile first)."""
    for name, path in _PRIMARY_SOURCES:
        candidate = _dig(raw, *path)
        if candidate is not None:
            return name, _as_mapping(candidate)
    return "none", _EMPTY


# ===================================================================== #
#  Field resolution                                                       #
# ===================================================================== #

def _resolve_https(raw: Mapping[str, Any]) -> bool:
    """HTTPS from the page URL, OR'd with an explicit legacy flag; True without a URL."""
    legacy_flag = _first_bool(
        lambda: _dig(raw, "seo", "hasHttps"),
        lambda: raw.get("hasHttps"),
    )
    url = raw.get("url")
    if isinstance(url, str) and url.strip():
        # TODO: confirm with product whether an http:// URL should override a true legacy flag
        return url.strip().lower().startswith("https://") or legacy_flag is True
    return True


def to_basic_inputs(raw: Any) -> BasicInputs:
    """Normalize any measurement record into ``BasicInputs``.

    Parameters
    ----------
    raw : Any
        A measurement record in one of the tolerated shapes.  Anything that
        is not a mapping is treated as an empty record.

    Returns
    -------
    BasicInputs
        Metrics resolved in priority order (primary record canonical name,
        aliases, legacy mobile field, legacy desktop field).  Unobserved
        mobile/SEO checks are True; unknown metrics stay None.
    """
    raw = _as_mapping(raw)
    source, device = _select_primary(raw)
    perf = _as_mapping(device.get("metrics")) or device

    lcp_ms = _first_number(
        lambda: perf.get("LCP_ms"),
        lambda: perf.get("lcp_ms"),
        lambda: perf.get("lcp"),
        lambda: raw.get("lcpMobile"),
        lambda: raw.get("lcpDesktop"),
    )
    inp_ms = _first_number(
        lambda: perf.get("INP_ms"),
        lambda: perf.get("inp_ms"),
        lambda: perf.get("inp"),
        lambda: raw.get("inpMobile"),
        lambda: raw.get("inpDesktop"),
    )
    cls = _first_number(
        lambda: perf.get("CLS"),
        lambda: perf.get("cls"),
        lambda: raw.get("clsMobile"),
        lambda: raw.get("clsDesktop"),
    )
    ttfb_ms = _first_number(
        lambda: perf.get("TTFB_ms"),
        lambda: perf.get("ttfb_ms"),
        lambda: perf.get("ttfb"),
        lambda: raw.get("ttfbMobile"),
        lambda: raw.get("ttfbDesktop"),
    )
    page_weight_kb = _first_number(
        lambda: perf.get("pageWeight_kb"),
        lambda: perf.get("totalByteWeight_kb"),
        lambda: _bytes_to_kb(perf.get("totalByteWeight")),
        lambda: perf.get("pageSize"),
        lambda: raw.get("pageSizeMobile"),
        lambda: raw.get("pageSizeDesktop"),
    )
    requests = _first_number(
        lambda: perf.get("requests"),
        lambda: perf.get("requestCount"),
    )

    def audit(flag: str) -> bool:
        value = _first_bool(
            lambda: _dig(raw, "audits", flag),
            lambda: _dig(device, "audits", flag),
        )
        return True if value is None else value

    def seo_flag(flag: str, legacy: str) -> bool:
        value = _first_bool(
            lambda: _dig(raw, "seo", flag),
            lambda: _dig(raw, "seo", legacy),
            lambda: raw.get(legacy),
        )
        return True if value is None else value

    # TODO: confirm with product whether a missing title should really mark the page not indexable
    indexable = _first_bool(
        lambda: _dig(raw, "seo", "indexable"),
        lambda: raw.get("hasTitle"),
    )
    indexable = True if indexable is None else indexable

    blocking = _dig(raw, "thirdParties", "blocking")

    inputs = BasicInputs(
        lcp_ms=lcp_ms,
        inp_ms=inp_ms,
        cls=cls,
        ttfb_ms=ttfb_ms,
        page_weight_kb=page_weight_kb,
        requests=requests,
        mobile_ready=MobileReady(
            viewport_meta=audit("viewportMeta"),
            tap_targets_ok=audit("tapTargetsOk"),
            cta_above_fold=audit("ctaAboveFold"),
        ),
        seo_key=SeoKey(
            indexable=indexable,
            https=_resolve_https(raw),
            title_ok=seo_flag("titleOk", legacy="hasTitle"),
            meta_ok=seo_flag("metaOk", legacy="hasDescription"),
            h1_unique=seo_flag("h1Unique", legacy="hasH1"),
        ),
        has_blocking_third_party=bool(blocking),
    )

    logger.debug(
        "[NORMALIZE] primary=%s lcp=%s inp=%s cls=%s ttfb=%s weight_kb=%s requests=%s",
        source,
        lcp_ms,
        inp_ms,
        cls,
        ttfb_ms,
        page_weight_kb,
        requests,
    )
    return inputs
