from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MobileReady(BaseModel):
    """Mobile-UX checks.  ``None`` means the check was not observed."""

    model_config = ConfigDict(populate_by_name=True)

    viewport_meta: Optional[bool] = Field(
        default=None,
        alias="viewportMeta",
        description="Page declares a mobile viewport meta tag",
    )
    tap_targets_ok: Optional[bool] = Field(
        default=None,
        alias="tapTargetsOk",
        description="Tap targets are large enough and well spaced",
    )
    cta_above_fold: Optional[bool] = Field(
        default=None,
        alias="ctaAboveFold",
        description="Booking call-to-action is visible without scrolling",
    )


class SeoKey(BaseModel):
    """Key SEO checks.  ``None`` means the check was not observed."""

    model_config = ConfigDict(populate_by_name=True)

    indexable: Optional[bool] = Field(
        default=None,
        description="Search engines are allowed to index the page",
    )
    https: Optional[bool] = Field(
        default=None,
        description="Page is served over HTTPS",
    )
    title_ok: Optional[bool] = Field(
        default=None,
        alias="titleOk",
        description="Page has an acceptable <title>",
    )
    meta_ok: Optional[bool] = Field(
        default=None,
        alias="metaOk",
        description="Page has an acceptable meta description",
    )
    h1_unique: Optional[bool] = Field(
        default=None,
        alias="h1Unique",
        description="Page has exactly one <h1>",
    )


class BasicInputs(BaseModel):
    """Canonical input of the Basic Scoring Engine.

    Produced by the Input Normalization Engine from whatever shape the
    measurement collaborator delivered.  Every field is optional: absence
    means *unknown*, never *zero*.  Numeric fields are finite and
    non-negative when present.
    """

    model_config = ConfigDict(populate_by_name=True)

    lcp_ms: Optional[float] = Field(
        default=None,
        ge=0.0,
        allow_inf_nan=False,
        alias="LCP_ms",
        description="Largest Contentful Paint in milliseconds",
    )
    inp_ms: Optional[float] = Field(
        default=None,
        ge=0.0,
        allow_inf_nan=False,
        alias="INP_ms",
        description="Interaction to Next Paint in milliseconds",
    )
    cls: Optional[float] = Field(
        default=None,
        ge=0.0,
        allow_inf_nan=False,
        alias="CLS",
        description="Cumulative Layout Shift (unitless)",
    )
    ttfb_ms: Optional[float] = Field(
        default=None,
        ge=0.0,
        allow_inf_nan=False,
        alias="TTFB_ms",
        description="Time to First Byte in milliseconds",
    )
    page_weight_kb: Optional[float] = Field(
        default=None,
        ge=0.0,
        allow_inf_nan=False,
        alias="pageWeight_kb",
        description="Total transferred page weight in kilobytes",
    )
    requests: Optional[float] = Field(
        default=None,
        ge=0.0,
        allow_inf_nan=False,
        description="Number of network requests issued by the page",
    )
    mobile_ready: MobileReady = Field(
        default_factory=MobileReady,
        alias="mobileReady",
        description="Mobile-UX checks; unobserved checks are assumed to pass",
    )
    seo_key: SeoKey = Field(
        default_factory=SeoKey,
        alias="seoKey",
        description="Key SEO checks; unobserved checks are assumed to pass",
    )
    has_blocking_third_party: Optional[bool] = Field(
        default=None,
        alias="hasBlockingThirdParty",
        description="A third-party script blocks rendering",
    )

    def has_measurements(self) -> bool:
        """True if at least one numeric metric is known."""
        return any(
            value is not None
            for value in (
                self.lcp_ms,
                self.inp_ms,
                self.cls,
                self.ttfb_ms,
                self.page_weight_kb,
                self.requests,
            )
        )
