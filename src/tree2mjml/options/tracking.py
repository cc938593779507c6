#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2mjml/options/tracking.py
"""Click and open tracking configuration."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping

from tree2mjml.constants import UTM_PARAM_KEYS
from tree2mjml.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class TrackingSettings(CloneFrozenMixin):
    """Tracking configuration for links in a compiled email.

    UTM parameters are appended to http(s) links at compile time. When
    ``enable_tracking`` is set, links in the rendered HTML are additionally
    routed through the redirect ``endpoint`` and an open-tracking pixel is
    appended to the body.

    Parameters
    ----------
    enable_tracking : bool, default False
        Route clicks through the redirect endpoint and add an open pixel
    endpoint : str, default ""
        Base URL of the tracking API (``{endpoint}/visit``, ``{endpoint}/opens``)
    utm_source, utm_medium, utm_campaign, utm_content, utm_term, utm_id : str
        UTM values; empty values are never added
    workspace_id, message_id : str
        Identifiers encoded into redirect and pixel URLs

    Examples
    --------
    >>> settings = TrackingSettings(utm_source="newsletter")
    >>> settings.utm_params()
    [('utm_source', 'newsletter')]

    """

    enable_tracking: bool = field(
        default=False,
        metadata={"help": "Route link clicks through the tracking endpoint and add an open pixel"},
    )
    endpoint: str = field(default="", metadata={"help": "Base URL of the tracking API"})
    utm_source: str = field(default="", metadata={"help": "Value for the utm_source parameter"})
    utm_medium: str = field(default="", metadata={"help": "Value for the utm_medium parameter"})
    utm_campaign: str = field(default="", metadata={"help": "Value for the utm_campaign parameter"})
    utm_content: str = field(default="", metadata={"help": "Value for the utm_content parameter"})
    utm_term: str = field(default="", metadata={"help": "Value for the utm_term parameter"})
    utm_id: str = field(default="", metadata={"help": "Value for the utm_id parameter"})
    workspace_id: str = field(default="", metadata={"help": "Workspace identifier for tracking URLs"})
    message_id: str = field(default="", metadata={"help": "Message identifier for tracking URLs"})

    def __post_init__(self) -> None:
        """Validate field types.

        Raises
        ------
        ValueError
            If a string field holds a non-string value

        """
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "enable_tracking":
                if not isinstance(value, bool):
                    raise ValueError(f"enable_tracking must be a bool, got {type(value).__name__}")
            elif not isinstance(value, str):
                raise ValueError(f"{f.name} must be a string, got {type(value).__name__}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> TrackingSettings:
        """Build settings from snake_case wire keys, ignoring unknown keys and nulls."""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known and value is not None})

    def to_dict(self) -> dict[str, Any]:
        """Return the settings as snake_case wire keys, omitting empty values."""
        result: dict[str, Any] = {"enable_tracking": self.enable_tracking}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name != "enable_tracking" and value:
                result[f.name] = value
        return result

    def utm_params(self) -> list[tuple[str, str]]:
        """Return configured UTM parameters as ``(key, value)`` pairs."""
        return [(key, getattr(self, key)) for key in UTM_PARAM_KEYS if getattr(self, key)]

    def has_utm_params(self) -> bool:
        """Whether any UTM parameter is configured."""
        return bool(self.utm_params())

    def get_tracking_url(self, source_url: str) -> str:
        """Return ``source_url`` with UTM parameters, wrapped in the redirect endpoint when enabled.

        See :func:`tree2mjml.utils.tracking.get_tracking_url`.
        """
        from tree2mjml.utils.tracking import get_tracking_url

        return get_tracking_url(source_url, self)
