#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2mjml/utils/tracking.py
"""Tracking URL policy and HTML link tracking.

Two layers of link rewriting exist:

1. Compile time: :func:`resolve_tracking_url` appends configured UTM
   parameters to http(s) links on images, buttons and text hyperlinks.
2. After HTML rendering: :func:`track_links` routes every trackable
   ``<a href>`` through the redirect endpoint and appends an open-tracking
   pixel, when tracking is enabled. Links that opted out at compile time are
   passed in by the caller and skipped.

Query strings are re-serialized with keys in alphabetical order whenever a
parameter is added. Template placeholders (``{{``/``{%``) are never touched
because their final value is only known at send time.
"""

from __future__ import annotations

import logging
import re
import time
from typing import TYPE_CHECKING, Collection
from urllib.parse import parse_qsl, quote_plus, urlencode, urlsplit, urlunsplit

from tree2mjml.constants import (
    NON_TRACKABLE_URL_PREFIXES,
    OPEN_PIXEL_PATH,
    REDIRECT_PATH,
    TRACKED_URL_SCHEMES,
    UNTRACKED_URL_PREFIXES,
)
from tree2mjml.utils.templating import has_template_markers

if TYPE_CHECKING:
    from tree2mjml.options.tracking import TrackingSettings

logger = logging.getLogger(__name__)

_LINK_HREF_PATTERN = re.compile(r"""(<a[^>]*\s+href=["'])([^"']+)(["'][^>]*>)""", re.IGNORECASE)
_URL_ATTRIBUTE_PATTERN = re.compile(r"""((?:href|src|action)=["'])([^"']+)(["'])""", re.IGNORECASE)
_BODY_CLOSE_PATTERN = re.compile(r"</body>", re.IGNORECASE)

_URL_ENTITIES: tuple[tuple[str, str], ...] = (
    ("&amp;", "&"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&lt;", "<"),
    ("&gt;", ">"),
)


def _sorted_query(pairs: list[tuple[str, str]]) -> str:
    # Stable sort keeps repeated keys in their original relative order
    return urlencode(sorted(pairs, key=lambda pair: pair[0]), quote_via=quote_plus)


def add_utm_params(url: str, params: list[tuple[str, str]]) -> str:
    """Add ``params`` to the query of ``url`` where the key is not already present.

    Parameters
    ----------
    url : str
        Absolute URL to tag
    params : list of (str, str)
        Candidate query parameters; empty values are ignored

    Returns
    -------
    str
        The URL with a re-serialized, alphabetically ordered query when at
        least one parameter was added, otherwise ``url`` unchanged

    Examples
    --------
    >>> add_utm_params("https://example.com/a#top", [("utm_source", "x")])
    'https://example.com/a?utm_source=x#top'

    """
    parts = urlsplit(url)
    query = parse_qsl(parts.query, keep_blank_values=True)
    present = {key for key, _ in query}
    added = [(key, value) for key, value in params if value and key not in present]
    if not added:
        return url
    return urlunsplit(parts._replace(query=_sorted_query(query + added)))


def resolve_tracking_url(url: str, disable_tracking: bool, tracking: TrackingSettings | None) -> str:
    """Return the final destination of a link after applying UTM tagging.

    The URL is returned unchanged when it is empty, contains a template
    marker, uses a ``mailto:``/``tel:`` or other non-http(s) scheme, cannot be
    parsed, already carries ``utm_source``, or when the link opts out of
    tracking. Otherwise each configured ``utm_source``, ``utm_medium``,
    ``utm_campaign``, ``utm_content`` and ``utm_id`` missing from the query is
    added; ``utm_term`` is left to the HTML pass.

    Parameters
    ----------
    url : str
        Link destination as authored
    disable_tracking : bool
        Per-link opt-out, which always wins over the global configuration
    tracking : TrackingSettings or None
        Global tracking configuration

    Returns
    -------
    str
        The destination to emit

    Examples
    --------
    >>> from tree2mjml.options.tracking import TrackingSettings
    >>> resolve_tracking_url("https://example.com", False, TrackingSettings(utm_source="x"))
    'https://example.com?utm_source=x'
    >>> resolve_tracking_url("mailto:a@b.com", False, TrackingSettings(utm_source="x"))
    'mailto:a@b.com'

    """
    if not url or disable_tracking or tracking is None:
        return url
    if has_template_markers(url) or url.startswith(UNTRACKED_URL_PREFIXES):
        return url

    try:
        parts = urlsplit(url)
        query = parse_qsl(parts.query, keep_blank_values=True)
    except ValueError as e:
        logger.warning(f"Skipping tracking for unparseable URL {url!r}: {e}")
        return url

    if parts.scheme.lower() not in TRACKED_URL_SCHEMES:
        return url
    if any(key == "utm_source" for key, _ in query):
        return url

    # utm_term is only added by the HTML pass
    utm = [(key, value) for key, value in tracking.utm_params() if key != "utm_term"]
    return add_utm_params(url, utm)


def is_non_trackable_url(url: str) -> bool:
    """Whether a link in rendered HTML must be left alone by :func:`track_links`."""
    lowered = url.strip().lower()
    if lowered.startswith(NON_TRACKABLE_URL_PREFIXES):
        return True
    if lowered.startswith("#"):
        return True
    return has_template_markers(url)


def get_tracking_url(url: str, settings: TrackingSettings) -> str:
    """Return ``url`` tagged with UTM parameters and, when enabled, wrapped in the endpoint.

    UTM parameters are only added when the URL has no ``utm_*`` parameter of
    its own (matched case-insensitively). With ``enable_tracking`` set, the
    tagged URL becomes the ``url`` query parameter of ``settings.endpoint``.

    Parameters
    ----------
    url : str
        Link destination
    settings : TrackingSettings
        Tracking configuration

    Returns
    -------
    str
        Tracking URL, or ``url`` unchanged when it is empty, templated,
        a ``mailto:``/``tel:`` link or cannot be parsed

    """
    if not url or has_template_markers(url) or url.startswith(UNTRACKED_URL_PREFIXES):
        return url

    try:
        parts = urlsplit(url)
        query = parse_qsl(parts.query, keep_blank_values=True)
    except ValueError as e:
        logger.warning(f"Skipping tracking for unparseable URL {url!r}: {e}")
        return url

    tagged = url
    if not any(key.lower().startswith("utm_") for key, _ in query):
        utm = [(key, value) for key, value in settings.utm_params() if key != "utm_id"]
        tagged = add_utm_params(url, utm)

    if not settings.enable_tracking:
        return tagged

    try:
        endpoint = urlsplit(settings.endpoint)
        endpoint_query = parse_qsl(endpoint.query, keep_blank_values=True)
    except ValueError as e:
        logger.warning(f"Invalid tracking endpoint {settings.endpoint!r}: {e}")
        return tagged
    endpoint_query.append(("url", tagged))
    return urlunsplit(endpoint._replace(query=_sorted_query(endpoint_query)))


def generate_redirect_url(
    workspace_id: str, message_id: str, endpoint: str, destination: str, timestamp: int
) -> str:
    """Build the click-redirect URL recording a visit before forwarding to ``destination``.

    Examples
    --------
    >>> generate_redirect_url("w1", "m1", "https://t.example", "https://a.com/?x=1", 100)
    'https://t.example/visit?mid=m1&wid=w1&ts=100&url=https%3A%2F%2Fa.com%2F%3Fx%3D1'

    """
    return (
        f"{endpoint}{REDIRECT_PATH}?mid={quote_plus(message_id)}&wid={quote_plus(workspace_id)}"
        f"&ts={timestamp}&url={quote_plus(destination)}"
    )


def generate_open_tracking_pixel(workspace_id: str, message_id: str, endpoint: str, timestamp: int) -> str:
    """Build the invisible ``<img>`` element that records an email open."""
    src = f"{endpoint}{OPEN_PIXEL_PATH}?mid={quote_plus(message_id)}&wid={quote_plus(workspace_id)}&ts={timestamp}"
    return f'<img src="{src}" alt="" width="1" height="1">'


def decode_html_entities_in_url_attributes(html: str) -> str:
    """Undo HTML entity encoding inside ``href``, ``src`` and ``action`` values.

    HTML renderers escape ``&`` in attribute values, which breaks query
    strings for some mail clients and for the link tracking pass.

    Examples
    --------
    >>> decode_html_entities_in_url_attributes('<a href="https://a.com/?x=1&amp;y=2">')
    '<a href="https://a.com/?x=1&y=2">'

    """

    def _decode(match: re.Match[str]) -> str:
        url = match.group(2)
        for entity, char in _URL_ENTITIES:
            url = url.replace(entity, char)
        return f"{match.group(1)}{url}{match.group(3)}"

    return _URL_ATTRIBUTE_PATTERN.sub(_decode, html)


def track_links(
    html: str,
    settings: TrackingSettings,
    timestamp: int | None = None,
    untracked_urls: Collection[str] = frozenset(),
) -> str:
    """Apply link tracking to rendered HTML.

    Every trackable ``<a href>`` gets UTM parameters (see
    :func:`get_tracking_url`). When tracking is enabled, links are instead
    routed through the redirect endpoint built from the original URL, and an
    open-tracking pixel is inserted before ``</body>`` (or appended when the
    document has no body close tag).

    Parameters
    ----------
    html : str
        Rendered HTML document
    settings : TrackingSettings
        Tracking configuration
    timestamp : int, optional
        Unix timestamp embedded in tracking URLs; defaults to the current time
    untracked_urls : collection of str, optional
        Destinations whose links opted out of tracking at compile time; these
        are left untouched

    Returns
    -------
    str
        HTML with tracked links, or ``html`` unchanged when neither tracking
        nor any UTM parameter is configured

    """
    utm = [(key, value) for key, value in settings.utm_params() if key != "utm_id"]
    if not settings.enable_tracking and not utm:
        return html

    ts = int(time.time()) if timestamp is None else timestamp

    def _rewrite(match: re.Match[str]) -> str:
        url = match.group(2)
        if is_non_trackable_url(url) or url in untracked_urls:
            return match.group(0)
        if settings.enable_tracking:
            new_url = generate_redirect_url(settings.workspace_id, settings.message_id, settings.endpoint, url, ts)
        else:
            new_url = get_tracking_url(url, settings)
        return f"{match.group(1)}{new_url}{match.group(3)}"

    result = _LINK_HREF_PATTERN.sub(_rewrite, html)

    if settings.enable_tracking:
        pixel = generate_open_tracking_pixel(settings.workspace_id, settings.message_id, settings.endpoint, ts)
        if _BODY_CLOSE_PATTERN.search(result):
            result = _BODY_CLOSE_PATTERN.sub(lambda m: pixel + m.group(0), result)
        else:
            result += pixel
        logger.debug("Added open tracking pixel")

    return result
