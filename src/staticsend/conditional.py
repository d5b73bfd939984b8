"""Conditional GET evaluation (If-Match, If-Unmodified-Since, If-None-Match, If-Modified-Since)."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from .context import ResponseContext
from .headers import parse_http_date, parse_token_list
from .validators import last_modified, weak_etag

logger = logging.getLogger(__name__)

CONDITIONAL_HEADERS = ("if-match", "if-unmodified-since", "if-none-match", "if-modified-since")


def is_conditional_get(headers: Mapping[str, str]) -> bool:
    return any(headers.get(name) for name in CONDITIONAL_HEADERS)


def etag_matches(header: str, etag: str) -> bool:
    """Match an entity-tag list against ``etag``, accepting the strong form of a weak tag."""

    return parse_token_list(header, lambda token: token == etag or "W/" + token == etag)


def is_if_match_failure(headers: Mapping[str, str], etag: str) -> bool:
    if_match = headers.get("if-match")
    if not if_match or if_match == "*":
        return False
    return not etag_matches(if_match, etag)


def is_if_unmodified_since_failure(headers: Mapping[str, str], modified: str | None) -> bool:
    unmodified_since = parse_http_date(headers.get("if-unmodified-since"))
    if unmodified_since is None:
        return False
    modified_at = parse_http_date(modified)
    if modified_at is None:
        return True
    return modified_at > unmodified_since


def is_precondition_failure(headers: Mapping[str, str], etag: str, modified: str | None) -> bool:
    return is_if_match_failure(headers, etag) or is_if_unmodified_since_failure(headers, modified)


def is_not_modified(headers: Mapping[str, str], etag: str, modified: str | None) -> bool:
    """Decide whether the client's cached copy is still current.

    ``Cache-Control: no-cache`` always forces a fresh response. When
    If-None-Match is present it alone decides and If-Modified-Since is ignored.
    """

    if "no-cache" in headers.get("cache-control", ""):
        return False

    if "if-none-match" in headers:
        if_none_match = headers["if-none-match"]
        if if_none_match == "*":
            return True
        return etag_matches(if_none_match, etag)

    if "if-modified-since" in headers:
        if modified is None:
            return True
        modified_at = parse_http_date(modified)
        if modified_at is None:
            return True
        modified_since = parse_http_date(headers["if-modified-since"])
        if modified_since is None:
            return False
        return modified_at <= modified_since

    return False


def apply_conditional_get(context: ResponseContext) -> ResponseContext:
    """Finish the context with 412 or 304 when the request's conditions call for it."""

    if context.finished or not is_conditional_get(context.request_headers):
        return context

    metadata = context.require_metadata()
    etag = weak_etag(metadata)
    modified = last_modified(metadata)

    if is_precondition_failure(context.request_headers, etag, modified):
        logger.debug("Precondition failed for %s", context.path)
        return context.finish(412)

    if is_not_modified(context.request_headers, etag, modified):
        logger.debug("Not modified: %s", context.path)
        return context.finish(304)

    return context


__all__ = [
    "apply_conditional_get",
    "etag_matches",
    "is_conditional_get",
    "is_if_match_failure",
    "is_if_unmodified_since_failure",
    "is_not_modified",
    "is_precondition_failure",
]
