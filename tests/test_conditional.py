"""Tests for conditional GET precedence rules."""

from __future__ import annotations

import pytest

from staticsend.conditional import (
    etag_matches,
    is_conditional_get,
    is_if_match_failure,
    is_if_unmodified_since_failure,
    is_not_modified,
    is_precondition_failure,
)
from staticsend.headers import RequestHeaders

ETAG = 'W/"4-174876e807b"'
MODIFIED = "Sun, 13 Sep 2020 12:26:40 GMT"
EARLIER = "Sat, 12 Sep 2020 12:26:40 GMT"
LATER = "Mon, 14 Sep 2020 12:26:40 GMT"


def _headers(**values: str) -> RequestHeaders:
    return RequestHeaders({name.replace("_", "-"): value for name, value in values.items()})


def test_conditional_headers_are_detected_case_insensitively() -> None:
    assert is_conditional_get(RequestHeaders({"If-None-Match": ETAG}))
    assert not is_conditional_get(RequestHeaders({"Range": "bytes=0-1"}))
    assert not is_conditional_get(RequestHeaders({"If-None-Match": ""}))


@pytest.mark.parametrize(
    "header",
    [ETAG, '"4-174876e807b"', f'"other", {ETAG}', f'"a","b" ,  {ETAG}'],
)
def test_etag_matches_weak_and_listed_tags(header: str) -> None:
    assert etag_matches(header, ETAG)


def test_etag_does_not_match_different_tag() -> None:
    assert not etag_matches('"5-174876e807b", W/"4-0"', ETAG)


def test_if_match_star_never_fails() -> None:
    assert not is_if_match_failure(_headers(if_match="*"), ETAG)


def test_if_match_mismatch_fails() -> None:
    assert is_if_match_failure(_headers(if_match='"nope"'), ETAG)
    assert not is_if_match_failure(_headers(if_match=ETAG), ETAG)


def test_if_unmodified_since() -> None:
    assert is_if_unmodified_since_failure(_headers(if_unmodified_since=EARLIER), MODIFIED)
    assert not is_if_unmodified_since_failure(_headers(if_unmodified_since=MODIFIED), MODIFIED)
    assert not is_if_unmodified_since_failure(_headers(if_unmodified_since=LATER), MODIFIED)


def test_if_unmodified_since_unparsable_header_is_ignored() -> None:
    assert not is_if_unmodified_since_failure(_headers(if_unmodified_since="yesterday"), MODIFIED)


def test_if_unmodified_since_unknown_last_modified_fails() -> None:
    assert is_if_unmodified_since_failure(_headers(if_unmodified_since=LATER), None)


def test_precondition_failure_combines_both_checks() -> None:
    assert is_precondition_failure(_headers(if_match='"nope"'), ETAG, MODIFIED)
    assert is_precondition_failure(_headers(if_unmodified_since=EARLIER), ETAG, MODIFIED)
    assert not is_precondition_failure(_headers(if_match=ETAG, if_unmodified_since=LATER), ETAG, MODIFIED)


def test_if_none_match_star_is_not_modified() -> None:
    assert is_not_modified(_headers(if_none_match="*"), ETAG, MODIFIED)


def test_no_cache_forces_fresh_response() -> None:
    headers = _headers(if_none_match="*", cache_control="no-cache")

    assert not is_not_modified(headers, ETAG, MODIFIED)


def test_if_none_match_takes_precedence_over_if_modified_since() -> None:
    """A non-matching If-None-Match wins even when If-Modified-Since would say 304."""

    headers = _headers(if_none_match='"other"', if_modified_since=LATER)

    assert not is_not_modified(headers, ETAG, MODIFIED)


def test_if_modified_since() -> None:
    assert is_not_modified(_headers(if_modified_since=MODIFIED), ETAG, MODIFIED)
    assert is_not_modified(_headers(if_modified_since=LATER), ETAG, MODIFIED)
    assert not is_not_modified(_headers(if_modified_since=EARLIER), ETAG, MODIFIED)
    assert not is_not_modified(_headers(if_modified_since="garbage"), ETAG, MODIFIED)


def test_if_modified_since_without_last_modified_is_not_modified() -> None:
    assert is_not_modified(_headers(if_modified_since=EARLIER), ETAG, None)
