"""Issue classifier tests: configuration, response validation and failure policies."""

import asyncio
import json
import time

import httpx
import pytest

from conftest import make_settings, mock_classifier
from sentic.infrastructure.external.ml.classifier_client import IssueClassifier

DATA_URL = "data:image/jpeg;base64,QUJD"


def classify(classifier, data_url=DATA_URL):
    return asyncio.run(classifier.classify(data_url))


def test_unconfigured_classifier_uses_first_issue_type_without_network():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"issueType": "garbage", "severity": 90})

    classifier = mock_classifier(make_settings(ML_API_URL=""), handler)
    result = classify(classifier)

    assert result.ok
    assert (result.issue_type, result.severity) == ("pothole", 50)
    assert calls == []


def test_configured_classifier_posts_data_url_with_api_key():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["api_key"] = request.headers.get("x-api-key")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"issueType": "garbage", "severity": 85})

    classifier = mock_classifier(make_settings(ML_API_URL="http://ml.test/", ML_API_KEY="k-123"), handler)
    result = classify(classifier)

    assert result.ok
    assert (result.issue_type, result.severity) == ("garbage", 85)
    assert seen == {"url": "http://ml.test/analyze", "api_key": "k-123", "body": {"imageUrl": DATA_URL}}


def test_api_key_header_omitted_when_not_configured():
    seen = {}

    def handler(request):
        seen["has_key"] = "x-api-key" in request.headers
        return httpx.Response(200, json={"issueType": "tree_fall", "severity": 10})

    classify(mock_classifier(make_settings(ML_API_URL="http://ml.test"), handler))
    assert seen["has_key"] is False


def test_timeout_setting_is_converted_to_seconds():
    classifier = IssueClassifier(make_settings(ML_API_URL="http://ml.test", ML_API_TIMEOUT=2500))
    assert classifier.timeout == 2.5


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"issueType": "bogus", "severity": 77}, ("pothole", 77)),
        ({"issueType": "garbage", "severity": "high"}, ("garbage", 50)),
        ({"issueType": "tree_fall", "severity": True}, ("tree_fall", 50)),
        ({"issueType": "tree_fall"}, ("tree_fall", 50)),
        ({"severity": 12.5}, ("pothole", 12.5)),
        ({"issueType": "garbage", "severity": 150}, ("garbage", 100)),
        ({"issueType": "garbage", "severity": -3}, ("garbage", 0)),
        ({"issueType": "garbage", "severity": 10 ** 400}, ("garbage", 100)),
        ({"issueType": "garbage", "severity": -(10 ** 400)}, ("garbage", 0)),
        (["not", "an", "object"], ("pothole", 50)),
    ],
)
def test_response_fields_fall_back_independently(payload, expected):
    classifier = mock_classifier(
        make_settings(ML_API_URL="http://ml.test"),
        lambda request: httpx.Response(200, json=payload),
    )
    result = classify(classifier)

    assert result.ok
    assert (result.issue_type, result.severity) == expected


def test_non_2xx_response_is_an_upstream_failure():
    classifier = mock_classifier(
        make_settings(ML_API_URL="http://ml.test"),
        lambda request: httpx.Response(500, json={"error": "boom"}),
    )
    result = classify(classifier)

    assert not result.ok
    assert result.error.status_code == 502


def test_timeout_is_an_upstream_failure():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    result = classify(mock_classifier(make_settings(ML_API_URL="http://ml.test"), handler))

    assert not result.ok
    assert result.error.status_code == 502


def test_connection_error_is_an_upstream_failure():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    result = classify(mock_classifier(make_settings(ML_API_URL="http://ml.test"), handler))
    assert not result.ok


def test_non_json_body_is_an_upstream_failure():
    classifier = mock_classifier(
        make_settings(ML_API_URL="http://ml.test"),
        lambda request: httpx.Response(200, text="<html>gateway</html>"),
    )
    assert not classify(classifier).ok


def test_slow_streaming_response_is_cut_off_at_the_deadline():
    body = json.dumps({"issueType": "garbage", "severity": 85}).encode()

    async def trickle():
        for byte in body:
            await asyncio.sleep(0.1)
            yield bytes([byte])

    classifier = mock_classifier(
        make_settings(ML_API_URL="http://ml.test", ML_API_TIMEOUT=300),
        lambda request: httpx.Response(200, content=trickle()),
    )

    started = time.monotonic()
    result = classify(classifier)
    elapsed = time.monotonic() - started

    assert not result.ok
    assert result.error.status_code == 502
    assert result.error.message == "ML inference timed out"
    assert elapsed < 2.0
