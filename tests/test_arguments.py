import pytest

from pagespeed_mcp.tools.base import InvalidArgumentsError
from pagespeed_mcp.tools.pagespeed import Category, RunPageSpeedTestArgs, RunPageSpeedTestTool, Strategy


def _parse(args):
    return RunPageSpeedTestTool(client=None).parse_arguments(args)


def test_defaults_applied():
    args = _parse({"url": "https://example.com"})
    assert args.url == "https://example.com"
    assert args.strategy is Strategy.MOBILE
    assert args.category == [Category.PERFORMANCE]
    assert args.locale == "en"
    assert args.api_key is None


def test_url_is_not_normalised():
    args = _parse({"url": "https://Example.com?q=a b"})
    assert args.url == "https://Example.com?q=a b"


def test_all_fields_accepted():
    args = _parse(
        {
            "url": "http://localhost:8080/page",
            "strategy": "desktop",
            "category": ["seo", "best-practices", "pwa", "accessibility", "performance"],
            "locale": "de",
            "apiKey": "k-123",
        }
    )
    assert args.strategy is Strategy.DESKTOP
    assert [c.value for c in args.category] == ["seo", "best-practices", "pwa", "accessibility", "performance"]
    assert args.locale == "de"
    assert args.api_key == "k-123"


def test_api_key_accepted_by_field_name():
    assert _parse({"url": "https://example.com", "api_key": "abc"}).api_key == "abc"


def test_repeated_categories_kept_in_order():
    args = _parse({"url": "https://example.com", "category": ["seo", "pwa", "seo"]})
    assert args.category == [Category.SEO, Category.PWA, Category.SEO]


def test_unknown_keys_ignored():
    args = _parse({"url": "https://example.com", "foo": 1})
    assert not hasattr(args, "foo")


@pytest.mark.parametrize(
    "args",
    [
        {},
        {"url": ""},
        {"url": "not a url"},
        {"url": "example.com"},
        {"url": "https://"},
        {"url": 42},
    ],
)
def test_bad_url_rejected(args):
    with pytest.raises(InvalidArgumentsError) as excinfo:
        _parse(args)
    assert str(excinfo.value).startswith("Invalid arguments for run_pagespeed_test: ")
    assert "url" in str(excinfo.value)


@pytest.mark.parametrize(
    "extra",
    [
        {"strategy": "tablet"},
        {"strategy": "Mobile"},
        {"category": ["speed"]},
        {"category": ["seo", "SEO"]},
        {"category": []},
        {"category": "seo"},
        {"locale": 5},
        {"apiKey": 123},
    ],
)
def test_bad_fields_rejected(extra):
    with pytest.raises(InvalidArgumentsError):
        _parse({"url": "https://example.com", **extra})


@pytest.mark.parametrize("raw", [["https://example.com"], [], "", 0])
def test_arguments_must_be_a_mapping(raw):
    with pytest.raises(InvalidArgumentsError) as excinfo:
        _parse(raw)
    assert "valid dictionary" in str(excinfo.value)


def test_model_is_frozen():
    args = RunPageSpeedTestArgs(url="https://example.com")
    with pytest.raises(Exception):
        args.locale = "fr"


def test_metadata_schema():
    meta = RunPageSpeedTestTool.metadata()
    assert meta.name == "run_pagespeed_test"
    assert "PageSpeed Insights" in meta.description
    schema = meta.input_schema
    assert schema["type"] == "object"
    assert schema["required"] == ["url"]
    assert set(schema["properties"]) == {"url", "strategy", "category", "locale", "apiKey"}
