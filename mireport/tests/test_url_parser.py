from unittest.mock import Mock, patch
import pytest
import requests

from mireport import ExternalToolError
from mireport.url_parser import URLParser


def test_extract_supported_urls():
    url_parser = URLParser()
    text = (
        "mediainfo at https://pastebin.com/abc123 and https://dpaste.com/XYZ"
        " but not https://example.com/abc"
    )
    assert url_parser.extract_supported_urls(text) == [
        "https://pastebin.com/raw/abc123",
        "https://dpaste.com/XYZ.txt",
    ]


def test_raw_urls_are_kept():
    url_parser = URLParser()
    assert url_parser.extract_supported_urls("https://pastebin.com/raw/abc123") == [
        "https://pastebin.com/raw/abc123"
    ]


def test_host_without_slug_regex():
    url_parser = URLParser()
    assert url_parser.extract_supported_urls("https://termbin.com/x1y2") == [
        "https://termbin.com/x1y2"
    ]


def test_no_urls():
    assert URLParser().extract_supported_urls(None) == []


def test_custom_urls():
    urls = {
        "paste.example.org": {
            "slug_regex": "https://paste.example.org/p/(.*)",
            "raw_url": "https://paste.example.org/raw/{}",
        }
    }
    url_parser = URLParser(urls)
    assert url_parser.get_urls() == urls
    assert url_parser.extract_supported_urls("https://paste.example.org/p/42") == [
        "https://paste.example.org/raw/42"
    ]


def test_get_paste(sample_report):
    response = Mock(text=sample_report)
    with patch("mireport.url_parser.requests.get", return_value=response) as get:
        assert URLParser(timeout=3).get_paste("https://pastebin.com/raw/abc123") == sample_report

    get.assert_called_once_with("https://pastebin.com/raw/abc123", timeout=3)
    response.raise_for_status.assert_called_once_with()


def test_get_paste_failure():
    error = requests.ConnectionError("connection refused")
    with patch("mireport.url_parser.requests.get", side_effect=error):
        with pytest.raises(ExternalToolError):
            URLParser().get_paste("https://pastebin.com/raw/abc123")


def test_get_paste_http_error():
    response = Mock()
    response.raise_for_status.side_effect = requests.HTTPError("404 Client Error")
    with patch("mireport.url_parser.requests.get", return_value=response):
        with pytest.raises(ExternalToolError):
            URLParser().get_paste("https://pastebin.com/raw/missing")
