from unittest.mock import Mock
import pytest

from mireport import ExternalToolError, InvalidFileError, MediaInfoParser
from mireport.api import create_app


@pytest.fixture
def report_reader():
    return Mock()


@pytest.fixture
def url_parser():
    return Mock()


@pytest.fixture
def client(report_reader, url_parser):
    parser = MediaInfoParser(report_reader=report_reader, url_parser=url_parser)
    app = create_app(parser)
    app.config["TESTING"] = True
    return app.test_client()


def test_parse_text(client, sample_report):
    response = client.post("/text", data=sample_report.encode("utf-8"))

    assert response.status_code == 200
    data = response.get_json()
    assert data["chapter_count"] == 3
    assert data["sections"]["Audio"]["Audio #2"]["Format"] == "AC-3"


def test_parse_text_snake_case_keys(client, sample_report):
    response = client.post("/text?keys=snake", data=sample_report.encode("utf-8"))
    assert response.get_json()["sections"]["Video"]["Video"]["display_aspect_ratio"] == "16:9"


def test_parse_text_errors(client):
    response = client.post("/text", data=b"")
    assert response.status_code == 400
    assert "empty" in response.get_json()["error"]

    response = client.post("/text", data=b"random text with no headers")
    assert response.status_code == 400


def test_parse_url(client, url_parser, sample_report):
    url_parser.extract_supported_urls.return_value = ["https://pastebin.com/raw/abc123"]
    url_parser.get_paste.return_value = sample_report

    response = client.post("/url", json={"url": "https://pastebin.com/abc123"})

    assert response.status_code == 200
    assert response.get_json()["sections"]["General"]["General"]["Format"] == "Matroska"


def test_parse_url_paste_unavailable(client, url_parser):
    url_parser.extract_supported_urls.return_value = ["https://pastebin.com/raw/abc123"]
    url_parser.get_paste.side_effect = ExternalToolError("Failed to get paste")

    response = client.post("/url", json={"url": "https://pastebin.com/abc123"})
    assert response.status_code == 502


def test_parse_url_needs_url(client):
    response = client.post("/url", json={"link": "https://pastebin.com/abc123"})
    assert response.status_code == 400


def test_verify(client, report_reader, media_file):
    report_reader.report_for.return_value = "General\nComplete name : {}\n".format(media_file)

    response = client.post("/verify", json={"file": str(media_file), "checksum": "414FA339"})
    assert response.get_json() == {"file": str(media_file), "verified": True}

    response = client.post("/verify", json={"file": str(media_file), "checksum": "414FA338"})
    assert response.get_json()["verified"] is False


def test_verify_bad_checksum(client, report_reader, media_file):
    report_reader.report_for.return_value = "General\nComplete name : {}\n".format(media_file)

    response = client.post("/verify", json={"file": str(media_file), "checksum": "xyz"})
    assert response.status_code == 400


def test_verify_missing_file(client, report_reader):
    report_reader.report_for.side_effect = InvalidFileError("Failed to open file")

    response = client.post("/verify", json={"file": "/nope.mkv", "checksum": "414FA339"})
    assert response.status_code == 400
    assert response.get_json() == {"error": "Failed to open file"}


def test_verify_needs_file_and_checksum(client):
    response = client.post("/verify", json={"file": "/movie.mkv"})
    assert response.status_code == 400
