from unittest.mock import Mock, patch
import subprocess
import pytest

from mireport import ExternalToolError, InvalidArgumentError, InvalidFileError, ReportReader
from mireport.report_reader import SUPPORTED_EXTENSIONS


def _completed(stdout="", returncode=0, stderr=""):
    return Mock(stdout=stdout, returncode=returncode, stderr=stderr)


@pytest.mark.parametrize("path", ["movie.mkv", "/media/Movie.MP4", "song.flac", "VIDEO_TS.IFO"])
def test_supported_file_types(path):
    assert ReportReader().is_supported_file_type(path)


@pytest.mark.parametrize("path", ["notes.txt", "archive.tar.gz"])
def test_unsupported_file_types(path):
    assert not ReportReader().is_supported_file_type(path)


@pytest.mark.parametrize("path", [None, "", "movie", "movie."])
def test_file_type_needs_an_extension(path):
    with pytest.raises(InvalidArgumentError):
        ReportReader().is_supported_file_type(path)


def test_supported_extensions_are_immutable():
    assert isinstance(SUPPORTED_EXTENSIONS, frozenset)
    assert "mkv" in SUPPORTED_EXTENSIONS


def test_custom_extensions():
    reader = ReportReader(supported_extensions=["webm"])
    assert reader.is_supported_file_type("clip.webm")
    assert not reader.is_supported_file_type("clip.mkv")


def test_report_for(media_file, sample_report):
    reader = ReportReader(mediainfo_bin="/opt/mediainfo", timeout=5)
    with patch("mireport.report_reader.subprocess.run", return_value=_completed(sample_report)) as run:
        assert reader.report_for(str(media_file)) == sample_report

    args, kwargs = run.call_args
    assert args[0] == ["/opt/mediainfo", "--Full", str(media_file)]
    assert kwargs["timeout"] == 5


def test_report_for_unsupported_file():
    with pytest.raises(InvalidFileError):
        ReportReader().report_for("notes.txt")


def test_report_for_missing_file(tmp_path):
    with pytest.raises(InvalidFileError):
        ReportReader().report_for(str(tmp_path / "missing.mkv"))


def test_report_for_missing_tool(media_file):
    with patch("mireport.report_reader.subprocess.run", side_effect=FileNotFoundError()):
        with pytest.raises(ExternalToolError):
            ReportReader().report_for(str(media_file))


def test_report_for_timeout(media_file):
    timeout = subprocess.TimeoutExpired(cmd="mediainfo", timeout=1)
    with patch("mireport.report_reader.subprocess.run", side_effect=timeout):
        with pytest.raises(ExternalToolError):
            ReportReader().report_for(str(media_file))


def test_report_for_tool_failure(media_file):
    failed = _completed(returncode=1, stderr="cannot open")
    with patch("mireport.report_reader.subprocess.run", return_value=failed):
        with pytest.raises(ExternalToolError, match="cannot open"):
            ReportReader().report_for(str(media_file))


def test_report_for_empty_output(media_file):
    with patch("mireport.report_reader.subprocess.run", return_value=_completed("\n")):
        with pytest.raises(ExternalToolError):
            ReportReader().report_for(str(media_file))
