from pathlib import Path
import pytest

from mireport import MediaInfoParser

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def sample_report():
    return (DATA_DIR / "sample_report.txt").read_text(encoding="utf-8")


@pytest.fixture
def media_info(sample_report):
    return MediaInfoParser().parse(sample_report)


@pytest.fixture
def media_file(tmp_path):
    # small file with known checksums
    path = tmp_path / "movie.mkv"
    path.write_bytes(b"The quick brown fox jumps over the lazy dog")
    return path


@pytest.fixture
def media_info_for_file(media_file):
    report = "General\nComplete name : {}\nFormat : Matroska\n".format(media_file)
    return MediaInfoParser().parse(report)
