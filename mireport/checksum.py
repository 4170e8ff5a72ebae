"""
File checksums for parsed mediainfo documents

The file is found through the 'Complete name' field of the General section.
Digests are uppercase hex, CRC32 and Adler-32 zero-padded to 8 digits.
"""

from dotenv import load_dotenv
from enum import Enum
import hashlib, logging, os, re, zlib

from .exceptions import InvalidArgumentError, InvalidFileError, UnsupportedAlgorithmError
from .helpers import env_int
from .section_type import SectionType

# load environment variables
load_dotenv()

CHECKSUM_BUFFER_SIZE = env_int(os.environ.get("CHECKSUM_BUFFER_SIZE"), 8192)

COMPLETE_NAME_FIELD = "Complete name"
HEX_REGEX = re.compile(r"^[0-9a-f]+$")
WHITESPACE_REGEX = re.compile(r"\s+")

logger = logging.getLogger(__name__)


class ChecksumAlgorithm(Enum):
    CRC32 = "CRC32"
    MD5 = "MD5"
    SHA1 = "SHA-1"
    SHA256 = "SHA-256"
    SHA512 = "SHA-512"
    ADLER32 = "Adler-32"

    @classmethod
    def from_name(cls, name):
        """
        Look up an algorithm by name, e.g. 'SHA-256', 'sha256' or 'adler32'
        """
        if isinstance(name, cls):
            return name
        if not name:
            raise InvalidArgumentError("Algorithm cannot be empty")
        if not isinstance(name, str):
            raise InvalidArgumentError("Not a checksum algorithm: " + repr(name))
        wanted = name.replace("-", "").strip().lower()
        for algorithm in cls:
            if algorithm.value.replace("-", "").lower() == wanted:
                return algorithm
        raise InvalidArgumentError("Unknown checksum algorithm: " + name)


# running checksums from zlib, everything else comes from hashlib
ZLIB_CHECKSUMS = {
    ChecksumAlgorithm.CRC32: zlib.crc32,
    ChecksumAlgorithm.ADLER32: zlib.adler32,
}

HASHLIB_NAMES = {
    ChecksumAlgorithm.MD5: "md5",
    ChecksumAlgorithm.SHA1: "sha1",
    ChecksumAlgorithm.SHA256: "sha256",
    ChecksumAlgorithm.SHA512: "sha512",
}

# checksum length -> algorithms that produce it
LENGTH_TO_ALGORITHMS = {
    8: [ChecksumAlgorithm.CRC32, ChecksumAlgorithm.ADLER32],
    32: [ChecksumAlgorithm.MD5],
    40: [ChecksumAlgorithm.SHA1],
    64: [ChecksumAlgorithm.SHA256],
    128: [ChecksumAlgorithm.SHA512],
}


def normalize_checksum(checksum):
    return WHITESPACE_REGEX.sub("", checksum).lower()


def guess_algorithms(checksum):
    """
    Candidate algorithms for a checksum, based on its length

    Parameters
    ----------
    checksum : str
      hex checksum, whitespace is ignored

    Returns
    -------
    list of ChecksumAlgorithm, 8 digit checksums are either CRC32 or Adler-32
    """
    if checksum is None:
        raise InvalidArgumentError("Checksum cannot be None")
    if not isinstance(checksum, str):
        raise InvalidArgumentError("Checksum must be a hex string, not " + repr(checksum))

    normalized = normalize_checksum(checksum)
    if not HEX_REGEX.match(normalized):
        raise InvalidArgumentError("Invalid hexadecimal checksum: " + checksum)

    if len(normalized) not in LENGTH_TO_ALGORITHMS:
        raise InvalidArgumentError("Unknown checksum length: " + str(len(normalized)))
    return list(LENGTH_TO_ALGORITHMS[len(normalized)])


class ChecksumCalculator:
    """
    Compute and verify checksums of the file behind a MediaInfo document
    """

    def __init__(self, buffer_size=CHECKSUM_BUFFER_SIZE):
        if buffer_size <= 0:
            raise InvalidArgumentError("Buffer size must be positive")
        self.buffer_size = buffer_size

    def compute(self, media_info, algorithm=ChecksumAlgorithm.CRC32):
        if algorithm is None:
            raise InvalidArgumentError("Algorithm cannot be None")
        algorithm = ChecksumAlgorithm.from_name(algorithm)

        file_path = self.media_file(media_info)
        logger.debug("Calculating %s of %s", algorithm.value, file_path)

        if algorithm in ZLIB_CHECKSUMS:
            value = self._running_checksum(file_path, ZLIB_CHECKSUMS[algorithm])
            return "%08X" % value

        digest = self._new_digest(algorithm)
        for chunk in self._read_chunks(file_path):
            digest.update(chunk)
        return digest.hexdigest().upper()

    def verify(self, media_info, checksum):
        """
        Check a checksum against the file

        Parameters
        ----------
        media_info : MediaInfo
          parsed document, its General section names the file

        checksum : str
          expected checksum in hex, case and whitespace are ignored

        Returns
        -------
        True if any algorithm matching the checksum length produces it
        """
        candidates = guess_algorithms(checksum)
        expected = normalize_checksum(checksum)

        for algorithm in candidates:
            actual = normalize_checksum(self.compute(media_info, algorithm))
            if actual == expected:
                logger.debug("Checksum matches %s", algorithm.value)
                return True
        return False

    def media_file(self, media_info):
        """
        Path of the file the document describes, checked to be a readable file
        """
        general = media_info.get_section(SectionType.GENERAL, SectionType.GENERAL.value)
        if general is None:
            raise InvalidFileError("No General section, cannot locate the media file")

        file_path = general.get_field_value(COMPLETE_NAME_FIELD)
        if not file_path:
            raise InvalidFileError("General section has no '" + COMPLETE_NAME_FIELD + "' field")

        if not os.path.exists(file_path):
            raise InvalidFileError("File does not exist: " + os.path.abspath(file_path))
        if not os.path.isfile(file_path):
            raise InvalidFileError("Path is not a file: " + os.path.abspath(file_path))
        if not os.access(file_path, os.R_OK):
            raise InvalidFileError("File cannot be read: " + os.path.abspath(file_path))
        return file_path

    def _new_digest(self, algorithm):
        try:
            return hashlib.new(HASHLIB_NAMES[algorithm])
        except ValueError as e:
            raise UnsupportedAlgorithmError(
                "Algorithm not supported: " + algorithm.value
            ) from e

    def _running_checksum(self, file_path, update):
        value = update(b"")
        for chunk in self._read_chunks(file_path):
            value = update(chunk, value)
        return value & 0xFFFFFFFF

    def _read_chunks(self, file_path):
        try:
            with open(file_path, "rb") as f:
                for chunk in iter(lambda: f.read(self.buffer_size), b""):
                    yield chunk
        except OSError as e:
            raise InvalidFileError("Failed to read file " + file_path + ": " + str(e)) from e


def compute(media_info, algorithm=ChecksumAlgorithm.CRC32):
    return ChecksumCalculator().compute(media_info, algorithm)


def verify(media_info, checksum):
    return ChecksumCalculator().verify(media_info, checksum)
