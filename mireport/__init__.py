from .checksum import ChecksumAlgorithm, ChecksumCalculator
from .exceptions import (
    EmptyInputError,
    ExternalToolError,
    InvalidArgumentError,
    InvalidFileError,
    MediaInfoError,
    NoRecognizedSectionsError,
    ParseError,
    SectionNotFoundError,
    UnsupportedAlgorithmError,
)
from .media_info import MediaInfo, MediaInfoBuilder
from .media_info_parser import MediaInfoParser
from .report_reader import ReportReader, SUPPORTED_EXTENSIONS
from .section import Section
from .section_type import SectionType

VERSION = "1.0.0"
