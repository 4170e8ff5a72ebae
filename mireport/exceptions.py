class MediaInfoError(Exception):
    """
    Base class for every error raised by mireport
    """


class ParseError(MediaInfoError):
    """
    The report as a whole could not be parsed
    """


class EmptyInputError(ParseError):
    pass


class NoRecognizedSectionsError(ParseError):
    pass


class InvalidArgumentError(MediaInfoError, ValueError):
    pass


class SectionNotFoundError(InvalidArgumentError, LookupError):
    pass


class InvalidFileError(MediaInfoError):
    pass


class UnsupportedAlgorithmError(MediaInfoError):
    """
    Digest algorithm is not available in this Python build
    """


class ExternalToolError(MediaInfoError):
    """
    mediainfo or a paste site could not produce a report
    """
