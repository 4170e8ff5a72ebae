from dotenv import load_dotenv
import logging, os, subprocess

from .exceptions import ExternalToolError, InvalidArgumentError, InvalidFileError
from .helpers import env_int, env_list

# load environment variables
load_dotenv()

# environment variables
MEDIAINFO_BIN = os.environ.get("MEDIAINFO_BIN", "mediainfo").strip()
MEDIAINFO_TIMEOUT = env_int(os.environ.get("MEDIAINFO_TIMEOUT"), 60)
MEDIAINFO_EXTRA_EXTENSIONS = env_list(os.environ.get("MEDIAINFO_EXTRA_EXTENSIONS"))

SUPPORTED_EXTENSIONS = frozenset(
    [
        # Matroska
        "mkv", "mka", "mks",
        # Ogg
        "ogg", "ogm",
        # Riff
        "avi", "wav",
        # MPEG-1/2 container
        "mpeg", "mpg", "vob",
        # MPEG-4 container
        "mp4",
        # MPEG video
        "mpgv", "mpv", "m1v", "m2v",
        # MPEG audio
        "mp2", "mp3",
        # Windows Media
        "asf", "wma", "wmv",
        # QuickTime
        "qt", "mov",
        # Real
        "rm", "rmvb", "ra",
        # DVD-Video
        "ifo",
        "ac3", "dts", "aac",
        # Monkey's Audio
        "ape", "mac",
        "flac",
        # CDXA, like Video-CD
        "dat",
        # Apple/SGI
        "aiff", "aifc",
        # Sun/NeXT
        "au",
        # Amiga IFF/SVX8/SV16
        "iff",
        # Ensoniq PARIS
        "paf",
        # Sound Designer 2
        "sd2",
        # Berkeley/IRCAM/CARL
        "irca",
        # SoundFoundry WAVE 64
        "w64",
        # Matlab
        "mat",
        # Portable Voice Format
        "pvf",
        # FastTracker2 Extended
        "xi",
        # MIDI Sample Dump Format
        "sds",
        # Audio Visual Research
        "avr",
    ]
)

logger = logging.getLogger(__name__)


class ReportReader:
    """
    Get the text report for a media file from the mediainfo command line tool
    """

    def __init__(
        self,
        mediainfo_bin=MEDIAINFO_BIN,
        supported_extensions=None,
        timeout=MEDIAINFO_TIMEOUT,
    ):
        self.mediainfo_bin = mediainfo_bin
        if supported_extensions is None:
            supported_extensions = SUPPORTED_EXTENSIONS | frozenset(
                ext.lower().lstrip(".") for ext in MEDIAINFO_EXTRA_EXTENSIONS
            )
        self.supported_extensions = frozenset(supported_extensions)
        self.timeout = timeout

    def is_supported_file_type(self, file_path):
        """
        Is the file extension one mediainfo can read?

        Parameters
        ----------
        file_path : str
          path to the media file

        Returns
        -------
        True if the extension is supported, False otherwise.
        """
        if not file_path:
            raise InvalidArgumentError("File path cannot be None or empty")

        # extension is the part after the last dot
        _, dot, extension = str(file_path).rpartition(".")
        if not dot or not extension:
            raise InvalidArgumentError(
                "File path does not contain a valid extension. File path: " + str(file_path)
            )
        return extension.lower() in self.supported_extensions

    def report_for(self, file_path):
        """
        Run mediainfo on a file

        Parameters
        ----------
        file_path : str
          path to the media file

        Returns
        -------
        str full text report
        """
        if not self.is_supported_file_type(file_path):
            raise InvalidFileError("Unsupported file type: " + str(file_path))
        if not os.path.isfile(file_path):
            raise InvalidFileError("Failed to open file. File path: " + str(file_path))

        command = [self.mediainfo_bin, "--Full", str(file_path)]
        logger.debug("Running command: %s", " ".join(command))

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise ExternalToolError("mediainfo not found: " + self.mediainfo_bin) from e
        except subprocess.TimeoutExpired as e:
            raise ExternalToolError(
                "mediainfo timed out after " + str(self.timeout) + "s: " + str(file_path)
            ) from e

        if result.returncode != 0:
            raise ExternalToolError(
                "mediainfo failed for " + str(file_path) + ": " + result.stderr.strip()
            )
        if not result.stdout or not result.stdout.strip():
            raise ExternalToolError("mediainfo returned no information for " + str(file_path))

        return result.stdout


def report_for(file_path):
    return ReportReader().report_for(file_path)
