import logging, re

from .exceptions import EmptyInputError, InvalidArgumentError, NoRecognizedSectionsError
from .media_info import CHAPTER_COUNT_FIELD, MediaInfoBuilder
from .report_reader import ReportReader
from .section_type import SectionType
from .url_parser import URLParser

logger = logging.getLogger(__name__)

# chapter line in a menu section, e.g. '00:05:12.340 Chapter Two'
TIMESTAMP_REGEX = re.compile(r"^\d{2}:\d{2}:\d{2}\.\d{3}\s+.*$", re.ASCII)
WHITESPACE_REGEX = re.compile(r"\s+", re.ASCII)
# only \n, \r and \r\n end a line, other unicode separators belong to values
LINE_BREAK_REGEX = re.compile(r"\r\n|\r|\n")

# 'General', 'Audio', 'Audio #1', 'Text #2', ...
SECTION_HEADER_REGEX = re.compile(
    r"^(?:{})(?: #\d+)?$".format("|".join(t.value for t in SectionType.known())),
    re.ASCII,
)


class MediaInfoParser:
    """
    Parse the text output of mediainfo into a MediaInfo document
    """

    def __init__(self, report_reader=None, url_parser=None):
        self.report_reader = report_reader or ReportReader()
        self.url_parser = url_parser or URLParser()

        # line decoder for each section type, key/value lines for everything else
        self.line_decoders = {
            SectionType.MENU: self._parse_menu_line,
        }

    def parse(self, text):
        """
        Parse a mediainfo report

        Parameters
        ----------
        text : str
          full text report, sections separated by blank lines

        Returns
        -------
        MediaInfo document
        """
        self._check_data_validity(text)

        builder = MediaInfoBuilder()
        # current mediainfo section
        curr_sect = None
        curr_sect_type = None
        # shared by every menu section
        chapter_number = 0

        for l in LINE_BREAK_REGEX.split(text):
            # blank lines end a section
            if not l.strip():
                curr_sect = None
                curr_sect_type = None
                continue

            # new section of mediainfo
            if self._is_section_header(l):
                section_name = l.strip()
                curr_sect_type = SectionType.from_name(section_name)
                curr_sect = builder.get_or_create_section(curr_sect_type, section_name)
                continue

            if curr_sect is None:
                logger.warning("No section defined for line: %s", l)
                continue

            if curr_sect_type == SectionType.MENU and TIMESTAMP_REGEX.match(l):
                chapter_number += 1

            decode = self.line_decoders.get(curr_sect_type, self._parse_key_value_line)
            decode(l, curr_sect, chapter_number)

        if builder.has_section_type(SectionType.MENU):
            menu = self._chapter_count_section(builder)
            menu.add_field_value(CHAPTER_COUNT_FIELD, str(chapter_number))

        media_info = builder.build()
        logger.debug(
            "Parsed %d section(s), %d chapter(s)",
            sum(len(media_info.get_sections(t)) for t in media_info.section_types),
            chapter_number,
        )
        return media_info

    def parse_file(self, file_path):
        """
        Run mediainfo on a file and parse its report
        """
        return self.parse(self.report_reader.report_for(file_path))

    def parse_url(self, url):
        """
        Download a pasted report and parse it

        Parameters
        ----------
        url : str
          paste url, e.g. https://pastebin.com/abc123

        Returns
        -------
        MediaInfo document
        """
        raw_urls = self.url_parser.extract_supported_urls(url)
        if not raw_urls:
            raise InvalidArgumentError("Unsupported paste url: " + str(url))
        return self.parse(self.url_parser.get_paste(raw_urls[0]))

    def _is_section_header(self, l):
        return SECTION_HEADER_REGEX.match(l.strip()) is not None

    def _parse_key_value_line(self, l, section, chapter_number=0):
        # values can contain colons too, split on the first one only
        key, colon, value = l.partition(":")
        if not colon:
            logger.warning("Invalid key-value pair: %s", l)
            return
        section.add_field_value(key.strip(), value.strip())

    def _parse_menu_line(self, l, section, chapter_number):
        if not TIMESTAMP_REGEX.match(l):
            # menu metadata, not a chapter
            self._parse_key_value_line(l, section)
            return

        # name may be empty, "00:00:00.000 " still is a chapter
        timestamp, chapter_name = WHITESPACE_REGEX.split(l, 1)
        chapter_name = chapter_name.strip()
        section.add_field_value("ChapterName {}".format(chapter_number), chapter_name)
        section.add_field_value("ChapterTimestamp {}".format(chapter_number), timestamp)

    def _chapter_count_section(self, builder):
        menus = builder.get_sections(SectionType.MENU)
        if SectionType.MENU.value in menus:
            return menus[SectionType.MENU.value]
        return next(iter(menus.values()))

    def _check_data_validity(self, text):
        if text is None:
            raise EmptyInputError("Failed to retrieve media information. Data is None")
        if not text:
            raise EmptyInputError("No media information found. Data is empty")

        for section_type in SectionType.known():
            if section_type.value in text:
                return
        raise NoRecognizedSectionsError(
            "No media information found. Data does not contain any section headers"
        )
