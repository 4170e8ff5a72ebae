from types import MappingProxyType

from .checksum import ChecksumAlgorithm, ChecksumCalculator
from .exceptions import InvalidArgumentError, MediaInfoError, SectionNotFoundError
from .helpers import format_key
from .section import Section
from .section_type import SectionType

CHAPTER_COUNT_FIELD = "ChapterCount"


def _validate_section_type(section_type):
    if section_type is None:
        raise InvalidArgumentError("Section type cannot be None")
    if not isinstance(section_type, SectionType):
        raise InvalidArgumentError("Not a section type: " + repr(section_type))


def _validate_name(name, what="Section name"):
    if name is None or name == "":
        raise InvalidArgumentError(what + " cannot be None or empty")


class MediaInfoBuilder:
    """
    Collects sections while a report is parsed, build() hands them to a MediaInfo
    """

    def __init__(self):
        self._type_to_name_to_section = dict()
        self._built = False

    def get_or_create_section(self, section_type, section_name):
        """
        Get the section for a type and name, creating it the first time

        Parameters
        ----------
        section_type : SectionType
          type of the section

        section_name : str
          raw section name, e.g. 'Audio #1'

        Returns
        -------
        Section, the same instance when a name comes up again
        """
        _validate_section_type(section_type)
        _validate_name(section_name)
        if self._built:
            raise MediaInfoError("MediaInfo was already built")

        sections = self._type_to_name_to_section.setdefault(section_type, dict())
        if section_name not in sections:
            sections[section_name] = Section()
        return sections[section_name]

    def has_section_type(self, section_type):
        return section_type in self._type_to_name_to_section

    def get_sections(self, section_type):
        return dict(self._type_to_name_to_section.get(section_type, {}))

    def build(self):
        if self._built:
            raise MediaInfoError("MediaInfo was already built")
        self._built = True

        for sections in self._type_to_name_to_section.values():
            for section in sections.values():
                section.seal()
        return MediaInfo(self._type_to_name_to_section)


class MediaInfo:
    """
    Parsed mediainfo report

    Sections are grouped by SectionType and keyed by their name within a type.
    Documents are read-only; use MediaInfoParser or MediaInfoBuilder to make one.
    """

    def __init__(self, type_to_name_to_section=None):
        self._type_to_name_to_section = {
            section_type: dict(sections)
            for section_type, sections in (type_to_name_to_section or {}).items()
        }

    # sections

    @property
    def sections(self):
        return MappingProxyType(
            {
                section_type: MappingProxyType(sections)
                for section_type, sections in self._type_to_name_to_section.items()
            }
        )

    def get_sections(self, section_type):
        _validate_section_type(section_type)
        return MappingProxyType(dict(self._type_to_name_to_section.get(section_type, {})))

    @property
    def section_types(self):
        return list(self._type_to_name_to_section)

    def get_section_names(self, section_type):
        _validate_section_type(section_type)
        return list(self._type_to_name_to_section.get(section_type, {}))

    @property
    def section_names(self):
        names = list()
        for sections in self._type_to_name_to_section.values():
            for name in sections:
                if name not in names:
                    names.append(name)
        return names

    def get_section(self, section_type, section_name):
        """
        Section for a type and name, None if there is no such section
        """
        _validate_section_type(section_type)
        _validate_name(section_name)
        return self._type_to_name_to_section.get(section_type, {}).get(section_name)

    def get_section_by_name(self, section_name):
        """
        First section with this name, in document order

        Raises
        ------
        SectionNotFoundError if no section has this name
        """
        _validate_name(section_name)
        for sections in self._type_to_name_to_section.values():
            if section_name in sections:
                return sections[section_name]
        raise SectionNotFoundError("Section does not exist: " + section_name)

    def has_section(self, section_type, section_name):
        _validate_section_type(section_type)
        _validate_name(section_name)
        return section_name in self._type_to_name_to_section.get(section_type, {})

    def has_section_name(self, section_name):
        _validate_name(section_name)
        return any(section_name in s for s in self._type_to_name_to_section.values())

    def has_section_type(self, section_type):
        _validate_section_type(section_type)
        return section_type in self._type_to_name_to_section

    # fields

    def has_field(self, section_type, section_name, field_name):
        _validate_name(field_name, "Field name")
        section = self.get_section(section_type, section_name)
        return section is not None and section.has_field(field_name)

    def has_field_in_section(self, section_name, field_name):
        _validate_name(section_name)
        _validate_name(field_name, "Field name")
        if not self.has_section_name(section_name):
            return False
        return self.get_section_by_name(section_name).has_field(field_name)

    def has_field_name(self, field_name):
        _validate_name(field_name, "Field name")
        return any(section.has_field(field_name) for section in self._all_sections())

    def get_field_names(self, section_type, section_name):
        section = self.get_section(section_type, section_name)
        if section is None:
            return list()
        return section.field_names

    def get_field_names_for_type(self, section_type):
        _validate_section_type(section_type)
        names = set()
        for section in self._type_to_name_to_section.get(section_type, {}).values():
            names.update(section.field_names)
        return sorted(names)

    @property
    def field_names(self):
        names = set()
        for section in self._all_sections():
            names.update(section.field_names)
        return sorted(names)

    def get_field_value(self, section_type, section_name, field_name, default=None):
        _validate_name(field_name, "Field name")
        section = self.get_section(section_type, section_name)
        if section is None:
            return default
        return section.get_field_value(field_name, default)

    @property
    def chapter_count(self):
        for section in self._type_to_name_to_section.get(SectionType.MENU, {}).values():
            if section.has_field(CHAPTER_COUNT_FIELD):
                return int(section.get_field_value(CHAPTER_COUNT_FIELD))
        return 0

    # checksums

    def calculate_checksum(self, algorithm=ChecksumAlgorithm.CRC32, calculator=None):
        calculator = calculator or ChecksumCalculator()
        return calculator.compute(self, algorithm)

    def verify_checksum(self, checksum, calculator=None):
        calculator = calculator or ChecksumCalculator()
        return calculator.verify(self, checksum)

    # output

    def to_dict(self, snake_case_keys=False):
        """
        Plain dictionary of the document

        Parameters
        ----------
        snake_case_keys : bool
          format field names into abc_def_ghi

        Returns
        -------
        dict {section type name: {section name: {field: value}}}
        """
        data = dict()
        for section_type, sections in self._type_to_name_to_section.items():
            data[section_type.value] = dict()
            for section_name, section in sections.items():
                fields = dict()
                for field, value in section.field_values.items():
                    fields[format_key(field) if snake_case_keys else field] = value
                data[section_type.value][section_name] = fields
        return data

    def dump(self, writer):
        """
        Write a readable listing of every section

        Parameters
        ----------
        writer : file-like
          anything with a write(str) method
        """
        if writer is None:
            raise InvalidArgumentError("Writer cannot be None")

        if not self._type_to_name_to_section:
            writer.write("No sections available.\n")
            return

        for section_type, sections in self._type_to_name_to_section.items():
            writer.write("Section Type: " + section_type.value + "\n")
            if not sections:
                writer.write("  No sections available.\n")
                continue

            for section_name, section in sections.items():
                writer.write("  Section Name: " + section_name + "\n")
                for field in section:
                    writer.write(
                        "    {:>35} -> {}\n".format(field, section.get_field_value(field))
                    )
            writer.write("\n")

    def _all_sections(self):
        for sections in self._type_to_name_to_section.values():
            for section in sections.values():
                yield section

    def __eq__(self, other):
        if not isinstance(other, MediaInfo):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return "MediaInfo(" + repr(self.to_dict()) + ")"
