from enum import Enum
import re

# "Audio #1" -> "Audio"
SUFFIX_REGEX = re.compile(r"\s+#")


class SectionType(Enum):
    GENERAL = "General"
    VIDEO = "Video"
    AUDIO = "Audio"
    IMAGE = "Image"
    TEXT = "Text"
    MENU = "Menu"
    OTHER = "Other"

    @classmethod
    def from_name(cls, name):
        """
        Classify a section header

        Parameters
        ----------
        name : str
          section header, e.g. 'Audio', 'Audio #1', 'General'

        Returns
        -------
        SectionType, OTHER if the name is not a known section
        """
        if not isinstance(name, str):
            return cls.OTHER

        normalized_name = SUFFIX_REGEX.split(name, 1)[0].strip().lower()
        for section_type in cls.known():
            if section_type.value.lower() == normalized_name:
                return section_type
        return cls.OTHER

    @classmethod
    def known(cls):
        """
        Section types that can open a section in a report, everything but OTHER
        """
        return [t for t in cls if t is not cls.OTHER]
