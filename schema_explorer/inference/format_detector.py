from .format_patterns import FORMAT_PATTERNS

import logging

logger = logging.getLogger(__name__)


class StringFormatDetector:

    FORMAT_PATTERNS = FORMAT_PATTERNS

    @classmethod
    def detect_format(cls, text):
        """
        Detect the semantic format of a string value.

        Patterns are tried in table order and the first match wins, so URI
        detection runs before the email and date checks.

        Args:
            text: String value taken from the JSON sample

        Returns:
            The format name (e.g. "date-time"), or None if nothing matched
        """
        for format_pattern in cls.FORMAT_PATTERNS:
            if format_pattern.matches(text):
                logger.debug(f"'{text[:40]}' matched {format_pattern.name}")
                return format_pattern.format.value
        return None

    @classmethod
    def get_supported_formats(cls):
        return [fp.format.value for fp in cls.FORMAT_PATTERNS]
