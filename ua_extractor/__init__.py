"""Browser, OS and device extraction from user agent strings.

Build a :class:`Parser` from a uap-core ``regexes.yaml`` and parse::

    parser = Parser.from_yaml("regexes.yaml")
    result = parser.parse(ua_string)
    result.user_agent.family, result.os.family, result.device.brand
"""

from .core import (
    OS,
    Device,
    DeviceExtractor,
    DeviceMatcher,
    DeviceParser,
    OSExtractor,
    OSMatcher,
    OSParser,
    Parser,
    ParseResult,
    Rules,
    UAParser,
    UserAgent,
    UserAgentExtractor,
    UserAgentMatcher,
)
from .exceptions import InvalidRuleError, RuleFileError, UAExtractorError
from .loader import load_parser, load_rules, rules_from_document
from .matcher import Matcher

__all__ = [
    "OS",
    "Device",
    "DeviceExtractor",
    "DeviceMatcher",
    "DeviceParser",
    "InvalidRuleError",
    "Matcher",
    "OSExtractor",
    "OSMatcher",
    "OSParser",
    "ParseResult",
    "Parser",
    "RuleFileError",
    "Rules",
    "UAExtractorError",
    "UAParser",
    "UserAgent",
    "UserAgentExtractor",
    "UserAgentMatcher",
    "load_parser",
    "load_rules",
    "rules_from_document",
]
