import os
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import asdict, dataclass, field, fields
from typing import Any, ClassVar, Generic, Literal, NamedTuple, TypeVar

from .matcher import Matcher
from .resolve import Substitution, resolve_field, substitute_all, substitute_first

UAParser = tuple[
    str,
    str | None,
    str | None,
    str | None,
    str | None,
    str | None,
]
"""regex, family_replacement, v1_replacement .. v4_replacement"""

OSParser = tuple[
    str,
    str | None,
    str | None,
    str | None,
    str | None,
    str | None,
]
"""regex, os_replacement, os_v1_replacement .. os_v4_replacement"""

DeviceParser = tuple[
    str,
    Literal["i"] | None,
    str | None,
    str | None,
    str | None,
]
"""regex, regex_flag, device_replacement, brand_replacement, model_replacement"""


@dataclass(frozen=True, slots=True)
class UserAgent:
    family: str = ""
    major: str = ""
    minor: str = ""
    patch: str = ""
    patch_minor: str = ""


@dataclass(frozen=True, slots=True)
class OS:
    family: str = ""
    major: str = ""
    minor: str = ""
    patch: str = ""
    patch_minor: str = ""


@dataclass(frozen=True, slots=True)
class Device:
    family: str = ""
    brand: str = ""
    model: str = ""


R = TypeVar("R", UserAgent, OS, Device)


@dataclass(frozen=True)
class Kind(Generic[R]):
    """How the rules of one category fill their record.

    ``fields`` are the resolved fields in capture group order: the n-th field
    (1-based) maps to group n. ``substitutions`` gives, per field, how
    placeholders in its override template get replaced, ``None`` meaning the
    template is used verbatim.
    """

    record: type[R]
    fields: tuple[str, ...]
    substitutions: tuple[Substitution | None, ...]

    @property
    def default(self) -> R:
        return self.record(family="Other")


USER_AGENT = Kind(
    UserAgent,
    ("family", "major", "minor", "patch"),
    (substitute_first, None, None, None),
)
OPERATING_SYSTEM = Kind(
    OS,
    ("family", "major", "minor", "patch", "patch_minor"),
    (substitute_first, None, None, None, None),
)
DEVICE = Kind(
    Device,
    ("family", "brand", "model"),
    (substitute_all, substitute_all, substitute_all),
)


class Rule(Generic[R]):
    """One pattern and the override templates of the fields it fills.

    Calling a rule with a string returns its record, or ``None`` if the
    pattern does not match or the resolved primary field is empty.
    """

    kind: ClassVar[Kind[Any]]

    __slots__ = ("matcher", "templates")

    def __init__(
        self,
        regex: str,
        templates: Sequence[str | None] = (),
        case_insensitive: bool = False,
    ) -> None:
        self.matcher = Matcher(regex, case_insensitive)
        n = len(self.kind.fields)
        self.templates = tuple(templates[:n]) + (None,) * (n - len(templates))

    def __call__(self, s: str, /) -> R | None:
        groups = self.matcher.search(s)
        if groups is None:
            return None

        values = [
            resolve_field(template, groups, index, substitute)
            for index, (template, substitute) in enumerate(
                zip(self.templates, self.kind.substitutions), 1
            )
        ]
        if not values[0]:
            return None
        return self.kind.record(*values)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.matcher.pattern!r}, {self.templates!r})"


class UserAgentMatcher(Rule[UserAgent]):
    """Browser rule.

    ``v4_replacement`` is accepted for compatibility with uap-core rule files
    but unused: browser records never resolve ``patch_minor``.
    """

    kind = USER_AGENT
    __slots__ = ()

    @classmethod
    def from_descriptor(cls, descriptor: UAParser) -> "UserAgentMatcher":
        regex, *templates = descriptor
        return cls(regex, templates)


class OSMatcher(Rule[OS]):
    kind = OPERATING_SYSTEM
    __slots__ = ()

    @classmethod
    def from_descriptor(cls, descriptor: OSParser) -> "OSMatcher":
        regex, *templates = descriptor
        return cls(regex, templates)


class DeviceMatcher(Rule[Device]):
    kind = DEVICE
    __slots__ = ()

    @classmethod
    def from_descriptor(cls, descriptor: DeviceParser) -> "DeviceMatcher":
        regex, flag, *templates = descriptor
        return cls(regex, templates, case_insensitive=flag == "i")


class _Extractor(Generic[R]):
    rule_type: ClassVar[Any]

    __slots__ = ("rules",)

    def __init__(self, it: Iterable[Any], /) -> None:
        self.rules: tuple[Rule[R], ...] = tuple(
            self.rule_type.from_descriptor(d) for d in it
        )

    def extract(self, s: str, /) -> R | None:
        """Record of the first rule applying to ``s``, if any."""
        for rule in self.rules:
            r = rule(s)
            if r is not None:
                return r
        return None

    def __len__(self) -> int:
        return len(self.rules)


class UserAgentExtractor(_Extractor[UserAgent]):
    rule_type = UserAgentMatcher
    __slots__ = ()

    def __init__(self, it: Iterable[UAParser], /) -> None:
        super().__init__(it)


class OSExtractor(_Extractor[OS]):
    rule_type = OSMatcher
    __slots__ = ()

    def __init__(self, it: Iterable[OSParser], /) -> None:
        super().__init__(it)


class DeviceExtractor(_Extractor[Device]):
    rule_type = DeviceMatcher
    __slots__ = ()

    def __init__(self, it: Iterable[DeviceParser], /) -> None:
        super().__init__(it)


class Rules(NamedTuple):
    """Rule descriptors of the three categories, in rule file order."""

    user_agent: tuple[UAParser, ...] = ()
    os: tuple[OSParser, ...] = ()
    device: tuple[DeviceParser, ...] = ()


@dataclass(frozen=True)
class ParseResult:
    user_agent: UserAgent = field(default_factory=lambda: USER_AGENT.default)
    os: OS = field(default_factory=lambda: OPERATING_SYSTEM.default)
    device: Device = field(default_factory=lambda: DEVICE.default)
    string: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_agent": asdict(self.user_agent),
            "os": asdict(self.os),
            "device": asdict(self.device),
            "string": self.string,
        }

    def __str__(self) -> str:
        return " ".join(
            f"{label}: ({','.join(getattr(r, f.name) for f in fields(r))})"
            for label, r in (
                ("Browser", self.user_agent),
                ("OS", self.os),
                ("Device", self.device),
            )
        )


class Parser:
    """Browser, OS and device classification of user agent strings.

    Each category is looked up on its own: the first rule of the category
    that applies wins, and a category where no rule applies gets a record
    with ``family="Other"`` and every other field empty.

    A parser holds no mutable state once built and can be shared between
    threads.
    """

    __slots__ = ("user_agent", "os", "device")

    def __init__(
        self,
        user_agent: UserAgentExtractor,
        os: OSExtractor,
        device: DeviceExtractor,
    ) -> None:
        self.user_agent = user_agent
        self.os = os
        self.device = device

    @classmethod
    def from_rules(cls, rules: Rules | Mapping[str, Any]) -> "Parser":
        """Build a parser from rule descriptors or a loaded ``regexes.yaml``."""
        if not isinstance(rules, Rules):
            from .loader import rules_from_document

            rules = rules_from_document(rules)
        return cls(
            UserAgentExtractor(rules.user_agent),
            OSExtractor(rules.os),
            DeviceExtractor(rules.device),
        )

    @classmethod
    def from_yaml(cls, path: str | os.PathLike[str]) -> "Parser":
        """Build a parser from a uap-core ``regexes.yaml`` file."""
        from .loader import load_rules

        return cls.from_rules(load_rules(path))

    def parse_user_agent(self, s: str, /) -> UserAgent:
        return self.user_agent.extract(s) or USER_AGENT.default

    def parse_os(self, s: str, /) -> OS:
        return self.os.extract(s) or OPERATING_SYSTEM.default

    def parse_device(self, s: str, /) -> Device:
        return self.device.extract(s) or DEVICE.default

    def parse(self, s: str, /) -> ParseResult:
        return ParseResult(
            self.parse_user_agent(s),
            self.parse_os(s),
            self.parse_device(s),
            s,
        )
