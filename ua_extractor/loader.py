"""Loading of uap-core ``regexes.yaml`` rule files."""

import logging
import os
import pathlib
from collections.abc import Mapping
from typing import Any

try:
    from yaml import CSafeLoader as SafeLoader, load
except ImportError:
    from yaml import SafeLoader, load  # type: ignore

from .core import DeviceParser, OSParser, Parser, Rules, UAParser
from .exceptions import RuleFileError

logger = logging.getLogger(__name__)

REGEXES_ENV = "UA_EXTRACTOR_REGEXES"


def _entries(document: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    entries = document.get(key) or []
    if not isinstance(entries, list):
        raise RuleFileError(f"{key} must be a list, got {type(entries).__name__}")
    for i, t in enumerate(entries):
        if not isinstance(t, Mapping) or not isinstance(t.get("regex"), str):
            raise RuleFileError(f"{key}[{i}] has no regex")
    return entries


def rules_from_document(document: Any) -> Rules:
    """Rule descriptors of an already deserialized ``regexes.yaml``."""
    if not isinstance(document, Mapping):
        raise RuleFileError(
            f"rule file must be a mapping, got {type(document).__name__}"
        )

    user_agent: tuple[UAParser, ...] = tuple(
        (
            t["regex"],
            t.get("family_replacement"),
            t.get("v1_replacement"),
            t.get("v2_replacement"),
            t.get("v3_replacement"),
            t.get("v4_replacement"),
        )
        for t in _entries(document, "user_agent_parsers")
    )
    os_: tuple[OSParser, ...] = tuple(
        (
            t["regex"],
            t.get("os_replacement"),
            t.get("os_v1_replacement"),
            t.get("os_v2_replacement"),
            t.get("os_v3_replacement"),
            t.get("os_v4_replacement"),
        )
        for t in _entries(document, "os_parsers")
    )
    device: tuple[DeviceParser, ...] = tuple(
        (
            t["regex"],
            t.get("regex_flag"),
            t.get("device_replacement"),
            t.get("brand_replacement"),
            t.get("model_replacement"),
        )
        for t in _entries(document, "device_parsers")
    )
    return Rules(user_agent, os_, device)


def load_rules(path: str | os.PathLike[str]) -> Rules:
    path = pathlib.Path(path)
    logger.debug("loading rules from %s", path)
    with path.open("rb") as f:
        contents = load(f, Loader=SafeLoader)

    rules = rules_from_document(contents)
    logger.info(
        "loaded %d user agent, %d os and %d device rules from %s",
        len(rules.user_agent),
        len(rules.os),
        len(rules.device),
        path,
    )
    return rules


def load_parser(path: str | os.PathLike[str] | None = None) -> Parser:
    """Parser for the rule file at ``path``.

    Without a path, the file named by the ``UA_EXTRACTOR_REGEXES``
    environment variable is used.
    """
    if path is None:
        path = os.environ.get(REGEXES_ENV)
        if not path:
            raise RuleFileError(f"no rule file given and {REGEXES_ENV} is not set")
    return Parser.from_rules(load_rules(path))
