import logging
import pathlib

import pytest
import yaml

from ua_extractor import (
    InvalidRuleError,
    Parser,
    RuleFileError,
    Rules,
    load_parser,
    load_rules,
    rules_from_document,
)
from ua_extractor.loader import REGEXES_ENV

REGEXES = pathlib.Path(__file__).resolve().parent / "data" / "regexes.yaml"


def test_load_rules_keeps_file_order() -> None:
    rules = load_rules(REGEXES)
    assert len(rules.user_agent) == 4
    assert len(rules.os) == 5
    assert len(rules.device) == 5
    assert rules.os[0] == (r"Windows NT 10\.0", "Windows", "10", None, None, None)
    assert rules.os[-1] == ("(Linux)", None, None, None, None, None)
    assert rules.device[3] == ("googlebot", "i", "Spider", "Spider", "Desktop")


def test_load_rules_logs_counts(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="ua_extractor.loader"):
        load_rules(REGEXES)
    assert "loaded 4 user agent, 5 os and 5 device rules" in caplog.text


def test_rules_from_document_distinguishes_blank_and_missing() -> None:
    rules = rules_from_document(
        {"user_agent_parsers": [{"regex": "(Foo)", "v1_replacement": ""}]}
    )
    assert rules.user_agent == (("(Foo)", None, "", None, None, None),)


def test_missing_categories_are_empty() -> None:
    assert rules_from_document({}) == Rules()
    assert rules_from_document({"os_parsers": None}) == Rules()


@pytest.mark.parametrize(
    "document",
    [
        None,
        [],
        "regexes",
        {"device_parsers": {"regex": "x"}},
        {"device_parsers": [{"device_replacement": "x"}]},
        {"os_parsers": ["x"]},
        {"os_parsers": [{"regex": None}]},
        {"os_parsers": [{"regex": 42, "os_replacement": "X"}]},
    ],
)
def test_malformed_documents(document: object) -> None:
    with pytest.raises(RuleFileError):
        rules_from_document(document)


def test_invalid_regex(tmp_path: pathlib.Path) -> None:
    path = tmp_path / "regexes.yaml"
    path.write_text(yaml.safe_dump({"user_agent_parsers": [{"regex": "(Foo"}]}))
    with pytest.raises(InvalidRuleError):
        Parser.from_yaml(path)


def test_missing_file(tmp_path: pathlib.Path) -> None:
    with pytest.raises(OSError):
        load_rules(tmp_path / "missing.yaml")


def test_load_parser_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(REGEXES_ENV, str(REGEXES))
    parser = load_parser()
    assert parser.parse("Firefox/65.0").user_agent.family == "Firefox"


def test_load_parser_without_path(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(REGEXES_ENV, raising=False)
    with pytest.raises(RuleFileError):
        load_parser()
