import pytest

import uap_core
from ua_extractor import Parser, rules_from_document


@pytest.fixture(scope="session")
def core_parser() -> Parser:
    if not uap_core.available():
        pytest.skip("UAP_CORE_DIR does not point to a uap-core checkout")
    return Parser.from_rules(
        rules_from_document(uap_core.load_file(uap_core.core_file("regexes.yaml")))
    )
