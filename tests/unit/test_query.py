import pytest

from uxglossary.config.exceptions import ValidationError
from uxglossary.domain.models import GlossaryRecord
from uxglossary.services import query

pytestmark = pytest.mark.unit


def test_group_by_letter_sorts_each_group(records):
    grouped = query.group_by_letter(records)
    assert sorted(grouped) == ["0", "A", "U"]
    assert [r.term for r in grouped["U"]] == ["Usability", "User Experience"]


def test_group_by_letter_puts_digit_terms_in_zero_group():
    record = GlossaryRecord(letter="N", term="9 Box", definition="d")
    assert query.group_by_letter([record]) == {"0": [record]}


def test_flatten_orders_groups(records):
    flat = query.flatten(query.group_by_letter(records))
    assert [r.term for r in flat] == ["404 Page", "Affordance", "Usability", "User Experience"]


@pytest.mark.parametrize("raw,expected", [("a", "A"), ("Z", "Z"), ("0-9", "0"), ("0", "0"), (" u ", "U")])
def test_normalize_letter_param(raw, expected):
    assert query.normalize_letter_param(raw) == expected


@pytest.mark.parametrize("raw", ["AB", "1", "", "é", "-"])
def test_normalize_letter_param_rejects_invalid(raw):
    with pytest.raises(ValidationError) as exc:
        query.normalize_letter_param(raw)
    assert exc.value.field == "letter"


def test_items_for_letter(records):
    assert [r.term for r in query.items_for_letter(records, "0-9")] == ["404 Page"]
    assert query.items_for_letter(records, "Q") == []


def test_search_matches_term_definition_and_acronym(records):
    assert [r.term for r in query.search(records, "ux")] == ["User Experience"]
    assert [r.term for r in query.search(records, "EASE")] == ["Usability"]
    assert {r.term for r in query.search(records, "us")} == {"Usability", "User Experience"}


def test_search_does_not_fail_on_missing_acronym(records):
    assert query.search(records, "zzz") == []


def test_search_min_length_short_circuits(records):
    assert query.search(records, "u", min_length=2) == []
    assert query.search(records, "u") != []
    assert query.search(records, "   ") == []


def test_find_by_term(records):
    assert query.find_by_term(records, "user experience").acronym == "UX"
    assert query.find_by_term(records, "nope") is None
