import pytest

from uxglossary.config.exceptions import ConflictError, NotFoundError
from uxglossary.domain.models import GlossaryRecord
from uxglossary.services import merge

pytestmark = pytest.mark.unit


def _rec(term, definition="d", **kwargs):
    return GlossaryRecord(term=term, definition=definition, **kwargs)


def test_upsert_batch_counts_added_and_updated():
    existing = [_rec("Alpha"), _rec("Beta")]
    incoming = [_rec("alpha", "new"), _rec("Gamma"), _rec("Delta")]

    result = merge.upsert_batch(existing, incoming)

    assert result.added == 2
    assert result.updated == 1
    assert len(result.records) == 4
    by_key = {r.key: r for r in result.records}
    assert by_key["alpha"].definition == "new"
    assert by_key["alpha"].term == "alpha"


def test_upsert_batch_last_duplicate_in_batch_wins():
    result = merge.upsert_batch([], [_rec("Alpha", "one"), _rec("ALPHA", "two")])
    assert result.added == 1
    assert result.updated == 1
    assert [r.definition for r in result.records] == ["two"]


def test_add_record_rejects_existing_term_case_insensitive():
    with pytest.raises(ConflictError) as exc:
        merge.add_record([_rec("Alpha")], _rec("ALPHA"))
    assert exc.value.identifier == "ALPHA"


def test_add_record_appends_new_term():
    records = merge.add_record([_rec("Alpha")], _rec("Beta"))
    assert [r.term for r in records] == ["Alpha", "Beta"]


def test_edit_record_renames_via_original_term():
    existing = [_rec("Alpha"), _rec("Beta")]
    records, previous = merge.edit_record(existing, _rec("Alphabet", "renamed"), original_term="Alpha")

    assert previous.term == "Alpha"
    assert [r.term for r in records] == ["Alphabet", "Beta"]
    assert records[0].letter == "A"


def test_edit_record_matches_original_term_case_insensitively():
    records, previous = merge.edit_record([_rec("Alpha")], _rec("Alpha", "x"), original_term="alpha")
    assert previous.definition == "d"
    assert records[0].definition == "x"


def test_edit_record_without_original_term_prefers_same_letter():
    existing = [_rec("Alpha", letter="B"), _rec("Alpha", letter="A")]
    records, previous = merge.edit_record(existing, _rec("Alpha", "new", letter="A"))
    assert previous.letter == "A"
    assert records[0].letter == "B" and records[0].definition == "d"
    assert records[1].definition == "new"


def test_edit_record_falls_back_to_case_insensitive_term():
    records, _ = merge.edit_record([_rec("alpha")], _rec("ALPHA", "new"))
    assert records[0].term == "ALPHA"


def test_edit_record_missing_target_raises_not_found():
    with pytest.raises(NotFoundError):
        merge.edit_record([_rec("Alpha")], _rec("Gamma"), original_term="Beta")


def test_edit_record_rename_onto_other_term_conflicts():
    with pytest.raises(ConflictError):
        merge.edit_record([_rec("Alpha"), _rec("Beta")], _rec("beta"), original_term="Alpha")


def test_delete_record_case_insensitive():
    records, deleted = merge.delete_record([_rec("Alpha"), _rec("Beta")], "  BETA ")
    assert deleted.term == "Beta"
    assert [r.term for r in records] == ["Alpha"]


def test_delete_record_missing_raises_not_found():
    with pytest.raises(NotFoundError) as exc:
        merge.delete_record([_rec("Alpha")], "Beta")
    assert exc.value.identifier == "Beta"


def test_find_duplicates_and_dedupe():
    records = [_rec("Alpha", "first"), _rec("alpha", "second"), _rec("Beta"), _rec("ALPHA", "third")]

    duplicates = merge.find_duplicates(records)
    assert list(duplicates) == ["A:alpha"]
    assert len(duplicates["A:alpha"]) == 3

    cleaned = merge.dedupe(records)
    assert [(r.term, r.definition) for r in cleaned] == [("Alpha", "first"), ("Beta", "d")]
