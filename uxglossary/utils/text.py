import unicodedata

from uxglossary.config.constants import CsvConfig


def remove_accents(text: str) -> str:
    return (
        unicodedata.normalize("NFKD", text)
        .encode("ASCII", "ignore")
        .decode("utf-8")
    )


def collation_key(term: str) -> tuple:
    """
    Sort key approximating a locale-aware comparison.

    Primary level ignores accents and case, then accents are compared,
    and lowercase sorts before uppercase as the last tie-break.
    """
    return (remove_accents(term).casefold(), term.casefold(), term.swapcase())


def derive_letter(term: str) -> str:
    """First character of the term uppercased, or "0" when it is not A-Z."""
    if not term:
        return CsvConfig.DIGIT_GROUP
    first = term[0].upper()
    if "A" <= first <= "Z":
        return first
    return CsvConfig.DIGIT_GROUP
