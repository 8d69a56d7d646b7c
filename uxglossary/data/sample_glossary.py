"""
Termos de exemplo servidos enquanto o documento do glossário não existe.

Só usados quando ``storage.sample_data_fallback`` está ligado; nunca são
gravados no store.
"""

from uxglossary.domain.models import GlossaryRecord

SAMPLE_RECORDS = (
    GlossaryRecord(
        term="A/B Testing",
        definition="Comparing two versions of a design to see which performs better.",
    ),
    GlossaryRecord(
        term="Accessibility",
        definition="The practice of making products usable by people with a wide range of abilities.",
        acronym="a11y",
    ),
    GlossaryRecord(
        term="Card Sorting",
        definition="A research method where participants organise topics into groups.",
    ),
    GlossaryRecord(
        term="User Experience",
        definition="The overall experience of a person using a product or service.",
        acronym="UX",
    ),
    GlossaryRecord(
        term="Wireframe",
        definition="A low-fidelity layout showing the structure of a page.",
        see_also="Prototype",
    ),
    GlossaryRecord(
        term="404 Page",
        definition="The page shown when a requested resource cannot be found.",
    ),
)
