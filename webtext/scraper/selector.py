"""Choose between the paginated and the readability candidate.

The print-rendered text is the baseline.  Readability only overrides it when
both word counts agree that the page is substantially textual, which guards
against readability picking boilerplate on sparse pages.
"""

from __future__ import annotations

from typing import Optional

from webtext.scraper.models import SelectionResult, TextCandidate

# Strict lower bounds: a count must EXCEED these to be considered rich.
PAGINATED_RICH_ABOVE = 999
READABILITY_RICH_ABOVE = 500


def select_candidate(
    paginated: Optional[TextCandidate],
    readability: Optional[TextCandidate],
) -> SelectionResult:
    """Return the text to serve from up to two candidates.

    ``None`` means the extractor failed, which is not the same as a candidate
    with zero words: an empty paginated candidate still wins the fallback.
    """
    p_words = paginated.word_count if paginated is not None else 0
    r_words = readability.word_count if readability is not None else 0

    page_is_text_rich = p_words > PAGINATED_RICH_ABOVE
    readability_is_text_rich = r_words > READABILITY_RICH_ABOVE

    if (
        paginated is not None
        and readability is not None
        and page_is_text_rich
        and readability_is_text_rich
    ):
        return SelectionResult(text=readability.text, chosen_source=readability.source)

    if paginated is not None:
        return SelectionResult(text=paginated.text, chosen_source=paginated.source)

    if readability is not None:
        return SelectionResult(text=readability.text, chosen_source=readability.source)

    return SelectionResult.empty()
