"""Content quality filter for synthesized answers.

The answer endpoint always returns some text, even when its sources had
nothing to say about the subject. Those answers read like "I don't have
enough information about..." and would only add noise to a report.

This filter is a heuristic lexical check, not a semantic one: an answer is
unusable when the upstream flagged failure, when its text is blank, or when
the lower-cased text contains any configured hedge phrase. Some hedges will
slip through, and some real answers that happen to contain a phrase such as
"not available" will be dropped. Both are accepted; the phrase list is the
policy knob (HEDGE_PHRASES).
"""

from typing import Iterable

from config import DEFAULT_HEDGE_PHRASES
from models.research import Answer, Unusable, Usable
from models.section import SectionId


class ContentFilter:
    """Classifies answers as usable or unusable.

    Example:
        >>> content_filter = ContentFilter()
        >>> content_filter.find_hedge("We are UNABLE TO FIND any data.")
        'unable to find'
    """

    def __init__(self, phrases: Iterable[str] = DEFAULT_HEDGE_PHRASES):
        self.phrases = tuple(p.lower() for p in phrases if p.strip())

    def find_hedge(self, text: str) -> str | None:
        """Return the first hedge phrase found in text, or None."""
        lowered = text.lower()
        for phrase in self.phrases:
            if phrase in lowered:
                return phrase
        return None

    def classify(self, section: SectionId, answer: Answer) -> Usable | Unusable:
        """Classify the answer for one section."""
        if not answer.success:
            return Unusable(section, "upstream reported failure")
        if not answer.text.strip():
            return Unusable(section, "empty answer")
        hedge = self.find_hedge(answer.text)
        if hedge is not None:
            return Unusable(section, f"hedge phrase '{hedge}'")
        return Usable(section, answer.text.strip(), list(answer.citations))
