from __future__ import annotations
from typing import List

SENTENCE_BREAK: str = ". "
PARAGRAPH_BREAK: str = "\n\n"

def format_insights(text: str) -> str:
    """
    Turn generated prose into one paragraph per sentence.

    Sentences are found by splitting on ". ", which also breaks inside
    abbreviations ("Dr. No"), decimals followed by a space and quoted dialogue.
    Every fragment is made to end with a single period.
    """
    text = (text or "").strip()
    if not text:
        return ""
    sentences: List[str] = [s if s.endswith(".") else s + "." for s in text.split(SENTENCE_BREAK)]
    return PARAGRAPH_BREAK.join(sentences)
