"""
Rule-based analysis of complaint text.

``analyze`` scores a complaint's title and description against the
keyword tables in :mod:`complaints.lexicons` and returns sentiment,
category, urgency, emotional intensity, a confidence score and a short
list of extracted keywords.  Everything here is a pure function of its
input: no I/O, no clock, no shared mutable state.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field

from complaints.lexicons import (
    CAPS_MARKER,
    CATEGORY_KEYWORDS,
    DEFAULT_URGENCY,
    EMPHASIS_WORDS,
    OTHER_CATEGORY,
    SENTIMENT_LEVELS,
    STOPWORDS,
    URGENCY_LEVELS,
)

OTHER_CONFIDENCE = 0.3
MAX_KEYWORDS = 10
MAX_INTENSITY = 10
MAX_EXCLAMATION_BONUS = 3

_CATEGORY_TABLE = dict(CATEGORY_KEYWORDS)


@dataclass(frozen=True)
class AnalysisResult:
    sentiment: str
    keywords: tuple[str, ...]
    suggested_category: str
    confidence_score: float
    emotional_intensity: int
    urgency_score: str
    similar_complaints: tuple[str, ...] = field(default_factory=tuple)

    def as_dict(self) -> dict:
        """JSON shape stored on complaints and returned by the API."""
        return {
            'sentiment': self.sentiment,
            'keywords': list(self.keywords),
            'suggestedCategory': self.suggested_category,
            'confidenceScore': self.confidence_score,
            'emotionalIntensity': self.emotional_intensity,
            'urgencyScore': self.urgency_score,
            'similarComplaints': list(self.similar_complaints),
        }


def analyze(description: str, title: str = '') -> AnalysisResult:
    """Analyse a complaint.

    The title (optional) is joined to the description with a single space
    and the combined text is lowercased before matching.  Any string,
    including an empty one, yields a complete result.
    """
    raw = f"{title or ''} {description or ''}"
    text = raw.lower()
    category = categorize(text)
    return AnalysisResult(
        sentiment=score_sentiment(text),
        keywords=extract_keywords(text),
        suggested_category=category,
        confidence_score=confidence_score(text, category),
        emotional_intensity=emotional_intensity(text, raw),
        urgency_score=score_urgency(text),
    )


def score_sentiment(text: str) -> str:
    # Every occurrence counts, so strong negatives can be outweighed.
    score = 0
    for _label, weight, keywords in SENTIMENT_LEVELS:
        for keyword in keywords:
            score += weight * text.count(keyword)
    if score <= -3:
        return 'very_negative'
    if score < 0:
        return 'negative'
    if score == 0:
        return 'neutral'
    return 'positive'


def category_scores(text: str) -> list[tuple[str, float]]:
    """Return ``(label, score)`` pairs in table order."""
    scores: list[tuple[str, float]] = []
    for label, keywords in CATEGORY_KEYWORDS:
        score = 0.0
        for keyword in keywords:
            if keyword in text:
                score += 1
                if f"{keyword} " in text:
                    score += 0.5
        scores.append((label, score))
    return scores


def categorize(text: str) -> str:
    best_label, best_score = OTHER_CATEGORY, 0.0
    for label, score in category_scores(text):
        if score > best_score:
            best_label, best_score = label, score
    return best_label


def confidence_score(text: str, category: str) -> float:
    keywords = _CATEGORY_TABLE.get(category)
    if not keywords:
        return OTHER_CONFIDENCE
    matches = sum(1 for keyword in keywords if keyword in text)
    confidence = min(matches / len(keywords), 1)
    # half-up rounding to two decimals
    return math.floor(confidence * 100 + 0.5) / 100


def score_urgency(text: str) -> str:
    best_label, best_rank = DEFAULT_URGENCY, 0
    for label, rank, keywords in URGENCY_LEVELS:
        if rank > best_rank and any(keyword in text for keyword in keywords):
            best_label, best_rank = label, rank
    return best_label


def emotional_intensity(text: str, raw: str | None = None) -> int:
    """Score emphasis on a 1..10 scale.

    ``text`` is the lowercased haystack.  ``raw`` is the original text and
    is only used for the all-caps check, which fires when a non-blank
    message has no lowercase letters.
    """
    raw = text if raw is None else raw
    intensity = 1
    for word in EMPHASIS_WORDS:
        if word == CAPS_MARKER:
            if raw.strip() and raw == raw.upper():
                intensity += 2
        elif word.lower() in text:
            intensity += 1
    intensity += min(text.count('!'), MAX_EXCLAMATION_BONUS)
    return min(intensity, MAX_INTENSITY)


def extract_keywords(text: str) -> tuple[str, ...]:
    seen: list[str] = []
    for word in text.split():
        if len(word) <= 3 or word.lower() in STOPWORDS:
            continue
        word = word.lower()
        if word not in seen:
            seen.append(word)
        if len(seen) == MAX_KEYWORDS:
            break
    return tuple(seen)
