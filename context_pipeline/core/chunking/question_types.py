"""
Question-type keyword dictionaries.

Chunks are tagged with the grant question types they are relevant to at
ingestion time, and retrieval can restrict candidates to those types.
The two dictionaries differ slightly: retrieval casts a wider net for
mission, methodology, outcomes and team questions.

Dependencies: None
System role: Topic tagging for chunker and retrieval filters
"""

CHUNK_TOPIC_KEYWORDS: dict[str, tuple[str, ...]] = {
    "mission": ("mission", "vision", "purpose", "goal", "objective"),
    "methodology": ("method", "approach", "process", "procedure", "technique", "strategy"),
    "budget": ("budget", "cost", "funding", "financial", "expense", "revenue", "$"),
    "timeline": ("timeline", "schedule", "deadline", "duration", "phase", "month", "year"),
    "outcomes": ("outcome", "result", "impact", "effect", "achievement", "success"),
    "team": ("team", "staff", "personnel", "researcher", "investigator", "coordinator"),
    "sustainability": ("sustainability", "continuation", "long-term", "future", "ongoing"),
    "evaluation": ("evaluation", "assessment", "measurement", "metric", "indicator"),
}

RETRIEVAL_TOPIC_KEYWORDS: dict[str, tuple[str, ...]] = {
    "mission": ("mission", "vision", "purpose", "goal", "objective", "serve", "community"),
    "methodology": ("method", "approach", "process", "evaluation", "measure", "assess"),
    "budget": ("budget", "cost", "funding", "financial", "expense", "$", "dollar"),
    "timeline": ("timeline", "schedule", "deadline", "duration", "month", "year", "phase"),
    "outcomes": ("outcome", "result", "impact", "effect", "success", "achievement", "improve"),
    "team": ("team", "staff", "personnel", "experience", "qualifications", "director"),
    "sustainability": ("sustainability", "continuation", "long-term", "future", "ongoing"),
}


def identify_relevant_question_types(content: str, question_types: list[str]) -> list[str]:
    """
    Return the requested question types whose keywords appear in content.

    Args:
        content: Chunk text
        question_types: Question types to test, in caller order

    Returns:
        list[str]: Matching question types (unknown types never match)
    """
    lowered = content.lower()
    return [
        question_type
        for question_type in question_types
        if any(keyword in lowered for keyword in CHUNK_TOPIC_KEYWORDS.get(question_type.lower(), ()))
    ]


def matches_question_types(content: str, question_types: list[str]) -> bool:
    """True if content contains a retrieval keyword of any requested type."""
    lowered = content.lower()
    return any(
        keyword in lowered
        for question_type in question_types
        for keyword in RETRIEVAL_TOPIC_KEYWORDS.get(question_type.lower(), ())
    )
