"""
Context assembler.

Turns a RetrievalContext into the length-bounded text block handed to the
generation component, with a source attribution header per passage.

Dependencies: context_pipeline.models
System role: Final stage of grounding
"""

from context_pipeline.models.retrieval import RetrievalContext, RetrievalResult

NO_CONTEXT_AVAILABLE = "No relevant organizational context was found for this query."

DEFAULT_MAX_LENGTH = 4000


def format_result_block(result: RetrievalResult) -> str:
    """Source header plus content for one result."""
    title = result.document_title or f"Document {result.document_id}"
    header = f"[Source: {title}, {result.section_title}]" if result.section_title else f"[Source: {title}]"
    return f"{header}\n{result.content}\n\n"


def build_context_string(context: RetrievalContext, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """
    Assemble retrieved passages into a bounded context string.

    Blocks are added in rank order until the next one would push the text
    past max_length. The source summary line is appended afterwards and is
    not counted against the budget.

    Args:
        context: Retrieval context
        max_length: Character budget for the passage blocks

    Returns:
        str: Assembled context (empty when nothing fits and there are no sources)
    """
    parts: list[str] = []
    length = 0
    for result in context.results:
        block = format_result_block(result)
        if length + len(block) > max_length:
            break
        parts.append(block)
        length += len(block)

    if context.sources:
        titles = ", ".join(source.document_title for source in context.sources)
        parts.append(f"\nInformation sourced from {len(context.sources)} document(s): {titles}")

    return "".join(parts)
