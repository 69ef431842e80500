"""Prompt templates for handoff summaries."""

SYSTEM_PROMPT = "You are an assistant that summarizes calls"


def get_system_prompt() -> str:
    """Get the system prompt for the summarizer."""
    return SYSTEM_PROMPT


def get_user_prompt(transcript_text: str) -> str:
    """Build the summarization request for a transcript."""
    return (
        "You are a helpful assistant. Summarize the following call transcript into a "
        "concise actionable summary for another agent. Bullet points and key facts only."
        f"\n\nTranscript:\n{transcript_text}"
    )
