"""
Prompt templates for the remote providers.
"""

from ..config.constants import MAX_CONTENT_CHARS
from ..config.settings import SummaryLength

_FORMAT_INSTRUCTIONS = (
    "IMPORTANT: Provide ONLY a <ul> list with {count} <li> items and no introduction, "
    "titles, or extra text. Format like this:\n"
    "\n"
    "<ul>\n"
    "{bullets}\n"
    "</ul>"
)


def truncate_content(content: str, limit: int = MAX_CONTENT_CHARS) -> str:
    """Cut page content to the character budget sent to remote providers."""
    return content[:limit]


def _ordinal(n: int) -> str:
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(n, "th")
    return f"{n}{suffix}"


def bullet_placeholders(count: int) -> str:
    return "\n".join(
        f"<li>[{_ordinal(i)} bullet content]</li>" for i in range(1, count + 1)
    )


def format_instructions(length: SummaryLength) -> str:
    count = length.bullet_count
    return _FORMAT_INSTRUCTIONS.format(count=count, bullets=bullet_placeholders(count))


def build_chat_prompt(content: str, language: str, length: SummaryLength) -> str:
    """Prompt with the language line after the format block (OpenAI layout)."""
    return (
        f"{format_instructions(length)}\n"
        "\n"
        f"Provide the summary in the following language: {language}\n"
        "\n"
        "Content to summarize:\n"
        f"{truncate_content(content)}"
    )


def build_language_first_prompt(content: str, language: str, length: SummaryLength) -> str:
    """Prompt with the language line first (Gemini layout)."""
    return (
        f"Provide the summary in the following language: {language}\n"
        "\n"
        f"{format_instructions(length)}\n"
        "\n"
        "Content to summarize:\n"
        f"{truncate_content(content)}"
    )


def build_system_prompt(language: str) -> str:
    return f"You are a helpful assistant that provides concise summaries in {language}."


def build_user_prompt(content: str, length: SummaryLength) -> str:
    """Prompt without a language line; the language goes in the system prompt (Anthropic layout)."""
    return (
        f"{format_instructions(length)}\n"
        "\n"
        "Content to summarize:\n"
        f"{truncate_content(content)}"
    )
