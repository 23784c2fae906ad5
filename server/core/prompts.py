"""Prompt assembly for fitness plan generation."""

from shared.models.documents import PromptTemplate, RagContextDocument

NO_CONTEXT_TEXT = "No previous context available."


def render_context(context_docs: list[RagContextDocument]) -> list[str]:
    """Render retrieved documents as "<content>\\nDate: <date>" blocks.

    The date is metadata.created_at, then metadata.timestamp, then "unknown".
    """
    return [f"{doc.content}\nDate: {doc.date_label()}" for doc in context_docs]


def fitness_plan_prompt_template(context: list[str], goal: str, input: str) -> str:
    """Default prompt template. Pure: the output depends only on its arguments."""
    context_text = "\n\n".join(context) if context else NO_CONTEXT_TEXT
    return f"""
You are a fitness coach AI.

User Goal: {goal}

User Input: {input}

Use the following relevant context from the user's previous plans and entries (include the date):
{context_text}

Create a detailed fitness plan for the user based on the goal and input. Respond in clear structured text.
"""


def build_prompt(
    context_docs: list[RagContextDocument],
    goal: str,
    input: str,
    template: PromptTemplate = fitness_plan_prompt_template,
) -> str:
    """Render the context documents and feed them to a prompt template."""
    return template(render_context(context_docs), goal, input)
