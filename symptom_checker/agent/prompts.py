# Prompt construction for the symptom checker.
# The model gets a fixed system instruction (persona, today's date, mandated
# three-section answer, disclaimer) and a user turn embedding web context + query.

from datetime import date

from symptom_checker.core.config import MAX_OUTPUT_TOKENS
from symptom_checker.schemas.relay import InferenceRequest

ANALYSIS_HEADER = "### Detailed Analysis of Possible Conditions"
HOME_CARE_HEADER = "### Comprehensive Home Care & Remedies"
WARNING_SIGNS_HEADER = "### Urgent Warning Signs (When to see a Doctor)"

SECTION_HEADERS = (ANALYSIS_HEADER, HOME_CARE_HEADER, WARNING_SIGNS_HEADER)

SYSTEM_PROMPT_TEMPLATE = """
You are a professional AI Health Symptom Checker. Date: {today}.

Analyze the symptoms based on the provided web search context.
Structure your response exactly like this:
1. {analysis}
2. {home_care}
3. {warning_signs}

Be educational, safe, and detailed. Do not claim certainty; use cautious language.
Always include a disclaimer that you are not a medical professional and that the
user should consult a qualified healthcare provider.
"""


def format_date(day: date) -> str:
    """Human-readable date for temporal grounding, e.g. 'Mon Oct 19 2026'."""
    return day.strftime("%a %b %d %Y")


def build_system_prompt(today: date | None = None) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(
        today=format_date(today or date.today()),
        analysis=ANALYSIS_HEADER,
        home_care=HOME_CARE_HEADER,
        warning_signs=WARNING_SIGNS_HEADER,
    ).strip()


def build_user_content(context: str, query: str) -> str:
    return f"Context:\n{context}\n\nQuery:\n{query}"


def build_inference_request(
    context: str,
    query: str,
    today: date | None = None,
    max_tokens: int = MAX_OUTPUT_TOKENS,
) -> InferenceRequest:
    return InferenceRequest(
        system_instruction=build_system_prompt(today),
        user_content=build_user_content(context, query),
        max_tokens=max_tokens,
    )
