from __future__ import annotations
from typing import Any, List, Optional, Tuple
from ..models import InsightRequest

STANDARD_MAX_TOKENS: int = 300
EXTENDED_MAX_TOKENS: int = 400

STANDARD_PROMPT: str = (
    'Generate engaging fun facts and insights about the film "{title}" ({year}).\n'
    "\n"
    "Film details:\n"
    "Director: {director}\n"
    "Cast: {cast}\n"
    "Plot: {overview}\n"
    "Budget: {budget}\n"
    "Revenue: {revenue}\n"
    "Runtime: {runtime}\n"
    "\n"
    "Provide a short summary of a few points covering trivia, production challenges, "
    "cast/crew details, reception, and the director's other notable films or awards."
)

EXTENDED_PROMPT: str = (
    'Provide additional detailed insights about "{title}" ({year}). Focus on:\n'
    "\n"
    "- Behind-the-scenes stories and trivia\n"
    "- Production challenges\n"
    "- Casting decisions or actor prep\n"
    "- Technical innovations\n"
    "- Cultural impact\n"
    "- Box office context\n"
    "- Critical reception and awards\n"
    "\n"
    "Film context:\n"
    "Director: {director}\n"
    "Cast: {cast}\n"
    "Plot: {overview}\n"
    "Budget: {budget}\n"
    "Revenue: {revenue}"
)

UNKNOWN: str = "Unknown"

def _or_unknown(value: Any) -> str:
    if value is None or (isinstance(value, str) and not value.strip()):
        return UNKNOWN
    return str(value)

def format_money(amount: Optional[float]) -> str:
    """
    Dollar amount with thousands separators, e.g. 1000000 -> "$1,000,000".
    Zero means TMDB has no figure for the film.
    """
    if not amount:
        return UNKNOWN
    if float(amount).is_integer():
        return f"${int(amount):,}"
    return f"${amount:,}"

def format_cast(main_cast: Optional[List[str]]) -> str:
    return ", ".join(main_cast) if main_cast else UNKNOWN

def build_prompt(request: InsightRequest) -> Tuple[str, int]:
    """
    Render the prompt for `request` and pick its output-length cap.
    """
    template: str = EXTENDED_PROMPT if request.is_extended else STANDARD_PROMPT
    max_tokens: int = EXTENDED_MAX_TOKENS if request.is_extended else STANDARD_MAX_TOKENS
    runtime: str = f"{request.runtime} minutes" if request.runtime else UNKNOWN
    prompt: str = template.format(
        title=request.title,
        year=_or_unknown(request.year),
        director=_or_unknown(request.director),
        cast=format_cast(request.main_cast),
        overview=_or_unknown(request.overview),
        budget=format_money(request.budget),
        revenue=format_money(request.revenue),
        runtime=runtime,
    )
    return prompt, max_tokens
