from __future__ import annotations
import logging
from ..ai.formatting import format_insights
from ..ai.generators import TextGenerator
from ..ai.prompts import build_prompt
from ..exceptions import BadRequestError
from ..models import InsightRequest, InsightResponse

logger = logging.getLogger(__name__)

class InsightService:
    """
    Business service that prompts the text generator about a film.
    """

    def __init__(self, generator: TextGenerator) -> None:
        self.generator: TextGenerator = generator

    async def generate(self, request: InsightRequest) -> InsightResponse:
        if not request.title or not request.title.strip():
            raise BadRequestError("Film title is required")

        prompt, max_tokens = build_prompt(request)
        logger.info("Generating %s insights for %r", "extended" if request.is_extended else "standard", request.title)
        text: str = await self.generator.complete(prompt, max_tokens)
        return InsightResponse(insights=format_insights(text), success=True)
