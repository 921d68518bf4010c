import json
import logging
from typing import Any, Dict, Optional
from openai import AsyncOpenAI
from pydantic import ValidationError
from app.config import get_settings
from app.exceptions import (
    AIConfigurationError,
    AIResponseError,
    AnalysisParseError,
    UnsupportedProviderError,
)
from app.schemas.analysis import AIAnalysisData

logger = logging.getLogger(__name__)
settings = get_settings()


ANALYSIS_SCHEMA_PROMPT = """{
  "basicVisualProperties": {
    "dominantColors": ["color1", "color2", ...],
    "secondaryColors": ["color1", "color2", ...],
    "colorTemperature": "warm" | "cool" | "neutral",
    "colorPalette": ["color1", "color2", ...]
  },
  "textureAnalysis": {
    "textureType": "description",
    "textureDescription": "detailed description",
    "surfaceQuality": "description"
  },
  "styleAndGenre": {
    "style": "art style",
    "genre": "genre",
    "movement": "art movement (optional)",
    "period": "time period (optional)"
  },
  "subjectMatter": {
    "primarySubject": "main subject",
    "secondarySubjects": ["subject1", "subject2", ...],
    "themes": ["theme1", "theme2", ...],
    "narrative": "narrative description (optional)"
  },
  "mediumAndTechnique": {
    "medium": "medium type",
    "technique": "technique used",
    "materials": ["material1", "material2", ...]
  },
  "composition": {
    "layout": "layout description",
    "focalPoint": "focal point description",
    "balance": "balance description",
    "perspective": "perspective (optional)"
  },
  "spaceAndDisplay": {
    "recommendedRoomTypes": ["room1", "room2", ...],
    "recommendedWallColor": ["color1", "color2", ...],
    "lightingRecommendations": ["recommendation1", ...],
    "sizeRecommendations": "size recommendation"
  },
  "psychologicalImpact": {
    "mood": ["mood1", "mood2", ...],
    "energyLevel": "low" | "medium" | "high",
    "emotionalTone": "emotional tone description"
  },
  "marketAnalysis": {
    "targetAudience": ["audience1", "audience2", ...],
    "priceRange": "price range (optional)",
    "collectibility": "low" | "medium" | "high"
  },
  "tags": ["tag1", "tag2", "tag3", ...]
}"""


def create_openai_client() -> AsyncOpenAI:
    """Build an OpenAI client, failing early when no API key is configured."""
    if not settings.openai_api_key:
        raise AIConfigurationError("OPENAI_API_KEY environment variable is required for AI features")
    return AsyncOpenAI(api_key=settings.openai_api_key)


def extract_content(response: Any) -> str:
    """Return the first choice's message content or raise if it is empty."""
    choices = getattr(response, "choices", None) or []
    content = choices[0].message.content if choices else None
    if not content:
        raise AIResponseError("No response from AI")
    return content


class InferenceAgent:
    """Agent responsible for AI-powered artwork analysis."""

    def __init__(self, client: Optional[AsyncOpenAI] = None):
        self.settings = settings
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = create_openai_client()
        return self._client

    async def analyze_artwork(self, image_url: str, artwork: Dict[str, Any]) -> AIAnalysisData:
        """
        Analyze an artwork image with the configured AI provider.

        Args:
            image_url: Public URL of the artwork image
            artwork: Catalog record, used for title and creator context

        Returns:
            Validated analysis data

        Raises:
            UnsupportedProviderError: If the configured provider is not supported
            AIResponseError: If the provider returns no content
            AnalysisParseError: If the content is not valid analysis JSON
        """
        provider = self.settings.ai_provider.lower()
        if provider == "openai":
            return await self._analyze_with_openai(image_url, artwork)
        raise UnsupportedProviderError(f"Unsupported AI provider: {self.settings.ai_provider}")

    async def _analyze_with_openai(self, image_url: str, artwork: Dict[str, Any]) -> AIAnalysisData:
        logger.info(f"Analyzing artwork image: {image_url}")

        response = await self.client.chat.completions.create(
            model=self.settings.ai_analysis_model,
            messages=[
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": self._create_analysis_prompt(artwork)},
                        {"type": "image_url", "image_url": {"url": image_url}},
                    ],
                }
            ],
            max_tokens=self.settings.ai_max_tokens,
            response_format={"type": "json_object"},
        )

        content = extract_content(response)
        return self._parse_analysis_result(content)

    def _create_analysis_prompt(self, artwork: Dict[str, Any]) -> str:
        """Create the analysis prompt for the vision model."""
        title = artwork.get("title") or "Unknown"
        studio_name = artwork.get("studioName") or "Unknown"

        return f"""Analyze this artwork image and provide a comprehensive analysis in JSON format. The artwork title is "{title}" by "{studio_name}".

Return a JSON object with the following structure:
{ANALYSIS_SCHEMA_PROMPT}

Be thorough and detailed in your analysis. Return ONLY valid JSON, no markdown formatting."""

    def _parse_analysis_result(self, content: str) -> AIAnalysisData:
        """Parse and validate the provider's JSON answer."""
        try:
            return AIAnalysisData.model_validate(json.loads(content))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Failed to parse AI response: {content}")
            raise AnalysisParseError(f"Failed to parse AI response: {e}") from e
