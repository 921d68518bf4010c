import json
import logging
from typing import Optional, Type, TypeVar
from openai import AsyncOpenAI
from pydantic import BaseModel, ValidationError
from app.agents.inference import create_openai_client, extract_content
from app.config import get_settings
from app.exceptions import AIResponseError
from app.schemas.search import RoomAnalysis, TextQueryCriteria

logger = logging.getLogger(__name__)
settings = get_settings()

T = TypeVar("T", bound=BaseModel)

ROOM_SYSTEM_PROMPT = """You are an expert interior designer and art consultant. Analyze room photos and extract structured data about the space. Return ONLY valid JSON matching this schema:
{
  "style": "modern|traditional|minimalist|industrial|etc",
  "colors": [{"name": "color name", "hex": "#hexcode", "pct": 0-100}],
  "lighting": "bright|dim|natural|artificial",
  "roomSize": "small|medium|large",
  "mood": "calming|energetic|cozy|sophisticated|etc",
  "suitableArtStyles": ["abstract", "contemporary", "etc"],
  "recommendedSizes": ["small", "medium", "large"],
  "paletteTemperature": "warm|cool|neutral"
}"""

TEXT_SYSTEM_PROMPT = """You are an art recommendation assistant. Extract search criteria from user queries. Return ONLY valid JSON matching this schema:
{
  "styles": ["abstract", "contemporary", etc],
  "colors": ["blue", "red", etc],
  "mood": "calming|energetic|etc",
  "size": "small|medium|large",
  "medium": "painting|print|photography|etc",
  "priceRange": {"min": 0, "max": 10000},
  "context": "office|living room|bedroom|etc"
}"""


class CriteriaAgent:
    """Agent turning a room photo or a text query into search criteria."""

    def __init__(self, client: Optional[AsyncOpenAI] = None):
        self.settings = settings
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = create_openai_client()
        return self._client

    async def analyze_room_image(
        self,
        image_url: Optional[str] = None,
        image_base64: Optional[str] = None
    ) -> RoomAnalysis:
        """
        Extract room characteristics from a photo.

        Args:
            image_url: Public URL of the room photo
            image_base64: Base64-encoded JPEG, used instead of the URL when given

        Returns:
            Validated room analysis
        """
        if not image_url and not image_base64:
            raise ValueError("Either imageUrl or imageBase64 must be provided")

        url = f"data:image/jpeg;base64,{image_base64}" if image_base64 else image_url

        response = await self.client.chat.completions.create(
            model=self.settings.ai_search_model,
            messages=[
                {"role": "system", "content": ROOM_SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "text",
                            "text": "Analyze this room photo and extract the room characteristics in JSON format.",
                        },
                        {"type": "image_url", "image_url": {"url": url}},
                    ],
                },
            ],
            response_format={"type": "json_object"},
        )

        room = self._parse(extract_content(response), RoomAnalysis)
        logger.info(f"Room analysis: {room.style} / {room.room_size} / {room.palette_temperature}")
        return room

    async def analyze_text_query(self, query: str) -> TextQueryCriteria:
        """Extract structured search criteria from a free-text query."""
        response = await self.client.chat.completions.create(
            model=self.settings.ai_search_model,
            messages=[
                {"role": "system", "content": TEXT_SYSTEM_PROMPT},
                {"role": "user", "content": query},
            ],
            response_format={"type": "json_object"},
        )

        criteria = self._parse(extract_content(response), TextQueryCriteria)
        logger.info(f"Text criteria for '{query}': styles={criteria.styles} colors={criteria.colors}")
        return criteria

    def _parse(self, content: str, schema: Type[T]) -> T:
        try:
            return schema.model_validate(json.loads(content))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Invalid {schema.__name__} from AI: {content}")
            raise AIResponseError(f"Invalid {schema.__name__} from AI: {e}") from e
