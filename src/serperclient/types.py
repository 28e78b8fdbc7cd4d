"""Type definitions for Serper API requests and responses."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for Serper JSON objects.

    Field names map to camelCase on the wire unless an explicit alias is
    given. Unknown keys are ignored and null keys count as absent, so
    ``to_dict`` returns exactly the keys that were present and populated.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @classmethod
    def from_dict(cls, data: Any) -> Any:
        """Decode a JSON object; raises pydantic.ValidationError on a mismatch."""
        return cls.model_validate(data)

    @classmethod
    def from_json(cls, text: str | bytes) -> Any:
        """Parse and decode a response body."""
        return cls.model_validate_json(text)

    def to_dict(self) -> dict[str, Any]:
        """Encode to a JSON-ready dict using wire field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


# Request types
class SearchRequest(WireModel):
    """Search request shared by every endpoint.

    Only ``query`` is required; optional fields left at their default are
    not sent.
    """

    query: str = Field(alias="q")
    country: str = Field(default="", alias="gl")  # e.g. "us"
    location: str = ""
    language: str = Field(default="", alias="hl")  # e.g. "en"
    autocorrect: bool = False
    num: int = 0
    page: int = 0

    def to_payload(self) -> dict[str, Any]:
        """Request body; ``q`` is always present."""
        return self.model_dump(by_alias=True, exclude_defaults=True)

    def truncated(self, limit: int) -> SearchRequest:
        """Copy with the query cut to ``limit`` characters."""
        if len(self.query) <= limit:
            return self
        return self.model_copy(update={"query": self.query[:limit]})


# Shared response parts
class SearchParameters(WireModel):
    """Echo of the parameters the API used."""

    q: str = ""
    type: str = ""
    engine: str = ""


class Sitelink(WireModel):
    title: str = ""
    url: str = Field(default="", alias="link")


# Web search
class SearchResult(WireModel):
    """Organic web result."""

    title: str = ""
    url: str = Field(default="", alias="link")
    snippet: str = ""
    position: int = 0
    date: str = ""
    sitelinks: list[Sitelink] = Field(default_factory=list)
    attributes: dict[str, str] = Field(default_factory=dict)


class KnowledgeGraph(WireModel):
    """Knowledge panel shown beside web results."""

    title: str = ""
    type: str = ""
    website: str = ""
    image_url: str = ""
    description: str = ""
    description_source: str = ""
    description_link: str = ""
    attributes: dict[str, str] = Field(default_factory=dict)


class AnswerBox(WireModel):
    answer: str = ""
    title: str = ""
    url: str = Field(default="", alias="link")
    snippet: str = ""


class PeopleAlsoAsk(WireModel):
    question: str = ""
    snippet: str = ""
    title: str = ""
    url: str = Field(default="", alias="link")


class RelatedSearch(WireModel):
    query: str = ""


class TopStory(WireModel):
    title: str = ""
    url: str = Field(default="", alias="link")
    source: str = ""
    date: str = ""
    image_url: str = ""


class SearchResponse(WireModel):
    """Response from the /search endpoint."""

    search_parameters: SearchParameters | None = None
    results: list[SearchResult] = Field(default_factory=list, alias="organic")
    knowledge_graph: KnowledgeGraph | None = None
    answer_box: AnswerBox | None = None
    people_also_ask: list[PeopleAlsoAsk] = Field(default_factory=list)
    related_searches: list[RelatedSearch] = Field(default_factory=list)
    top_stories: list[TopStory] = Field(default_factory=list)


# Images
class ImageResult(WireModel):
    """Image result with full size and thumbnail dimensions."""

    title: str = ""
    image_url: str = ""
    image_width: int = 0
    image_height: int = 0
    thumbnail_url: str = ""
    thumbnail_width: int = 0
    thumbnail_height: int = 0
    source: str = ""
    domain: str = ""
    link: str = ""
    google_url: str = ""
    position: int = 0


class ImageResponse(WireModel):
    """Response from the /images endpoint."""

    search_parameters: SearchParameters | None = None
    images: list[ImageResult] = Field(default_factory=list)


# Videos
class VideoResult(WireModel):
    title: str = ""
    url: str = Field(default="", alias="link")
    snippet: str = ""
    image_url: str = ""
    duration: str = ""
    source: str = ""
    channel: str = ""
    date: str = ""
    position: int = 0


class VideoResponse(WireModel):
    """Response from the /videos endpoint."""

    search_parameters: SearchParameters | None = None
    videos: list[VideoResult] = Field(default_factory=list)


# Places
class PlaceResult(WireModel):
    """Local business or point of interest."""

    position: int = 0
    name: str = ""
    title: str = ""  # Current API name for ``name``
    address: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    rating: float = 0.0
    rating_count: int = 0
    category: str = ""
    identifier: str = ""
    phone_number: str = ""
    website: str = ""
    cid: str = ""


class PlaceResponse(WireModel):
    """Response from the /places endpoint."""

    search_parameters: SearchParameters | None = None
    places: list[PlaceResult] = Field(default_factory=list)


# News
class NewsResult(WireModel):
    title: str = ""
    url: str = Field(default="", alias="link")
    snippet: str = ""
    date: str = ""
    source: str = ""
    image_url: str = ""
    position: int = 0


class NewsResponse(WireModel):
    """Response from the /news endpoint."""

    search_parameters: SearchParameters | None = None
    news: list[NewsResult] = Field(default_factory=list)


# Shopping
class ShoppingResult(WireModel):
    title: str = ""
    source: str = ""
    url: str = Field(default="", alias="link")
    price: str = ""
    delivery: str = ""
    image_url: str = ""
    rating: float = 0.0
    rating_count: int = 0
    offers: str = ""
    product_id: str = ""
    position: int = 0


class ShoppingResponse(WireModel):
    """Response from the /shopping endpoint."""

    search_parameters: SearchParameters | None = None
    shopping: list[ShoppingResult] = Field(default_factory=list)


# Scholar
class ScholarResult(WireModel):
    """Scholarly article result."""

    title: str = ""
    url: str = Field(default="", alias="link")
    publication_info: str = ""
    snippet: str = ""
    year: int = 0
    cited_by: int = 0
    pdf_url: str = ""
    id: str = ""


class ScholarResponse(WireModel):
    """Response from the /scholar endpoint."""

    search_parameters: SearchParameters | None = None
    results: list[ScholarResult] = Field(default_factory=list, alias="organic")


class Endpoint(str, Enum):
    """Search verticals and their paths on the API host."""

    WEB = "/search"
    IMAGES = "/images"
    VIDEOS = "/videos"
    PLACES = "/places"
    NEWS = "/news"
    SHOPPING = "/shopping"
    SCHOLAR = "/scholar"

    @property
    def path(self) -> str:
        return self.value

    @property
    def response_type(self) -> type[WireModel]:
        return _RESPONSE_TYPES[self]


_RESPONSE_TYPES: dict[Endpoint, type[WireModel]] = {
    Endpoint.WEB: SearchResponse,
    Endpoint.IMAGES: ImageResponse,
    Endpoint.VIDEOS: VideoResponse,
    Endpoint.PLACES: PlaceResponse,
    Endpoint.NEWS: NewsResponse,
    Endpoint.SHOPPING: ShoppingResponse,
    Endpoint.SCHOLAR: ScholarResponse,
}
