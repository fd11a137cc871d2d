from pydantic import BaseModel, ConfigDict, Field


class HttpRequest(BaseModel):
    """A single outgoing request to the lookup service."""

    model_config = ConfigDict(frozen=True)

    method: str = "GET"
    url: str
    headers: dict[str, str] = Field(default_factory=dict)


class HttpResponse(BaseModel):
    """Status code and raw text body as returned by the transport."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    headers: dict[str, str] = Field(default_factory=dict)
    body: str = ""


class HttpExchange(BaseModel):
    """Request/response pair, only used to classify the outcome of one call."""

    model_config = ConfigDict(frozen=True)

    request: HttpRequest
    response: HttpResponse
