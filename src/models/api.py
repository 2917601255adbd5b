from typing import Any

from pydantic import BaseModel


class ScrapeRequest(BaseModel):
    url: str | None = None
    templates: dict[str, Any] | None = None


class AddConfigRequest(BaseModel):
    domain: str | None = None
    templates: dict[str, Any] | None = None


class GetConfigRequest(BaseModel):
    domain: str | None = None


class MessageResponse(BaseModel):
    message: str


class TemplatesResponse(BaseModel):
    templates: dict[str, Any]


class DomainsResponse(BaseModel):
    domains: list[str]
