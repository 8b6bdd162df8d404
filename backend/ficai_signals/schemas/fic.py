"""Fic Schemas: resolved fic metadata and the URL catalog."""

from pydantic import BaseModel


class FicResponse(BaseModel):
    id: str
    title: str
    source: str


class UrlsResponse(BaseModel):
    urls: list[str]
