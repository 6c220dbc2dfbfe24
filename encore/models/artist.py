"""Artist models returned by the music-catalog provider."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ArtistImage(BaseModel):
    """One artist image rendition."""

    model_config = ConfigDict(frozen=True)

    url: str
    height: int | None = None
    width: int | None = None


class Artist(BaseModel):
    """An artist as listed in the music catalog.

    Fetched once per pipeline invocation and never modified afterwards.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    genres: list[str] = Field(default_factory=list)
    popularity: int | None = None       # 0-100 catalog popularity score
    followers: int | None = None
    images: list[ArtistImage] = Field(default_factory=list)
    external_url: str | None = None     # Public catalog page
