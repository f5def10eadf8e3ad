"""Pydantic request models for API endpoints."""

from pydantic import BaseModel


class ChooseLocaleBody(BaseModel):
    locales: list[str]


class StartNewBody(BaseModel):
    locale: str


class SwitchBody(BaseModel):
    i: int


class UpdateSettings(BaseModel):
    lang: str | None = None
