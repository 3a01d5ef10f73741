from typing import Optional

from pydantic import BaseModel, Field


class FieldsIn(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    company: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=64)
    email: Optional[str] = Field(None, max_length=255)
    website: Optional[str] = Field(None, max_length=512)
    avatar_url: Optional[str] = None


class ThemeIn(BaseModel):
    primary: Optional[str] = None
    secondary: Optional[str] = None
    background: Optional[str] = None
    text: Optional[str] = None


class LayoutIn(BaseModel):
    style: Optional[str] = None
    alignment: Optional[str] = None
    font: Optional[str] = None


class ShapeIn(BaseModel):
    shape: str


class PublishedIn(BaseModel):
    published: bool


class LinkFormIn(BaseModel):
    platform: Optional[str] = Field(None, max_length=64)
    username: Optional[str] = Field(None, max_length=255)
    url: Optional[str] = None
