"""
Streaming service definition models.
"""
from typing import List
from pydantic import BaseModel, Field, ConfigDict


class StreamDefinition(BaseModel):
    """
    How to recognize a streaming service from a URL or a browser tab title.

    Attributes:
        name (str): Display name, also the merge key for user overrides.
        url_patterns (List[str]): Regexes matched against the page URL.
        title_pattern (str): Regex matched against the tab title; group 1 is the anime title.
        enabled (bool): Disabled definitions never match.
    """

    model_config = ConfigDict(from_attributes=True, extra='forbid')

    name: str = Field(..., min_length=1, description="Service name")
    url_patterns: List[str] = Field(default_factory=list, description="URL regexes")
    title_pattern: str = Field("", description="Tab title regex, group 1 captures the title")
    enabled: bool = Field(True, description="Whether the definition is active")


class StreamMatch(BaseModel):
    """A recognized stream and the title extracted from it."""

    model_config = ConfigDict(frozen=True, extra='forbid')

    service_name: str
    extracted_title: str
