"""
Token model for AniRecog, the unit produced by the filename tokenizer.
"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class TokenKind(str, Enum):
    """Lexical category of a token."""
    BRACKETED = "bracketed"
    FREE_TEXT = "free_text"
    DELIMITER = "delimiter"


class ClaimTag(str, Enum):
    """Which parser pass took ownership of a token."""
    KEYWORD = "keyword"
    RELEASE_GROUP = "release_group"
    CHECKSUM = "checksum"
    RESOLUTION = "resolution"
    YEAR = "year"
    SEASON = "season"
    VOLUME = "volume"
    EPISODE = "episode"
    EPISODE_PREFIX = "episode_prefix"
    DASH = "dash"


class Token(BaseModel):
    """
    A single lexical unit of a filename.

    Attributes:
        kind (TokenKind): Bracketed, free text or delimiter.
        text (str): Token text. Bracketed tokens hold the inner text only.
        enclosure (Optional[str]): Opening and closing bracket characters for bracketed tokens.
    """

    model_config = ConfigDict(frozen=True, extra='forbid')

    kind: TokenKind = Field(..., description="Lexical category")
    text: str = Field(..., description="Token text (inner text for bracketed tokens)")
    enclosure: Optional[str] = Field(None, min_length=2, max_length=2, description="Bracket pair, e.g. '[]'")

    @property
    def is_bracketed(self) -> bool:
        return self.kind == TokenKind.BRACKETED

    @property
    def is_free_text(self) -> bool:
        return self.kind == TokenKind.FREE_TEXT

    @property
    def is_delimiter(self) -> bool:
        return self.kind == TokenKind.DELIMITER

    @property
    def is_dash(self) -> bool:
        return self.kind == TokenKind.FREE_TEXT and self.text == "-"

    def render(self) -> str:
        """Render the token back to filename text."""
        if self.kind == TokenKind.BRACKETED:
            opener, closer = self.enclosure or "[]"
            return f"{opener}{self.text}{closer}"
        if self.kind == TokenKind.DELIMITER:
            return " "
        return self.text
