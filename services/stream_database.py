"""
Streaming service definitions: recognize a service from a browser URL or
tab title and pull the anime title out of the tab title.
"""
import json
import logging
import os
import re
from pathlib import Path
from typing import List, Optional, Pattern, Union
from pydantic import ValidationError

from models.stream import StreamDefinition, StreamMatch

logger = logging.getLogger(__name__)

EMBEDDED_STREAMS_PATH = os.path.join(os.path.dirname(__file__), "data", "streams.json")


def _compile(pattern: str, stream_name: str) -> Optional[Pattern]:
    if not pattern:
        return None
    try:
        return re.compile(pattern)
    except re.error as e:
        logger.warning(f"Disabling pattern {pattern!r} of stream '{stream_name}': {e}")
        return None


class _CompiledStream:
    def __init__(self, definition: StreamDefinition):
        self.definition = definition
        self.url_patterns = [p for p in (_compile(u, definition.name) for u in definition.url_patterns) if p]
        self.title_pattern = _compile(definition.title_pattern, definition.name)


class StreamDatabase:
    """
    Ordered list of stream definitions with compiled patterns.

    Patterns that fail to compile are logged and left out; they never make
    loading fail.
    """

    def __init__(self, definitions: Optional[List[StreamDefinition]] = None):
        self._streams: List[_CompiledStream] = [_CompiledStream(d) for d in definitions or []]

    @classmethod
    def from_json(cls, text: str) -> "StreamDatabase":
        """
        Build a database from a JSON array of stream definitions.

        Raises:
            ValueError: If the JSON is malformed or a definition is invalid.
        """
        try:
            records = json.loads(text)
            definitions = [StreamDefinition.model_validate(record) for record in records]
        except (json.JSONDecodeError, ValidationError, TypeError) as e:
            raise ValueError(f"Invalid stream definitions: {e}") from e
        return cls(definitions)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "StreamDatabase":
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_json(f.read())

    @classmethod
    def embedded(cls) -> "StreamDatabase":
        """Load the stream definitions shipped with the package."""
        return cls.from_file(EMBEDDED_STREAMS_PATH)

    @property
    def definitions(self) -> List[StreamDefinition]:
        return [stream.definition for stream in self._streams]

    def merge_user(self, user: "StreamDatabase") -> None:
        """
        Merge user definitions in place: same-named streams are replaced, new ones appended.
        """
        for user_stream in user._streams:
            name = user_stream.definition.name
            for position, stream in enumerate(self._streams):
                if stream.definition.name == name:
                    self._streams[position] = user_stream
                    logger.debug(f"User stream definition replaces '{name}'")
                    break
            else:
                self._streams.append(user_stream)
                logger.debug(f"User stream definition '{name}' added")

    def match_url(self, url: str) -> Optional[int]:
        """Index of the first enabled stream with a URL pattern matching url."""
        for position, stream in enumerate(self._streams):
            if stream.definition.enabled and any(p.search(url) for p in stream.url_patterns):
                return position
        return None

    def match_title(self, title: str) -> Optional[int]:
        """Index of the first enabled stream whose title pattern matches title."""
        for position, stream in enumerate(self._streams):
            if stream.definition.enabled and stream.title_pattern and stream.title_pattern.search(title):
                return position
        return None

    def extract_title(self, index: int, title: str) -> Optional[str]:
        """
        Extract the anime title with the stream's title pattern.

        Returns:
            Optional[str]: Capture group 1, stripped, or None if it is missing or empty.
        """
        if not 0 <= index < len(self._streams):
            return None
        pattern = self._streams[index].title_pattern
        if pattern is None:
            return None
        match = pattern.search(title)
        if not match or match.lastindex is None:
            return None
        extracted = (match.group(1) or "").strip()
        return extracted or None

    def service_name(self, index: int) -> Optional[str]:
        if not 0 <= index < len(self._streams):
            return None
        return self._streams[index].definition.name

    def detect(self, url: Optional[str] = None, title: Optional[str] = None) -> Optional[StreamMatch]:
        """
        Identify the service and anime title from a URL and/or a tab title.

        The URL is tried first; without a URL match the title patterns are used.
        """
        if url and url.startswith("http"):
            index = self.match_url(url)
            if index is not None:
                if not title:
                    return None
                extracted = self.extract_title(index, title)
                if extracted is None:
                    return None
                return StreamMatch(service_name=self.service_name(index), extracted_title=extracted)

        if title:
            index = self.match_title(title)
            if index is not None:
                extracted = self.extract_title(index, title)
                if extracted is not None:
                    return StreamMatch(service_name=self.service_name(index), extracted_title=extracted)
        return None

    def __len__(self) -> int:
        return len(self._streams)
