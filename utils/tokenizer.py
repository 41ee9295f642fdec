"""
Filename tokenizer for AniRecog.

Splits a release filename into bracketed groups, free-text words and
delimiter runs. Brackets do not nest: a group runs to the first matching
closer, or to the end of the string when the closer is missing.
"""
import logging
from typing import List, Optional, Tuple
from models.token import Token, TokenKind

logger = logging.getLogger(__name__)

VIDEO_EXTENSIONS = frozenset({
    "mkv", "mp4", "avi", "ogm", "wmv", "mpg", "mpeg", "flv", "webm", "m4v",
})

BRACKET_PAIRS = {
    "[": "]",
    "(": ")",
    "{": "}",
    "「": "」",
    "『": "』",
    "【": "】",
}

DELIMITERS = frozenset(" _.　")


def strip_extension(filename: str) -> Tuple[str, Optional[str]]:
    """
    Remove a trailing video extension.

    Args:
        filename (str): Raw filename.

    Returns:
        Tuple[str, Optional[str]]: Filename without the extension, and the lowercased extension (or None).
    """
    stem, dot, extension = filename.rpartition(".")
    if dot and stem and extension.lower() in VIDEO_EXTENSIONS:
        return stem, extension.lower()
    return filename, None


def _is_ascii_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_decimal_point(text: str, index: int) -> bool:
    """
    True when the dot at index joins two numbers ("07.5", "5.1", "23.976fps").

    A dot followed by four or more digits, or by a short number ending in
    p/i ("01.720p"), separates two words instead.
    """
    if text[index] != "." or index == 0 or not _is_ascii_digit(text[index - 1]):
        return False
    end = index + 1
    while end < len(text) and _is_ascii_digit(text[end]):
        end += 1
    digits = end - index - 1
    if digits == 0 or digits > 3:
        return False
    if end < len(text) and text[end] in "pPiI":
        tail = end + 1
        if tail == len(text) or not text[tail].isalnum():
            return False
    return True


def _is_delimiter(text: str, index: int) -> bool:
    return text[index] in DELIMITERS and not _is_decimal_point(text, index)


def split_words(text: str) -> List[str]:
    """
    Split text on delimiter runs, keeping decimal numbers intact.

    Args:
        text (str): Text without brackets (e.g. the inside of a bracketed token).

    Returns:
        List[str]: Non-empty words.
    """
    words = []
    start = 0
    for index in range(len(text)):
        if _is_delimiter(text, index):
            if index > start:
                words.append(text[start:index])
            start = index + 1
    if start < len(text):
        words.append(text[start:])
    return words


def tokenize(filename: str) -> Tuple[List[Token], Optional[str]]:
    """
    Tokenize a release filename.

    Args:
        filename (str): Raw filename, with or without a video extension.

    Returns:
        Tuple[List[Token], Optional[str]]: Tokens in source order and the stripped extension.

    Example:
        >>> tokens, ext = tokenize("[Group] Title - 01.mkv")
        >>> [t.text for t in tokens], ext
        (['Group', ' ', 'Title', ' ', '-', ' ', '01'], 'mkv')
    """
    text, extension = strip_extension(filename)
    tokens: List[Token] = []
    index = 0
    length = len(text)

    while index < length:
        ch = text[index]
        if ch in BRACKET_PAIRS:
            closer = BRACKET_PAIRS[ch]
            end = text.find(closer, index + 1)
            if end == -1:
                end = length
            inner = text[index + 1:end]
            if inner:
                tokens.append(Token(kind=TokenKind.BRACKETED, text=inner, enclosure=ch + closer))
            index = end + 1
        elif _is_delimiter(text, index):
            while index < length and _is_delimiter(text, index):
                index += 1
            tokens.append(Token(kind=TokenKind.DELIMITER, text=" "))
        else:
            start = index
            while index < length and text[index] not in BRACKET_PAIRS and not _is_delimiter(text, index):
                index += 1
            tokens.append(Token(kind=TokenKind.FREE_TEXT, text=text[start:index]))

    logger.debug(f"Tokenized {filename!r} into {len(tokens)} tokens (extension={extension})")
    return tokens, extension


def render_tokens(tokens: List[Token]) -> str:
    """
    Rebuild a filename string from tokens.

    Tokenizing the result yields the same token list. Two free-text tokens
    in a row were split by an empty bracket, which is rendered back as "[]".
    """
    parts = []
    previous = None
    for token in tokens:
        if previous is not None and previous.is_free_text and token.is_free_text:
            parts.append("[]")
        parts.append(token.render())
        previous = token
    return "".join(parts)
