"""
Keyword classifier for release filename tokens.

A fixed, uppercase-keyed table of known release terms (codecs, sources,
resolutions, languages, ...). Two flags refine matching:

- AMBIGUOUS: short or common words (BD, TV, SP, CR) that are only trusted
  inside brackets, where they cannot be part of a title.
- PREFIX_NUMBER: words that only mean something next to a number (EP,
  SEASON, VOL). The keyword passes leave these to the episode/season passes.
"""
from dataclasses import dataclass
from enum import Enum, IntFlag
from typing import Dict, Optional


class KeywordKind(str, Enum):
    VIDEO_CODEC = "video_codec"
    AUDIO_CODEC = "audio_codec"
    RESOLUTION = "resolution"
    SOURCE = "source"
    VIDEO_TERM = "video_term"
    AUDIO_TERM = "audio_term"
    LANGUAGE = "language"
    SUBTITLES = "subtitles"
    RELEASE_INFO = "release_info"
    DEVICE_COMPAT = "device_compat"
    FILE_EXTENSION = "file_extension"
    EPISODE = "episode"
    EPISODE_TYPE = "episode_type"
    SEASON = "season"
    PART = "part"
    VOLUME = "volume"
    RELEASE_VERSION = "release_version"
    VIDEO_COLOR_DEPTH = "video_color_depth"
    VIDEO_DYNAMIC_RANGE = "video_dynamic_range"
    VIDEO_FRAME_RATE = "video_frame_rate"
    AUDIO_CHANNELS = "audio_channels"
    STREAMING_SOURCE = "streaming_source"


class KeywordFlag(IntFlag):
    NONE = 0
    AMBIGUOUS = 1
    PREFIX_NUMBER = 2


@dataclass(frozen=True)
class KeywordEntry:
    """Classification of one keyword."""
    kind: KeywordKind
    flags: KeywordFlag = KeywordFlag.NONE

    @property
    def is_ambiguous(self) -> bool:
        return bool(self.flags & KeywordFlag.AMBIGUOUS)

    @property
    def is_prefix(self) -> bool:
        return bool(self.flags & KeywordFlag.PREFIX_NUMBER)


_KEYWORD_GROUPS = {
    KeywordKind.VIDEO_CODEC: (
        "H264", "H.264", "X264", "H265", "H.265", "X265", "HEVC", "AVC", "AV1",
        "XVID", "DIVX", "VP9", "VP8", "MPEG2", "MPEG4", "WMV3", "VC-1", "VC1",
    ),
    KeywordKind.VIDEO_COLOR_DEPTH: (
        "8BIT", "8-BIT", "10BIT", "10-BIT", "10BITS", "HI10", "HI10P",
        "HI444", "HI444P", "HI444PP", "12BIT", "12-BIT",
    ),
    KeywordKind.VIDEO_DYNAMIC_RANGE: ("HDR", "HDR10", "HDR10+", "DOLBY VISION", "DV", "SDR", "HLG"),
    KeywordKind.VIDEO_FRAME_RATE: ("23.976FPS", "24FPS", "29.97FPS", "30FPS", "60FPS", "120FPS"),
    KeywordKind.VIDEO_TERM: ("REMUX", "RAW"),
    KeywordKind.AUDIO_CODEC: (
        "AAC", "AACX2", "AACX3", "AACX4", "AC3", "EAC3", "E-AC-3", "FLAC",
        "FLACX2", "FLACX3", "FLACX4", "MP3", "OGG", "VORBIS", "OPUS", "DTS",
        "DTS-HD", "DTS-ES", "TRUEHD", "TRUE-HD", "LPCM", "PCM", "ATMOS",
        "DOLBY ATMOS", "DTSX", "DTS:X",
    ),
    KeywordKind.AUDIO_CHANNELS: (
        "2.0", "2.0CH", "2CH", "5.1", "5.1CH", "7.1", "7.1CH", "MONO", "STEREO", "SURROUND",
    ),
    KeywordKind.AUDIO_TERM: ("DUAL AUDIO", "DUALAUDIO", "DUAL-AUDIO", "MULTI-AUDIO"),
    KeywordKind.RESOLUTION: (
        "480P", "576P", "720P", "1080P", "1080I", "2160P", "4K", "UHD", "SD", "HD", "FHD", "QHD",
    ),
    KeywordKind.SOURCE: (
        "BD", "BDMV", "BDREMUX", "BDRIP", "BD-RIP", "BLURAY", "BLU-RAY", "DVD",
        "DVD5", "DVD9", "DVDRIP", "DVD-RIP", "DVDREMUX", "R2DVD", "HDTV", "TV",
        "TVRIP", "TV-RIP", "WEB", "WEBDL", "WEB-DL", "WEBRIP", "WEB-RIP", "HDCAM",
        "TS", "BATCH", "VHS", "VHSRIP", "LASERDISC", "LD", "LDRIP",
    ),
    KeywordKind.STREAMING_SOURCE: (
        "ABEMA", "AMZN", "AMAZON", "B-GLOBAL", "BILIBILI", "BAHA", "CR",
        "CRUNCHYROLL", "DSNP", "DISNEY+", "FUNI", "FUNIMATION", "HIDIVE", "HULU",
        "NF", "NETFLIX", "VRV", "WAKANIM", "MUSE",
    ),
    KeywordKind.EPISODE_TYPE: (
        "SP", "SPECIAL", "SPECIALS", "OVA", "ONA", "OAD", "OAV", "MOVIE",
        "GEKIJOUBAN", "ED", "ENDING", "NCED", "NCOP", "OP", "OPENING", "PV",
        "PREVIEW", "TRAILER", "CM", "MENU", "EXTRA", "EXTRAS", "OMAKE", "PICTURE DRAMA",
    ),
    KeywordKind.EPISODE: ("EP", "EP.", "EPS", "EPISODE", "EPISODES"),
    KeywordKind.SEASON: ("SEASON", "SAISON"),
    KeywordKind.PART: ("PART", "COUR"),
    KeywordKind.VOLUME: ("VOL", "VOL.", "VOLUME"),
    KeywordKind.RELEASE_VERSION: ("V0", "V2", "V3", "V4"),
    KeywordKind.RELEASE_INFO: (
        "REMASTER", "REMASTERED", "UNCENSORED", "UNCUT", "DIRECTOR'S CUT",
        "PROPER", "REPACK", "REVISED", "COMPLETE", "FINAL", "PATCHED",
        "WIDESCREEN", "FULLSCREEN", "LETTERBOX",
    ),
    KeywordKind.SUBTITLES: (
        "MULTI-SUB", "MULTI-SUBS", "MULTISUB", "SUBBED", "DUBBED", "SUB", "SUBS",
        "DUB", "HARDSUB", "SOFTSUB", "HARDSUBS", "SOFTSUBS", "ASS", "SRT", "SSA",
    ),
    KeywordKind.LANGUAGE: (
        "ENG", "ENGLISH", "JPN", "JAPANESE", "JAP", "CHI", "CHINESE", "KOR",
        "KOREAN", "ESP", "SPANISH", "FRE", "FRENCH", "GER", "GERMAN", "ITA",
        "ITALIAN", "POR", "PORTUGUESE", "RUS", "RUSSIAN", "ARA", "ARABIC", "THA",
        "THAI", "VIE", "VIETNAMESE", "IND", "INDONESIAN", "MALAY", "HIN", "HINDI",
        "TAM", "TAMIL", "TEL", "TELUGU", "MULTI",
    ),
    KeywordKind.DEVICE_COMPAT: ("ANDROID", "IPAD3", "IPHONE5", "PS3", "XBOX", "XBOX360"),
    KeywordKind.FILE_EXTENSION: (
        "MKV", "MP4", "AVI", "OGM", "WMV", "MPG", "FLV", "WEBM", "M4V", "MOV",
        "3GP", "RM", "RMVB", "M2TS",
    ),
}

_AMBIGUOUS = frozenset({
    "DV", "RAW", "OPUS", "2.0", "5.1", "7.1", "SD", "HD", "BD", "TV", "WEB",
    "TS", "LD", "CR", "NF", "MUSE", "SP", "ED", "OP", "PV", "CM", "PART",
    "COUR", "FINAL", "SUB", "SUBS", "DUB", "ASS", "SRT", "SSA", "IND", "MULTI",
    "ANDROID",
})

_PREFIX_KINDS = (KeywordKind.EPISODE, KeywordKind.SEASON, KeywordKind.VOLUME)


def _build_table() -> Dict[str, KeywordEntry]:
    table = {}
    for kind, words in _KEYWORD_GROUPS.items():
        for word in words:
            flags = KeywordFlag.NONE
            if word in _AMBIGUOUS:
                flags |= KeywordFlag.AMBIGUOUS
            if kind in _PREFIX_KINDS:
                flags |= KeywordFlag.PREFIX_NUMBER
            table[word] = KeywordEntry(kind=kind, flags=flags)
    return table


KEYWORDS: Dict[str, KeywordEntry] = _build_table()


def lookup(text: str) -> Optional[KeywordEntry]:
    """
    Look up a keyword, case-insensitively, ignoring flags.

    Args:
        text (str): Candidate keyword.

    Returns:
        Optional[KeywordEntry]: The entry, or None if the text is not a keyword.
    """
    return KEYWORDS.get(text.upper())


def lookup_contextual(text: str, enclosed: bool) -> Optional[KeywordEntry]:
    """
    Look up a keyword, skipping ambiguous entries outside brackets.

    Args:
        text (str): Candidate keyword.
        enclosed (bool): Whether the text came from a bracketed token.

    Returns:
        Optional[KeywordEntry]: The entry, or None.
    """
    entry = KEYWORDS.get(text.upper())
    if entry is None:
        return None
    if not enclosed and entry.is_ambiguous:
        return None
    return entry
