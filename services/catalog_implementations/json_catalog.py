import json
import logging
from pathlib import Path
from typing import List, Union
from pydantic import ValidationError
from models.anime import Anime
from services.catalog_implementations.catalog_interface import CatalogInterface

logger = logging.getLogger(__name__)


class JsonCatalog(CatalogInterface):
    """
    Catalog read from a JSON file holding an array of anime records.

    The file is re-read on every all_anime() call, so edits show up on the
    next recognition cache miss.

    Example record:
        {"id": 1, "ids": {"mal": 52991}, "title": {"romaji": "Sousou no Frieren"}, "synonyms": ["Frieren"]}
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def all_anime(self) -> List[Anime]:
        """
        Load every record from the catalog file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file is not a JSON array of valid anime records.
        """
        with self.path.open("r", encoding="utf-8") as f:
            records = json.load(f)
        if not isinstance(records, list):
            raise ValueError(f"Catalog file {self.path} must contain a JSON array")
        try:
            anime = [Anime.model_validate(record) for record in records]
        except ValidationError as e:
            raise ValueError(f"Invalid anime record in {self.path}: {e}") from e
        logger.debug(f"Loaded {len(anime)} entries from {self.path}")
        return anime
