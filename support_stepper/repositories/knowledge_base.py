import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from pydantic import TypeAdapter

from ..domain.models import Article
from ..data.articles import BUNDLED_ARTICLES
from ..services.exceptions import KnowledgeBaseLoadError

logger = logging.getLogger(__name__)

_ARTICLE_LIST = TypeAdapter(List[Article])


# The Interface
class KnowledgeBaseRepository(ABC):
    """
    Defines how the application accesses knowledge-base Articles.
    Articles are immutable; updating the knowledge base means reloading
    the whole collection.
    """

    @abstractmethod
    def load(self, articles: Sequence[Article]) -> None:
        """Replaces the whole collection."""
        pass

    @abstractmethod
    def get_all(self) -> List[Article]:
        """Returns the articles in their original order."""
        pass

    @abstractmethod
    def get_by_id(self, article_id: str) -> Optional[Article]:
        """Returns the article, or None if the id is unknown."""
        pass


class InMemoryKnowledgeBase(KnowledgeBaseRepository):
    """
    Keeps articles in an ordered list with an index for O(1) lookup.
    """

    def __init__(self, articles: Sequence[Article] = ()):
        self._articles: List[Article] = []
        self._index: Dict[str, Article] = {}
        self.load(articles)

    def load(self, articles: Sequence[Article]) -> None:
        index: Dict[str, Article] = {}
        for article in articles:
            if article.id in index:
                raise KnowledgeBaseLoadError(f"Duplicate article id '{article.id}'.")
            index[article.id] = article
        self._articles = list(articles)
        self._index = index
        logger.info(f"Knowledge base loaded with {len(self._articles)} articles")

    def get_all(self) -> List[Article]:
        return list(self._articles)

    def get_by_id(self, article_id: str) -> Optional[Article]:
        return self._index.get(article_id)


class StaticKnowledgeBase(InMemoryKnowledgeBase):
    """
    Pre-loaded with the articles bundled in data/articles.py.
    """

    def __init__(self):
        super().__init__(BUNDLED_ARTICLES)


def load_articles_from_json(path: Union[str, Path]) -> List[Article]:
    """
    Reads a knowledge-base export: a JSON array of article objects using the
    same field names as the Article dataclass.

    Raises:
        KnowledgeBaseLoadError: if the file is missing, is not JSON, or does not
            match the Article schema.
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise KnowledgeBaseLoadError(f"Cannot read knowledge base '{path}': {e}") from e

    try:
        return _ARTICLE_LIST.validate_python(raw)
    except ValueError as e:  # pydantic.ValidationError is a ValueError
        raise KnowledgeBaseLoadError(f"Invalid knowledge base '{path}': {e}") from e
