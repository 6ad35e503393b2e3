"""Author Profiling.

Aggregates an author's article history into an expertise signature and
credibility metrics.
"""

import logging
from collections import Counter
from typing import Dict, List, Sequence

import numpy as np

from .config import merge_config
from .errors import InvalidInputError
from .models import Article, AuthorContext, User

logger = logging.getLogger(__name__)


class AuthorProfiler:
    """Profile an author from the articles they have published."""

    def __init__(self, config: Dict = None):
        """Initialize author profiler.

        Args:
            config: Configuration dictionary (``max_expertise``)
        """
        self.config = merge_config(self._get_default_config(), config)

    @staticmethod
    def _get_default_config() -> Dict:
        """Return default configuration."""
        return {
            'max_expertise': 5
        }

    def tag_counts(self, articles: Sequence[Article]) -> Dict[str, int]:
        """Count tag occurrences across articles, in first-encountered order."""
        counter = Counter()
        for article in articles:
            counter.update(article.tags)
        return dict(counter)

    def determine_expertise(self, articles: Sequence[Article]) -> List[str]:
        """Return the most frequent tags.

        Ties keep the order in which the tags were first encountered.

        Args:
            articles: The author's articles

        Returns:
            Up to ``max_expertise`` tag names, most frequent first
        """
        ranked = sorted(self.tag_counts(articles).items(), key=lambda x: x[1], reverse=True)
        return [tag for tag, _ in ranked[:self.config['max_expertise']]]

    @staticmethod
    def total_reactions(articles: Sequence[Article]) -> int:
        """Sum reaction counts across articles."""
        return sum(article.public_reactions_count for article in articles)

    @staticmethod
    def calculate_average_reactions(articles: Sequence[Article]) -> int:
        """Mean reaction count rounded half up; 0 when there are no articles.

        Args:
            articles: The author's articles

        Returns:
            Rounded average reactions
        """
        if len(articles) == 0:
            return 0

        mean = np.mean([article.public_reactions_count for article in articles])
        return int(np.floor(mean + 0.5))

    def analyze(self, author: User, articles: Sequence[Article]) -> AuthorContext:
        """Build the author context.

        Args:
            author: Author profile
            articles: Articles written by the author

        Returns:
            AuthorContext object
        """
        if not isinstance(author, User):
            raise InvalidInputError(
                f"Author must be a User record, got {type(author).__name__}",
                field='user'
            )

        articles = list(articles)
        logger.debug(f"Profiling {author.username} from {len(articles)} articles")

        return AuthorContext(
            name=author.name,
            expertise=self.determine_expertise(articles),
            join_date=author.joined_at,
            article_count=len(articles),
            average_reactions=self.calculate_average_reactions(articles)
        )
