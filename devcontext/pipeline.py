"""Context Pipeline.

Orchestrates the provider and all analyzers behind the three named
operations: analyze_article, analyze_user and analyze_discussion.
"""

import json
import logging
from datetime import datetime
from typing import Dict, List

from .author_profiler import AuthorProfiler
from .comment_tree import CommentTreeBuilder
from .content_classifier import ContentClassifier
from .discussion_analyzer import DiscussionAnalyzer
from .errors import DevContextError, InvalidInputError
from .technical_depth import TechnicalDepthAnalyzer


class ContextPipeline:
    """Main pipeline turning provider records into context payloads."""

    def __init__(self, provider, config: Dict = None):
        """Initialize the pipeline.

        Args:
            provider: Content provider (see DevToClient) returning model records
            config: Configuration dictionary with one section per analyzer
        """
        self.provider = provider
        self.config = config or {}
        self.logger = self._setup_logger()

        # Initialize modules
        self.technical_analyzer = TechnicalDepthAnalyzer(
            config=self.config.get('technical_depth')
        )

        self.content_classifier = ContentClassifier(
            config=self.config.get('content')
        )

        self.author_profiler = AuthorProfiler(
            config=self.config.get('author')
        )

        self.discussion_analyzer = DiscussionAnalyzer(
            config=self.config.get('discussion')
        )

        self.tree_builder = CommentTreeBuilder(
            duplicate_policy=self.config.get('comment_tree', {}).get('duplicate_policy', 'last_wins')
        )

        self.logger.info("Context Pipeline initialized")

    def _setup_logger(self) -> logging.Logger:
        """Setup logger for pipeline."""
        logger = logging.getLogger('ContextPipeline')
        logger.setLevel(logging.INFO)

        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        return logger

    @staticmethod
    def _error(message: str) -> Dict:
        return {'type': 'error', 'message': message}

    @staticmethod
    def _success(data: Dict) -> Dict:
        return {'type': 'success', 'data': data}

    def _fetch_thread(self, article_id) -> List:
        comments = list(
            self.provider.get_article_comments(article_id, tree_builder=self.tree_builder)
        )
        # Providers that already assembled the threads are passed through
        if any(comment.children for comment in comments):
            return comments
        return self.tree_builder.build(comments)

    def analyze_article(self, url: str) -> Dict:
        """Build the full context of an article.

        Args:
            url: Article URL

        Returns:
            Success payload with article, technical, content, author,
            discussion and metadata sections, or an error payload
        """
        self.logger.info(f"Analyzing article {url}")

        try:
            article = self.provider.get_article_by_url(url)
            if article.user is None:
                raise InvalidInputError(f"Article {article.id} has no author", field='user')

            author_articles = self.provider.get_user_articles(article.user.username)
            comments = self._fetch_thread(article.id)

            technical = self.technical_analyzer.analyze(article.body_markdown)
            content = self.content_classifier.analyze(article.title, article.body_markdown)
            author = self.author_profiler.analyze(article.user, author_articles)
            discussion = self.discussion_analyzer.analyze(comments)
        except DevContextError as e:
            self.logger.error(f"Error analyzing article {url}: {e}")
            return self._error(str(e))

        self.logger.info(
            f"Article '{article.title}' is {technical.depth.value} {content.type.value}"
        )

        return self._success({
            'article': {
                'title': article.title,
                'description': article.description,
                'publishedAt': article.published_at,
                'tags': list(article.tags),
                'readingTime': article.reading_time_minutes
            },
            'technical': technical.to_dict(),
            'content': content.to_dict(),
            'author': author.to_dict(),
            'discussion': discussion.to_dict(),
            'metadata': {
                'url': article.url,
                'reactions': article.public_reactions_count,
                'comments': article.comments_count
            }
        })

    def analyze_user(self, username: str) -> Dict:
        """Build the expertise and contribution profile of a user.

        Args:
            username: Dev.to username

        Returns:
            Success payload with profile, expertise and contributions, or an
            error payload
        """
        self.logger.info(f"Analyzing user {username}")

        try:
            user = self.provider.get_user_info(username)
            articles = self.provider.get_user_articles(username)
            author = self.author_profiler.analyze(user, articles)
        except DevContextError as e:
            self.logger.error(f"Error analyzing user {username}: {e}")
            return self._error(str(e))

        return self._success({
            'profile': {
                'name': user.name,
                'username': user.username,
                'bio': user.summary,
                'joinedAt': user.joined_at
            },
            'expertise': author.expertise,
            'contributions': {
                'articleCount': author.article_count,
                'totalReactions': self.author_profiler.total_reactions(articles),
                'averageReactions': author.average_reactions,
                'topTags': self.author_profiler.tag_counts(articles)
            }
        })

    def analyze_discussion(self, url: str) -> Dict:
        """Analyze the comment section of an article.

        Args:
            url: Article URL

        Returns:
            Success payload with article, discussion and metrics, or an error
            payload
        """
        self.logger.info(f"Analyzing discussion of {url}")

        try:
            article = self.provider.get_article_by_url(url)
            comments = self._fetch_thread(article.id)
            discussion = self.discussion_analyzer.analyze(comments)
        except DevContextError as e:
            self.logger.error(f"Error analyzing discussion of {url}: {e}")
            return self._error(str(e))

        return self._success({
            'article': {
                'title': article.title,
                'url': article.url
            },
            'discussion': discussion.to_dict(),
            'metrics': self.discussion_analyzer.compute_metrics(comments)
        })

    def analyze_articles(self, urls: List[str]) -> Dict:
        """Analyze several articles.

        Args:
            urls: Article URLs

        Returns:
            Dictionary with run metadata and per-URL payloads
        """
        start_time = datetime.now()
        results = {url: self.analyze_article(url) for url in urls}

        failed = sum(1 for payload in results.values() if payload['type'] == 'error')
        duration = (datetime.now() - start_time).total_seconds()
        self.logger.info(
            f"Analyzed {len(urls)} articles ({failed} failed) in {duration:.2f} seconds"
        )

        return {
            'metadata': {
                'timestamp': start_time.isoformat(),
                'total_articles': len(urls),
                'failed': failed,
                'processing_time': duration
            },
            'articles': results
        }

    def save_results(
        self,
        results: Dict,
        output_path: str = 'context_results.json'
    ):
        """Save results to JSON file.

        Args:
            results: Payloads returned by the analyze_* operations
            output_path: Output file path
        """
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(results, f, indent=2)
        self.logger.info(f"Results saved to {output_path}")
