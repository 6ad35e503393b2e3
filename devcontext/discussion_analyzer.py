"""Discussion Analysis.

Classifies a comment thread's quality and sentiment, picks out salient
words, and identifies substantive, evidence-backed contributions.
"""

import logging
import re
from typing import Dict, List, Sequence

import numpy as np

from .comment_tree import CommentTreeBuilder, iter_comments
from .config import merge_config
from .models import Comment, DiscussionContext, DiscussionQuality, Sentiment

logger = logging.getLogger(__name__)

# ASCII word characters only: accented letters split words
TOKEN_SPLIT_PATTERN = re.compile(r'\W+', re.ASCII)


class DiscussionAnalyzer:
    """Analyze the comment thread under an article."""

    def __init__(self, config: Dict = None):
        """Initialize discussion analyzer.

        Args:
            config: Configuration dictionary with keyword patterns and thresholds
        """
        self.config = merge_config(self._get_default_config(), config)
        self.positive_pattern = re.compile(self.config['positive_pattern'], re.IGNORECASE)
        self.negative_pattern = re.compile(self.config['negative_pattern'], re.IGNORECASE)

    @staticmethod
    def _get_default_config() -> Dict:
        """Return default configuration."""
        return {
            'positive_pattern': r'great|awesome|thanks|helpful|good|excellent',
            'negative_pattern': r'bad|wrong|incorrect|disagree|issue|problem',
            # Mean comment length (characters) required for each quality tier
            'quality_thresholds': {
                'high': 200,
                'medium': 100
            },
            # Substrings that mark a comment as carrying evidence
            'evidence_markers': ['```', 'http'],
            'expert_min_length': 300,
            'sentiment_ratio': 2,
            'min_topic_length': 5,
            'max_topics': 10
        }

    def _has_evidence(self, body: str) -> bool:
        return any(marker in body for marker in self.config['evidence_markers'])

    def determine_quality(self, comments: Sequence[Comment]) -> DiscussionQuality:
        """Classify thread quality from comment length and evidence.

        Args:
            comments: Flat comment list

        Returns:
            DiscussionQuality enum (LOW for an empty thread)
        """
        if not comments:
            return DiscussionQuality.LOW

        thresholds = self.config['quality_thresholds']
        avg_length = np.mean([len(comment.body) for comment in comments])
        has_evidence = any(self._has_evidence(comment.body) for comment in comments)

        if avg_length > thresholds['high'] and has_evidence:
            return DiscussionQuality.HIGH
        elif avg_length > thresholds['medium']:
            return DiscussionQuality.MEDIUM
        return DiscussionQuality.LOW

    def analyze_sentiment(self, comments: Sequence[Comment]) -> Sentiment:
        """Classify overall sentiment by counting keyword matches.

        A comment can count as both positive and negative.

        Args:
            comments: Flat comment list

        Returns:
            Sentiment enum
        """
        positive_count = sum(1 for c in comments if self.positive_pattern.search(c.body))
        negative_count = sum(1 for c in comments if self.negative_pattern.search(c.body))
        ratio = self.config['sentiment_ratio']

        if positive_count > negative_count * ratio:
            return Sentiment.POSITIVE
        if negative_count > positive_count * ratio:
            return Sentiment.NEGATIVE
        return Sentiment.NEUTRAL

    def extract_topics(self, comments: Sequence[Comment]) -> List[str]:
        """Collect distinct long words in first-appearance order.

        Args:
            comments: Flat comment list

        Returns:
            Up to ``max_topics`` lower-cased words
        """
        min_length = self.config['min_topic_length']
        topics = {}

        for comment in comments:
            for word in TOKEN_SPLIT_PATTERN.split(comment.body):
                if len(word) >= min_length:
                    topics.setdefault(word.lower(), None)

        return list(topics)[:self.config['max_topics']]

    def identify_expert_contributions(self, comments: Sequence[Comment]):
        """Find long comments backed by code or links.

        Args:
            comments: Flat comment list

        Returns:
            Tuple of (count, distinct usernames in first-appearance order)
        """
        expert_comments = [
            comment for comment in comments
            if len(comment.body) > self.config['expert_min_length']
            and self._has_evidence(comment.body)
        ]
        authors = list(dict.fromkeys(comment.username for comment in expert_comments))
        return len(expert_comments), authors

    @staticmethod
    def compute_metrics(comments: Sequence[Comment]) -> Dict[str, int]:
        """Thread size metrics.

        Args:
            comments: Root comments of a built forest or a flat list

        Returns:
            Dictionary with totalComments, threadCount and participantCount
        """
        flat = list(iter_comments(comments))
        return {
            'totalComments': len(flat),
            'threadCount': len(CommentTreeBuilder().build(flat)),
            'participantCount': len({comment.username for comment in flat})
        }

    def analyze(self, comments: Sequence[Comment]) -> DiscussionContext:
        """Analyze a discussion.

        Replies nested under built trees are included; each comment counts once.

        Args:
            comments: Flat comment list or root comments of a built forest

        Returns:
            DiscussionContext object
        """
        flat = list(iter_comments(comments))
        expert_count, expert_authors = self.identify_expert_contributions(flat)

        context = DiscussionContext(
            quality=self.determine_quality(flat),
            sentiment=self.analyze_sentiment(flat),
            topics=self.extract_topics(flat),
            expert_count=expert_count,
            expert_authors=expert_authors
        )
        logger.debug(
            f"Discussion of {len(flat)} comments: "
            f"{context.quality.value}/{context.sentiment.value}"
        )
        return context
