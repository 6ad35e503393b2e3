"""Content Classification.

Determines an article's genre and how completely it is structured
(introduction, conclusion, sections, topics).
"""

import logging
import re
from typing import Dict, List, Pattern, Tuple

from .config import merge_config
from .errors import InvalidInputError
from .models import ContentContext, ContentType

logger = logging.getLogger(__name__)

HEADING_PATTERN = re.compile(r'^##(?!#)[ \t]*(.*)$', re.MULTILINE)
EMPHASIS_PATTERN = re.compile(r'\*\*(.*?)\*\*')


class ContentClassifier:
    """Classify content type and structure."""

    def __init__(self, config: Dict = None):
        """Initialize content classifier.

        Args:
            config: Configuration dictionary with genre patterns and markers
        """
        self.config = merge_config(self._get_default_config(), config)
        self.type_patterns = self._compile_patterns(self.config['type_patterns'])

    @staticmethod
    def _get_default_config() -> Dict:
        """Return default configuration."""
        return {
            # Declaration order is the tie-break: first match wins
            'type_patterns': [
                ('tutorial', r'how[ -]to|guide|tutorial|step[ -]by[ -]step'),
                ('conceptual', r'understanding|explained|introduction|fundamentals'),
                ('opinion', r'opinion|thoughts|perspective|why (i|we)|my take'),
                ('discussion', r'discuss|thoughts on|what do you think'),
            ],
            'intro_window': 500,
            'introduction_markers': ['introduction'],
            'min_introduction_length': 200,
            'conclusion_markers': ['conclusion', 'summary', 'final thoughts']
        }

    @staticmethod
    def _compile_patterns(patterns) -> List[Tuple[ContentType, Pattern]]:
        """Compile genre patterns, keeping their declared order.

        Accepts a list of (name, regex) pairs or an ordered mapping.
        """
        if isinstance(patterns, dict):
            patterns = list(patterns.items())

        compiled = []
        for name, pattern in patterns:
            try:
                content_type = ContentType(name)
            except ValueError:
                known = ', '.join(t.value for t in ContentType)
                raise InvalidInputError(
                    f"Unknown content type {name!r} in type_patterns (expected one of: {known})",
                    field='type_patterns'
                ) from None
            compiled.append((content_type, re.compile(pattern, re.IGNORECASE)))
        return compiled

    def determine_content_type(self, title: str, content: str) -> ContentType:
        """Determine the genre from the title and the opening of the body.

        Args:
            title: Article title
            content: Markdown body

        Returns:
            ContentType enum
        """
        opening = content[:self.config['intro_window']]

        for content_type, pattern in self.type_patterns:
            if pattern.search(title) or pattern.search(opening):
                return content_type

        return ContentType.GENERAL

    def has_introduction(self, content: str) -> bool:
        """Check whether the text before the first heading reads as an introduction."""
        first_heading = HEADING_PATTERN.search(content)
        first_section = content[:first_heading.start()] if first_heading else content
        first_section = first_section.lower()

        return (
            any(marker in first_section for marker in self.config['introduction_markers'])
            or len(first_section) > self.config['min_introduction_length']
        )

    def has_conclusion(self, content: str) -> bool:
        """Check whether the last section (heading included) wraps up the article."""
        headings = list(HEADING_PATTERN.finditer(content))
        last_section = content[headings[-1].start():] if headings else content
        last_section = last_section.lower()

        return any(marker in last_section for marker in self.config['conclusion_markers'])

    def extract_sections(self, content: str) -> List[str]:
        """Extract second-level heading texts in document order.

        Args:
            content: Markdown body

        Returns:
            List of trimmed heading texts
        """
        return [heading.strip() for heading in HEADING_PATTERN.findall(content)]

    def extract_topics(self, content: str) -> List[str]:
        """Extract topics from headings and bold spans.

        Args:
            content: Markdown body

        Returns:
            Deduplicated topics in first-appearance order (headings first)
        """
        topics = {}

        for heading in self.extract_sections(content):
            if heading:
                topics.setdefault(heading, None)

        for emphasized in EMPHASIS_PATTERN.findall(content):
            emphasized = emphasized.strip()
            if emphasized:
                topics.setdefault(emphasized, None)

        return list(topics)

    def analyze(self, title: str, content: str) -> ContentContext:
        """Classify a document.

        Args:
            title: Article title
            content: Markdown body

        Returns:
            ContentContext object
        """
        for name, value in (('title', title), ('body_markdown', content)):
            if not isinstance(value, str):
                raise InvalidInputError(
                    f"Article {name} must be a string, got {type(value).__name__}",
                    field=name
                )

        content_type = self.determine_content_type(title, content)
        logger.debug(f"Classified '{title[:60]}' as {content_type.value}")

        return ContentContext(
            type=content_type,
            has_introduction=self.has_introduction(content),
            has_conclusion=self.has_conclusion(content),
            sections=self.extract_sections(content),
            topics=self.extract_topics(content)
        )
