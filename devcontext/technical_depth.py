"""Technical Depth Analysis.

Classifies content into a technical-skill tier from its vocabulary and
code blocks, and extracts the prerequisites it lists.
"""

import logging
import re
from typing import Dict, List

from .config import merge_config
from .errors import InvalidInputError
from .models import DepthLevel, TechnicalContext

logger = logging.getLogger(__name__)

CODE_BLOCK_PATTERN = re.compile(r'```[\s\S]*?```')
PREREQUISITE_PATTERN = re.compile(r'prerequisites?:?([\s\S]*?)(?=##|\Z)', re.IGNORECASE)
BULLET_PATTERN = re.compile(r'^[ \t]*[-*][ \t]*(.*)$', re.MULTILINE)


class TechnicalDepthAnalyzer:
    """Estimate how technically demanding a document is."""

    def __init__(self, config: Dict = None):
        """Initialize the analyzer.

        Args:
            config: Configuration dictionary with term dictionaries and thresholds
        """
        self.config = merge_config(self._get_default_config(), config)

    @staticmethod
    def _get_default_config() -> Dict:
        """Return default configuration."""
        return {
            # Tier vocabularies, matched as case-insensitive substrings
            'technical_terms': {
                'beginner': ['function', 'variable', 'loop', 'if statement', 'array'],
                'intermediate': ['recursion', 'middleware', 'authentication', 'API', 'database'],
                'advanced': [
                    'distributed systems', 'microservices', 'kubernetes',
                    'machine learning', 'blockchain'
                ]
            },
            # A tier is reached when either count strictly exceeds its threshold
            'depth_thresholds': {
                'advanced': {'terms': 2, 'code_blocks': 5},
                'intermediate': {'terms': 3, 'code_blocks': 2}
            }
        }

    def count_code_blocks(self, content: str) -> int:
        """Count fenced code blocks.

        Args:
            content: Markdown body

        Returns:
            Number of triple-backtick delimited spans
        """
        return len(CODE_BLOCK_PATTERN.findall(content))

    def find_terms(self, content: str) -> Dict[str, List[str]]:
        """Find dictionary terms present in the content.

        Args:
            content: Markdown body

        Returns:
            Dictionary mapping tier names to the terms found, in dictionary order
        """
        content_lower = content.lower()
        return {
            tier: [term for term in terms if term.lower() in content_lower]
            for tier, terms in self.config['technical_terms'].items()
        }

    def determine_depth(
        self,
        found_terms: Dict[str, List[str]],
        code_block_count: int
    ) -> DepthLevel:
        """Pick the depth tier; advanced is checked before intermediate.

        Args:
            found_terms: Output of find_terms
            code_block_count: Output of count_code_blocks

        Returns:
            DepthLevel enum
        """
        thresholds = self.config['depth_thresholds']

        for level in (DepthLevel.ADVANCED, DepthLevel.INTERMEDIATE):
            limits = thresholds[level.value]
            if (len(found_terms.get(level.value, [])) > limits['terms']
                    or code_block_count > limits['code_blocks']):
                return level

        return DepthLevel.BEGINNER

    def extract_prerequisites(self, content: str) -> List[str]:
        """Extract bullet items from a prerequisites section.

        The section starts at the word "prerequisite(s)" and runs to the next
        ``##`` marker or the end of the document.

        Args:
            content: Markdown body

        Returns:
            List of trimmed bullet texts (empty if there is no such section)
        """
        match = PREREQUISITE_PATTERN.search(content)
        if not match:
            return []

        items = [item.strip() for item in BULLET_PATTERN.findall(match.group(1))]
        return [item for item in items if item]

    def analyze(self, content: str) -> TechnicalContext:
        """Analyze technical depth of a document.

        Args:
            content: Markdown body

        Returns:
            TechnicalContext object
        """
        if not isinstance(content, str):
            raise InvalidInputError(
                f"Article body must be a string, got {type(content).__name__}",
                field='body_markdown'
            )

        code_block_count = self.count_code_blocks(content)
        found_terms = self.find_terms(content)
        depth = self.determine_depth(found_terms, code_block_count)

        logger.debug(
            f"Depth {depth.value}: {code_block_count} code blocks, "
            f"{sum(len(t) for t in found_terms.values())} terms"
        )

        return TechnicalContext(
            depth=depth,
            code_block_count=code_block_count,
            technical_terms=found_terms,
            prerequisites=self.extract_prerequisites(content)
        )
