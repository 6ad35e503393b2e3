"""Dev.to Context Engine.

Builds machine-readable context about forum content:
- Technical depth and prerequisites
- Content type and structure
- Author expertise and credibility
- Discussion quality, sentiment and expert contributions
- Comment tree reconstruction
"""

from .errors import DevContextError, InvalidInputError, DuplicateIdentityError, ProviderError
from .models import (
    Article, User, Comment,
    DepthLevel, ContentType, DiscussionQuality, Sentiment,
    TechnicalContext, ContentContext, AuthorContext, DiscussionContext,
)
from .technical_depth import TechnicalDepthAnalyzer
from .content_classifier import ContentClassifier
from .author_profiler import AuthorProfiler
from .discussion_analyzer import DiscussionAnalyzer
from .comment_tree import CommentTreeBuilder, build_comment_tree, flatten_comment_tree
from .provider import DevToClient
from .pipeline import ContextPipeline

__version__ = '1.0.0'

__all__ = [
    'DevContextError',
    'InvalidInputError',
    'DuplicateIdentityError',
    'ProviderError',
    'Article',
    'User',
    'Comment',
    'DepthLevel',
    'ContentType',
    'DiscussionQuality',
    'Sentiment',
    'TechnicalContext',
    'ContentContext',
    'AuthorContext',
    'DiscussionContext',
    'TechnicalDepthAnalyzer',
    'ContentClassifier',
    'AuthorProfiler',
    'DiscussionAnalyzer',
    'CommentTreeBuilder',
    'build_comment_tree',
    'flatten_comment_tree',
    'DevToClient',
    'ContextPipeline',
]
