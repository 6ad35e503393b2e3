"""Record types for the context engine.

Raw provider records (User, Article, Comment) are validated once, in their
``from_dict`` constructors, so analyzers can rely on every required field
being present. Context records are the analyzers' outputs; ``to_dict`` gives
the camelCase payload shape returned to callers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .errors import InvalidInputError


class DepthLevel(Enum):
    """Technical-skill tiers, lowest first."""
    BEGINNER = 'beginner'
    INTERMEDIATE = 'intermediate'
    ADVANCED = 'advanced'


class ContentType(Enum):
    """Content genres."""
    TUTORIAL = 'tutorial'
    CONCEPTUAL = 'conceptual'
    OPINION = 'opinion'
    DISCUSSION = 'discussion'
    GENERAL = 'general'


class DiscussionQuality(Enum):
    """Discussion quality tiers."""
    HIGH = 'high'
    MEDIUM = 'medium'
    LOW = 'low'


class Sentiment(Enum):
    """Overall comment sentiment."""
    POSITIVE = 'positive'
    NEUTRAL = 'neutral'
    NEGATIVE = 'negative'


def _require_mapping(data: Any, record: str) -> Dict:
    if not isinstance(data, dict):
        raise InvalidInputError(
            f"{record} record must be a mapping, got {type(data).__name__}"
        )
    return data


def _require(data: Dict, key: str, record: str, types: Tuple[type, ...]):
    """Return ``data[key]``, raising InvalidInputError when absent or mistyped."""
    value = data.get(key)
    if value is None:
        raise InvalidInputError(f"{record} record is missing '{key}'", field=key)
    # bool is an int subclass; never accept it where a number or id is expected
    if isinstance(value, bool) or not isinstance(value, types):
        raise InvalidInputError(
            f"{record} field '{key}' has invalid type {type(value).__name__}",
            field=key
        )
    return value


def _optional_str(data: Dict, key: str, default: Optional[str] = '') -> Optional[str]:
    value = data.get(key)
    if value is None:
        return default
    return str(value)


def _count(data: Dict, key: str, record: str) -> int:
    """Return a non-negative whole-number field, 0 when absent."""
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidInputError(
            f"{record} field '{key}' must be a non-negative whole number, got {value!r}",
            field=key
        )
    return value


def _parse_tags(data: Dict) -> Tuple[str, ...]:
    """Read tags from whichever of ``tags``/``tag_list`` is a list.

    List endpoints return ``tag_list`` as a list and ``tags`` as a
    comma-separated string; single-article endpoints do the opposite.
    """
    for key in ('tags', 'tag_list'):
        value = data.get(key)
        if isinstance(value, (list, tuple)):
            return tuple(str(tag) for tag in value)
    for key in ('tags', 'tag_list'):
        value = data.get(key)
        if isinstance(value, str):
            return tuple(tag.strip() for tag in value.split(',') if tag.strip())
    return ()


@dataclass(frozen=True)
class User:
    """A forum user profile."""
    username: str
    name: str
    summary: str = ''
    joined_at: Optional[str] = None
    website_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict) -> 'User':
        data = _require_mapping(data, 'User')
        username = _require(data, 'username', 'User', (str,))
        return cls(
            username=username,
            name=_optional_str(data, 'name', username),
            summary=_optional_str(data, 'summary'),
            joined_at=_optional_str(data, 'joined_at', None),
            website_url=_optional_str(data, 'website_url', None),
        )


@dataclass(frozen=True)
class Article:
    """A published article."""
    id: Any
    title: str
    body_markdown: str = ''
    tags: Tuple[str, ...] = ()
    published_at: Optional[str] = None
    public_reactions_count: int = 0
    user: Optional[User] = None
    description: str = ''
    url: Optional[str] = None
    reading_time_minutes: Optional[int] = None
    comments_count: int = 0

    @classmethod
    def from_dict(cls, data: Dict) -> 'Article':
        data = _require_mapping(data, 'Article')
        article_id = _require(data, 'id', 'Article', (int, str))
        title = _require(data, 'title', 'Article', (str,))

        user_data = data.get('user')
        return cls(
            id=article_id,
            title=title,
            body_markdown=_optional_str(data, 'body_markdown'),
            tags=_parse_tags(data),
            published_at=_optional_str(data, 'published_at', None),
            public_reactions_count=_count(data, 'public_reactions_count', 'Article'),
            user=User.from_dict(user_data) if user_data is not None else None,
            description=_optional_str(data, 'description'),
            url=_optional_str(data, 'url', None),
            reading_time_minutes=data.get('reading_time_minutes'),
            comments_count=_count(data, 'comments_count', 'Article'),
        )


@dataclass(frozen=True)
class Comment:
    """A comment; ``children`` is only populated by the tree builder."""
    id: Any
    body: str
    username: str
    parent_id: Any = None
    children: Tuple['Comment', ...] = ()

    @classmethod
    def from_dict(cls, data: Dict) -> 'Comment':
        data = _require_mapping(data, 'Comment')
        key = 'id' if data.get('id') is not None else 'id_code'
        comment_id = _require(data, key, 'Comment', (int, str))

        body = data.get('body_markdown')
        if body is None:
            body = data.get('body_html')
        if not isinstance(body, str):
            raise InvalidInputError(
                "Comment record is missing 'body_markdown'", field='body_markdown'
            )

        user = _require(data, 'user', 'Comment', (dict,))
        username = _require(user, 'username', 'Comment user', (str,))

        parent_id = data.get('parent_id')
        if parent_id is not None and (isinstance(parent_id, bool)
                                      or not isinstance(parent_id, (int, str))):
            raise InvalidInputError(
                f"Comment field 'parent_id' has invalid type {type(parent_id).__name__}",
                field='parent_id'
            )

        return cls(
            id=comment_id,
            body=body,
            username=username,
            parent_id=parent_id,
        )


@dataclass(frozen=True)
class TechnicalContext:
    """Technical depth of a piece of content."""
    depth: DepthLevel
    code_block_count: int
    technical_terms: Dict[str, List[str]]
    prerequisites: List[str]

    def to_dict(self) -> Dict:
        return {
            'depth': self.depth.value,
            'codeBlockCount': self.code_block_count,
            'technicalTerms': {
                tier: list(terms) for tier, terms in self.technical_terms.items()
            },
            'prerequisites': list(self.prerequisites),
        }


@dataclass(frozen=True)
class ContentContext:
    """Genre and structure of a piece of content."""
    type: ContentType
    has_introduction: bool
    has_conclusion: bool
    sections: List[str]
    topics: List[str]

    def to_dict(self) -> Dict:
        return {
            'type': self.type.value,
            'structure': {
                'hasIntroduction': self.has_introduction,
                'hasConclusion': self.has_conclusion,
                'sections': list(self.sections),
            },
            'topics': list(self.topics),
        }


@dataclass(frozen=True)
class AuthorContext:
    """Expertise and credibility of an author."""
    name: str
    expertise: List[str]
    join_date: Optional[str]
    article_count: int
    average_reactions: int

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'expertise': list(self.expertise),
            'credibility': {
                'joinDate': self.join_date,
                'articleCount': self.article_count,
                'averageReactions': self.average_reactions,
            },
        }


@dataclass(frozen=True)
class DiscussionContext:
    """Quality and tone of a comment thread."""
    quality: DiscussionQuality
    sentiment: Sentiment
    topics: List[str]
    expert_count: int
    expert_authors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'quality': self.quality.value,
            'sentiment': self.sentiment.value,
            'topics': list(self.topics),
            'expertContributions': {
                'count': self.expert_count,
                'authors': list(self.expert_authors),
            },
        }
