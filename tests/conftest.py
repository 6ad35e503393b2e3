"""Pytest configuration and fixtures."""

import pytest

from devcontext.errors import ProviderError
from devcontext.models import Article, Comment, User


def make_comment(comment_id, parent_id=None, body='Nice post', username='reader'):
    """Build a Comment record with sensible defaults."""
    return Comment(id=comment_id, body=body, username=username, parent_id=parent_id)


def make_article(article_id=1, tags=(), reactions=0, body='', title='Untitled', user=None):
    """Build an Article record with sensible defaults."""
    return Article(
        id=article_id,
        title=title,
        body_markdown=body,
        tags=tuple(tags),
        public_reactions_count=reactions,
        user=user
    )


class FakeProvider:
    """In-memory content provider keyed by URL and username."""

    def __init__(self, articles=None, users=None, user_articles=None, comments=None):
        self.articles = articles or {}
        self.users = users or {}
        self.user_articles = user_articles or {}
        self.comments = comments or {}
        self.calls = []

    def get_article_by_url(self, url):
        self.calls.append(('article', url))
        if url not in self.articles:
            raise ProviderError('Dev.to API Error: 404 - Not Found', status_code=404)
        return self.articles[url]

    def get_user_articles(self, username, page=1):
        self.calls.append(('user_articles', username))
        return list(self.user_articles.get(username, []))

    def get_user_info(self, username):
        self.calls.append(('user', username))
        if username not in self.users:
            raise ProviderError('Dev.to API Error: 404 - Not Found', status_code=404)
        return self.users[username]

    def get_article_comments(self, article_id, tree_builder=None):
        self.calls.append(('comments', article_id))
        return list(self.comments.get(article_id, []))


@pytest.fixture
def author():
    """Sample author profile."""
    return User(
        username='ada',
        name='Ada Lovelace',
        summary='Writes about engines.',
        joined_at='Jan 1, 2020'
    )


@pytest.fixture
def article_body():
    """Markdown body with prerequisites, sections, code and a conclusion."""
    return (
        "This tutorial walks through deploying microservices on kubernetes "
        "without losing your mind. It assumes you have shipped a service before.\n"
        "## Prerequisites\n"
        "- Docker\n"
        "- kubectl\n"
        "## Setup\n"
        "Install the **CLI tools** first.\n"
        "```bash\nbrew install kubectl\n```\n"
        "```bash\nkubectl get pods\n```\n"
        "```yaml\napiVersion: v1\n```\n"
        "## Conclusion\n"
        "That is all you need to get going.\n"
    )


@pytest.fixture
def sample_article(author, article_body):
    """Article written by the sample author."""
    return Article(
        id=42,
        title='How to deploy to Kubernetes',
        body_markdown=article_body,
        tags=('kubernetes', 'devops'),
        published_at='2024-03-01T10:00:00Z',
        public_reactions_count=25,
        user=author,
        description='Deploying without tears',
        url='https://dev.to/ada/how-to-deploy-to-kubernetes-42',
        reading_time_minutes=6,
        comments_count=3
    )


@pytest.fixture
def author_articles():
    """Article history of the sample author."""
    return [
        make_article(1, tags=['kubernetes', 'devops'], reactions=10),
        make_article(2, tags=['kubernetes', 'go'], reactions=20),
        make_article(3, tags=['go'], reactions=31),
    ]


@pytest.fixture
def sample_comments():
    """Flat comment records in arrival order (reply before its parent)."""
    return [
        make_comment(
            'c2', parent_id='c1', username='bob',
            body='Thanks, this was helpful! See https://kubernetes.io/docs for more. ' + 'x' * 300
        ),
        make_comment('c1', body='Great walkthrough of kubectl.', username='alice'),
        make_comment('c3', parent_id='c9', body='Orphaned reply about deployments.', username='carol'),
    ]


@pytest.fixture
def fake_provider(sample_article, author, author_articles, sample_comments):
    """Provider serving the sample article, author and comments."""
    return FakeProvider(
        articles={sample_article.url: sample_article},
        users={'ada': author},
        user_articles={'ada': author_articles},
        comments={42: sample_comments}
    )


@pytest.fixture
def test_config():
    """Test configuration."""
    return {
        'technical_depth': {
            'depth_thresholds': {
                'advanced': {'terms': 2, 'code_blocks': 5},
                'intermediate': {'terms': 3, 'code_blocks': 2}
            }
        },
        'content': {
            'intro_window': 500
        },
        'author': {
            'max_expertise': 3
        },
        'discussion': {
            'max_topics': 5
        },
        'comment_tree': {
            'duplicate_policy': 'last_wins'
        }
    }
