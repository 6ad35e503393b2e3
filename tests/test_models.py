"""Tests for record validation."""

import pytest

from devcontext.errors import InvalidInputError
from devcontext.models import Article, Comment, User


def article_record(**overrides):
    record = {
        'id': 42,
        'title': 'How to test',
        'body_markdown': '## Intro\nHello',
        'tags': ['python', 'testing'],
        'public_reactions_count': 7,
        'comments_count': 2,
        'user': {'username': 'ada', 'name': 'Ada'}
    }
    record.update(overrides)
    return record


class TestUser:
    """Test User records."""

    def test_from_dict(self):
        """Test a full profile record."""
        user = User.from_dict({
            'username': 'ada',
            'name': 'Ada Lovelace',
            'summary': 'Engines.',
            'joined_at': 'Jan 1, 2020',
            'website_url': None
        })
        assert user == User('ada', 'Ada Lovelace', 'Engines.', 'Jan 1, 2020', None)

    def test_name_defaults_to_username(self):
        """Test a missing display name falls back to the username."""
        assert User.from_dict({'username': 'ada'}).name == 'ada'

    def test_missing_username(self):
        """Test a profile without username is rejected."""
        with pytest.raises(InvalidInputError) as excinfo:
            User.from_dict({'name': 'Ada'})
        assert excinfo.value.field == 'username'

    def test_not_a_mapping(self):
        """Test non-dict input is rejected."""
        with pytest.raises(InvalidInputError):
            User.from_dict(['ada'])


class TestArticle:
    """Test Article records."""

    def test_from_dict(self):
        """Test a full article record."""
        article = Article.from_dict(article_record())

        assert article.id == 42
        assert article.tags == ('python', 'testing')
        assert article.public_reactions_count == 7
        assert article.user.username == 'ada'

    def test_tags_from_comma_string(self):
        """Test comma separated tag strings are split."""
        article = Article.from_dict(article_record(tags='python, testing,,ci'))
        assert article.tags == ('python', 'testing', 'ci')

    def test_tag_list_preferred_when_list(self):
        """Test a list-valued tag_list wins over a string tags field."""
        article = Article.from_dict(article_record(tags='a, b', tag_list=['c']))
        assert article.tags == ('c',)

    def test_missing_optional_fields(self):
        """Test optional fields default sensibly."""
        article = Article.from_dict({'id': 1, 'title': 'T'})

        assert article.body_markdown == ''
        assert article.tags == ()
        assert article.public_reactions_count == 0
        assert article.user is None

    @pytest.mark.parametrize('overrides,field', [
        ({'id': None}, 'id'),
        ({'title': None}, 'title'),
        ({'title': 5}, 'title'),
        ({'id': True}, 'id'),
        ({'public_reactions_count': 'many'}, 'public_reactions_count'),
        ({'public_reactions_count': 7.5}, 'public_reactions_count'),
        ({'public_reactions_count': -1}, 'public_reactions_count'),
        ({'comments_count': 'two'}, 'comments_count'),
        ({'comments_count': True}, 'comments_count'),
    ])
    def test_invalid_fields(self, overrides, field):
        """Test missing or mistyped required fields are rejected."""
        with pytest.raises(InvalidInputError) as excinfo:
            Article.from_dict(article_record(**overrides))
        assert excinfo.value.field == field

    def test_whole_float_counts_accepted(self):
        """Test counts that arrive as whole floats are kept as ints."""
        article = Article.from_dict(article_record(public_reactions_count=7.0, comments_count=2.0))

        assert article.public_reactions_count == 7
        assert type(article.public_reactions_count) is int
        assert article.comments_count == 2

    def test_invalid_nested_user(self):
        """Test an author record without username is rejected."""
        with pytest.raises(InvalidInputError):
            Article.from_dict(article_record(user={'name': 'anon'}))


class TestComment:
    """Test Comment records."""

    def test_from_dict(self):
        """Test a comment record with explicit parent."""
        comment = Comment.from_dict({
            'id': 3,
            'body_markdown': 'Nice',
            'parent_id': 1,
            'user': {'username': 'bob'}
        })
        assert comment == Comment(id=3, body='Nice', username='bob', parent_id=1)

    def test_provider_field_fallbacks(self):
        """Test id_code and body_html are accepted."""
        comment = Comment.from_dict({
            'id_code': 'x1',
            'body_html': '<p>Hi</p>',
            'user': {'username': 'bob'}
        })

        assert comment.id == 'x1'
        assert comment.body == '<p>Hi</p>'
        assert comment.parent_id is None

    def test_empty_body_allowed(self):
        """Test an empty body is valid."""
        comment = Comment.from_dict({'id': 1, 'body_markdown': '', 'user': {'username': 'b'}})
        assert comment.body == ''

    @pytest.mark.parametrize('record', [
        {'body_markdown': 'x', 'user': {'username': 'b'}},
        {'id': 1, 'user': {'username': 'b'}},
        {'id': 1, 'body_markdown': 'x'},
        {'id': 1, 'body_markdown': 'x', 'user': {}},
        {'id': 1, 'body_markdown': 'x', 'user': {'username': 'b'}, 'parent_id': [2]},
        {'id': 1.5, 'body_markdown': 'x', 'user': {'username': 'b'}},
    ])
    def test_invalid_records(self, record):
        """Test malformed comment records are rejected."""
        with pytest.raises(InvalidInputError):
            Comment.from_dict(record)
