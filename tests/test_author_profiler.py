"""Tests for AuthorProfiler."""

import pytest

from devcontext.author_profiler import AuthorProfiler
from devcontext.errors import InvalidInputError

from conftest import make_article


class TestAuthorProfiler:
    """Test AuthorProfiler class."""

    def test_initialization(self, test_config):
        """Test profiler initialization."""
        assert AuthorProfiler().config['max_expertise'] == 5
        assert AuthorProfiler(config=test_config['author']).config['max_expertise'] == 3

    def test_expertise_sorted_by_count(self):
        """Test tags are ranked by how often they are used."""
        articles = (
            [make_article(i, tags=['go']) for i in range(6)]
            + [make_article(i, tags=['rust']) for i in range(3)]
            + [make_article(9, tags=['ts'])]
        )
        assert AuthorProfiler().determine_expertise(articles) == ['go', 'rust', 'ts']

    def test_expertise_ties_keep_first_seen(self):
        """Test equal counts keep first-encountered order."""
        articles = [
            make_article(1, tags=['css']),
            make_article(2, tags=['html']),
            make_article(3, tags=['html', 'css']),
        ]
        assert AuthorProfiler().determine_expertise(articles) == ['css', 'html']

    def test_expertise_limited(self):
        """Test at most max_expertise tags are returned."""
        articles = [make_article(1, tags=['a', 'b', 'c', 'd', 'e', 'f', 'g'])]

        assert AuthorProfiler().determine_expertise(articles) == ['a', 'b', 'c', 'd', 'e']
        limited = AuthorProfiler(config={'max_expertise': 2})
        assert limited.determine_expertise(articles) == ['a', 'b']

    def test_expertise_empty(self):
        """Test no articles means no expertise."""
        assert AuthorProfiler().determine_expertise([]) == []

    def test_average_reactions_empty(self):
        """Test the empty history averages to zero."""
        assert AuthorProfiler.calculate_average_reactions([]) == 0

    @pytest.mark.parametrize('n', [1, 2, 3, 7, 10])
    @pytest.mark.parametrize('reactions', [0, 1, 13, 250])
    def test_average_reactions_uniform(self, n, reactions):
        """Test N articles with R reactions average to exactly R."""
        articles = [make_article(i, reactions=reactions) for i in range(n)]
        assert AuthorProfiler.calculate_average_reactions(articles) == reactions

    @pytest.mark.parametrize('counts,expected', [
        ([1, 2], 2),
        ([2, 3], 3),
        ([1, 1, 2], 1),
        ([10, 20, 31], 20),
    ])
    def test_average_reactions_rounding(self, counts, expected):
        """Test averages round to the nearest integer, halves up."""
        articles = [make_article(i, reactions=c) for i, c in enumerate(counts)]
        assert AuthorProfiler.calculate_average_reactions(articles) == expected

    def test_average_reactions_is_int(self):
        """Test the average is a plain int, not a numpy scalar."""
        articles = [make_article(1, reactions=3), make_article(2, reactions=4)]
        assert type(AuthorProfiler.calculate_average_reactions(articles)) is int

    def test_tag_counts_and_total(self, author_articles):
        """Test tag tally and reaction sum helpers."""
        profiler = AuthorProfiler()
        assert profiler.tag_counts(author_articles) == {'kubernetes': 2, 'devops': 1, 'go': 2}
        assert profiler.total_reactions(author_articles) == 61

    def test_analyze(self, author, author_articles):
        """Test the full author context."""
        result = AuthorProfiler().analyze(author, author_articles)

        assert result.name == 'Ada Lovelace'
        assert result.expertise == ['kubernetes', 'go', 'devops']
        assert result.join_date == 'Jan 1, 2020'
        assert result.article_count == 3
        assert result.average_reactions == 20

    def test_analyze_no_articles(self, author):
        """Test a new author with no articles."""
        payload = AuthorProfiler().analyze(author, []).to_dict()

        assert payload == {
            'name': 'Ada Lovelace',
            'expertise': [],
            'credibility': {
                'joinDate': 'Jan 1, 2020',
                'articleCount': 0,
                'averageReactions': 0
            }
        }

    def test_analyze_invalid_author(self, author_articles):
        """Test a raw dict is rejected as author."""
        with pytest.raises(InvalidInputError):
            AuthorProfiler().analyze({'name': 'x'}, author_articles)
