"""Tests for keyword retrieval and knowledge-base browsing."""

import pytest

from support_stepper.domain.models import Article
from support_stepper.repositories.knowledge_base import InMemoryKnowledgeBase
from support_stepper.retrieval.keyword import KeywordArticleRetriever, normalize, score_article
from support_stepper.retrieval.provider import MockArticleRetriever


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

class TestNormalize:
    def test_lowercase_and_punctuation(self):
        assert normalize("Outlook, Email!") == ["outlook", "email"]

    def test_punctuation_becomes_separator(self):
        assert normalize("e-mail/smtp") == ["e", "mail", "smtp"]

    def test_underscore_is_punctuation(self):
        assert normalize("print_queue") == ["print", "queue"]

    def test_keeps_digits(self):
        assert normalize("Port 587") == ["port", "587"]

    def test_empty_and_blank(self):
        assert normalize("") == []
        assert normalize("   \t ") == []
        assert normalize("?!...") == []


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

class TestScoreArticle:
    def test_weights_add_up(self, email_article):
        # 3 (email tag) + 3 (smtp tag) + 2 (outlook product) + 1 (email title)
        assert score_article(email_article, {"outlook", "email", "smtp"}) == 9

    def test_multi_word_tag_scores_per_word(self):
        article = Article(id="a", title="x", tags=("remote access",))
        assert score_article(article, {"remote"}) == 3
        assert score_article(article, {"remote", "access"}) == 6

    def test_multi_word_product_scores_per_word(self):
        article = Article(id="a", title="x", product="Active Directory")
        assert score_article(article, {"active", "directory"}) == 4

    def test_no_overlap(self, email_article):
        assert score_article(email_article, {"printer"}) == 0


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

class TestKeywordSearch:
    def test_high_confidence_at_threshold(self, retriever):
        result = retriever.search("outlook email smtp")
        assert result.matches[0].article.id == "email"
        assert result.top_score == 9
        assert result.low_confidence is False

    def test_case_and_punctuation_insensitive(self, retriever):
        a = retriever.search("Outlook, Email!")
        b = retriever.search("outlook email")
        assert [(m.article.id, m.score) for m in a.matches] == [
            (m.article.id, m.score) for m in b.matches
        ]

    def test_low_confidence_below_threshold(self, retriever):
        result = retriever.search("email")
        assert result.top_score == 4
        assert result.low_confidence is True

    def test_no_match_is_empty(self, retriever):
        result = retriever.search("xyz")
        assert result.matches == []
        assert result.is_empty
        assert result.low_confidence is False

    def test_empty_query(self, retriever):
        assert retriever.search("").is_empty
        assert retriever.search("  !! ").is_empty

    def test_drops_zero_scores_after_truncation(self, retriever):
        # both score 4; vpn scores 0 and is dropped
        result = retriever.search("printer email", top_n=3)
        assert [(m.article.id, m.score) for m in result.matches] == [("email", 4), ("printer", 4)]

    def test_top_n_truncates(self, retriever):
        result = retriever.search("printer email vpn", top_n=1)
        assert len(result.matches) == 1

    @pytest.mark.parametrize("top_n", [0, -1, -5])
    def test_non_positive_top_n_is_empty(self, retriever, top_n):
        result = retriever.search("printer email vpn network", top_n=top_n)
        assert result.matches == []
        assert result.is_empty

    def test_ties_keep_knowledge_base_order(self):
        kb = InMemoryKnowledgeBase([
            Article(id="first", title="A", tags=("wifi",)),
            Article(id="second", title="B", tags=("wifi",)),
            Article(id="third", title="C", tags=("wifi",)),
        ])
        result = KeywordArticleRetriever(kb).search("wifi")
        assert [m.article.id for m in result.matches] == ["first", "second", "third"]

    def test_custom_threshold(self, knowledge_base):
        retriever = KeywordArticleRetriever(knowledge_base, low_confidence_threshold=3)
        assert retriever.low_confidence_threshold == 3
        assert retriever.search("email").low_confidence is False

    def test_find_best_match(self, retriever):
        assert retriever.find_best_match("vpn network").id == "vpn"
        assert retriever.find_best_match("xyz") is None


# ---------------------------------------------------------------------------
# Browsing
# ---------------------------------------------------------------------------

class TestBrowsing:
    def test_get_article(self, retriever):
        assert retriever.get_article("vpn").title == "VPN Will Not Connect"
        assert retriever.get_article("missing") is None

    def test_get_all_preserves_order(self, retriever):
        assert [a.id for a in retriever.get_all()] == ["email", "printer", "vpn"]

    @pytest.mark.parametrize("needle,expected", [
        ("OUTBOX", ["email"]),
        ("globalprotect", ["vpn"]),
        ("network", ["vpn"]),
        ("o", ["email", "printer", "vpn"]),
        ("nothing-like-this", []),
    ])
    def test_filter(self, retriever, needle, expected):
        assert [a.id for a in retriever.filter(needle)] == expected

    def test_blank_filter_returns_all(self, retriever):
        assert len(retriever.filter("  ")) == 3


class TestMockRetriever:
    def test_returns_first_article(self, knowledge_base):
        result = MockArticleRetriever(knowledge_base).search("anything at all")
        assert [m.article.id for m in result.matches] == ["email"]
        assert result.low_confidence is False

    def test_returns_configured_article(self, knowledge_base):
        result = MockArticleRetriever(knowledge_base, article_id="vpn").search("x")
        assert result.matches[0].article.id == "vpn"

    def test_unknown_article_is_empty(self, knowledge_base):
        assert MockArticleRetriever(knowledge_base, article_id="nope").search("x").is_empty

    def test_zero_top_n_is_empty(self, knowledge_base):
        assert MockArticleRetriever(knowledge_base).search("x", top_n=0).is_empty

    def test_exposes_threshold(self, knowledge_base):
        retriever = MockArticleRetriever(knowledge_base, low_confidence_threshold=20)
        assert retriever.low_confidence_threshold == 20
        assert retriever.search("x").low_confidence is True
