"""
Unit tests for the search and ranking engine.

Tests cover:
1. Query mode classification (identifier vs name)
2. Per-token field priority
3. AND semantics across tokens
4. Ordering, determinism and idempotence
"""

import copy

import pytest

from models.product import CanonicalField, QueryMode
from services.search_service import (
    SCORE_TABLES,
    SearchResult,
    classify_query,
    score_product,
    score_token,
    search_products,
    searchable_fields,
    sort_by_category,
    tokenize_query,
)
from tests.factories import ProductFactory

NAME = CanonicalField.NAME.value


# ===================
# TEST 1: QUERY MODE
# ===================

class TestClassifyQuery:
    """Tests for classify_query()"""

    def test_digit_means_identifier(self):
        assert classify_query("stol 1001") == QueryMode.IDENTIFIER

    def test_short_single_token_is_identifier(self):
        assert classify_query("AB-12x") == QueryMode.IDENTIFIER
        assert classify_query("stol") == QueryMode.IDENTIFIER

    def test_multiple_words_without_digit_is_name(self):
        assert classify_query("blå stol") == QueryMode.NAME

    def test_nine_letter_token_is_identifier(self):
        """Boundary: 9 characters is below the default threshold of 10."""
        assert classify_query("abcdefghi") == QueryMode.IDENTIFIER

    def test_ten_letter_token_is_name(self):
        """Boundary: 10 characters is not below the threshold."""
        assert classify_query("abcdefghij") == QueryMode.NAME

    def test_threshold_is_configurable(self):
        assert classify_query("abcdefghij", max_length=11) == QueryMode.IDENTIFIER
        assert classify_query("abcd", max_length=4) == QueryMode.NAME

    def test_surrounding_whitespace_ignored(self):
        assert classify_query("  stol  ") == QueryMode.IDENTIFIER

    def test_punctuation_other_than_hyphen_is_name(self):
        assert classify_query("stol!") == QueryMode.NAME

    def test_accented_letters_count_as_word_characters(self):
        assert classify_query("blå") == QueryMode.IDENTIFIER


# ===================
# TEST 2: TOKEN SCORING
# ===================

class TestScoreToken:
    """Tests for score_token() priority tables."""

    @pytest.fixture
    def fields(self):
        return searchable_fields(ProductFactory.create(
            name="Ekstol Klassisk",
            identifier="EK-100",
            parent_category="Möbler",
            sub_category="Stolar",
        ))

    def test_identifier_mode_priorities(self, fields):
        assert score_token("ek", fields, QueryMode.IDENTIFIER) == 100       # identifier "ek 100"
        assert score_token("stolar", fields, QueryMode.IDENTIFIER) == 90
        assert score_token("mobler", fields, QueryMode.IDENTIFIER) == 80
        assert score_token("klassisk", fields, QueryMode.IDENTIFIER) == 70

    def test_name_mode_priorities(self, fields):
        assert score_token("stolar", fields, QueryMode.NAME) == 100
        assert score_token("mobler", fields, QueryMode.NAME) == 90
        assert score_token("100", fields, QueryMode.NAME) == 80
        assert score_token("klassisk", fields, QueryMode.NAME) == 70

    def test_only_highest_priority_field_counts(self, fields):
        """"stol" is in sub category and name: sub category wins, no sum."""
        assert score_token("stol", fields, QueryMode.NAME) == 100
        assert score_token("stol", fields, QueryMode.IDENTIFIER) == 90

    def test_no_match_scores_zero(self, fields):
        assert score_token("soffa", fields, QueryMode.NAME) == 0

    def test_other_fields_are_not_searched(self):
        fields = searchable_fields(ProductFactory.create(color="Turkos", description="Turkos klädsel"))
        assert score_token("turkos", fields, QueryMode.NAME) == 0

    def test_tables_cover_same_fields(self):
        """Mode changes priority, not which fields are eligible."""
        by_mode = {mode: {name for name, _ in table} for mode, table in SCORE_TABLES.items()}
        assert by_mode[QueryMode.IDENTIFIER] == by_mode[QueryMode.NAME]


# ===================
# TEST 3: AND SEMANTICS
# ===================

class TestSearchAndSemantics:
    """Every token must match for a product to be returned."""

    def test_bla_stol_requires_both_tokens(self, sample_products):
        results = search_products(sample_products, "blå stol")

        names = [r.product[NAME] for r in results]
        assert names == ["Blå stol"]

    def test_every_returned_product_matches_every_token(self, sample_products):
        results = search_products(sample_products, "blå stol")
        tokens = tokenize_query("blå stol")

        for result in results:
            fields = searchable_fields(result.product)
            for token in tokens:
                assert score_token(token, fields, QueryMode.NAME) > 0

    def test_score_is_sum_of_token_scores(self, sample_products):
        """"stol" hits sub category (100), "bla" hits only name (70)."""
        assert score_product(["bla", "stol"], sample_products[0], QueryMode.NAME) == 170

    def test_one_miss_zeroes_product(self, sample_products):
        assert score_product(["bla", "xyz"], sample_products[0], QueryMode.NAME) == 0

    def test_accents_ignored(self, sample_products):
        results = search_products(sample_products, "ROD")
        assert [r.product[NAME] for r in results] == ["Röd stol"]

    def test_no_match_returns_empty(self, sample_products):
        assert search_products(sample_products, "helikopter") == []


# ===================
# TEST 4: ORDERING
# ===================

class TestSearchOrdering:
    """Tests for result ordering and stability."""

    def test_descending_score(self):
        products = [
            ProductFactory.create(name="Lampa", identifier="9", sub_category="Ek"),      # name match
            ProductFactory.create(name="X", identifier="EK-1", sub_category="Bord"),     # identifier match
        ]

        results = search_products(products, "ek")

        assert [r.score for r in results] == [100, 90]
        assert [r.position for r in results] == [1, 0]

    def test_ties_keep_upload_order(self):
        products = [ProductFactory.create(name=f"Stol {i}", sub_category="X", parent_category="Y") for i in range(4)]

        results = search_products(products, "stol")

        assert [r.position for r in results] == [0, 1, 2, 3]

    def test_empty_query_returns_everything_unscored(self, sample_products):
        results = search_products(sample_products, "   ")

        assert [r.position for r in results] == list(range(len(sample_products)))
        assert all(r.score == 0 for r in results)

    def test_punctuation_only_query_is_empty(self, sample_products):
        results = search_products(sample_products, "?!")
        assert len(results) == len(sample_products)

    def test_result_positions_point_at_products(self, sample_products):
        for result in search_products(sample_products, "stol"):
            assert sample_products[result.position] is result.product


class TestSearchIdempotence:
    """Repeated searches give identical output and never touch the input."""

    def test_same_query_twice_same_output(self, sample_products):
        first = search_products(sample_products, "blå")
        second = search_products(sample_products, "blå")

        assert first == second

    def test_products_not_mutated(self, sample_products):
        before = copy.deepcopy(sample_products)

        search_products(sample_products, "blå stol")
        search_products(sample_products, "1001")

        assert sample_products == before
        assert all("score" not in p for p in sample_products)

    def test_result_is_frozen(self, sample_products):
        result = search_products(sample_products, "stol")[0]
        assert isinstance(result, SearchResult)
        with pytest.raises(AttributeError):
            result.score = 1


class TestSortByCategory:
    """Tests for sort_by_category() grid ordering."""

    def test_sub_then_parent_case_insensitive(self):
        products = [
            ProductFactory.create(name="a", sub_category="stolar", parent_category="Möbler"),
            ProductFactory.create(name="b", sub_category="Bord", parent_category="Kontor"),
            ProductFactory.create(name="c", sub_category="Bord", parent_category="Kök"),
        ]
        results = [SearchResult(position=i, product=p, score=0) for i, p in enumerate(products)]

        ordered = sort_by_category(results)

        assert [r.product[NAME] for r in ordered] == ["b", "c", "a"]
