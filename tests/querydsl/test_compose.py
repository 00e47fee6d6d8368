"""
Tests for QueryComposer: optional predicates, range bounds and the
non-positive upper bound quirk.
"""

import pytest
from pydantic import ValidationError

from booksearch.querydsl.compose import (
    FieldPredicate,
    QueryComposer,
    QueryDescriptor,
    RangePredicate,
    compose,
)
from booksearch.querydsl.q import Q


def test_all_absent_yields_only_open_range():
    d = compose(None, None, 0, None)
    assert d.must == ()
    assert d.range == RangePredicate(field="word_count", gte=0, lte=None)
    assert (d.range.gte, d.range.lte) == (0, None)


def test_single_author_match():
    d = compose("Tolkien", None, 0, None)
    assert d.must == (FieldPredicate(field="author", value="Tolkien"),)


def test_closed_range():
    d = compose(None, None, 100, 500)
    assert d.must == ()
    assert (d.range.gte, d.range.lte) == (100, 500)


@pytest.mark.parametrize("upper", [0, -1, -500])
def test_non_positive_upper_bound_is_ignored(upper):
    d = compose(None, None, 100, upper)
    assert (d.range.gte, d.range.lte) == (100, None)


def test_author_title_and_range():
    d = compose("A", "B", 10, 20)
    assert [(p.field, p.value) for p in d.must] == [("author", "A"), ("title", "B")]
    assert (d.range.gte, d.range.lte) == (10, 20)


def test_title_only_keeps_single_clause():
    d = compose(title="Hobbit")
    assert d.must == (FieldPredicate(field="title", value="Hobbit"),)


def test_missing_lower_bound_defaults_to_zero():
    d = compose(word_count_min=None, word_count_max=10)
    assert (d.range.gte, d.range.lte) == (0, 10)


def test_empty_string_is_a_present_predicate():
    d = compose(author="")
    assert d.must == (FieldPredicate(field="author", value=""),)


def test_compose_is_idempotent():
    first = compose("A", "B", 10, 20)
    second = compose("A", "B", 10, 20)
    assert first == second
    assert first is not second
    assert first.to_query() == second.to_query()


def test_descriptor_is_immutable():
    d = compose("A")
    with pytest.raises(ValidationError):
        d.must = ()


def test_to_query_all_absent():
    assert compose().to_query() == {"bool": {"filter": [{"range": {"word_count": {"gte": 0}}}]}}


def test_to_query_full():
    assert compose("A", "B", 10, 20).to_query() == {
        "bool": {
            "must": [{"match": {"author": "A"}}, {"match": {"title": "B"}}],
            "filter": [{"range": {"word_count": {"gte": 10, "lte": 20}}}],
        }
    }


def test_to_q_is_flat_and():
    q = compose("A", None, 5, 6).to_q()
    assert isinstance(q, Q)
    assert q.to_dict() == {
        "$and": [
            {"author": {"$match": "A"}},
            {"word_count": {"$gte": 5, "$lte": 6}},
        ]
    }


def test_to_q_range_only_is_leaf():
    assert compose().to_q().to_dict() == {"word_count": {"$gte": 0}}


def test_to_expr_is_json():
    expr = compose("Tolkien").to_expr()
    assert '"match":{"author":"Tolkien"}' in expr
    assert '"range":{"word_count":{"gte":0}}' in expr


def test_generic_composer_fields():
    composer = QueryComposer(match_fields=("genre", "language"), range_field="pages")
    d = composer.compose_fields({"genre": "fantasy", "language": None, "ignored": "x"}, lower=50, upper=0)
    assert d == QueryDescriptor(
        must=(FieldPredicate(field="genre", value="fantasy"),),
        range=RangePredicate(field="pages", gte=50),
    )


def test_generic_composer_keeps_field_order():
    composer = QueryComposer(match_fields=("title", "author"))
    d = composer.compose_fields({"author": "A", "title": "T"})
    assert [p.field for p in d.must] == ["title", "author"]

