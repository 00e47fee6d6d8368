"""Tests for BookDocument, BookUpdate and ResultPage."""

from datetime import datetime, timezone

import pytest

from booksearch.exceptions import InvalidFieldError, MissingFieldError
from booksearch.schema import BookDocument, BookUpdate, ResultPage

HOBBIT_MS = int(datetime(1937, 9, 21, tzinfo=timezone.utc).timestamp() * 1000)


class TestBookDocument:
    def test_from_source_sets_id_and_fields(self):
        doc = BookDocument.from_source({"title": "The Hobbit", "author": "Tolkien", "word_count": 95356}, doc_id="b1")
        assert doc.id == "b1"
        assert doc.pk == "b1"
        assert doc.title == "The Hobbit"
        assert doc.word_count == 95356
        assert doc.publish_date is None

    def test_from_source_keeps_unknown_fields_and_drops_id(self):
        doc = BookDocument.from_source({"title": "X", "genre": "fantasy", "id": "stale"}, doc_id="b9")
        assert doc.id == "b9"
        assert doc.to_source() == {"title": "X", "genre": "fantasy"}

    def test_from_source_keeps_multi_valued_fields(self):
        source = {"title": "Good Omens", "author": ["Terry Pratchett", "Neil Gaiman"], "word_count": 114000}
        doc = BookDocument.from_source(source, doc_id="d1")
        assert doc.id == "d1"
        assert doc.author == ["Terry Pratchett", "Neil Gaiman"]
        assert doc.to_source() == source

    def test_from_source_keeps_unreadable_stored_date(self):
        source = {"title": "Mort", "publish_date": "1987/11/12"}
        doc = BookDocument.from_source(source, doc_id="d2")
        assert doc.publish_date == "1987/11/12"
        assert doc.to_source() == source

    def test_from_source_still_normalizes_readable_dates(self):
        assert BookDocument.from_source({"publish_date": "1937-09-21 00:00:00"}).publish_date == HOBBIT_MS

    def test_from_none_source(self):
        doc = BookDocument.from_source(None)
        assert doc.to_source() == {}

    def test_to_source_drops_id_and_none(self):
        doc = BookDocument(id="b1", title="T", author=None, word_count=3)
        assert doc.to_source() == {"title": "T", "word_count": 3}

    def test_pk_without_id_raises(self):
        with pytest.raises(MissingFieldError):
            BookDocument(title="T").pk

    @pytest.mark.parametrize(
        "stored",
        [
            HOBBIT_MS,
            str(HOBBIT_MS),
            "1937-09-21 00:00:00",
            "1937-09-21T00:00:00Z",
            "1937-09-21T00:00:00.000+00:00",
            datetime(1937, 9, 21),
        ],
    )
    def test_publish_date_normalized_to_epoch_millis(self, stored):
        assert BookDocument(publish_date=stored).publish_date == HOBBIT_MS

    def test_unreadable_publish_date_raises(self):
        with pytest.raises(InvalidFieldError):
            BookDocument(publish_date="21/09/1937")


class TestBookUpdate:
    def test_only_set_fields_in_partial(self):
        assert BookUpdate(title="New").to_partial() == {"title": "New"}

    def test_publish_date_converted(self):
        partial = BookUpdate(publish_date=datetime(1937, 9, 21, tzinfo=timezone.utc)).to_partial()
        assert partial == {"publish_date": HOBBIT_MS}

    def test_zero_word_count_is_kept(self):
        assert BookUpdate(word_count=0).to_partial() == {"word_count": 0}


class TestResultPage:
    def test_defaults_are_first_page_of_ten(self):
        page = ResultPage()
        assert (page.size, page.offset, page.total) == (10, 0, 0)
        assert page.sources() == []

    def test_sources_are_stored_fields(self):
        page = ResultPage(hits=[BookDocument(id="b1", title="A"), BookDocument(id="b2", author="B")], total=7)
        assert page.sources() == [{"title": "A"}, {"author": "B"}]
        assert page.total == 7
