"""Tests for the Catalog store."""

import pytest

from gallery_app.catalog import Catalog
from gallery_app.errors import DuplicatePhotoError

from conftest import BASE_TIME, make_photo


class TestInsert:
    def test_insert_prepends(self, catalog, photo_a):
        new = make_photo("c", title="Fresh")
        catalog.insert(new)

        records = catalog.records()
        assert records[0] is new
        assert records[1] is photo_a
        assert len(catalog) == 3

    def test_insert_into_empty_catalog(self):
        catalog = Catalog()
        photo = make_photo("only")
        catalog.insert(photo)
        assert catalog.records() == (photo,)

    def test_duplicate_id_is_rejected(self, catalog):
        with pytest.raises(DuplicatePhotoError):
            catalog.insert(make_photo("a"))
        assert len(catalog) == 2

    def test_duplicate_ids_rejected_at_construction(self):
        with pytest.raises(DuplicatePhotoError):
            Catalog([make_photo("x"), make_photo("x")])


class TestUpdateById:
    def test_replaces_in_place(self, catalog, photo_a, photo_b):
        renamed = photo_b.model_copy(update={"title": "City Lights"})
        assert catalog.update_by_id("b", renamed) is True

        records = catalog.records()
        assert [r.id for r in records] == ["a", "b"]
        assert records[1].title == "City Lights"
        assert records[0] is photo_a

    def test_unknown_id_leaves_catalog_unchanged(self, catalog):
        before = catalog.records()
        ghost = make_photo("ghost", title="Ghost")

        assert catalog.update_by_id("ghost", ghost) is False
        after = catalog.records()
        assert after == before
        assert all(x is y for x, y in zip(before, after))

    def test_id_mismatch_raises(self, catalog, photo_a):
        with pytest.raises(ValueError):
            catalog.update_by_id("b", photo_a)

    def test_created_at_is_kept(self, catalog, photo_a):
        moved = photo_a.model_copy(update={"created_at": BASE_TIME.replace(year=2030)})
        catalog.update_by_id("a", moved)
        assert catalog.get("a").created_at == BASE_TIME


class TestDeleteById:
    def test_removes_exactly_one(self):
        catalog = Catalog([make_photo("1"), make_photo("2"), make_photo("3")])
        assert catalog.delete_by_id("2") is True
        assert [r.id for r in catalog] == ["1", "3"]

    def test_unknown_id_is_noop(self, catalog):
        before = catalog.records()
        assert catalog.delete_by_id("missing") is False
        assert catalog.records() == before


class TestFilter:
    def test_empty_query_returns_everything_in_order(self, catalog):
        assert list(catalog.filter("")) == list(catalog.records())

    def test_whitespace_query_returns_everything(self, catalog):
        assert list(catalog.filter("   \t")) == list(catalog.records())

    def test_tag_match_is_case_insensitive(self, catalog, photo_a):
        assert list(catalog.filter("NATURE")) == [photo_a]

    def test_only_tags_scenario(self):
        a = make_photo("A", tags=("nature",))
        b = make_photo("B", tags=("city",))
        catalog = Catalog([a, b])
        assert list(catalog.filter("NATURE")) == [a]

    @pytest.mark.parametrize(
        "query, expected",
        [
            ("mist", ["a"]),  # title
            ("FUTURISTIC", ["b"]),  # description
            ("architect", ["b"]),  # category
            ("Neo", ["b"]),  # tag prefix
            ("ountain", ["a"]),  # tag infix
            ("the", ["b"]),  # "The vibrant streets"
            ("e", ["a", "b"]),
            ("zebra", []),
        ],
    )
    def test_substring_fields(self, catalog, query, expected):
        assert [r.id for r in catalog.filter(query)] == expected

    def test_query_is_not_tokenized(self, catalog):
        assert list(catalog.filter("mist morning")) == []
        assert [r.id for r in catalog.filter("in morning")] == ["a"]

    def test_filter_is_lazy_and_pure(self, catalog):
        before = catalog.records()
        result = catalog.filter("city")
        assert iter(result) is result
        list(result)
        assert catalog.records() == before

    def test_filter_sees_later_changes(self, catalog):
        catalog.insert(make_photo("c", tags=("city",)))
        assert [r.id for r in catalog.filter("city")] == ["c", "b"]

    def test_insert_during_iteration_is_not_seen(self):
        catalog = Catalog([make_photo("x", tags=("t",))])
        seen = []
        for n, record in enumerate(catalog.filter("t")):
            seen.append(record.id)
            catalog.insert(make_photo(f"new-{n}", tags=("t",)))
        assert seen == ["x"]
        assert len(catalog) == 2

    @pytest.mark.parametrize("query", ["t", ""])
    def test_delete_during_iteration_skips_nothing(self, query):
        catalog = Catalog([make_photo(str(i), tags=("t",)) for i in range(4)])
        seen = []
        for record in catalog.filter(query):
            seen.append(record.id)
            catalog.delete_by_id(record.id)
        assert seen == ["0", "1", "2", "3"]
        assert len(catalog) == 0


class TestQueries:
    def test_get(self, catalog, photo_b):
        assert catalog.get("b") is photo_b
        assert catalog.get("zzz") is None
        assert catalog.get(None) is None

    def test_contains(self, catalog):
        assert "a" in catalog
        assert "z" not in catalog

    def test_count_by_category(self, catalog):
        assert catalog.count_by_category("Nature") == 1
        assert catalog.count_by_category("nature") == 0
        assert catalog.count_by_category("People") == 0
