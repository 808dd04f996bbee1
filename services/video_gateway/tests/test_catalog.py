import pytest
from sqlalchemy.exc import OperationalError

from services.video_gateway.domain.errors import PersistenceError
from services.video_gateway.infrastructure.catalog import SqlAlchemyVideoCatalog
from services.video_gateway.infrastructure.db import create_session_factory
from services.video_gateway.infrastructure.ids import TokenIdProvider
from services.video_gateway.infrastructure.memory_catalog import InMemoryVideoCatalog


@pytest.fixture
def sql_catalog(tmp_path):
    session_factory = create_session_factory(f"sqlite:///{tmp_path / 'catalog.db'}")
    return SqlAlchemyVideoCatalog(
        session_factory=session_factory,
        id_provider=TokenIdProvider(prefix="vid", length=16),
    )


@pytest.fixture(params=["memory", "sql"])
def any_catalog(request, sql_catalog):
    if request.param == "memory":
        return InMemoryVideoCatalog()
    return sql_catalog


def test_create_then_get(any_catalog):
    record = any_catalog.create(
        key="movie.mp4", location="https://bucket.example/movie.mp4", original_name="Movie"
    )

    fetched = any_catalog.get(record.video_id)

    assert fetched == record
    assert record.video_id.startswith("vid_")
    assert record.content_type is None
    assert record.size is None
    assert record.created_at == record.updated_at
    assert record.created_at.tzinfo is not None


def test_get_unknown_returns_none(any_catalog):
    assert any_catalog.get("vid_missing") is None


def test_list_filters_case_insensitively(any_catalog):
    any_catalog.create(key="a.mp4", location="a", original_name="Summer ABC")
    any_catalog.create(key="b.mp4", location="b", original_name="winter")
    any_catalog.create(key="c.mp4", location="c", original_name="xabcx")
    any_catalog.create(key="d.mp4", location="d")

    assert sorted(r.key for r in any_catalog.list("aBc")) == ["a.mp4", "c.mp4"]
    assert len(any_catalog.list()) == 4


def test_list_filter_is_literal(any_catalog):
    any_catalog.create(key="a.mp4", location="a", original_name="100% real")
    any_catalog.create(key="b.mp4", location="b", original_name="1000 real")

    assert [r.key for r in any_catalog.list("0%")] == ["a.mp4"]


def test_sql_errors_become_persistence_errors(sql_catalog, monkeypatch):
    def broken_factory():
        raise OperationalError("SELECT 1", {}, Exception("database is gone"))

    monkeypatch.setattr(sql_catalog, "_session_factory", broken_factory)

    with pytest.raises(PersistenceError):
        sql_catalog.create(key="a.mp4", location="a")
    with pytest.raises(PersistenceError):
        sql_catalog.list()


def test_token_ids_are_unique():
    provider = TokenIdProvider(prefix="vid", length=16)

    ids = {provider.generate() for _ in range(50)}

    assert len(ids) == 50
    assert all(len(value) == len("vid_") + 16 for value in ids)


def test_list_matches_non_ascii_name_in_its_own_case(any_catalog):
    any_catalog.create(key="a.mp4", location="a", original_name="ÉCOLE d'été")
    any_catalog.create(key="b.mp4", location="b", original_name="ecole")

    assert [r.key for r in any_catalog.list("ÉCOLE")] == ["a.mp4"]
