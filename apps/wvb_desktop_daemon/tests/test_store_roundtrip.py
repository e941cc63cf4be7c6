import logging

import pytest
from wvb_core.errors import TransportError
from wvb_core.models import CollectionSchemaInput, PropertyInput, SearchRequest


def _create_article_collection(store_client) -> str:
    return store_client.create_collection(
        CollectionSchemaInput(
            class_name="article",
            properties=[
                PropertyInput(name="title", data_type=["string"]),
                PropertyInput(name="views", data_type=["int"]),
            ],
        )
    )


def test_create_get_update_get_round_trip(store_client, fake_store) -> None:
    object_id = store_client.create_object("Article", {"title": "Draft", "views": 1})

    assert store_client.get_object_by_id("Article", object_id) == {"title": "Draft", "views": 1}

    store_client.update_object("Article", object_id, {"title": "Published"})

    assert store_client.get_object_by_id("Article", object_id) == {"title": "Published", "views": 1}
    patch = [r for r in fake_store.requests if r["method"] == "PATCH"]
    assert patch[0]["path"] == f"/v1/objects/{object_id}"
    assert patch[0]["json"] == {"class": "Article", "properties": {"title": "Published"}}


def test_missing_object_is_absent_but_other_failures_raise(store_client, fake_store, make_response) -> None:
    assert store_client.get_object_by_id("Article", "missing-id") is None

    fake_store.failures[("GET", "/v1/objects/broken")] = make_response(503, {"message": "shutting down"})
    with pytest.raises(TransportError) as excinfo:
        store_client.get_object_by_id("Article", "broken")
    assert excinfo.value.status == 503
    assert excinfo.value.message == "shutting down"


def test_collection_listing_counts_objects(store_client) -> None:
    assert _create_article_collection(store_client) == "Article"
    store_client.create_object("Article", {"title": "One"})
    store_client.create_object("Article", {"title": "Two"})

    [article] = store_client.list_collections()

    assert article.name == "Article"
    assert article.count == 2
    assert [p.data_type for p in article.properties] == [["text"], ["int"]]


def test_count_failure_keeps_listing_alive(store_client, fake_store, make_response, monkeypatch) -> None:
    fake_store.classes = [
        {"class": "First", "properties": []},
        {"class": "Second", "properties": []},
        {"class": "Third", "properties": []},
    ]
    store_client.create_object("First", {"a": 1})
    store_client.create_object("Third", {"a": 1})

    real_route = fake_store._route

    def route(method, path, payload):
        if path == "/v1/graphql" and "Second" in payload["query"]:
            return make_response(500, {"error": [{"message": "aggregate crashed"}]})
        return real_route(method, path, payload)

    monkeypatch.setattr(fake_store, "_route", route)

    collections = store_client.list_collections()

    assert [(c.name, c.count) for c in collections] == [("First", 1), ("Second", 0), ("Third", 1)]


def test_delete_objects_aborts_after_failed_id(store_client, fake_store, make_response) -> None:
    ids = [store_client.create_object("Article", {"title": t}) for t in ("a", "b", "c")]
    fake_store.failures[("DELETE", f"/v1/objects/{ids[1]}")] = make_response(500, {"error": "disk full"})

    with pytest.raises(TransportError) as excinfo:
        store_client.delete_objects("Article", ids)

    assert excinfo.value.path == f"/v1/objects/{ids[1]}"
    assert ids[0] not in fake_store.objects
    assert ids[1] in fake_store.objects
    assert ids[2] in fake_store.objects
    deletes = [r["path"] for r in fake_store.requests if r["method"] == "DELETE"]
    assert deletes == [f"/v1/objects/{ids[0]}", f"/v1/objects/{ids[1]}"]


def test_page_and_search_rows(store_client) -> None:
    _create_article_collection(store_client)
    store_client.create_object("Article", {"title": "Cats", "views": 3})

    [row] = store_client.get_page("Article", ["title", "views"], limit=10, offset=0)
    assert row.properties == {"title": "Cats", "views": 3}
    assert row.id

    [hit] = store_client.search(SearchRequest(query="cats", collection_name="Article", properties=["title"]))
    assert hit.properties == {"title": "Cats", "views": 3}
    assert hit.score == 0.5


def test_delete_collection(store_client, fake_store) -> None:
    _create_article_collection(store_client)

    store_client.delete_collection("Article")

    assert fake_store.classes == []


def test_failed_delete_is_reported_once(store_client, fake_store, make_response, caplog) -> None:
    object_id = store_client.create_object("Article", {"title": "a"})
    fake_store.failures[("DELETE", f"/v1/objects/{object_id}")] = make_response(500, {"error": "disk full"})

    with caplog.at_level(logging.DEBUG), pytest.raises(TransportError):
        store_client.delete_objects("Article", [object_id])

    errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
    assert len(errors) == 1
    assert errors[0].name == "wvb_core.pipelines.store"
    assert "delete_objects failed" in errors[0].getMessage()
    assert any(r.levelno == logging.WARNING and "after 0 of 1" in r.getMessage() for r in caplog.records)
