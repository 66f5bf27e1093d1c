from __future__ import annotations

import pytest

from fastjsonapi.core.document import VERSION, JSONAPIDocumentBuilder
from fastjsonapi.core.errors import (
    JSONAPIErrorBuilder,
    MissingPrimaryKeyError,
    ResourceNotFoundError,
    UnresolvableRelationError,
)


def test_build_single_without_included():
    document = JSONAPIDocumentBuilder().build_single(
        {"id": "1", "type": "posts"}, included=[], links={"self": "/posts/1"}
    )

    assert document == {
        "data": {"id": "1", "type": "posts"},
        "links": {"self": "/posts/1"},
        "jsonapi": {"version": VERSION},
    }


def test_build_collection_orders_keys():
    document = JSONAPIDocumentBuilder(version="1.1").build_collection(
        [{"id": "1", "type": "posts"}],
        included=[{"id": "2", "type": "users"}],
        links={"self": "/posts"},
        meta={"count": 1},
    )

    assert list(document) == ["data", "links", "jsonapi", "included", "meta"]
    assert document["jsonapi"] == {"version": "1.1"}


def test_build_error():
    document = JSONAPIDocumentBuilder().build_error([{"status": "404"}])

    assert document == {"errors": [{"status": "404"}], "jsonapi": {"version": VERSION}}


def test_error_object_requires_a_field():
    with pytest.raises(ValueError):
        JSONAPIErrorBuilder().error_object()


def test_errors_render_as_error_objects():
    assert ResourceNotFoundError("No Post with id '3'.").to_error_object() == {
        "status": "404",
        "code": "ResourceNotFoundError",
        "title": "Not Found",
        "detail": "No Post with id '3'.",
    }
    missing = MissingPrimaryKeyError("post").to_error_object()
    assert missing["status"] == "500"
    assert missing["detail"] == "Record of model 'post' has no primary key."
    relation = UnresolvableRelationError("post", "tags")
    assert str(relation) == "Could not resolve relation 'tags' of model 'post'."


def test_error_documents_come_from_the_document_builder():
    error = ResourceNotFoundError("gone")
    document = JSONAPIDocumentBuilder().build_error([error.to_error_object()])

    assert error.status == 404
    assert document["errors"][0]["status"] == "404"
    assert not hasattr(JSONAPIErrorBuilder, "error_document")
