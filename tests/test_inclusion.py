from __future__ import annotations

import asyncio
import logging

import pytest

from fastjsonapi.core.errors import UnresolvableRelationError
from fastjsonapi.core.inclusion import IncludedResourceSet, InclusionWalker, split_include_paths
from fastjsonapi.serializers import JSONAPISerializer, SerializerDefinition

from .conftest import DOMAIN, FakeRecord, TagSerializer


def resource(type_, id_, **attributes):
    return {"id": id_, "type": type_, "attributes": attributes}


def test_included_set_keeps_first_insert():
    included = IncludedResourceSet()

    assert included.add(resource("tags", "1", name="first")) is True
    assert included.add(resource("tags", "1", name="second")) is False
    assert included.add(resource("users", "1")) is True

    assert len(included) == 2
    assert ("tags", "1") in included
    assert included.values()[0]["attributes"] == {"name": "first"}


def test_included_set_respects_exclusions():
    included = IncludedResourceSet(exclude=[("posts", "7")])

    assert included.add(resource("posts", "7")) is False
    assert included.add(resource("posts", "8")) is True
    assert [item["id"] for item in included.values()] == ["8"]


def test_split_include_paths():
    assert split_include_paths(["image", "comments.user", " tags ", "", "image", "a..b"]) == [
        ["image"],
        ["comments", "user"],
        ["tags"],
        ["a", "b"],
    ]


@pytest.fixture
def serializer():
    definition = SerializerDefinition(type_="posts", has_many=("tags",), has_one=("cover",))
    return JSONAPISerializer(definition=definition, registry={"tags": TagSerializer()})


@pytest.mark.asyncio
async def test_walker_merges_in_record_order(serializer):
    shared = FakeRecord("tag", 1, {"name": "shared"})
    first = FakeRecord("post", 10, relations={"tags": [shared, FakeRecord("tag", 2, {"name": "a"})]}, delays={"tags": 0.01})
    second = FakeRecord("post", 11, relations={"tags": [FakeRecord("tag", 3, {"name": "b"}), shared]})

    included = await InclusionWalker(serializer, domain=DOMAIN).walk(
        [first, second], ["tags"], IncludedResourceSet()
    )

    assert [item["id"] for item in included.values()] == ["1", "2", "3"]


@pytest.mark.asyncio
async def test_walker_without_paths_does_not_resolve(serializer):
    record = FakeRecord("post", 10, relations={"tags": []})

    await InclusionWalker(serializer, domain=DOMAIN).walk([record], [""], IncludedResourceSet())

    assert record.loads == []


@pytest.mark.asyncio
async def test_walker_logs_missing_serializer(serializer, caplog):
    record = FakeRecord("post", 10, relations={"cover": FakeRecord("image", 4, {"url": "x"})})

    with caplog.at_level(logging.WARNING, logger="fastjsonapi.core.inclusion"):
        included = await InclusionWalker(serializer, domain=DOMAIN).walk(
            [record], ["cover"], IncludedResourceSet()
        )

    assert len(included) == 0
    assert "cover" in caplog.text


@pytest.mark.asyncio
async def test_walker_falls_back_to_nested_registry():
    user_serializer = JSONAPISerializer(
        definition=SerializerDefinition(type_="users", attributes=("name",))
    )
    comment_serializer = JSONAPISerializer(
        definition=SerializerDefinition(type_="comments", has_one=("user",)),
        registry={"user": user_serializer},
    )
    post_serializer = JSONAPISerializer(
        definition=SerializerDefinition(type_="posts", has_many=("comments",)),
        registry={"comments": comment_serializer},
    )
    user = FakeRecord("user", 5, {"name": "Nested"})
    post = FakeRecord("post", 1, relations={"comments": [FakeRecord("comment", 2, relations={"user": user})]})

    included = await InclusionWalker(post_serializer, domain=DOMAIN).walk(
        [post], ["comments.user"], IncludedResourceSet()
    )

    assert [(item["type"], item["id"]) for item in included.values()] == [("comments", "2"), ("users", "5")]


@pytest.mark.asyncio
async def test_walker_failure_cancels_other_paths(serializer):
    record = FakeRecord(
        "post",
        10,
        relations={"tags": [FakeRecord("tag", 1)], "cover": ConnectionError("gone")},
        delays={"tags": 0.05},
    )

    with pytest.raises(UnresolvableRelationError):
        await InclusionWalker(serializer, domain=DOMAIN).walk(
            [record], ["tags", "cover"], IncludedResourceSet()
        )
    await asyncio.sleep(0.1)

    assert record.loads == ["tags", "cover"]
    assert record.finished == ["cover"]


class Label:
    """Handle without a ``model_name`` attribute."""

    def get_primary_key(self):
        return 7

    def get_attributes(self, *names):
        return {"name": "unnamed"}

    async def get_relation(self, name):
        return None


@pytest.mark.asyncio
async def test_walker_accepts_handles_without_model_name(serializer):
    record = FakeRecord("post", 10, relations={"tags": [Label()]})

    document = await serializer.format(data=record, domain=DOMAIN, include=["tags"])

    assert document["data"]["relationships"]["tags"] == {"data": [{"id": "7", "type": "tags"}]}
    assert document["included"] == [
        {
            "id": "7",
            "type": "tags",
            "links": {"self": f"{DOMAIN}/tags/7"},
            "attributes": {"name": "unnamed"},
        }
    ]
