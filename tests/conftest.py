"""Shared fixtures: in-memory model handles and post serializers."""

from __future__ import annotations

import asyncio
import random
from typing import Any

import pytest

from fastjsonapi.config import get_settings
from fastjsonapi.serializers import JSONAPISerializer

DOMAIN = "http://localhost:4000"


def link_for(type_: str, id_: Any = None) -> str:
    return f"{DOMAIN}/{type_}/{id_}" if id_ is not None else f"{DOMAIN}/{type_}"


class FakeRecord:
    """Model handle backed by plain dicts, with optional per-relation delays."""

    def __init__(
        self,
        model_name: str,
        pk: Any,
        attributes: dict[str, Any] | None = None,
        relations: dict[str, Any] | None = None,
        delays: dict[str, float] | None = None,
    ) -> None:
        self.model_name = model_name
        self.pk = pk
        self.attributes = attributes or {}
        self.relations = relations or {}
        self.delays = delays or {}
        self.loads: list[str] = []
        self.finished: list[str] = []

    def __repr__(self) -> str:
        return f"<FakeRecord {self.model_name}:{self.pk}>"

    def get_primary_key(self) -> Any:
        if isinstance(self.pk, Exception):
            raise self.pk
        return self.pk

    def get_attributes(self, *names: str) -> dict[str, Any]:
        return {name: self.attributes.get(name) for name in names}

    async def get_relation(self, name: str) -> Any:
        self.loads.append(name)
        await asyncio.sleep(self.delays.get(name, 0))
        self.finished.append(name)
        value = self.relations.get(name)
        if isinstance(value, Exception):
            raise value
        return value


class UserSerializer(JSONAPISerializer):
    class Meta:
        type_ = "users"
        attributes = ["name", "email"]


class ImageSerializer(JSONAPISerializer):
    class Meta:
        type_ = "images"
        attributes = ["url"]


class TagSerializer(JSONAPISerializer):
    class Meta:
        type_ = "tags"
        attributes = ["name"]


class CommentSerializer(JSONAPISerializer):
    class Meta:
        type_ = "comments"
        attributes = ["message"]


class CommentWithUserSerializer(JSONAPISerializer):
    class Meta:
        type_ = "comments"
        attributes = ["message"]
        has_one = ["user"]


class PostSerializer(JSONAPISerializer):
    class Meta:
        type_ = "posts"
        attributes = ["body", "title", "isPublic", "createdAt", "updatedAt"]
        has_one = ["user", "image"]
        has_many = ["comments", "tags"]


def build_registry(namespace: str = "") -> dict[str, JSONAPISerializer]:
    return {
        "user": UserSerializer(namespace=namespace),
        "image": ImageSerializer(namespace=namespace),
        "tags": TagSerializer(namespace=namespace),
        "comments": CommentSerializer(namespace=namespace),
    }


class PostFactory:
    """Build posts with a user, an image, three tags and three comments."""

    def __init__(self) -> None:
        self._ids = iter(range(1, 10_000))

    def next_id(self) -> int:
        return next(self._ids)

    def user(self, name: str = "Jane Doe") -> FakeRecord:
        return FakeRecord(
            "user",
            self.next_id(),
            {"name": name, "email": f"{name.split()[0].lower()}@example.com"},
        )

    def __call__(
        self,
        *,
        include_user: bool = True,
        include_image: bool = True,
        include_tags: bool = True,
        include_comments: bool = True,
        user: FakeRecord | None = None,
        jitter: bool = False,
    ) -> FakeRecord:
        post_id = self.next_id()
        relations: dict[str, Any] = {
            "user": (user or self.user()) if include_user else None,
            "image": (
                FakeRecord("image", self.next_id(), {"url": f"http://example.com/{post_id}.png"})
                if include_image
                else None
            ),
            "tags": (
                [FakeRecord("tag", self.next_id(), {"name": f"tag-{i}"}) for i in range(3)]
                if include_tags
                else []
            ),
            "comments": (
                [
                    FakeRecord("comment", self.next_id(), {"message": f"comment {i}", "postId": post_id})
                    for i in range(3)
                ]
                if include_comments
                else []
            ),
        }
        delays = (
            {name: random.uniform(0, 0.01) for name in relations} if jitter else {}
        )
        return FakeRecord(
            "post",
            post_id,
            {
                "body": f"Body of post {post_id}",
                "title": f"Post {post_id}",
                "isPublic": post_id % 2 == 0,
                "createdAt": "2026-01-01T00:00:00Z",
                "updatedAt": "2026-01-02T00:00:00Z",
            },
            relations,
            delays,
        )


@pytest.fixture
def create_post() -> PostFactory:
    return PostFactory()


@pytest.fixture
def create_serializer():
    def factory(namespace: str = "", **kwargs: Any) -> PostSerializer:
        return PostSerializer(namespace=namespace, registry=build_registry(namespace), **kwargs)

    return factory


@pytest.fixture
def subject(create_serializer) -> PostSerializer:
    return create_serializer()


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
