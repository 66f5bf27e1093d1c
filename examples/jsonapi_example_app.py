"""Example FastAPI app serving posts as JSON:API compound documents.

Run with:
    uvicorn examples.jsonapi_example_app:app --reload

Try:
    GET /posts?include=user,image,tags,comments.user
    GET /admin/posts/1?include=image
"""
from __future__ import annotations

import os
from typing import AsyncGenerator

from fastapi import Depends, FastAPI
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, func, select
from sqlalchemy.ext.asyncio import AsyncAttrs, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, relationship

from fastjsonapi.log import init_logging
from fastjsonapi.middleware import ErrorHandlerMiddleware
from fastjsonapi.routers import JSONAPIRouter
from fastjsonapi.serializers import JSONAPISerializer
from fastjsonapi.sqlalchemy import SQLAlchemyDataLayer
from fastjsonapi.utils.server import normalize_port
from fastjsonapi.viewsets import JSONAPIViewSet

DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite+aiosqlite:///./jsonapi_example.db")

engine = create_async_engine(DATABASE_URL)
async_session = async_sessionmaker(engine, expire_on_commit=False)


class Base(AsyncAttrs, DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    posts = relationship("Post", back_populates="user")
    comments = relationship("Comment", back_populates="user")


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    body = Column(Text, nullable=False)
    is_public = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
    user_id = Column(Integer, ForeignKey("users.id"))
    user = relationship("User", back_populates="posts")
    image = relationship("Image", back_populates="post", uselist=False)
    comments = relationship("Comment", back_populates="post")
    tags = relationship("Tag", secondary="categorizations", back_populates="posts")


class Image(Base):
    __tablename__ = "images"

    id = Column(Integer, primary_key=True)
    url = Column(String, nullable=False)
    post_id = Column(Integer, ForeignKey("posts.id"))
    post = relationship("Post", back_populates="image")


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True)
    message = Column(String, nullable=False)
    post_id = Column(Integer, ForeignKey("posts.id"))
    user_id = Column(Integer, ForeignKey("users.id"))
    post = relationship("Post", back_populates="comments")
    user = relationship("User", back_populates="comments")


class Tag(Base):
    __tablename__ = "tags"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    posts = relationship("Post", secondary="categorizations", back_populates="tags")


class Categorization(Base):
    __tablename__ = "categorizations"

    id = Column(Integer, primary_key=True)
    post_id = Column(Integer, ForeignKey("posts.id"))
    tag_id = Column(Integer, ForeignKey("tags.id"))


class UserSerializer(JSONAPISerializer):
    class Meta:
        model = User
        attributes = ["name", "email"]


class ImageSerializer(JSONAPISerializer):
    class Meta:
        model = Image
        attributes = ["url"]


class TagSerializer(JSONAPISerializer):
    class Meta:
        model = Tag
        attributes = ["name"]


class CommentSerializer(JSONAPISerializer):
    class Meta:
        model = Comment
        attributes = ["message"]
        has_one = ["user"]


class PostSerializer(JSONAPISerializer):
    class Meta:
        model = Post
        attributes = ["body", "title", "is_public", "created_at", "updated_at"]
        has_one = ["user", "image"]
        has_many = ["comments", "tags"]


def build_post_serializer(namespace: str = "") -> PostSerializer:
    """Wire the post serializer with serializers for every includable path."""
    return PostSerializer(
        namespace=namespace,
        registry={
            "user": UserSerializer(namespace=namespace),
            "image": ImageSerializer(namespace=namespace),
            "tags": TagSerializer(namespace=namespace),
            "comments": CommentSerializer(namespace=namespace),
            "comments.user": UserSerializer(namespace=namespace),
        },
    )


class PostViewSet(JSONAPIViewSet):
    def __init__(self, session: AsyncSession, *, namespace: str = "") -> None:
        self.serializer = build_post_serializer(namespace)
        self.data_layer = SQLAlchemyDataLayer(model=Post, session=session)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with async_session() as session:
        yield session


async def seed_example_data(session: AsyncSession) -> None:
    """Insert a couple of posts with users, images, tags and comments if empty."""
    result = await session.execute(select(Post.id).limit(1))
    if result.first() is not None:
        return

    jane = User(name="Jane Doe", email="jane.doe@example.com")
    john = User(name="John Smith", email="john.smith@example.com")
    tags = [Tag(name="python"), Tag(name="jsonapi"), Tag(name="async")]
    first = Post(
        title="Compound documents",
        body="Side-loading related resources with include.",
        is_public=True,
        user=jane,
        image=Image(url="http://example.com/images/compound.png"),
        tags=tags,
    )
    second = Post(
        title="Namespaced links",
        body="Serving the same resources under /admin.",
        is_public=False,
        user=john,
        tags=tags[:1],
    )
    first.comments = [
        Comment(message="Great article!", user=john),
        Comment(message="Helpful examples.", user=jane),
    ]
    session.add_all([first, second])
    await session.commit()


def get_post_viewset(session: AsyncSession = Depends(get_session)) -> PostViewSet:
    """Dependency factory for PostViewSet."""
    return PostViewSet(session)


def get_admin_post_viewset(session: AsyncSession = Depends(get_session)) -> PostViewSet:
    """Dependency factory for the namespaced PostViewSet."""
    return PostViewSet(session, namespace="admin")


init_logging()

app = FastAPI(
    title="FastJSONAPI Example",
    description="Posts served as JSON:API v1.0 compound documents.",
    version="0.1.0",
)
app.add_middleware(ErrorHandlerMiddleware)

router = JSONAPIRouter()
router.register_viewset("/posts", get_post_viewset)
admin_router = JSONAPIRouter(prefix="/admin")
admin_router.register_viewset("/posts", get_admin_post_viewset)


@app.on_event("startup")
async def on_startup() -> None:
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    async with async_session() as session:
        await seed_example_data(session)


app.include_router(router)
app.include_router(admin_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, port=normalize_port(os.environ.get("PORT")))
