"""
Post repositories.

Every implementation keeps records in insertion order and enforces slug
uniqueness on append. Writes go through a per-repository lock so two
requests handled by the same process cannot drop each other's posts.
"""
import json
import os
import tempfile
import threading

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models import db, Post

# mkstemp creates 0600 files, posts get the usual 0666 minus umask
_UMASK = os.umask(0)
os.umask(_UMASK)
_FILE_MODE = 0o666 & ~_UMASK


class RepositoryError(Exception):
    """The stored collection could not be read back as post records."""


class DuplicateSlugError(Exception):
    def __init__(self, slug):
        super().__init__(f"a post with slug {slug!r} already exists")
        self.slug = slug


class PostRepository:
    def __init__(self):
        self._lock = threading.Lock()

    def load(self):
        raise NotImplementedError

    def append(self, record):
        raise NotImplementedError

    def find_by_slug(self, slug):
        for record in self.load():
            if record["slug"] == slug:
                return record
        return None


class JsonFilePostRepository(PostRepository):
    """The whole collection lives in one JSON array file, rewritten on every append."""

    def __init__(self, path):
        super().__init__()
        self.path = path
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        if not os.path.exists(path):
            self._write([])

    def load(self):
        with open(self.path, "rb") as f:
            data = f.read()
        if not data.strip():
            return []
        try:
            # UnicodeDecodeError is a ValueError too
            records = json.loads(data.decode("utf-8"))
        except ValueError as e:
            raise RepositoryError(f"{self.path}: {e}") from e
        if not isinstance(records, list):
            raise RepositoryError(f"{self.path}: expected a JSON array")
        return records

    def append(self, record):
        with self._lock:
            records = self.load()
            if any(r["slug"] == record["slug"] for r in records):
                raise DuplicateSlugError(record["slug"])
            records.append(record)
            self._write(records)
        return record

    def _write(self, records):
        # Replace the file in one step so readers never see a partial array
        directory = os.path.dirname(os.path.abspath(self.path))
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".blogs-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
            os.chmod(tmp_path, _FILE_MODE)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise


class InMemoryPostRepository(PostRepository):
    def __init__(self, records=None):
        super().__init__()
        self._records = [dict(r) for r in records or []]

    def load(self):
        return [dict(r) for r in self._records]

    def append(self, record):
        with self._lock:
            if any(r["slug"] == record["slug"] for r in self._records):
                raise DuplicateSlugError(record["slug"])
            self._records.append(dict(record))
        return record


class SqlPostRepository(PostRepository):
    """Posts stored through Flask-SQLAlchemy. Needs an application context."""

    def load(self):
        try:
            return [post.to_record() for post in Post.query.order_by(Post.id).all()]
        except SQLAlchemyError as e:
            db.session.rollback()
            raise RepositoryError(str(e)) from e

    def append(self, record):
        with self._lock:
            if Post.query.filter_by(slug=record["slug"]).first() is not None:
                raise DuplicateSlugError(record["slug"])
            db.session.add(Post.from_record(record))
            try:
                db.session.commit()
            except IntegrityError as e:
                # another process won the unique slug
                db.session.rollback()
                raise DuplicateSlugError(record["slug"]) from e
        return record

    def find_by_slug(self, slug):
        try:
            post = Post.query.filter_by(slug=slug).first()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise RepositoryError(str(e)) from e
        return post.to_record() if post else None
