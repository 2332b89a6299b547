from flask_sqlalchemy import SQLAlchemy # database operations
from datetime import datetime, timezone # date handling
import re

# Create SQLAlchemy instance
db = SQLAlchemy()

# JavaScript \s set; Python \s differs on \x1c-\x1f and \ufeff
_WHITESPACE = re.compile("[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]+")


def make_slug(title):
    """Lowercase the title and replace every whitespace run with a hyphen."""
    return _WHITESPACE.sub("-", title.lower())


def today():
    # YYYY-MM-DD, UTC
    return datetime.now(timezone.utc).date().isoformat()


def new_post(title, content, image_url, date=None):
    """Build a post record. Key order is the order written to disk and to JSON responses."""
    return {
        "title": title,
        "content": content,
        "imageUrl": image_url,
        "slug": make_slug(title),
        "date": date or today(),
    }


# Define Data Model (Data Layer Interface)
# Same fields as the JSON record, slug is the unique key, id keeps insertion order
class Post(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.Text, nullable=False)
    content = db.Column(db.Text, nullable=False)
    image_url = db.Column(db.String(), nullable=False)
    slug = db.Column(db.String(), nullable=False, unique=True, index=True)
    date = db.Column(db.String(10), nullable=False)

    @classmethod
    def from_record(cls, record):
        return cls(
            title=record["title"],
            content=record["content"],
            image_url=record["imageUrl"],
            slug=record["slug"],
            date=record["date"],
        )

    def to_record(self):
        return {
            "title": self.title,
            "content": self.content,
            "imageUrl": self.image_url,
            "slug": self.slug,
            "date": self.date,
        }
