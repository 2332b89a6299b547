import re
import unittest

from models import make_slug, new_post


class SlugTests(unittest.TestCase):
    def test_lowercases_and_hyphenates(self):
        self.assertEqual(make_slug("My First Post"), "my-first-post")

    def test_whitespace_runs_become_one_hyphen(self):
        self.assertEqual(make_slug("My  First\t\nPost"), "my-first-post")

    def test_other_characters_are_kept(self):
        self.assertEqual(make_slug("C'est l'été!"), "c'est-l'été!")
        self.assertEqual(make_slug(" padded "), "-padded-")

    def test_whitespace_set(self):
        self.assertEqual(make_slug("a\x1cb"), "a\x1cb")
        self.assertEqual(make_slug("a\ufeffb"), "a-b")
        self.assertEqual(make_slug("a\u00a0\u3000b"), "a-b")


class NewPostTests(unittest.TestCase):
    def test_fields_and_order(self):
        post = new_post("Hello World", "<p>hi</p>", "/uploads/1.png", date="2024-05-01")
        self.assertEqual(
            list(post.items()),
            [
                ("title", "Hello World"),
                ("content", "<p>hi</p>"),
                ("imageUrl", "/uploads/1.png"),
                ("slug", "hello-world"),
                ("date", "2024-05-01"),
            ],
        )

    def test_default_date_is_calendar_date(self):
        post = new_post("t", "c", "/uploads/1.png")
        self.assertRegex(post["date"], re.compile(r"^\d{4}-\d{2}-\d{2}$"))


if __name__ == "__main__":
    unittest.main()
