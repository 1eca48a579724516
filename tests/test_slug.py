# tests/test_slug.py
import pytest

from plume.utils.slug import slugify


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Hello World!!", "hello-world"),
        ("  Leading and trailing  ", "leading-and-trailing"),
        ("Café crème à Paris", "cafe-creme-a-paris"),
        ("snake_case and--dashes", "snake-case-and-dashes"),
        ("mail@home", "mail-at-home"),
        ("2024 in review", "2024-in-review"),
    ],
)
def test_slugify(text: str, expected: str) -> None:
    assert slugify(text) == expected


def test_slugify_without_usable_characters() -> None:
    assert slugify("!!! ???") == ""
