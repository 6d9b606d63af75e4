import pytest

from dberror.utils.text import capitalize


@pytest.mark.parametrize(
    "given, expected",
    [
        ("foo", "Foo"),
        ("foo bar baz", "Foo bar baz"),
        ("Foo", "Foo"),
        ("fOO", "FOO"),
        ("ǆemal", "ǅemal"),  # title case differs from upper case
        ("éclair", "Éclair"),
        ("", ""),
    ],
)
def test_capitalize(given, expected):
    assert capitalize(given) == expected
