import pytest

from sensitive_replace.structures import Delimited, LowerCamel, ScreamingSnake, UpperCamel
from sensitive_replace.styles import detect_style, restyle, style_name


@pytest.mark.parametrize(
    "text, expected",
    [
        ("FOO_BAR", ScreamingSnake("")),
        ("__FOO", ScreamingSnake("__")),
        ("FOO", ScreamingSnake("")),
        ("foo-bar", Delimited("-")),
        ("Foo_Bar", Delimited("_")),
        ("a::b", Delimited("::")),
        ("foo bar", Delimited(" ")),
        ("fooBar", LowerCamel()),
        ("foo", LowerCamel()),
        ("FooBar", UpperCamel()),
        ("FOOBar", UpperCamel()),
        ("123", None),
        ("", None),
    ],
)
def test_detect_style_priority(text, expected):
    assert detect_style(text) == expected


def test_style_name():
    assert style_name(detect_style("FOO")) == "screaming_snake"
    assert style_name(detect_style("a-b")) == "delimited"
    assert style_name(detect_style("aB")) == "lower_camel"
    assert style_name(detect_style("Ab")) == "upper_camel"
    assert style_name(None) is None


def test_screaming_snake():
    assert restyle("FOO_BAR", ["hello", "world"]) == "HELLO_WORLD"
    assert restyle("_FOO", ["x"]) == "_X"
    assert restyle("MAX_VALUE", ["min", "value"]) == "MIN_VALUE"


def test_delimited():
    assert restyle("foo-bar", ["hello", "world"]) == "hello-world"
    assert restyle("Foo-Bar", ["hello", "world"]) == "Hello-World"
    assert restyle("Foo_bar", ["hello", "world"]) == "Hello_world"


def test_delimited_styles_each_segment_independently():
    assert restyle("user-ID", ["account", "key"]) == "account-KEY"


def test_delimited_extra_words_style_themselves():
    assert restyle("a::b", ["x", "y", "z"]) == "x::y::z"


def test_delimited_unstyled_segment_keeps_word():
    assert restyle("v-2", ["beta", "three"]) == "beta-three"


def test_lower_camel():
    assert restyle("fooBar", ["hello", "world"]) == "helloWorld"
    assert restyle("foo", ["hello", "world"]) == "helloWorld"


def test_lower_camel_acronyms():
    assert restyle("urlParser", ["URL", "parser"]) == "urlParser"
    assert restyle("fooBar", ["get", "URL"]) == "getURL"
    assert restyle("fooBar", ["v", "2"]) == "v2"


def test_upper_camel():
    assert restyle("FooBar", ["hello", "world"]) == "HelloWorld"
    assert restyle("FooBar", ["hello", "wORLD"]) == "HelloWORLD"


def test_no_style_matched():
    assert restyle("123", ["x", "y"]) is None
    assert restyle("", ["x"]) is None


def test_empty_target_words():
    assert restyle("fooBar", []) == ""
    assert restyle("FooBar", []) == ""
    assert restyle("_FOO", []) == "_"
    assert restyle("foo-bar", []) == ""


def test_trailing_newline_is_not_end_of_text():
    assert detect_style("FOO\n") == UpperCamel()
    assert restyle("FOO\n", ["hello", "world"]) == "HelloWorld"
    assert detect_style("foo\n") is None
    assert restyle("foo\n", ["hello", "world"]) is None


def test_non_ascii_digits_are_not_recognised():
    assert detect_style("a٣") is None
