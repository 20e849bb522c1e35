import pytest

from litconf.reader import Symbol, first_form, read_datum


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("42", 42),
        ("-3.5", -3.5),
        ("'hello world'", "hello world"),
        ("None", None),
        ("True", True),
        ("(1, 2)", (1, 2)),
        ("[1, 'a', b]", [1, "a", Symbol("b")]),
        ("{'x': 1, y: 2}", {"x": 1, Symbol("y"): 2}),
        ("{1, 2}", {1, 2}),
        ("b'raw'", b"raw"),
    ],
)
def test_read_datum_literals(text: str, expected: object) -> None:
    assert read_datum(text) == expected


def test_bare_and_dotted_names_are_symbols() -> None:
    assert read_datum("fill_column") == Symbol("fill_column")
    assert read_datum("os.path.sep") == Symbol("os.path.sep")
    assert read_datum("fill_column") != "fill_column"


def test_only_the_first_form_is_read() -> None:
    assert read_datum("42 and more") == 42
    assert read_datum("(1, 2) trailing words") == (1, 2)
    assert read_datum("'quoted text' rest") == "quoted text"
    assert read_datum("[1,\n 2] rest") == [1, 2]


def test_first_form_keeps_adjacent_tokens_together() -> None:
    assert first_form("  -1 rest") == "-1"
    assert first_form("foo.bar baz") == "foo.bar"
    assert first_form("[1, [2, 3]] 4") == "[1, [2, 3]]"


def test_reading_never_evaluates() -> None:
    with pytest.raises(ValueError, match="Not a datum"):
        read_datum("print('side effect')")


def test_operators_are_not_datums() -> None:
    with pytest.raises(ValueError):
        read_datum("1+2")


def test_empty_text_is_rejected() -> None:
    with pytest.raises(ValueError, match="empty"):
        read_datum("   ")


def test_unbalanced_brackets_raise_syntax_error() -> None:
    with pytest.raises(SyntaxError):
        read_datum("(1, 2")


def test_symbol_renders_as_its_name() -> None:
    assert str(Symbol("theme")) == "theme"
