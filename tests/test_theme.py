import pytest

from textforge.syntax.language import ThemeError
from textforge.syntax.theme import Color, Style, Theme


def test_color_from_hex():
    color = Color.from_hex("#FF0000")
    assert (color.r, color.g, color.b) == (255, 0, 0)


def test_color_from_hex_without_hash():
    assert Color.from_hex("61afef") == Color(0x61, 0xAF, 0xEF)


@pytest.mark.parametrize("text", ["#FFF", "#GG0000", "#FF00000", ""])
def test_color_from_hex_invalid(text):
    assert Color.from_hex(text) is None


def test_color_to_hex():
    assert Color(198, 120, 221).to_hex() == "#C678DD"


def test_color_out_of_range():
    with pytest.raises(ValueError):
        Color(256, 0, 0)


def test_style_builder():
    style = Style().with_foreground(Color(255, 0, 0)).with_bold(True).with_italic(True)
    assert style.foreground.r == 255
    assert style.bold
    assert style.italic
    assert not style.underline


def test_style_builder_leaves_original():
    base = Style()
    changed = base.with_underline(True).with_background(Color(1, 2, 3))
    assert base == Style()
    assert changed.background == Color(1, 2, 3)
    assert changed.underline


def test_theme_styles():
    theme = Theme.dark_theme()
    assert theme.get_style("keyword").bold
    assert theme.get_style("comment").italic
    assert theme.get_style("string").foreground == Color.from_hex("#98C379")


def test_light_theme():
    theme = Theme.light_theme()
    assert theme.name == "Light"
    assert theme.dark is False
    assert theme.get_style("keyword").foreground == Color.from_hex("#A626A4")
    assert sorted(theme.elements) == sorted(
        ["keyword", "type", "function", "variable", "string", "number", "comment", "operator"]
    )


def test_default_is_dark():
    theme = Theme.default()
    assert theme.name == "Dark"
    assert theme.dark is True


def test_missing_style():
    assert Theme("Empty", False).get_style("keyword") is None


def test_set_style_replaces():
    theme = Theme("Custom", True)
    theme.set_style("keyword", Style(bold=True))
    theme.set_style("keyword", Style(italic=True))
    assert theme.get_style("keyword") == Style(italic=True)


def test_theme_dict_round_trip():
    theme = Theme.dark_theme()
    data = theme.to_dict()
    assert data["styles"]["keyword"]["foreground"] == {"r": 0xC6, "g": 0x78, "b": 0xDD}
    assert Theme.from_dict(data) == theme


def test_theme_from_dict_invalid():
    with pytest.raises(ThemeError):
        Theme.from_dict({"name": "x"})


def test_theme_from_dict_bad_color():
    data = Theme("T", True).to_dict()
    data["styles"] = {"keyword": {"foreground": {"r": 300, "g": 0, "b": 0}}}
    with pytest.raises(ThemeError):
        Theme.from_dict(data)