import pytest

from morseflow.core.speed import SpeedConfig
from morseflow.exceptions import ConfigurationError, EmptyInputError, InvalidCodeFormatError
from morseflow.visual.svg import CHAR_SPACE, MARK, WORD_SPACE, LayoutItem, SvgGenerator


@pytest.fixture
def generator():
    return SvgGenerator(SpeedConfig.from_wpm(20))


def test_items_follow_pulses(generator):
    assert generator.items(".- -") == [
        LayoutItem(MARK, "."),
        LayoutItem(MARK, "-"),
        LayoutItem(CHAR_SPACE),
        LayoutItem(MARK, "-"),
    ]


def test_word_gap_item(generator):
    kinds = [item.kind for item in generator.items("... / ...")]
    assert kinds.count(WORD_SPACE) == 1
    assert CHAR_SPACE not in kinds


@pytest.mark.parametrize("wpm", [5, 13, 60])
def test_items_at_any_speed(wpm):
    items = SvgGenerator(SpeedConfig.from_wpm(wpm)).items(".- ..")
    assert "".join(item.symbol or " " for item in items) == ".- .."


def test_render_single_character(generator):
    svg = generator.render(".-")
    assert svg.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert '<svg width="800" height="80" xmlns="http://www.w3.org/2000/svg">' in svg
    assert '<rect width="800" height="80" fill="rgb(255,255,255)"/>' in svg
    assert '<rect x="20" y="30" width="20" height="20" fill="rgb(0,0,0)"/>' in svg
    assert '<rect x="50" y="30" width="60" height="20" fill="rgb(0,0,0)"/>' in svg
    assert '<text x="65" y="55"' in svg
    assert ">.-</text>" in svg
    assert svg.endswith("</svg>")


def test_render_label_is_escaped(generator):
    svg = generator.render(".", "<&>")
    assert 'height="110"' in svg
    assert ">&lt;&amp;&gt;</text>" in svg
    assert "<&>" not in svg


def test_one_label_per_character(generator):
    svg = generator.render("... --- ...")
    assert svg.count('text-anchor="middle"') == 3
    assert svg.count("<rect x=") == 9


def test_layout_wraps_at_max_width(generator):
    generator.set_max_width(200)
    code = "--- --- --- ---"
    lines = generator.layout(code)
    assert len(lines) > 1
    assert sum(len(line) for line in lines) == len(generator.items(code))
    for line in lines:
        width = generator.padding + sum(generator.item_width(item) for item in line)
        assert len(line) == 1 or width <= generator.max_width - generator.padding


def test_dot_width_keeps_dash_ratio(generator):
    generator.set_dot_width(10)
    assert generator.dash_width == 30
    assert 'width="30" height="20"' in generator.render("-")


@pytest.mark.parametrize("call", [
    lambda g: g.set_dot_width(4),
    lambda g: g.set_dot_width(101),
    lambda g: g.set_element_height(101),
    lambda g: g.set_max_width(199),
    lambda g: g.set_spacing(-1, 30, 60),
    lambda g: g.set_colors((256, 0, 0), (0, 0, 0), (0, 0, 0)),
])
def test_invalid_settings(generator, call):
    with pytest.raises(ConfigurationError):
        call(generator)


def test_custom_colors(generator):
    generator.set_colors((0, 0, 0), (255, 0, 0), (1, 2, 3))
    svg = generator.render(".", "E")
    assert 'fill="rgb(255,0,0)"' in svg
    assert 'fill="rgb(1,2,3)">E</text>' in svg


def test_invalid_code(generator):
    with pytest.raises(EmptyInputError):
        generator.render("  ")
    with pytest.raises(InvalidCodeFormatError):
        generator.render(".x")


def test_generate_writes_svg(tmp_path, generator):
    path = generator.generate(".-", tmp_path / "a.SVG", "A")
    assert path.read_text(encoding="utf-8").startswith("<?xml")


def test_generate_rejects_raster_formats(tmp_path, generator):
    with pytest.raises(ConfigurationError, match="Only svg"):
        generator.generate(".-", tmp_path / "a.png")
