import io
import sys
from pathlib import Path

from colorama import Back, Fore, Style

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from display import DEFAULT_STYLE, DEFAULT_STYLES, ColorSink, SeverityStyle  # noqa: E402


def test_tags_map_to_their_styles():
    sink = ColorSink(stream=io.StringIO())
    styles = dict(DEFAULT_STYLES)

    assert sink.style_for("[error] disk full") == styles["error"]
    assert sink.style_for("2024-01-01 [warning] slow") == styles["warning"]
    assert sink.style_for("[info] started") == styles["info"]


def test_untagged_line_uses_default_style():
    sink = ColorSink(stream=io.StringIO())
    assert sink.style_for("plain line") == DEFAULT_STYLE


def test_tags_are_case_sensitive():
    sink = ColorSink(stream=io.StringIO())
    assert sink.style_for("[ERROR] shouting") == DEFAULT_STYLE


def test_first_tag_in_table_order_wins():
    sink = ColorSink(stream=io.StringIO())
    # [info] appears first in the text, but error has priority.
    assert sink.style_for("[info] then [error]") == dict(DEFAULT_STYLES)["error"]


def test_render_writes_colored_line():
    out = io.StringIO()
    sink = ColorSink(stream=out)

    sink.render("[error] boom")

    assert out.getvalue() == f"{Fore.BLACK}{Back.RED}[error] boom{Style.RESET_ALL}\n"


def test_custom_style_table():
    out = io.StringIO()
    debug = SeverityStyle(Fore.CYAN, Back.BLACK)
    sink = ColorSink(styles=[("debug", debug)], stream=out)

    assert sink.style_for("[debug] x") == debug
    assert sink.style_for("[error] x") == DEFAULT_STYLE


def test_sink_is_not_callable():
    assert not callable(ColorSink(stream=io.StringIO()))
