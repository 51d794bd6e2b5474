import re

import pytest

from conftest import page_count
from surface import PdfSurface, _fit_box


def _surface():
    s = PdfSurface()
    s.set_margins(10, 10)
    s.set_auto_page_break(False, 20)
    s.add_page()
    s.set_font("Helvetica", "", 10)
    return s


def test_margins_and_initial_cursor():
    s = PdfSurface()
    s.set_margins(15, 12)
    assert s.r_margin == 15
    s.add_page()
    assert (s.get_x(), s.get_y()) == (15, 12)


def test_a4_portrait_in_millimetres():
    s = PdfSurface()
    assert (s.w, s.h) == pytest.approx((210, 297), abs=0.01)


def test_cell_cursor_moves():
    s = _surface()
    s.cell(30, 7, "Label", new_x="RIGHT", new_y="TOP")
    assert (s.get_x(), s.get_y()) == (40, 10)
    s.cell(20, 5, "", new_x="LEFT", new_y="NEXT")
    assert (s.get_x(), s.get_y()) == (40, 15)
    s.cell(10, 4, "x", new_x="LMARGIN", new_y="NEXT")
    assert (s.get_x(), s.get_y()) == (10, 19)


def test_zero_width_cell_extends_to_right_margin():
    s = _surface()
    s.set_x(50)
    s.cell(0, 7, "value")
    assert s.get_x() == pytest.approx(200, abs=0.01)


def test_ln_uses_last_cell_height():
    s = _surface()
    s.cell(30, 6, "a")
    s.ln()
    assert (s.get_x(), s.get_y()) == (10, 16)
    s.ln(4)
    assert s.get_y() == 20


def test_set_y_resets_x_and_negative_positions():
    s = _surface()
    s.set_x(80)
    s.set_y(50)
    assert (s.get_x(), s.get_y()) == (10, 50)
    s.set_x(-30)
    assert s.get_x() == pytest.approx(180, abs=0.01)
    s.set_y(-40)
    assert s.get_y() == pytest.approx(257, abs=0.01)


def test_multi_cell_wraps_and_returns_to_left_margin():
    s = _surface()
    s.set_x(100)
    s.multi_cell(0, 4, "word " * 80, new_x="LMARGIN", new_y="NEXT")
    assert s.get_x() == 10
    height = s.get_y() - 10
    assert height > 4
    assert height == pytest.approx(round(height / 4) * 4)


def test_multi_cell_honours_newlines():
    s = _surface()
    s.multi_cell(0, 5, "one\ntwo\nthree", new_x="LMARGIN", new_y="NEXT")
    assert s.get_y() == pytest.approx(25)


def test_write_wraps_at_right_margin():
    s = _surface()
    s.set_x(150)
    s.write(4, "lorem ipsum dolor sit amet " * 20)
    assert s.get_y() > 10
    assert s.get_x() <= 200


def test_auto_page_break_adds_page():
    s = _surface()
    s.set_auto_page_break(True, 20)
    s.set_y(275)
    s.cell(0, 7, "overflow", new_x="LMARGIN", new_y="NEXT")
    assert s.page == 2
    assert page_count(s.output()) == 2


def test_disabled_page_break_runs_off_the_page():
    s = _surface()
    s.set_y(290)
    s.cell(0, 7, "off the page", new_x="LMARGIN", new_y="NEXT")
    assert s.page == 1
    assert page_count(s.output()) == 1


def test_output_returns_bytes():
    s = _surface()
    s.cell(10, 5, "a")
    pdf = s.output()
    assert isinstance(pdf, bytes)
    assert pdf.startswith(b"%PDF")


def test_output_without_page_still_produces_one_page():
    s = PdfSurface()
    assert page_count(s.output()) == 1


def test_output_is_reproducible():
    def render():
        s = _surface()
        s.set_title("Card")
        s.cell(0, 5, "Les Amis du Vélo")
        return s.output()

    assert render() == render()


def test_fullpage_display_mode_fits_the_page():
    s = _surface()
    s.set_display_mode("fullpage")
    pdf = s.output()
    assert re.search(rb"/OpenAction\s*\[\s*\d+ 0 R\s*/Fit\s*\]", pdf)
    assert b"/FitWindow" not in pdf


def test_card_font_renders_unicode():
    s = PdfSurface()
    s.add_page()
    s.cell(0, 5, "Łódź, Ærøskøbing")
    assert page_count(s.output()) == 1


def test_page_header_restores_font():
    s = _surface()
    s.set_font("Helvetica", "I", 9)
    before = (s.font_family, s.font_style, s.font_size_pt)
    s.page_header("Title", heading="Association")
    assert (s.font_family, s.font_style, s.font_size_pt) == before
    assert s.get_y() == pytest.approx(22)


def test_page_header_leaves_room_for_logo(tmp_path):
    from PIL import Image

    logo = tmp_path / "logo.png"
    Image.new("RGB", (100, 100), (0, 0, 0)).save(logo)
    s = _surface()
    s.page_header("Title", logo_path=str(logo))
    assert s.get_y() == pytest.approx(30)


def test_fit_box_keeps_aspect():
    assert _fit_box((200, 100), 40, 20) == (40, 20)
    assert _fit_box((400, 100), 40, 20) == (40, 10)
    w, h = _fit_box((100, 200), 40, 20)
    assert (w, h) == (10, 20)
