"""End-to-end tests for RtlRichTextPrinter on the recording surface."""

import pytest

from rtl_printer.pagination import PageBreakObserver
from utils.exceptions import FontError

from .conftest import BOLD_CHAR_WIDTH, FONT_NAME, NORMAL_CHAR_WIDTH, SPACE_WIDTH


class TestPrint:
    def test_mixed_direction_sentence(self, make_printer, surface):
        printer = make_printer(justify=False)
        final_y = printer.print("سلام <b>دنیا</b> test", start_y=30.0)

        assert final_y == 40.0
        assert [t["text"] for t in surface.texts] == ["سلام", "دنیا", "test"]
        xs = [t["x"] for t in surface.texts]
        assert xs == [190.0, 181.0, 168.0]
        assert [t["font"][1] for t in surface.texts] == ["normal", "bold", "normal"]
        assert [t["rtl"] for t in surface.texts] == [True, True, False]

    def test_bold_scope_survives_line_wrap(self, make_printer, surface):
        # effective width 25: alpha (15) | beta (12) + gamma (10)
        printer = make_printer(max_width=30.0)
        final_y = printer.print("<b>alpha beta</b> gamma", start_y=20.0)

        assert final_y == 40.0
        by_text = {t["text"]: t for t in surface.texts}
        assert by_text["alpha"]["y"] == 20.0
        assert by_text["beta"]["y"] == 30.0
        assert by_text["gamma"]["y"] == 30.0
        assert by_text["beta"]["font"] == (FONT_NAME, "bold")
        assert by_text["gamma"]["font"] == (FONT_NAME, "normal")

    def test_measure_and_paint_see_identical_text(self, make_printer, surface):
        printer = make_printer()
        printer.print("سال 1402 و <ltr>1403</ltr> و test123", start_y=20.0)

        painted = [t["text"] for t in surface.texts]
        assert "۱۴۰۲" in painted
        assert "1403" in painted
        assert "test123" in painted
        for t in surface.texts:
            assert (t["text"], t["font"]) in surface.measured

    def test_digit_localization_can_be_disabled(self, make_printer, surface):
        printer = make_printer(convert_digits=False)
        printer.print("سال 1402", start_y=20.0)
        assert [t["text"] for t in surface.texts] == ["سال", "1402"]

    def test_justified_wrapped_line_spans_full_width(self, make_printer, surface):
        printer = make_printer()
        words = " ".join(["کلمه"] * 30)
        printer.print(words, start_y=20.0)

        first_line = [t for t in surface.texts if t["y"] == 20.0]
        assert len(first_line) > 1
        assert first_line[0]["x"] == 190.0
        leftmost = first_line[-1]
        assert leftmost["x"] - leftmost["width"] == pytest.approx(190.0 - 100.0)

    def test_last_line_is_not_justified(self, make_printer, surface):
        printer = make_printer()
        printer.print(" ".join(["کلمه"] * 30), start_y=20.0)
        last_y = max(t["y"] for t in surface.texts)
        last_line = [t for t in surface.texts if t["y"] == last_y]
        for right, left in zip(last_line, last_line[1:]):
            assert right["x"] - right["width"] - left["x"] == SPACE_WIDTH

    def test_justify_override(self, make_printer, surface):
        printer = make_printer()
        printer.print(" ".join(["کلمه"] * 30), start_y=20.0, justify=False)
        first_line = [t for t in surface.texts if t["y"] == 20.0]
        assert first_line[0]["x"] - first_line[0]["width"] - first_line[1]["x"] == SPACE_WIDTH

    def test_empty_paragraph_advances_one_line(self, make_printer, surface):
        printer = make_printer()
        final_y = printer.print("الف\n\nب", start_y=20.0)
        assert final_y == 50.0
        assert [t["y"] for t in surface.texts] == [20.0, 40.0]

    def test_oversized_first_word_starts_one_line_down(self, make_printer, surface):
        # effective width 15, word width 24
        printer = make_printer(max_width=20.0)
        final_y = printer.print("کلمهکلمهکلمه", start_y=20.0)

        assert final_y == 40.0
        assert [(t["text"], t["y"]) for t in surface.texts] == [("کلمهکلمهکلمه", 30.0)]

    def test_br_markup_splits_paragraphs(self, make_printer, surface):
        printer = make_printer()
        final_y = printer.print("الف<br/>ب", start_y=20.0)
        assert final_y == 40.0
        assert [t["y"] for t in surface.texts] == [20.0, 30.0]

    def test_custom_start_x(self, make_printer, surface):
        printer = make_printer()
        printer.print("الف", start_y=20.0, start_x=150.0)
        assert surface.texts[0]["x"] == 150.0

    def test_configured_default_start_x(self, make_printer, surface):
        printer = make_printer(default_start_x=120.0)
        printer.print("الف", start_y=20.0)
        assert surface.texts[0]["x"] == 120.0

    def test_unknown_font_propagates(self, make_printer):
        printer = make_printer(font_name="Missing")
        with pytest.raises(FontError):
            printer.print("الف", start_y=20.0)


class TestPageBreaks:
    def test_callback_sets_resume_point(self, make_printer, surface):
        calls = []

        def on_break(page_number):
            calls.append(page_number)
            return 25.0

        printer = make_printer(on_page_break=on_break)
        # threshold = 300 - 0 - 10; 280 + 12 > 290
        final_y = printer.print("الف\nب\nج", start_y=270.0)

        assert calls == [2]
        assert [(t["y"], t["page"]) for t in surface.texts] == [
            (270.0, 1),
            (25.0, 2),
            (35.0, 2),
        ]
        assert final_y == 45.0
        assert printer.page_number == 2

    def test_default_resume_point(self, make_printer, surface):
        printer = make_printer(margin_top=12.0, header_height=8.0)
        printer.print("الف\nب", start_y=285.0)
        assert [(t["y"], t["page"]) for t in surface.texts] == [(20.0, 2), (30.0, 2)]

    def test_observer_instance_accepted(self, make_printer, surface):
        class Observer(PageBreakObserver):
            def on_page_break(self, page_number):
                return 5.0 * page_number

        printer = make_printer(on_page_break=Observer())
        printer.print("الف", start_y=290.0)
        assert surface.texts[0]["y"] == 10.0

    def test_blank_paragraph_does_not_break_page(self, make_printer, surface):
        printer = make_printer()
        final_y = printer.print("\n", start_y=295.0)
        assert final_y == 315.0
        assert surface.pages == 1


class TestAccessors:
    def test_text_width_of_widest_paragraph(self, make_printer):
        printer = make_printer()
        width = printer.get_text_width("<b>ab</b> cd\nxyz")
        assert width == 2 * BOLD_CHAR_WIDTH + SPACE_WIDTH + 2 * NORMAL_CHAR_WIDTH

    def test_text_width_ignores_blank_paragraphs(self, make_printer):
        printer = make_printer()
        assert printer.get_text_width("\n  \n") == 0.0

    def test_pass_throughs(self, make_printer, surface):
        printer = make_printer()
        printer.set_font_size(14.0)
        printer.set_font(FONT_NAME, "bold")
        assert printer.get_font_size() == 14.0
        assert printer.get_font() == (FONT_NAME, "bold")
        assert printer.page_width == surface.page_width
        assert printer.page_height == surface.page_height
        assert printer.surface is surface
