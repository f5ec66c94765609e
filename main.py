import argparse
import sys
from pathlib import Path

from rtl_printer.config import PrinterConfig
from rtl_printer.printer import RtlRichTextPrinter
from rtl_printer.surface.skia_surface import A4_HEIGHT, A4_WIDTH, SkiaSurface
from utils.exceptions import FontError, RenderingError, ValidationError
from utils.logging import log_message


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Typeset inline-styled right-to-left text onto paginated pages"
    )
    parser.add_argument(
        "--input",
        type=str,
        required=True,
        help="Path to a UTF-8 text file with inline markup (<b>, <u>, <s>, <ltr>, <br>)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="./output/document.pdf",
        help="Output path (.pdf or .tiff for one multi-page file, .png for one file per page)",
    )
    parser.add_argument(
        "--font-dir",
        type=str,
        default="./fonts",
        help="Directory containing the regular and bold font files",
    )
    parser.add_argument(
        "--font-name",
        type=str,
        default="Body",
        help="Family name to register the fonts under",
    )
    parser.add_argument("--font-size", type=float, default=10.0, help="Font size in points")
    parser.add_argument("--line-height", type=float, default=8.0, help="Baseline-to-baseline distance")
    parser.add_argument(
        "--align",
        type=str,
        default="right",
        choices=["right", "center", "left"],
        help="Line alignment",
    )
    parser.add_argument(
        "--no-justify",
        dest="justify",
        action="store_false",
        help="Disable full justification of wrapped lines",
    )
    parser.add_argument(
        "--no-localize-digits",
        dest="convert_digits",
        action="store_false",
        help="Keep ASCII digits outside forced-LTR runs",
    )
    parser.add_argument(
        "--digit-script",
        type=str,
        default="persian",
        choices=["persian", "arabic"],
        help="Digit glyphs used when localizing digits",
    )
    parser.add_argument(
        "--mirror-parentheses",
        action="store_true",
        help="Swap '(' and ')' before layout",
    )
    parser.add_argument("--page-width", type=float, default=A4_WIDTH, help="Page width in points")
    parser.add_argument("--page-height", type=float, default=A4_HEIGHT, help="Page height in points")
    parser.add_argument("--scale", type=float, default=2.0, help="Raster pixels per point")
    parser.add_argument("--margin", type=float, default=10.0, help="Left/right page margin")
    parser.add_argument("--margin-top", type=float, default=15.0, help="Top margin")
    parser.add_argument("--margin-bottom", type=float, default=15.0, help="Bottom margin")
    parser.add_argument("--header-height", type=float, default=0.0, help="Height reserved for a header")
    parser.add_argument(
        "--footer-height",
        type=float,
        default=15.0,
        help="Height reserved for the page-number footer",
    )
    parser.add_argument(
        "--no-page-numbers",
        dest="page_numbers",
        action="store_false",
        help="Do not draw a page number in the footer",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print detailed layout logs",
    )
    return parser


def draw_page_number(surface: SkiaSurface, font_name: str, page_number: int) -> None:
    """Paints a centered page number inside the footer area."""
    previous_font = surface.get_font()
    surface.set_font(font_name, "normal")
    label = str(page_number)
    width = surface.measure_text_width(label)
    surface.paint_text(label, (surface.page_width + width) / 2, surface.page_height - 5)
    surface.set_font(*previous_font)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    input_path = Path(args.input)
    if not input_path.is_file():
        log_message(f"Error: input file not found: {input_path}", always_print=True)
        return 1
    try:
        text = input_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        log_message(f"Error: cannot read {input_path} as UTF-8 text: {e}", always_print=True)
        return 1

    try:
        config = PrinterConfig(
            max_width=args.page_width - 2 * args.margin,
            line_height=args.line_height,
            font_name=args.font_name,
            default_start_x=args.page_width - args.margin,
            align=args.align,
            justify=args.justify,
            margin_top=args.margin_top,
            margin_bottom=args.margin_bottom,
            header_height=args.header_height,
            footer_height=args.footer_height,
            convert_digits=args.convert_digits,
            digit_script=args.digit_script,
            mirror_parentheses=args.mirror_parentheses,
            verbose=args.verbose,
        )

        surface = SkiaSurface(
            page_width=args.page_width,
            page_height=args.page_height,
            scale=args.scale,
            font_size=args.font_size,
            verbose=args.verbose,
        )
        surface.register_font_dir(args.font_name, args.font_dir)

        def on_page_break(page_number: int) -> float:
            if args.page_numbers:
                draw_page_number(surface, args.font_name, page_number)
            return args.margin_top + args.header_height

        if args.page_numbers:
            draw_page_number(surface, args.font_name, 1)

        printer = RtlRichTextPrinter(surface, config, on_page_break=on_page_break)
        final_y = printer.print(text, start_y=args.margin_top + args.header_height)
        written = surface.save(args.output)
    except (ValidationError, FontError, RenderingError) as e:
        log_message(f"Error: {e}", always_print=True)
        return 1

    log_message(
        f"Wrote {printer.page_number} page(s) to {', '.join(str(p) for p in written)} (final y={final_y:.1f})",
        always_print=True,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
