import pytest

pytest.importorskip("skia")
pytest.importorskip("uharfbuzz")

import main  # noqa: E402


class TestParser:
    def test_defaults(self):
        args = main.build_parser().parse_args(["--input", "doc.txt"])
        assert args.output == "./output/document.pdf"
        assert args.align == "right"
        assert args.justify is True
        assert args.convert_digits is True
        assert args.digit_script == "persian"
        assert args.mirror_parentheses is False
        assert args.page_numbers is True

    def test_switches(self):
        args = main.build_parser().parse_args(
            [
                "--input",
                "doc.txt",
                "--no-justify",
                "--no-localize-digits",
                "--align",
                "center",
                "--mirror-parentheses",
            ]
        )
        assert args.justify is False
        assert args.convert_digits is False
        assert args.align == "center"
        assert args.mirror_parentheses is True

    def test_input_required(self):
        with pytest.raises(SystemExit):
            main.build_parser().parse_args([])


class TestMain:
    def test_missing_input_file(self, tmp_path, capsys):
        assert main.main(["--input", str(tmp_path / "absent.txt")]) == 1
        assert "input file not found" in capsys.readouterr().out

    def test_input_that_is_not_utf8(self, tmp_path, capsys):
        source = tmp_path / "doc.txt"
        source.write_bytes(b"\xff\xfe\x00bad")
        code = main.main(["--input", str(source), "--output", str(tmp_path / "out.pdf")])
        assert code == 1
        assert "as UTF-8 text" in capsys.readouterr().out
        assert not (tmp_path / "out.pdf").exists()

    def test_missing_font_dir(self, tmp_path, capsys):
        source = tmp_path / "doc.txt"
        source.write_text("سلام", encoding="utf-8")
        code = main.main(
            [
                "--input",
                str(source),
                "--font-dir",
                str(tmp_path / "fonts"),
                "--output",
                str(tmp_path / "out.pdf"),
            ]
        )
        assert code == 1
        assert "Error:" in capsys.readouterr().out
        assert not (tmp_path / "out.pdf").exists()
