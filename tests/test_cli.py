"""Tests for the command line interface."""

import io
import logging

import pytest

from abntcite.cli import build_parser, main


SAMPLE_BIB = """
@article{Azevedo1959,
  title        = {Aldeias e aldeamentos},
  author       = {Azevedo, A.},
  year         = {1959},
  number       = {33},
  pages        = {27},
  journaltitle = {Boletim Paulista de Geografia}
}

@book{SelfNotes2020,
  author = {Eu, A.},
  year   = {2020}
}
"""

AZEVEDO_CITATION = (
    "AZEVEDO, A. Aldeias e aldeamentos. "
    "<strong>Boletim Paulista de Geografia</strong>, n. 33, p. 27, 1959."
)


@pytest.fixture
def bib_file(tmp_path):
    path = tmp_path / "refs.bib"
    path.write_text(SAMPLE_BIB, encoding="utf-8")
    return path


class TestFormatCommand:
    """Tests for the format subcommand."""

    def test_default_output(self, bib_file, capsys):
        """Test the wrapped section with self-references left out."""
        assert main(["format", str(bib_file)]) == 0

        out = capsys.readouterr().out
        assert out == (
            '<div class="references txt-sml txt-left proportional-nums">\n'
            "\n"
            "## Referências\n"
            "\n"
            f"{AZEVEDO_CITATION}\n"
            "\n"
            "</div>\n"
        )

    def test_options(self, bib_file, capsys):
        """Test heading, wrapper and prefix flags."""
        code = main([
            "format", str(bib_file),
            "--heading", "Bibliografia", "--no-wrap", "--exclude-prefix", "",
        ])

        assert code == 0
        out = capsys.readouterr().out
        assert out.startswith("## Bibliografia\n\n")
        assert "EU, A. [s.l. s.n.], 2020." in out
        assert "<div" not in out

    def test_raw_punctuation(self, bib_file, capsys):
        """Test that doubled punctuation is kept when cleanup is turned off."""
        code = main([
            "format", str(bib_file),
            "--no-wrap", "--exclude-prefix", "", "--raw-punctuation",
        ])

        assert code == 0
        assert "EU, A. [s.l.: s.n.], 2020." in capsys.readouterr().out

    def test_first_location_wins(self, tmp_path, capsys):
        """Test that the location written first is the one cited."""
        path = tmp_path / "refs.bib"
        path.write_text(
            "@book{Silva2019,\n"
            "  author    = {Silva, J.},\n"
            "  location  = {Natal},\n"
            "  address   = {Recife},\n"
            "  publisher = {EDUFRN},\n"
            "  year      = {2019}\n"
            "}\n",
            encoding="utf-8",
        )

        assert main(["format", str(path), "--no-wrap"]) == 0
        out = capsys.readouterr().out
        assert "SILVA, J. Natal: EDUFRN, 2019." in out
        assert "Recife" not in out

    def test_reads_stdin(self, monkeypatch, capsys):
        """Test that BibTeX is read from standard input without a path."""
        monkeypatch.setattr("sys.stdin", io.StringIO(SAMPLE_BIB))

        assert main(["format", "--no-wrap"]) == 0
        assert AZEVEDO_CITATION in capsys.readouterr().out

    def test_citation_error_exit_code(self, tmp_path, capsys, caplog):
        """Test that a bad record prints nothing and exits with 1."""
        path = tmp_path / "bad.bib"
        path.write_text("@book{Incompleto, title = {Sem autor}}\n", encoding="utf-8")

        with caplog.at_level(logging.ERROR):
            code = main(["format", str(path)])

        assert code == 1
        assert capsys.readouterr().out == ""
        assert "Incompleto" in caplog.text


class TestFixYearsCommand:
    """Tests for the fix-years subcommand."""

    def test_rekeys(self, tmp_path, capsys):
        """Test re-keying an exported file."""
        path = tmp_path / "export.bib"
        path.write_text(
            "@book{silva2021,\n  author = {Silva, J.},\n  year = {2019}\n}\n",
            encoding="utf-8",
        )

        assert main(["fix-years", "Self", str(path)]) == 0
        assert capsys.readouterr().out == (
            "@book{Selfsilva2019,\n"
            "  author = {Silva, J.},\n"
            "  year   = {2019}\n"
            "}\n"
        )

    def test_fields_keep_source_order(self, tmp_path, capsys):
        """Test that re-keyed entries list their fields as written."""
        path = tmp_path / "export.bib"
        path.write_text(
            "@misc{nota2021,\n  title = {Nota},\n  year = {2003},\n  note = {Avulsa}\n}\n",
            encoding="utf-8",
        )

        assert main(["fix-years", "", str(path)]) == 0
        assert capsys.readouterr().out == (
            "@misc{nota2003,\n"
            "  title = {Nota},\n"
            "  year  = {2003},\n"
            "  note  = {Avulsa}\n"
            "}\n"
        )


class TestParser:
    """Tests for argument parsing."""

    def test_verbose_flag(self):
        """Test that the verbose flag is accepted after the subcommand."""
        args = build_parser().parse_args(["format", "-v"])
        assert args.verbose is True
        assert args.input is None

    def test_subcommand_required(self):
        """Test that a subcommand must be given."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])
