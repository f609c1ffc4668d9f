"""Tests for author name formatting."""

from abntcite.services.names import (
    format_authors,
    format_initials,
    format_name,
    split_and,
    strip_final_period,
)


class TestFormatName:
    """Tests for format_name function."""

    def test_surname_first(self):
        """Test a "Family, Given" name."""
        assert format_name("Araújo, G.") == "ARAÚJO, G."

    def test_full_given_name_reduced(self):
        """Test that given names become initials."""
        assert format_name("Araújo, Gabriel") == "ARAÚJO, G."

    def test_particle_moves_after_initials(self):
        """Test that a lowercase particle trails the initials."""
        assert format_name("del Priori, M.") == "PRIORI, M. del"

    def test_lowercase_given_initial(self):
        """Test that lowercase given words keep lowercase initials."""
        assert format_name("Motter, Maria de Lourdes") == "MOTTER, M. d. L."

    def test_braced_space_in_family(self):
        """Test that a braced space keeps a compound surname together."""
        assert format_name("Prado{ }Jr., C.") == "PRADO JR., C."

    def test_given_first(self):
        """Test a "Given Family" name without comma."""
        assert format_name("Gabriel Araújo") == "ARAÚJO, G."

    def test_given_first_with_particle(self):
        """Test a particle between given and family names."""
        assert format_name("Ludwig van Beethoven") == "BEETHOVEN, L. van"

    def test_mononym(self):
        """Test that a single name is uppercased only."""
        assert format_name("Heródoto") == "HERÓDOTO"

    def test_empty_given_keeps_comma(self):
        """Test that a family name followed by a bare comma keeps the comma."""
        assert format_name("Araújo,") == "ARAÚJO, "
        assert format_name("Araújo, ") == "ARAÚJO, "


class TestFormatAuthors:
    """Tests for format_authors function."""

    def test_single_author(self):
        """Test one author."""
        assert format_authors("Araújo, G.") == "ARAÚJO, G."

    def test_two_authors_case_insensitive_and(self):
        """Test that the separator matches any case."""
        result = format_authors("Araújo, G. AND Oliveira, F. I. D.")
        assert result == "ARAÚJO, G.; OLIVEIRA, F. I. D."

    def test_three_authors_listed(self):
        """Test that three authors are all listed."""
        result = format_authors("FRAGOSO, J. and BICALHO, M. F. and GOUVÊA, M. F.")
        assert result == "FRAGOSO, J.; BICALHO, M. F.; GOUVÊA, M. F."

    def test_et_al(self):
        """Test that four or more authors collapse to et al."""
        result = format_authors(
            "Araújo, G. AND Oliveira, F. I. D. AND de Tal, F. AND de Tal, S."
        )
        assert result == "ARAÚJO, G.; <em>et al</em>"

    def test_empty(self):
        """Test empty input."""
        assert format_authors("") == ""
        assert format_authors("   ") == ""


class TestHelpers:
    """Tests for small name helpers."""

    def test_split_and(self):
        """Test splitting on the and separator."""
        assert split_and("A and B AnD C") == ["A", "B", "C"]

    def test_split_and_keeps_words(self):
        """Test that "and" inside a word is not a separator."""
        assert split_and("Anderson, J.") == ["Anderson, J."]

    def test_initials_skip_braces(self):
        """Test initials of braced given names."""
        assert format_initials("{Ana} Maria") == "A. M."

    def test_strip_final_period(self):
        """Test that only one trailing period is removed."""
        assert strip_final_period("SILVA, J.") == "SILVA, J"
        assert strip_final_period("SILVA") == "SILVA"
        assert strip_final_period("etc..") == "etc."
