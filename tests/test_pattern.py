"""Pattern compiler tests."""

import pytest
from roadrouter_core.routing.errors import PatternError
from roadrouter_core.routing.pattern import compile_pattern


class TestLiteralTemplates:
    """Test templates without placeholders."""

    def test_exact_match(self):
        """Test literal template matches only the same path."""
        pattern = compile_pattern("/fruits")

        assert pattern.match("/fruits") == ()
        assert pattern.is_literal
        assert pattern.names == ()

    def test_whole_path_only(self):
        """Test prefixes, suffixes and substrings do not match."""
        pattern = compile_pattern("/fruits")

        assert pattern.match("/fruits/") is None
        assert pattern.match("/fruitsalad") is None
        assert pattern.match("/api/fruits") is None

    def test_trailing_newline_does_not_match(self):
        """Test anchoring rejects a trailing newline."""
        assert compile_pattern("/fruits").match("/fruits\n") is None

    def test_literal_text_is_escaped(self):
        """Test regex metacharacters in literal text match literally."""
        pattern = compile_pattern("/files/readme.txt")

        assert pattern.match("/files/readme.txt") == ()
        assert pattern.match("/files/readmeXtxt") is None

    def test_empty_template(self):
        """Test empty template matches only the empty path."""
        pattern = compile_pattern("")

        assert pattern.match("") == ()
        assert pattern.match("/") is None


class TestPlaceholders:
    """Test placeholder compilation."""

    def test_default_placeholder(self):
        """Test default placeholder captures one segment."""
        pattern = compile_pattern("/fruits/{name}")

        assert pattern.match("/fruits/apple") == ("apple",)
        assert pattern.names == ("name",)

    def test_default_placeholder_never_crosses_separator(self):
        """Test default placeholder does not span segments."""
        pattern = compile_pattern("/fruits/{name}")

        assert pattern.match("/fruits/apple/seeds") is None
        assert pattern.match("/fruits/") is None

    def test_custom_subpatterns(self):
        """Test custom sub-patterns in declaration order."""
        pattern = compile_pattern(r"/x/{w:\w+}/{n:\d+}")

        assert pattern.match("/x/foo/321") == ("foo", "321")
        assert pattern.match("/x/foo/bar") is None
        assert pattern.names == ("w", "n")

    def test_subpattern_may_span_segments(self):
        """Test explicit sub-pattern can match separators."""
        pattern = compile_pattern("/files/{path:.+}")

        assert pattern.match("/files/docs/a/b.txt") == ("docs/a/b.txt",)

    def test_braces_inside_subpattern(self):
        """Test balanced braces inside a sub-pattern."""
        pattern = compile_pattern("/codes/{code:[A-Z]{3}}")

        assert pattern.match("/codes/ABC") == ("ABC",)
        assert pattern.match("/codes/ABCD") is None

    def test_placeholder_inside_segment(self):
        """Test placeholder mixed with literal text in a segment."""
        pattern = compile_pattern("/reports/{year:\\d{4}}-{month:\\d{2}}.csv")

        assert pattern.match("/reports/2024-05.csv") == ("2024", "05")

    def test_duplicate_names_allowed(self):
        """Test duplicate names compile with one group each."""
        pattern = compile_pattern("/{id}/{id}")

        assert pattern.names == ("id", "id")
        assert pattern.regex.groups == 2
        assert pattern.match("/a/b") == ("a", "b")

    def test_group_count_matches_names(self):
        """Test capture group count equals placeholder count."""
        for template in ["/", "/a/{b}", r"/a/{b:\d+}/{c:(?:x|y)}", "/{a}{b:z}"]:
            pattern = compile_pattern(template)
            assert pattern.regex.groups == len(pattern.names)


class TestMalformedTemplates:
    """Test compilation failures."""

    @pytest.mark.parametrize(
        "template",
        [
            "/fruits/{name",
            "/fruits/name}",
            "/fruits/{}",
            r"/fruits/{:\d+}",
            "/fruits/{a/b}",
            "/fruits/{name:[}",
            r"/fruits/{name:(\d+)}",
            r"/fruits/{name:(?P<n>\d+)}",
        ],
    )
    def test_rejected(self, template):
        """Test malformed templates raise PatternError."""
        with pytest.raises(PatternError):
            compile_pattern(template)

    def test_error_names_template(self):
        """Test error carries the offending template and reason."""
        with pytest.raises(PatternError) as exc_info:
            compile_pattern("/fruits/{name:[a-z}")

        assert exc_info.value.template == "/fruits/{name:[a-z}"
        assert "/fruits/{name:[a-z}" in str(exc_info.value)
        assert exc_info.value.reason
