import pytest

from wikifix.correlation.correlator import WikitextCorrelator
from wikifix.correlation.models import Corrected
from wikifix.outcomes.models import NotApplicable, NotApplicableReason

HABSBOURG_CONTEXT = (
    "<tag><tag>Le pays s'allie avec la <tag>monarchie de <err>Habsbourg</err></tag> et la "
    "<tag>Confédération germanique</tag>.</tag></tag>"
)


@pytest.fixture()
def correlator() -> WikitextCorrelator:
    return WikitextCorrelator()


class TestReduce:
    def test_keeps_run_around_markers(self, correlator: WikitextCorrelator) -> None:
        reduced = correlator.reduce("<tag>a <err>b</err> c</tag><tag>d</tag>")
        assert reduced == "a <err>b</err> c"

    def test_nested_markup(self, correlator: WikitextCorrelator) -> None:
        assert correlator.reduce(HABSBOURG_CONTEXT) == "monarchie de <err>Habsbourg</err>"

    def test_plain_text_is_unchanged(self, correlator: WikitextCorrelator) -> None:
        assert correlator.reduce("sat on <err>teh</err> mat") == "sat on <err>teh</err> mat"

    @pytest.mark.parametrize("context", ["no markers", "<tag>x</tag>", "a <err></err> b", "a <err>b"])
    def test_without_marker_pair_is_unchanged(self, correlator: WikitextCorrelator, context: str) -> None:
        assert correlator.reduce(context) == context

    def test_literal_strips_markers(self, correlator: WikitextCorrelator) -> None:
        assert correlator.literal("x<tag>a <err>b</err> c") == "a b c"


class TestCorrelate:
    def test_single_occurrence(self, correlator: WikitextCorrelator) -> None:
        source = "The cat sat on teh mat."
        result = correlator.correlate(source, "sat on <err>teh</err> mat", "the")
        assert result == Corrected(
            original_snippet="sat on teh mat",
            corrected_snippet="sat on the mat",
            corrected_text="The cat sat on the mat.",
        )

    def test_context_with_markup(self, correlator: WikitextCorrelator) -> None:
        source = "Le pays s'allie avec la ''monarchie de Habsbourg'' et la suite."
        result = correlator.correlate(source, HABSBOURG_CONTEXT, "Habsburg")
        assert isinstance(result, Corrected)
        assert result.original_snippet == "monarchie de Habsbourg"
        assert result.corrected_snippet == "monarchie de Habsburg"
        assert result.corrected_text == "Le pays s'allie avec la ''monarchie de Habsburg'' et la suite."

    def test_only_the_snippet_changes(self, correlator: WikitextCorrelator) -> None:
        source = "head sat on teh mat tail"
        result = correlator.correlate(source, "sat on <err>teh</err> mat", "the")
        prefix, _, suffix = source.partition(result.original_snippet)
        assert result.corrected_text == prefix + result.corrected_snippet + suffix

    def test_multiple_occurrences(self, correlator: WikitextCorrelator) -> None:
        source = "sat on teh mat. Later, sat on teh mat again."
        result = correlator.correlate(source, "sat on <err>teh</err> mat", "the")
        assert isinstance(result, NotApplicable)
        assert result.reason is NotApplicableReason.MULTIPLE_MATCHES

    def test_overlapping_occurrences_count_as_multiple(self, correlator: WikitextCorrelator) -> None:
        result = correlator.correlate("aaaa", "<err>a</err>aa", "b")
        assert isinstance(result, NotApplicable)
        assert result.reason is NotApplicableReason.MULTIPLE_MATCHES

    def test_not_found(self, correlator: WikitextCorrelator) -> None:
        result = correlator.correlate("The dog sat.", "sat on <err>teh</err> mat", "the")
        assert isinstance(result, NotApplicable)
        assert result.reason is NotApplicableReason.NO_MATCH

    def test_missing_markers(self, correlator: WikitextCorrelator) -> None:
        result = correlator.correlate("sat on teh mat", "sat on teh mat", "the")
        assert isinstance(result, NotApplicable)
        assert result.reason is NotApplicableReason.NO_MATCH

    def test_markup_inside_error_span(self, correlator: WikitextCorrelator) -> None:
        result = correlator.correlate("ab", "<err>a</tag><tag>b</err>", "c")
        assert isinstance(result, NotApplicable)
        assert result.reason is NotApplicableReason.NO_MATCH
        assert "can't be stripped" in result.message

    @pytest.mark.parametrize(
        ("source", "context", "suggestion"),
        [
            ("", "", ""),
            ("x", "<err>", "y"),
            ("x", "</err><err>", "y"),
            ("<err>x</err>", "<err>x</err>", ""),
            ("a<b>c", "a<<err>b</err>>c", "d"),
        ],
    )
    def test_always_returns_a_value(
        self, correlator: WikitextCorrelator, source: str, context: str, suggestion: str
    ) -> None:
        assert isinstance(correlator.correlate(source, context, suggestion), (Corrected, NotApplicable))


class TestOverlapsTitle:
    def test_error_inside_title(self, correlator: WikitextCorrelator) -> None:
        context = "<tag>La Maison de <err>Habsbourg</err> règne</tag>"
        assert correlator.overlaps_title(context, "Maison de Habsbourg")

    def test_error_outside_title(self, correlator: WikitextCorrelator) -> None:
        context = "<err>La</err> Maison de Habsbourg"
        assert not correlator.overlaps_title(context, "Maison de Habsbourg")

    def test_title_absent(self, correlator: WikitextCorrelator) -> None:
        assert not correlator.overlaps_title("sat on <err>teh</err> mat", "Cats")

    def test_empty_title(self, correlator: WikitextCorrelator) -> None:
        assert not correlator.overlaps_title("sat on <err>teh</err> mat", "")

    def test_no_markers(self, correlator: WikitextCorrelator) -> None:
        assert not correlator.overlaps_title("Maison de Habsbourg", "Habsbourg")


class TestHabsbourg:
    def test_elision_inside_italic_markup(self, correlator: WikitextCorrelator) -> None:
        source = "Le pays s'allie avec la ''monarchie de Habsbourg'' et la ''Confédération germanique''."
        context = (
            "Le pays s'allie avec la <tag>monarchie <err>de Habsbourg</err></tag> et la "
            "<tag>Confédération germanique</tag>."
        )
        result = correlator.correlate(source, context, "d'Habsbourg")
        assert result == Corrected(
            original_snippet="monarchie de Habsbourg",
            corrected_snippet="monarchie d'Habsbourg",
            corrected_text=(
                "Le pays s'allie avec la ''monarchie d'Habsbourg'' et la "
                "''Confédération germanique''."
            ),
        )
