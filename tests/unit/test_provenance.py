from lxml import etree

from wikifix.anonymization.anonymizer import HtmlAnonymizer
from wikifix.anonymization.provenance import ProvenanceIndex


class TestProvenanceIndex:
    def test_tag_name_lookup(self) -> None:
        result = HtmlAnonymizer().anonymize("<div><p>a</p><ul><li>b</li></ul></div>")
        index = ProvenanceIndex(result)
        assert index.tag_name(()) == "div"
        assert index.tag_name((1, 0)) == "li"

    def test_unknown_path_is_canonical(self) -> None:
        result = HtmlAnonymizer().anonymize("<tag><p>a</p></tag>")
        assert ProvenanceIndex(result).tag_name(()) == "tag"

    def test_attributes_lookup(self) -> None:
        result = HtmlAnonymizer().anonymize('<div><p id="x" class="y">a</p></div>')
        index = ProvenanceIndex(result)
        assert index.attributes((0,)) == {"id": "x", "class": "y"}
        assert index.attributes(()) == {}

    def test_restore_round_trips_markup(self) -> None:
        html = '<div class="c"><p id="x">one <b>two</b></p><!-- c --><i>three</i></div>'
        result = HtmlAnonymizer().anonymize(html)
        restored = ProvenanceIndex(result).restore(result.tree)
        assert etree.tostring(restored, encoding="unicode") == html

    def test_restore_leaves_anonymized_tree_untouched(self) -> None:
        result = HtmlAnonymizer().anonymize('<div a="b">text</div>')
        ProvenanceIndex(result).restore(result.tree)
        assert etree.tostring(result.tree, encoding="unicode") == "<tag>text</tag>"
