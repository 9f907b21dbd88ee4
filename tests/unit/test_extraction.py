"""Unit tests for Scarab export extraction."""

from pathlib import Path

import pytest
from lxml import etree

from scarab2pivotal.exceptions import ExportParseError
from scarab2pivotal.extraction import ScarabExtractor, parse_export
from scarab2pivotal.replay import ReplayEngine


def test_extractor_initialization(sample_export):
    """Test ScarabExtractor parses a file export."""
    extractor = ScarabExtractor(sample_export)

    assert extractor.root is not None
    assert etree.QName(extractor.root).localname == "scarab-issues"


def test_extractor_missing_file():
    """Test ScarabExtractor with a nonexistent path."""
    with pytest.raises(ExportParseError, match="Could not parse export"):
        ScarabExtractor(Path("/nonexistent/export.xml"))


def test_extractor_malformed_xml():
    """Test malformed XML is a fatal parse error."""
    with pytest.raises(ExportParseError):
        ScarabExtractor(b"<scarab-issues><issues><issue></scarab-issues>")


def test_extractor_wrong_root():
    """Test a document that is not a Scarab export is rejected."""
    with pytest.raises(ExportParseError, match="Expected <scarab-issues> root element"):
        ScarabExtractor(b"<tracker><issues/></tracker>")


def test_extract_issues_in_document_order(sample_export):
    """Test all issues are extracted in document order."""
    issues = parse_export(sample_export)

    assert [issue.id for issue in issues] == ["WEB1", "WEB2", "WEB3"]


def test_extract_activity_groups(sample_export):
    """Test activity groups keep document order and raw timestamps."""
    issue = parse_export(sample_export)[0]

    assert len(issue.activity_groups) == 2
    assert issue.activity_groups[0].created.strip() == "2005-03-20T09:00:00 PST"
    assert issue.activity_groups[1].created.strip() == "2005-03-18T15:26:12 PST"


def test_extract_activities(sample_export):
    """Test activities carry attribute names and undecoded values."""
    issue = parse_export(sample_export)[0]
    activities = issue.activity_groups[1].activities

    assert [a.attribute_name for a in activities] == [
        "Status",
        "Summary",
        "Description",
        "Estimated effort",
        "NULL",
        None,
    ]
    # CDATA content is passed through for the replay engine to decode
    assert activities[2].new_value == "He said &quot;hi&quot;"
    assert activities[5].new_value == "no attribute"
    # Plain text keeps its entities too
    assert issue.activity_groups[0].activities[1].new_value == "Login &amp; logout"


def test_issue_without_activity_sets(sample_export):
    """Test an issue with no history yields no groups."""
    issue = parse_export(sample_export)[2]

    assert issue.id == "WEB3"
    assert issue.activity_groups == []


def test_export_without_issues():
    """Test an export with no issues yields nothing."""
    assert parse_export(b"<scarab-issues><issues/></scarab-issues>") == []
    assert parse_export(b"<scarab-issues/>") == []


def test_missing_pieces_tolerated():
    """Test absent id, timestamp and new-value nodes become empty values."""
    xml = b"""
    <scarab-issues><issues><issue>
      <activity-sets><activity-set>
        <activities><activity><attribute><name>Status</name></attribute></activity></activities>
      </activity-set></activity-sets>
    </issue></issues></scarab-issues>
    """
    issue = parse_export(xml)[0]

    assert issue.id == ""
    assert issue.activity_groups[0].created == ""
    assert issue.activity_groups[0].activities[0].new_value == ""


def test_namespaced_export():
    """Test elements are matched by local name."""
    xml = b"""
    <scarab-issues xmlns="http://scarab.tigris.org/xmlns"><issues><issue>
      <id>NS1</id>
    </issue></issues></scarab-issues>
    """
    assert [issue.id for issue in parse_export(xml)] == ["NS1"]


def test_from_element():
    """Test wrapping an already-parsed tree."""
    root = etree.fromstring(b"<scarab-issues><issues><issue><id>X1</id></issue></issues></scarab-issues>")

    issues = list(ScarabExtractor.from_element(root).extract_issues())

    assert issues[0].id == "X1"


def test_constructor_accepts_element():
    """Test an already-parsed root can be passed straight to the constructor."""
    root = etree.fromstring(b"<scarab-issues><issues><issue><id>X2</id></issue></issues></scarab-issues>")

    assert [issue.id for issue in ScarabExtractor(root).extract_issues()] == ["X2"]


def test_from_element_wrong_root():
    """Test an already-parsed tree is still checked for the Scarab root."""
    with pytest.raises(ExportParseError, match="Expected <scarab-issues> root element"):
        ScarabExtractor.from_element(etree.fromstring(b"<tracker/>"))


def test_values_decoded_once():
    """Test entity-encoded entities survive as text after replay."""
    xml = b"""
    <scarab-issues><issues><issue><id>E1</id>
      <activity-sets><activity-set>
        <created-date><timestamp>2005-03-18T15:26:12 PST</timestamp></created-date>
        <activities>
          <activity>
            <attribute><name>Summary</name></attribute>
            <new-value>use &amp;lt; for less-than</new-value>
          </activity>
          <activity>
            <attribute><name>Description</name></attribute>
            <new-value><![CDATA[a &lt;b&gt; tag &amp; more]]></new-value>
          </activity>
          <activity>
            <attribute><name>Resolution</name></attribute>
            <new-value/>
          </activity>
        </activities>
      </activity-set></activity-sets>
    </issue></issues></scarab-issues>
    """
    issue = parse_export(xml)[0]
    activities = issue.activity_groups[0].activities

    assert activities[0].new_value == "use &amp;lt; for less-than"
    assert activities[1].new_value == "a &lt;b&gt; tag &amp; more"
    assert activities[2].new_value == ""

    result = ReplayEngine().reconstruct(issue)

    assert result["Summary"] == "use &lt; for less-than"
    assert result["Description"] == "a <b> tag & more"
    assert result["Resolution"] == ""
