from __future__ import annotations

"""
Unit tests for the Project Template Section Rewriter.

Verifies:
1. Labelled ItemGroups are replaced by entries filtered by extension.
2. The rewrite discards prior attributes and children.
3. Unlabelled and unknown sections are left untouched.
"""

import logging

from vcxgen.core.project.classifier import Classifier
from vcxgen.core.project.rewriter import override_section, rewrite_template
from vcxgen.core.xml.codec import decode
from vcxgen.domain.node_models import Node, QName, Text

FILES = ["a.cpp", "b.h", "c.cxx", "d.txt"]


def _group(root: Node, label: str) -> Node:
    for group in root.elements():
        if group.get_attribute("Label") == label:
            return group
    raise AssertionError(f"no group labelled {label}")


def _includes(group: Node):
    return [(e.name.local, e.get_attribute("Include")) for e in group.elements()]


def test_rewrite_replaces_sources_and_headers():
    root = decode(
        b'<Project><ItemGroup Label="Sources"/><ItemGroup Label="Headers"/></Project>'
    )
    classifier = Classifier([".cpp", ".cxx"], [".h"])

    counts = rewrite_template(root, FILES, classifier)

    assert counts == {"Sources": 2, "Headers": 1}
    groups = list(root.elements())
    assert _includes(groups[0]) == [("ClCompile", "a.cpp"), ("ClCompile", "c.cxx")]
    assert _includes(groups[1]) == [("ClInclude", "b.h")]


def test_rewrite_is_destructive(template_bytes):
    """Prior entries and the section's own attributes are discarded."""
    root = decode(template_bytes)
    rewrite_template(root, FILES, Classifier([".cpp", ".cxx"], [".h"]))

    sections = [g for g in root.elements() if g.name.local == "ItemGroup"]
    sources, headers = sections[1], sections[2]

    assert sources.attributes == []
    assert headers.attributes == []
    assert _includes(sources) == [("ClCompile", "a.cpp"), ("ClCompile", "c.cxx")]
    assert _includes(headers) == [("ClInclude", "b.h")]


def test_rewrite_leaves_unlabelled_groups_untouched(template_bytes):
    root = decode(template_bytes)
    rewrite_template(root, FILES, Classifier())

    configurations = _group(root, "ProjectConfigurations")
    assert configurations.get_attribute("Label") == "ProjectConfigurations"
    assert [e.get_attribute("Include") for e in configurations.elements()] == ["Debug|x64"]


def test_entries_are_followed_by_newline_text():
    section = Node(QName("ItemGroup"))
    classifier = Classifier()

    override_section(section, ["a.cpp", "b.cpp"], classifier.sources)

    assert isinstance(section.children[1], Text)
    assert section.children[1].value == "\n"
    assert len(section.children) == 4


def test_entries_keep_input_order_and_duplicates():
    section = Node(QName("ItemGroup"))
    count = override_section(section, ["z.cpp", "a.cpp", "z.cpp"], Classifier().sources)

    assert count == 3
    assert [e.get_attribute("Include") for e in section.elements()] == ["z.cpp", "a.cpp", "z.cpp"]


def test_empty_file_list_empties_sections(template_bytes):
    root = decode(template_bytes)
    counts = rewrite_template(root, [], Classifier())

    assert counts == {"Sources": 0, "Headers": 0}
    sections = [g for g in root.elements() if g.name.local == "ItemGroup"]
    assert sections[1].children == []
    assert sections[2].children == []


def test_nested_groups_are_rewritten_once():
    root = decode(
        b'<Project><ItemGroup Label="Sources"><ItemGroup Label="Headers"/></ItemGroup></Project>'
    )
    counts = rewrite_template(root, ["a.cpp", "b.h"], Classifier())

    assert counts == {"Sources": 1}
    assert _includes(next(root.elements())) == [("ClCompile", "a.cpp")]


def test_missing_label_is_reported(caplog):
    root = decode(b'<Project><ItemGroup Label="Sources"/></Project>')

    with caplog.at_level(logging.WARNING, logger="vcxgen.core.project.rewriter"):
        rewrite_template(root, ["a.cpp"], Classifier())

    assert "Headers" in caplog.text
