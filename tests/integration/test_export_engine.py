from __future__ import annotations

"""
Integration tests for the export engine.

Exercises the full template-to-files workflow on a temporary directory:
decoding, section rewriting, filter generation and persistence.
"""

import os
import uuid
from unittest.mock import patch

from vcxgen.core.pipeline.engine import export_project
from vcxgen.core.xml.codec import XML_DECLARATION, decode
from vcxgen.domain.constants import MSBUILD_NAMESPACE
from vcxgen.domain.errors import SinkWriteError
from vcxgen.domain.node_models import QName
from vcxgen.infra.fs import get_default_template_path

FILES = ["src/a.cpp", "src/b.cpp", "inc/a.h", "README.md"]


def _items(root, tag):
    out = []
    for group in root.elements():
        for item in group.elements():
            if item.name.local == tag:
                out.append(item.get_attribute("Include"))
    return out


def test_export_writes_both_documents(export_config):
    result = export_project(export_config, FILES)

    assert result.ok, result.error
    assert result.input_files == 4
    assert result.sections == {"Sources": 2, "Headers": 1}
    assert result.filter_entries == 3
    assert result.filter_paths == [
        "Source Files/src", "Source Files", "Header Files/inc", "Header Files",
    ]

    with open(result.project_path, "rb") as f:
        project_bytes = f.read()
    with open(result.filters_path, "rb") as f:
        filters_bytes = f.read()

    assert project_bytes.startswith(XML_DECLARATION)
    assert filters_bytes.startswith(XML_DECLARATION)
    assert b"stale.cpp" not in project_bytes
    assert b"<!-- generated below -->" in project_bytes
    assert b"\n  <ItemGroup>\n    <Filter Include=\"Source Files/src\">\n" in filters_bytes

    project = decode(project_bytes)
    assert _items(project, "ClCompile") == ["src/a.cpp", "src/b.cpp"]
    assert _items(project, "ClInclude") == ["inc/a.h"]
    assert _items(project, "ProjectConfiguration") == ["Debug|x64"]

    filters = decode(filters_bytes)
    declarations = list(next(filters.elements()).elements())
    identifier = next(declarations[1].elements()).children[0].value
    expected = uuid.uuid5(uuid.UUID(export_config["uuid_namespace"]), "Source Files")
    assert identifier == "{" + str(expected) + "}"

    entries = list(list(filters.elements())[1].elements())
    assert next(entries[2].elements()).name == QName("Filter", MSBUILD_NAMESPACE)


def test_export_is_reproducible(export_config):
    export_config["overwrite"] = True

    first = export_project(export_config, FILES)
    with open(first.filters_path, "rb") as f:
        before = f.read()

    second = export_project(export_config, FILES)
    with open(second.filters_path, "rb") as f:
        assert f.read() == before


def test_overwrite_guard(export_config):
    assert export_project(export_config, FILES).ok

    blocked = export_project(export_config, FILES)

    assert not blocked.ok
    assert "overwrite" in blocked.error
    assert sorted(blocked.existing_files) == sorted([blocked.project_path, blocked.filters_path])


def test_dry_run_writes_nothing(export_config):
    result = export_project(export_config, FILES, dry_run=True)

    assert result.ok
    assert result.dry_run is True
    assert result.sections == {"Sources": 2, "Headers": 1}
    assert not os.path.exists(export_config["output_dir"])


def test_malformed_template(export_config, tmp_path):
    bad = tmp_path / "bad.vcxproj"
    bad.write_bytes(b"<Project><ItemGroup></Project>")
    export_config["template_path"] = str(bad)

    result = export_project(export_config, FILES)

    assert not result.ok
    assert "Malformed document" in result.error
    assert not os.path.exists(result.project_path)


def test_missing_template(export_config, tmp_path):
    export_config["template_path"] = str(tmp_path / "absent.vcxproj")

    result = export_project(export_config, FILES)

    assert not result.ok
    assert "absent.vcxproj" in result.error


def test_invalid_namespace_aborts_export(export_config):
    export_config["uuid_namespace"] = "not-a-uuid"

    result = export_project(export_config, FILES)

    assert not result.ok
    assert "not-a-uuid" in result.error
    assert not os.path.exists(result.filters_path)


def test_bundled_template_is_used_by_default(export_config):
    export_config["template_path"] = ""

    result = export_project(export_config, FILES)

    assert result.ok, result.error
    assert result.template_path == get_default_template_path()
    assert result.sections == {"Sources": 2, "Headers": 1}


def test_files_outside_root_are_left_out_of_filters(export_config, tmp_path):
    outside = str(tmp_path.parent / "elsewhere.cpp")

    result = export_project(export_config, ["main.cpp", outside], dry_run=True)

    assert result.ok
    assert result.sections == {"Sources": 2, "Headers": 0}
    assert result.filter_entries == 1
    assert result.filter_paths == ["Source Files"]


def test_write_failure_is_reported(export_config):
    with patch(
        "vcxgen.core.pipeline.engine.write_file",
        side_effect=SinkWriteError("Failed to write 'demo.vcxproj': disk full"),
    ):
        result = export_project(export_config, FILES)

    assert not result.ok
    assert "disk full" in result.error


def test_unwritable_output_directory(export_config, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    export_config["output_dir"] = str(blocker / "out")

    result = export_project(export_config, FILES)

    assert not result.ok
    assert "output directory" in result.error
