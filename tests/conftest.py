from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for templates and configuration dictionaries.
"""

import os
import sys
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
SAMPLE_TEMPLATE = b"""<?xml version="1.0" encoding="utf-8"?>
<Project DefaultTargets="Build" xmlns="http://schemas.microsoft.com/developer/msbuild/2003">
  <ItemGroup Label="ProjectConfigurations">
    <ProjectConfiguration Include="Debug|x64" />
  </ItemGroup>
  <!-- generated below -->
  <ItemGroup Label="Sources" Condition="'$(X)'=='1'">
    <ClCompile Include="stale.cpp" />
  </ItemGroup>
  <ItemGroup Label="Headers">
    <ClInclude Include="stale.h" />
  </ItemGroup>
</Project>
"""


@pytest.fixture
def template_bytes() -> bytes:
    """Return a minimal project template with Sources and Headers groups."""
    return SAMPLE_TEMPLATE


@pytest.fixture
def template_file(tmp_path) -> str:
    """Write the sample template to disk and return its path."""
    path = tmp_path / "template.vcxproj"
    path.write_bytes(SAMPLE_TEMPLATE)
    return str(path)


@pytest.fixture
def export_config(tmp_path, template_file) -> Dict[str, Any]:
    """
    Return a complete export configuration rooted in a temporary directory.

    Returns:
        Dict[str, Any]: A sample configuration dictionary.
    """
    return {
        "template_path": template_file,
        "output_dir": str(tmp_path / "out"),
        "project_name": "demo",
        "root_dir": str(tmp_path),
        "uuid_namespace": "10758f2f-f8bc-4d6b-aeaa-8131bf78a862",
        "filter_separator": "/",
        "source_extensions": [".cpp", ".cxx"],
        "header_extensions": [".h"],
        "exclude_patterns": [],
        "respect_gitignore": False,
        "overwrite": False,
    }
