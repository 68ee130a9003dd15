from __future__ import annotations

"""
Smoke tests for package imports and the public contract of the entry points.
"""

import importlib

import pytest


@pytest.mark.parametrize("module", [
    "vcxgen.main",
    "vcxgen.core.xml.codec",
    "vcxgen.core.xml.scanner",
    "vcxgen.core.project.classifier",
    "vcxgen.core.project.rewriter",
    "vcxgen.core.project.filters_builder",
    "vcxgen.core.services.discovery",
    "vcxgen.core.pipeline.engine",
    "vcxgen.interface.cli.app",
])
def test_module_importable(module):
    assert importlib.import_module(module) is not None


def test_cli_entrypoint_contract():
    from vcxgen.interface.cli import app

    assert callable(app.main)
    assert (app.EXIT_OK, app.EXIT_FAILURE, app.EXIT_USAGE) == (0, 1, 2)


def test_bundled_template_is_packaged():
    import os

    from vcxgen.infra.fs import get_default_template_path

    assert os.path.isfile(get_default_template_path())
