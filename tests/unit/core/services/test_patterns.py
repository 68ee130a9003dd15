from __future__ import annotations

"""
Unit tests for name exclusion rules and .gitignore translation.
"""

import logging

from vcxgen.core.services.patterns import (
    ExclusionRules,
    build_exclusions,
    gitignore_patterns,
)


def test_compile_skips_invalid_patterns(caplog):
    with caplog.at_level(logging.WARNING):
        rules = ExclusionRules.compile([r"^build$", r"([unclosed"])

    assert len(rules.patterns) == 1
    assert "([unclosed" in caplog.text


def test_excludes_searches_names():
    rules = ExclusionRules.compile([r"^\.git$", r"\.tmp$"])

    assert rules.excludes(".git")
    assert rules.excludes("cache.tmp")
    assert not rules.excludes("src")
    assert not ExclusionRules().excludes("anything")


def test_gitignore_translation(tmp_path):
    (tmp_path / ".gitignore").write_text(
        "# comment\n\n*.o\n/generated/\n!keep.o\n/\n",
        encoding="utf-8",
    )

    rules = ExclusionRules.compile(gitignore_patterns(str(tmp_path)))

    assert len(rules.patterns) == 2
    assert rules.excludes("main.o")
    assert rules.excludes("generated")
    assert not rules.excludes("main.cpp")
    # Negations are not supported
    assert rules.excludes("keep.o")


def test_missing_gitignore(tmp_path):
    assert gitignore_patterns(str(tmp_path)) == []


def test_build_exclusions_merges_gitignore(tmp_path):
    (tmp_path / ".gitignore").write_text("third_party\n", encoding="utf-8")

    merged = build_exclusions(str(tmp_path), [r"^build$"], respect_gitignore=True)
    plain = build_exclusions(str(tmp_path), [r"^build$"], respect_gitignore=False)

    assert merged.excludes("build") and merged.excludes("third_party")
    assert plain.excludes("build") and not plain.excludes("third_party")
