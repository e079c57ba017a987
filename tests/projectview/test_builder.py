"""
Unit Tests for ProjectViewBuilder and parse_project_view

Covers file parsing, import inlining, cycle detection, URL sources and
the programmatic builder API.
"""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import Mock, patch

import pytest
import requests

from bazel_view_toolkit.config import ToolkitConfig
from bazel_view_toolkit.core.models import ProjectView
from bazel_view_toolkit.projectview import (
    CyclicImportError,
    ProjectViewBuilder,
    ProjectViewParseError,
    parse_project_view,
)


SAMPLE_VIEW = """\
directories:
  foo/bar
  baz

targets:
  //foo/bar:target1
  //baz:target2

build_flags:
  --define=FOO=bar

java_language_level: 8

# a comment line
"""


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def _response(text: str, status: int = 200) -> Mock:
    response = Mock()
    response.content = text.encode("utf-8")
    response.status_code = status
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} Error")
    else:
        response.raise_for_status.return_value = None
    return response


# ─────────────────────────────────────────────────────────────────────────────
# File Parsing Tests
# ─────────────────────────────────────────────────────────────────────────────

class TestParseFile:
    """Tests for parsing a single project view file."""

    def test_parse_sample_view(self, tmp_path: Path):
        view_path = _write(tmp_path / "project.bazelproject", SAMPLE_VIEW)

        view = parse_project_view(view_path)

        assert view == ProjectView(
            directories=("foo/bar", "baz"),
            targets=("//foo/bar:target1", "//baz:target2"),
            build_flags=("--define=FOO=bar",),
            java_language_level=8,
        )

    def test_parse_when_reparsed_then_same_view(self, tmp_path: Path):
        view_path = _write(tmp_path / "project.bazelproject", SAMPLE_VIEW)

        assert parse_project_view(view_path) == parse_project_view(view_path)

    def test_parse_accepts_str_path(self, tmp_path: Path):
        view_path = _write(tmp_path / "project.bazelproject", SAMPLE_VIEW)

        assert parse_project_view(str(view_path)).targets == ("//foo/bar:target1", "//baz:target2")

    def test_parse_accepts_file_url(self, tmp_path: Path):
        view_path = _write(tmp_path / "project.bazelproject", SAMPLE_VIEW)

        view = parse_project_view(view_path.as_uri())

        assert view.directories == ("foo/bar", "baz")

    def test_parse_keeps_duplicates_in_file_order(self, tmp_path: Path):
        view_path = _write(
            tmp_path / "v.bazelproject",
            "targets:\n  //b:b\n  //a:a\n\ntargets:\n  //b:b\n",
        )

        assert parse_project_view(view_path).targets == ("//b:b", "//a:a", "//b:b")

    def test_parse_handles_crlf_line_endings(self, tmp_path: Path):
        view_path = tmp_path / "v.bazelproject"
        view_path.write_bytes(b"targets:\r\n  //a:a\r\n\r\ndirectories:\r\n  a\r\n")

        view = parse_project_view(view_path)

        assert view.targets == ("//a:a",)
        assert view.directories == ("a",)

    def test_parse_file_without_trailing_newline(self, tmp_path: Path):
        view_path = _write(tmp_path / "v.bazelproject", "targets:\n  //a:a")

        assert parse_project_view(view_path).targets == ("//a:a",)

    def test_language_level_leading_zero(self, tmp_path: Path):
        view_path = _write(tmp_path / "v.bazelproject", "java_language_level: 07\n")

        assert parse_project_view(view_path).java_language_level == 7

    def test_language_level_last_line_wins(self, tmp_path: Path):
        view_path = _write(
            tmp_path / "v.bazelproject",
            "java_language_level: 8\njava_language_level: 11\n",
        )

        assert parse_project_view(view_path).java_language_level == 11

    def test_language_level_not_integer_then_error_cites_line(self, tmp_path: Path):
        view_path = _write(
            tmp_path / "v.bazelproject",
            "targets:\n  //a:a\n\njava_language_level: abc\n",
        )

        with pytest.raises(ProjectViewParseError, match="should be an integer") as exc_info:
            parse_project_view(view_path)

        assert exc_info.value.line_number == 4
        assert exc_info.value.source == str(view_path)

    def test_language_level_as_section_then_raises(self, tmp_path: Path):
        view_path = _write(tmp_path / "v.bazelproject", "java_language_level:\n  8\n")

        with pytest.raises(ProjectViewParseError, match="cannot be a section name"):
            parse_project_view(view_path)

    def test_reserved_label_as_scalar_then_raises(self, tmp_path: Path):
        view_path = _write(tmp_path / "v.bazelproject", "directories: foo\n")

        with pytest.raises(ProjectViewParseError, match="directories cannot be a label name"):
            parse_project_view(view_path)

    def test_blank_line_closes_section(self, tmp_path: Path):
        view_path = _write(tmp_path / "v.bazelproject", "targets:\n  //a:a\n\n  //b:b\n")

        with pytest.raises(ProjectViewParseError, match="not in a section") as exc_info:
            parse_project_view(view_path)

        assert exc_info.value.line_number == 4

    def test_item_before_any_section_then_raises(self, tmp_path: Path):
        view_path = _write(tmp_path / "v.bazelproject", "  //a:a\n")

        with pytest.raises(ProjectViewParseError, match="Line 1 of project view"):
            parse_project_view(view_path)

    def test_syntax_error_names_file_and_line(self, tmp_path: Path):
        view_path = _write(tmp_path / "v.bazelproject", "# ok\nnot valid\n")

        with pytest.raises(ProjectViewParseError) as exc_info:
            parse_project_view(view_path)

        assert str(exc_info.value) == f"Project view {view_path} contains a syntax error at line 2"

    def test_unknown_section_items_ignored(self, tmp_path: Path):
        view_path = _write(
            tmp_path / "v.bazelproject",
            "test_sources:\n  javatests/*\n\ntargets:\n  //a:a\n",
        )

        view = parse_project_view(view_path)

        assert view.targets == ("//a:a",)
        assert view.directories == ()

    def test_unknown_property_ignored(self, tmp_path: Path, caplog):
        view_path = _write(tmp_path / "v.bazelproject", "workspace_type: java\n")

        with caplog.at_level(logging.DEBUG, logger="bazel_view_toolkit"):
            view = parse_project_view(view_path)

        assert view == ProjectView()
        assert "Ignoring unknown property 'workspace_type'" in caplog.text

    def test_comment_ending_in_colon_closes_section(self, tmp_path: Path):
        view_path = _write(
            tmp_path / "v.bazelproject",
            "targets:\n  //a:a\n# Disabled:\n  //b:b\n",
        )

        view = parse_project_view(view_path)

        assert view.targets == ("//a:a",)

    def test_section_header_directly_follows_items(self, tmp_path: Path):
        view_path = _write(tmp_path / "v.bazelproject", "targets:\n  //a:a\ndirectories:\n  a\n")

        view = parse_project_view(view_path)

        assert view.targets == ("//a:a",)
        assert view.directories == ("a",)

    def test_missing_file_raises_os_error(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            parse_project_view(tmp_path / "missing.bazelproject")

    def test_configured_encoding_used(self, tmp_path: Path):
        view_path = tmp_path / "v.bazelproject"
        view_path.write_bytes("directories:\n  caf\xe9\n".encode("latin-1"))

        view = parse_project_view(view_path, config=ToolkitConfig(encoding="latin-1"))

        assert view.directories == ("café",)


# ─────────────────────────────────────────────────────────────────────────────
# Import Tests
# ─────────────────────────────────────────────────────────────────────────────

class TestImports:
    """Tests for import resolution."""

    def test_relative_import_resolved_against_importing_file(self, tmp_path: Path):
        _write(tmp_path / "views" / "b.bazelproject", "targets:\n  //x:y\n")
        a = _write(tmp_path / "views" / "a.bazelproject", "import b.bazelproject\n")

        assert parse_project_view(a).targets == ("//x:y",)

    def test_nested_relative_imports_use_each_files_directory(self, tmp_path: Path):
        _write(tmp_path / "base" / "common" / "c.bazelproject", "directories:\n  common\n")
        _write(tmp_path / "base" / "b.bazelproject", "import common/c.bazelproject\n")
        a = _write(tmp_path / "a.bazelproject", "import base/b.bazelproject\n")

        assert parse_project_view(a).directories == ("common",)

    def test_absolute_import(self, tmp_path: Path):
        b = _write(tmp_path / "shared" / "b.bazelproject", "build_flags:\n  --config=ci\n")
        a = _write(tmp_path / "a" / "a.bazelproject", f"import {b.resolve()}\n")

        assert parse_project_view(a).build_flags == ("--config=ci",)

    def test_import_spliced_at_import_line(self, tmp_path: Path):
        _write(tmp_path / "b.bazelproject", "targets:\n  //b:1\n  //b:2\n")
        a = _write(
            tmp_path / "a.bazelproject",
            "targets:\n  //a:1\n\nimport b.bazelproject\ntargets:\n  //a:2\n",
        )

        assert parse_project_view(a).targets == ("//a:1", "//b:1", "//b:2", "//a:2")

    def test_import_ends_current_section(self, tmp_path: Path):
        _write(tmp_path / "b.bazelproject", "# nothing\n")
        a = _write(tmp_path / "a.bazelproject", "targets:\n  //a:1\nimport b.bazelproject\n  //a:2\n")

        with pytest.raises(ProjectViewParseError, match="Line 4 of project view"):
            parse_project_view(a)

    def test_imported_language_level_overwrites(self, tmp_path: Path):
        _write(tmp_path / "b.bazelproject", "java_language_level: 11\n")
        a = _write(tmp_path / "a.bazelproject", "java_language_level: 8\nimport b.bazelproject\n")

        assert parse_project_view(a).java_language_level == 11

    def test_error_in_imported_file_names_imported_file(self, tmp_path: Path):
        b = _write(tmp_path / "b.bazelproject", "targets:\n  //b:b\nbogus\n")
        a = _write(tmp_path / "a.bazelproject", "# header\nimport b.bazelproject\n")

        with pytest.raises(ProjectViewParseError) as exc_info:
            parse_project_view(a)

        assert exc_info.value.source == str(b)
        assert exc_info.value.line_number == 3

    def test_missing_import_raises_os_error(self, tmp_path: Path):
        a = _write(tmp_path / "a.bazelproject", "import missing.bazelproject\n")

        with pytest.raises(FileNotFoundError):
            parse_project_view(a)

    def test_same_file_imported_twice_is_inlined_twice(self, tmp_path: Path):
        _write(tmp_path / "common.bazelproject", "targets:\n  //c:c\n")
        _write(tmp_path / "b.bazelproject", "import common.bazelproject\n")
        a = _write(tmp_path / "a.bazelproject", "import common.bazelproject\nimport b.bazelproject\n")

        assert parse_project_view(a).targets == ("//c:c", "//c:c")

    def test_self_import_then_cyclic_import_error(self, tmp_path: Path):
        a = _write(tmp_path / "a.bazelproject", "targets:\n  //a:a\n\nimport a.bazelproject\n")

        with pytest.raises(CyclicImportError) as exc_info:
            parse_project_view(a)

        assert exc_info.value.line_number == 4
        assert exc_info.value.chain == (str(a.resolve()), str(a.resolve()))

    def test_indirect_cycle_then_cyclic_import_error(self, tmp_path: Path):
        _write(tmp_path / "b.bazelproject", "import a.bazelproject\n")
        a = _write(tmp_path / "a.bazelproject", "import b.bazelproject\n")

        with pytest.raises(CyclicImportError, match="cyclic import") as exc_info:
            parse_project_view(a)

        assert [Path(p).name for p in exc_info.value.chain] == [
            "a.bazelproject",
            "b.bazelproject",
            "a.bazelproject",
        ]
        assert exc_info.value.source == str(tmp_path / "b.bazelproject")

    def test_cyclic_import_is_a_parse_error(self, tmp_path: Path):
        a = _write(tmp_path / "a.bazelproject", "import a.bazelproject\n")

        with pytest.raises(ProjectViewParseError):
            parse_project_view(a)

    def test_cycle_check_disabled_then_recursion_error(self, tmp_path: Path):
        a = _write(tmp_path / "a.bazelproject", "import a.bazelproject\n")

        with pytest.raises(RecursionError):
            parse_project_view(a, config=ToolkitConfig(detect_import_cycles=False))


# ─────────────────────────────────────────────────────────────────────────────
# URL Tests
# ─────────────────────────────────────────────────────────────────────────────

class TestParseUrl:
    """Tests for http(s) project views."""

    def test_parse_url(self):
        with patch("bazel_view_toolkit.projectview.builder.requests.get") as mock_get:
            mock_get.return_value = _response(SAMPLE_VIEW)

            view = parse_project_view("https://example.com/ide/project.bazelproject")

        mock_get.assert_called_once_with(
            "https://example.com/ide/project.bazelproject", timeout=None
        )
        assert view.java_language_level == 8
        assert view.targets == ("//foo/bar:target1", "//baz:target2")

    def test_relative_import_resolved_against_url(self):
        pages = {
            "https://example.com/ide/project.bazelproject": "import common/base.bazelproject\n",
            "https://example.com/ide/common/base.bazelproject": "targets:\n  //x:y\n",
        }
        with patch("bazel_view_toolkit.projectview.builder.requests.get") as mock_get:
            mock_get.side_effect = lambda url, timeout=None: _response(pages[url])

            view = ProjectViewBuilder().parse_url(
                "https://example.com/ide/project.bazelproject"
            ).build()

        assert view.targets == ("//x:y",)

    def test_timeout_passed_through(self):
        config = ToolkitConfig(url_timeout=2.5)
        with patch("bazel_view_toolkit.projectview.builder.requests.get") as mock_get:
            mock_get.return_value = _response("targets:\n  //a:a\n")

            parse_project_view("http://example.com/v.bazelproject", config=config)

        mock_get.assert_called_once_with("http://example.com/v.bazelproject", timeout=2.5)

    def test_http_error_propagates(self):
        with patch("bazel_view_toolkit.projectview.builder.requests.get") as mock_get:
            mock_get.return_value = _response("", status=404)

            with pytest.raises(requests.HTTPError):
                parse_project_view("https://example.com/missing.bazelproject")

    def test_error_names_url(self):
        with patch("bazel_view_toolkit.projectview.builder.requests.get") as mock_get:
            mock_get.return_value = _response("bogus\n")

            with pytest.raises(ProjectViewParseError) as exc_info:
                parse_project_view("https://example.com/v.bazelproject")

        assert exc_info.value.source == "https://example.com/v.bazelproject"


# ─────────────────────────────────────────────────────────────────────────────
# Builder API Tests
# ─────────────────────────────────────────────────────────────────────────────

class TestProjectViewBuilder:
    """Tests for the programmatic builder API."""

    def test_add_methods_chain_and_accept_varargs(self):
        view = (
            ProjectViewBuilder()
            .add_directory("a", "b")
            .add_target("//a:a")
            .add_build_flag("--x", "--y")
            .set_java_language_level(8)
            .build()
        )

        assert view == ProjectView(
            directories=("a", "b"),
            targets=("//a:a",),
            build_flags=("--x", "--y"),
            java_language_level=8,
        )

    @pytest.mark.parametrize("level", [0, -1])
    def test_set_language_level_non_positive_then_raises(self, level):
        with pytest.raises(ValueError, match="value > 0"):
            ProjectViewBuilder().set_java_language_level(level)

    def test_set_language_level_twice_then_raises(self):
        builder = ProjectViewBuilder().set_java_language_level(8)

        with pytest.raises(ValueError, match="already set"):
            builder.set_java_language_level(11)

    def test_set_language_level_after_parsed_level_then_raises(self, tmp_path: Path):
        view_path = _write(tmp_path / "v.bazelproject", "java_language_level: 8\n")
        builder = ProjectViewBuilder().parse_view(view_path)

        with pytest.raises(ValueError, match="already set"):
            builder.set_java_language_level(11)

    def test_parsed_level_overwrites_api_level(self, tmp_path: Path):
        view_path = _write(tmp_path / "v.bazelproject", "java_language_level: 11\n")

        view = ProjectViewBuilder().set_java_language_level(8).parse_view(view_path).build()

        assert view.java_language_level == 11

    def test_api_and_parsed_items_combined_in_call_order(self, tmp_path: Path):
        view_path = _write(tmp_path / "v.bazelproject", "targets:\n  //parsed:a\n")

        view = (
            ProjectViewBuilder()
            .add_target("//api:first")
            .parse_view(view_path)
            .add_target("//api:last")
            .build()
        )

        assert view.targets == ("//api:first", "//parsed:a", "//api:last")

    def test_build_snapshot_not_affected_by_later_mutation(self):
        builder = ProjectViewBuilder().add_target("//a:a")
        first = builder.build()

        builder.add_target("//b:b")

        assert first.targets == ("//a:a",)
        assert builder.build().targets == ("//a:a", "//b:b")

    def test_failed_parse_leaves_import_stack_empty(self, tmp_path: Path):
        bad = _write(tmp_path / "bad.bazelproject", "bogus\n")
        good = _write(tmp_path / "good.bazelproject", "import bad.bazelproject\n")
        builder = ProjectViewBuilder()

        with pytest.raises(ProjectViewParseError):
            builder.parse_view(good)

        # the same builder can parse again without a false cycle
        with pytest.raises(ProjectViewParseError, match="syntax error"):
            builder.parse_view(good)
