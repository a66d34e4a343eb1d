"""Tests for document parsing, classification and titles."""

import re
from datetime import datetime
from pathlib import Path

import pytest

from openspec2html.document import (
    DOCUMENT_TYPES,
    Document,
    classify_document,
    extract_project_from_path,
    generate_document_id,
    get_relative_path,
    parse_document,
    parse_document_string,
    resolve_title,
    sanitize_key,
)
from openspec2html.exceptions import DocumentNotFoundError, DocumentReadError, OpenSpecError

FIXTURES = Path(__file__).parent / "fixtures" / "openspec"


class TestRelativePathAndId:
    def test_openspec_marker_is_stripped(self):
        path = "/root/openspec/specs/auth/design.md"

        assert get_relative_path(path) == "specs/auth/design"
        assert generate_document_id(get_relative_path(path)) == "specs-auth-design"

    def test_path_without_marker_keeps_everything_but_extension(self):
        assert get_relative_path("/srv/docs/readme.md") == "/srv/docs/readme"

    def test_markdown_extension_variants(self):
        assert get_relative_path("/x/openspec/notes.markdown") == "notes"
        assert get_relative_path("/x/openspec/notes.txt") == "notes.txt"

    def test_marker_is_case_sensitive(self):
        assert get_relative_path("/x/OpenSpec/a.md") == "/x/OpenSpec/a"

    def test_explicit_root(self, tmp_path):
        root = tmp_path / "docs"
        path = root / "specs" / "auth" / "design.md"

        assert get_relative_path(path, root_path=root) == "specs/auth/design"

    def test_explicit_root_not_containing_file_falls_back_to_marker(self, tmp_path):
        assert get_relative_path("/a/openspec/b.md", root_path=tmp_path) == "b"

    def test_document_id_is_slug(self):
        assert generate_document_id("Changes/Add Login!/Tasks") == "changes-add-login-tasks"
        assert generate_document_id("--a__b--") == "a__b"

    @pytest.mark.parametrize("relative_path", [
        "specs/Été/Design v2",
        "/abs/path/with spaces/and.dots",
        "weird///chars!!@@",
    ])
    def test_document_id_alphabet(self, relative_path):
        doc_id = generate_document_id(relative_path)

        assert re.fullmatch(r"[a-z0-9/_-]*", doc_id)
        assert doc_id == generate_document_id(relative_path)

    def test_project_from_path(self):
        assert extract_project_from_path("changes/add-login/tasks") == "add-login"
        assert extract_project_from_path("specs/Auth/design") == "auth"
        assert extract_project_from_path("archive/old") is None


class TestClassifyDocument:
    def test_phase_wins(self):
        assert classify_document({"phase": "Design"}, "/x/tasks.md") == "design"

    def test_phase_is_sanitised(self):
        assert classify_document({"phase": "Code Review!"}, "/x/a.md") == "codereview"

    def test_unsafe_only_phase_falls_through(self):
        assert classify_document({"phase": "!!!"}, "/x/tasks.md") == "tasks"

    def test_spec_flag(self):
        assert classify_document({"spec": True}, "/x/design.md") == "spec"
        assert classify_document({"spec": False}, "/x/design.md") == "design"

    @pytest.mark.parametrize("filename,expected", [
        ("REQUIREMENTS.md", "requirements"),
        ("system-design.md", "design"),
        ("tasks.md", "tasks"),
        ("proposal.md", "proposal"),
        ("spec.md", "spec"),
        ("research-notes.md", "research"),
        ("design-tasks.md", "design"),
    ])
    def test_filename_keywords(self, filename, expected):
        assert classify_document({}, f"/x/{filename}") == expected

    @pytest.mark.parametrize("path,expected", [
        ("/x/openspec/specs/auth/overview.md", "spec"),
        ("/x/openspec/changes/add/overview.md", "change"),
        ("/x/openspec/Proposals/overview.md", "proposal"),
        ("/x/openspec/archive/overview.md", "archived"),
    ])
    def test_path_segments(self, path, expected):
        assert classify_document({}, path) == expected

    def test_default(self):
        assert classify_document({}, "/x/openspec/overview.md") == "document"

    def test_is_deterministic(self):
        args = ({"phase": "tasks"}, "/x/design.md")

        assert classify_document(*args) == classify_document(*args)

    def test_conventional_types(self):
        assert len(DOCUMENT_TYPES) == 9
        assert "document" in DOCUMENT_TYPES


class TestResolveTitle:
    def test_frontmatter_title(self):
        assert resolve_title({"title": "T", "name": "N"}, "# H", "/x/a.md") == "T"

    def test_frontmatter_name(self):
        assert resolve_title({"name": "N"}, "# H", "/x/a.md") == "N"

    def test_non_string_title(self):
        assert resolve_title({"title": 42}, "", "/x/a.md") == "42"

    def test_first_h1(self):
        assert resolve_title({}, "intro\n## Sub\n# Main  \n# Second", "/x/a.md") == "Main"

    def test_first_h2_when_no_h1(self):
        assert resolve_title({}, "text\n## Sub heading", "/x/a.md") == "Sub heading"

    def test_h3_is_not_a_title(self):
        assert resolve_title({}, "### Deep", "/x/user-auth_flow.md") == "User Auth Flow"

    def test_hash_without_space_is_not_a_heading(self):
        assert resolve_title({}, "#tag", "/x/notes.md") == "Notes"

    def test_hyphen_only_filename(self):
        assert resolve_title({}, "", "/x/---.md") == "---"

    def test_empty_stem(self):
        assert resolve_title({}, "", "/x/.md") == "Untitled"


class TestParseDocument:
    def test_example_scenario(self, tmp_path):
        md_file = tmp_path / "example.md"
        md_file.write_text(
            "---\ntitle: Example Spec\nphase: design\n---\n# Hello\n\nThis is **bold** and `code`.\n"
        )

        doc = parse_document(md_file)

        assert doc.frontmatter == {"title": "Example Spec", "phase": "design"}
        assert doc.type == "design"
        assert doc.title == "Example Spec"
        assert doc.content == "# Hello\n\nThis is **bold** and `code`."

    def test_fixture_design(self):
        doc = parse_document(FIXTURES / "specs/auth/design.md")

        assert doc.relative_path == "specs/auth/design"
        assert doc.document_id == "specs-auth-design"
        assert doc.type == "design"
        assert doc.title == "Authentication Design"
        assert doc.frontmatter["owners"] == ["alice", "bob"]
        assert doc.frontmatter["tags"] == ["auth", "security", 3]
        assert doc.frontmatter["version"] == 2
        assert doc.frontmatter["draft"] is False
        assert doc.content.startswith("# Auth Design")
        assert doc.raw_content.startswith("---\ntitle:")
        assert doc.project == "auth"

    def test_fixture_proposal_uses_h2_title(self):
        doc = parse_document(FIXTURES / "changes/add-login/proposal.md")

        assert doc.type == "proposal"
        assert doc.title == "Why"
        assert doc.frontmatter == {}
        assert doc.project == "add-login"

    def test_fixture_archive_uses_filename_title(self):
        doc = parse_document(FIXTURES / "archive/old-plan.md")

        assert doc.type == "archived"
        assert doc.title == "Old Plan"

    def test_empty_file(self, tmp_path):
        md_file = tmp_path / "empty.md"
        md_file.write_bytes(b"")

        doc = parse_document(md_file)

        assert doc.content == ""
        assert doc.is_empty
        assert doc.title == "Empty"

    def test_modified_at_is_file_mtime(self, tmp_path):
        md_file = tmp_path / "a.md"
        md_file.write_text("x")

        doc = parse_document(md_file)

        assert isinstance(doc.modified_at, datetime)
        assert doc.modified_at.timestamp() == pytest.approx(md_file.stat().st_mtime)

    def test_invalid_utf8_is_replaced(self, tmp_path):
        md_file = tmp_path / "bad.md"
        md_file.write_bytes(b"# Caf\xe9\n")

        doc = parse_document(md_file)

        assert doc.title == "Caf�"

    def test_crlf_file_keeps_raw_content(self, tmp_path):
        md_file = tmp_path / "crlf.md"
        md_file.write_bytes(b"---\r\ntitle: X\r\nphase: tasks\r\n---\r\n# Head\r\nbody\r\n")

        doc = parse_document(md_file)

        assert doc.raw_content == "---\r\ntitle: X\r\nphase: tasks\r\n---\r\n# Head\r\nbody\r\n"
        assert doc.frontmatter == {"title": "X", "phase": "tasks"}
        assert doc.type == "tasks"
        assert doc.title == "X"
        assert doc.content == "# Head\r\nbody"

    def test_explicit_root(self, tmp_path):
        md_file = tmp_path / "specs" / "auth" / "design.md"
        md_file.parent.mkdir(parents=True)
        md_file.write_text("# D")

        doc = parse_document(md_file, root_path=tmp_path)

        assert doc.relative_path == "specs/auth/design"
        assert doc.document_id == "specs-auth-design"

    def test_raises_on_missing_file(self, tmp_path):
        with pytest.raises(DocumentNotFoundError):
            parse_document(tmp_path / "nonexistent.md")

    def test_missing_file_is_a_file_not_found_error(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_document(tmp_path / "nonexistent.md")

    def test_raises_read_error_for_directory(self, tmp_path):
        with pytest.raises(DocumentReadError):
            parse_document(tmp_path)

    def test_errors_share_base_class(self, tmp_path):
        with pytest.raises(OpenSpecError):
            parse_document(tmp_path / "nope.md")

    def test_document_is_frozen(self):
        doc = parse_document_string("# T", "/x/openspec/a.md")

        with pytest.raises(Exception):
            doc.title = "other"

    def test_to_dict(self, tmp_path):
        md_file = tmp_path / "a.md"
        md_file.write_text("---\nk: v\n---\nbody")

        data = parse_document(md_file).to_dict()

        assert data["frontmatter"] == {"k": "v"}
        assert data["content"] == "body"
        assert isinstance(data["modified_at"], str)


class TestParseDocumentString:
    def test_without_modified_at(self):
        doc = parse_document_string("hello", "/x/openspec/specs/a/spec.md")

        assert isinstance(doc, Document)
        assert doc.modified_at is None
        assert doc.type == "spec"
        assert doc.to_dict()["modified_at"] is None


class TestSanitizeKey:
    def test_sanitize_key(self):
        assert sanitize_key("Hello World_1-x!") == "helloworld_1-x"
        assert sanitize_key(3) == "3"
