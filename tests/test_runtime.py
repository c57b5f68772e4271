"""Tests for resgen.runtime."""

from __future__ import annotations

from pathlib import Path

import pytest

from resgen.runtime import RFile, RFolder, ResourceNamespace


def test_rfile_exposes_path_metadata() -> None:
    file = RFile("templates/reports/invoice.final.pdf")

    assert file.resource_path == "templates/reports/invoice.final.pdf"
    assert file.resource_path_with_slash == "/templates/reports/invoice.final.pdf"
    assert file.file_name == "invoice.final.pdf"
    assert file.base_name == "invoice.final"
    assert file.extension == "pdf"
    assert file.parent_path == "templates/reports"
    assert str(file) == "templates/reports/invoice.final.pdf"
    assert repr(file) == "RFile('templates/reports/invoice.final.pdf')"


def test_rfile_at_root_without_extension() -> None:
    file = RFile("/LICENSE")

    assert file.resource_path == "LICENSE"
    assert file.parent_path == ""
    assert file.base_name == "LICENSE"
    assert file.extension == ""


def test_rfile_rejects_empty_path() -> None:
    with pytest.raises(ValueError):
        RFile("")
    with pytest.raises(ValueError):
        RFile("/")


def test_rfile_accepts_whitespace_names() -> None:
    file = RFile("docs/ ")

    assert file.file_name == " "
    assert file.parent_path == "docs"


def test_rfile_resolves_against_root(tmp_path: Path) -> None:
    target = tmp_path / "config" / "app.yml"
    target.parent.mkdir()
    target.write_text("debug: true\n", encoding="utf-8")

    resolved = RFile("config/app.yml").resolve(tmp_path)

    assert resolved == target
    assert resolved.read_text(encoding="utf-8") == "debug: true\n"


def test_rfile_equality_and_hash() -> None:
    assert RFile("a/b.txt") == RFile("/a/b.txt")
    assert RFile("a/b.txt") != RFile("a/c.txt")
    assert len({RFile("a/b.txt"), RFile("a/b.txt")}) == 1


def test_rfolder_exposes_name_and_path(tmp_path: Path) -> None:
    folder = RFolder("reports", "templates/reports")

    assert folder.name == "reports"
    assert folder.resource_path == "templates/reports"
    assert str(folder) == "templates/reports"
    assert folder.resolve(tmp_path) == tmp_path / "templates" / "reports"
    assert folder == RFolder("reports", "templates/reports")
    assert repr(folder) == "RFolder('reports', 'templates/reports')"


@pytest.mark.parametrize(("name", "path"), [("", "a"), ("a", "")])
def test_rfolder_rejects_empty_values(name: str, path: str) -> None:
    with pytest.raises(ValueError):
        RFolder(name, path)


def test_rfolder_accepts_whitespace_names() -> None:
    folder = RFolder(" ", "a/ ")

    assert folder.name == " "
    assert repr(folder) == "RFolder(' ', 'a/ ')"


def test_resource_namespace_subclasses_cannot_be_instantiated() -> None:
    class Assets(ResourceNamespace):
        _self = RFolder("assets", "assets")

    with pytest.raises(TypeError, match="Assets"):
        Assets()
    with pytest.raises(TypeError):
        ResourceNamespace()
    assert Assets._self.name == "assets"
