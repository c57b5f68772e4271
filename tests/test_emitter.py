"""Tests for resgen.emitter."""

from __future__ import annotations

import inspect
from pathlib import Path
from typing import Dict

import pytest

from resgen.emitter import EmitOptions, HierarchicalEmitter
from resgen.errors import ConfigurationError, NamingCollisionError
from resgen.models import ResourceNode
from resgen.naming import to_container_identifier, to_member_identifier
from resgen.runtime import RFile, RFolder, ResourceNamespace
from tests._fixtures.resource_builder import ResourceDirBuilder, load_generated, tree_from_mapping

_SCENARIO = {
    "logo.png": None,
    "config": {"database.properties": None},
    "templates": {
        "email.html": None,
        "reports": {"invoice.pdf": None},
    },
}

_SCENARIO_MODULE = '''\
from resgen.runtime import RFile, RFolder, ResourceNamespace


class R(ResourceNamespace):
    """Resource accessors mirroring the resource directory. Do not edit."""

    logoPng = RFile('logo.png')

    class Config(ResourceNamespace):
        _self = RFolder('config', 'config')
        databaseProperties = RFile('config/database.properties')

    class Templates(ResourceNamespace):
        _self = RFolder('templates', 'templates')
        emailHtml = RFile('templates/email.html')

        class Reports(ResourceNamespace):
            _self = RFolder('reports', 'templates/reports')
            invoicePdf = RFile('templates/reports/invoice.pdf')
'''


def _nested_classes(container: type) -> Dict[str, type]:
    return {
        name: value
        for name, value in vars(container).items()
        if inspect.isclass(value) and issubclass(value, ResourceNamespace)
    }


def _assert_mirrors(container: type, node: ResourceNode) -> None:
    files = {name: value for name, value in vars(container).items() if isinstance(value, RFile)}
    assert list(files) == [to_member_identifier(leaf.name) for leaf in node.leaves]
    assert [f.resource_path for f in files.values()] == [leaf.relative_path for leaf in node.leaves]

    classes = _nested_classes(container)
    assert list(classes) == [to_container_identifier(name) for name in node.children]
    for (name, child), nested in zip(node.children.items(), classes.values()):
        assert nested._self == RFolder(name, child.relative_path)
        _assert_mirrors(nested, child)


def test_emit_renders_scenario_module() -> None:
    source = HierarchicalEmitter().emit(tree_from_mapping(_SCENARIO))

    assert source == _SCENARIO_MODULE


def test_emitted_module_executes_and_exposes_paths() -> None:
    tree = tree_from_mapping(_SCENARIO)
    R = load_generated(HierarchicalEmitter().emit(tree))

    assert R.logoPng == RFile("logo.png")
    assert R.Config._self.name == "config"
    assert R.Config.databaseProperties.resource_path == "config/database.properties"
    assert R.Templates.emailHtml.resource_path == "templates/email.html"
    assert R.Templates.Reports._self.resource_path == "templates/reports"
    assert R.Templates.Reports.invoicePdf.resource_path == "templates/reports/invoice.pdf"
    _assert_mirrors(R, tree)


def test_emitted_containers_cannot_be_instantiated() -> None:
    R = load_generated(HierarchicalEmitter().emit(tree_from_mapping(_SCENARIO)))

    with pytest.raises(TypeError):
        R()
    with pytest.raises(TypeError):
        R.Templates.Reports()


def test_emit_mirrors_scanned_directory(resource_dir: ResourceDirBuilder) -> None:
    resource_dir.write(
        {
            "img/icons/16/add.png": "",
            "img/icons/32/add.png": "",
            "img/banner.jpg": "",
            "i18n/messages_en.properties": "",
            "i18n/messages_fr.properties": "",
            "VERSION": "1.0",
        }
    )
    resource_dir.mkdir("img/empty")
    tree = resource_dir.build()

    R = load_generated(HierarchicalEmitter().emit(tree))

    _assert_mirrors(R, tree)
    for node in tree.walk():
        for leaf in node.leaves:
            assert RFile(leaf.relative_path).resolve(resource_dir.resources).is_file()
    assert R.Img.Icons._16.addPng.file_name == "add.png"
    assert R.version.resource_path == "VERSION"


def test_emit_is_deterministic(resource_dir: ResourceDirBuilder) -> None:
    resource_dir.write({"b/x.txt": "", "a/y.txt": "", "c.txt": "", "d.txt": ""})
    emitter = HierarchicalEmitter()

    first = emitter.emit(resource_dir.build())
    second = emitter.emit(resource_dir.build())

    assert first == second


def test_emit_empty_tree_produces_empty_container() -> None:
    source = HierarchicalEmitter().emit(ResourceNode())

    R = load_generated(source)
    assert _nested_classes(R) == {}
    assert not [value for value in vars(R).values() if isinstance(value, RFile)]
    assert source.endswith('"""Resource accessors mirroring the resource directory. Do not edit."""\n')


def test_emit_empty_folder_keeps_self_reference() -> None:
    R = load_generated(HierarchicalEmitter().emit(tree_from_mapping({"cache": {}})))

    assert R.Cache._self == RFolder("cache", "cache")


def test_emit_places_header_and_imports_verbatim() -> None:
    options = EmitOptions(
        header="# Generated for package 'app.res'.\n# Do not edit.",
        imports="from resgen.runtime import RFile, RFolder, ResourceNamespace  # noqa",
    )

    source = HierarchicalEmitter().emit(tree_from_mapping({"a.txt": None}), "Res", options)

    assert source.startswith(
        "# Generated for package 'app.res'.\n# Do not edit.\n\n"
        "from resgen.runtime import RFile, RFolder, ResourceNamespace  # noqa\n\n\n"
        "class Res(ResourceNamespace):\n"
    )
    assert load_generated(source, "Res").aTxt == RFile("a.txt")


def test_emit_keeps_header_whitespace() -> None:
    options = EmitOptions(header="\n    # indented banner\n\n")

    source = HierarchicalEmitter().emit(tree_from_mapping({"a.txt": None}), options=options)

    assert source.startswith("\n    # indented banner\n\nfrom resgen.runtime import")
    assert load_generated(source).aTxt == RFile("a.txt")


def test_emit_whitespace_only_names_load(resource_dir: ResourceDirBuilder) -> None:
    resource_dir.write({" ": "x", "a/ /x.txt": "x"})

    R = load_generated(HierarchicalEmitter().emit(resource_dir.build()))

    assert R._20 == RFile(" ")
    assert R.A._20._self == RFolder(" ", "a/ ")
    assert R.A._20.xTxt == RFile("a/ /x.txt")


def test_emit_quotes_unusual_names() -> None:
    tree = tree_from_mapping({"it's \"quoted\".txt": None, "back\\slash": {"ünï.txt": None}})

    R = load_generated(HierarchicalEmitter().emit(tree))

    assert R.itSQuotedTxt.resource_path == "it's \"quoted\".txt"
    assert R.BackSlash._self.name == "back\\slash"
    assert R.BackSlash.nTxt.resource_path == "back\\slash/ünï.txt"


def test_emit_rejects_sibling_collisions_by_default() -> None:
    tree = tree_from_mapping({"reports": {"report-v1.pdf": None, "report_v1.pdf": None}})

    with pytest.raises(NamingCollisionError) as excinfo:
        HierarchicalEmitter().emit(tree)

    error = excinfo.value
    assert error.container == "reports"
    assert error.identifier == "reportV1Pdf"
    assert error.names == ["report-v1.pdf", "report_v1.pdf"]


def test_emit_suffixes_collisions_when_requested() -> None:
    tree = tree_from_mapping({"report-v1.pdf": None, "report_v1.pdf": None, "report.v1.pdf": None})

    source = HierarchicalEmitter().emit(tree, options=EmitOptions(collision_policy="suffix"))
    R = load_generated(source)

    assert R.reportV1Pdf.resource_path == "report-v1.pdf"
    assert R.reportV1Pdf_2.resource_path == "report_v1.pdf"
    assert R.reportV1Pdf_3.resource_path == "report.v1.pdf"


def test_emit_detects_file_and_folder_clash() -> None:
    tree = tree_from_mapping({"1x": None, "1x.": {}})

    with pytest.raises(NamingCollisionError, match="_1x"):
        HierarchicalEmitter().emit(tree)


def test_emit_guards_reserved_names() -> None:
    tree = tree_from_mapping({"r-file": {"inner.txt": None}, "other": {"x.txt": None}})

    with pytest.raises(NamingCollisionError, match="reserved"):
        HierarchicalEmitter().emit(tree)

    R = load_generated(HierarchicalEmitter().emit(tree, options=EmitOptions(collision_policy="suffix")))
    assert R.RFile_2._self.name == "r-file"
    assert R.Other.xTxt == RFile("other/x.txt")


@pytest.mark.parametrize("name", ["", "class", "1R", "my-r", "Ré"])
def test_emit_rejects_invalid_container_name(name: str) -> None:
    with pytest.raises(ConfigurationError):
        HierarchicalEmitter().emit(ResourceNode(), name)


def test_emit_rejects_unknown_collision_policy() -> None:
    with pytest.raises(ConfigurationError, match="collision policy"):
        HierarchicalEmitter().emit(ResourceNode(), options=EmitOptions(collision_policy="ignore"))


def test_templates_dir_overrides_module_layout(tmp_path: Path) -> None:
    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "module.py.j2").write_text(
        "{{ imports }}\n\n\nclass {{ container_name }}(ResourceNamespace):\n"
        "    custom = True\n{% if body %}\n\n{{ body }}\n{% endif %}\n",
        encoding="utf-8",
    )

    source = HierarchicalEmitter(templates).emit(tree_from_mapping({"a.txt": None}))
    R = load_generated(source)

    assert R.custom is True
    assert R.aTxt == RFile("a.txt")
