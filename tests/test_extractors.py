"""Tests for the format-specific dependency extractors."""

from pathlib import Path

from code_deps.models import AnalyzerConfig, DependencyType
from code_deps.analysis.dependency_graph import DependencyAnalyzer
from code_deps.scanner import describe_file

from conftest import write_tree


def _analyze(analyzer, workspace: Path, rel: str):
    return analyzer.analyze_dependencies(describe_file(str(workspace / rel), str(workspace)))


# ── Scripts ───────────────────────────────────────────────────

class TestJsExtractor:
    def test_default_import_resolves_sibling_ts(self, analyzer, workspace):
        write_tree(workspace, {
            "main.ts": "import x from './util'\n",
            "util.ts": "export default 1;\n",
        })
        deps = _analyze(analyzer, workspace, "main.ts")
        assert len(deps) == 1
        dep = deps[0]
        assert dep.type == DependencyType.IMPORT
        assert dep.is_external is False
        assert dep.target == str(workspace / "util.ts")
        assert dep.source == str(workspace / "main.ts")
        assert dep.line_numbers == [0]

    def test_import_forms(self, analyzer, workspace):
        write_tree(workspace, {
            "main.js": (
                "import { a, b as c } from './named';\n"
                "import * as ns from './ns';\n"
                "import def, { d } from './mixed';\n"
            ),
        })
        deps = _analyze(analyzer, workspace, "main.js")
        targets = [Path(d.target).name for d in deps]
        assert targets == ["named", "ns", "mixed"]
        assert all(d.type == DependencyType.IMPORT for d in deps)

    def test_side_effect_import_not_matched(self, analyzer, workspace):
        write_tree(workspace, {"main.js": "import './polyfill';\n", "polyfill.js": ""})
        assert _analyze(analyzer, workspace, "main.js") == []

    def test_require_and_dynamic_import(self, analyzer, workspace):
        write_tree(workspace, {
            "main.js": (
                "const cfg = require('./cfg.json');\n"
                "let { x } = require(\"./lib\");\n"
                "const mod = await import('./lazy');\n"
            ),
            "cfg.json": "{}",
            "lib/index.js": "",
        })
        deps = _analyze(analyzer, workspace, "main.js")
        targets = [d.target for d in deps]
        assert str(workspace / "cfg.json") in targets
        assert str(workspace / "lib" / "index.js") in targets
        assert str(workspace / "lazy") in targets

    def test_bare_packages_are_skipped(self, analyzer, workspace):
        write_tree(workspace, {
            "main.js": (
                "import React from 'react';\n"
                "const _ = require('lodash');\n"
                "import x from '../node_modules/pkg/x.js';\n"
            ),
        })
        assert _analyze(analyzer, workspace, "main.js") == []

    def test_whitelisted_external_is_kept(self, workspace):
        write_tree(workspace, {"main.js": "import x from 'https://cdn.example.com/x.js';\n"})
        analyzer = DependencyAnalyzer(AnalyzerConfig(
            workspace_root=str(workspace),
            process_external=["https://cdn.example.com/"],
        ))
        deps = _analyze(analyzer, workspace, "main.js")
        assert len(deps) == 1
        assert deps[0].is_external is True
        assert deps[0].target == "https://cdn.example.com/x.js"

    def test_reference_directive(self, analyzer, workspace):
        write_tree(workspace, {
            "main.ts": '/// <reference path="./types.d.ts" />\n',
            "types.d.ts": "",
        })
        deps = _analyze(analyzer, workspace, "main.ts")
        assert len(deps) == 1
        assert deps[0].type == DependencyType.REFERENCE
        assert deps[0].is_external is False
        assert deps[0].target == str(workspace / "types.d.ts")

    def test_line_numbers_cover_identical_lines(self, analyzer, workspace):
        write_tree(workspace, {
            "main.js": "import a from './a';\n// x\nimport a from './a';\n",
        })
        deps = _analyze(analyzer, workspace, "main.js")
        assert len(deps) == 2
        assert deps[0].line_numbers == [0, 2]
        assert deps[1].line_numbers == [0, 2]

    def test_commented_import_still_matches(self, analyzer, workspace):
        write_tree(workspace, {"main.js": "// import old from './old';\n"})
        deps = _analyze(analyzer, workspace, "main.js")
        assert [Path(d.target).name for d in deps] == ["old"]


# ── Markup ────────────────────────────────────────────────────

class TestHtmlExtractor:
    def test_script_link_img(self, analyzer, workspace):
        write_tree(workspace, {
            "index.html": (
                '<script src="app.js"></script>\n'
                '<link rel="stylesheet" href="/css/site.css">\n'
                '<img src="img/a.png">\n'
            ),
        })
        deps = _analyze(analyzer, workspace, "index.html")
        assert [d.target for d in deps] == [
            str(workspace / "app.js"),
            str(workspace / "css" / "site.css"),
            str(workspace / "img" / "a.png"),
        ]
        assert all(d.type == DependencyType.MARKUP_LINK for d in deps)
        assert [d.line_numbers for d in deps] == [[0], [1], [2]]

    def test_data_and_absolute_urls_skipped(self, analyzer, workspace):
        write_tree(workspace, {
            "index.html": (
                '<img src="data:image/png;base64,AAAA">\n'
                '<script src="https://unpkg.com/vue"></script>\n'
                '<link href="http://example.com/x.css">\n'
            ),
        })
        assert _analyze(analyzer, workspace, "index.html") == []

    def test_relative_markup_link_flags_bare_name_external(self, analyzer, workspace):
        write_tree(workspace, {"index.html": '<script src="app.js"></script>\n'})
        deps = _analyze(analyzer, workspace, "index.html")
        # "app.js" does not start with "." or "/", so the policy calls it external
        assert deps[0].is_external is True


# ── Stylesheets ───────────────────────────────────────────────

class TestCssExtractor:
    def test_import_and_url(self, analyzer, workspace):
        write_tree(workspace, {
            "styles/main.css": (
                '@import "./base.css";\n'
                ".a { background: url('../img/bg.png'); }\n"
            ),
        })
        deps = _analyze(analyzer, workspace, "styles/main.css")
        assert [d.target for d in deps] == [
            str(workspace / "styles" / "base.css"),
            str(workspace / "img" / "bg.png"),
        ]
        assert all(d.type == DependencyType.STYLE_IMPORT for d in deps)
        assert all(d.is_external is False for d in deps)

    def test_import_url_form_matches_twice(self, analyzer, workspace):
        write_tree(workspace, {"a.css": "@import url('./b.css');\n"})
        deps = _analyze(analyzer, workspace, "a.css")
        assert len(deps) == 2
        assert {d.target for d in deps} == {str(workspace / "b.css")}

    def test_skips_data_hash_and_http(self, analyzer, workspace):
        write_tree(workspace, {
            "a.css": (
                "@import 'https://fonts.example.com/f.css';\n"
                ".a { background: url(data:image/png;base64,AAAA); }\n"
                ".b { filter: url(#blur); }\n"
                ".c { background: url(http://example.com/x.png); }\n"
            ),
        })
        assert _analyze(analyzer, workspace, "a.css") == []


# ── Manifests ─────────────────────────────────────────────────

class TestManifestExtractor:
    def test_dependencies(self, analyzer, workspace):
        write_tree(workspace, {"package.json": '{"dependencies": {"lodash": "^4.0.0"}}'})
        deps = _analyze(analyzer, workspace, "package.json")
        assert len(deps) == 1
        dep = deps[0]
        assert dep.type == DependencyType.IMPORT
        assert dep.is_external is True
        assert dep.target == "node_modules/lodash"
        assert dep.line_numbers == []

    def test_all_sections(self, analyzer, workspace):
        write_tree(workspace, {"package.json": (
            '{"dependencies": {"a": "1"}, "devDependencies": {"b": "1"},'
            ' "peerDependencies": {"c": "1"}, "optionalDependencies": {"d": "1"},'
            ' "bundledDependencies": ["e"]}'
        )})
        deps = _analyze(analyzer, workspace, "package.json")
        assert [d.target for d in deps] == [
            "node_modules/a", "node_modules/b", "node_modules/c", "node_modules/d",
        ]

    def test_other_json_ignored(self, analyzer, workspace):
        write_tree(workspace, {"tsconfig.json": '{"dependencies": {"a": "1"}}'})
        assert _analyze(analyzer, workspace, "tsconfig.json") == []

    def test_malformed_manifest_is_logged(self, analyzer, workspace, caplog):
        write_tree(workspace, {"package.json": '{"dependencies": '})
        with caplog.at_level("WARNING", logger="code_deps"):
            assert _analyze(analyzer, workspace, "package.json") == []
        assert "package.json" in caplog.text

    def test_non_object_manifest(self, analyzer, workspace):
        write_tree(workspace, {"package.json": "[1, 2]"})
        assert _analyze(analyzer, workspace, "package.json") == []


# ── Prose ─────────────────────────────────────────────────────

class TestMarkdownExtractor:
    def test_links_and_images(self, analyzer, workspace):
        write_tree(workspace, {
            "README.md": "See [guide](docs/guide.md).\n\n![](img/shot.png)\n",
        })
        deps = _analyze(analyzer, workspace, "README.md")
        assert [d.target for d in deps] == [
            str(workspace / "img" / "shot.png"),
            str(workspace / "docs" / "guide.md"),
        ]
        assert all(d.type == DependencyType.REFERENCE for d in deps)
        assert all(d.is_external is False for d in deps)

    def test_external_url_link_skipped(self, analyzer, workspace):
        write_tree(workspace, {"README.md": "[text](http://example.com)\n"})
        assert _analyze(analyzer, workspace, "README.md") == []

    def test_anchor_and_email_skipped(self, analyzer, workspace):
        write_tree(workspace, {
            "README.md": "[top](#intro) [mail](mailto:me@example.com) [x](team@example.com)\n",
        })
        assert _analyze(analyzer, workspace, "README.md") == []

    def test_image_with_alt_text_matches_both_patterns(self, analyzer, workspace):
        write_tree(workspace, {"README.md": "![logo](logo.png)\n"})
        deps = _analyze(analyzer, workspace, "README.md")
        assert len(deps) == 2
        assert {d.target for d in deps} == {str(workspace / "logo.png")}
