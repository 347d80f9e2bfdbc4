from __future__ import annotations

import pytest
from conftest import RecordingLoader
from less_toolkit.errors import CircularIncludeError, ResourceNotFoundError
from less_toolkit.includes import expand_includes, include_scope, load_with_includes


def test_include_scope_pushes_and_restores() -> None:
    stack = ["main.less"]
    with include_scope(stack, "vars.less"):
        assert stack == ["main.less", "vars.less"]
    assert stack == ["main.less"]


def test_include_scope_restores_on_failure() -> None:
    stack = ["main.less"]
    with pytest.raises(RuntimeError), include_scope(stack, "vars.less"):
        stack.append("leaked.less")
        raise RuntimeError
    assert stack == ["main.less"]


def test_include_scope_normalizes_separators() -> None:
    stack = ["lib/a.less"]
    with pytest.raises(CircularIncludeError):
        with include_scope(stack, "lib\\a.less"):
            pass


def test_nested_includes_are_inlined() -> None:
    loader = RecordingLoader(
        {
            "a.less": '@import "b.less";\n.a { color: @b; }',
            "b.less": "@import 'c';\n@b: red;",
            "c.less": "@c: blue;",
        }
    )
    stack: list[str] = []

    text = load_with_includes(loader, "a.less", [""], stack, "UTF-8")

    assert text == "@c: blue;\n@b: red;\n.a { color: @b; }"
    assert stack == []
    assert loader.stack_depths == [1, 2, 3]


def test_circular_include_fails_fast() -> None:
    loader = RecordingLoader(
        {
            "a.less": '@import "b.less";',
            "b.less": '@import "a.less";',
        }
    )
    stack: list[str] = []

    with pytest.raises(CircularIncludeError) as excinfo:
        load_with_includes(loader, "a.less", [""], stack, "UTF-8")

    assert excinfo.value.resource == "a.less"
    assert excinfo.value.include_stack == ["a.less", "b.less"]
    assert loader.load_calls == ["a.less", "b.less"]
    assert stack == []


def test_self_include_is_circular() -> None:
    loader = RecordingLoader({"a.less": '@include "a.less";'})
    with pytest.raises(CircularIncludeError, match="a.less -> a.less"):
        load_with_includes(loader, "a.less", [""], [], "UTF-8")


def test_repeated_sibling_import_is_inlined_once() -> None:
    loader = RecordingLoader({"mixins.less": ".m() {}"})
    text = expand_includes(
        '@import "mixins.less";\n@import "mixins";', loader, [""], [], "UTF-8"
    )
    assert text == ".m() {}\n"
    assert loader.load_calls == ["mixins.less"]


def test_multiple_option_inlines_every_time() -> None:
    loader = RecordingLoader({"mixins.less": ".m() {}"})
    text = expand_includes(
        '@import "mixins.less";\n@import (multiple) "mixins.less";', loader, [""], [], "UTF-8"
    )
    assert text == ".m() {}\n.m() {}"


def test_shared_import_in_diamond_is_inlined_once() -> None:
    loader = RecordingLoader(
        {
            "b.less": '@import "d.less";\n.b {}',
            "c.less": '@import "d.less";\n.c {}',
            "d.less": ".d { color: red; }",
        }
    )
    stack = ["main.less"]

    text = expand_includes(
        '@import "b.less";\n@import "c.less";', loader, [""], stack, "UTF-8"
    )

    assert text == ".d { color: red; }\n.b {}\n\n.c {}"
    assert loader.load_calls == ["b.less", "d.less", "c.less"]
    assert stack == ["main.less"]


@pytest.mark.parametrize(
    "source",
    [
        '// @import "old.less";\n.a {}',
        '/* @import "gone.less"; */\n.a {}',
        '/*\n  @import "gone.less";\n*/\n.a {}',
        '.a { content: "@import \'gone.less\';"; }',
    ],
)
def test_commented_and_quoted_imports_are_ignored(source: str) -> None:
    loader = RecordingLoader()
    assert expand_includes(source, loader, [""], [], "UTF-8") == source
    assert loader.load_calls == []


def test_import_after_comment_is_inlined() -> None:
    loader = RecordingLoader({"vars.less": "@v: 1;"})
    text = expand_includes(
        '// vendor styles\n@import "vars";\n', loader, [""], [], "UTF-8"
    )
    assert text == "// vendor styles\n@v: 1;\n"


def test_optional_import_of_missing_file_is_dropped() -> None:
    loader = RecordingLoader({"theme.less": "@t: 1;"})
    text = expand_includes(
        '@import (optional) "custom.less";\n@import (optional, reference) "x.less";\n'
        '@import (optional) "theme";',
        loader,
        [""],
        [],
        "UTF-8",
    )
    assert text == '\n@import (optional, reference) "x.less";\n@t: 1;'
    assert loader.exists_calls == ["custom.less", "theme.less"]
    assert loader.load_calls == ["theme.less"]


def test_less_option_inlines_css_target() -> None:
    loader = RecordingLoader({"grid.css": ".grid {}"})
    assert expand_includes('@import (less) "grid.css";', loader, [""], [], "UTF-8") == ".grid {}"


def test_inline_option_skips_nested_expansion() -> None:
    loader = RecordingLoader({"raw.less": '@import "never.less";\n.raw {}'})
    text = expand_includes('@import (inline) "raw.less";', loader, [""], [], "UTF-8")
    assert text == '@import "never.less";\n.raw {}'
    assert loader.load_calls == ["raw.less"]


@pytest.mark.parametrize(
    "directive",
    [
        '@import "reset.css";',
        '@import url("http://fonts.test/font.css");',
        '@import (css) "theme.less";',
        '@import "print.less" print;',
        '@import (reference) "mixins.less";',
    ],
)
def test_css_and_media_imports_are_kept(directive: str) -> None:
    loader = RecordingLoader()
    assert expand_includes(directive, loader, [""], [], "UTF-8") == directive
    assert loader.load_calls == []


def test_url_import_is_inlined() -> None:
    loader = RecordingLoader({"theme.less": "@t: 1;"})
    assert expand_includes("@import url('theme.less');", loader, [""], [], "UTF-8") == "@t: 1;"


@pytest.mark.parametrize("directive", ["@import url(theme.less);", "@import url( theme );"])
def test_unquoted_url_import_is_inlined(directive: str) -> None:
    loader = RecordingLoader({"theme.less": "@t: 1;"})
    assert expand_includes(directive, loader, [""], [], "UTF-8") == "@t: 1;"
    assert loader.load_calls == ["theme.less"]


def test_missing_include_reports_chain() -> None:
    loader = RecordingLoader({"a.less": '@import "gone.less";'})
    with pytest.raises(ResourceNotFoundError) as excinfo:
        load_with_includes(loader, "a.less", ["lib/"], [], "UTF-8")
    assert excinfo.value.resource == "gone.less"
    assert excinfo.value.include_stack == ["a.less", "gone.less"]
