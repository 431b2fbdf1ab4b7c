from __future__ import annotations

import pytest

from axe_scope.errors import InvalidResponseError
from axe_scope.invoker import SCAN_FUNCTION, ScanInvoker, normalize_options
from axe_scope.scope import ScopeManager


def _scope(includes=(), excludes=()) -> ScopeManager:
    scope = ScopeManager()
    scope.include(list(includes))
    scope.exclude(list(excludes))
    return scope


def test_unscoped_command_targets_document(executor) -> None:
    command = ScanInvoker(executor).build_document_command(_scope())
    assert command.target == "document"
    assert command.context is None
    assert command.args == ["axe", None, None]
    assert command.render() == "axe.a11yCheck(document, null, arguments[arguments.length - 1]);"


def test_single_include_command_uses_bare_selector(executor) -> None:
    command = ScanInvoker(executor).build_document_command(_scope(["#main"]))
    assert command.target == "selector"
    assert command.context == "#main"
    assert command.render() == "axe.a11yCheck('#main', null, arguments[arguments.length - 1]);"


def test_single_include_command_strips_quotes(executor) -> None:
    command = ScanInvoker(executor).build_document_command(_scope(["[name='q']"]))
    assert command.context == "[name=q]"
    assert "'[name=q]'" in command.render()


def test_multiple_includes_command_is_structured(executor) -> None:
    command = ScanInvoker(executor).build_document_command(_scope(["#a", "#b"]))
    assert command.target == "structured"
    assert command.context == {"include": [["#a"], ["#b"]], "exclude": []}
    assert command.render() == (
        'axe.a11yCheck({"include": [["#a"], ["#b"]], "exclude": []}, null, '
        "arguments[arguments.length - 1]);"
    )


def test_exclude_with_single_include_is_structured(executor) -> None:
    command = ScanInvoker(executor).build_document_command(_scope(["#a"], ["#b"]))
    assert command.target == "structured"
    assert command.context == {"include": [["#a"]], "exclude": [["#b"]]}


def test_options_are_passed_through(executor) -> None:
    raw = '{"rules": {"color-contrast": {"enabled": false}}}'
    command = ScanInvoker(executor).build_document_command(_scope(), raw)
    assert command.options == {"rules": {"color-contrast": {"enabled": False}}}
    assert command.options_text == raw
    assert raw in command.render()


def test_mapping_options_are_copied() -> None:
    options = {"runOnly": {"type": "tag", "values": ["wcag2a"]}}
    value, text = normalize_options(options)
    assert value == options
    assert value is not options
    assert '"runOnly"' in text


def test_blank_options_mean_engine_defaults() -> None:
    assert normalize_options("  ") == (None, "null")
    assert normalize_options("null") == (None, "null")


def test_invalid_options_string_is_rejected() -> None:
    with pytest.raises(ValueError):
        normalize_options("{rules: nope}")


def test_custom_engine_global(executor) -> None:
    command = ScanInvoker(executor, engine_global="axeLegacy").build_document_command(_scope())
    assert command.args[0] == "axeLegacy"
    assert command.render().startswith("axeLegacy.a11yCheck(")


def test_element_command_ignores_scope(executor) -> None:
    element = object()
    command = ScanInvoker(executor).build_element_command(element, None)
    assert command.target == "element"
    assert command.context is element
    assert command.render() == "axe.a11yCheck(arguments[0], null, arguments[arguments.length - 1]);"


def test_element_command_requires_element(executor) -> None:
    with pytest.raises(ValueError):
        ScanInvoker(executor).build_element_command(None)


@pytest.mark.asyncio
async def test_analyze_document_sends_structured_arguments(executor) -> None:
    invoker = ScanInvoker(executor, timeout=12.5)
    await invoker.analyze_document(_scope(["#main"]), {"iframes": False})

    script, args, timeout = executor.calls[0]
    assert script == SCAN_FUNCTION
    assert args == ["axe", "#main", {"iframes": False}]
    assert timeout == 12.5


@pytest.mark.asyncio
async def test_default_timeout_is_thirty_seconds(executor) -> None:
    await ScanInvoker(executor).analyze_document(_scope())
    await ScanInvoker(executor).analyze_document(_scope())
    assert [call[2] for call in executor.calls] == [30.0, 30.0]


@pytest.mark.asyncio
async def test_analyze_element_passes_handle(executor) -> None:
    element = object()
    await ScanInvoker(executor).analyze_element(element)
    assert executor.calls[0][1] == ["axe", element, None]


@pytest.mark.asyncio
async def test_empty_well_formed_response(executor) -> None:
    result = await ScanInvoker(executor).analyze_document(_scope())
    assert result.violations == ()
    assert result.passes == ()
    assert result.is_clean


@pytest.mark.asyncio
async def test_findings_are_returned_unmodified(make_executor) -> None:
    violation = {"id": "image-alt", "nodes": [{"target": ["img"]}]}
    passed = {"id": "html-has-lang"}
    executor = make_executor({"violations": [violation, violation], "passes": [passed], "url": "x"})

    result = await ScanInvoker(executor).analyze_document(_scope())

    assert result.violations == (violation, violation)
    assert result.passes == (passed,)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        {"passes": []},
        {"violations": []},
        {},
        {"violations": None, "passes": []},
        None,
        [],
        "error",
        {"violations": "abc", "passes": []},
        {"violations": 5, "passes": []},
        {"violations": [], "passes": "x"},
    ],
)
async def test_malformed_response_raises(make_executor, response) -> None:
    executor = make_executor(response)
    # None would be replaced by the fake's default, so force it.
    executor.response = response
    with pytest.raises(InvalidResponseError, match="The response from browser is not valid."):
        await ScanInvoker(executor).analyze_document(_scope())


@pytest.mark.asyncio
async def test_tuple_collections_are_accepted(make_executor) -> None:
    executor = make_executor({"violations": ({"id": "a"},), "passes": ()})
    result = await ScanInvoker(executor).analyze_document(_scope())
    assert result.violations == ({"id": "a"},)
    assert result.passes == ()
