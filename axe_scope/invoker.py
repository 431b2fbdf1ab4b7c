"""
Scan command construction and execution.

Scope and options travel to the page as evaluate() arguments rather than
being spliced into script text, so selectors never need escaping.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple, Union

from .config import DEFAULT_ENGINE_GLOBAL, DEFAULT_SCRIPT_TIMEOUT
from .errors import InvalidResponseError
from .protocols import ScriptExecutor
from .results import ResultExtractor, ScanResult
from .scope import ScopeKind, ScopeManager

logger = logging.getLogger(__name__)

OptionsValue = Union[None, str, Mapping[str, Any]]

INVALID_RESPONSE_MESSAGE = "The response from browser is not valid."

TARGET_DOCUMENT = "document"
TARGET_SELECTOR = "selector"
TARGET_STRUCTURED = "structured"
TARGET_ELEMENT = "element"

# A null context means "the whole document".
SCAN_FUNCTION = """([engineGlobal, context, options]) => new Promise((resolve, reject) => {
    const engine = window[engineGlobal];
    if (!engine || typeof engine.a11yCheck !== 'function') {
        reject(new Error(engineGlobal + '.a11yCheck is not available on this page'));
        return;
    }
    try {
        engine.a11yCheck(context === null ? document : context, options, resolve);
    } catch (err) {
        reject(err);
    }
})"""


def normalize_options(options: OptionsValue) -> Tuple[Any, str]:
    """Return (value passed to the engine, text used when rendering the call)."""
    if options is None:
        return None, "null"
    if isinstance(options, str):
        text = options.strip() or "null"
        try:
            return json.loads(text), text
        except ValueError:
            raise ValueError(f"Scan options must be JSON, got {options!r}")
    value = dict(options)
    return value, json.dumps(value, ensure_ascii=False)


@dataclass(frozen=True)
class ScanCommand:
    script: str
    engine_global: str
    context: Any
    options: Any
    options_text: str
    target: str

    @property
    def args(self) -> list:
        return [self.engine_global, self.context, self.options]

    def render(self) -> str:
        """Equivalent single-line call, as a driver-side async script would spell it."""
        if self.target == TARGET_ELEMENT:
            context_text = "arguments[0]"
        elif self.target == TARGET_SELECTOR:
            context_text = f"'{self.context}'"
        elif self.target == TARGET_STRUCTURED:
            context_text = json.dumps(self.context, ensure_ascii=False)
        else:
            context_text = "document"
        return (
            f"{self.engine_global}.a11yCheck({context_text}, {self.options_text}, "
            "arguments[arguments.length - 1]);"
        )


_TARGET_BY_KIND = {
    ScopeKind.UNSCOPED: TARGET_DOCUMENT,
    ScopeKind.SINGLE_INCLUDE: TARGET_SELECTOR,
    ScopeKind.STRUCTURED: TARGET_STRUCTURED,
}


class ScanInvoker:
    def __init__(
        self,
        executor: ScriptExecutor,
        engine_global: str = DEFAULT_ENGINE_GLOBAL,
        timeout: float = DEFAULT_SCRIPT_TIMEOUT,
        extractor: Optional[ResultExtractor] = None,
    ):
        self.executor = executor
        self.engine_global = engine_global
        self.timeout = timeout
        self.extractor = extractor or ResultExtractor()

    def build_document_command(self, scope: ScopeManager, options: OptionsValue = None) -> ScanCommand:
        descriptor = scope.resolve()
        value, text = normalize_options(options)
        return ScanCommand(
            script=SCAN_FUNCTION,
            engine_global=self.engine_global,
            context=descriptor.payload,
            options=value,
            options_text=text,
            target=_TARGET_BY_KIND[descriptor.kind],
        )

    def build_element_command(self, element: Any, options: OptionsValue = None) -> ScanCommand:
        if element is None:
            raise ValueError("An element handle is required for an element scan")
        value, text = normalize_options(options)
        return ScanCommand(
            script=SCAN_FUNCTION,
            engine_global=self.engine_global,
            context=element,
            options=value,
            options_text=text,
            target=TARGET_ELEMENT,
        )

    async def analyze_document(self, scope: ScopeManager, options: OptionsValue = None) -> ScanResult:
        return await self.execute(self.build_document_command(scope, options))

    async def analyze_element(self, element: Any, options: OptionsValue = None) -> ScanResult:
        # Element scans ignore any configured include/exclude selectors.
        return await self.execute(self.build_element_command(element, options))

    async def execute(self, command: ScanCommand) -> ScanResult:
        """
        Run a command and validate the browser's response.

        A response is accepted only when it is a mapping whose ``violations``
        and ``passes`` are both lists. This is stricter than a plain key
        check: a key holding ``null``, a string or any other non-list value
        counts as missing. Individual finding records are not inspected.

        Raises:
            InvalidResponseError: Same message for either missing collection
        """
        logger.debug("Running scan: %s (timeout %.1fs)", command.render(), self.timeout)
        response = await self.executor.execute(command.script, command.args, self.timeout)

        if not isinstance(response, Mapping):
            raise InvalidResponseError(INVALID_RESPONSE_MESSAGE)

        missing_violations = not isinstance(response.get("violations"), (list, tuple))
        missing_passes = not isinstance(response.get("passes"), (list, tuple))
        if missing_violations:
            raise InvalidResponseError(INVALID_RESPONSE_MESSAGE)
        if missing_passes:
            raise InvalidResponseError(INVALID_RESPONSE_MESSAGE)

        result = self.extractor.extract(response)
        logger.debug("Scan finished: %d violations, %d passes", result.violation_count, result.pass_count)
        return result
