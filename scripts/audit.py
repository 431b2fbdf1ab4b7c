#!/usr/bin/env python3
"""
Accessibility audit script.
Loads a page in Chromium with Playwright, injects aXe and writes the findings as JSON.
"""

import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

try:
    from playwright.async_api import async_playwright, Error as PlaywrightError
    from playwright.async_api import TimeoutError as PlaywrightTimeoutError
except ImportError:
    print("ERROR: playwright not installed. Run: python scripts/setup.py")
    raise SystemExit(2)

from axe_scope import AxeBuilder, AxeScopeError, ScanResult, ScanSettings
from axe_scope.invoker import ScanInvoker, normalize_options
from axe_scope.scope import ScopeManager

EXIT_CLEAN = 0
EXIT_VIOLATIONS = 1
EXIT_ERROR = 2

DEFAULT_VIEWPORT = {"width": 1440, "height": 900}


def now_iso() -> str:
    return datetime.now().isoformat()


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def write_json(path: Path, data: Any) -> None:
    ensure_dir(path.parent)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)


def parse_viewport(raw: Optional[str]) -> Dict[str, int]:
    if not raw or "x" not in raw.lower():
        return DEFAULT_VIEWPORT
    width_str, height_str = raw.lower().split("x", 1)
    try:
        return {"width": int(width_str), "height": int(height_str)}
    except ValueError:
        return DEFAULT_VIEWPORT


def load_options(raw: Optional[str]) -> Optional[str]:
    """Accept inline JSON or @path/to/options.json."""
    if not raw:
        return None
    if raw.startswith("@"):
        return Path(raw[1:]).read_text(encoding="utf-8")
    return raw


def summarize(result: ScanResult) -> List[Dict[str, Any]]:
    rows = []
    for finding in result.violations:
        if not isinstance(finding, dict):
            continue
        rows.append({
            "id": finding.get("id"),
            "impact": finding.get("impact"),
            "nodes": len(finding.get("nodes") or []),
            "help": finding.get("help"),
        })
    return rows


def build_settings(args: argparse.Namespace) -> ScanSettings:
    return ScanSettings.from_env().with_overrides(
        script_timeout=args.timeout,
        engine_global=args.engine_global,
        script_url=args.script_url,
    )


def dry_run(args: argparse.Namespace, settings: ScanSettings, options: Optional[str]) -> int:
    invoker = ScanInvoker(executor=None, engine_global=settings.engine_global, timeout=settings.script_timeout)
    if args.element:
        # The selector stands in for the element handle resolved at scan time.
        command = invoker.build_element_command(args.element, options)
    else:
        scope = ScopeManager()
        scope.include(args.include or [])
        scope.exclude(args.exclude or [])
        command = invoker.build_document_command(scope, options)
    print(command.render())
    return EXIT_CLEAN


class AccessibilityAuditor:
    def __init__(
        self,
        url: str,
        settings: ScanSettings,
        includes: Optional[List[str]] = None,
        excludes: Optional[List[str]] = None,
        element: Optional[str] = None,
        options: Optional[str] = None,
        script_path: Optional[str] = None,
        script_url: Optional[str] = None,
        viewport: Optional[Dict[str, int]] = None,
    ):
        self.url = url
        self.settings = settings
        self.includes = includes or []
        self.excludes = excludes or []
        self.element = element
        self.options = options
        self.script_path = script_path
        self.script_url = script_url
        self.viewport = viewport or DEFAULT_VIEWPORT

    async def run(self) -> Dict[str, Any]:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True)
            try:
                context = await browser.new_context(viewport=self.viewport, device_scale_factor=1)
                page = await context.new_page()
                return await self.audit_page(page)
            finally:
                await browser.close()

    async def audit_page(self, page) -> Dict[str, Any]:
        print(f"🌐 Loading {self.url}")
        await page.goto(self.url, wait_until="domcontentloaded", timeout=60000)
        try:
            await page.wait_for_load_state("networkidle", timeout=15000)
        except PlaywrightTimeoutError:
            print("⚠️  Network did not go idle, scanning anyway")

        builder = await AxeBuilder.create(
            page,
            script_path=self.script_path,
            script_url=None if self.script_path else self.script_url,
            settings=self.settings,
        )
        builder.include(self.includes).exclude(self.excludes).with_options(self.options)

        handle = None
        if self.element:
            handle = await page.query_selector(self.element)
            if handle is None:
                raise AxeScopeError(f"No element matches {self.element!r}")

        command = builder.command(handle)
        print(f"🔎 Scanning ({command.target})")
        result = await builder.analyze(handle)

        return {
            "meta": {
                "url": self.url,
                "scanned_at": now_iso(),
                "target": command.target,
                "command": command.render(),
                "includes": self.includes,
                "excludes": self.excludes,
                "element": self.element,
            },
            "summary": {
                "violations": result.violation_count,
                "passes": result.pass_count,
                "rules": summarize(result),
            },
            **result.to_dict(),
        }


async def main_async(args: argparse.Namespace) -> int:
    try:
        settings = build_settings(args)
        options = load_options(args.options)
        # Fail on malformed options before a browser is launched.
        normalize_options(options)
        if args.dry_run:
            return dry_run(args, settings, options)

        auditor = AccessibilityAuditor(
            url=args.url,
            settings=settings,
            includes=args.include,
            excludes=args.exclude,
            element=args.element,
            options=options,
            script_path=args.script_path,
            script_url=args.script_url,
            viewport=parse_viewport(args.viewport),
        )
        report = await auditor.run()
    except (AxeScopeError, PlaywrightError, ValueError, OSError) as exc:
        print(f"❌ Audit failed: {exc}")
        return EXIT_ERROR

    output = Path(args.output)
    write_json(output, report)

    summary = report["summary"]
    if summary["violations"]:
        print(f"\n❌ {summary['violations']} violations, {summary['passes']} passes")
        for row in summary["rules"]:
            print(f"   - {row['id']} [{row['impact']}] x{row['nodes']}: {row['help']}")
    else:
        print(f"\n✅ No violations ({summary['passes']} passes)")
    print(f"Report: {output}")
    return EXIT_VIOLATIONS if summary["violations"] else EXIT_CLEAN


def main() -> None:
    parser = argparse.ArgumentParser(description="Run an aXe accessibility scan against a web page")
    parser.add_argument("url", nargs="?", help="Page URL to scan")
    parser.add_argument("--output", "-o", default="./axe-results.json", help="Output JSON file")
    parser.add_argument("--include", "-i", action="append", help="CSS selector to include (repeatable)")
    parser.add_argument("--exclude", "-x", action="append", help="CSS selector to exclude (repeatable)")
    parser.add_argument("--element", help="Scan only the first element matching this selector")
    parser.add_argument("--options", help="aXe options as JSON, or @file.json")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--script-path", help="Local axe.min.js to inject")
    source.add_argument("--script-url", help="URL of axe.min.js to download and inject")
    parser.add_argument("--engine-global", help="Global name the engine registers (default: axe)")
    parser.add_argument("--timeout", type=float, help="Scan timeout in seconds (default: 30)")
    parser.add_argument("--viewport", help="Viewport size, e.g. 1440x900")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the scan call for the given selectors or --element and exit",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args()
    if not args.url and not args.dry_run:
        parser.error("url is required unless --dry-run is given")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(asyncio.run(main_async(args)))


if __name__ == "__main__":
    main()
