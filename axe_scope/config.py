"""
Default settings for scans.

Values can be overridden per builder through ScanSettings, or for a whole
process through AXE_SCOPE_* environment variables.
"""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

DEFAULT_SCRIPT_TIMEOUT = 30.0
DEFAULT_ENGINE_GLOBAL = "axe"
DEFAULT_AXE_SCRIPT_URL = "https://cdnjs.cloudflare.com/ajax/libs/axe-core/2.6.1/axe.min.js"

ENV_TIMEOUT = "AXE_SCOPE_TIMEOUT"
ENV_ENGINE_GLOBAL = "AXE_SCOPE_ENGINE_GLOBAL"
ENV_SCRIPT_URL = "AXE_SCOPE_SCRIPT_URL"


@dataclass(frozen=True)
class ScanSettings:
    script_timeout: float = DEFAULT_SCRIPT_TIMEOUT
    engine_global: str = DEFAULT_ENGINE_GLOBAL
    script_url: str = DEFAULT_AXE_SCRIPT_URL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ScanSettings":
        env = os.environ if environ is None else environ
        settings = cls()
        raw_timeout = env.get(ENV_TIMEOUT)
        if raw_timeout:
            try:
                settings = replace(settings, script_timeout=float(raw_timeout))
            except ValueError:
                raise ValueError(f"{ENV_TIMEOUT} must be a number of seconds, got {raw_timeout!r}")
        if env.get(ENV_ENGINE_GLOBAL):
            settings = replace(settings, engine_global=env[ENV_ENGINE_GLOBAL])
        if env.get(ENV_SCRIPT_URL):
            settings = replace(settings, script_url=env[ENV_SCRIPT_URL])
        return settings

    def with_overrides(
        self,
        script_timeout: Optional[float] = None,
        engine_global: Optional[str] = None,
        script_url: Optional[str] = None,
    ) -> "ScanSettings":
        changes = {}
        if script_timeout is not None:
            changes["script_timeout"] = script_timeout
        if engine_global:
            changes["engine_global"] = engine_global
        if script_url:
            changes["script_url"] = script_url
        return replace(self, **changes) if changes else self
