"""
axe_scope - run aXe accessibility scans in Playwright pages.

Public API:
    - AxeBuilder: Fluent scan configuration and execution
    - ScanResult: Immutable violations and passes
    - ScanSettings: Timeout, engine global and script URL
"""

from .builder import AxeBuilder
from .config import ScanSettings
from .errors import (
    AxeScopeError,
    ExecutionTimeoutError,
    InvalidConstructionError,
    InvalidResponseError,
    ScriptDownloadError,
)
from .invoker import ScanCommand, ScanInvoker
from .results import ResultExtractor, ScanResult
from .scope import ScopeDescriptor, ScopeKind, ScopeManager
from .selector_set import SelectorSet

__all__ = [
    'AxeBuilder',
    'AxeScopeError',
    'ExecutionTimeoutError',
    'InvalidConstructionError',
    'InvalidResponseError',
    'ResultExtractor',
    'ScanCommand',
    'ScanInvoker',
    'ScanResult',
    'ScanSettings',
    'ScopeDescriptor',
    'ScopeKind',
    'ScopeManager',
    'ScriptDownloadError',
    'SelectorSet',
]

__version__ = '0.1.0'
