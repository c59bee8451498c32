"""Acceptance harness for generated applications.

Quick usage::

    from src.harness import AcceptanceSuite

    suite = AcceptanceSuite("/path/to/vdom-app")
    results = await suite.run()
    assert suite.succeeded
"""

from src.harness.app_paths import AppPathData, get_app_path_data
from src.harness.checks import CheckFailure, CheckResult, CheckStatus
from src.harness.suite import AcceptanceSuite

__all__ = [
    "AcceptanceSuite",
    "AppPathData",
    "CheckFailure",
    "CheckResult",
    "CheckStatus",
    "get_app_path_data",
]
