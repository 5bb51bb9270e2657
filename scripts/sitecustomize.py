"""Start coverage in Python subprocesses launched from ./scripts.

Tests run render-deployment-comment.py and post-deployment-summary.py via
sys.executable, so the child process needs its own coverage hook. Python
imports `sitecustomize` at startup and `sys.path[0]` is this directory when a
script here is the entrypoint.

Only active when COVERAGE_PROCESS_START is set by the test runner.
"""

import os


def _maybe_start_coverage() -> None:
    if not os.environ.get("COVERAGE_PROCESS_START"):
        return
    try:
        import coverage
    except ImportError:
        return
    coverage.process_startup()


_maybe_start_coverage()
