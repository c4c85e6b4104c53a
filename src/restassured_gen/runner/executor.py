"""Compiles and runs a generated test class with the local JDK.

The generated source is written to a temporary directory, compiled with
``javac`` and run through TestNG's command-line runner. Every command is
passed to :func:`subprocess.run` as an argument list, never through a
shell. TestNG's console output is parsed into an :class:`ExecutionResult`.
"""

import logging
import os
import re
import subprocess
import tempfile
import time
from collections.abc import Callable
from enum import Enum
from pathlib import Path

from pydantic import BaseModel

from restassured_gen.config import Settings, get_settings
from restassured_gen.errors import ToolchainError
from restassured_gen.runner.dependencies import build_classpath

logger = logging.getLogger(__name__)

TESTNG_MAIN = "org.testng.TestNG"

_TOTALS = re.compile(
    r"Total tests run:\s*(\d+),\s*(?:Passes:\s*(\d+),\s*)?Failures:\s*(\d+),\s*Skips:\s*(\d+)"
)
_RESPONSE_STATUS = re.compile(r"Response Status:\s*(\d+)")


class Status(str, Enum):
    PASSED = "PASSED"
    FAILED = "FAILED"
    COMPILATION_FAILED = "COMPILATION_FAILED"
    ERROR = "ERROR"


class RunSummary(BaseModel):
    tests_run: int = 0
    passes: int = 0
    failures: int = 0
    skips: int = 0
    response_status: int | None = None


class ExecutionResult(BaseModel):
    success: bool
    class_name: str
    status: Status
    compilation_errors: str = ""
    execution_errors: str = ""
    output: str = ""
    warnings: str = ""
    execution_time_ms: int = 0
    summary: RunSummary | None = None


class JavaInfo(BaseModel):
    available: bool
    version: str = ""
    error: str = ""


# (class_name, source_text) -> result
Executor = Callable[[str, str], ExecutionResult]


def parse_testng_output(stdout: str) -> RunSummary:
    """Extract the TestNG totals line and the logged response status."""
    summary = RunSummary()
    totals = _TOTALS.search(stdout)
    if totals:
        run, passes, failures, skips = totals.groups()
        summary.tests_run = int(run)
        summary.failures = int(failures)
        summary.skips = int(skips)
        # Older TestNG releases print no "Passes" column
        if passes is None:
            summary.passes = summary.tests_run - summary.failures - summary.skips
        else:
            summary.passes = int(passes)

    statuses = _RESPONSE_STATUS.findall(stdout)
    if statuses:
        summary.response_status = int(statuses[-1])
    return summary


def _invoke(args: list[str]) -> subprocess.CompletedProcess:
    logger.debug("Running %s", args)
    try:
        return subprocess.run(args, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise ToolchainError(f"{args[0]} not found. Please install a JDK.") from e


def check_java(java_bin: str = "java") -> JavaInfo:
    """Report whether a Java runtime is available and its version."""
    try:
        proc = _invoke([java_bin, "-version"])
    except ToolchainError as e:
        return JavaInfo(available=False, error=e.message)
    if proc.returncode != 0:
        return JavaInfo(available=False, error=(proc.stderr or proc.stdout).strip())
    # java -version prints to stderr
    version = (proc.stderr or proc.stdout).strip().splitlines()
    return JavaInfo(available=True, version=version[0] if version else "")


class JavaExecutor:
    """Default execution collaborator: javac + TestNG in a scratch directory."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def execute(self, class_name: str, source: str) -> ExecutionResult:
        logger.info("Starting test execution for %s", class_name)
        self.settings.work_dir.mkdir(parents=True, exist_ok=True)
        try:
            with tempfile.TemporaryDirectory(prefix="restassured-", dir=self.settings.work_dir) as tmpdir:
                result = self._run(class_name, source, Path(tmpdir))
        except ToolchainError as e:
            logger.error("Test execution for %s failed: %s", class_name, e.message)
            return ExecutionResult(
                success=False,
                class_name=class_name,
                status=Status.ERROR,
                execution_errors=e.message,
            )
        logger.info("Test execution for %s complete: %s", class_name, result.status.value)
        return result

    def _run(self, class_name: str, source: str, workdir: Path) -> ExecutionResult:
        src_dir = workdir / "src"
        out_dir = workdir / "classes"
        src_dir.mkdir()
        out_dir.mkdir()
        source_file = src_dir / f"{class_name}.java"
        source_file.write_text(source, encoding="utf-8")

        classpath = build_classpath(self.settings.libs_dir)
        if not classpath:
            logger.warning("No jars found in %s; run fetch-deps first", self.settings.libs_dir)

        compiled = _invoke(
            [self.settings.javac_bin, "-cp", classpath, "-d", str(out_dir), str(source_file)]
        )
        if compiled.returncode != 0:
            return ExecutionResult(
                success=False,
                class_name=class_name,
                status=Status.COMPILATION_FAILED,
                compilation_errors=compiled.stderr or compiled.stdout,
            )

        run_classpath = os.pathsep.join(p for p in (str(out_dir), classpath) if p)
        started = time.monotonic()
        proc = _invoke(
            [self.settings.java_bin, "-cp", run_classpath, TESTNG_MAIN, "-testclass", class_name]
        )
        elapsed_ms = int((time.monotonic() - started) * 1000)

        summary = parse_testng_output(proc.stdout)
        passed = proc.returncode == 0 and summary.failures == 0
        return ExecutionResult(
            success=passed,
            class_name=class_name,
            status=Status.PASSED if passed else Status.FAILED,
            output=proc.stdout,
            execution_errors="" if passed else proc.stderr,
            warnings=proc.stderr if passed else "",
            execution_time_ms=elapsed_ms,
            summary=summary,
        )
