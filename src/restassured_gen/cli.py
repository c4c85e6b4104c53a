"""CLI entry point for restassured-gen."""

import json
import logging
from pathlib import Path

import click

from restassured_gen import __version__
from restassured_gen.config import get_settings
from restassured_gen.errors import DependencyError, RestAssuredGenError
from restassured_gen.generator.template import generate
from restassured_gen.generator.validator import validate_units
from restassured_gen.request.base import RequestDescription
from restassured_gen.request.detect import detect_format
from restassured_gen.request.loader import load_requests
from restassured_gen.request.postman import parse_postman
from restassured_gen.runner.dependencies import DEPENDENCIES, fetch_dependencies
from restassured_gen.runner.executor import JavaExecutor, check_java

FORMATS = ["auto", "request", "postman"]


def _fail(error: RestAssuredGenError) -> click.ClickException:
    exc = click.ClickException(error.message)
    exc.exit_code = error.exit_code
    return exc


def _load(file_path: Path, fmt: str, expected_status: int) -> list[RequestDescription]:
    """Load request descriptions based on format."""
    if fmt == "auto":
        fmt = detect_format(file_path)

    try:
        if fmt == "postman":
            return parse_postman(file_path, expected_status=expected_status)
        return load_requests(file_path)
    except RestAssuredGenError as e:
        raise _fail(e) from e


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.version_option(__version__, prog_name="restassured-gen")
def main(verbose: bool):
    """RestAssured test generator: render HTTP request descriptions as Java tests."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command("generate")
@click.argument("request_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(file_okay=False, path_type=Path), help="Output directory for generated Java files.")
@click.option("--format", "fmt", default="auto", type=click.Choice(FORMATS), help="Input format.")
@click.option("--expected-status", type=int, default=None, help="Expected status for imported Postman requests.")
@click.option("--check/--no-check", default=True, help="Check generated sources for structural errors.")
@click.option("--append", is_flag=True, help="Keep existing files instead of overwriting them.")
def generate_cmd(request_path: Path, output: Path, fmt: str, expected_status: int | None, check: bool, append: bool):
    """Generate RestAssured test classes from a request file or Postman collection."""
    expected_status = expected_status or get_settings().default_expected_status
    click.echo(f"Reading {request_path} (format: {fmt})...")
    requests = _load(request_path, fmt, expected_status)
    click.echo(f"Found {len(requests)} requests.")

    units = {}
    for desc in requests:
        unit = generate(desc)
        if unit.file_name in units:
            click.echo(f"  Skipping {desc.method.value} {desc.endpoint}: {unit.file_name} already generated")
            continue
        units[unit.file_name] = unit

    if check:
        errors = validate_units(units.values())
        if errors:
            for fname, err in errors.items():
                click.echo(f"  {fname}: {err}", err=True)
            raise click.ClickException("Generated code failed structural validation")

    output.mkdir(parents=True, exist_ok=True)
    written = 0
    for unit in units.values():
        file_path = output / unit.file_name
        if append and file_path.exists():
            click.echo(f"  Skipped {file_path} (exists)")
            continue
        file_path.write_text(unit.source_text, encoding="utf-8")
        click.echo(f"  Created {file_path}")
        written += 1

    click.echo(f"Generated {written} files in {output}")


@main.command("execute")
@click.argument("request_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--format", "fmt", default="auto", type=click.Choice(FORMATS), help="Input format.")
@click.option("--expected-status", type=int, default=None, help="Expected status for imported Postman requests.")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON.")
def execute_cmd(request_path: Path, fmt: str, expected_status: int | None, as_json: bool):
    """Generate and run tests with the local JDK."""
    settings = get_settings()
    requests = _load(request_path, fmt, expected_status or settings.default_expected_status)
    executor = JavaExecutor(settings)

    results = []
    for desc in requests:
        unit = generate(desc)
        if not as_json:
            click.echo(f"Running {unit.class_name} ({desc.method.value} {desc.endpoint})...")
        result = executor.execute(unit.class_name, unit.source_text)
        results.append(result)
        if not as_json:
            click.echo(f"  {result.status.value} in {result.execution_time_ms} ms")
            if result.compilation_errors:
                click.echo(result.compilation_errors, err=True)
            if result.execution_errors:
                click.echo(result.execution_errors, err=True)

    if as_json:
        click.echo(json.dumps([r.model_dump(mode="json") for r in results], indent=2))

    failed = [r for r in results if not r.success]
    if failed:
        raise click.ClickException(f"{len(failed)} of {len(results)} tests did not pass")


@main.command("check-java")
def check_java_cmd():
    """Check that a Java runtime is available."""
    info = check_java(get_settings().java_bin)
    if not info.available:
        raise click.ClickException(info.error or "Java not found. Please install JDK.")
    click.echo(info.version)


@main.command("fetch-deps")
@click.option("--libs-dir", type=click.Path(file_okay=False, path_type=Path), default=None, help="Directory for downloaded jars.")
def fetch_deps_cmd(libs_dir: Path | None):
    """Download RestAssured, TestNG and their dependencies from Maven Central."""
    libs_dir = libs_dir or get_settings().libs_dir
    click.echo(f"Downloading {len(DEPENDENCIES)} dependencies into {libs_dir}...")
    report = fetch_dependencies(libs_dir)

    click.echo(f"Downloaded: {len(report.downloaded)}")
    click.echo(f"Skipped: {len(report.skipped)}")
    if not report.ok:
        for name, err in report.failed.items():
            click.echo(f"  {name}: {err}", err=True)
        raise _fail(
            DependencyError(
                f"{len(report.failed)} dependencies failed to download. Download them manually from Maven Central."
            )
        )
    click.echo("All dependencies are ready!")


@main.command("serve")
@click.option("--host", default=None, help="Bind address.")
@click.option("--port", type=int, default=None, help="Bind port.")
def serve_cmd(host: str | None, port: int | None):
    """Run the HTTP service."""
    import uvicorn

    from restassured_gen.server import create_app

    settings = get_settings()
    host = host or settings.host
    port = port or settings.port
    click.echo(f"Serving on http://{host}:{port} (POST /api/generate-test)")
    uvicorn.run(create_app(settings), host=host, port=port, log_level="info")
