"""Downloads the jars a generated RestAssured test needs on its classpath."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import httpx

logger = logging.getLogger(__name__)

MAVEN_CENTRAL = "https://repo1.maven.org/maven2"


@dataclass(frozen=True)
class Dependency:
    name: str
    url: str
    filename: str


def maven_jar(name: str, group: str, artifact: str, version: str) -> Dependency:
    filename = f"{artifact}-{version}.jar"
    url = f"{MAVEN_CENTRAL}/{group.replace('.', '/')}/{artifact}/{version}/{filename}"
    return Dependency(name=name, url=url, filename=filename)


DEPENDENCIES = (
    maven_jar("RestAssured", "io.rest-assured", "rest-assured", "5.3.0"),
    maven_jar("RestAssured common", "io.rest-assured", "rest-assured-common", "5.3.0"),
    maven_jar("RestAssured JSON path", "io.rest-assured", "json-path", "5.3.0"),
    maven_jar("RestAssured XML path", "io.rest-assured", "xml-path", "5.3.0"),
    maven_jar("RestAssured JSON schema validator", "io.rest-assured", "json-schema-validator", "5.3.0"),
    maven_jar("Groovy", "org.apache.groovy", "groovy", "4.0.11"),
    maven_jar("Groovy XML", "org.apache.groovy", "groovy-xml", "4.0.11"),
    maven_jar("Groovy JSON", "org.apache.groovy", "groovy-json", "4.0.11"),
    maven_jar("Hamcrest", "org.hamcrest", "hamcrest", "2.2"),
    maven_jar("TestNG", "org.testng", "testng", "7.7.1"),
    maven_jar("JCommander (TestNG dependency)", "com.beust", "jcommander", "1.82"),
    maven_jar("SLF4J API (TestNG dependency)", "org.slf4j", "slf4j-api", "1.7.36"),
    maven_jar("Apache HttpClient", "org.apache.httpcomponents", "httpclient", "4.5.13"),
    maven_jar("Apache HttpCore", "org.apache.httpcomponents", "httpcore", "4.4.16"),
    maven_jar("Apache HttpMime", "org.apache.httpcomponents", "httpmime", "4.5.13"),
    maven_jar("Commons Codec", "commons-codec", "commons-codec", "1.15"),
    maven_jar("Commons Logging", "commons-logging", "commons-logging", "1.2"),
    maven_jar("Commons Lang3", "org.apache.commons", "commons-lang3", "3.12.0"),
    maven_jar("TagSoup", "org.ccil.cowan.tagsoup", "tagsoup", "1.2.1"),
)


@dataclass
class FetchReport:
    downloaded: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


def download_file(client: httpx.Client, url: str, dest: Path) -> None:
    """Stream ``url`` into ``dest``. Nothing is left at ``dest`` on failure."""
    partial = dest.with_name(dest.name + ".part")
    try:
        with client.stream("GET", url) as response:
            response.raise_for_status()
            with partial.open("wb") as f:
                for chunk in response.iter_bytes():
                    f.write(chunk)
        partial.replace(dest)
    finally:
        partial.unlink(missing_ok=True)


def fetch_dependencies(
    libs_dir: Path,
    client: httpx.Client | None = None,
    dependencies: tuple[Dependency, ...] = DEPENDENCIES,
) -> FetchReport:
    """Download every missing dependency jar into ``libs_dir``."""
    libs_dir.mkdir(parents=True, exist_ok=True)
    report = FetchReport()
    owns_client = client is None
    if owns_client:
        client = httpx.Client(follow_redirects=True, timeout=60.0)

    try:
        for dep in dependencies:
            dest = libs_dir / dep.filename
            if dest.exists():
                logger.info("%s already present", dep.name)
                report.skipped.append(dep.name)
                continue
            logger.info("Downloading %s from %s", dep.name, dep.url)
            try:
                download_file(client, dep.url, dest)
            except httpx.HTTPError as e:
                logger.warning("Failed to download %s: %s", dep.name, e)
                report.failed[dep.name] = str(e)
            else:
                report.downloaded.append(dep.name)
    finally:
        if owns_client:
            client.close()
    return report


def build_classpath(libs_dir: Path) -> str:
    """Join every jar in ``libs_dir`` into a classpath string."""
    if not libs_dir.is_dir():
        return ""
    return os.pathsep.join(str(jar) for jar in sorted(libs_dir.glob("*.jar")))
