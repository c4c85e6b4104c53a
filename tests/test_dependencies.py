import os

import httpx

from restassured_gen.runner.dependencies import (
    DEPENDENCIES,
    Dependency,
    build_classpath,
    fetch_dependencies,
    maven_jar,
)


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler), follow_redirects=True)


def _serve(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/old/good.jar":
        return httpx.Response(302, headers={"Location": "https://repo.test/good.jar"})
    if request.url.path == "/good.jar":
        return httpx.Response(200, content=b"jar-bytes")
    return httpx.Response(404)


class TestMavenJar:
    def test_url_layout(self):
        dep = maven_jar("TestNG", "org.testng", "testng", "7.7.1")
        assert dep.filename == "testng-7.7.1.jar"
        assert dep.url == "https://repo1.maven.org/maven2/org/testng/testng/7.7.1/testng-7.7.1.jar"

    def test_default_list_has_core_jars(self):
        filenames = {d.filename for d in DEPENDENCIES}
        assert {"rest-assured-5.3.0.jar", "testng-7.7.1.jar", "hamcrest-2.2.jar"} <= filenames


class TestFetchDependencies:
    def test_download_skip_and_fail(self, tmp_path):
        (tmp_path / "existing.jar").write_bytes(b"old")
        deps = (
            Dependency("Good", "https://repo.test/good.jar", "good.jar"),
            Dependency("Bad", "https://repo.test/bad.jar", "bad.jar"),
            Dependency("Existing", "https://repo.test/existing.jar", "existing.jar"),
        )

        with _client(_serve) as client:
            report = fetch_dependencies(tmp_path, client=client, dependencies=deps)

        assert report.downloaded == ["Good"]
        assert report.skipped == ["Existing"]
        assert list(report.failed) == ["Bad"]
        assert report.ok is False
        assert (tmp_path / "good.jar").read_bytes() == b"jar-bytes"
        assert (tmp_path / "existing.jar").read_bytes() == b"old"

    def test_failed_download_leaves_no_file(self, tmp_path):
        deps = (Dependency("Bad", "https://repo.test/bad.jar", "bad.jar"),)
        with _client(_serve) as client:
            fetch_dependencies(tmp_path, client=client, dependencies=deps)
        assert sorted(p.name for p in tmp_path.iterdir()) == []

    def test_redirect_followed(self, tmp_path):
        deps = (Dependency("Moved", "https://repo.test/old/good.jar", "good.jar"),)
        with _client(_serve) as client:
            report = fetch_dependencies(tmp_path, client=client, dependencies=deps)
        assert report.ok is True
        assert (tmp_path / "good.jar").read_bytes() == b"jar-bytes"

    def test_creates_libs_dir(self, tmp_path):
        libs = tmp_path / "nested" / "libs"
        with _client(_serve) as client:
            fetch_dependencies(libs, client=client, dependencies=())
        assert libs.is_dir()


class TestBuildClasspath:
    def test_jars_joined_sorted(self, tmp_path):
        for name in ("b.jar", "a.jar", "notes.txt"):
            (tmp_path / name).write_bytes(b"")
        assert build_classpath(tmp_path) == os.pathsep.join([str(tmp_path / "a.jar"), str(tmp_path / "b.jar")])

    def test_missing_dir(self, tmp_path):
        assert build_classpath(tmp_path / "missing") == ""
