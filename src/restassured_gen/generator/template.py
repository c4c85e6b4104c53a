"""Template facade: turns a RequestDescription into a complete Java test class."""

from restassured_gen.generator.chain import build_chain
from restassured_gen.generator.naming import derive_class_name, derive_method_name
from restassured_gen.request.base import GeneratedUnit, RequestDescription

BASE_IMPORTS = (
    "import io.restassured.RestAssured;",
    "import io.restassured.response.Response;",
    "import org.testng.annotations.Test;",
    "import static io.restassured.RestAssured.given;",
    "import static org.hamcrest.Matchers.*;",
)

SCHEMA_IMPORT = "import static io.restassured.module.jsv.JsonSchemaValidator.matchesJsonSchema;"


def build_imports(desc: RequestDescription) -> list[str]:
    imports = list(BASE_IMPORTS)
    if desc.validate_schema:
        imports.append(SCHEMA_IMPORT)
    return imports


def render_test_method(desc: RequestDescription) -> str:
    return (
        "    @Test\n"
        f"    public void {derive_method_name(desc.method.value)}() {{\n"
        f"{build_chain(desc)}"
        "    }\n"
    )


def render_class(class_name: str, imports: list[str], method: str) -> str:
    return "\n".join(imports) + f"\n\npublic class {class_name} {{\n\n{method}}}\n"


def generate(desc: RequestDescription) -> GeneratedUnit:
    """Generate the Java test class for ``desc``.

    Pure function: the same description always produces the same unit.
    """
    class_name = derive_class_name(desc.endpoint)
    source = render_class(class_name, build_imports(desc), render_test_method(desc))
    return GeneratedUnit(class_name=class_name, file_name=f"{class_name}.java", source_text=source)
