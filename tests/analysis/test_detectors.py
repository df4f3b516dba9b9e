"""Tests for component and API route detection."""

import pytest

from docugit_analyzer.analysis.detectors import (
    APIRouteDetector,
    ComponentDetector,
    rewrite_route_segment,
)
from docugit_analyzer.analysis.models import ComponentKind, HttpMethod
from docugit_analyzer.scanning.languages import Language
from docugit_analyzer.scanning.syntax import (
    ClassRecord,
    ExportKind,
    ExportRecord,
    FunctionRecord,
    ParsedFile,
)


def _fn(name):
    return FunctionRecord(name=name, parameters=(), line_start=1, line_end=1)


def _route_file(path, *exports):
    return ParsedFile(path=path, language=Language.TYPESCRIPT, lines_of_code=1, exports=exports)


class TestComponentDetector:
    """Functional and class components."""

    def test_user_card_scenario(self, parse):
        code = "export default function UserCard(props) {\n  return <div>{props.name}</div>\n}\n"
        parsed = parse(code, "components/UserCard.tsx")
        components = ComponentDetector().detect(parsed)
        assert len(components) == 1
        assert components[0].name == "UserCard"
        assert components[0].kind is ComponentKind.FUNCTIONAL
        assert components[0].source_file == "components/UserCard.tsx"

    def test_lowercase_functions_ignored(self):
        parsed = ParsedFile(
            "src/util.js", Language.JAVASCRIPT, 1, functions=(_fn("helper"), _fn("anonymous"))
        )
        assert ComponentDetector().detect(parsed) == []

    def test_capitalized_helper_counts(self):
        """Naming convention only: any capitalized function qualifies."""
        parsed = ParsedFile("src/util.js", Language.JAVASCRIPT, 1, functions=(_fn("Helper"),))
        assert [c.name for c in ComponentDetector().detect(parsed)] == ["Helper"]

    def test_class_components(self, parse):
        code = (
            "class Counter extends React.Component {}\n"
            "class Legacy extends Base { render() { return null } }\n"
            "class Store {}\n"
        )
        components = ComponentDetector().detect(parse(code, "src/Counter.jsx"))
        assert [(c.name, c.kind) for c in components] == [
            ("Counter", ComponentKind.CLASS),
            ("Legacy", ComponentKind.CLASS),
        ]

    def test_functional_before_class(self):
        cls = ClassRecord("Panel", (), (), 1, 1, superclass_name="PureComponent")
        parsed = ParsedFile(
            "src/p.jsx", Language.JSX, 1, functions=(_fn("Header"),), classes=(cls,)
        )
        assert [c.name for c in ComponentDetector().detect(parsed)] == ["Header", "Panel"]

    def test_custom_base_names(self):
        cls = ClassRecord("Widget", (), (), 1, 1, superclass_name="LitElement")
        parsed = ParsedFile("src/w.ts", Language.TYPESCRIPT, 1, classes=(cls,))
        assert ComponentDetector().detect(parsed) == []
        assert len(ComponentDetector(["LitElement"]).detect(parsed)) == 1


class TestRouteSegments:
    @pytest.mark.parametrize(
        "segment, expected",
        [
            ("[id]", ":id"),
            ("[...slug]", ":...slug"),
            ("[[...slug]]", ":...slug"),
            ("[not-closed", "[not-closed"),
            ("users", "users"),
        ],
    )
    def test_rewrite(self, segment, expected):
        """Brackets become a colon; the dots of a catch-all stay in the name."""
        assert rewrite_route_segment(segment) == expected


class TestAPIRouteDetector:
    """App Router route files."""

    @pytest.mark.parametrize(
        "path",
        [
            "app/api/users/route.ts",
            "src/app/api/users/[id]/route.js",
            "/app/api/health/route.tsx",
        ],
    )
    def test_route_files(self, path):
        assert APIRouteDetector().is_route_file(path)

    @pytest.mark.parametrize(
        "path",
        [
            "app/users/route.ts",
            "app/api/users/handler.ts",
            "app/api/users/route.py",
            "lib/api.ts",
        ],
    )
    def test_not_route_files(self, path):
        assert not APIRouteDetector().is_route_file(path)

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("app/api/users/route.ts", "/api/users"),
            ("src/app/api/users/[id]/route.ts", "/api/users/:id"),
            ("app/api/docs/[...slug]/route.ts", "/api/docs/:...slug"),
            ("app/api/route.ts", "/api"),
        ],
    )
    def test_route_path(self, path, expected):
        assert APIRouteDetector().route_path(path) == expected

    def test_endpoints_from_sample_route(self, parse):
        code = (
            "export async function GET(req: Request) {\n"
            "  return Response.json([])\n"
            "}\n"
            "export async function POST(req: Request) {\n"
            "  return Response.json({}, { status: 201 })\n"
            "}\n"
            "export const dynamic = 'force-dynamic'\n"
        )
        parsed = parse(code, "app/api/users/[id]/route.ts")
        endpoints = APIRouteDetector().detect(parsed)
        assert [(e.http_method, e.route_path, e.line_number) for e in endpoints] == [
            (HttpMethod.GET, "/api/users/:id", 1),
            (HttpMethod.POST, "/api/users/:id", 4),
        ]

    def test_reexported_handlers(self):
        parsed = _route_file(
            "app/api/auth/[...nextauth]/route.ts",
            ExportRecord("GET", ExportKind.NAMED, 3),
            ExportRecord("POST", ExportKind.NAMED, 3),
        )
        endpoints = APIRouteDetector().detect(parsed)
        assert {e.http_method for e in endpoints} == {HttpMethod.GET, HttpMethod.POST}
        assert endpoints[0].route_path == "/api/auth/:...nextauth"

    def test_non_method_and_wildcard_exports_ignored(self):
        parsed = _route_file(
            "app/api/users/route.ts",
            ExportRecord("*", ExportKind.WILDCARD, 1),
            ExportRecord("get", ExportKind.NAMED, 2),
            ExportRecord("HEAD", ExportKind.NAMED, 3),
        )
        assert APIRouteDetector().detect(parsed) == []

    def test_non_route_file_yields_nothing(self):
        parsed = _route_file("lib/users.ts", ExportRecord("GET", ExportKind.NAMED, 1))
        assert APIRouteDetector().detect(parsed) == []
