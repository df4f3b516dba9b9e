"""End-to-end tests for AnalysisEngine."""

from docugit_analyzer.analysis.engine import AnalysisEngine
from docugit_analyzer.analysis.models import ComponentKind, HttpMethod
from docugit_analyzer.config import AnalysisConfig
from docugit_analyzer.scanning.syntax import SourceFile

ROUTE = SourceFile(
    "app/api/users/[id]/route.ts",
    "export async function GET(req: Request) {\n"
    "  const id = req.url ? req.url : null\n"
    "  return Response.json({ id })\n"
    "}\n",
)
CARD = SourceFile(
    "components/UserCard.tsx",
    "export default function UserCard(props) {\n  return <div>{props.name}</div>\n}\n",
)
UTIL = SourceFile("lib/format.js", "export const format = (s) => s && s.trim()\n")
BROKEN = SourceFile("lib/broken.ts", "export function (\n")
OTHER = SourceFile("scripts/seed.py", "print('seed')\n")


class TestRun:
    """One full pipeline run."""

    def test_result_shape(self, next_manifest):
        result = AnalysisEngine().run([ROUTE, CARD, UTIL], next_manifest)
        assert [f.path for f in result.source_files] == [ROUTE.path, CARD.path, UTIL.path]
        assert result.failed_files == ()
        assert result.metrics.total_files == 3
        assert result.metrics.total_functions == 3
        # GET 2, UserCard 1, format 2
        assert result.metrics.average_complexity == 1.67

    def test_components_and_endpoints(self):
        result = AnalysisEngine().run([ROUTE, CARD, UTIL])
        endpoints = result.api_endpoints
        assert len(endpoints) == 1
        assert endpoints[0].http_method is HttpMethod.GET
        assert endpoints[0].route_path == "/api/users/:id"
        assert endpoints[0].line_number == 1
        # Route handlers are capitalized functions too
        assert [(c.name, c.kind) for c in result.components] == [
            ("GET", ComponentKind.FUNCTIONAL),
            ("UserCard", ComponentKind.FUNCTIONAL),
        ]
        assert result.metrics.total_components == 2
        assert result.metrics.total_api_endpoints == 1

    def test_failures_and_skips(self):
        """Broken files are reported, other languages are left out entirely."""
        result = AnalysisEngine().run([UTIL, BROKEN, OTHER])
        assert [f.path for f in result.source_files] == [UTIL.path]
        assert [f.path for f in result.failed_files] == [BROKEN.path]
        assert result.metrics.language_breakdown == {"javascript": 1}

    def test_empty_input(self):
        result = AnalysisEngine().run([])
        assert result.metrics.total_files == 0
        assert result.metrics.average_complexity == 0
        assert result.technologies == ()

    def test_parallel_run_matches_sequential(self, next_manifest):
        files = [ROUTE, CARD, UTIL, BROKEN] * 4
        sequential = AnalysisEngine(AnalysisConfig(parallel_threshold=100)).run(files, next_manifest)
        pooled = AnalysisEngine(AnalysisConfig(parallel_threshold=2, workers=3)).run(
            files, next_manifest
        )
        assert pooled == sequential

    def test_engine_is_reusable(self):
        engine = AnalysisEngine()
        assert engine.run([CARD]) == engine.run([CARD])


class TestSerialization:
    def test_to_dict_contract(self, next_manifest):
        data = AnalysisEngine().run([ROUTE, CARD], next_manifest).to_dict()
        assert set(data) == {
            "metrics",
            "dependencies",
            "technologies",
            "architecture",
            "apiEndpoints",
            "components",
            "sourceFiles",
            "failedFiles",
        }
        assert data["metrics"]["totalAPIEndpoints"] == 1
        assert data["apiEndpoints"][0] == {
            "httpMethod": "GET",
            "routePath": "/api/users/:id",
            "sourceFile": ROUTE.path,
            "lineNumber": 1,
        }
        assert data["components"][1] == {
            "name": "UserCard",
            "kind": "functional",
            "sourceFile": CARD.path,
        }
        assert data["technologies"] == ["TypeScript", "React", "Next.js", "Tailwind CSS"]
