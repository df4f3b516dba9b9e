"""Tests for repository-level aggregation."""

from docugit_analyzer.analysis.aggregator import RepositoryAggregator
from docugit_analyzer.analysis.models import ArchitectureInfo
from docugit_analyzer.config import CategoryPatterns
from docugit_analyzer.scanning.languages import Language
from docugit_analyzer.scanning.syntax import FunctionRecord, ParsedFile


def _file(path, language, *complexities, lines=10):
    functions = tuple(
        FunctionRecord(name=f"f{i}", parameters=(), line_start=1, line_end=2, complexity=c)
        for i, c in enumerate(complexities)
    )
    return ParsedFile(path=path, language=language, lines_of_code=lines, functions=functions)


class TestCategorize:
    """Dependency bucketing by substring."""

    def test_next_and_tailwind(self):
        """The canonical scenario: next is a framework, tailwindcss a UI library."""
        manifest = {"dependencies": {"next": "14.0.0", "tailwindcss": "3.0.0"}}
        report = RepositoryAggregator().dependency_report(manifest)
        assert "next" in report.categorization.frameworks
        assert "tailwindcss" in report.categorization.ui_libraries
        assert report.categorization.databases == ()

    def test_case_insensitive(self):
        cats = RepositoryAggregator().categorize(["Mongoose", "@MUI/material"])
        assert cats.databases == ("Mongoose",)
        assert cats.ui_libraries == ("@MUI/material",)

    def test_name_in_several_buckets(self):
        """Pattern matching is not exclusive."""
        cats = RepositoryAggregator().categorize(["next-auth", "@supabase/auth-helpers-nextjs"])
        assert cats.frameworks == ("next-auth", "@supabase/auth-helpers-nextjs")
        assert cats.databases == ("@supabase/auth-helpers-nextjs",)

    def test_duplicates_collapse(self):
        cats = RepositoryAggregator().categorize(["react", "react"])
        assert cats.frameworks == ("react",)

    def test_injected_patterns(self):
        patterns = CategoryPatterns(framework_patterns=("remix",))
        cats = RepositoryAggregator(patterns).categorize(["@remix-run/node", "next"])
        assert cats.frameworks == ("@remix-run/node",)


class TestDependencyReport:
    def test_production_then_development(self, next_manifest):
        report = RepositoryAggregator().dependency_report(next_manifest)
        assert report.all[:2] == ("next", "react")
        assert report.all[-1] == "jest"
        assert report.total_count == 8
        assert report.production["next"] == "14.1.0"
        assert report.development["typescript"] == "5.3.3"

    def test_missing_manifest(self):
        report = RepositoryAggregator().dependency_report(None)
        assert report.all == ()
        assert report.total_count == 0
        assert report.categorization.frameworks == ()

    def test_malformed_sections_ignored(self):
        report = RepositoryAggregator().dependency_report({"dependencies": ["react"]})
        assert report.all == ()

    def test_to_dict_keys(self, next_manifest):
        data = RepositoryAggregator().dependency_report(next_manifest).to_dict()
        assert data["frameworks"][0] == "next"
        assert data["uiLibraries"] == ["tailwindcss"]
        assert data["databases"] == ["@prisma/client"]
        assert data["totalCount"] == 8


class TestMetrics:
    """Repository totals."""

    def test_average_complexity(self):
        files = [
            _file("a.ts", Language.TYPESCRIPT, 2, 3),
            _file("b.js", Language.JAVASCRIPT, 1),
            _file("c.js", Language.JAVASCRIPT),
        ]
        metrics = RepositoryAggregator.metrics(files, component_count=2, endpoint_count=1)
        assert metrics.total_files == 3
        assert metrics.total_functions == 3
        assert metrics.total_lines == 30
        assert metrics.average_complexity == 2.0
        assert metrics.language_breakdown == {"typescript": 1, "javascript": 2}
        assert (metrics.total_components, metrics.total_api_endpoints) == (2, 1)

    def test_average_is_rounded(self):
        files = [_file("a.js", Language.JAVASCRIPT, 1), _file("b.js", Language.JAVASCRIPT, 1, 1)]
        files.append(_file("c.js", Language.JAVASCRIPT, 1, 1, 1, 1, 1))
        # 8 / 3
        assert RepositoryAggregator.metrics(files, 0, 0).average_complexity == 2.67

    def test_no_files_averages_zero(self):
        metrics = RepositoryAggregator.metrics([], 0, 0)
        assert metrics.average_complexity == 0
        assert metrics.total_files == 0
        assert metrics.language_breakdown == {}


class TestTechnologies:
    def test_languages_then_dependencies(self, next_manifest):
        aggregator = RepositoryAggregator()
        files = [_file("a.tsx", Language.TSX), _file("b.js", Language.JAVASCRIPT)]
        names = aggregator.dependency_report(next_manifest).all
        assert aggregator.technologies(files, names) == (
            "TypeScript",
            "JavaScript",
            "React",
            "Next.js",
            "Tailwind CSS",
        )

    def test_no_files_no_deps(self):
        assert RepositoryAggregator().technologies([], ()) == ()


class TestArchitecture:
    """Framework, language and tooling guesses."""

    def test_next_app(self, next_manifest):
        aggregator = RepositoryAggregator()
        deps = aggregator.dependency_report(next_manifest)
        arch = aggregator.architecture([_file("a.ts", Language.TYPESCRIPT)], deps)
        assert arch == ArchitectureInfo(
            type="Next.js App",
            framework="Next.js",
            language="TypeScript",
            database="@prisma/client",
            authentication="NextAuth",
            styling="Tailwind CSS",
            testing="Jest",
        )

    def test_express_api(self):
        aggregator = RepositoryAggregator()
        manifest = {
            "dependencies": {"express": "4.18.0", "mongoose": "8.0.0"},
            "devDependencies": {"vitest": "1.0.0"},
        }
        deps = aggregator.dependency_report(manifest)
        arch = aggregator.architecture([_file("server.js", Language.JAVASCRIPT)], deps)
        assert arch.type == "Web Application"
        assert arch.framework == "Express"
        assert arch.language == "JavaScript"
        assert arch.database == "mongoose"
        assert arch.testing == "Vitest"
        assert arch.authentication is None

    def test_empty_manifest_defaults(self):
        aggregator = RepositoryAggregator()
        arch = aggregator.architecture([], aggregator.dependency_report({}))
        assert arch == ArchitectureInfo()


class TestAggregate:
    def test_combines_everything(self, next_manifest):
        files = [_file("src/a.ts", Language.TYPESCRIPT, 3)]
        report = RepositoryAggregator().aggregate(files, next_manifest)
        assert report.metrics.average_complexity == 3.0
        assert report.dependencies.total_count == 8
        assert report.technologies[0] == "TypeScript"
        assert report.architecture.framework == "Next.js"

    def test_without_manifest(self):
        report = RepositoryAggregator().aggregate([])
        assert report.dependencies.total_count == 0
        assert report.technologies == ()
        assert report.architecture.framework == "Unknown"
