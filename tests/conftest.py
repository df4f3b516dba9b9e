"""Shared test fixtures for docugit-analyzer tests."""

import json

import pytest

from docugit_analyzer.scanning.normalizer import TreeSitterNormalizer
from docugit_analyzer.scanning.syntax import ParsedFile, ParseFailure, SourceFile


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


@pytest.fixture(scope="session")
def normalizer():
    """One normalizer (and its compiled grammars) for the whole session."""
    return TreeSitterNormalizer()


@pytest.fixture
def parse(normalizer):
    """Parse a snippet and fail the test if it does not parse cleanly."""

    def _parse(code: str, path: str = "src/sample.ts") -> ParsedFile:
        result = normalizer.parse_file(SourceFile(path, code))
        assert not isinstance(result, ParseFailure), result
        return result

    return _parse


@pytest.fixture
def next_manifest():
    """package.json of a small Next.js + Tailwind app."""
    return {
        "name": "demo-app",
        "dependencies": {
            "next": "14.1.0",
            "react": "18.2.0",
            "react-dom": "18.2.0",
            "@prisma/client": "5.9.0",
            "next-auth": "4.24.0",
        },
        "devDependencies": {
            "tailwindcss": "3.4.1",
            "typescript": "5.3.3",
            "jest": "29.7.0",
        },
    }


@pytest.fixture
def sample_repo(tmp_path, next_manifest):
    """A small Next.js checkout on disk."""
    files = {
        "package.json": json.dumps(next_manifest),
        "app/api/users/[id]/route.ts": (
            "export async function GET(req: Request) {\n"
            "  return Response.json({ ok: true })\n"
            "}\n"
            "\n"
            "export async function DELETE(req: Request) {\n"
            "  return new Response(null, { status: 204 })\n"
            "}\n"
        ),
        "components/UserCard.tsx": (
            "export default function UserCard(props) {\n"
            "  return <div className=\"card\">{props.name}</div>\n"
            "}\n"
        ),
        "lib/users.ts": (
            "export async function getUser(id) {\n"
            "  if (!id) return null\n"
            "  return db.find(id)\n"
            "}\n"
        ),
        "node_modules/left-pad/index.js": "module.exports = function leftPad() {}\n",
        ".next/server/page.js": "function Ignored() {}\n",
        "README.md": "# demo\n",
    }
    for rel_path, content in files.items():
        target = tmp_path / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return tmp_path
