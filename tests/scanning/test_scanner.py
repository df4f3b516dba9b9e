"""Tests for LocalRepositoryScanner."""

import pytest

from docugit_analyzer.config import AnalysisConfig
from docugit_analyzer.exceptions import InvalidPathError
from docugit_analyzer.scanning.scanner import LocalRepositoryScanner, file_priority


class TestScan:
    """Directory walking and manifest reading."""

    def test_collects_source_files(self, sample_repo):
        scan = LocalRepositoryScanner(sample_repo).scan()
        paths = [f.path for f in scan.files]
        assert set(paths) == {
            "app/api/users/[id]/route.ts",
            "components/UserCard.tsx",
            "lib/users.ts",
        }

    def test_skips_dependency_and_hidden_dirs(self, sample_repo):
        paths = [f.path for f in LocalRepositoryScanner(sample_repo).scan().files]
        assert not any(p.startswith(("node_modules/", ".next/")) for p in paths)

    def test_priority_order(self, sample_repo):
        """API routes first, then components, then libraries."""
        paths = [f.path for f in LocalRepositoryScanner(sample_repo).scan().files]
        assert paths == ["app/api/users/[id]/route.ts", "components/UserCard.tsx", "lib/users.ts"]

    def test_max_files_cap(self, sample_repo):
        scan = LocalRepositoryScanner(sample_repo, AnalysisConfig(max_files=1)).scan()
        assert [f.path for f in scan.files] == ["app/api/users/[id]/route.ts"]
        assert scan.candidates_found == 3

    def test_reads_manifest(self, sample_repo, next_manifest):
        scan = LocalRepositoryScanner(sample_repo).scan()
        assert scan.manifest == next_manifest

    def test_missing_manifest(self, tmp_path):
        (tmp_path / "index.js").write_text("export const a = 1\n")
        scan = LocalRepositoryScanner(tmp_path).scan()
        assert scan.manifest is None
        assert [f.path for f in scan.files] == ["index.js"]

    def test_malformed_manifest_is_ignored(self, tmp_path):
        (tmp_path / "package.json").write_text("{not json")
        assert LocalRepositoryScanner(tmp_path).scan().manifest is None

    def test_oversize_files_are_not_read(self, tmp_path):
        (tmp_path / "big.js").write_text("const x = 1\n" * 200)
        scan = LocalRepositoryScanner(tmp_path, AnalysisConfig(max_file_size_kb=1)).scan()
        big = scan.files[0]
        assert big.content == ""
        assert big.size_bytes == 2400


class TestInvalidRoot:
    def test_missing_directory(self, tmp_path):
        with pytest.raises(InvalidPathError):
            LocalRepositoryScanner(tmp_path / "nope")

    def test_file_instead_of_directory(self, tmp_path):
        target = tmp_path / "a.ts"
        target.write_text("")
        with pytest.raises(InvalidPathError):
            LocalRepositoryScanner(target)


class TestFilePriority:
    @pytest.mark.parametrize(
        "higher, lower",
        [
            ("src/app/api/auth/route.ts", "src/app/page.tsx"),
            ("src/app/page.tsx", "src/components/Nav.tsx"),
            ("components/Nav.tsx", "scripts/seed.ts"),
            ("scripts/seed.ts", "tools/gen.py"),
        ],
    )
    def test_ranking(self, higher, lower):
        assert file_priority(higher) > file_priority(lower)
