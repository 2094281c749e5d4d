"""Tests for package.json parsing and the lockfile preference."""

from pathlib import Path

import pytest

from depgather.errors import LockfileFormatError
from depgather.parsers import package_json
from depgather.parsers.package_json import declared_dependencies

MANIFEST = {
    "name": "app",
    "dependencies": {"express": "^4.18.2", "shared": "^1.0.0"},
    "devDependencies": {"jest": "~29.0.0"},
    "peerDependencies": {"react": "*"},
    "optionalDependencies": {"shared": "^2.0.0", "fsevents": "2.3.2"},
}


def _pairs(deps):
    return [(d.name, d.version) for d in deps]


class TestDeclaredDependencies:
    def test_later_sections_override(self):
        assert declared_dependencies(MANIFEST) == {
            "express": "^4.18.2",
            "shared": "^2.0.0",
            "jest": "~29.0.0",
            "react": "*",
            "fsevents": "2.3.2",
        }

    def test_missing_sections(self):
        assert declared_dependencies({"name": "empty"}) == {}

    def test_non_object_section(self):
        with pytest.raises(LockfileFormatError):
            declared_dependencies({"dependencies": ["express"]})


class TestParse:
    def test_prefers_sibling_lockfile(self, tmp_path: Path, write_json):
        manifest = write_json(tmp_path / "package.json", MANIFEST)
        write_json(
            tmp_path / "package-lock.json",
            {"lockfileVersion": 3, "packages": {"": {}, "node_modules/express": {"version": "4.18.2"}}},
        )

        assert _pairs(package_json.parse(manifest)) == [("express", "4.18.2")]

    def test_falls_back_to_declared_ranges(self, tmp_path: Path, write_json):
        manifest = write_json(tmp_path / "package.json", MANIFEST)

        assert _pairs(package_json.parse(manifest)) == [
            ("express", "^4.18.2"),
            ("fsevents", "2.3.2"),
            ("jest", "~29.0.0"),
            ("react", "*"),
            ("shared", "^2.0.0"),
        ]

    def test_falls_back_when_lockfile_is_malformed(self, tmp_path: Path, write_json, caplog):
        manifest = write_json(tmp_path / "package.json", {"dependencies": {"express": "^4.18.2"}})
        (tmp_path / "package-lock.json").write_text("{broken", encoding="utf-8")

        with caplog.at_level("WARNING"):
            deps = package_json.parse(manifest)

        assert _pairs(deps) == [("express", "^4.18.2")]
        assert "package-lock.json" in caplog.text

    def test_falls_back_when_lockfile_is_not_utf8(self, tmp_path: Path, write_json, caplog):
        manifest = write_json(tmp_path / "package.json", {"dependencies": {"express": "^4.18.2"}})
        (tmp_path / "package-lock.json").write_bytes(b"\xff\xfe garbage")

        with caplog.at_level("WARNING"):
            deps = package_json.parse(manifest)

        assert _pairs(deps) == [("express", "^4.18.2")]
        assert "not valid UTF-8" in caplog.text

    def test_malformed_manifest_raises(self, tmp_path: Path):
        manifest = tmp_path / "package.json"
        manifest.write_text("not json", encoding="utf-8")

        with pytest.raises(LockfileFormatError):
            package_json.parse(manifest)
