"""Tests for loading resolved-artifact listings."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from depwitness.exceptions import ListingError
from depwitness.listing import listing_from_dict, load_listing


def _doc(**overrides) -> dict:
    doc = {
        "project": {"name": "app", "directory": "app"},
        "scopes": [
            {
                "name": "compileClasspath",
                "artifacts": [{"path": "/c/acme/widget/1.0/h/w.jar", "version": "1.0"}],
            },
            {"name": "api", "resolvable": False},
        ],
        "buildscript_scopes": [
            {"name": "classpath", "artifacts": [{"path": "/c/g/n/2/h/n.jar", "version": 2}]},
        ],
    }
    doc.update(overrides)
    return doc


class TestListingFromDict:
    """Schema handling."""

    def test_parses_scopes_in_order(self, tmp_path: Path) -> None:
        listing = listing_from_dict(_doc(), base_dir=tmp_path)
        assert listing.name == "app"
        assert [s.name for s in listing.all_scopes()] == [
            "compileClasspath", "api", "classpath",
        ]

    def test_relative_directory_resolved_against_base(self, tmp_path: Path) -> None:
        listing = listing_from_dict(_doc(), base_dir=tmp_path)
        assert listing.directory == tmp_path / "app"

    def test_absolute_directory_kept(self, tmp_path: Path) -> None:
        doc = _doc(project={"name": "app", "directory": str(tmp_path)})
        assert listing_from_dict(doc).directory == tmp_path

    def test_resolvable_flag(self, tmp_path: Path) -> None:
        listing = listing_from_dict(_doc(), base_dir=tmp_path)
        assert listing.scopes[0].resolvable is True
        assert listing.scopes[1].resolvable is False
        assert listing.scopes[1].artifacts == ()

    def test_version_coerced_to_string(self, tmp_path: Path) -> None:
        listing = listing_from_dict(_doc(), base_dir=tmp_path)
        assert listing.buildscript_scopes[0].artifacts[0].version == "2"

    def test_missing_project(self) -> None:
        with pytest.raises(ListingError, match="project"):
            listing_from_dict({"scopes": []})

    def test_missing_artifact_path(self) -> None:
        doc = _doc(scopes=[{"name": "c", "artifacts": [{"version": "1"}]}])
        with pytest.raises(ListingError, match=r"scopes\[0\]\.artifacts\[0\]"):
            listing_from_dict(doc)

    def test_bad_resolvable_type(self) -> None:
        doc = _doc(scopes=[{"name": "c", "resolvable": "yes"}])
        with pytest.raises(ListingError):
            listing_from_dict(doc)

    def test_not_a_mapping(self) -> None:
        with pytest.raises(ListingError):
            listing_from_dict(["nope"])


class TestLoadListing:
    """Reading from disk."""

    def test_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "resolved.yaml"
        path.write_text(yaml.safe_dump(_doc()))
        listing = load_listing(path)
        assert listing.directory == tmp_path.resolve() / "app"

    def test_json(self, tmp_path: Path) -> None:
        path = tmp_path / "resolved.json"
        path.write_text(json.dumps(_doc()))
        assert load_listing(path).name == "app"

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "resolved.yml"
        path.write_text("project: [unclosed\n")
        with pytest.raises(ListingError, match="Cannot parse"):
            load_listing(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ListingError, match="Cannot read"):
            load_listing(tmp_path / "absent.yaml")

    def test_non_utf8_file(self, tmp_path: Path) -> None:
        path = tmp_path / "resolved.yaml"
        path.write_bytes(b"\xff\xfe\x00bad")
        with pytest.raises(ListingError, match="Cannot read"):
            load_listing(path)
