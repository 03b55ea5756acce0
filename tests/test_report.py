"""Tests for per-target bundle report data."""

import json
import logging

import pytest

from bundle_insight.config import InsightConfig
from bundle_insight.exceptions import AssetPathError, ManifestError, UnnamedBundleError
from bundle_insight.visualization.report import (
    REPORT_ENV_VAR,
    Asset,
    Bundle,
    build_bundle_data,
    build_target_reports,
    bundle_node,
    group_bundles_by_target,
    load_manifest,
    reports_enabled,
)

ROOT = "/project"


def make_bundle(name, target="default", size=0, assets=()):
    return Bundle(name=name, target=target, size=size, assets=tuple(assets))


class TestBundleNode:
    def test_root_labelled_and_weighted_by_bundle(self):
        bundle = make_bundle(
            "index.js",
            size=999,
            assets=[
                Asset("/project/src/index.js", 100),
                Asset("/project/src/util/format.js", 50),
            ],
        )
        node = bundle_node(bundle, ROOT, sep="/")

        # Root weight is the bundle size, not the asset sum
        assert node == {
            "label": "index.js",
            "weight": 999,
            "groups": [
                {
                    "label": "src",
                    "weight": 150,
                    "groups": [
                        {"label": "index.js", "weight": 100},
                        {"label": "util/format.js", "weight": 50},
                    ],
                }
            ],
        }

    def test_unnamed_bundle(self):
        with pytest.raises(UnnamedBundleError) as exc_info:
            bundle_node(make_bundle(None, target="legacy"), ROOT)
        assert exc_info.value.details["target"] == "legacy"

    def test_file_and_directory_with_same_name(self):
        bundle = make_bundle(
            "index.js", assets=[Asset("/project/a", 1), Asset("/project/a/b.js", 2)]
        )
        with pytest.raises(AssetPathError) as exc_info:
            bundle_node(bundle, ROOT, sep="/")
        assert exc_info.value.reason == "a is already a file"

    def test_directory_then_file_with_same_name(self):
        bundle = make_bundle(
            "index.js", assets=[Asset("/project/a/b.js", 2), Asset("/project/a", 1)]
        )
        with pytest.raises(AssetPathError, match="Invalid asset path in bundle index.js"):
            bundle_node(bundle, ROOT, sep="/")

    def test_empty_path_segment(self):
        bundle = make_bundle("index.js", assets=[Asset("/project/a//b.js", 2)])
        with pytest.raises(AssetPathError) as exc_info:
            bundle_node(bundle, ROOT, sep="/")
        assert exc_info.value.reason == "empty path segment"

    def test_same_asset_twice_is_not_a_clash(self):
        bundle = make_bundle(
            "index.js", assets=[Asset("/project/a/b.js", 2), Asset("/project/a/b.js", 5)]
        )
        node = bundle_node(bundle, ROOT, sep="/")
        assert node["groups"] == [{"label": "a/b.js", "weight": 5}]

    def test_bundle_without_assets(self):
        assert bundle_node(make_bundle("empty.js", size=0), ROOT) == {
            "label": "empty.js",
            "weight": 0,
            "groups": [],
        }


class TestTargets:
    def test_group_by_target_keeps_first_seen_order(self):
        bundles = [
            make_bundle("a.js", target="modern"),
            make_bundle("b.js", target="legacy"),
            make_bundle("c.js", target="modern"),
        ]
        grouped = group_bundles_by_target(bundles)
        assert list(grouped) == ["modern", "legacy"]
        assert [b.name for b in grouped["modern"]] == ["a.js", "c.js"]

    def test_build_target_reports(self):
        bundles = [
            make_bundle("a.js", "modern", 10, [Asset("/project/a.js", 10)]),
            make_bundle("b.js", "legacy", 20, [Asset("/project/b.js", 20)]),
        ]
        reports = build_target_reports(bundles, ROOT, sep="/")
        assert set(reports) == {"modern", "legacy"}
        assert reports["modern"] == build_bundle_data(bundles[:1], ROOT, sep="/")
        assert reports["legacy"]["groups"][0]["groups"] == [{"label": "b.js", "weight": 20}]


class TestReportsEnabled:
    def test_disabled_by_default(self, monkeypatch):
        monkeypatch.delenv(REPORT_ENV_VAR, raising=False)
        assert not reports_enabled(InsightConfig())

    def test_enabled_by_env(self, monkeypatch):
        monkeypatch.setenv(REPORT_ENV_VAR, "")
        assert reports_enabled(InsightConfig())

    def test_enabled_by_config(self, monkeypatch):
        monkeypatch.delenv(REPORT_ENV_VAR, raising=False)
        assert reports_enabled(InsightConfig(reports_enabled=True))


class TestLoadManifest:
    def write(self, tmp_path, data):
        path = tmp_path / "bundles.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    def test_object_form(self, tmp_path):
        path = self.write(
            tmp_path,
            {
                "bundles": [
                    {
                        "name": "index.js",
                        "target": "modern",
                        "size": 2048,
                        "assets": [{"path": "/project/src/index.js", "size": 1024}],
                    }
                ]
            },
        )
        assert load_manifest(path) == [
            Bundle("index.js", "modern", 2048, (Asset("/project/src/index.js", 1024),))
        ]

    def test_list_form_defaults_target(self, tmp_path):
        path = self.write(tmp_path, [{"name": "a.js", "size": 1}])
        bundles = load_manifest(path)
        assert bundles[0].target == "default"
        assert bundles[0].assets == ()

    def test_logs_bundle_count(self, tmp_path, caplog):
        path = self.write(tmp_path, [{"name": "a.js", "size": 1}, {"name": "b.js", "size": 2}])
        with caplog.at_level(logging.INFO, logger="bundle_insight"):
            load_manifest(path)
        assert f"Loaded 2 bundles from {path}" in caplog.messages

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bundles.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ManifestError, match="Invalid bundle manifest"):
            load_manifest(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ManifestError):
            load_manifest(tmp_path / "missing.json")

    def test_wrong_shape(self, tmp_path):
        with pytest.raises(ManifestError):
            load_manifest(self.write(tmp_path, {"bundles": "nope"}))

    @pytest.mark.parametrize("size", [-1, "12", 1.5, True, None])
    def test_bad_asset_size(self, tmp_path, size):
        path = self.write(
            tmp_path, [{"name": "a.js", "size": 1, "assets": [{"path": "/a.js", "size": size}]}]
        )
        with pytest.raises(ManifestError) as exc_info:
            load_manifest(path)
        assert exc_info.value.entry == "bundles[0].assets[0]"

    def test_asset_with_empty_path(self, tmp_path):
        path = self.write(tmp_path, [{"name": "a.js", "size": 1, "assets": [{"path": "", "size": 1}]}])
        with pytest.raises(ManifestError) as exc_info:
            load_manifest(path)
        assert exc_info.value.entry == "bundles[0].assets[0]"

    def test_asset_without_path(self, tmp_path):
        path = self.write(tmp_path, [{"name": "a.js", "size": 1, "assets": [{"size": 1}]}])
        with pytest.raises(ManifestError):
            load_manifest(path)
