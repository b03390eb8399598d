from __future__ import annotations

import copy
import json
from pathlib import Path

import pytest
from docsctl.core.effects import LocalFileSystem
from docsctl.deps.reconcile import ReconcilePolicy, VersionChange, reconcile, reconcile_file
from docsctl.errors import MalformedInputError, MissingInputError
from docsctl.exit_codes import ERR_USAGE
from hypothesis import given
from hypothesis import strategies as st

POLICY = ReconcilePolicy(namespace="@x/", pins={"@x/a": "1.2.3"})


def test_pinned_dependency_wins_over_target_version() -> None:
    manifest = {"dependencies": {"@x/a": "1.0.0", "@x/c": "1.0.0", "lit": "3.1.0"}}
    changes = reconcile(manifest, "24.8.0", POLICY)
    assert manifest["dependencies"] == {"@x/a": "1.2.3", "@x/c": "1.0.0", "lit": "3.1.0"}
    assert VersionChange("dependencies", "@x/a", "1.0.0", "1.2.3") in changes


def test_stale_namespace_override_is_removed() -> None:
    manifest = {"dependencies": {}, "overrides": {"@x/a": "1.0.0", "@x/b": "9.9.9", "lit": "3.1.0"}}
    reconcile(manifest, "24.8.0", POLICY)
    assert manifest["overrides"] == {"@x/a": "1.2.3", "lit": "3.1.0"}


def test_allow_listed_packages_follow_target_version() -> None:
    policy = ReconcilePolicy(namespace="@x/", pins={"@x/a": "1.2.3"}, allow=frozenset({"@x/b", "@x/a"}))
    manifest = {"dependencies": {"@x/a": "1.0.0", "@x/b": "24.7.0", "@x/c": "24.7.0"}}
    reconcile(manifest, "24.8.0", policy)
    assert manifest["dependencies"] == {"@x/a": "1.2.3", "@x/b": "24.8.0", "@x/c": "24.7.0"}


def test_empty_allow_list_leaves_namespace_untouched() -> None:
    manifest = {"dependencies": {"@x/c": "24.7.0"}, "devDependencies": {"@x/d": "24.7.0"}}
    assert reconcile(manifest, "24.8.0", ReconcilePolicy(namespace="@x/")) == []
    assert manifest == {"dependencies": {"@x/c": "24.7.0"}, "devDependencies": {"@x/d": "24.7.0"}}


def test_platform_dependencies_are_reconciled() -> None:
    manifest = {"dependencies": {}, "vaadin": {"dependencies": {"@x/a": "0.9.0"}, "devDependencies": {"@x/a": "0.1.0"}}}
    reconcile(manifest, "24.8.0", POLICY)
    assert manifest["vaadin"]["dependencies"] == {"@x/a": "1.2.3"}
    # dev maps only feed override seeding
    assert manifest["vaadin"]["devDependencies"] == {"@x/a": "0.1.0"}
    assert manifest["overrides"] == {"@x/a": "1.2.3"}


def test_overrides_seeded_from_dependencies_when_empty() -> None:
    manifest = {"dependencies": {"@x/a": "1.0.0"}, "overrides": {}}
    reconcile(manifest, "24.8.0", POLICY)
    assert manifest["overrides"] == {"@x/a": "1.2.3"}


def test_seeding_is_sorted_and_scans_dev_dependencies() -> None:
    policy = ReconcilePolicy(namespace="@x/", pins={"@x/z": "2.0.0", "@x/a": "1.2.3", "@x/m": "3.0.0"})
    manifest = {
        "dependencies": {"@x/z": "1.0.0"},
        "devDependencies": {"@x/a": "1.0.0"},
        "overrides": {"lit": "3.1.0"},
    }
    reconcile(manifest, "24.8.0", policy)
    assert list(manifest["overrides"].items()) == [("lit", "3.1.0"), ("@x/a", "1.2.3"), ("@x/z", "2.0.0")]


def test_no_overrides_map_created_when_nothing_to_seed() -> None:
    manifest = {"dependencies": {"lit": "3.1.0"}}
    reconcile(manifest, "24.8.0", POLICY)
    assert "overrides" not in manifest


def test_pinned_override_outside_namespace_is_updated() -> None:
    policy = ReconcilePolicy(namespace="@x/", pins={"@x/a": "1.2.3", "lit": "3.0.0"})
    manifest = {"dependencies": {"@x/a": "1.2.3"}, "overrides": {"@x/a": "1.2.3", "lit": "2.0.0", "react": "18.0.0"}}
    changes = reconcile(manifest, "24.8.0", policy)
    assert manifest["overrides"] == {"@x/a": "1.2.3", "lit": "3.0.0", "react": "18.0.0"}
    assert changes == [VersionChange("overrides", "lit", "2.0.0", "3.0.0")]


def test_non_namespace_override_values_pass_through() -> None:
    nested = {"semver": "7.6.0", "nested": {"x": "1"}}
    manifest = {"dependencies": {"@x/a": "1.2.3"}, "overrides": {"@x/a": "1.2.3", "other": nested}}
    reconcile(manifest, "24.8.0", POLICY)
    assert manifest["overrides"]["other"] is nested


def test_second_run_is_a_fixed_point() -> None:
    manifest = {
        "dependencies": {"@x/a": "1.0.0", "@x/c": "1.0.0"},
        "overrides": {"@x/b": "9.9.9"},
    }
    assert reconcile(manifest, "24.8.0", POLICY)
    snapshot = copy.deepcopy(manifest)
    assert reconcile(manifest, "24.8.0", POLICY) == []
    assert manifest == snapshot


_names = st.sampled_from(["@x/a", "@x/b", "@x/c", "lit", "react"])
_versions = st.sampled_from(["1.0.0", "1.2.3", "24.7.0", "9.9.9"])
_dep_map = st.dictionaries(_names, _versions, max_size=5)


@given(
    deps=_dep_map,
    dev=_dep_map,
    overrides=st.one_of(st.none(), _dep_map),
    allow=st.frozensets(_names, max_size=3),
    target=_versions,
)
def test_reconcile_is_idempotent(deps, dev, overrides, allow, target) -> None:
    policy = ReconcilePolicy(namespace="@x/", pins={"@x/a": "1.2.3", "@x/b": "2.0.0"}, allow=allow)
    manifest: dict[str, object] = {"dependencies": dict(deps), "devDependencies": dict(dev)}
    if overrides is not None:
        manifest["overrides"] = dict(overrides)
    reconcile(manifest, target, policy)
    snapshot = copy.deepcopy(manifest)
    assert reconcile(manifest, target, policy) == []
    assert manifest == snapshot
    for name, version in manifest.get("overrides", {}).items():
        if name.startswith("@x/"):
            assert policy.pins[name] == version
    assert {k: v for k, v in manifest.get("overrides", {}).items() if not k.startswith("@x/")} == {
        k: v for k, v in (overrides or {}).items() if not k.startswith("@x/")
    }


def test_reconcile_file_rewrites_pretty_json_with_trailing_newline(tmp_path: Path) -> None:
    path = tmp_path / "package.json"
    path.write_text(json.dumps({"name": "app", "dependencies": {"@x/a": "1.0.0"}, "overrides": {"@x/b": "9.9.9"}}), encoding="utf-8")
    changes = reconcile_file(LocalFileSystem(), path, "24.8.0", POLICY)
    text = path.read_text(encoding="utf-8")
    assert text.endswith("}\n")
    assert text == json.dumps({"name": "app", "dependencies": {"@x/a": "1.2.3"}, "overrides": {"@x/a": "1.2.3"}}, indent=2) + "\n"
    assert [c.render() for c in changes] == [
        "dependencies: @x/a 1.0.0 -> 1.2.3",
        "overrides: removed @x/b (9.9.9)",
        "overrides: added @x/a@1.2.3",
    ]


def test_reconcile_file_check_mode_does_not_write(tmp_path: Path) -> None:
    path = tmp_path / "package.json"
    original = json.dumps({"dependencies": {"@x/a": "1.0.0"}})
    path.write_text(original, encoding="utf-8")
    changes = reconcile_file(LocalFileSystem(), path, "24.8.0", POLICY, check=True)
    assert changes
    assert path.read_text(encoding="utf-8") == original


def test_reconcile_file_missing_is_usage_error(tmp_path: Path) -> None:
    with pytest.raises(MissingInputError) as exc:
        reconcile_file(LocalFileSystem(), tmp_path / "package.json", "24.8.0", POLICY)
    assert exc.value.code == ERR_USAGE


def test_reconcile_file_rejects_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "package.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(MalformedInputError):
        reconcile_file(LocalFileSystem(), path, "24.8.0", POLICY)


def test_reconcile_file_rejects_non_utf8_bytes(tmp_path: Path) -> None:
    path = tmp_path / "package.json"
    path.write_bytes(b'{"name": "\xff"}\n')
    with pytest.raises(MalformedInputError, match="not valid UTF-8"):
        reconcile_file(LocalFileSystem(), path, "24.8.0", POLICY)
