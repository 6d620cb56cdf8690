"""Unit tests for the in-memory object store."""

import pytest

from modules.notifications import annotations
from modules.notifications.store import ConflictError, NotFoundError
from tests.factories.notifications import (
    make_binding,
    make_github_provider_config,
    make_pipeline_run,
    make_secret,
)


@pytest.mark.unit
class TestPipelineRuns:
    def test_put_assigns_resource_version(self, store):
        stored = store.put_pipeline_run(make_pipeline_run())

        assert stored.resource_version is not None
        assert store.get_pipeline_run("ci", "build-1") == stored

    def test_get_missing_run_raises_not_found(self, store):
        with pytest.raises(NotFoundError):
            store.get_pipeline_run("ci", "missing")

    def test_patch_merges_annotations_and_bumps_version(self, store):
        stored = store.put_pipeline_run(
            make_pipeline_run(annotations={"keep": "me"})
        )

        updated = store.patch_pipeline_run_annotations(
            "ci",
            "build-1",
            {annotations.LAST_STATUS: "Succeeded"},
            resource_version=stored.resource_version,
        )

        assert updated.annotations == {
            "keep": "me",
            annotations.LAST_STATUS: "Succeeded",
        }
        assert updated.resource_version != stored.resource_version
        assert store.get_pipeline_run("ci", "build-1") == updated

    def test_patch_with_stale_version_conflicts(self, store):
        stored = store.put_pipeline_run(make_pipeline_run())
        store.patch_pipeline_run_annotations(
            "ci", "build-1", {"a": "1"}, resource_version=stored.resource_version
        )

        with pytest.raises(ConflictError):
            store.patch_pipeline_run_annotations(
                "ci", "build-1", {"a": "2"}, resource_version=stored.resource_version
            )

    def test_patch_without_version_is_unconditional(self, store):
        store.put_pipeline_run(make_pipeline_run())

        updated = store.patch_pipeline_run_annotations("ci", "build-1", {"a": "1"})

        assert updated.annotations["a"] == "1"

    def test_patch_missing_run_raises_not_found(self, store):
        with pytest.raises(NotFoundError):
            store.patch_pipeline_run_annotations("ci", "missing", {"a": "1"})


@pytest.mark.unit
class TestLookups:
    def test_list_bindings_across_namespaces(self, store):
        store.put_notification_binding(make_binding(name="a", namespace="ci"))
        store.put_notification_binding(make_binding(name="b", namespace="other"))

        assert [b.name for b in store.list_notification_bindings()] == ["a", "b"]

    def test_list_bindings_by_namespace(self, store):
        store.put_notification_binding(make_binding(name="a", namespace="ci"))
        store.put_notification_binding(make_binding(name="b", namespace="other"))

        assert [b.name for b in store.list_notification_bindings("ci")] == ["a"]
        assert store.list_notification_bindings("empty") == []

    def test_get_provider_config(self, store):
        config = make_github_provider_config()
        store.put_provider_config(config)

        assert store.get_provider_config("ci", "github") == config
        with pytest.raises(NotFoundError):
            store.get_provider_config("ci", "missing")

    def test_get_secret(self, store):
        secret = make_secret(data={"private-key.pem": b"pem"})
        store.put_secret(secret)

        assert store.get_secret("ci", "github-app") == secret
        with pytest.raises(NotFoundError):
            store.get_secret("other", "github-app")
