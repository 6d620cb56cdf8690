"""Unit tests for infrastructure.logging.context module."""

import uuid

import pytest
import structlog

from infrastructure.logging.context import (
    bind_dispatch_context,
    clear_dispatch_context,
    get_dispatch_id,
)


@pytest.mark.unit
class TestBindDispatchContext:
    def test_auto_generates_dispatch_id(self):
        with bind_dispatch_context(namespace="ci", pipeline_run="build-1"):
            uuid.UUID(get_dispatch_id())

    def test_uses_provided_dispatch_id(self):
        with bind_dispatch_context(dispatch_id="dispatch-123"):
            assert get_dispatch_id() == "dispatch-123"

    def test_binds_run_identity_and_extra_fields(self):
        with bind_dispatch_context(
            namespace="ci", pipeline_run="build-1", binding="notify"
        ):
            ctx = structlog.contextvars.get_contextvars()
            assert ctx["namespace"] == "ci"
            assert ctx["pipeline_run"] == "build-1"
            assert ctx["binding"] == "notify"

    def test_context_is_removed_on_exit(self):
        with bind_dispatch_context(namespace="ci", pipeline_run="build-1"):
            pass

        assert structlog.contextvars.get_contextvars() == {}

    def test_context_is_removed_on_exception(self):
        with pytest.raises(ValueError):
            with bind_dispatch_context(namespace="ci"):
                raise ValueError("boom")

        assert get_dispatch_id() is None

    def test_nested_context_keeps_outer_dispatch_id(self):
        with bind_dispatch_context(namespace="ci", pipeline_run="build-1"):
            outer_id = get_dispatch_id()
            with bind_dispatch_context(binding="notify"):
                assert get_dispatch_id() == outer_id
                assert structlog.contextvars.get_contextvars()["binding"] == "notify"
            ctx = structlog.contextvars.get_contextvars()
            assert get_dispatch_id() == outer_id
            assert "binding" not in ctx
            assert ctx["namespace"] == "ci"


@pytest.mark.unit
class TestClearDispatchContext:
    def test_clears_everything(self):
        structlog.contextvars.bind_contextvars(dispatch_id="x", namespace="ci")

        clear_dispatch_context()

        assert get_dispatch_id() is None
        assert structlog.contextvars.get_contextvars() == {}
