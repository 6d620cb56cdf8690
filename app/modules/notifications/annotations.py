"""Annotation keys read from and written to pipeline runs."""

ANNOTATION_PREFIX = "integrations.tekton.ornew.io/"

CONTEXT_ID = ANNOTATION_PREFIX + "context-id"
DASHBOARD_BASE_URL = ANNOTATION_PREFIX + "tekton-dashboard-base-url"
GITHUB_OWNER = ANNOTATION_PREFIX + "github-owner"
GITHUB_REPO = ANNOTATION_PREFIX + "github-repo"
GITHUB_SHA = ANNOTATION_PREFIX + "github-sha"
LAST_STATUS = ANNOTATION_PREFIX + "last-status"
