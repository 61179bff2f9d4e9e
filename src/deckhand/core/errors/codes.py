"""Phases, status codes and suggestion codes.

Status Code Taxonomy
====================

Every failure maps to exactly one ``StatusCode``. Codes are scoped by the
pipeline phase the failure surfaced in, and every phase has an
``*_UNKNOWN`` code used by its catch-all descriptor so that
classification always produces a code. ``UNKNOWN_ERROR`` is reserved for
phases without a dedicated registry list.

    | Phase       | Specific codes                                     | Fallback            |
    |-------------|----------------------------------------------------|---------------------|
    | Init        | INIT_CREATE_TAGGER_ERROR, INIT_CREATE_BUILDER_ERROR, | INIT_UNKNOWN      |
    |             | INIT_CREATE_DEPLOYER_ERROR, INIT_CREATE_TEST_DEP_ERROR, |                |
    |             | INIT_CACHE_ERROR                                   |                     |
    | Build       | BUILD_PUSH_ACCESS_DENIED, BUILD_PROJECT_NOT_FOUND,  | BUILD_UNKNOWN      |
    |             | BUILD_DOCKER_DAEMON_NOT_RUNNING, BUILD_CANCELLED   |                     |
    | Deploy      | DEPLOY_CLUSTER_CONNECTION_ERR                      | DEPLOY_UNKNOWN      |
    | StatusCheck | -                                                  | STATUSCHECK_UNKNOWN |
    | FileSync    | -                                                  | SYNC_UNKNOWN        |
    | DevInit     | DEVINIT_UNSUPPORTED_V1_MANIFEST                    | DEVINIT_UNKNOWN     |
    | Cleanup     | -                                                  | CLEANUP_UNKNOWN     |

Status codes are what telemetry aggregates on, so their string values
are stable and must never be renamed.
"""

from __future__ import annotations

from enum import Enum


class Phase(str, Enum):
    """Pipeline stage a failure surfaced in."""

    INIT = "Init"
    BUILD = "Build"
    DEPLOY = "Deploy"
    STATUS_CHECK = "StatusCheck"
    FILE_SYNC = "FileSync"
    DEV_INIT = "DevInit"
    CLEANUP = "Cleanup"


class StatusCode(str, Enum):
    """Stable, machine-readable outcome of classifying a failure."""

    UNKNOWN_ERROR = "UNKNOWN_ERROR"

    # Init
    INIT_UNKNOWN = "INIT_UNKNOWN"
    INIT_CREATE_TAGGER_ERROR = "INIT_CREATE_TAGGER_ERROR"
    INIT_CREATE_BUILDER_ERROR = "INIT_CREATE_BUILDER_ERROR"
    INIT_CREATE_DEPLOYER_ERROR = "INIT_CREATE_DEPLOYER_ERROR"
    INIT_CREATE_TEST_DEP_ERROR = "INIT_CREATE_TEST_DEP_ERROR"
    INIT_CACHE_ERROR = "INIT_CACHE_ERROR"

    # Build
    BUILD_UNKNOWN = "BUILD_UNKNOWN"
    BUILD_PUSH_ACCESS_DENIED = "BUILD_PUSH_ACCESS_DENIED"
    BUILD_PROJECT_NOT_FOUND = "BUILD_PROJECT_NOT_FOUND"
    BUILD_DOCKER_DAEMON_NOT_RUNNING = "BUILD_DOCKER_DAEMON_NOT_RUNNING"
    BUILD_CANCELLED = "BUILD_CANCELLED"

    # Deploy
    DEPLOY_UNKNOWN = "DEPLOY_UNKNOWN"
    DEPLOY_CLUSTER_CONNECTION_ERR = "DEPLOY_CLUSTER_CONNECTION_ERR"

    # Status check, sync, cleanup
    STATUSCHECK_UNKNOWN = "STATUSCHECK_UNKNOWN"
    SYNC_UNKNOWN = "SYNC_UNKNOWN"
    CLEANUP_UNKNOWN = "CLEANUP_UNKNOWN"

    # Dev loop initialization
    DEVINIT_UNKNOWN = "DEVINIT_UNKNOWN"
    DEVINIT_UNSUPPORTED_V1_MANIFEST = "DEVINIT_UNSUPPORTED_V1_MANIFEST"


class SuggestionCode(str, Enum):
    """Identifies the remedy a suggestion proposes."""

    OPEN_ISSUE = "OPEN_ISSUE"

    # Image push / registry
    CHECK_DEFAULT_REPO = "CHECK_DEFAULT_REPO"
    CHECK_DEFAULT_REPO_GLOBAL_CONFIG = "CHECK_DEFAULT_REPO_GLOBAL_CONFIG"
    ADD_DEFAULT_REPO = "ADD_DEFAULT_REPO"
    GCLOUD_DOCKER_AUTH_CONFIGURE = "GCLOUD_DOCKER_AUTH_CONFIGURE"
    DOCKER_AUTH_CONFIGURE = "DOCKER_AUTH_CONFIGURE"
    CHECK_GCLOUD_PROJECT = "CHECK_GCLOUD_PROJECT"

    # Local container engine and cluster
    CHECK_DOCKER_RUNNING = "CHECK_DOCKER_RUNNING"
    CHECK_CLUSTER_CONNECTION = "CHECK_CLUSTER_CONNECTION"
    CHECK_MINIKUBE_STATUS = "CHECK_MINIKUBE_STATUS"

    # Pipeline configuration
    CHECK_TAGGER_CONFIG = "CHECK_TAGGER_CONFIG"
    CHECK_BUILDER_CONFIG = "CHECK_BUILDER_CONFIG"
    CHECK_DEPLOYER_CONFIG = "CHECK_DEPLOYER_CONFIG"
    CHECK_TEST_CONFIG = "CHECK_TEST_CONFIG"
    CHECK_CACHE_FILE = "CHECK_CACHE_FILE"

    # Images
    RUN_DOCKER_PULL = "RUN_DOCKER_PULL"
