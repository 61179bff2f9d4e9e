"""Known Init-phase problems.

Init failures come from constructing the pipeline's components, so the
remedy is nearly always to fix the corresponding config section.
"""

from __future__ import annotations

import re

from .codes import StatusCode, SuggestionCode
from .problems import Problem, static_suggestion


def _init_failed(err: BaseException) -> str:
    return f"Init Failed. {err}"


KNOWN_INIT_PROBLEMS: tuple[Problem, ...] = (
    Problem(
        pattern=re.compile(r"creating tagger: .*"),
        status_code=StatusCode.INIT_CREATE_TAGGER_ERROR,
        description=_init_failed,
        suggest=static_suggestion(SuggestionCode.CHECK_TAGGER_CONFIG, "Check your tagger config"),
    ),
    Problem(
        pattern=re.compile(r"creating builder: .*"),
        status_code=StatusCode.INIT_CREATE_BUILDER_ERROR,
        description=_init_failed,
        suggest=static_suggestion(SuggestionCode.CHECK_BUILDER_CONFIG, "Check your build config"),
    ),
    Problem(
        pattern=re.compile(r"creating deployer: .*"),
        status_code=StatusCode.INIT_CREATE_DEPLOYER_ERROR,
        description=_init_failed,
        suggest=static_suggestion(SuggestionCode.CHECK_DEPLOYER_CONFIG, "Check your deploy config"),
    ),
    Problem(
        pattern=re.compile(r"creating test runner: .*"),
        status_code=StatusCode.INIT_CREATE_TEST_DEP_ERROR,
        description=_init_failed,
        suggest=static_suggestion(SuggestionCode.CHECK_TEST_CONFIG, "Check your test config"),
    ),
    Problem(
        pattern=re.compile(r".*expiring artifact cache.*"),
        status_code=StatusCode.INIT_CACHE_ERROR,
        description=_init_failed,
        suggest=static_suggestion(
            SuggestionCode.CHECK_CACHE_FILE,
            "Remove the artifact cache file (~/.deckhand/cache) and try again",
        ),
    ),
)
