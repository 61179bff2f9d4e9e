"""Known DevInit-phase problems.

DevInit resolves the file dependencies of every artifact before the dev
loop starts. Images pushed with the deprecated v1 manifest cannot be
inspected, so their ONBUILD triggers are skipped.
"""

from __future__ import annotations

import re

from .codes import StatusCode, SuggestionCode
from .problems import Problem, error_message, static_suggestion

_IMAGE_RE = re.compile(r"retrieving image config for (\S+):")


def _describe_old_manifest(err: BaseException) -> str:
    match = _IMAGE_RE.search(error_message(err))
    image = match.group(1) if match else "image"
    return f"Could not retrieve image {image} pushed with the deprecated manifest v1"


OLD_IMAGE_MANIFEST = Problem(
    pattern=re.compile(
        r'.*unsupported MediaType: "?application/vnd\.docker\.distribution\.manifest\.v1\+prettyjws"?.*'
    ),
    status_code=StatusCode.DEVINIT_UNSUPPORTED_V1_MANIFEST,
    description=_describe_old_manifest,
    suggest=static_suggestion(
        SuggestionCode.RUN_DOCKER_PULL,
        "Ignoring files dependencies for all ONBUILD triggers. "
        "To avoid, hit Ctrl-C and run `docker pull` to fetch the specified image and retry",
    ),
)

KNOWN_DEVINIT_PROBLEMS: tuple[Problem, ...] = (OLD_IMAGE_MANIFEST,)
