# Copyright Stratus Labs 2026
from typing import List, Sequence

DEPLOYING_MARKER = "Deploying project"
DEPLOYED_MARKER = "Deployed"
DEPLOYED_ACTIONS_MARKER = "Deployed actions"
DEPLOYED_FUNCTIONS_MESSAGE = "Deployed functions ('stratus serverless functions get <funcName> --url' for URL):"


def rewrite_transcript(lines: Sequence[str]) -> List[str]:
    """Reword the deployer's transcript for our CLI.

    Depends on the exact wording of the deployer, so keep it in sync when the plugin is upgraded.
    """
    rewritten = []
    for line in lines:
        if DEPLOYING_MARKER in line:
            line = line.replace(DEPLOYING_MARKER, DEPLOYED_MARKER, 1)
        elif DEPLOYED_ACTIONS_MARKER in line:
            line = DEPLOYED_FUNCTIONS_MESSAGE
        rewritten.append(line)
    return rewritten
