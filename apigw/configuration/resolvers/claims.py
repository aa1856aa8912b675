"""Claims-to-header / claim / query instructions.

An instruction maps a target key to a claim, optionally picking one part
of a delimited claim value::

    add_headers_to_request:
      CustomerId: Claims[sub] > value[1] > |
      LocationId: Claims[LocationId] > value
"""

import logging
import re
from typing import Mapping, Tuple

from ..models import ClaimToThing

logger = logging.getLogger("apigw.configuration.resolvers.claims")

_CLAIM_PATTERN = re.compile(r"Claims\[(.*)\]")
_INDEX_PATTERN = re.compile(r"value\[(.*)\]")
_SPLIT_TOKEN = ">"


class ClaimInstructionError(ValueError):
    """Raised when a claims instruction cannot be parsed."""


def parse_claim_to_thing(target_key: str, instruction: str) -> ClaimToThing:
    """Parse one instruction into a :class:`ClaimToThing`.

    Raises:
        ClaimInstructionError: If the instruction is not of the form
            ``Claims[<claim>] > value[...] > <delimiter>``.
    """
    parts = instruction.split(_SPLIT_TOKEN)
    if len(parts) <= 1:
        raise ClaimInstructionError(
            f"No instructions found for '{target_key}': expected 'Claims[...] > value'"
        )

    claim_match = _CLAIM_PATTERN.search(parts[0])
    if claim_match is None:
        raise ClaimInstructionError(
            f"Instruction for '{target_key}' does not read from Claims[...]: {instruction!r}"
        )
    claim_key = claim_match.group(1)

    index = 0
    delimiter = ""
    if len(parts) > 2:
        index_match = _INDEX_PATTERN.search(parts[1])
        if index_match is not None:
            try:
                index = int(index_match.group(1))
            except ValueError as e:
                raise ClaimInstructionError(
                    f"Invalid value index for '{target_key}': {index_match.group(1)!r}"
                ) from e
            delimiter = parts[2].strip()

    return ClaimToThing(target_key=target_key, claim_key=claim_key, delimiter=delimiter, index=index)


def create_claims_to_things(instructions: Mapping[str, str]) -> Tuple[ClaimToThing, ...]:
    """Parse every instruction of a mapping, in mapping order.

    Unparsable instructions are logged and skipped; they never fail the
    configuration build.
    """
    result = []
    for target_key, instruction in instructions.items():
        try:
            result.append(parse_claim_to_thing(target_key, instruction))
        except ClaimInstructionError as e:
            logger.debug(
                "Unable to extract claims configuration for key '%s' and value '%s': %s",
                target_key, instruction, e,
            )
    return tuple(result)
