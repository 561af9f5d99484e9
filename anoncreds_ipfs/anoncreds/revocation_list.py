"""Rebuild a revocation status list from a revocation registry delta."""

import logging
from enum import IntEnum
from typing import Iterable

from .base import RevocationListCapacityError
from .models.anoncreds_revocation import RevList, RevRegDef, RevRegDelta

LOGGER = logging.getLogger(__name__)


class RevocationState(IntEnum):
    """State of a credential slot in a revocation list."""

    ACTIVE = 0
    REVOKED = 1


def _check_capacity(indexes: Iterable[int], max_cred_num: int):
    indexes = list(indexes)
    if not indexes:
        return
    highest = max(indexes)
    if highest >= max_cred_num:
        raise RevocationListCapacityError(
            f"Revocation registry index {highest} exceeds capacity {max_cred_num}"
        )
    lowest = min(indexes)
    if lowest < 0:
        raise RevocationListCapacityError(
            f"Revocation registry index {lowest} is negative"
        )


def revocation_list_from_delta(
    rev_reg_def_id: str,
    rev_reg_def: RevRegDef,
    delta: RevRegDelta,
    issuance_by_default: bool,
) -> RevList:
    """Build the full status list described by an accumulator delta.

    Every slot starts ACTIVE when credentials are issued by default and
    REVOKED otherwise. Issued indexes are then marked ACTIVE and revoked
    indexes REVOKED, so an index present in both ends up revoked.

    Args:
        rev_reg_def_id: identifier of the revocation registry definition
        rev_reg_def: the revocation registry definition
        delta: accumulator delta with issued and revoked indexes
        issuance_by_default: initial state of every slot

    Returns:
        The reconstructed revocation list

    Raises:
        RevocationListCapacityError: an index lies outside the registry

    """
    max_cred_num = rev_reg_def.value.max_cred_num
    issued = list(delta.issued or [])
    revoked = list(delta.revoked or [])
    _check_capacity(issued + revoked, max_cred_num)

    initial = (
        RevocationState.ACTIVE if issuance_by_default else RevocationState.REVOKED
    )
    revocation_list = [int(initial)] * max_cred_num
    for index in issued:
        revocation_list[index] = int(RevocationState.ACTIVE)
    for index in revoked:
        revocation_list[index] = int(RevocationState.REVOKED)

    LOGGER.debug(
        "Rebuilt revocation list for %s: %d issued, %d revoked",
        rev_reg_def_id,
        len(issued),
        len(revoked),
    )
    return RevList(
        issuer_id=rev_reg_def.issuer_id,
        rev_reg_def_id=rev_reg_def_id,
        revocation_list=revocation_list,
        current_accumulator=delta.accum,
        timestamp=delta.txn_time,
    )
