import pytest

from .. import revocation_list as test_module
from ..base import RevocationListCapacityError
from ..models.anoncreds_revocation import RevRegDef, RevRegDefValue, RevRegDelta

REV_REG_DEF_ID = "ipfs://QmbWqxBEKC3P8tqsKc98xmWNzrzDtRLMiMPL8wBuTGsMnR"
CRED_DEF_ID = "ipfs://bafybeigdyrzt5sfp7udm7hu76uh7y26nf3efuylqabf3oclgtqy55fbzdi"


def make_rev_reg_def(max_cred_num: int) -> RevRegDef:
    return RevRegDef(
        issuer_id="did:key:z6MkpTHR8VNsBxYAAWHut2Geadd9jSwuBV8xRoAnwWsdvktH",
        type="CL_ACCUM",
        cred_def_id=CRED_DEF_ID,
        tag="default",
        value=RevRegDefValue(
            public_keys={"accumKey": {"z": "1 0BB...386"}},
            max_cred_num=max_cred_num,
            tails_location="some/tails/location",
            tails_hash="hash",
        ),
    )


@pytest.mark.parametrize(
    "max_cred_num, issued, revoked, issuance_by_default, expected",
    [
        (5, [], [1, 3], True, [0, 1, 0, 1, 0]),
        (4, [0, 2], [], False, [0, 1, 0, 1]),
        (3, [1], [1], True, [0, 1, 0]),
        (3, [1], [1], False, [1, 1, 1]),
        (2, [], [], False, [1, 1]),
    ],
)
def test_revocation_list_from_delta(
    max_cred_num, issued, revoked, issuance_by_default, expected
):
    delta = RevRegDelta(
        accum="21 118...1FB", issued=issued, revoked=revoked, txn_time=1640995199
    )
    rev_list = test_module.revocation_list_from_delta(
        REV_REG_DEF_ID, make_rev_reg_def(max_cred_num), delta, issuance_by_default
    )
    assert rev_list.revocation_list == expected
    assert rev_list.rev_reg_def_id == REV_REG_DEF_ID
    assert rev_list.issuer_id == make_rev_reg_def(1).issuer_id
    assert rev_list.current_accumulator == "21 118...1FB"
    assert rev_list.timestamp == 1640995199


@pytest.mark.parametrize(
    "issued, revoked",
    [([5], []), ([], [7]), ([-1], []), ([0], [-2])],
)
def test_revocation_list_from_delta_capacity(issued, revoked):
    delta = RevRegDelta(accum="accum", issued=issued, revoked=revoked)
    with pytest.raises(RevocationListCapacityError):
        test_module.revocation_list_from_delta(
            REV_REG_DEF_ID, make_rev_reg_def(5), delta, True
        )


def test_revocation_list_from_delta_serializes():
    delta = RevRegDelta.deserialize(
        {"accum": "accum", "issued": [0], "revoked": [1], "txnTime": 10}
    )
    rev_list = test_module.revocation_list_from_delta(
        REV_REG_DEF_ID, make_rev_reg_def(2), delta, False
    )
    assert rev_list.serialize() == {
        "issuerId": "did:key:z6MkpTHR8VNsBxYAAWHut2Geadd9jSwuBV8xRoAnwWsdvktH",
        "revRegDefId": REV_REG_DEF_ID,
        "revocationList": [0, 1],
        "currentAccumulator": "accum",
        "timestamp": 10,
    }


def test_revocation_state_values():
    assert test_module.RevocationState.ACTIVE == 0
    assert test_module.RevocationState.REVOKED == 1
