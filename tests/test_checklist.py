from leasedesk.checklist import STIP_TYPES, build_stip_checklist, is_complete, missing_stips
from export.pdf_export import build_deal_summary


def test_build_stip_checklist():
    checklist = build_stip_checklist(["CONTRACT", "INSURANCE", "BOGUS"])
    assert len(checklist) == 9
    assert [c["type"] for c in checklist if c["checked"]] == ["CONTRACT", "INSURANCE"]
    missing = missing_stips(checklist)
    assert "Driver's License" in missing
    assert "Contract" not in missing
    assert len(missing) == 7
    assert not is_complete(checklist)


def test_complete_checklist():
    checklist = build_stip_checklist(STIP_TYPES)
    assert missing_stips(checklist) == []
    assert is_complete(checklist)


def test_summary_includes_checklist():
    data = {"checklist": build_stip_checklist(["CONTRACT"])}
    output = build_deal_summary(data)
    assert b"[x] Contract" in output
    assert b"[ ] Tier Sheet" in output
