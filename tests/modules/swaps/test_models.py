from modules.swaps.models import (
    CreateSwapRequest,
    SwapRequest,
    SwapRequestEdit,
    SwapStatus,
    UpdateStatusRequest,
    join_skills,
    split_skills,
)


class TestSkillLists:
    def test_split_skills(self):
        assert split_skills("Guitar, Piano") == ["Guitar", "Piano"]

    def test_split_empty(self):
        assert split_skills("") == []
        assert split_skills(None) == []

    def test_join_skills(self):
        assert join_skills(["Guitar", "Piano"]) == "Guitar, Piano"


class TestSwapRequest:
    def test_parses_api_payload(self, swap_payload):
        request = SwapRequest.model_validate(swap_payload)
        assert request.requester_id == "user-123"
        assert request.status == SwapStatus.PENDING
        assert request.is_pending is True
        assert request.sender_skills == ["Guitar"]

    def test_embedded_users(self, swap_payload, user_payload):
        request = SwapRequest.model_validate({**swap_payload, "requester": user_payload})
        assert request.requester.name == "Ada Lovelace"
        assert request.target is None


class TestSwapRequestEdit:
    def test_from_request(self, swap_request):
        edit = SwapRequestEdit.from_request(swap_request)
        assert edit.sender_skill == "Guitar"
        assert edit.receiver_skill == "Spanish"
        assert edit.message == "hi"

    def test_from_request_with_missing_fields(self, swap_payload):
        request = SwapRequest.model_validate({**swap_payload, "senderSkill": None, "message": None})
        edit = SwapRequestEdit.from_request(request)
        assert edit.sender_skill == ""
        assert edit.message == ""

    def test_payload_uses_camel_case(self):
        edit = SwapRequestEdit(sender_skill="Guitar", receiver_skill="Spanish", message="hi")
        assert edit.to_payload() == {
            "senderSkill": "Guitar",
            "receiverSkill": "Spanish",
            "message": "hi",
        }


class TestCreateSwapRequest:
    def test_payload_omits_missing_skills(self):
        payload = CreateSwapRequest(requester_id="u1", target_id="u2").to_payload()
        assert payload == {"requesterId": "u1", "targetId": "u2", "message": ""}


class TestUpdateStatusRequest:
    def test_payload(self):
        assert UpdateStatusRequest(status=SwapStatus.ACCEPTED).to_payload() == {"status": "accepted"}
