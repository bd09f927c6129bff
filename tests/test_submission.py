"""
tests/test_submission.py
~~~~~~~~~~~~~~~~~~~~~~~~
Tests for sampras.submission — token hand-off, terminal failures and the
submission preconditions.  HTTP is mocked at the requests.Session seam.
"""

from __future__ import annotations

import pytest
import requests

from sampras.exceptions import JobInFlightError, MissingImageError
from sampras.models import OutcomeStatus
from sampras.submission import SubmissionController


@pytest.fixture
def controller(api_client, session) -> SubmissionController:
    return SubmissionController(api_client, session)


class TestSubmitSuccess:
    def test_token_handed_over(self, controller, http, respond, session):
        http.request.return_value = respond({"data": {"token": "T1"}})
        outcome = controller.submit("abc", "def")

        assert outcome.status is OutcomeStatus.SUBMITTED
        assert outcome.token == "T1"
        assert outcome.terminal is False
        assert session.log.messages() == ["start upload", "upload success"]

    def test_session_stays_in_flight(self, controller, http, respond, session):
        http.request.return_value = respond({"data": {"token": "T1"}})
        controller.submit("abc", "def")
        assert session.running is True

    def test_single_request(self, controller, http, respond):
        http.request.return_value = respond({"data": {"token": "T1"}})
        controller.submit("abc", "def")
        assert http.request.call_count == 1


class TestSubmitRejected:
    def test_error_meta_is_terminal(self, controller, http, respond, session):
        payload = {"meta": {"code": 400, "message": "bad image"}}
        http.request.return_value = respond(payload)
        outcome = controller.submit("abc", "def")

        assert outcome.status is OutcomeStatus.UPLOAD_REJECTED
        assert outcome.token is None
        assert session.running is False
        assert session.log.messages()[-1] == "upload fail: 400 - bad image"
        assert session.result == payload

    def test_rejection_not_retried(self, controller, http, respond):
        http.request.return_value = respond({"meta": {"code": 500, "message": "busy"}})
        controller.submit("abc", "def")
        assert http.request.call_count == 1

    def test_unrecognised_shape_logs_raw_body(self, controller, http, respond, session):
        http.request.return_value = respond({"status": "weird"})
        outcome = controller.submit("abc", "def")

        assert outcome.status is OutcomeStatus.MALFORMED_RESPONSE
        assert session.log.messages()[-1] == 'upload fail: {"status": "weird"}'
        assert session.running is False

    def test_meta_without_message_is_malformed(self, controller, http, respond):
        http.request.return_value = respond({"meta": {"code": 400}})
        assert controller.submit("abc", "def").status is OutcomeStatus.MALFORMED_RESPONSE

    def test_empty_token_is_not_a_token(self, controller, http, respond):
        http.request.return_value = respond({"data": {"token": ""}})
        assert controller.submit("abc", "def").status is OutcomeStatus.MALFORMED_RESPONSE


class TestSubmitTransportError:
    def test_network_failure_is_terminal(self, controller, http, session):
        http.request.side_effect = requests.exceptions.ConnectionError("refused")
        outcome = controller.submit("abc", "def")

        assert outcome.status is OutcomeStatus.UPLOAD_ERROR
        assert session.log.messages() == ["start upload", "upload error"]
        assert session.running is False
        assert http.request.call_count == 1

    def test_invalid_json_is_transport_failure(self, controller, http, respond):
        resp = respond(None)
        resp.json.side_effect = ValueError("no json")
        http.request.return_value = resp
        assert controller.submit("abc", "def").status is OutcomeStatus.UPLOAD_ERROR

    def test_new_job_allowed_after_failure(self, controller, http, respond):
        http.request.side_effect = [
            requests.exceptions.Timeout("slow"),
            respond({"data": {"token": "T2"}}),
        ]
        controller.submit("abc", "def")
        assert controller.submit("abc", "def").token == "T2"


class TestPreconditions:
    @pytest.mark.parametrize("receipt, slip", [(None, "def"), ("abc", None), ("", "")])
    def test_missing_image_rejected(self, controller, http, session, receipt, slip):
        with pytest.raises(MissingImageError):
            controller.submit(receipt, slip)
        http.request.assert_not_called()
        assert session.running is False
        assert len(session.log) == 0

    def test_job_in_flight_rejected(self, controller, http, respond, session):
        http.request.return_value = respond({"data": {"token": "T1"}})
        controller.submit("abc", "def")
        with pytest.raises(JobInFlightError):
            controller.submit("abc", "def")
        assert http.request.call_count == 1
        assert session.log.messages() == ["start upload", "upload success"]


class TestSubmitUnexpectedError:
    def test_unserialisable_payload_resets_run_state(self, controller, http, session):
        with pytest.raises(TypeError):
            controller.submit(b"abc", b"def")  # type: ignore[arg-type]
        assert session.running is False
        assert session.log.messages() == ["start upload"]
        http.request.assert_not_called()

    def test_unexpected_client_error_resets_run_state(self, controller, http, respond, session):
        http.request.side_effect = [RuntimeError("boom"), respond({"data": {"token": "T2"}})]
        with pytest.raises(RuntimeError):
            controller.submit("abc", "def")
        assert session.running is False
        assert controller.submit("abc", "def").token == "T2"


class TestRejectionMessage:
    def test_message_without_code(self, controller, http, respond, session):
        http.request.return_value = respond({"meta": {"message": "bad image"}})
        outcome = controller.submit("abc", "def")
        assert outcome.status is OutcomeStatus.UPLOAD_REJECTED
        assert session.log.messages()[-1] == "upload fail: bad image"

    def test_code_zero_is_rendered(self, controller, http, respond, session):
        http.request.return_value = respond({"meta": {"code": 0, "message": "bad image"}})
        controller.submit("abc", "def")
        assert session.log.messages()[-1] == "upload fail: 0 - bad image"
