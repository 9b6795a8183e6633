import random
from unittest import mock

import pytest
import requests

from sinopac.exceptions import ChallengeParseError, ConfigurationError, RetryBudgetExhausted
from sinopac.gateway import digest
from sinopac.gateway.client import Challenge, ChallengeResponseClient, ClientState, parse_challenge


URL = "https://sandbox.sinopac.com/WebAPI/Service.svc/CreateATMorIBonTrans"
BODY = "<ATMOrIBonClientRequest>\n  <OrderNO>A1</OrderNO>\n</ATMOrIBonClientRequest>"


def _client(settings, **kwargs):
    kwargs.setdefault("sleep", mock.Mock())
    kwargs.setdefault("rng", random.Random(99))
    kwargs.setdefault("audit", mock.Mock())
    return ChallengeResponseClient(settings, **kwargs)


class TestParseChallenge:
    def test_parses_quoted_and_bare_qop(self):
        quoted = parse_challenge('Digest realm="R1", nonce="N1", qop="auth"')
        bare = parse_challenge('Digest realm="R1", nonce="N1", qop=auth')

        assert quoted == bare == Challenge(realm="R1", nonce="N1", qop="auth")

    def test_ignores_unknown_parameters(self):
        challenge = parse_challenge('Digest realm="R1", opaque="zzz", nonce="N1", algorithm=SHA-256, qop="auth"')

        assert challenge.nonce == "N1"

    @pytest.mark.parametrize(
        "header",
        [None, "", 'Basic realm="R1"', 'Digest realm="R1", qop="auth"', "Digest garbage"],
    )
    def test_rejects_unusable_headers(self, header):
        with pytest.raises(ChallengeParseError):
            parse_challenge(header, status_code=401)


class TestChallengeResponseClient:
    def test_session_picks_one_key_for_its_lifetime(self, gateway_settings):
        client = _client(gateway_settings)

        assert client.key_num in (1, 2, 3)
        assert client.credential.secret == gateway_settings.secrets[client.key_num - 1]
        assert client.state is ClientState.INITIAL

    def test_missing_secret_for_selected_slot_fails_at_construction(self, gateway_settings):
        keyring = mock.Mock()
        keyring.select.return_value = 2
        keyring.resolve.side_effect = ConfigurationError("SINOPAC_API_KEY_DATA2 no configurada")

        with pytest.raises(ConfigurationError):
            _client(gateway_settings, keyring=keyring)

    @mock.patch("sinopac.gateway.client.requests.post")
    def test_one_retry_then_success(self, mock_post, gateway_settings, make_response, challenge_response):
        ok = make_response(200, "<Response><Status>S</Status></Response>")
        mock_post.side_effect = [challenge_response("nonce-1"), ok]
        sleep = mock.Mock()
        client = _client(gateway_settings, sleep=sleep)

        response = client.post(URL, BODY)

        assert response is ok
        assert mock_post.call_count == 2
        sleep.assert_called_once_with(1)
        assert client.retries_left == 9
        assert client.state is ClientState.AUTHENTICATED

        first_headers = mock_post.call_args_list[0].kwargs["headers"]
        second_headers = mock_post.call_args_list[1].kwargs["headers"]
        assert first_headers["Authorization"] == ""
        assert first_headers["Content-Type"] == 'text/xml;charset="utf-8"'
        assert second_headers["Authorization"].startswith('Digest realm="SinoPacWebAPI", nonce="nonce-1"')

    @mock.patch("sinopac.gateway.client.requests.post")
    def test_verifycode_uses_current_nonce_and_compact_body(
        self, mock_post, gateway_settings, make_response, challenge_response
    ):
        mock_post.side_effect = [challenge_response("nonce-1"), challenge_response("nonce-2"), make_response(200)]
        client = _client(gateway_settings, rng=random.Random(5))

        client.post(URL, BODY)

        header = mock_post.call_args_list[2].kwargs["headers"]["Authorization"]
        cnonce = header.rsplit('cnonce="', 1)[1].rstrip('"')
        expected = digest.compute(
            "NA0001_001",
            "SinoPacWebAPI",
            client.credential.secret,
            "nonce-2",
            cnonce,
            "auth",
            "POST",
            URL,
            "<ATMOrIBonClientRequest><OrderNO>A1</OrderNO></ATMOrIBonClientRequest>",
        )
        assert 'nonce="nonce-2"' in header
        assert f'uri="{URL}"' in header
        assert f'verifycode="{expected}"' in header
        assert ", qop=auth, " in header

    @mock.patch("sinopac.gateway.client.requests.post")
    def test_fresh_cnonce_on_every_retry(self, mock_post, gateway_settings, make_response, challenge_response):
        mock_post.side_effect = [challenge_response("n")] * 3 + [make_response(200)]
        client = _client(gateway_settings)

        client.post(URL, BODY)

        headers = [call.kwargs["headers"]["Authorization"] for call in mock_post.call_args_list[1:]]
        cnonces = {header.rsplit('cnonce="', 1)[1] for header in headers}
        assert len(cnonces) == 3

    @pytest.mark.parametrize("attempts", [1, 2, 4])
    @mock.patch("sinopac.gateway.client.requests.post")
    def test_budget_exhausted_after_n_attempts(self, mock_post, attempts, gateway_settings, challenge_response):
        mock_post.side_effect = [challenge_response(f"n{i}") for i in range(attempts)]
        sleep = mock.Mock()
        client = _client(gateway_settings, max_retries=attempts - 1, sleep=sleep)

        with pytest.raises(RetryBudgetExhausted) as excinfo:
            client.post(URL, BODY)

        assert mock_post.call_count == attempts
        assert sleep.call_count == attempts - 1
        assert excinfo.value.status_code == 401
        assert excinfo.value.body == "Unauthorized"
        assert excinfo.value.attempts == attempts
        assert client.state is ClientState.EXHAUSTED

    @mock.patch("sinopac.gateway.client.requests.post")
    def test_audit_sees_every_attempt_even_on_failure(self, mock_post, gateway_settings, challenge_response):
        responses = [challenge_response("n1"), challenge_response("n2")]
        mock_post.side_effect = responses
        audit = mock.Mock()
        client = _client(gateway_settings, max_retries=1, audit=audit)

        with pytest.raises(RetryBudgetExhausted):
            client.post(URL, BODY)

        assert [call.args[0] for call in audit.call_args_list] == responses

    @mock.patch("sinopac.gateway.client.requests.post")
    def test_audit_errors_do_not_break_the_loop(self, mock_post, gateway_settings, make_response, challenge_response):
        mock_post.side_effect = [challenge_response(), make_response(200)]
        audit = mock.Mock(side_effect=RuntimeError("db caída"))
        client = _client(gateway_settings, audit=audit)

        assert client.post(URL, BODY).status_code == 200
        assert audit.call_count == 2

    @mock.patch("sinopac.gateway.client.requests.post")
    def test_malformed_challenge_is_terminal(self, mock_post, gateway_settings, make_response):
        mock_post.return_value = make_response(401, "Unauthorized", headers={"WWW-Authenticate": "Digest nonce"})
        audit = mock.Mock()
        client = _client(gateway_settings, audit=audit)

        with pytest.raises(ChallengeParseError):
            client.post(URL, BODY)

        assert mock_post.call_count == 1
        audit.assert_called_once()
        assert client.retries_left == 10

    @mock.patch("sinopac.gateway.client.requests.post")
    def test_exhausted_budget_wins_over_malformed_challenge(self, mock_post, gateway_settings, make_response):
        mock_post.return_value = make_response(401, "Unauthorized", headers={"WWW-Authenticate": "Digest nonce"})
        client = _client(gateway_settings, max_retries=0)

        with pytest.raises(RetryBudgetExhausted) as excinfo:
            client.post(URL, BODY)

        assert excinfo.value.attempts == 1
        assert client.state is ClientState.EXHAUSTED

    @mock.patch("sinopac.gateway.client.requests.post")
    def test_transport_errors_propagate_without_retry(self, mock_post, gateway_settings):
        mock_post.side_effect = requests.ConnectionError("sin red")
        client = _client(gateway_settings)

        with pytest.raises(requests.ConnectionError):
            client.post(URL, BODY)

        assert mock_post.call_count == 1

    @mock.patch("sinopac.gateway.client.requests.post")
    def test_budget_is_kept_across_calls_in_one_session(
        self, mock_post, gateway_settings, make_response, challenge_response
    ):
        mock_post.side_effect = [challenge_response(), make_response(200), challenge_response(), make_response(200)]
        client = _client(gateway_settings, max_retries=2)

        client.post(URL, BODY)
        client.post(URL, BODY)

        assert client.retries_left == 0
        # La segunda llamada arranca con el último header calculado.
        third_headers = mock_post.call_args_list[2].kwargs["headers"]
        assert third_headers["Authorization"].startswith("Digest ")
