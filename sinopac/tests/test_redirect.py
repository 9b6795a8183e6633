import hashlib
from unittest import mock

from sinopac.gateway.redirect import build_redirect_digest, build_redirect_fields


def test_redirect_digest_layout():
    expected = hashlib.sha256(b"POST:ORDER1:NA0001_001:18000:secret").hexdigest()

    assert build_redirect_digest("ORDER1", "NA0001_001", 18000, "secret") == expected
    assert build_redirect_digest("ORDER1", "NA0001_001", 18000, b"secret") == expected


def test_redirect_fields_are_signed_with_selected_key(gateway_settings):
    keyring = mock.Mock()
    keyring.select.return_value = 3
    keyring.resolve.return_value = mock.Mock(account_id="NA0001_001", secret="key-data-three")

    fields = build_redirect_fields(gateway_settings, "ORDER1", 18000, keyring=keyring, PrdtName="Plan", Param1="x")

    keyring.resolve.assert_called_once_with(3)
    assert fields["KeyNum"] == "3"
    assert fields["CurrencyID"] == "NTD"
    assert fields["PrdtName"] == "Plan"
    assert fields["Digest"] == build_redirect_digest("ORDER1", "NA0001_001", "18000", "key-data-three")
