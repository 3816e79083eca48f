import pytest
from pydantic import TypeAdapter, ValidationError

from tokens.validators import Amount, EthAddress, TokenId

amount_adapter = TypeAdapter(Amount)
token_id_adapter = TypeAdapter(TokenId)
address_adapter = TypeAdapter(EthAddress)


class TestNumericInputs:
    """
    Tests for amounts and token ids sent as JSON integers or strings.
    """

    @pytest.mark.parametrize("value,expected", [(5, 5), ("5", 5), (" 42 ", 42), ("1" + "0" * 30, 10 ** 30)])
    def test_amount_accepted(self, value, expected):
        assert amount_adapter.validate_python(value) == expected

    @pytest.mark.parametrize("value", [5.0, 1e30, 1.5, "1e3", "0x10", "", True, 0, "-1"])
    def test_amount_rejected(self, value):
        """
        Test that floats, non-decimal strings and non-positive values fail.

        Parameters
        ----------
        value
            Invalid amount
        """
        with pytest.raises(ValidationError):
            amount_adapter.validate_python(value)

    def test_token_id_zero_allowed(self):
        assert token_id_adapter.validate_python("0") == 0

    def test_token_id_negative_rejected(self):
        with pytest.raises(ValidationError):
            token_id_adapter.validate_python(-1)


class TestAddressInput:

    def test_address_checksummed(self):
        address = address_adapter.validate_python("0xde0b295669a9fd93d5f28d9ec85e40f4cb697bae")
        assert address == "0xde0B295669a9FD93d5F28D9Ec85E40f4cb697BAe"

    @pytest.mark.parametrize("value", ["0x123", "not-an-address", 123])
    def test_address_rejected(self, value):
        with pytest.raises(ValidationError):
            address_adapter.validate_python(value)
