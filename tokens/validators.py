from typing import Annotated
from pydantic.functional_validators import AfterValidator, BeforeValidator
from web3 import Web3


def parse_integer_before(v: int | str) -> int:
    """
    Parse an on-chain integer given as a JSON integer or a base-10 string.

    JSON floats are rejected even when whole, since values beyond 2**53
    have already lost digits by the time they are parsed.

    Parameters
    ----------
    v : int | str
        Raw value

    Returns
    -------
    int
        Parsed integer

    Raises
    ------
    ValueError
        If the value is not a whole base-10 number
    """
    if isinstance(v, bool):
        raise ValueError("must be a base-10 integer")
    if isinstance(v, int):
        return v
    if isinstance(v, str):
        text = v.strip()
        digits = text[1:] if text[:1] in ("-", "+") else text
        if digits.isdigit() and digits.isascii():
            return int(text)
    raise ValueError("must be a base-10 integer")


def positive_after(v: int) -> int:
    if v <= 0:
        raise ValueError("must be greater than 0")
    return v


def non_negative_after(v: int) -> int:
    if v < 0:
        raise ValueError("must be greater than or equal to 0")
    return v


def checksum_address_before(v: str) -> str:
    """
    Validate a hex address and return it checksummed.

    Raises
    ------
    ValueError
        If the value is not a valid 20-byte hex address
    """
    if not isinstance(v, str) or not Web3.is_address(v):
        raise ValueError("Invalid Ethereum address format")
    return Web3.to_checksum_address(v)


Amount = Annotated[int, BeforeValidator(parse_integer_before), AfterValidator(positive_after)]
TokenId = Annotated[int, BeforeValidator(parse_integer_before), AfterValidator(non_negative_after)]
EthAddress = Annotated[str, BeforeValidator(checksum_address_before)]
