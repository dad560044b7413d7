import re

import pytest

from paygig.modules.vouchers import generate_voucher_code, is_voucher_code


def test_default_format():
    code = generate_voucher_code()

    assert re.fullmatch(r"\d{9}S", code)
    assert is_voucher_code(code)


def test_custom_width_and_suffix():
    code = generate_voucher_code(12, "X")

    assert re.fullmatch(r"\d{12}X", code)
    assert not is_voucher_code(code)
    assert is_voucher_code(code, 12, "X")


def test_rejects_non_positive_width():
    with pytest.raises(ValueError):
        generate_voucher_code(0)
