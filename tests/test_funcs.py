import sys

import pytest

from trantil.funcs import hton64, ntoh64, split_string


def test_accept_empty_1():
    assert len(split_string("1,2,3", ",", True)) == 3


def test_accept_empty_2():
    out = split_string(",1,2,3", ",", True)
    assert len(out) == 4
    assert out[0] == ""


def test_accept_empty_3():
    out = split_string(",1,2,3,", ",", True)
    assert len(out) == 5
    assert out[0] == ""


def test_accept_empty_4():
    assert split_string(",1,2,3,", ":", True) == [",1,2,3,"]


def test_accept_empty_5():
    assert split_string("trantor::splitString", "::", True) == ["trantor", "splitString"]


def test_accept_empty_6():
    assert split_string("trantor::::splitString", "::", True) == [
        "trantor",
        "",
        "splitString",
    ]


def test_accept_empty_7():
    assert split_string("trantor:::splitString", "::", True) == ["trantor", ":splitString"]


def test_accept_empty_8():
    out = split_string("trantor:::splitString", "trantor:::splitString", True)
    assert out == ["", ""]


def test_accept_empty_9():
    assert split_string("", ",", True) == [""]


def test_accept_empty_10():
    assert split_string("trantor", "", True) == []


def test_accept_empty_11():
    assert split_string("", "", True) == []


def test_no_accept_empty_1():
    out = split_string(",1,2,3", ",")
    assert len(out) == 3
    assert out[0] == "1"


def test_no_accept_empty_2():
    out = split_string(",1,2,3,", ",")
    assert out == ["1", "2", "3"]


def test_no_accept_empty_3():
    assert split_string(",1,2,3,", ":") == [",1,2,3,"]


def test_no_accept_empty_4():
    assert split_string("trantor::splitString", "::") == ["trantor", "splitString"]


def test_no_accept_empty_5():
    assert split_string("trantor::::splitString", "::") == ["trantor", "splitString"]


def test_no_accept_empty_6():
    assert split_string("trantor:::splitString", "::") == ["trantor", ":splitString"]


def test_no_accept_empty_7():
    assert split_string("trantor:::splitString", "trantor:::splitString") == []


def test_no_accept_empty_8():
    assert split_string("", ",") == []


def test_no_accept_empty_9():
    assert split_string("trantor", "") == []


def test_no_accept_empty_10():
    assert split_string("", "") == []


def test_hton64_byte_layout():
    expected = (1 << 56) if sys.byteorder == "little" else 1
    assert hton64(1) == expected


@pytest.mark.parametrize("value", [0, 1, 123, 0x0102030405060708, (1 << 64) - 1])
def test_hton64_round_trip(value):
    assert ntoh64(hton64(value)) == value


def test_hton64_network_bytes_are_big_endian():
    value = 0x0102030405060708
    assert hton64(value).to_bytes(8, sys.byteorder) == value.to_bytes(8, "big")


@pytest.mark.parametrize("value", [-1, 1 << 64])
def test_hton64_out_of_range(value):
    with pytest.raises(ValueError):
        hton64(value)