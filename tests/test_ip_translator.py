import ipaddress

import pytest

from tlsrelay.ip_translator import IpTranslator


def test_first_address_is_127_0_0_2():
    assert IpTranslator().translate("10.0.0.1") == ipaddress.IPv4Address("127.0.0.2")


def test_same_input_gives_same_output():
    t = IpTranslator()
    first = t.translate("192.0.2.7")
    t.translate("192.0.2.8")
    assert t.translate("192.0.2.7") == first


def test_distinct_inputs_get_distinct_loopback_addresses():
    t = IpTranslator()
    results = [t.translate(f"198.51.100.{i}") for i in range(1, 50)]
    assert len(set(results)) == len(results)
    assert all(r in ipaddress.IPv4Network("127.0.0.0/8") for r in results)


def test_addresses_are_sequential():
    t = IpTranslator()
    a = t.translate("203.0.113.1")
    b = t.translate("203.0.113.2")
    assert int(b) - int(a) == 1


def test_accepts_address_objects_and_strings_equally():
    t = IpTranslator()
    first = t.translate(ipaddress.ip_address("2001:db8::1"))
    assert t.translate("2001:db8::1") == first


def test_ipv4_and_ipv6_are_separate_keys():
    t = IpTranslator()
    assert t.translate("::1") != t.translate("127.0.0.1")


def test_invalid_address_raises():
    with pytest.raises(ValueError):
        IpTranslator().translate("not-an-ip")