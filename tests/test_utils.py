from packetlens.utils import NameValue, lookup

TABLE = [NameValue(0x0800, "IPv4"), NameValue(0x86DD, "IPv6"), NameValue(0x0806, "ARP")]


def test_lookup_finds_matching_entry():
    assert lookup(0x86DD, TABLE) == NameValue(0x86DD, "IPv6")


def test_lookup_missing_value_is_unknown():
    result = lookup(0x1234, TABLE)
    assert result.name == "UNKNOWN"
    assert result.value == 0x1234


def test_lookup_returns_first_match():
    table = [NameValue(7, "first"), NameValue(7, "second")]
    assert lookup(7, table).name == "first"


def test_lookup_accepts_generator_and_empty_table():
    assert lookup(2, (entry for entry in TABLE)).name == "UNKNOWN"
    assert lookup(0x0806, (entry for entry in TABLE)).name == "ARP"
    assert lookup(5, []) == NameValue(5, "UNKNOWN")