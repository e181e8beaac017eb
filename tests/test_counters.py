"""Tests for the /proc/net/dev counter source."""

from __future__ import annotations

from pathlib import Path

from conftest import net_dev_text

from netusage.counters import CounterSource, parse_net_dev_line, read_counters
from netusage.usage import ByteCounterPair


class TestParseNetDevLine:
    """Tests for parse_net_dev_line()."""

    def test_valid_line(self) -> None:
        line = "  eth0: 123456 100 0 0 0 0 0 0 654321 200 0 0 0 0 0 0"
        assert parse_net_dev_line(line) == (
            "eth0",
            ByteCounterPair(received=123456, transmitted=654321),
        )

    def test_no_space_after_colon(self) -> None:
        line = "eth0:123456 100 0 0 0 0 0 0 654321 200 0 0 0 0 0 0"
        parsed = parse_net_dev_line(line)
        assert parsed is not None
        assert parsed[1].received == 123456

    def test_large_counters(self) -> None:
        big = 2**63 + 5
        line = f"eth0: {big} 1 0 0 0 0 0 0 {big} 1 0 0 0 0 0 0"
        parsed = parse_net_dev_line(line)
        assert parsed is not None
        assert parsed[1] == ByteCounterPair(big, big)

    def test_short_line(self) -> None:
        assert parse_net_dev_line("eth0: 1 2 3") is None

    def test_non_numeric(self) -> None:
        assert parse_net_dev_line("eth0: x 1 0 0 0 0 0 0 y 1 0 0 0 0 0 0") is None

    def test_header_line(self) -> None:
        assert parse_net_dev_line("Inter-|   Receive  |  Transmit") is None


class TestReadCounters:
    """Tests for read_counters() and CounterSource."""

    def test_reads_all_interfaces(self, tmp_path: Path) -> None:
        path = tmp_path / "dev"
        path.write_text(net_dev_text({"lo": (10, 10), "eth0": (500, 700)}))
        snapshot = read_counters(str(path))
        assert snapshot == {
            "lo": ByteCounterPair(10, 10),
            "eth0": ByteCounterPair(500, 700),
        }

    def test_skips_bad_records(self, tmp_path: Path) -> None:
        path = tmp_path / "dev"
        path.write_text(
            net_dev_text({"eth0": (500, 700)}) + "  bad0: not numbers here\n"
        )
        assert list(read_counters(str(path))) == ["eth0"]

    def test_non_utf8_name_does_not_hide_other_records(self, tmp_path: Path) -> None:
        path = tmp_path / "dev"
        path.write_bytes(
            net_dev_text({"eth0": (500, 700)}).encode()
            + b"dev\xff: 10 1 0 0 0 0 0 0 20 1 0 0 0 0 0 0\n"
        )
        snapshot = read_counters(str(path))
        assert snapshot["eth0"] == ByteCounterPair(500, 700)
        assert snapshot["dev\udcff"] == ByteCounterPair(10, 20)

    def test_missing_file(self, tmp_path: Path) -> None:
        assert read_counters(str(tmp_path / "nonexistent")) == {}

    def test_counter_source_reads_path(self, tmp_path: Path) -> None:
        path = tmp_path / "dev"
        path.write_text(net_dev_text({"eth0": (1, 2)}))
        source = CounterSource(str(path))
        assert source.path == str(path)
        assert source.read() == {"eth0": ByteCounterPair(1, 2)}
