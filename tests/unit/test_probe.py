import os
import subprocess
import unittest
from types import SimpleNamespace
from unittest.mock import patch

import unixping.probe as probe
from unixping.dialect import FragmentOption
from unixping.parse import PingOutputFormatError, parse_round_trip_time

REPLY = "64 bytes from 192.0.2.1: icmp_seq=1 ttl=64 time=23.6 ms\n"


class TestProbe(unittest.TestCase):
    def test_is_ipv6(self) -> None:
        self.assertTrue(probe.is_ipv6("2001:db8::1"))
        self.assertFalse(probe.is_ipv6("192.0.2.1"))
        self.assertFalse(probe.is_ipv6("example.org"))

    def test_run_ping_splits_command_line(self) -> None:
        cp = SimpleNamespace(returncode=0, stdout=REPLY.encode())
        with patch("unixping.probe.subprocess.run", return_value=cp) as mock_run:
            run = probe.run_ping("/bin/ping", "-c 1 -W 1 -s 56 192.0.2.1", 1000)

        self.assertTrue(run.ok)
        self.assertEqual(run.stdout, REPLY)
        cmd = mock_run.call_args.args[0]
        self.assertEqual(cmd, ["/bin/ping", "-c", "1", "-W", "1", "-s", "56", "192.0.2.1"])
        self.assertEqual(mock_run.call_args.kwargs["timeout"], 3.0)

    def test_run_ping_forces_c_locale(self) -> None:
        cp = SimpleNamespace(returncode=0, stdout=REPLY.encode())
        with (
            patch.dict(os.environ, {"LANG": "de_DE.UTF-8"}),
            patch("unixping.probe.subprocess.run", return_value=cp) as mock_run,
        ):
            probe.run_ping("/bin/ping", "-c 1 192.0.2.1", 1000)

        env = mock_run.call_args.kwargs["env"]
        self.assertEqual(env["LC_ALL"], "C")
        # The rest of the caller environment is passed through.
        self.assertEqual(env["LANG"], "de_DE.UTF-8")

    def test_run_ping_tolerates_undecodable_bytes(self) -> None:
        raw = b"64 bytes from h\xe9te.example: icmp_seq=1 ttl=64 time=1.0 ms \xff\n"
        cp = SimpleNamespace(returncode=0, stdout=raw)
        with patch("unixping.probe.subprocess.run", return_value=cp):
            run = probe.run_ping("/bin/ping", "-c 1 192.0.2.1", 1000)

        self.assertTrue(run.ok)
        self.assertIn("\ufffd", run.stdout)
        self.assertEqual(parse_round_trip_time(run.stdout), 1)

    def test_run_ping_timeout_expired(self) -> None:
        with patch(
            "unixping.probe.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="ping", timeout=3.0),
        ):
            run = probe.run_ping("/bin/ping", "-c 1 192.0.2.1", 1000)

        self.assertIsNone(run.returncode)
        self.assertFalse(run.ok)

    def test_probe_rtt_happy_path(self) -> None:
        with (
            patch("unixping.probe.ping_utility_path", return_value="/bin/ping") as p_path,
            patch(
                "unixping.probe.construct_command_line",
                return_value="-c 1 -W 1 -s 56 192.0.2.1",
            ) as p_build,
            patch(
                "unixping.probe.run_ping", return_value=probe.PingRun(0, REPLY)
            ) as p_run,
        ):
            rtt = probe.probe_rtt("192.0.2.1", ttl=7, fragment_option=FragmentOption.DO)

        self.assertEqual(rtt, 24)
        p_path.assert_called_once_with(True)
        p_build.assert_called_once_with(
            56, 1000, "192.0.2.1", True, 7, FragmentOption.DO
        )
        p_run.assert_called_once_with("/bin/ping", "-c 1 -W 1 -s 56 192.0.2.1", 1000)

    def test_probe_rtt_picks_ipv6_utility_for_ipv6_literal(self) -> None:
        with patch("unixping.probe.ping_utility_path", return_value=None) as p_path:
            self.assertIsNone(probe.probe_rtt("2001:db8::1"))
        p_path.assert_called_once_with(False)

    def test_probe_rtt_no_reply(self) -> None:
        with (
            patch("unixping.probe.ping_utility_path", return_value="/bin/ping"),
            patch("unixping.probe.construct_command_line", return_value="x"),
            patch("unixping.probe.run_ping", return_value=probe.PingRun(1, "")),
        ):
            self.assertIsNone(probe.probe_rtt("192.0.2.1"))

    def test_probe_rtt_malformed_output_propagates(self) -> None:
        with (
            patch("unixping.probe.ping_utility_path", return_value="/bin/ping"),
            patch("unixping.probe.construct_command_line", return_value="x"),
            patch("unixping.probe.run_ping", return_value=probe.PingRun(0, "garbage")),
        ):
            with self.assertRaises(PingOutputFormatError):
                probe.probe_rtt("192.0.2.1")


if __name__ == "__main__":
    unittest.main(verbosity=2)
